"""Phone verification through the Twilio Verify REST API."""

from __future__ import annotations

import logging

import httpx

from sandycal.core.config import settings
from sandycal.core.errors import VerificationError
from sandycal.core.phone import mask_phone

logger = logging.getLogger(__name__)


class PhoneVerifier:
    """Sends SMS codes and checks them. Only the pass/fail outcome is used."""

    def __init__(
        self,
        account_sid: str,
        auth_token: str,
        service_sid: str,
        base_url: str = "https://verify.twilio.com/v2",
        timeout: float = 10.0,
    ) -> None:
        self.account_sid = account_sid
        self.auth_token = auth_token
        self.service_sid = service_sid
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout

    def _post(self, path: str, data: dict[str, str]) -> dict:
        if not (self.account_sid and self.auth_token and self.service_sid):
            raise VerificationError("Phone verification is not configured")
        url = f"{self.base_url}/Services/{self.service_sid}/{path}"
        try:
            response = httpx.post(
                url,
                data=data,
                auth=(self.account_sid, self.auth_token),
                timeout=self.timeout,
            )
            response.raise_for_status()
        except httpx.HTTPError as exc:
            raise VerificationError(f"Verification request failed: {exc}") from exc
        return response.json()

    def send_code(self, phone: str) -> None:
        """Text a verification code to ``phone``."""
        data = self._post("Verifications", {"To": phone, "Channel": "sms"})
        if data.get("status") != "pending":
            logger.warning("Verification not started phone=%s status=%s", mask_phone(phone), data.get("status"))
            raise VerificationError("Failed to send verification code")
        logger.info("Verification code sent phone=%s", mask_phone(phone))

    def check_code(self, phone: str, code: str) -> bool:
        """True when the provider approves ``code`` for ``phone``."""
        data = self._post("VerificationCheck", {"To": phone, "Code": code})
        approved = data.get("status") == "approved"
        logger.info("Verification check phone=%s approved=%s", mask_phone(phone), approved)
        return approved


def get_phone_verifier() -> PhoneVerifier:
    """Dependency returning the configured verifier."""
    return PhoneVerifier(
        account_sid=settings.twilio_account_sid,
        auth_token=settings.twilio_auth_token,
        service_sid=settings.twilio_verify_service_sid,
        base_url=settings.twilio_verify_base_url,
        timeout=settings.verification_timeout_seconds,
    )
