"""Phone number helpers (E.164)."""

from __future__ import annotations

import re

from sandycal.core.errors import ValidationError

_E164 = re.compile(r"^\+[1-9]\d{1,14}$")
_NON_DIGITS = re.compile(r"\D")


def format_phone_number(raw: str) -> str:
    """Best-effort conversion to E.164. Returns "" when the input can't be used.

    Ten-digit numbers are assumed to be US numbers.
    """
    raw = (raw or "").strip()
    digits = _NON_DIGITS.sub("", raw)

    if raw.startswith("+") and 7 <= len(digits) <= 15:
        return f"+{digits}"
    if len(digits) == 10:
        return f"+1{digits}"
    if len(digits) == 11 and digits.startswith("1"):
        return f"+{digits}"
    if 7 <= len(digits) <= 15:
        return f"+{digits}"
    return ""


def is_e164(phone: str) -> bool:
    return bool(_E164.match(phone or ""))


def normalize_phone(raw: str) -> str:
    """Format and validate a phone number, raising ValidationError."""
    phone = format_phone_number(raw)
    if not phone:
        raise ValidationError(
            "Invalid phone number format. Please include country code or use 10-digit US number."
        )
    if not is_e164(phone):
        raise ValidationError("Invalid phone number format")
    return phone


def mask_phone(phone: str) -> str:
    """Phone with everything but the last four digits hidden, for logs."""
    return f"***{phone[-4:]}" if phone else ""
