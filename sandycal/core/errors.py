"""Domain errors raised by the services layer."""

from __future__ import annotations

from fastapi import status


class SandyCalError(Exception):
    """Base error. Carries the HTTP status the API answers with."""

    status_code: int = status.HTTP_400_BAD_REQUEST

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class ValidationError(SandyCalError):
    """Malformed or missing input (missing user id, bad rating, self-reference)."""

    status_code = status.HTTP_400_BAD_REQUEST


class ConflictError(SandyCalError):
    """Operation would break a uniqueness rule, e.g. a duplicate friendship."""

    status_code = status.HTTP_409_CONFLICT


class NotFoundError(SandyCalError):
    """Target of a write does not exist. Reads return None instead."""

    status_code = status.HTTP_404_NOT_FOUND


class StorageError(SandyCalError):
    """Persistence failed (connectivity, unclassified constraint violation)."""

    status_code = status.HTTP_503_SERVICE_UNAVAILABLE


class VerificationError(SandyCalError):
    """Phone verification was refused or the provider could not be reached."""

    status_code = status.HTTP_400_BAD_REQUEST


def require_id(value: int | None, label: str = "User ID") -> int:
    """Reject a missing or non-positive id."""
    if not isinstance(value, int) or isinstance(value, bool) or value <= 0:
        raise ValidationError(f"{label} is required")
    return value
