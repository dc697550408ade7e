"""Access tokens.

A token's subject is the user id. Tokens are only issued after the phone
verification provider approved a code, so holding one means the phone was
verified.
"""

from datetime import datetime, timedelta, timezone
from typing import Any

from jose import JWTError, jwt

from sandycal.core.config import settings


def create_access_token(user_id: int, extra: dict[str, Any] | None = None) -> str:
    """Issue a signed token for ``user_id`` valid for ``jwt_expire_minutes``."""
    now = datetime.now(timezone.utc)
    payload = {
        "sub": str(user_id),
        "iat": now,
        "exp": now + timedelta(minutes=settings.jwt_expire_minutes),
    }
    if extra:
        payload.update(extra)
    return jwt.encode(payload, settings.jwt_secret, algorithm=settings.jwt_algorithm)


def user_id_from_token(token: str) -> int | None:
    """User id carried by a valid token; None when the token is bad or expired."""
    try:
        payload = jwt.decode(token, settings.jwt_secret, algorithms=[settings.jwt_algorithm])
    except JWTError:
        return None
    try:
        return int(payload["sub"])
    except (KeyError, TypeError, ValueError):
        return None
