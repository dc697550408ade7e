"""FastAPI dependencies."""

from typing import Annotated

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from sandycal.core.security import user_id_from_token
from sandycal.db.session import get_db
from sandycal.models.user import User
from sandycal.services.user_service import get_user_by_id

security = HTTPBearer(auto_error=False)


def _unauthorized(detail: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )


def get_current_user(
    db: Annotated[Session, Depends(get_db)],
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(security)],
) -> User:
    """Require a user with a verified phone. Raises 401 otherwise."""
    if not credentials:
        raise _unauthorized("Not authenticated")
    user_id = user_id_from_token(credentials.credentials)
    if user_id is None:
        raise _unauthorized("Invalid or expired token")
    user = get_user_by_id(db, user_id)
    if not user:
        raise _unauthorized("User not found")
    if not user.is_phone_verified:
        raise _unauthorized("Phone number is not verified")
    return user
