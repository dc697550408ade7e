"""User service."""

from __future__ import annotations

import logging
from datetime import datetime, timezone

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from sandycal.core.errors import ConflictError, StorageError
from sandycal.core.phone import mask_phone, normalize_phone
from sandycal.models.user import User

logger = logging.getLogger(__name__)


def get_user_by_id(db: Session, user_id: int) -> User | None:
    """Get user by id."""
    return db.get(User, user_id)


def get_user_by_phone(db: Session, phone: str) -> User | None:
    """Get user by E.164 phone number."""
    return db.execute(select(User).where(User.phone == phone)).scalar_one_or_none()


def _commit(db: Session, user: User, action: str) -> User:
    try:
        db.commit()
    except IntegrityError as exc:
        db.rollback()
        raise ConflictError("Phone number already registered") from exc
    except SQLAlchemyError as exc:
        db.rollback()
        logger.exception("Failed to %s user phone=%s", action, mask_phone(user.phone))
        raise StorageError(f"Failed to {action} user") from exc
    db.refresh(user)
    return user


def mark_phone_verified(db: Session, phone: str, name: str | None = None) -> User:
    """Create or update the user owning ``phone`` as verified.

    An existing name is kept when no new one is given.
    """
    phone = normalize_phone(phone)
    now = datetime.now(timezone.utc)
    user = get_user_by_phone(db, phone)
    if user is None:
        user = User(phone=phone, name=name or None, is_phone_verified=True, phone_verified_at=now)
        db.add(user)
    else:
        user.is_phone_verified = True
        user.phone_verified_at = now
        if name:
            user.name = name
    user = _commit(db, user, "verify")
    logger.info("Phone verified user_id=%s phone=%s", user.id, mask_phone(phone))
    return user


def update_name(db: Session, user: User, name: str | None) -> User:
    user.name = name or None
    return _commit(db, user, "update")
