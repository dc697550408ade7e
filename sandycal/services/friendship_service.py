"""Friendship graph.

A friendship is stored as two directed rows (A->B, B->A). Both are written in
one transaction and deleted in one transaction, so no reader ever sees only
one direction.
"""

from __future__ import annotations

import logging
from datetime import datetime, timezone

from sqlalchemy import and_, delete, or_, select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session, joinedload

from sandycal.core.config import settings
from sandycal.core.errors import ConflictError, NotFoundError, StorageError, ValidationError, require_id
from sandycal.db.session import storage_errors
from sandycal.models.friendship import Friendship
from sandycal.models.user import User

logger = logging.getLogger(__name__)


def _require_pair(user_id: int, friend_id: int, message: str) -> None:
    require_id(user_id)
    require_id(friend_id, "Friend ID")
    if user_id == friend_id:
        raise ValidationError(message)


def _pair_clause(user_id: int, friend_id: int):
    return or_(
        and_(Friendship.user_id == user_id, Friendship.friend_id == friend_id),
        and_(Friendship.user_id == friend_id, Friendship.friend_id == user_id),
    )


def are_friends(db: Session, user_id: int, friend_id: int) -> bool:
    """True when user_id has friend_id as a friend. Never true for oneself."""
    if user_id == friend_id:
        return False
    require_id(user_id)
    require_id(friend_id, "Friend ID")
    with storage_errors(db, "Failed to check friendship"):
        row = db.execute(
            select(Friendship.id).where(Friendship.user_id == user_id, Friendship.friend_id == friend_id)
        ).first()
    return row is not None


def add_friend(db: Session, user_id: int, friend_id: int) -> None:
    """Create both directions of a friendship.

    Raises ValidationError for self-friendship, NotFoundError when the friend
    does not exist and ConflictError when the two are already friends. The
    unique constraint on (user_id, friend_id) catches a concurrent duplicate
    that slips past the pre-check; in that case nothing is written.
    """
    _require_pair(user_id, friend_id, "Cannot add yourself as a friend")

    with storage_errors(db, "Failed to load user"):
        friend = db.get(User, friend_id)
    if friend is None:
        raise NotFoundError("User not found")
    if are_friends(db, user_id, friend_id):
        raise ConflictError("Friendship already exists")

    now = datetime.now(timezone.utc)
    db.add_all(
        [
            Friendship(user_id=user_id, friend_id=friend_id, created_at=now),
            Friendship(user_id=friend_id, friend_id=user_id, created_at=now),
        ]
    )
    try:
        db.commit()
    except IntegrityError as exc:
        db.rollback()
        logger.warning("Duplicate friendship rejected user_id=%s friend_id=%s", user_id, friend_id)
        raise ConflictError("Friendship already exists") from exc
    except SQLAlchemyError as exc:
        db.rollback()
        logger.exception("Failed to add friend user_id=%s friend_id=%s", user_id, friend_id)
        raise StorageError("Failed to add friend") from exc

    logger.info("Friendship created user_id=%s friend_id=%s", user_id, friend_id)


def remove_friend(db: Session, user_id: int, friend_id: int) -> None:
    """Delete both directions of a friendship. No-op when they were not friends."""
    _require_pair(user_id, friend_id, "Cannot remove yourself as a friend")

    with storage_errors(db, "Failed to remove friend"):
        result = db.execute(delete(Friendship).where(_pair_clause(user_id, friend_id)))
        db.commit()

    if result.rowcount:
        logger.info("Friendship removed user_id=%s friend_id=%s", user_id, friend_id)


def list_friends(db: Session, user_id: int) -> list[Friendship]:
    """Friendships owned by user_id with the friend loaded, newest first."""
    require_id(user_id)
    with storage_errors(db, "Failed to list friends"):
        result = db.execute(
            select(Friendship)
            .options(joinedload(Friendship.friend))
            .where(Friendship.user_id == user_id)
            .order_by(Friendship.created_at.desc(), Friendship.id.desc())
        )
        return list(result.scalars().all())


def list_friend_ids(db: Session, user_id: int) -> list[int]:
    """Ids of user_id's friends."""
    require_id(user_id)
    with storage_errors(db, "Failed to list friends"):
        result = db.execute(
            select(Friendship.friend_id).where(Friendship.user_id == user_id).order_by(Friendship.friend_id)
        )
        return list(result.scalars().all())


def search_users_by_phone(db: Session, user_id: int, phone_query: str) -> list[User]:
    """Verified users whose phone contains phone_query.

    Excludes the caller and their current friends. Ordered by id, at most
    ``settings.friend_search_limit`` results.
    """
    require_id(user_id)
    query = (phone_query or "").strip()
    if not query:
        return []

    friend_ids = select(Friendship.friend_id).where(Friendship.user_id == user_id)
    with storage_errors(db, "Failed to search users"):
        result = db.execute(
            select(User)
            .where(User.phone.contains(query, autoescape=True))
            .where(User.is_phone_verified.is_(True))
            .where(User.id != user_id)
            .where(User.id.not_in(friend_ids))
            .order_by(User.id)
            .limit(settings.friend_search_limit)
        )
        return list(result.scalars().all())
