"""Day rating store.

One row per (user, day). Writes go through a single
``INSERT ... ON CONFLICT DO UPDATE`` so two requests rating the same day at
once can neither create a duplicate row nor fail on the unique constraint.
"""

from __future__ import annotations

import logging
from datetime import date, datetime, timezone

from sqlalchemy import delete, select
from sqlalchemy.dialects import postgresql, sqlite
from sqlalchemy.orm import Session

from sandycal.core.errors import StorageError, ValidationError, require_id
from sandycal.db.session import storage_errors
from sandycal.models.day_rating import DayRating, Rating
from sandycal.services.dates import day_key, month_bounds

logger = logging.getLogger(__name__)

_INSERTS = {
    "postgresql": postgresql.insert,
    "sqlite": sqlite.insert,
}


def coerce_rating(value: int | Rating) -> Rating:
    """Validate a rating value (1, 2 or 3)."""
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValidationError("Rating must be a number")
    try:
        return Rating(value)
    except ValueError:
        raise ValidationError("Rating must be 1 (bad), 2 (neutral) or 3 (good)") from None


def _insert_for(db: Session):
    dialect = db.get_bind().dialect.name
    try:
        return _INSERTS[dialect]
    except KeyError:
        raise StorageError(f"Upsert is not supported on {dialect}") from None


def upsert_day_rating(db: Session, user_id: int, day: date | datetime, rating: int | Rating) -> DayRating:
    """Store or overwrite the rating for a user's day. Returns the stored row."""
    require_id(user_id)
    key = day_key(day)
    value = coerce_rating(rating)
    now = datetime.now(timezone.utc)

    insert = _insert_for(db)
    stmt = insert(DayRating).values(
        user_id=user_id,
        day=key,
        rating=int(value),
        created_at=now,
        updated_at=now,
    )
    stmt = stmt.on_conflict_do_update(
        index_elements=[DayRating.user_id, DayRating.day],
        set_={"rating": stmt.excluded.rating, "updated_at": stmt.excluded.updated_at},
    )
    with storage_errors(db, "Failed to create/update rating"):
        db.execute(stmt)
        db.commit()

    logger.info("Rated day user_id=%s day=%s rating=%s", user_id, key, int(value))
    with storage_errors(db, "Failed to load rating"):
        return db.execute(
            select(DayRating)
            .where(DayRating.user_id == user_id, DayRating.day == key)
            .execution_options(populate_existing=True)
        ).scalar_one()


def get_day_rating(db: Session, user_id: int, day: date | datetime) -> DayRating | None:
    """Get a user's rating for a day, or None."""
    require_id(user_id)
    key = day_key(day)
    with storage_errors(db, "Failed to load rating"):
        return db.execute(
            select(DayRating).where(DayRating.user_id == user_id, DayRating.day == key)
        ).scalar_one_or_none()


def list_ratings_in_range(
    db: Session,
    user_id: int,
    start: date | datetime,
    end: date | datetime,
) -> list[DayRating]:
    """Ratings with start <= day <= end, oldest first. Empty when start > end."""
    require_id(user_id)
    start_key, end_key = day_key(start), day_key(end)
    with storage_errors(db, "Failed to list ratings"):
        result = db.execute(
            select(DayRating)
            .where(DayRating.user_id == user_id)
            .where(DayRating.day >= start_key, DayRating.day <= end_key)
            .order_by(DayRating.day.asc())
        )
        return list(result.scalars().all())


def list_ratings_for_month(db: Session, user_id: int, year: int, month: int) -> list[DayRating]:
    """Ratings for a calendar month (month is 1-indexed)."""
    start, end = month_bounds(year, month)
    return list_ratings_in_range(db, user_id, start, end)


def list_all_ratings(db: Session, user_id: int) -> list[DayRating]:
    """Every rating of a user, newest day first."""
    require_id(user_id)
    with storage_errors(db, "Failed to list ratings"):
        result = db.execute(
            select(DayRating).where(DayRating.user_id == user_id).order_by(DayRating.day.desc())
        )
        return list(result.scalars().all())


def delete_day_rating(db: Session, user_id: int, day: date | datetime) -> bool:
    """Delete a user's rating for a day. Returns False when there was none."""
    require_id(user_id)
    key = day_key(day)
    with storage_errors(db, "Failed to delete rating"):
        result = db.execute(delete(DayRating).where(DayRating.user_id == user_id, DayRating.day == key))
        db.commit()
    removed = result.rowcount > 0
    if removed:
        logger.info("Deleted rating user_id=%s day=%s", user_id, key)
    return removed
