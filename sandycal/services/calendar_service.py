"""Calendar aggregation: a user's own ratings next to their friends' ratings."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import date, datetime

from sqlalchemy import select
from sqlalchemy.orm import Session, joinedload

from sandycal.core.errors import require_id
from sandycal.db.session import storage_errors
from sandycal.models.day_rating import DayRating
from sandycal.services.dates import day_key, month_bounds
from sandycal.services.friendship_service import list_friend_ids
from sandycal.services.rating_service import list_ratings_in_range

logger = logging.getLogger(__name__)


@dataclass
class CalendarRatings:
    """Own and friends' ratings for one period, left un-merged."""

    user_ratings: list[DayRating] = field(default_factory=list)
    friends_ratings: list[DayRating] = field(default_factory=list)


def _ratings_for_users(db: Session, user_ids: list[int], start: date, end: date) -> list[DayRating]:
    """One query for every listed user's ratings in [start, end], with the user loaded."""
    if not user_ids:
        return []
    with storage_errors(db, "Failed to list friends' ratings"):
        result = db.execute(
            select(DayRating)
            .options(joinedload(DayRating.user))
            .where(DayRating.user_id.in_(user_ids))
            .where(DayRating.day >= start, DayRating.day <= end)
            .order_by(DayRating.day.asc(), DayRating.user_id.asc())
        )
        return list(result.scalars().all())


def get_friends_ratings_in_range(
    db: Session,
    user_id: int,
    start: date | datetime,
    end: date | datetime,
) -> list[DayRating]:
    """Friends' ratings for [start, end], oldest day first."""
    require_id(user_id)
    return _ratings_for_users(db, list_friend_ids(db, user_id), day_key(start), day_key(end))


def get_friends_ratings_for_month(db: Session, user_id: int, year: int, month: int) -> list[DayRating]:
    start, end = month_bounds(year, month)
    return get_friends_ratings_in_range(db, user_id, start, end)


def get_friends_ratings_for_date(db: Session, user_id: int, day: date | datetime) -> list[DayRating]:
    key = day_key(day)
    return get_friends_ratings_in_range(db, user_id, key, key)


def get_self_and_friends_for_range(
    db: Session,
    user_id: int,
    start: date | datetime,
    end: date | datetime,
) -> CalendarRatings:
    """Own ratings and friends' ratings for [start, end]."""
    require_id(user_id)
    start_key, end_key = day_key(start), day_key(end)

    own = list_ratings_in_range(db, user_id, start_key, end_key)
    friends = _ratings_for_users(db, list_friend_ids(db, user_id), start_key, end_key)
    logger.debug(
        "Calendar user_id=%s %s..%s own=%d friends=%d", user_id, start_key, end_key, len(own), len(friends)
    )
    return CalendarRatings(user_ratings=own, friends_ratings=friends)


def get_self_and_friends_for_month(db: Session, user_id: int, year: int, month: int) -> CalendarRatings:
    """Own ratings and friends' ratings for a calendar month (month is 1-indexed)."""
    start, end = month_bounds(year, month)
    return get_self_and_friends_for_range(db, user_id, start, end)
