"""SQLAlchemy models."""

from __future__ import annotations

from sandycal.models.day_rating import DayRating, Rating
from sandycal.models.friendship import Friendship
from sandycal.models.user import User

__all__ = [
    "User",
    "DayRating",
    "Friendship",
    "Rating",
]
