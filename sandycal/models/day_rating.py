"""Day rating model."""

from __future__ import annotations

import enum
from datetime import date, datetime

from sqlalchemy import Date, DateTime, ForeignKey, Index, Integer, UniqueConstraint, func
from sqlalchemy.orm import Mapped, mapped_column, relationship

from sandycal.db.base import Base
from sandycal.models.user import User


class Rating(enum.IntEnum):
    """3-point mood scale."""

    BAD = 1
    NEUTRAL = 2
    GOOD = 3


class DayRating(Base):
    """One user's mood rating for one calendar day."""

    __tablename__ = "day_ratings"
    __table_args__ = (
        UniqueConstraint("user_id", "day", name="uq_day_rating_user_day"),
        Index("ix_day_ratings_day", "day"),
    )

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    user_id: Mapped[int] = mapped_column(ForeignKey("users.id", ondelete="CASCADE"), nullable=False)
    day: Mapped[date] = mapped_column(Date, nullable=False)
    rating: Mapped[int] = mapped_column(Integer, nullable=False)  # Rating
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        nullable=False,
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        nullable=False,
    )

    user: Mapped[User] = relationship()
