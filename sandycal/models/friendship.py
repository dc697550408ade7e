"""Friendship model."""

from __future__ import annotations

from datetime import datetime

from sqlalchemy import CheckConstraint, DateTime, ForeignKey, Index, UniqueConstraint, func
from sqlalchemy.orm import Mapped, mapped_column, relationship

from sandycal.db.base import Base
from sandycal.models.user import User


class Friendship(Base):
    """Directed half of a friendship: user_id considers friend_id a friend.

    Rows always come in pairs (A->B and B->A), written and deleted together.
    """

    __tablename__ = "friendships"
    __table_args__ = (
        UniqueConstraint("user_id", "friend_id", name="uq_friendship_user_friend"),
        CheckConstraint("user_id <> friend_id", name="ck_friendship_not_self"),
        Index("ix_friendships_friend_id", "friend_id"),
    )

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    user_id: Mapped[int] = mapped_column(ForeignKey("users.id", ondelete="CASCADE"), nullable=False)
    friend_id: Mapped[int] = mapped_column(ForeignKey("users.id", ondelete="CASCADE"), nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        nullable=False,
    )

    friend: Mapped[User] = relationship(foreign_keys=[friend_id])
