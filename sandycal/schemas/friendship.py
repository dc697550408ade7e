"""Friendship schemas."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, Field

from sandycal.schemas.user import UserProfile


class AddFriendRequest(BaseModel):
    friend_id: int = Field(gt=0)


class FriendResponse(UserProfile):
    """Friend's profile plus when the friendship began."""

    friendship_created_at: datetime


class FriendStatusResponse(BaseModel):
    friend_id: int
    are_friends: bool


class FriendActionResponse(BaseModel):
    success: bool = True
    message: str
