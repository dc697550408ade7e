"""User schemas."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, Field


class UserProfile(BaseModel):
    """Public projection of a user, as shown in search results and friend lists."""

    id: int
    name: str | None
    phone: str
    created_at: datetime

    model_config = {"from_attributes": True}


class UserMe(UserProfile):
    is_phone_verified: bool
    phone_verified_at: datetime | None = None


class UpdateProfileRequest(BaseModel):
    name: str | None = Field(default=None, max_length=255)
