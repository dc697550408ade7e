"""Day rating schemas."""

from __future__ import annotations

from datetime import date, datetime

from pydantic import BaseModel, Field, field_validator

from sandycal.services.dates import day_key


class DayRatingCreate(BaseModel):
    day: date
    rating: int = Field(ge=1, le=3, strict=True, description="1 bad, 2 neutral, 3 good")

    @field_validator("day", mode="before")
    @classmethod
    def floor_timestamp(cls, v):
        """Accept a full timestamp and keep only its calendar day."""
        if isinstance(v, datetime):
            return day_key(v)
        if isinstance(v, str) and ("T" in v or " " in v.strip()):
            try:
                return day_key(datetime.fromisoformat(v.strip().replace("Z", "+00:00")))
            except ValueError:
                return v
        return v


class DayRatingResponse(BaseModel):
    id: int
    user_id: int
    day: date
    rating: int
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}


class RatingUser(BaseModel):
    id: int
    name: str | None
    phone: str

    model_config = {"from_attributes": True}


class FriendRatingResponse(DayRatingResponse):
    user: RatingUser


class RatingsResponse(BaseModel):
    ratings: list[DayRatingResponse]
    friends_ratings: list[FriendRatingResponse] | None = None
