"""Day ratings API."""

from __future__ import annotations

from datetime import date

from fastapi import APIRouter, Depends, HTTPException, Query, Response, status
from sqlalchemy.orm import Session

from sandycal.core.deps import get_current_user
from sandycal.core.errors import SandyCalError
from sandycal.db.session import get_db
from sandycal.models.user import User
from sandycal.schemas.day_rating import (
    DayRatingCreate,
    DayRatingResponse,
    FriendRatingResponse,
    RatingsResponse,
)
from sandycal.services.calendar_service import (
    get_friends_ratings_for_date,
    get_self_and_friends_for_month,
    get_self_and_friends_for_range,
)
from sandycal.services.rating_service import (
    delete_day_rating,
    get_day_rating,
    list_all_ratings,
    list_ratings_for_month,
    list_ratings_in_range,
    upsert_day_rating,
)

router = APIRouter(prefix="/ratings", tags=["ratings"])


@router.post("", response_model=DayRatingResponse)
def rate_day(
    data: DayRatingCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """Create or replace the current user's rating for a day."""
    try:
        return upsert_day_rating(db, current_user.id, data.day, data.rating)
    except SandyCalError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)


@router.get("", response_model=RatingsResponse)
def list_ratings(
    year: int | None = Query(default=None, ge=1, le=9999),
    month: int | None = Query(default=None, ge=1, le=12, description="1 = January"),
    start_date: date | None = None,
    end_date: date | None = None,
    include_friends: bool = False,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """List the current user's ratings.

    With ``year`` and ``month`` the month is returned, with ``start_date`` and
    ``end_date`` the inclusive range (both oldest first). With neither, every
    rating, newest first. ``include_friends`` adds friends' ratings for the
    same period; it is ignored when no period is given.
    """
    friends = None
    try:
        if year is not None and month is not None:
            if include_friends:
                result = get_self_and_friends_for_month(db, current_user.id, year, month)
                ratings, friends = result.user_ratings, result.friends_ratings
            else:
                ratings = list_ratings_for_month(db, current_user.id, year, month)
        elif start_date is not None and end_date is not None:
            if include_friends:
                result = get_self_and_friends_for_range(db, current_user.id, start_date, end_date)
                ratings, friends = result.user_ratings, result.friends_ratings
            else:
                ratings = list_ratings_in_range(db, current_user.id, start_date, end_date)
        elif year is not None or month is not None or start_date is not None or end_date is not None:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="Provide both year and month, or both start_date and end_date",
            )
        else:
            ratings = list_all_ratings(db, current_user.id)
    except SandyCalError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)

    return RatingsResponse(
        ratings=[DayRatingResponse.model_validate(r) for r in ratings],
        friends_ratings=None if friends is None else [FriendRatingResponse.model_validate(r) for r in friends],
    )


@router.get("/day/{day}", response_model=DayRatingResponse | None)
def get_rating(
    day: date,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """The current user's rating for one day, or null."""
    try:
        return get_day_rating(db, current_user.id, day)
    except SandyCalError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)


@router.delete("/day/{day}", status_code=status.HTTP_204_NO_CONTENT)
def delete_rating(
    day: date,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """Delete the current user's rating for a day. Succeeds when there is none."""
    try:
        delete_day_rating(db, current_user.id, day)
    except SandyCalError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get("/friends/{day}", response_model=list[FriendRatingResponse])
def friends_ratings_for_day(
    day: date,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """Friends' ratings for one day."""
    try:
        return get_friends_ratings_for_date(db, current_user.id, day)
    except SandyCalError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)
