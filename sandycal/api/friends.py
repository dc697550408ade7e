"""Friends API."""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session

from sandycal.core.deps import get_current_user
from sandycal.core.errors import SandyCalError
from sandycal.db.session import get_db
from sandycal.models.friendship import Friendship
from sandycal.models.user import User
from sandycal.schemas.friendship import (
    AddFriendRequest,
    FriendActionResponse,
    FriendResponse,
    FriendStatusResponse,
)
from sandycal.schemas.user import UserProfile
from sandycal.services.friendship_service import (
    add_friend,
    are_friends,
    list_friends,
    remove_friend,
    search_users_by_phone,
)

router = APIRouter(prefix="/friends", tags=["friends"])


def _friend_out(link: Friendship) -> FriendResponse:
    friend = link.friend
    return FriendResponse(
        id=friend.id,
        name=friend.name,
        phone=friend.phone,
        created_at=friend.created_at,
        friendship_created_at=link.created_at,
    )


@router.get("", response_model=list[FriendResponse])
def get_friends(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """Current user's friends, most recently added first."""
    try:
        links = list_friends(db, current_user.id)
    except SandyCalError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)
    return [_friend_out(link) for link in links]


@router.get("/search", response_model=list[UserProfile])
def search(
    phone: str = Query(min_length=1, max_length=20),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """Find verified users to add by part of their phone number."""
    try:
        return search_users_by_phone(db, current_user.id, phone)
    except SandyCalError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)


@router.get("/{friend_id}", response_model=FriendStatusResponse)
def friend_status(
    friend_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """Whether the current user and friend_id are friends."""
    try:
        linked = are_friends(db, current_user.id, friend_id)
    except SandyCalError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)
    return FriendStatusResponse(friend_id=friend_id, are_friends=linked)


@router.post("", response_model=FriendActionResponse)
def add(
    data: AddFriendRequest,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """Add a friend. Both users see each other from then on."""
    try:
        add_friend(db, current_user.id, data.friend_id)
    except SandyCalError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)
    return FriendActionResponse(message="Friend added successfully")


@router.delete("/{friend_id}", response_model=FriendActionResponse)
def remove(
    friend_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """Remove a friend. Succeeds when the two were not friends."""
    try:
        remove_friend(db, current_user.id, friend_id)
    except SandyCalError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)
    return FriendActionResponse(message="Friend removed successfully")
