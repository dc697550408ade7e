"""Phone verification and profile endpoints."""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from sandycal.core.deps import get_current_user
from sandycal.core.errors import SandyCalError
from sandycal.core.phone import normalize_phone
from sandycal.core.security import create_access_token
from sandycal.db.session import get_db
from sandycal.models.user import User
from sandycal.schemas.auth import SendCodeRequest, SendCodeResponse, VerifyCodeRequest, VerifyCodeResponse
from sandycal.schemas.user import UpdateProfileRequest, UserMe
from sandycal.services.user_service import mark_phone_verified, update_name
from sandycal.services.verification import PhoneVerifier, get_phone_verifier

router = APIRouter(prefix="/auth", tags=["auth"])


@router.post("/phone/send-code", response_model=SendCodeResponse)
def send_code(
    data: SendCodeRequest,
    verifier: PhoneVerifier = Depends(get_phone_verifier),
):
    """Text a verification code to the given number."""
    try:
        verifier.send_code(normalize_phone(data.phone_number))
    except SandyCalError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)
    return SendCodeResponse()


@router.post("/phone/verify", response_model=VerifyCodeResponse)
def verify_code(
    data: VerifyCodeRequest,
    db: Session = Depends(get_db),
    verifier: PhoneVerifier = Depends(get_phone_verifier),
):
    """Check the code, create or update the user, and return an access token."""
    try:
        phone = normalize_phone(data.phone_number)
        if not verifier.check_code(phone, data.code):
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Invalid verification code")
        user = mark_phone_verified(db, phone, data.name)
    except SandyCalError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)
    token = create_access_token(user.id)
    return VerifyCodeResponse(user=UserMe.model_validate(user), access_token=token)


@router.get("/me", response_model=UserMe)
def me(current_user: User = Depends(get_current_user)):
    """Get current authenticated user."""
    return current_user


@router.put("/me", response_model=UserMe)
def update_me(
    data: UpdateProfileRequest,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """Update current user's display name."""
    try:
        return update_name(db, current_user, data.name)
    except SandyCalError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)
