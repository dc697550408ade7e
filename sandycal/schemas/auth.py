"""Auth schemas."""

from pydantic import BaseModel, Field

from sandycal.schemas.user import UserMe


class SendCodeRequest(BaseModel):
    phone_number: str = Field(min_length=1)


class SendCodeResponse(BaseModel):
    success: bool = True
    message: str = "Verification code sent successfully"


class VerifyCodeRequest(BaseModel):
    phone_number: str = Field(min_length=1)
    code: str = Field(min_length=1, max_length=10)
    name: str | None = Field(default=None, max_length=255)


class VerifyCodeResponse(BaseModel):
    message: str = "Phone number verified successfully"
    user: UserMe
    access_token: str
    token_type: str = "bearer"
