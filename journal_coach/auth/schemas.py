from datetime import datetime
from typing import Optional
from uuid import UUID

from pydantic import BaseModel, Field
from pydantic.alias_generators import to_camel


class BaseSchema(BaseModel):
    class Config:
        from_attributes = True
        alias_generator = to_camel
        populate_by_name = True


class SendOTPRequest(BaseSchema):
    phone_number: str


class SendOTPResponse(BaseSchema):
    success: bool = True
    message: str
    demo_otp: Optional[str] = Field(default=None, alias="demoOTP")
    demo_message: Optional[str] = None


class VerifyOTPRequest(BaseSchema):
    phone_number: str
    otp: str


class GoogleUserInfo(BaseSchema):
    google_id: Optional[str] = None
    email: Optional[str] = None
    name: Optional[str] = None
    picture: Optional[str] = None


class GoogleLoginRequest(BaseSchema):
    google_token: Optional[str] = None
    user_info: GoogleUserInfo = GoogleUserInfo()


class UserOut(BaseSchema):
    id: UUID
    phone_number: Optional[str] = None
    email: Optional[str] = None
    name: Optional[str] = None
    picture: Optional[str] = None
    created_at: datetime


class ProfileOut(UserOut):
    date_of_birth: Optional[str] = None
    location: Optional[str] = None
    occupation: Optional[str] = None
    education: Optional[str] = None
    bio: Optional[str] = None


class ProfileUpdate(BaseSchema):
    name: Optional[str] = None
    email: Optional[str] = None
    date_of_birth: Optional[str] = None
    location: Optional[str] = None
    occupation: Optional[str] = None
    education: Optional[str] = None
    bio: Optional[str] = None


class TokenResponse(BaseSchema):
    success: bool = True
    token: str
    user: UserOut


class MessageResponse(BaseSchema):
    success: bool = True
    message: str
