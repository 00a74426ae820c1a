import logging

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from journal_coach.core.database import get_db
from journal_coach.core.dependency import get_otp_store
from journal_coach.auth.db import delete_user, update_user_profile
from journal_coach.auth.models import User
from journal_coach.auth.otp_store import OTPStore
from journal_coach.auth.schemas import (
    GoogleLoginRequest,
    MessageResponse,
    ProfileOut,
    ProfileUpdate,
    SendOTPRequest,
    SendOTPResponse,
    TokenResponse,
    UserOut,
    VerifyOTPRequest,
)
from journal_coach.auth.service import (
    get_current_user,
    handle_google_login,
    handle_send_otp,
    handle_verify_otp,
)

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/auth", tags=["Auth"])


@router.post(
    "/send-otp",
    response_model=SendOTPResponse,
    response_model_exclude_none=True,
    summary="Send a one-time login code to a phone number",
    responses={
        200: {"description": "OTP issued"},
        400: {"description": "Invalid phone number"},
        500: {"description": "Server error"},
    },
)
def send_otp_route(
    data: SendOTPRequest,
    store: OTPStore = Depends(get_otp_store),
) -> SendOTPResponse:
    try:
        return handle_send_otp(data.phone_number, store)
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Send OTP failed: {e}")
        raise HTTPException(status_code=500, detail="Failed to send OTP")


@router.post(
    "/verify-otp",
    response_model=TokenResponse,
    summary="Verify a one-time code and receive an access token",
    responses={
        200: {"description": "Login successful"},
        400: {"description": "Invalid or expired OTP"},
        500: {"description": "Server error"},
    },
)
def verify_otp_route(
    data: VerifyOTPRequest,
    store: OTPStore = Depends(get_otp_store),
    db: Session = Depends(get_db),
) -> TokenResponse:
    try:
        return handle_verify_otp(data.phone_number, data.otp, store, db)
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"OTP verification failed: {e}")
        raise HTTPException(status_code=500, detail="OTP verification failed")


@router.post(
    "/google",
    response_model=TokenResponse,
    summary="Login using Google credentials",
    responses={
        200: {"description": "Google login successful"},
        400: {"description": "Missing Google identity"},
        401: {"description": "Google token rejected"},
        500: {"description": "Google login failed"},
    },
)
def google_login_route(
    data: GoogleLoginRequest,
    db: Session = Depends(get_db),
) -> TokenResponse:
    try:
        return handle_google_login(data, db)
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Google login failed: {e}")
        raise HTTPException(status_code=500, detail="Google login failed")


@router.get(
    "/me",
    response_model=UserOut,
    summary="Get the current user",
    responses={
        200: {"description": "User returned"},
        401: {"description": "Unauthorized"},
    },
)
def me_route(user: User = Depends(get_current_user)) -> UserOut:
    return UserOut.model_validate(user)


@router.post(
    "/logout",
    response_model=MessageResponse,
    summary="Log out (tokens are stateless; the client discards its token)",
)
def logout_route() -> MessageResponse:
    return MessageResponse(message="Logged out successfully")


@router.get(
    "/profile",
    response_model=ProfileOut,
    summary="Get the current user's full profile",
    responses={
        200: {"description": "Profile returned"},
        401: {"description": "Unauthorized"},
    },
)
def get_profile_route(user: User = Depends(get_current_user)) -> ProfileOut:
    return ProfileOut.model_validate(user)


@router.put(
    "/profile",
    response_model=ProfileOut,
    summary="Update profile fields",
    description="Only fields that are present and non-empty are changed.",
    responses={
        200: {"description": "Profile updated"},
        401: {"description": "Unauthorized"},
        500: {"description": "Profile update failed"},
    },
)
def update_profile_route(
    data: ProfileUpdate,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
) -> ProfileOut:
    try:
        updated = update_user_profile(db, user, data.model_dump(exclude_unset=True))
        return ProfileOut.model_validate(updated)
    except Exception as e:
        logger.error(f"Profile update failed for user {user.id}: {e}")
        raise HTTPException(status_code=500, detail="Failed to update profile")


@router.delete(
    "/account",
    response_model=MessageResponse,
    summary="Delete the current user and all of their entries",
    responses={
        200: {"description": "Account deleted"},
        401: {"description": "Unauthorized"},
        500: {"description": "Account deletion failed"},
    },
)
def delete_account_route(
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
) -> MessageResponse:
    try:
        delete_user(db, user.id)
        logger.info(f"Deleted account {user.id}")
        return MessageResponse(message="Account deleted successfully")
    except Exception as e:
        logger.error(f"Account deletion failed for user {user.id}: {e}")
        raise HTTPException(status_code=500, detail="Failed to delete account")
