import logging
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Optional
from uuid import UUID

import requests
from fastapi import Depends, HTTPException
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jose import JWTError, jwt
from sqlalchemy.orm import Session

from journal_coach.auth.db import (
    apply_merge_plan,
    create_user,
    get_entries_for_users,
    get_phone_candidates,
    get_user,
    get_user_by_google_id,
)
from journal_coach.auth.models import User
from journal_coach.auth.otp_store import OTPStore
from journal_coach.auth.phone import generate_otp, is_valid_phone, normalize_phone
from journal_coach.auth.reconcile import plan_user_merge
from journal_coach.auth.schemas import (
    GoogleLoginRequest,
    SendOTPResponse,
    TokenResponse,
    UserOut,
)
from journal_coach.core.config import (
    ACCESS_TOKEN_EXPIRE_DAYS,
    ALGORITHM,
    GOOGLE_CLIENT_ID,
    GOOGLE_TOKENINFO_URL,
    OTP_DEMO_MODE,
    SECRET_KEY,
)
from journal_coach.core.database import get_db

logger = logging.getLogger(__name__)
bearer = HTTPBearer(auto_error=False)


def create_token(user_id: UUID, expires_delta: Optional[timedelta] = None, **claims: Any) -> str:
    """
    Issues a signed access token for a user.

    Args:
        user_id (UUID): Subject of the token.
        expires_delta (Optional[timedelta]): Lifetime; defaults to ACCESS_TOKEN_EXPIRE_DAYS.
        **claims: Extra claims, e.g. the phone number or Google id used to sign in.

    Returns:
        str: Encoded JWT.
    """
    now = datetime.now(timezone.utc)
    expires_delta = expires_delta or timedelta(days=ACCESS_TOKEN_EXPIRE_DAYS)
    payload = {
        **{k: v for k, v in claims.items() if v is not None},
        "sub": str(user_id),
        "iat": int(now.timestamp()),
        "exp": now + expires_delta,
    }
    return jwt.encode(payload, SECRET_KEY, algorithm=ALGORITHM)


def decode_token(token: str) -> dict:
    """
    Decodes and validates a JWT token.

    Raises:
        HTTPException: 403 if the token is invalid or expired.
    """
    try:
        return jwt.decode(token, SECRET_KEY, algorithms=[ALGORITHM])
    except JWTError:
        raise HTTPException(status_code=403, detail="Invalid or expired authentication token")


def get_current_user_id(
    creds: Optional[HTTPAuthorizationCredentials] = Depends(bearer),
) -> UUID:
    """
    Extracts the user ID from the bearer token.

    Raises:
        HTTPException: 401 when no token is sent, 403 when it is invalid.
    """
    if creds is None or not creds.credentials:
        raise HTTPException(status_code=401, detail="Access token required")
    payload = decode_token(creds.credentials)
    user_id = payload.get("sub")
    if not user_id:
        raise HTTPException(status_code=403, detail="Token missing subject field")
    try:
        return UUID(user_id)
    except ValueError:
        raise HTTPException(status_code=403, detail="Invalid user ID in token")


def get_current_user(
    user_id: UUID = Depends(get_current_user_id),
    db: Session = Depends(get_db),
) -> User:
    """
    Fetches the authenticated user.

    Raises:
        HTTPException: 404 if the user no longer exists.
    """
    user = get_user(db, user_id)
    if not user:
        raise HTTPException(status_code=404, detail="User not found")
    return user


# One-time codes
def handle_send_otp(phone_number: str, store: OTPStore) -> SendOTPResponse:
    """
    Issues a one-time code for a phone number.

    No SMS provider is wired in; in demo mode the code is returned in the
    response and logged.

    Raises:
        HTTPException: 400 if the phone number is malformed.
    """
    normalized = normalize_phone(phone_number)
    if not is_valid_phone(normalized):
        raise HTTPException(status_code=400, detail="Valid phone number required")

    code = generate_otp()
    store.put(normalized, code)

    if OTP_DEMO_MODE:
        logger.info("OTP for %s: %s", normalized, code)
        return SendOTPResponse(
            message="OTP sent successfully",
            demo_otp=code,
            demo_message=f"For demo purposes, use this OTP: {code}",
        )
    return SendOTPResponse(message="OTP sent successfully")


def get_or_create_phone_user(db: Session, normalized: str) -> User:
    """
    Finds the user for a normalized phone number, merging duplicates, or creates one.

    Args:
        db (Session): DB session.
        normalized (str): Digits-only phone number.

    Returns:
        User: The primary user for this number.
    """
    candidates = get_phone_candidates(db, normalized)
    entries = get_entries_for_users(db, [u.id for u in candidates])
    plan = plan_user_merge(candidates, entries, normalized)

    if plan is None:
        return create_user(db, phone_number=normalized)

    if plan.has_duplicates:
        logger.info(
            "Merging %d duplicate users into %s (%d entries reassigned)",
            len(plan.duplicate_ids), plan.primary_id, len(plan.reassigned_entry_ids),
        )
        apply_merge_plan(db, plan)

    user = get_user(db, plan.primary_id)
    if user.phone_number != normalized:
        user.phone_number = normalized
        db.commit()
        db.refresh(user)
    return user


def handle_verify_otp(phone_number: str, otp: str, store: OTPStore, db: Session) -> TokenResponse:
    """
    Verifies a one-time code and signs the user in.

    Raises:
        HTTPException: 400 if the code is wrong, missing or expired.
    """
    normalized = normalize_phone(phone_number)
    stored = store.get(normalized) if normalized else None

    if stored is None or stored.code != (otp or "").strip():
        raise HTTPException(status_code=400, detail="Invalid OTP")
    if stored.is_expired():
        store.delete(normalized)
        raise HTTPException(status_code=400, detail="OTP expired")

    user = get_or_create_phone_user(db, normalized)
    store.delete(normalized)

    token = create_token(user.id, phone_number=user.phone_number)
    logger.info("Phone login for user %s", user.id)
    return TokenResponse(token=token, user=UserOut.model_validate(user))


# Google Sign-In
def verify_google_token(token: str) -> Dict[str, Any]:
    """
    Verifies a Google ID token with Google's tokeninfo endpoint.

    Args:
        token (str): Google ID token from the frontend.

    Returns:
        dict: Verified token claims.

    Raises:
        HTTPException: 401 if Google rejects the token or it targets another client.
    """
    try:
        resp = requests.get(GOOGLE_TOKENINFO_URL, params={"id_token": token}, timeout=10)
    except requests.RequestException as e:
        logger.error("Google token verification request failed: %s", e)
        raise HTTPException(status_code=401, detail="Unable to verify Google token")

    if resp.status_code != 200:
        logger.error("Google token verification failed: %s", resp.text)
        raise HTTPException(status_code=401, detail="Invalid Google token")

    info = resp.json()
    if info.get("aud") != GOOGLE_CLIENT_ID:
        raise HTTPException(status_code=401, detail="Google token audience mismatch")
    return info


def handle_google_login(data: GoogleLoginRequest, db: Session) -> TokenResponse:
    """
    Logs in or registers a user with a Google identity.

    When GOOGLE_CLIENT_ID is configured the ID token is verified and its
    claims win; otherwise the profile sent by the frontend is trusted.

    Raises:
        HTTPException: 400 if no Google identity is supplied.
    """
    info = data.user_info
    google_id, email, name, picture = info.google_id, info.email, info.name, info.picture

    if GOOGLE_CLIENT_ID:
        if not data.google_token:
            raise HTTPException(status_code=400, detail="Missing Google token")
        claims = verify_google_token(data.google_token)
        google_id = claims.get("sub")
        email = claims.get("email") or email
        name = claims.get("name") or name
        picture = claims.get("picture") or picture
    else:
        logger.warning("GOOGLE_CLIENT_ID not set; trusting client-supplied Google profile")

    if not google_id:
        raise HTTPException(status_code=400, detail="Google account id required")

    user = get_user_by_google_id(db, google_id)
    created = False
    if not user:
        user = create_user(
            db,
            google_id=google_id,
            email=(email or "").lower().strip() or None,
            name=name,
            picture=picture,
        )
        created = True

    token = create_token(user.id, google_id=user.google_id)
    logger.info("Google login for user %s (new=%s)", user.id, created)
    return TokenResponse(token=token, user=UserOut.model_validate(user))
