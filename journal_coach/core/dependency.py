# journal_coach/core/dependency.py
from functools import lru_cache

from fastapi import Depends
from sqlalchemy.orm import Session

from journal_coach.auth.otp_store import MemoryOTPStore, OTPStore, SqlOTPStore
from journal_coach.coaching.generator import TextGenerator
from journal_coach.core.config import OTP_BACKEND, OTP_TTL_SECONDS
from journal_coach.core.database import get_db


@lru_cache(maxsize=None)
def get_text_generator() -> TextGenerator:
    return TextGenerator()


@lru_cache(maxsize=None)
def _memory_otp_store() -> OTPStore:
    return MemoryOTPStore(ttl_seconds=OTP_TTL_SECONDS)


def get_otp_store(db: Session = Depends(get_db)) -> OTPStore:
    if OTP_BACKEND == "database":
        return SqlOTPStore(db, ttl_seconds=OTP_TTL_SECONDS)
    return _memory_otp_store()
