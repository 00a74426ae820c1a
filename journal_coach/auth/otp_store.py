"""
One-time code storage keyed by normalized phone number.

`MemoryOTPStore` keeps codes in process memory, so they are lost on restart;
that is acceptable for their short validity window. `SqlOTPStore` keeps them
in the `otp_store` table instead.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Dict, Optional

from sqlalchemy.orm import Session

from journal_coach.auth.models import OTPRecord


def _as_aware(dt: datetime) -> datetime:
    if dt.tzinfo is None:
        return dt.replace(tzinfo=timezone.utc)
    return dt


@dataclass(frozen=True)
class OTPEntry:
    code: str
    expires_at: datetime

    def is_expired(self, now: Optional[datetime] = None) -> bool:
        now = now or datetime.now(timezone.utc)
        return _as_aware(now) >= _as_aware(self.expires_at)


class OTPStore(ABC):
    def __init__(self, ttl_seconds: int):
        self.ttl = timedelta(seconds=ttl_seconds)

    def _expiry(self) -> datetime:
        return datetime.now(timezone.utc) + self.ttl

    @abstractmethod
    def put(self, phone_number: str, code: str) -> OTPEntry:
        """Stores a fresh code, replacing any previous one for the number."""

    @abstractmethod
    def get(self, phone_number: str) -> Optional[OTPEntry]:
        """Latest code for the number, expired or not."""

    @abstractmethod
    def delete(self, phone_number: str) -> None:
        ...


class MemoryOTPStore(OTPStore):
    def __init__(self, ttl_seconds: int):
        super().__init__(ttl_seconds)
        self._codes: Dict[str, OTPEntry] = {}

    def put(self, phone_number: str, code: str) -> OTPEntry:
        entry = OTPEntry(code=code, expires_at=self._expiry())
        self._codes[phone_number] = entry
        return entry

    def get(self, phone_number: str) -> Optional[OTPEntry]:
        return self._codes.get(phone_number)

    def delete(self, phone_number: str) -> None:
        self._codes.pop(phone_number, None)


class SqlOTPStore(OTPStore):
    def __init__(self, db: Session, ttl_seconds: int):
        super().__init__(ttl_seconds)
        self.db = db

    def put(self, phone_number: str, code: str) -> OTPEntry:
        self.db.query(OTPRecord).filter(OTPRecord.phone_number == phone_number).delete()
        record = OTPRecord(phone_number=phone_number, otp=code, expires_at=self._expiry())
        self.db.add(record)
        self.db.commit()
        return OTPEntry(code=record.otp, expires_at=_as_aware(record.expires_at))

    def get(self, phone_number: str) -> Optional[OTPEntry]:
        record = (
            self.db.query(OTPRecord)
            .filter(OTPRecord.phone_number == phone_number)
            .order_by(OTPRecord.created_at.desc(), OTPRecord.id.desc())
            .first()
        )
        if record is None:
            return None
        return OTPEntry(code=record.otp, expires_at=_as_aware(record.expires_at))

    def delete(self, phone_number: str) -> None:
        self.db.query(OTPRecord).filter(OTPRecord.phone_number == phone_number).delete()
        self.db.commit()
