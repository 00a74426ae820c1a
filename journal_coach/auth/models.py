import uuid
from datetime import datetime, timezone
from sqlalchemy import Column, String, DateTime, Integer, Uuid
from sqlalchemy.orm import relationship
from journal_coach.core.database import Base


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class User(Base):
    __tablename__ = "users"

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    phone_number = Column(String(20), index=True, nullable=True)  # digits only; legacy rows may not be
    google_id = Column(String, unique=True, nullable=True)
    name = Column(String(100), nullable=True)
    email = Column(String(100), nullable=True)
    picture = Column(String, nullable=True)

    # Profile
    date_of_birth = Column(String, nullable=True)
    location = Column(String, nullable=True)
    occupation = Column(String, nullable=True)
    education = Column(String, nullable=True)
    bio = Column(String, nullable=True)

    created_at = Column(DateTime(timezone=True), nullable=False, default=_utcnow)

    entries = relationship("Entry", back_populates="user", cascade="all, delete-orphan")


class OTPRecord(Base):
    __tablename__ = "otp_store"

    id = Column(Integer, primary_key=True, autoincrement=True)
    phone_number = Column(String(20), index=True, nullable=False)
    otp = Column(String(10), nullable=False)
    expires_at = Column(DateTime(timezone=True), nullable=False)
    created_at = Column(DateTime(timezone=True), nullable=False, default=_utcnow)
