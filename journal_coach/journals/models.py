import uuid
from datetime import datetime, timezone
from sqlalchemy import Column, String, Text, DateTime, ForeignKey, JSON, Uuid
from sqlalchemy.orm import relationship
from journal_coach.core.database import Base


class Entry(Base):
    __tablename__ = "entries"

    id = Column(Uuid(as_uuid=True), primary_key=True, index=True, default=uuid.uuid4)
    user_id = Column(Uuid(as_uuid=True), ForeignKey("users.id"), index=True, nullable=False)

    content = Column(Text, nullable=False)
    mood = Column(String(50), nullable=True)
    tags = Column(JSON, nullable=False, default=list)
    timestamp = Column(DateTime(timezone=True), nullable=False, default=lambda: datetime.now(timezone.utc))

    # Added after creation
    ai_insight = Column(Text, nullable=True)
    mood_follow_up = Column(JSON, nullable=True)  # question -> answer
    capability_assessment = Column(JSON, nullable=True)

    user = relationship("User", back_populates="entries")
