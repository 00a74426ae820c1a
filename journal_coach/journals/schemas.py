from typing import Dict, List, Optional
from uuid import UUID
from datetime import datetime

from pydantic import BaseModel, Field, field_validator
from pydantic.alias_generators import to_camel

from journal_coach.analysis.patterns import mood_label

MOOD_OPTIONS = (
    "😊 Happy",
    "😌 Calm",
    "🤩 Excited",
    "🙏 Grateful",
    "😐 Neutral",
    "😴 Tired",
    "😰 Anxious",
    "😢 Crying",
    "😔 Sad",
    "😤 Frustrated",
    "😡 Angry",
)
MOOD_LABELS = frozenset(mood_label(m) for m in MOOD_OPTIONS)


class BaseSchema(BaseModel):
    class Config:
        from_attributes = True
        alias_generator = to_camel
        populate_by_name = True


class EntryCreate(BaseSchema):
    content: str = Field(..., min_length=1)
    mood: Optional[str] = None
    tags: List[str] = Field(default_factory=list)

    @field_validator("content")
    @classmethod
    def content_not_blank(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("content must not be blank")
        return v

    @field_validator("mood")
    @classmethod
    def mood_in_options(cls, v: Optional[str]) -> Optional[str]:
        if v is None or not v.strip():
            return None
        if mood_label(v) not in MOOD_LABELS:
            raise ValueError(f"mood must be one of: {', '.join(MOOD_OPTIONS)}")
        return v.strip()

    @field_validator("tags")
    @classmethod
    def clean_tags(cls, v: List[str]) -> List[str]:
        seen, tags = set(), []
        for tag in v:
            tag = tag.strip()
            if tag and tag.lower() not in seen:
                seen.add(tag.lower())
                tags.append(tag)
        return tags


class EntryOut(BaseSchema):
    id: UUID
    user_id: UUID
    content: str
    mood: Optional[str] = None
    tags: List[str] = Field(default_factory=list)
    timestamp: datetime
    ai_insight: Optional[str] = None
    mood_follow_up: Optional[Dict[str, str]] = None
    capability_assessment: Optional[dict] = None


class MoodFollowUpRequest(BaseSchema):
    question: str = Field(..., min_length=1)
    answer: str

    @field_validator("question")
    @classmethod
    def question_not_blank(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("question must not be blank")
        return v


class MoodFollowUpResponse(BaseSchema):
    success: bool = True
    message: str
    mood_follow_up: Dict[str, str]
