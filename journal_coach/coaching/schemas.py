from typing import Any, Dict, List

from pydantic import BaseModel, Field, field_validator
from pydantic.alias_generators import to_camel


class BaseSchema(BaseModel):
    class Config:
        from_attributes = True
        alias_generator = to_camel
        populate_by_name = True


class FollowUpRequest(BaseSchema):
    question: str = Field(..., min_length=1)

    @field_validator("question")
    @classmethod
    def question_not_blank(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("question must not be blank")
        return v


class CoachingResponse(BaseSchema):
    coaching_advice: str
    source: str


class FollowUpResponse(BaseSchema):
    follow_up_response: str
    source: str


class ContentAnalysis(BaseSchema):
    situation: str
    severity: str
    emotional_intensity: int
    key_concerns: List[str]


class SimilarSituations(BaseSchema):
    count: int
    summary: str


class CapabilityResponse(BaseSchema):
    capability_score: float
    assessment: str
    content_analysis: ContentAnalysis
    similar_situations: SimilarSituations
    factors: Dict[str, Any]
    source: str
