from uuid import UUID
import logging

from fastapi import APIRouter, Depends, HTTPException, Security
from sqlalchemy.orm import Session

from journal_coach.auth.service import get_current_user_id
from journal_coach.coaching.generator import TextGenerator
from journal_coach.coaching.schemas import (
    CapabilityResponse,
    CoachingResponse,
    FollowUpRequest,
    FollowUpResponse,
)
from journal_coach.coaching.service import (
    generate_capability_assessment,
    generate_coaching,
    generate_follow_up,
    generate_personalized_coaching,
)
from journal_coach.core.database import get_db
from journal_coach.core.dependency import get_text_generator

router = APIRouter(prefix="/api", tags=["Coaching"])
logger = logging.getLogger(__name__)


@router.post(
    "/coaching/{entry_id}",
    response_model=CoachingResponse,
    summary="Coaching advice for an entry",
    description="""
                Classifies the entry and asks the text generator for advice.
                When generation is unavailable a templated response built from
                the same classification is returned instead. The advice is stored
                as the entry's insight.
                """,
    responses={
        200: {"description": "Advice generated (or fallback used)."},
        401: {"description": "Unauthorized."},
        404: {"description": "Entry not found."},
        500: {"description": "Failed to generate coaching."},
    },
)
def coaching_route(
    entry_id: UUID,
    db: Session = Depends(get_db),
    user_id: UUID = Security(get_current_user_id),
    generator: TextGenerator = Depends(get_text_generator),
) -> CoachingResponse:
    try:
        return generate_coaching(db, user_id, entry_id, generator)
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Coaching failed for entry {entry_id}: {e}")
        raise HTTPException(status_code=500, detail="Failed to generate coaching")


@router.post(
    "/coaching/{entry_id}/followup",
    response_model=FollowUpResponse,
    summary="Ask a follow-up question about an entry",
    responses={
        200: {"description": "Answer generated (or fallback used)."},
        401: {"description": "Unauthorized."},
        404: {"description": "Entry not found."},
        422: {"description": "Missing question."},
        500: {"description": "Failed to generate follow-up."},
    },
)
def follow_up_route(
    entry_id: UUID,
    data: FollowUpRequest,
    db: Session = Depends(get_db),
    user_id: UUID = Security(get_current_user_id),
    generator: TextGenerator = Depends(get_text_generator),
) -> FollowUpResponse:
    try:
        return generate_follow_up(db, user_id, entry_id, data.question.strip(), generator)
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Follow-up failed for entry {entry_id}: {e}")
        raise HTTPException(status_code=500, detail="Failed to generate follow-up response")


@router.post(
    "/personalized-coaching/{entry_id}",
    response_model=CoachingResponse,
    summary="Coaching grounded in the user's similar past entries",
    responses={
        200: {"description": "Advice generated (or fallback used)."},
        401: {"description": "Unauthorized."},
        404: {"description": "Entry not found."},
        500: {"description": "Failed to generate personalized coaching."},
    },
)
def personalized_coaching_route(
    entry_id: UUID,
    db: Session = Depends(get_db),
    user_id: UUID = Security(get_current_user_id),
    generator: TextGenerator = Depends(get_text_generator),
) -> CoachingResponse:
    try:
        return generate_personalized_coaching(db, user_id, entry_id, generator)
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Personalized coaching failed for entry {entry_id}: {e}")
        raise HTTPException(status_code=500, detail="Failed to generate personalized coaching")


@router.post(
    "/capability-assessment/{entry_id}",
    response_model=CapabilityResponse,
    summary="Capability score for the entry's situation",
    responses={
        200: {"description": "Assessment generated (or fallback used)."},
        401: {"description": "Unauthorized."},
        404: {"description": "Entry not found."},
        500: {"description": "Failed to assess capability."},
    },
)
def capability_assessment_route(
    entry_id: UUID,
    db: Session = Depends(get_db),
    user_id: UUID = Security(get_current_user_id),
    generator: TextGenerator = Depends(get_text_generator),
) -> CapabilityResponse:
    try:
        return generate_capability_assessment(db, user_id, entry_id, generator)
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Capability assessment failed for entry {entry_id}: {e}")
        raise HTTPException(status_code=500, detail="Failed to assess capability")
