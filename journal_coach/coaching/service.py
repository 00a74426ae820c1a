import logging
from typing import Optional, Tuple
from uuid import UUID

from fastapi import HTTPException
from sqlalchemy.orm import Session

from journal_coach.coaching.composer import (
    CoachingContext,
    CoachingKind,
    ComposedResponse,
    build_coaching_context,
    compose,
    render_similar_summary,
)
from journal_coach.coaching.schemas import (
    CapabilityResponse,
    CoachingResponse,
    ContentAnalysis,
    FollowUpResponse,
    SimilarSituations,
)
from journal_coach.journals.db import (
    get_entry,
    get_user_entries,
    set_capability_assessment,
    set_insight,
)
from journal_coach.journals.models import Entry

logger = logging.getLogger(__name__)


def load_coaching_context(db: Session, user_id: UUID, entry_id: UUID) -> Tuple[Entry, CoachingContext]:
    """
    Loads an entry and runs the journal heuristics against the owner's history.

    Args:
        db (Session): SQLAlchemy session.
        user_id (UUID): Owner of the entry.
        entry_id (UUID): Entry to coach on.

    Returns:
        Tuple[Entry, CoachingContext]: The entry and its derived signals.

    Raises:
        HTTPException: 404 if the entry does not exist or belongs to someone else.
    """
    entry = get_entry(db, entry_id, user_id)
    if entry is None:
        raise HTTPException(status_code=404, detail="Entry not found")
    history = get_user_entries(db, user_id, limit=None)
    return entry, build_coaching_context(entry, history)


def _run(db: Session, user_id: UUID, entry_id: UUID, kind: CoachingKind, generator,
         question: Optional[str] = None) -> Tuple[Entry, CoachingContext, ComposedResponse]:
    entry, ctx = load_coaching_context(db, user_id, entry_id)
    logger.info(
        f"{kind.value} for entry {entry_id}: situation={ctx.situation} "
        f"severity={ctx.severity} similar={ctx.similar_count}"
    )
    return entry, ctx, compose(kind, ctx, generator, question)


def generate_coaching(db: Session, user_id: UUID, entry_id: UUID, generator) -> CoachingResponse:
    """Coaching advice for one entry; the advice is stored as the entry's insight."""
    entry, _, result = _run(db, user_id, entry_id, CoachingKind.COACHING, generator)
    set_insight(db, entry, result.text)
    return CoachingResponse(coaching_advice=result.text, source=result.source)


def generate_follow_up(db: Session, user_id: UUID, entry_id: UUID, question: str, generator) -> FollowUpResponse:
    """Answers a question about an entry and its earlier insight. Nothing is stored."""
    _, _, result = _run(db, user_id, entry_id, CoachingKind.FOLLOW_UP, generator, question)
    return FollowUpResponse(follow_up_response=result.text, source=result.source)


def generate_personalized_coaching(db: Session, user_id: UUID, entry_id: UUID, generator) -> CoachingResponse:
    """
    Coaching grounded in the user's own similar past entries.

    The advice is stored as the entry's insight, replacing any earlier one.
    """
    entry, _, result = _run(db, user_id, entry_id, CoachingKind.PERSONALIZED, generator)
    set_insight(db, entry, result.text)
    return CoachingResponse(coaching_advice=result.text, source=result.source)


def generate_capability_assessment(db: Session, user_id: UUID, entry_id: UUID, generator) -> CapabilityResponse:
    """
    Scores how well the user is equipped for the entry's situation.

    Args:
        db (Session): SQLAlchemy session.
        user_id (UUID): Owner of the entry.
        entry_id (UUID): Entry to assess.
        generator: Text generator used for the written assessment.

    Returns:
        CapabilityResponse: Score, written assessment, content analysis and
        contributing factors. The same payload is persisted on the entry.
    """
    entry, ctx, result = _run(db, user_id, entry_id, CoachingKind.CAPABILITY, generator)
    response = CapabilityResponse(
        capability_score=ctx.capability.score,
        assessment=result.text,
        content_analysis=ContentAnalysis(
            situation=ctx.situation,
            severity=ctx.severity,
            emotional_intensity=ctx.entry_context.emotional_intensity,
            key_concerns=list(ctx.entry_context.key_concerns),
        ),
        similar_situations=SimilarSituations(
            count=ctx.similar_count,
            summary=render_similar_summary(ctx),
        ),
        factors=dict(ctx.capability.factors),
        source=result.source,
    )
    set_capability_assessment(db, entry, response.model_dump(mode="json", by_alias=True))
    return response
