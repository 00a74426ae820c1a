from uuid import UUID
from typing import Dict, List
import logging

from fastapi import APIRouter, Depends, HTTPException, Security, status
from sqlalchemy.orm import Session

from journal_coach.auth.schemas import MessageResponse
from journal_coach.auth.service import get_current_user_id
from journal_coach.core.database import get_db
from journal_coach.journals.schemas import (
    EntryCreate,
    EntryOut,
    MoodFollowUpRequest,
    MoodFollowUpResponse,
)
from journal_coach.journals.db import (
    create_entry,
    delete_entry,
    get_entry,
    get_mood_counts,
    get_recent_insights,
    get_user_entries,
    save_mood_follow_up,
)

router = APIRouter(prefix="/api", tags=["Entries"])
logger = logging.getLogger(__name__)


@router.get(
    "/entries",
    response_model=List[EntryOut],
    summary="Get all entries",
    description="Retrieve the authenticated user's entries, newest first.",
    responses={
        200: {"description": "Entries retrieved successfully."},
        401: {"description": "Unauthorized."},
        500: {"description": "Failed to retrieve entries."},
    },
)
def get_entries_route(
    skip: int = 0,
    limit: int = 100,
    db: Session = Depends(get_db),
    user_id: UUID = Security(get_current_user_id),
) -> List[EntryOut]:
    try:
        return get_user_entries(db, user_id, skip, limit)
    except Exception as e:
        logger.error(f"Error fetching entries for user {user_id}: {e}")
        raise HTTPException(status_code=500, detail="Failed to fetch entries")


@router.post(
    "/entries",
    response_model=EntryOut,
    status_code=status.HTTP_201_CREATED,
    summary="Create a new entry",
    responses={
        201: {"description": "Entry created successfully."},
        401: {"description": "Unauthorized."},
        422: {"description": "Invalid content, mood or tags."},
        500: {"description": "Failed to create entry."},
    },
)
def create_entry_route(
    entry: EntryCreate,
    db: Session = Depends(get_db),
    user_id: UUID = Security(get_current_user_id),
) -> EntryOut:
    try:
        return create_entry(db, entry, user_id)
    except Exception as e:
        logger.error(f"Error creating entry for user {user_id}: {e}")
        raise HTTPException(status_code=500, detail="Failed to create entry")


@router.get(
    "/entries/{entry_id}",
    response_model=EntryOut,
    summary="Get an entry by ID",
    responses={
        200: {"description": "Entry retrieved successfully."},
        401: {"description": "Unauthorized."},
        404: {"description": "Entry not found."},
        500: {"description": "Failed to retrieve entry."},
    },
)
def read_entry_route(
    entry_id: UUID,
    db: Session = Depends(get_db),
    user_id: UUID = Security(get_current_user_id),
) -> EntryOut:
    try:
        entry = get_entry(db, entry_id, user_id)
    except Exception as e:
        logger.error(f"Error retrieving entry {entry_id} for user {user_id}: {e}")
        raise HTTPException(status_code=500, detail="Failed to retrieve entry")
    if entry is None:
        raise HTTPException(status_code=404, detail="Entry not found")
    return entry


@router.delete(
    "/entries/{entry_id}",
    response_model=MessageResponse,
    summary="Delete an entry",
    responses={
        200: {"description": "Entry deleted successfully."},
        401: {"description": "Unauthorized."},
        404: {"description": "Entry not found."},
        500: {"description": "Failed to delete entry."},
    },
)
def delete_entry_route(
    entry_id: UUID,
    db: Session = Depends(get_db),
    user_id: UUID = Security(get_current_user_id),
) -> MessageResponse:
    try:
        deleted = delete_entry(db, entry_id, user_id)
    except Exception as e:
        logger.error(f"Error deleting entry {entry_id} for user {user_id}: {e}")
        raise HTTPException(status_code=500, detail="Failed to delete entry")
    if deleted is None:
        raise HTTPException(status_code=404, detail="Entry not found")
    return MessageResponse(message="Entry deleted successfully")


@router.post(
    "/mood-followup/{entry_id}",
    response_model=MoodFollowUpResponse,
    summary="Save a mood follow-up answer",
    description="Stores `question -> answer` on the entry, e.g. `feeling_better` or `what_helped`.",
    responses={
        200: {"description": "Follow-up saved."},
        401: {"description": "Unauthorized."},
        404: {"description": "Entry not found."},
        500: {"description": "Failed to save follow-up."},
    },
)
def mood_follow_up_route(
    entry_id: UUID,
    data: MoodFollowUpRequest,
    db: Session = Depends(get_db),
    user_id: UUID = Security(get_current_user_id),
) -> MoodFollowUpResponse:
    entry = get_entry(db, entry_id, user_id)
    if entry is None:
        raise HTTPException(status_code=404, detail="Entry not found")
    try:
        entry = save_mood_follow_up(db, entry, data.question.strip(), data.answer.strip())
        return MoodFollowUpResponse(
            message="Follow-up response saved",
            mood_follow_up=entry.mood_follow_up,
        )
    except Exception as e:
        logger.error(f"Error saving follow-up for entry {entry_id}: {e}")
        raise HTTPException(status_code=500, detail="Failed to save follow-up response")


@router.get(
    "/analytics/mood",
    response_model=Dict[str, int],
    summary="Count entries per mood",
    responses={
        200: {"description": "Mood counts returned."},
        401: {"description": "Unauthorized."},
        500: {"description": "Failed to fetch mood analytics."},
    },
)
def mood_analytics_route(
    db: Session = Depends(get_db),
    user_id: UUID = Security(get_current_user_id),
) -> Dict[str, int]:
    try:
        return get_mood_counts(db, user_id)
    except Exception as e:
        logger.error(f"Error fetching mood analytics for user {user_id}: {e}")
        raise HTTPException(status_code=500, detail="Failed to fetch mood analytics")


@router.get(
    "/insights",
    response_model=List[EntryOut],
    summary="Most recent entries that have an insight",
    responses={
        200: {"description": "Insights returned."},
        401: {"description": "Unauthorized."},
        500: {"description": "Failed to fetch insights."},
    },
)
def insights_route(
    db: Session = Depends(get_db),
    user_id: UUID = Security(get_current_user_id),
) -> List[EntryOut]:
    try:
        return get_recent_insights(db, user_id)
    except Exception as e:
        logger.error(f"Error fetching insights for user {user_id}: {e}")
        raise HTTPException(status_code=500, detail="Failed to fetch insights")
