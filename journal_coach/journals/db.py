from uuid import UUID, uuid4
from typing import Any, Dict, List, Optional

from sqlalchemy import func
from sqlalchemy.orm import Session

from journal_coach.journals.models import Entry
from journal_coach.journals.schemas import EntryCreate


# Entry CRUD
def get_entry(db: Session, entry_id: UUID, user_id: UUID) -> Optional[Entry]:
    return db.query(Entry).filter(
        Entry.id == entry_id,
        Entry.user_id == user_id
    ).first()

def get_user_entries(db: Session, user_id: UUID, skip: int = 0, limit: Optional[int] = 100) -> List[Entry]:
    query = db.query(Entry).filter(
        Entry.user_id == user_id
    ).order_by(Entry.timestamp.desc()).offset(skip)
    if limit is not None:
        query = query.limit(limit)
    return query.all()

def create_entry(db: Session, entry: EntryCreate, user_id: UUID) -> Entry:
    new_entry = Entry(
        id=uuid4(),
        user_id=user_id,
        content=entry.content,
        mood=entry.mood,
        tags=list(entry.tags),
    )
    db.add(new_entry)
    db.commit()
    db.refresh(new_entry)
    return new_entry

def delete_entry(db: Session, entry_id: UUID, user_id: UUID) -> Optional[Entry]:
    entry = get_entry(db, entry_id, user_id)
    if entry:
        db.delete(entry)
        db.commit()
        return entry
    return None


# Fields appended after creation
def save_mood_follow_up(db: Session, entry: Entry, question: str, answer: str) -> Entry:
    """
    Merges one follow-up answer into the entry's follow-up mapping.

    Args:
        db (Session): SQLAlchemy session.
        entry (Entry): The entry being followed up.
        question (str): Follow-up key, e.g. "feeling_better" or "what_helped".
        answer (str): The user's answer; replaces any earlier answer to the same question.

    Returns:
        Entry: The refreshed entry.
    """
    # JSON columns only track reassignment
    entry.mood_follow_up = {**(entry.mood_follow_up or {}), question: answer}
    db.commit()
    db.refresh(entry)
    return entry

def set_insight(db: Session, entry: Entry, insight: str) -> Entry:
    entry.ai_insight = insight
    db.commit()
    db.refresh(entry)
    return entry

def set_capability_assessment(db: Session, entry: Entry, snapshot: Dict[str, Any]) -> Entry:
    entry.capability_assessment = snapshot
    db.commit()
    db.refresh(entry)
    return entry


# Analytics
def get_mood_counts(db: Session, user_id: UUID) -> Dict[str, int]:
    """
    Counts the user's entries per mood label.

    Entries without a mood are left out.
    """
    rows = (
        db.query(Entry.mood, func.count(Entry.id))
        .filter(Entry.user_id == user_id, Entry.mood.isnot(None))
        .group_by(Entry.mood)
        .all()
    )
    return {mood: count for mood, count in rows}

def get_recent_insights(db: Session, user_id: UUID, limit: int = 5) -> List[Entry]:
    return db.query(Entry).filter(
        Entry.user_id == user_id,
        Entry.ai_insight.isnot(None)
    ).order_by(Entry.timestamp.desc()).limit(limit).all()
