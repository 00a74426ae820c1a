from uuid import UUID
from typing import Any, Dict, List, Optional

from sqlalchemy.orm import Session

from journal_coach.auth.models import User
from journal_coach.auth.reconcile import MergePlan
from journal_coach.journals.models import Entry

PHONE_SUFFIX_LENGTH = 4


def get_user(db: Session, user_id: UUID) -> Optional[User]:
    return db.query(User).filter(User.id == user_id).first()


def get_user_by_google_id(db: Session, google_id: str) -> Optional[User]:
    return db.query(User).filter(User.google_id == google_id).first()


def get_phone_candidates(db: Session, normalized_phone: str) -> List[User]:
    """
    Users whose stored number may normalize to `normalized_phone`.

    Stored numbers may contain formatting anywhere, trailing characters
    included, so this only narrows to numbers holding the last digits in order;
    callers filter exactly with `normalize_phone`.
    """
    suffix = normalized_phone[-PHONE_SUFFIX_LENGTH:]
    pattern = "%" + "%".join(suffix) + "%"
    return (
        db.query(User)
        .filter(User.phone_number.isnot(None), User.phone_number.like(pattern))
        .all()
    )


def get_entries_for_users(db: Session, user_ids: List[UUID]) -> List[Entry]:
    if not user_ids:
        return []
    return db.query(Entry).filter(Entry.user_id.in_(user_ids)).all()


def create_user(db: Session, **fields: Any) -> User:
    user = User(**fields)
    db.add(user)
    db.commit()
    db.refresh(user)
    return user


def apply_merge_plan(db: Session, plan: MergePlan) -> None:
    """
    Reassigns duplicate users' entries to the primary user and deletes the duplicates.

    Args:
        db (Session): SQLAlchemy session.
        plan (MergePlan): Output of `plan_user_merge`.
    """
    if not plan.has_duplicates:
        return
    if plan.reassigned_entry_ids:
        db.query(Entry).filter(Entry.id.in_(plan.reassigned_entry_ids)).update(
            {Entry.user_id: plan.primary_id}
        )
    db.query(User).filter(User.id.in_(plan.duplicate_ids)).delete()
    db.commit()


def update_user_profile(db: Session, user: User, updates: Dict[str, Any]) -> User:
    """
    Applies profile changes; None and empty-string values leave a field unchanged.

    Args:
        db (Session): SQLAlchemy session.
        user (User): The user to update.
        updates (Dict[str, Any]): Field name -> new value.

    Returns:
        User: The refreshed user.
    """
    for field, value in updates.items():
        if value is None or (isinstance(value, str) and not value.strip()):
            continue
        setattr(user, field, value)
    db.commit()
    db.refresh(user)
    return user


def delete_user(db: Session, user_id: UUID) -> Optional[User]:
    user = get_user(db, user_id)
    if user:
        db.delete(user)  # entries go with it (cascade)
        db.commit()
        return user
    return None
