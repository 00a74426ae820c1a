"""
Duplicate-user reconciliation.

Older rows may hold the same phone number in different formats
("+1 555 010 9999" vs "15550109999"). On sign-in, every user whose number
normalizes to the caller's key is merged into one primary user.
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Callable, Iterable, List, Optional
from uuid import UUID

from journal_coach.auth.phone import normalize_phone


@dataclass(frozen=True)
class MergePlan:
    primary_id: UUID
    duplicate_ids: List[UUID] = field(default_factory=list)
    reassigned_entry_ids: List[UUID] = field(default_factory=list)

    @property
    def has_duplicates(self) -> bool:
        return bool(self.duplicate_ids)


def _creation_key(user):
    created = user.created_at or datetime.max.replace(tzinfo=timezone.utc)
    if created.tzinfo is None:
        created = created.replace(tzinfo=timezone.utc)
    return created, str(user.id)


def plan_user_merge(
    users: Iterable,
    entries: Iterable,
    key: str,
    key_fn: Callable[[Optional[str]], str] = normalize_phone,
) -> Optional[MergePlan]:
    """
    Decides how users sharing a canonical key are merged.

    The primary is the earliest-created matching user (ties broken by id).
    Every entry owned by another matching user is reassigned to the primary
    and those users are deleted. Inputs are not modified.

    Args:
        users (Iterable): Candidate users, each with `id`, `phone_number`, `created_at`.
        entries (Iterable): Entries, each with `id` and `user_id`.
        key (str): Canonical key, e.g. a normalized phone number.
        key_fn (Callable): Maps a user's stored phone number to its canonical key.

    Returns:
        Optional[MergePlan]: None when no user matches the key.
    """
    matches = [u for u in users if key_fn(u.phone_number) == key]
    if not matches:
        return None

    primary = min(matches, key=_creation_key)
    duplicate_ids = [u.id for u in sorted(matches, key=_creation_key) if u.id != primary.id]
    duplicates = set(duplicate_ids)
    reassigned = [e.id for e in entries if e.user_id in duplicates]
    return MergePlan(primary_id=primary.id, duplicate_ids=duplicate_ids, reassigned_entry_ids=reassigned)
