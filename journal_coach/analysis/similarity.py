"""
Scores how alike two journal entries are and retrieves a user's most similar
past entries for a target entry.
"""

from dataclasses import dataclass
from typing import Iterable, List, Optional, Sequence

from journal_coach.analysis.context import EntryContext, classify
from journal_coach.analysis.text import content_tokens

SITUATION_WEIGHT = 3.0
CLOSE_INTENSITY_WEIGHT = 2.0   # intensity difference <= 1
NEAR_INTENSITY_WEIGHT = 1.0    # intensity difference <= 2
TOKEN_OVERLAP_WEIGHT = 3.0
SHARED_TAG_WEIGHT = 0.5

SIMILARITY_THRESHOLD = 2.5
MAX_SIMILAR_ENTRIES = 5


@dataclass(frozen=True)
class SimilarityResult:
    entry: object
    score: float
    context: EntryContext


def token_overlap_ratio(content_a: str, content_b: str) -> float:
    """|shared content tokens| / |union of content tokens|, 0.0 when both are empty."""
    tokens_a = content_tokens(content_a)
    tokens_b = content_tokens(content_b)
    union = tokens_a | tokens_b
    if not union:
        return 0.0
    return len(tokens_a & tokens_b) / len(union)


def shared_tag_count(tags_a: Optional[Iterable[str]], tags_b: Optional[Iterable[str]]) -> int:
    normalized_a = {t.strip().lower() for t in (tags_a or []) if t and t.strip()}
    normalized_b = {t.strip().lower() for t in (tags_b or []) if t and t.strip()}
    return len(normalized_a & normalized_b)


def intensity_closeness(intensity_a: int, intensity_b: int) -> float:
    diff = abs(intensity_a - intensity_b)
    if diff <= 1:
        return CLOSE_INTENSITY_WEIGHT
    if diff <= 2:
        return NEAR_INTENSITY_WEIGHT
    return 0.0


def similarity_score(
    target,
    candidate,
    target_context: Optional[EntryContext] = None,
    candidate_context: Optional[EntryContext] = None,
) -> float:
    """
    Weighted similarity between two entries.

    Args:
        target: Entry being coached on.
        candidate: Past entry to compare against.
        target_context (Optional[EntryContext]): Precomputed classification of `target`.
        candidate_context (Optional[EntryContext]): Precomputed classification of `candidate`.

    Returns:
        float: Non-negative score; entries scoring at least SIMILARITY_THRESHOLD are similar.
    """
    target_context = target_context or classify(target)
    candidate_context = candidate_context or classify(candidate)

    score = 0.0
    if target_context.situation == candidate_context.situation:
        score += SITUATION_WEIGHT
    score += intensity_closeness(
        target_context.emotional_intensity, candidate_context.emotional_intensity
    )
    score += token_overlap_ratio(target.content or "", candidate.content or "") * TOKEN_OVERLAP_WEIGHT
    score += shared_tag_count(getattr(target, "tags", None), getattr(candidate, "tags", None)) * SHARED_TAG_WEIGHT
    return score


def is_same_entry(a, b) -> bool:
    if a is b:
        return True
    a_id, b_id = getattr(a, "id", None), getattr(b, "id", None)
    return a_id is not None and a_id == b_id


def find_similar_entries(
    target,
    entries: Sequence,
    *,
    threshold: float = SIMILARITY_THRESHOLD,
    limit: int = MAX_SIMILAR_ENTRIES,
) -> List[SimilarityResult]:
    """
    Ranks a user's entries by similarity to a target entry.

    The target itself is skipped by identity. Inputs are not modified.

    Args:
        target: Entry being coached on.
        entries (Sequence): The same user's entries; may include the target.
        threshold (float): Minimum score to count as similar.
        limit (int): Maximum number of results.

    Returns:
        List[SimilarityResult]: Highest scores first, at most `limit` results.
    """
    target_context = classify(target)
    results: List[SimilarityResult] = []
    for candidate in entries:
        if is_same_entry(candidate, target):
            continue
        candidate_context = classify(candidate)
        score = similarity_score(target, candidate, target_context, candidate_context)
        if score >= threshold:
            results.append(SimilarityResult(entry=candidate, score=round(score, 3), context=candidate_context))

    results.sort(key=lambda r: r.score, reverse=True)
    return results[:limit]
