"""
Difficulty and capability scores for a journal entry, both bounded to [1, 10].

`difficulty_score` is history-driven: the less often similar situations ended
with the user feeling better, the harder this one is likely to be.
`capability_score` is severity-driven: it starts neutral, drops for severe or
intense situations and rises with experience of similar ones.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Optional, Sequence

from journal_coach.analysis.context import EntryContext
from journal_coach.analysis.similarity import SimilarityResult
from journal_coach.analysis.strategies import outcome_of

MIN_SCORE, MAX_SCORE = 1.0, 10.0
NEUTRAL_SCORE = 5.0

HIGH_INTENSITY = 4
LOW_INTENSITY = 2

# Difficulty
HIGH_INTENSITY_FACTOR = 1.2
LOW_INTENSITY_FACTOR = 0.8
SITUATION_MULTIPLIERS = {
    "work": 1.1,
    "relationships": 1.2,
    "health": 1.3,
    "financial": 1.1,
    "education": 1.0,
    "general": 1.0,
}

# Capability
SEVERITY_ADJUSTMENTS = {"critical": -2.0, "high": -1.0, "moderate": 0.0, "low": 1.0}
INTENSITY_ADJUSTMENT = 1.0
EXPERIENCE_BONUS_PER_ENTRY = 0.5
MAX_EXPERIENCE_BONUS = 2.0


@dataclass
class CapabilityAssessment:
    score: float
    factors: Dict[str, Any] = field(default_factory=dict)


def clamp_score(value: float) -> float:
    return max(MIN_SCORE, min(MAX_SCORE, value))


def success_rate(similar: Sequence[SimilarityResult]) -> Optional[float]:
    """Share of answered similar entries that ended with the user feeling better; None if none answered."""
    outcomes = [outcome_of(r.entry) for r in similar]
    answered = [o for o in outcomes if o is not None]
    if not answered:
        return None
    return sum(1 for o in answered if o) / len(answered)


def difficulty_score(context: EntryContext, similar: Sequence[SimilarityResult]) -> float:
    rate = success_rate(similar)
    base = NEUTRAL_SCORE if rate is None else (1 - rate) * 10

    if context.emotional_intensity >= HIGH_INTENSITY:
        base *= HIGH_INTENSITY_FACTOR
    elif context.emotional_intensity <= LOW_INTENSITY:
        base *= LOW_INTENSITY_FACTOR

    base *= SITUATION_MULTIPLIERS.get(context.situation, 1.0)
    return clamp_score(base)


def severity_adjustment(severity: str) -> float:
    return SEVERITY_ADJUSTMENTS.get(severity, 0.0)


def intensity_adjustment(intensity: int) -> float:
    if intensity >= HIGH_INTENSITY:
        return -INTENSITY_ADJUSTMENT
    if intensity <= LOW_INTENSITY:
        return INTENSITY_ADJUSTMENT
    return 0.0


def experience_bonus(similar_count: int) -> float:
    return min(similar_count * EXPERIENCE_BONUS_PER_ENTRY, MAX_EXPERIENCE_BONUS)


def capability_score(context: EntryContext, similar_count: int) -> float:
    score = (
        NEUTRAL_SCORE
        + severity_adjustment(context.severity)
        + intensity_adjustment(context.emotional_intensity)
        + experience_bonus(similar_count)
    )
    return clamp_score(score)


def assess_capability(context: EntryContext, similar: Sequence[SimilarityResult]) -> CapabilityAssessment:
    """
    Builds the capability assessment reported to the user.

    Args:
        context (EntryContext): Classification of the entry being assessed.
        similar (Sequence[SimilarityResult]): Similar past entries.

    Returns:
        CapabilityAssessment: Capability score rounded to one decimal, plus the
        factors that produced it and the history-driven difficulty.
    """
    rate = success_rate(similar)
    score = capability_score(context, len(similar))
    return CapabilityAssessment(
        score=round(score, 1),
        factors={
            "situation": context.situation,
            "severity": context.severity,
            "emotionalIntensity": context.emotional_intensity,
            "severityAdjustment": severity_adjustment(context.severity),
            "intensityAdjustment": intensity_adjustment(context.emotional_intensity),
            "experienceBonus": experience_bonus(len(similar)),
            "similarCount": len(similar),
            "successRate": None if rate is None else round(rate, 3),
            "difficultyScore": round(difficulty_score(context, similar), 1),
        },
    )
