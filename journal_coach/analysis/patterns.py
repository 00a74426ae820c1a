"""
Personal patterns across a user's similar entries: recurring triggers,
recovery outcomes and signs of growth.
"""

from collections import Counter
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Dict, Iterable, List, Optional, Sequence

import emoji

from journal_coach.analysis.strategies import StrategyStat, outcome_of, rank_strategies
from journal_coach.analysis.text import clauses_after

TRIGGER_PHRASES = (
    "because", "due to", "since", "when", "after", "before",
    "triggered by", "caused by", "result of",
)
MIN_TRIGGER_LENGTH = 6
MAX_TRIGGER_LENGTH = 200

NEGATIVE_MOOD_LABELS = frozenset({"anxious", "crying", "frustrated", "angry", "sad"})

EFFECTIVE_STRATEGY_THRESHOLD = 6.0
GROWTH_INDICATOR = "Improved coping over time"


@dataclass
class PersonalPatterns:
    common_triggers: Dict[str, int] = field(default_factory=dict)
    recovery: Dict[str, int] = field(default_factory=dict)
    effective_strategies: List[str] = field(default_factory=list)
    growth_indicators: List[str] = field(default_factory=list)

    def top_triggers(self, limit: int = 5) -> List[str]:
        return [t for t, _ in Counter(self.common_triggers).most_common(limit)]


def mood_label(mood: Optional[str]) -> str:
    """Mood text without its emoji, e.g. "😰 Anxious" -> "anxious"."""
    return " ".join(emoji.replace_emoji(mood or "", replace=" ").split()).lower()


def is_negative_mood(mood: Optional[str]) -> bool:
    return mood_label(mood) in NEGATIVE_MOOD_LABELS


def extract_triggers(content: str) -> List[str]:
    triggers = []
    for clause in clauses_after(content, TRIGGER_PHRASES):
        if MIN_TRIGGER_LENGTH <= len(clause) < MAX_TRIGGER_LENGTH:
            triggers.append(clause)
    return triggers


def _timestamp_key(entry) -> datetime:
    ts = getattr(entry, "timestamp", None)
    if ts is None:
        return datetime.min.replace(tzinfo=timezone.utc)
    if ts.tzinfo is None:
        return ts.replace(tzinfo=timezone.utc)
    return ts


def analyze_personal_patterns(
    entries: Sequence,
    strategy_stats: Optional[Dict[str, StrategyStat]] = None,
) -> PersonalPatterns:
    """
    Summarizes triggers, recovery outcomes and growth across entries.

    Args:
        entries (Sequence): Similar past entries.
        strategy_stats (Optional[Dict[str, StrategyStat]]): Output of `analyze_coping_strategies`.

    Returns:
        PersonalPatterns: Aggregated patterns; empty when `entries` is empty.
    """
    patterns = PersonalPatterns()
    triggers: Counter = Counter()
    for entry in entries:
        triggers.update(extract_triggers(entry.content or ""))
        key = "successful" if outcome_of(entry) is True else "challenging"
        patterns.recovery[key] = patterns.recovery.get(key, 0) + 1
    patterns.common_triggers = dict(triggers)

    if strategy_stats:
        patterns.effective_strategies = [
            s.name for s in rank_strategies(strategy_stats, EFFECTIVE_STRATEGY_THRESHOLD)
        ]

    if len(entries) > 1:
        ordered = sorted(entries, key=_timestamp_key)
        if outcome_of(ordered[0]) is False and outcome_of(ordered[-1]) is True:
            patterns.growth_indicators.append(GROWTH_INDICATOR)

    return patterns


def count_successes(entries: Iterable) -> int:
    return sum(1 for entry in entries if outcome_of(entry) is True)
