"""
Coping-strategy extraction and effectiveness tracking.

Strategies come from first-person lead-ins in the entry text ("I tried ...",
"I went for a ...") and from the `what_helped` follow-up answer. Each raw
mention is folded into a canonical strategy name; outcomes come from the
entry's `feeling_better` follow-up answer.
"""

import re
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Optional

from journal_coach.analysis.text import clauses_after

LEAD_IN_PHRASES = (
    "i tried", "i did", "i used", "i practiced", "i focused on",
    "i reminded myself", "i told myself", "i decided to",
    "i took a", "i went for a", "i called", "i talked to",
    "i wrote", "i read", "i listened to", "i watched",
    "i exercised", "i meditated", "i prayed", "i took deep breaths",
)

MIN_STRATEGY_LENGTH = 6
MAX_STRATEGY_LENGTH = 200

CANONICAL_STRATEGIES = (
    ("Physical Activity", r"exercis\w*|workouts?|work(?:ed|ing)? out|run|runs|ran|running|walk\w*"),
    ("Talking to Someone", r"talk\w*|call|calls|called|calling|discuss\w*"),
    ("Writing/Journaling", r"writ\w*|wrote|journal\w*|notes?"),
    ("Breathing/Meditation", r"breath\w*|meditat\w*|mindful\w*"),
    ("Taking Breaks/Rest", r"breaks?|rest|rested|resting|sleep\w*|slept"),
    ("Planning/Organizing", r"plan|plans|planned|planning|organi[sz]\w*|lists?|to-do"),
)
_STRATEGY_PATTERNS = tuple(
    (name, re.compile(r"\b(?:" + words + r")\b", re.IGNORECASE))
    for name, words in CANONICAL_STRATEGIES
)

# Lead-ins whose verb already names the strategy
LEAD_IN_STRATEGIES = {
    "i called": "Talking to Someone",
    "i talked to": "Talking to Someone",
    "i wrote": "Writing/Journaling",
    "i meditated": "Breathing/Meditation",
    "i took deep breaths": "Breathing/Meditation",
    "i exercised": "Physical Activity",
}

FEELING_BETTER_KEY = "feeling_better"
WHAT_HELPED_KEY = "what_helped"
POSITIVE_ANSWERS = frozenset({"yes", "y", "true", "1"})
NEGATIVE_ANSWERS = frozenset({"no", "n", "false", "0"})

MAX_EXAMPLES = 3
EXAMPLE_LENGTH = 100


@dataclass
class StrategyStat:
    name: str
    attempts: int = 0
    successes: int = 0
    examples: List[str] = field(default_factory=list)

    @property
    def effectiveness(self) -> float:
        # attempts >= 1 for every stat held in a strategy map
        return self.successes / self.attempts * 10


def follow_up_answer(entry, key: str) -> Any:
    follow_up = getattr(entry, "mood_follow_up", None) or {}
    return follow_up.get(key)


def outcome_of(entry) -> Optional[bool]:
    """True/False from the `feeling_better` answer, None when unanswered or unclear."""
    answer = follow_up_answer(entry, FEELING_BETTER_KEY)
    if isinstance(answer, bool):
        return answer
    if answer is None:
        return None
    normalized = str(answer).strip().lower()
    if normalized in POSITIVE_ANSWERS:
        return True
    if normalized in NEGATIVE_ANSWERS:
        return False
    return None


def is_positive_outcome(entry) -> bool:
    return outcome_of(entry) is True


def normalize_strategy(strategy: str, lead_in: str = "") -> str:
    """
    Folds a raw strategy mention into a canonical strategy name.

    Args:
        strategy (str): Raw clause, e.g. "for a long run after dinner".
        lead_in (str): The lead-in phrase that introduced it, if any. Only
            lead-ins listed in LEAD_IN_STRATEGIES decide the name; otherwise
            the clause alone is matched, whole words only.

    Returns:
        str: Canonical name, or the raw clause capitalized when nothing matches.
    """
    if lead_in.lower().strip() in LEAD_IN_STRATEGIES:
        return LEAD_IN_STRATEGIES[lead_in.lower().strip()]
    for name, pattern in _STRATEGY_PATTERNS:
        if pattern.search(strategy):
            return name
    cleaned = strategy.strip()
    return cleaned[:1].upper() + cleaned[1:]


def extract_strategies_from_text(content: str) -> List[str]:
    """Canonical strategies mentioned in `content`, grouped by lead-in phrase, repeats kept."""
    strategies: List[str] = []
    for phrase in LEAD_IN_PHRASES:
        for clause in clauses_after(content, [phrase]):
            if MIN_STRATEGY_LENGTH <= len(clause) < MAX_STRATEGY_LENGTH:
                strategies.append(normalize_strategy(clause, phrase))
    return strategies


def strategies_for_entry(entry) -> List[str]:
    """Distinct canonical strategies an entry reports, including its `what_helped` answer."""
    found = extract_strategies_from_text(entry.content or "")
    what_helped = follow_up_answer(entry, WHAT_HELPED_KEY)
    if isinstance(what_helped, str) and what_helped.strip():
        found.append(normalize_strategy(what_helped))
    return list(dict.fromkeys(found))


def analyze_coping_strategies(entries: Iterable) -> Dict[str, StrategyStat]:
    """
    Aggregates coping-strategy attempts and successes across entries.

    Each entry counts at most once per canonical strategy. A strategy only
    enters the map on its first attempt, so effectiveness is always defined.

    Args:
        entries (Iterable): Entries to scan, typically the similar-entry result.

    Returns:
        Dict[str, StrategyStat]: Canonical strategy name -> statistics.
    """
    stats: Dict[str, StrategyStat] = {}
    for entry in entries:
        success = is_positive_outcome(entry)
        content = entry.content or ""
        example = content[:EXAMPLE_LENGTH] + ("..." if len(content) > EXAMPLE_LENGTH else "")
        for name in strategies_for_entry(entry):
            stat = stats.setdefault(name, StrategyStat(name=name))
            stat.attempts += 1
            if success:
                stat.successes += 1
            if len(stat.examples) < MAX_EXAMPLES:
                stat.examples.append(example)
    return stats


def rank_strategies(stats: Dict[str, StrategyStat], min_effectiveness: float = 0.0) -> List[StrategyStat]:
    """Most effective first; ties broken by attempts, then name."""
    eligible = [s for s in stats.values() if s.effectiveness >= min_effectiveness]
    return sorted(eligible, key=lambda s: (-s.effectiveness, -s.attempts, s.name))
