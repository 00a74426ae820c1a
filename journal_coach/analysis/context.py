"""
Situation and emotional-intensity classification of journal entries.
"""

from dataclasses import dataclass, field
from typing import Iterable, List, Optional

from journal_coach.analysis.text import contains_any, contains_term, tokenize

GENERAL = "general"

# Priority order: the first category with a matching keyword wins
SITUATION_KEYWORDS = (
    ("work", ("work", "job", "career", "deadline", "boss", "colleague", "layoff", "fired", "unemployment")),
    ("relationships", ("relationship", "friend", "family", "partner", "marriage", "divorce", "breakup")),
    ("health", ("health", "sick", "pain", "doctor", "hospital", "diagnosis")),
    ("financial", ("money", "financial", "bill", "debt", "expense", "bankruptcy")),
    ("education", ("study", "exam", "test", "assignment", "school", "college")),
)
SITUATIONS = tuple(name for name, _ in SITUATION_KEYWORDS) + (GENERAL,)

INTENSITY_WORDS = {
    "very": 1, "extremely": 2, "terribly": 2, "awfully": 2, "completely": 1,
    "overwhelmed": 2, "devastated": 3, "crushed": 3, "destroyed": 3,
    "slightly": -1, "a bit": -1, "somewhat": 0, "moderately": 0,
}
BASE_INTENSITY = 1
MIN_INTENSITY, MAX_INTENSITY = 1, 5

FEAR_WORDS = ("anxious", "worried", "scared")
DESPAIR_WORDS = ("depressed", "hopeless", "suicide")
FEAR_INTENSITY_FLOOR = 4

SEVERITY_LEVELS = ("low", "moderate", "high", "critical")

KEY_CONCERNS = (
    ("Career/Job security", ("job", "work", "career")),
    ("Financial stability", ("money", "financial", "bill")),
    ("Relationships", ("relationship", "marriage", "family")),
    ("Health concerns", ("health", "sick", "pain")),
    ("Anxiety/Fear", FEAR_WORDS),
    ("Depression/Low mood", ("depressed", "hopeless", "sad")),
)
DEFAULT_CONCERN = "General life challenges"


@dataclass(frozen=True)
class EntryContext:
    situation: str
    emotional_intensity: int
    severity: str = "moderate"
    key_concerns: List[str] = field(default_factory=list)

    @property
    def concerns_text(self) -> str:
        return ", ".join(self.key_concerns) if self.key_concerns else DEFAULT_CONCERN


def classify_situation(tokens: List[str]) -> str:
    for situation, keywords in SITUATION_KEYWORDS:
        if contains_any(tokens, keywords):
            return situation
    return GENERAL


def score_intensity(tokens: List[str]) -> int:
    """Sums the intensity-word table over the text, then applies the fear/despair floors."""
    intensity = BASE_INTENSITY
    for word, delta in INTENSITY_WORDS.items():
        if contains_term(tokens, word):
            intensity += delta
    if contains_any(tokens, FEAR_WORDS):
        intensity = max(intensity, FEAR_INTENSITY_FLOOR)
    if contains_any(tokens, DESPAIR_WORDS):
        intensity = MAX_INTENSITY
    return max(MIN_INTENSITY, min(MAX_INTENSITY, intensity))


def classify_severity(tokens: List[str], situation: str, intensity: int) -> str:
    if contains_any(tokens, DESPAIR_WORDS):
        return "critical"
    if situation != GENERAL:
        return "high"
    if intensity <= 2:
        return "low"
    return "moderate"


def extract_key_concerns(tokens: List[str]) -> List[str]:
    return [label for label, keywords in KEY_CONCERNS if contains_any(tokens, keywords)]


def classify_entry(content: str, tags: Optional[Iterable[str]] = None) -> EntryContext:
    """
    Classifies an entry's situation, emotional intensity and severity.

    Tags take part in situation matching only; intensity is read from the
    content alone.

    Args:
        content (str): Entry text.
        tags (Optional[Iterable[str]]): Entry tags.

    Returns:
        EntryContext: Deterministic classification of the entry.
    """
    tokens = tokenize(content)
    tag_tokens = [t for tag in (tags or []) for t in tokenize(tag)]
    situation = classify_situation(tokens + tag_tokens)
    intensity = score_intensity(tokens)
    return EntryContext(
        situation=situation,
        emotional_intensity=intensity,
        severity=classify_severity(tokens, situation, intensity),
        key_concerns=extract_key_concerns(tokens),
    )


def classify(entry) -> EntryContext:
    """Classifies a stored entry (anything with `content` and `tags`)."""
    return classify_entry(entry.content or "", getattr(entry, "tags", None))
