"""
Text normalization shared by every journal heuristic.

Entries are free text with emoji and punctuation. Everything downstream works
on lower-cased word tokens, either in order (for phrase lookups) or as a set of
content words with stop-words removed (for overlap measures).
"""

import re
from typing import Iterable, List, Sequence, Set

import emoji

STOP_WORDS = frozenset({
    "a", "about", "above", "after", "again", "against", "all", "also", "am", "an",
    "and", "any", "are", "as", "at", "be", "because", "been", "before", "being",
    "below", "between", "both", "but", "by", "can", "could", "did", "do", "does",
    "doing", "down", "during", "each", "even", "every", "few", "for", "from",
    "further", "get", "got", "had", "has", "have", "having", "he", "her", "here",
    "hers", "herself", "him", "himself", "his", "how", "i", "i'm", "i've", "i'd",
    "i'll", "if", "in", "into", "is", "it", "it's", "its", "itself", "just", "like",
    "me", "more", "most", "much", "my", "myself", "no", "nor", "not", "now", "of",
    "off", "on", "once", "only", "or", "other", "our", "ours", "ourselves", "out",
    "over", "own", "really", "same", "she", "should", "so", "some", "still", "such",
    "than", "that", "that's", "the", "their", "theirs", "them", "themselves",
    "then", "there", "these", "they", "this", "those", "through", "to", "today",
    "too", "under", "until", "up", "very", "was", "we", "were", "what", "when",
    "where", "which", "while", "who", "whom", "why", "will", "with", "would",
    "you", "your", "yours", "yourself", "yourselves",
})

# Inflections accepted when matching a keyword against a token
_SUFFIXES = ("", "s", "es", "d", "ed", "ing")

_WORD_RE = re.compile(r"[a-z0-9']+")
_CLAUSE_END_RE = re.compile(r"[.!?\n]")

MIN_CONTENT_TOKEN_LENGTH = 4


def strip_emoji(text: str) -> str:
    return emoji.replace_emoji(text or "", replace=" ")


def tokenize(text: str) -> List[str]:
    """Lower-cased word tokens in reading order. Stop-words are kept."""
    lowered = strip_emoji(text).lower().replace("’", "'")
    tokens = (t.strip("'") for t in _WORD_RE.findall(lowered))
    return [t for t in tokens if t]


def content_tokens(text: str, min_length: int = MIN_CONTENT_TOKEN_LENGTH) -> Set[str]:
    """Distinct content words: stop-words removed, shorter than `min_length` dropped."""
    return {t for t in tokenize(text) if len(t) >= min_length and t not in STOP_WORDS}


def inflections(word: str) -> Set[str]:
    return {word + suffix for suffix in _SUFFIXES}


def contains_term(tokens: Sequence[str], term: str) -> bool:
    """
    Checks whether a keyword or short phrase occurs in a token sequence.

    The last word of the term may carry a simple inflection, so "job" matches
    "jobs" and "a bit" matches "a bit" but not "a bitter".

    Args:
        tokens (Sequence[str]): Output of `tokenize`.
        term (str): Lower-case keyword or phrase.

    Returns:
        bool: True if the term is present.
    """
    words = term.split()
    if not words:
        return False
    head, last = words[:-1], inflections(words[-1])
    width = len(words)
    for i in range(len(tokens) - width + 1):
        if tokens[i + width - 1] in last and list(tokens[i:i + width - 1]) == head:
            return True
    return False


def contains_any(tokens: Sequence[str], terms: Iterable[str]) -> bool:
    return any(contains_term(tokens, term) for term in terms)


def clauses_after(text: str, phrases: Iterable[str]) -> List[str]:
    """
    Returns the clause that follows each occurrence of a lead-in phrase.

    A clause runs from the end of the phrase to the next sentence terminator.
    Matching is case-insensitive and bounded by word boundaries, so "i did"
    does not fire inside "i didn't". Original casing is preserved.

    Args:
        text (str): Raw entry content.
        phrases (Iterable[str]): Lower-case lead-in phrases.

    Returns:
        List[str]: Stripped clauses in order of appearance, per phrase.
    """
    source = (text or "").replace("’", "'")
    clauses: List[str] = []
    for phrase in phrases:
        pattern = re.compile(r"\b" + re.escape(phrase) + r"\b", re.IGNORECASE)
        for match in pattern.finditer(source):
            rest = source[match.end():]
            end = _CLAUSE_END_RE.search(rest)
            clause = rest[:end.start()] if end else rest
            clauses.append(clause.strip(" ,;:-\t"))
    return clauses
