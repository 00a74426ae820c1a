import pytest

from journal_coach.analysis.context import EntryContext, classify_entry
from journal_coach.analysis.scoring import (
    MAX_SCORE,
    MIN_SCORE,
    assess_capability,
    capability_score,
    difficulty_score,
    success_rate,
)
from journal_coach.analysis.similarity import SimilarityResult


def _similar(entry_factory, *answers, situation="work"):
    results = []
    for answer in answers:
        follow_up = None if answer is None else {"feeling_better": answer}
        entry = entry_factory("past entry", follow_up=follow_up)
        results.append(
            SimilarityResult(entry=entry, score=5.0, context=EntryContext(situation, 3))
        )
    return results


class TestSuccessRate:
    def test_undefined_without_answers(self, entry_factory):
        assert success_rate([]) is None
        assert success_rate(_similar(entry_factory, None)) is None

    def test_ignores_unanswered(self, entry_factory):
        assert success_rate(_similar(entry_factory, "yes", "no", None)) == 0.5


class TestDifficulty:
    def test_neutral_base_scaled_by_intensity_and_situation(self):
        ctx = EntryContext(situation="health", emotional_intensity=5, severity="high")
        # 5 * 1.2 * 1.3
        assert difficulty_score(ctx, []) == pytest.approx(7.8)

    def test_history_of_success_lowers_difficulty(self, entry_factory):
        ctx = EntryContext(situation="general", emotional_intensity=3)
        assert difficulty_score(ctx, _similar(entry_factory, "yes", "yes")) == MIN_SCORE

    def test_history_of_failure_raises_difficulty(self, entry_factory):
        ctx = EntryContext(situation="relationships", emotional_intensity=5)
        assert difficulty_score(ctx, _similar(entry_factory, "no")) == MAX_SCORE


class TestCapability:
    def test_new_critical_situation(self):
        ctx = EntryContext(situation="general", emotional_intensity=5, severity="critical")
        # 5 - 2 - 1 + 0
        assert capability_score(ctx, 0) == 2.0

    def test_experience_bonus_is_capped(self):
        ctx = EntryContext(situation="general", emotional_intensity=1, severity="low")
        # 5 + 1 + 1 + min(10 * 0.5, 2)
        assert capability_score(ctx, 10) == 9.0

    @pytest.mark.parametrize(
        "content",
        [
            "Everything is hopeless and I'm completely devastated",
            "Nice walk by the river",
            "I lost my job and I'm extremely anxious about money",
        ],
    )
    def test_bounded_with_no_history(self, content):
        assessment = assess_capability(classify_entry(content), [])
        assert MIN_SCORE <= assessment.score <= MAX_SCORE
        assert MIN_SCORE <= assessment.factors["difficultyScore"] <= MAX_SCORE

    def test_factors(self, entry_factory):
        ctx = classify_entry("I lost my job and I'm extremely anxious about money")
        assessment = assess_capability(ctx, _similar(entry_factory, "yes", "no"))
        factors = assessment.factors
        assert factors["situation"] == "work"
        assert factors["severity"] == "high"
        assert factors["similarCount"] == 2
        assert factors["successRate"] == 0.5
        # 5 - 1 (high) - 1 (intensity 4) + 1 (two similar)
        assert assessment.score == 4.0
