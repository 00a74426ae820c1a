from journal_coach.analysis.text import (
    clauses_after,
    contains_term,
    content_tokens,
    strip_emoji,
    tokenize,
)


class TestTokenize:
    def test_lowercases_and_drops_punctuation(self):
        assert tokenize("Work was HARD, really hard!") == ["work", "was", "hard", "really", "hard"]

    def test_emoji_are_removed(self):
        assert tokenize("😰 Anxious about tomorrow") == ["anxious", "about", "tomorrow"]
        assert "😰" not in strip_emoji("😰 Anxious")

    def test_apostrophes_are_kept_inside_words(self):
        assert "i'm" in tokenize("I’m tired")

    def test_empty_input(self):
        assert tokenize("") == []
        assert tokenize(None) == []


class TestContentTokens:
    def test_removes_stop_words_and_short_tokens(self):
        tokens = content_tokens("I had a long meeting with my manager about the project")
        assert tokens == {"long", "meeting", "manager", "project"}


class TestContainsTerm:
    def test_simple_inflections_match(self):
        tokens = tokenize("Both jobs were stressful and I worked late")
        assert contains_term(tokens, "job")
        assert contains_term(tokens, "work")

    def test_no_substring_matches(self):
        assert not contains_term(tokenize("the network was down"), "work")

    def test_multi_word_phrase(self):
        assert contains_term(tokenize("I'm a bit tired"), "a bit")
        assert not contains_term(tokenize("a bitter taste"), "a bit")


class TestClausesAfter:
    def test_clause_runs_to_sentence_end(self):
        text = "Rough day. I tried going for a walk. It helped!"
        assert clauses_after(text, ["i tried"]) == ["going for a walk"]

    def test_case_insensitive_and_keeps_original_casing(self):
        assert clauses_after("i TRIED Yoga tonight", ["i tried"]) == ["Yoga tonight"]

    def test_respects_word_boundaries(self):
        assert clauses_after("I didn't sleep well.", ["i did"]) == []
