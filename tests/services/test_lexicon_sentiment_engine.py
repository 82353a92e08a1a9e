"""
Tests for the Lexicon Sentiment Engine

Checks tokenization, weighting, negation, normalization, mood selection and
the emotion breakdown against hand-computed values.
"""

import pytest

from melodymind.models.mood_models import CanonicalMood, InferenceSource
from melodymind.services.lexicon_sentiment_engine import LexiconSentimentEngine, tokenize


@pytest.fixture
def engine():
    return LexiconSentimentEngine()


class TestTokenize:
    """Tokenizer behaviour."""

    def test_drops_short_tokens_and_punctuation(self):
        assert tokenize("I'm so GOOD, ok?") == ["good"]

    def test_none_and_empty(self):
        assert tokenize(None) == []
        assert tokenize("   \n\t ") == []

    def test_underscore_is_a_word_character(self):
        assert tokenize("happy_days!") == ["happy_days"]


class TestLexiconSentimentEngine:
    """Test suite for LexiconSentimentEngine.score"""

    def test_sunny_dancing_text_is_happy(self, engine):
        """Bright and light are happy concepts; nothing else matches."""
        result = engine.score(
            "I'm feeling so good today, the sun is shining bright, I'm dancing in the light"
        )

        assert result.overall_mood == CanonicalMood.HAPPY
        assert result.confidence >= 0.6
        assert result.confidence == pytest.approx(0.95)
        assert 1 <= result.intensity <= 10
        assert result.intensity == 10
        assert result.emotions[0].emotion == "happy"
        assert result.emotions[0].score == 1.0
        assert result.emotions[0].color == "#4caf50"
        assert result.raw_scores["happy"] == pytest.approx(3.0)
        assert result.source == InferenceSource.LOCAL_HEURISTIC

    def test_empty_text_is_neutral(self, engine):
        result = engine.score("")

        assert result.overall_mood == CanonicalMood.NEUTRAL
        assert result.confidence == 0.5
        assert result.intensity == 2
        assert result.emotions == []

    def test_whitespace_and_unmatched_text_is_neutral(self, engine):
        for text in ["   ", "xyzzy plugh"]:
            result = engine.score(text)
            assert result.overall_mood == CanonicalMood.NEUTRAL
            assert result.confidence == 0.5
            assert result.intensity == 2
            assert result.emotions == []

    def test_score_is_pure(self, engine):
        text = "Tears fall in the cold rain, I scream and fight but still I hope"
        first = engine.score(text)
        second = engine.score(text)

        assert first == second
        assert first.model_dump() == second.model_dump()

    def test_negation_lowers_raw_score(self, engine):
        plain = engine.score("I am happy")
        negated = engine.score("I am not happy")

        assert plain.raw_scores["happy"] == pytest.approx(2.0)
        assert negated.raw_scores["happy"] == pytest.approx(1.5)

    def test_negation_lowers_normalized_score(self, engine):
        filler = " xyzzy" * 99
        plain = engine.score("I am happy" + filler)
        negated = engine.score("I am not happy" + filler)

        assert plain.scores["happy"] == pytest.approx(0.05)
        assert negated.scores["happy"] < plain.scores["happy"]
        assert negated.scores["happy"] == pytest.approx(1.5 / 2.02 * 5 / 101)

    def test_each_negated_pair_subtracts_half(self, engine):
        # "no" is too short to survive tokenization
        result = engine.score("no love never love cant love dont love")

        assert result.raw_scores["happy"] == pytest.approx(4 * 1.5 - 3 * 0.5)
        for score in result.raw_scores.values():
            assert score >= 0

    def test_substring_matching_counts_partial_words(self, engine):
        """Stems match inside longer tokens, so "hopeless" counts as hope."""
        result = engine.score("hopeless")

        assert result.raw_scores["happy"] == pytest.approx(1.5)

    def test_duplicate_stems_count_for_each_list(self, engine):
        """"rage" is both a direct word and an action for anger."""
        result = engine.score("rage")

        assert result.raw_scores["angry"] == pytest.approx(1.3 * 2.0 + 1.3 * 1.8)

    def test_ties_keep_emotion_order(self, engine):
        result = engine.score("happy sad")

        assert result.scores["happy"] == 1.0
        assert result.scores["sad"] == 1.0
        assert result.overall_mood == CanonicalMood.HAPPY
        assert result.confidence == pytest.approx(0.95)
        assert result.intensity == 10
        assert [e.emotion for e in result.emotions] == ["happy", "sad"]
        assert [e.score for e in result.emotions] == [0.5, 0.5]

    def test_breakdown_capped_at_four_entries(self, engine):
        result = engine.score("happy sad angry energetic calm anxious")

        assert len(result.emotions) == 4
        shares = [e.score for e in result.emotions]
        assert shares == sorted(shares, reverse=True)

    def test_very_long_text_does_not_raise(self, engine):
        result = engine.score("la " * 50_000 + "joy")

        assert 0 <= result.confidence <= 1
        assert 1 <= result.intensity <= 10

    def test_outputs_keyed_by_mood_name(self, engine):
        result = engine.score("calm")

        assert set(result.scores) == {"happy", "sad", "angry", "energetic", "calm", "anxious"}
        assert result.overall_mood == CanonicalMood.CALM
        assert result.to_mood_estimate().mood_label == CanonicalMood.CALM
