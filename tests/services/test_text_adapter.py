"""
Tests for the Text Adapter

Keyword priority order, confidence rules, intensity handling and the
optional hosted text classifier tier.
"""

from unittest.mock import AsyncMock, Mock

import pytest

from melodymind.api.huggingface_client import LabelScore
from melodymind.errors import RemoteTimeoutError
from melodymind.models.config_models import EngineConfig
from melodymind.models.mood_models import CanonicalMood, InferenceSource
from melodymind.services.text_adapter import KeywordPriorityTier, TextAdapter, baseline_confidence


class TestKeywordPriorityTier:
    """Deterministic keyword classification."""

    @pytest.fixture
    def tier(self):
        return KeywordPriorityTier()

    def test_energetic_beats_happy(self, tier):
        mood, confidence, matched = tier.classify("I'm pumped and happy")

        assert mood == CanonicalMood.ENERGETIC
        assert confidence == 0.85
        assert matched == "energetic"

    def test_happy_beats_sad(self, tier):
        mood, _, _ = tier.classify("happy but a bit sad")
        assert mood == CanonicalMood.HAPPY

    def test_calm_reports_neutral(self, tier):
        mood, confidence, matched = tier.classify("I feel calm tonight")

        assert mood == CanonicalMood.NEUTRAL
        assert confidence == 0.8
        assert matched == "calm"

    def test_case_insensitive_substring(self, tier):
        mood, _, _ = tier.classify("FURIOUSLY typing")
        assert mood == CanonicalMood.ANGRY

    def test_no_match_uses_length_baseline(self, tier):
        mood, confidence, matched = tier.classify("hello there")

        assert mood == CanonicalMood.NEUTRAL
        assert confidence == pytest.approx(0.3 + 11 / 200)
        assert matched is None

    def test_baseline_is_capped(self):
        assert baseline_confidence("") == pytest.approx(0.3)
        assert baseline_confidence("x" * 1000) == 0.9


class TestTextAdapter:
    """Test suite for TextAdapter.analyze"""

    @pytest.fixture
    def mock_hf_client(self):
        client = Mock()
        client.classify_text = AsyncMock()
        return client

    @pytest.mark.asyncio
    async def test_mock_mode_uses_keywords(self):
        adapter = TextAdapter(EngineConfig())

        estimate = await adapter.analyze("I'm pumped and happy")

        assert estimate.mood_label == CanonicalMood.ENERGETIC
        assert estimate.confidence == 0.85
        assert estimate.intensity == 5
        assert estimate.source == InferenceSource.LOCAL_HEURISTIC
        assert estimate.details["mock"] is True
        assert "fallback" not in estimate.details

    @pytest.mark.asyncio
    async def test_intensity_is_passed_through_and_clamped(self):
        adapter = TextAdapter(EngineConfig())

        assert (await adapter.analyze("sad day", intensity=8)).intensity == 8
        assert (await adapter.analyze("sad day", intensity=15)).intensity == 10
        assert (await adapter.analyze("sad day", intensity=0)).intensity == 1

    @pytest.mark.asyncio
    async def test_none_text_is_neutral(self):
        adapter = TextAdapter(EngineConfig())

        estimate = await adapter.analyze(None)

        assert estimate.mood_label == CanonicalMood.NEUTRAL
        assert estimate.confidence == pytest.approx(0.3)

    @pytest.mark.asyncio
    async def test_hosted_tier_needs_token(self, mock_hf_client):
        adapter = TextAdapter(EngineConfig(text_adapter="hf"), mock_hf_client)

        await adapter.analyze("happy")

        assert adapter.protocol.tier_names == ["keyword_priority"]
        mock_hf_client.classify_text.assert_not_called()

    @pytest.mark.asyncio
    async def test_hosted_tier_result(self, mock_hf_client):
        mock_hf_client.classify_text.return_value = [
            LabelScore(label="excitement", score=0.72),
            LabelScore(label="joy", score=0.2),
        ]
        config = EngineConfig(text_adapter="hf", hf_api_token="hf_test")
        adapter = TextAdapter(config, mock_hf_client)

        estimate = await adapter.analyze("what a day", intensity=3)

        assert estimate.mood_label == CanonicalMood.ENERGETIC
        assert estimate.confidence == pytest.approx(0.72)
        assert estimate.intensity == 3
        assert estimate.source == InferenceSource.REMOTE_CLASSIFIER
        assert estimate.details["raw_label"] == "excitement"
        mock_hf_client.classify_text.assert_awaited_once_with("what a day", config.hf_text_model_id)

    @pytest.mark.asyncio
    async def test_hosted_neutral_falls_back_to_keywords(self, mock_hf_client):
        mock_hf_client.classify_text.return_value = [LabelScore(label="curiosity", score=0.9)]
        adapter = TextAdapter(EngineConfig(text_adapter="hf", hf_api_token="hf_test"), mock_hf_client)

        estimate = await adapter.analyze("so sad today")

        assert estimate.mood_label == CanonicalMood.SAD
        assert estimate.source == InferenceSource.LOCAL_HEURISTIC
        assert estimate.details["fallback"] is True

    @pytest.mark.asyncio
    async def test_hosted_failure_falls_back_to_keywords(self, mock_hf_client):
        mock_hf_client.classify_text.side_effect = RemoteTimeoutError("timed out")
        adapter = TextAdapter(EngineConfig(text_adapter="hf", hf_api_token="hf_test"), mock_hf_client)

        estimate = await adapter.analyze("I'm worried")

        assert estimate.mood_label == CanonicalMood.ANXIOUS
        assert estimate.details["fallback"] is True
