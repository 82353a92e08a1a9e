"""
Tests for the MoodEngine facade.
"""

from unittest.mock import patch

import pytest

from melodymind.api.huggingface_client import HuggingFaceClient
from melodymind.api.openrouter_client import OpenRouterClient
from melodymind.errors import InvalidInputError
from melodymind.models.config_models import EngineConfig
from melodymind.models.mood_models import CanonicalMood, InferenceSource, SongCandidate
from melodymind.services.mood_engine import MoodEngine


class TestMoodEngine:
    """Test suite for MoodEngine"""

    def test_from_config_without_credentials(self):
        engine = MoodEngine.from_config(EngineConfig())

        assert engine.hf_client is None
        assert engine.openrouter_client is None
        assert engine.lyrics.protocol.tier_names == ["lexicon_sentiment"]
        assert engine.reco.enabled is False

    def test_from_config_with_credentials(self):
        config = EngineConfig(
            face_adapter="hf",
            hf_api_token="hf_test",
            openrouter_api_key="or_test"
        )

        engine = MoodEngine.from_config(config)

        assert isinstance(engine.hf_client, HuggingFaceClient)
        assert isinstance(engine.openrouter_client, OpenRouterClient)
        assert engine.face.protocol.tier_names == ["hf_face_classifier", "face_local_heuristic"]
        assert engine.lyrics.protocol.tier_names == [
            "llm_sentiment", "hf_sentiment", "lexicon_sentiment"
        ]

    def test_from_config_reads_environment(self):
        with patch.object(EngineConfig, "from_env", return_value=EngineConfig()) as from_env:
            MoodEngine.from_config()

        from_env.assert_called_once()

    def test_from_config_configures_logging_on_request(self):
        config = EngineConfig(log_level="DEBUG")

        with patch("melodymind.services.mood_engine.setup_logging") as setup:
            MoodEngine.from_config(config)
            setup.assert_not_called()

            MoodEngine.from_config(config, configure_logging=True, log_dir="/tmp/mm")

        setup.assert_called_once_with(log_dir="/tmp/mm", log_level="DEBUG")

    @pytest.mark.asyncio
    async def test_context_manager_opens_and_closes_sessions(self):
        engine = MoodEngine.from_config(EngineConfig(hf_api_token="hf_test"))

        async with engine:
            assert engine.hf_client.session is not None

        assert engine.hf_client.session is None

    @pytest.mark.asyncio
    async def test_failed_enter_closes_opened_sessions(self):
        engine = MoodEngine.from_config(
            EngineConfig(hf_api_token="hf_test", openrouter_api_key="or_test")
        )

        with patch.object(OpenRouterClient, "__aenter__", side_effect=RuntimeError("boom")):
            with pytest.raises(RuntimeError, match="boom"):
                async with engine:
                    pass

        assert engine.hf_client.session is None
        assert engine._exit_stack is None

    @pytest.mark.asyncio
    async def test_local_analysis_end_to_end(self):
        async with MoodEngine.from_config(EngineConfig(heuristic_seed=1)) as engine:
            text = await engine.analyze_text("I'm pumped and happy")
            face = await engine.analyze_face(b"image")
            audio = await engine.analyze_audio(None, transcript="so sad")
            lyrics = await engine.analyze_lyrics("dancing in the sunshine")

        assert text.mood_label == CanonicalMood.ENERGETIC
        assert face.source == InferenceSource.LOCAL_HEURISTIC
        assert audio.mood_label == CanonicalMood.SAD
        assert lyrics.overall_mood == CanonicalMood.HAPPY
        assert lyrics.recommendations

    @pytest.mark.asyncio
    async def test_lyrics_validation_propagates(self):
        engine = MoodEngine.from_config(EngineConfig(max_lyrics_length=10))

        with pytest.raises(InvalidInputError):
            await engine.analyze_lyrics("this is far too long")

    @pytest.mark.asyncio
    async def test_rank_songs_identity_when_disabled(self):
        engine = MoodEngine.from_config(EngineConfig())
        songs = [SongCandidate(title="A"), SongCandidate(title="B")]

        assert await engine.rank_songs("happy", [], songs) is songs
        assert (await engine.recommend("energetic")).genres == ["rock"]
