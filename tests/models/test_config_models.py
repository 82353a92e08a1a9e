"""
Tests for EngineConfig defaults, validation and environment loading.
"""

import pytest

from melodymind.models.config_models import EngineConfig

ENV_KEYS = [
    "AI_FACE_ADAPTER", "AI_TEXT_ADAPTER", "AI_AUDIO_ADAPTER", "AI_RECO_ADAPTER",
    "HF_API_TOKEN", "HF_BASE_URL", "HF_IMAGE_MODEL_ID", "HF_TEXT_MODEL_ID",
    "HF_AUDIO_MODEL_ID", "HF_EMBED_MODEL_ID", "HF_SENTIMENT_MODEL_ID",
    "OPENROUTER_API_KEY", "OPENROUTER_MODEL", "OPENROUTER_BASE_URL",
    "AI_REQUEST_TIMEOUT", "AI_EMBED_CONCURRENCY", "AI_HEURISTIC_SEED",
    "MAX_LYRICS_LENGTH", "LOG_LEVEL",
]


@pytest.fixture
def clean_env(monkeypatch):
    for key in ENV_KEYS:
        monkeypatch.delenv(key, raising=False)
    return monkeypatch


class TestEngineConfig:
    """Test EngineConfig."""

    def test_defaults(self):
        config = EngineConfig()

        assert config.face_adapter == "mock"
        assert config.request_timeout == 10.0
        assert config.max_lyrics_length == 10_000
        assert config.openrouter_model == "openai/gpt-3.5-turbo"
        assert config.has_hf_token is False
        assert config.llm_enabled is False
        assert config.face_remote_enabled is False
        assert config.embedding_enabled is False

    def test_remote_tiers_need_mode_and_token(self):
        assert EngineConfig(face_adapter="hf").face_remote_enabled is False
        assert EngineConfig(hf_api_token="tok").face_remote_enabled is False
        assert EngineConfig(face_adapter="hf", hf_api_token="tok").face_remote_enabled is True

    def test_audio_text_mode(self):
        config = EngineConfig(audio_adapter="TEXT")

        assert config.audio_adapter == "text"
        assert config.audio_prefers_text is True

    def test_blank_credentials_are_missing(self):
        config = EngineConfig(hf_api_token="  ", openrouter_api_key="")

        assert config.hf_api_token is None
        assert config.openrouter_api_key is None

    def test_unknown_adapter_mode_rejected(self):
        with pytest.raises(ValueError):
            EngineConfig(face_adapter="openai")
        with pytest.raises(ValueError):
            EngineConfig(text_adapter="text")

    def test_config_is_frozen(self):
        config = EngineConfig()
        with pytest.raises(ValueError):
            config.request_timeout = 1.0

    def test_from_env(self, clean_env):
        clean_env.setenv("AI_FACE_ADAPTER", "hf")
        clean_env.setenv("AI_RECO_ADAPTER", "hf")
        clean_env.setenv("HF_API_TOKEN", "hf_secret")
        clean_env.setenv("OPENROUTER_API_KEY", "or_secret")
        clean_env.setenv("AI_REQUEST_TIMEOUT", "2.5")
        clean_env.setenv("AI_HEURISTIC_SEED", "99")
        clean_env.setenv("MAX_LYRICS_LENGTH", "500")

        config = EngineConfig.from_env(dotenv=False)

        assert config.face_remote_enabled is True
        assert config.embedding_enabled is True
        assert config.llm_enabled is True
        assert config.request_timeout == 2.5
        assert config.heuristic_seed == 99
        assert config.max_lyrics_length == 500

    def test_from_env_defaults(self, clean_env):
        config = EngineConfig.from_env(dotenv=False)

        assert config == EngineConfig()

    def test_from_env_malformed_number(self, clean_env):
        clean_env.setenv("AI_REQUEST_TIMEOUT", "soon")

        with pytest.raises(ValueError):
            EngineConfig.from_env(dotenv=False)
