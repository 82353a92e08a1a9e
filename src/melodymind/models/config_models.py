"""
Engine Configuration for MelodyMind

Process-wide configuration read once at startup and injected into every
adapter and client factory. Nothing on a request path reads the environment.
"""

import os
from typing import Optional

from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict, Field, field_validator

ADAPTER_MOCK = "mock"
ADAPTER_HF = "hf"
ADAPTER_TEXT = "text"


class EngineConfig(BaseModel):
    """Overall mood engine configuration"""
    model_config = ConfigDict(frozen=True)

    # Adapter modes
    face_adapter: str = Field(default=ADAPTER_MOCK, description="mock | hf")
    text_adapter: str = Field(default=ADAPTER_MOCK, description="mock | hf")
    audio_adapter: str = Field(default=ADAPTER_MOCK, description="mock | hf | text")
    reco_adapter: str = Field(default=ADAPTER_MOCK, description="mock | hf")

    # Hugging Face inference API
    hf_api_token: Optional[str] = Field(default=None, description="Hugging Face API token")
    hf_base_url: str = Field(default="https://api-inference.huggingface.co/models")
    hf_image_model_id: str = Field(default="trpakov/vit-face-expression")
    hf_text_model_id: str = Field(default="joeddav/distilbert-base-uncased-go-emotions-student")
    hf_audio_model_id: str = Field(
        default="ehcalabres/wav2vec2-lg-xlsr-en-speech-emotion-recognition"
    )
    hf_embed_model_id: str = Field(default="sentence-transformers/all-MiniLM-L6-v2")
    hf_sentiment_model_id: str = Field(
        default="cardiffnlp/twitter-roberta-base-sentiment-latest"
    )

    # OpenRouter (hosted LLM)
    openrouter_api_key: Optional[str] = Field(default=None, description="OpenRouter API key")
    openrouter_model: str = Field(default="openai/gpt-3.5-turbo")
    openrouter_base_url: str = Field(default="https://openrouter.ai/api/v1")

    # Performance settings
    request_timeout: float = Field(default=10.0, gt=0, description="Remote tier timeout in seconds")
    embed_concurrency: int = Field(default=4, ge=1, description="Parallel embedding calls")
    heuristic_seed: Optional[int] = Field(default=None, description="Seed for the local heuristic")

    # Request limits
    max_lyrics_length: int = Field(default=10_000, ge=1)

    log_level: str = Field(default="INFO")

    @field_validator("face_adapter", "text_adapter", "reco_adapter")
    @classmethod
    def _check_adapter_mode(cls, value: str) -> str:
        value = value.strip().lower()
        if value not in (ADAPTER_MOCK, ADAPTER_HF):
            raise ValueError(f"Unknown adapter mode: {value!r}")
        return value

    @field_validator("audio_adapter")
    @classmethod
    def _check_audio_mode(cls, value: str) -> str:
        value = value.strip().lower()
        if value not in (ADAPTER_MOCK, ADAPTER_HF, ADAPTER_TEXT):
            raise ValueError(f"Unknown audio adapter mode: {value!r}")
        return value

    @field_validator("hf_api_token", "openrouter_api_key")
    @classmethod
    def _blank_is_missing(cls, value: Optional[str]) -> Optional[str]:
        if value is None or not value.strip():
            return None
        return value.strip()

    @property
    def has_hf_token(self) -> bool:
        return self.hf_api_token is not None

    @property
    def face_remote_enabled(self) -> bool:
        return self.face_adapter == ADAPTER_HF and self.has_hf_token

    @property
    def text_remote_enabled(self) -> bool:
        return self.text_adapter == ADAPTER_HF and self.has_hf_token

    @property
    def audio_remote_enabled(self) -> bool:
        return self.audio_adapter in (ADAPTER_HF, ADAPTER_TEXT) and self.has_hf_token

    @property
    def audio_prefers_text(self) -> bool:
        return self.audio_adapter == ADAPTER_TEXT

    @property
    def embedding_enabled(self) -> bool:
        return self.reco_adapter == ADAPTER_HF and self.has_hf_token

    @property
    def llm_enabled(self) -> bool:
        return self.openrouter_api_key is not None

    @classmethod
    def from_env(cls, dotenv: bool = True) -> "EngineConfig":
        """
        Build the configuration from environment variables.

        Args:
            dotenv: Whether to load a ``.env`` file first

        Returns:
            Frozen EngineConfig

        Raises:
            ValueError: If a numeric variable or adapter mode is malformed
        """
        if dotenv:
            load_dotenv()

        seed = os.getenv("AI_HEURISTIC_SEED")

        return cls(
            face_adapter=os.getenv("AI_FACE_ADAPTER", ADAPTER_MOCK),
            text_adapter=os.getenv("AI_TEXT_ADAPTER", ADAPTER_MOCK),
            audio_adapter=os.getenv("AI_AUDIO_ADAPTER", ADAPTER_MOCK),
            reco_adapter=os.getenv("AI_RECO_ADAPTER", ADAPTER_MOCK),
            hf_api_token=os.getenv("HF_API_TOKEN"),
            hf_base_url=os.getenv("HF_BASE_URL", "https://api-inference.huggingface.co/models"),
            hf_image_model_id=os.getenv("HF_IMAGE_MODEL_ID", "trpakov/vit-face-expression"),
            hf_text_model_id=os.getenv(
                "HF_TEXT_MODEL_ID", "joeddav/distilbert-base-uncased-go-emotions-student"
            ),
            hf_audio_model_id=os.getenv(
                "HF_AUDIO_MODEL_ID",
                "ehcalabres/wav2vec2-lg-xlsr-en-speech-emotion-recognition"
            ),
            hf_embed_model_id=os.getenv(
                "HF_EMBED_MODEL_ID", "sentence-transformers/all-MiniLM-L6-v2"
            ),
            hf_sentiment_model_id=os.getenv(
                "HF_SENTIMENT_MODEL_ID", "cardiffnlp/twitter-roberta-base-sentiment-latest"
            ),
            openrouter_api_key=os.getenv("OPENROUTER_API_KEY"),
            openrouter_model=os.getenv("OPENROUTER_MODEL", "openai/gpt-3.5-turbo"),
            openrouter_base_url=os.getenv("OPENROUTER_BASE_URL", "https://openrouter.ai/api/v1"),
            request_timeout=float(os.getenv("AI_REQUEST_TIMEOUT", "10")),
            embed_concurrency=int(os.getenv("AI_EMBED_CONCURRENCY", "4")),
            heuristic_seed=int(seed) if seed else None,
            max_lyrics_length=int(os.getenv("MAX_LYRICS_LENGTH", "10000")),
            log_level=os.getenv("LOG_LEVEL", "INFO"),
        )
