"""
Mood Engine

Single entry point that wires the hosted clients, modality adapters, lyrics
services and recommendation adapter from one EngineConfig.
"""

from contextlib import AsyncExitStack
from typing import List, Optional, Sequence, Union

import structlog

from ..api.client_factory import APIClientFactory
from ..api.huggingface_client import HuggingFaceClient
from ..api.openrouter_client import OpenRouterClient
from ..models.config_models import EngineConfig
from ..models.mood_models import (
    CanonicalMood,
    HistoryEntry,
    LyricsAnalysisResult,
    MoodEstimate,
    RecommendationSeed,
    SentimentAnalysis,
    SongCandidate,
)
from ..utils.logging_config import setup_logging
from .audio_adapter import AudioAdapter
from .face_adapter import FaceAdapter
from .lexicon_sentiment_engine import LexiconSentimentEngine
from .lyrics_sentiment_service import LyricsAnalysisService, LyricsSentimentService
from .recommendation_adapter import RecommendationAdapter
from .text_adapter import TextAdapter

logger = structlog.get_logger(__name__)


class MoodEngine:
    """
    Mood inference facade.

    Use as an async context manager so the hosted clients' HTTP sessions
    are opened and closed around a batch of requests.
    """

    def __init__(
        self,
        config: EngineConfig,
        hf_client: Optional[HuggingFaceClient] = None,
        openrouter_client: Optional[OpenRouterClient] = None
    ):
        self.config = config
        self.hf_client = hf_client
        self.openrouter_client = openrouter_client
        self.logger = logger.bind(service="MoodEngine")
        self._exit_stack: Optional[AsyncExitStack] = None

        self.face = FaceAdapter(config, hf_client)
        self.text = TextAdapter(config, hf_client)
        self.audio = AudioAdapter(config, self.text, hf_client)
        self.lyrics = LyricsSentimentService(
            config,
            openrouter_client=openrouter_client,
            hf_client=hf_client,
            engine=LexiconSentimentEngine()
        )
        self.lyrics_analysis = LyricsAnalysisService(
            self.lyrics,
            max_lyrics_length=config.max_lyrics_length
        )
        self.reco = RecommendationAdapter(config, hf_client)

        self.logger.info(
            "Mood engine initialized",
            hf_enabled=hf_client is not None,
            llm_enabled=openrouter_client is not None
        )

    @classmethod
    def from_config(
        cls,
        config: Optional[EngineConfig] = None,
        configure_logging: bool = False,
        log_dir: Optional[str] = None
    ) -> "MoodEngine":
        """
        Build an engine, creating clients only for configured credentials.

        Args:
            config: Engine configuration; read from the environment when omitted
            configure_logging: Set up process-wide logging at ``config.log_level``
            log_dir: Log file directory when configuring logging
        """
        config = config or EngineConfig.from_env()
        if configure_logging:
            setup_logging(log_dir=log_dir, log_level=config.log_level)

        factory = APIClientFactory(config)
        return cls(
            config,
            hf_client=factory.create_huggingface_client(),
            openrouter_client=factory.create_openrouter_client()
        )

    async def __aenter__(self):
        async with AsyncExitStack() as stack:
            for client in (self.hf_client, self.openrouter_client):
                if client is not None:
                    await stack.enter_async_context(client)
            self._exit_stack = stack.pop_all()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.close()

    async def close(self):
        """Close any open client sessions."""
        if self._exit_stack is not None:
            await self._exit_stack.aclose()
            self._exit_stack = None
            self.logger.info("Mood engine closed")

    async def analyze_face(self, image: bytes) -> MoodEstimate:
        return await self.face.analyze(image)

    async def analyze_text(self, text: Optional[str], intensity: Optional[int] = None) -> MoodEstimate:
        return await self.text.analyze(text, intensity)

    async def analyze_audio(
        self,
        audio: Optional[bytes],
        transcript: Optional[str] = None
    ) -> MoodEstimate:
        return await self.audio.analyze(audio, transcript)

    async def analyze_lyrics_sentiment(self, lyrics: Optional[str]) -> SentimentAnalysis:
        return await self.lyrics.analyze_lyrics_sentiment(lyrics)

    async def analyze_lyrics(self, lyrics: object) -> LyricsAnalysisResult:
        """Validated lyrics analysis with curated recommendations."""
        return await self.lyrics_analysis.analyze(lyrics)

    async def recommend(
        self,
        mood_label: Union[CanonicalMood, str],
        history: Optional[Sequence[HistoryEntry]] = None,
        limit: int = 20
    ) -> RecommendationSeed:
        return await self.reco.recommend(mood_label, history, limit)

    async def rank_songs(
        self,
        mood_label: Union[CanonicalMood, str],
        history: Optional[Sequence[HistoryEntry]],
        songs: List[SongCandidate]
    ) -> List[SongCandidate]:
        return await self.reco.rank_songs(mood_label, history, songs)
