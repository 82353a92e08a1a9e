"""
Recommendation Adapter

Optional embedding-based re-ranking of catalog candidates against the
listener's current mood and recent journal history. Off unless
``AI_RECO_ADAPTER=hf`` and a Hugging Face token are configured.
"""

import asyncio
from dataclasses import dataclass, field
from typing import List, Optional, Sequence, Union

import numpy as np
import structlog

from ..api.huggingface_client import HuggingFaceClient
from ..models.config_models import EngineConfig
from ..models.mood_models import (
    CanonicalMood,
    HistoryEntry,
    InferenceSource,
    RecommendationSeed,
    SongCandidate,
)
from .tiered_inference import InferenceTier, TieredInferenceProtocol

logger = structlog.get_logger(__name__)

CONTEXT_HISTORY_LIMIT = 10
SEED_HISTORY_LIMIT = 20


def cosine_similarity(a: Sequence[float], b: Sequence[float]) -> float:
    """Cosine over the common prefix of two vectors; 0.0 for zero vectors."""
    size = min(len(a), len(b))
    vec_a = np.asarray(a[:size], dtype=float)
    vec_b = np.asarray(b[:size], dtype=float)
    return float(np.dot(vec_a, vec_b) / (np.linalg.norm(vec_a) * np.linalg.norm(vec_b) + 1e-8))


def _mood_text(mood_label: Union[CanonicalMood, str]) -> str:
    return mood_label.value if isinstance(mood_label, CanonicalMood) else str(mood_label)


def build_context_text(
    mood_label: Union[CanonicalMood, str],
    history: Sequence[HistoryEntry]
) -> str:
    """Current mood line plus up to ten of the most recent journal entries."""
    lines = [f"Current mood: {_mood_text(mood_label)}."]
    for entry in list(history)[:CONTEXT_HISTORY_LIMIT]:
        lines.append(f"Journal mood: {entry.mood_label}, notes: {entry.notes or ''}")
    return "\n".join(lines)


@dataclass
class RankRequest:
    mood_label: Union[CanonicalMood, str]
    history: Sequence[HistoryEntry] = field(default_factory=list)
    songs: List[SongCandidate] = field(default_factory=list)


class EmbeddingRankTier(InferenceTier[List[SongCandidate]]):
    """Rank candidates by cosine similarity to the embedded listener context."""

    name = "hf_embedding_rank"
    source = InferenceSource.REMOTE_CLASSIFIER

    def __init__(self, hf_client: HuggingFaceClient, model_id: str, concurrency: int = 4):
        self.hf_client = hf_client
        self.model_id = model_id
        self.concurrency = max(1, concurrency)

    def is_inconclusive(self, result: List[SongCandidate]) -> bool:
        return False

    async def attempt(self, payload: RankRequest) -> List[SongCandidate]:
        context_vector = await self.hf_client.embed(
            build_context_text(payload.mood_label, payload.history),
            self.model_id
        )

        semaphore = asyncio.Semaphore(self.concurrency)

        async def embed_song(song: SongCandidate) -> List[float]:
            async with semaphore:
                return await self.hf_client.embed(song.embedding_text(), self.model_id)

        tasks = [asyncio.ensure_future(embed_song(song)) for song in payload.songs]
        try:
            song_vectors = await asyncio.gather(*tasks)
        except BaseException:
            # one failed embedding aborts the ranking; stop the rest before re-raising
            for task in tasks:
                task.cancel()
            await asyncio.gather(*tasks, return_exceptions=True)
            raise

        scored = [
            (cosine_similarity(context_vector, vector), song)
            for song, vector in zip(payload.songs, song_vectors)
        ]
        # sorted() is stable, so ties keep catalog order
        scored = sorted(scored, key=lambda pair: pair[0], reverse=True)
        return [song for _, song in scored]


class CatalogOrderTier(InferenceTier[List[SongCandidate]]):
    """Leave the catalog order untouched."""

    name = "catalog_order"
    source = InferenceSource.LOCAL_HEURISTIC
    is_total = True

    def is_inconclusive(self, result: List[SongCandidate]) -> bool:
        return False

    async def attempt(self, payload: RankRequest) -> List[SongCandidate]:
        return payload.songs


class RecommendationAdapter:
    """Seed catalog lookups for a mood and optionally re-rank the results."""

    def __init__(
        self,
        config: EngineConfig,
        hf_client: Optional[HuggingFaceClient] = None
    ):
        self.logger = logger.bind(service="RecommendationAdapter")
        self.enabled = config.embedding_enabled and hf_client is not None

        tiers = []
        if self.enabled:
            tiers.append(EmbeddingRankTier(
                hf_client,
                config.hf_embed_model_id,
                concurrency=config.embed_concurrency
            ))
        tiers.append(CatalogOrderTier())

        # ranking embeds every candidate, so the budget scales with the catalog
        self.protocol = TieredInferenceProtocol(
            tiers,
            name="recommendation",
            timeout=config.request_timeout * 3
        )
        self.logger.info("Recommendation adapter initialized", embedding_enabled=self.enabled)

    async def recommend(
        self,
        mood_label: Union[CanonicalMood, str],
        history: Optional[Sequence[HistoryEntry]] = None,
        limit: int = 20
    ) -> RecommendationSeed:
        """Seed genres for a catalog lookup plus the last twenty history entries."""
        mood = _mood_text(mood_label)
        if mood == CanonicalMood.HAPPY.value:
            genres = ["pop"]
        elif mood == CanonicalMood.ENERGETIC.value:
            genres = ["rock"]
        elif mood == CanonicalMood.SAD.value:
            genres = ["acoustic", "indie"]
        else:
            genres = ["ambient"]

        return RecommendationSeed(
            genres=genres,
            limit=limit,
            seed_history=list(history or [])[-SEED_HISTORY_LIMIT:]
        )

    async def rank_songs(
        self,
        mood_label: Union[CanonicalMood, str],
        history: Optional[Sequence[HistoryEntry]],
        songs: List[SongCandidate]
    ) -> List[SongCandidate]:
        """
        Reorder ``songs`` by similarity to the listener context.

        Returns the very same list object when ranking is disabled or any
        embedding call fails.
        """
        if not self.enabled or not songs:
            return songs

        return await self.protocol.run(RankRequest(
            mood_label=mood_label,
            history=history or [],
            songs=songs
        ))
