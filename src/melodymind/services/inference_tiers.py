"""
Inference tiers shared by the modality adapters.
"""

import math
import random
from typing import Any, Awaitable, Callable, List, Optional

from ..api.huggingface_client import LabelScore, top_prediction
from ..models.mood_models import (
    CanonicalMood,
    InferenceSource,
    Modality,
    MoodEstimate,
)
from .mood_vocabulary import CANONICAL_MOODS, normalize_label
from .tiered_inference import InferenceTier, TieredInferenceProtocol

Classifier = Callable[[Any, str], Awaitable[List[LabelScore]]]


def clamp_intensity(value: float) -> int:
    """Round half up onto the 1-10 intensity scale."""
    return min(10, max(1, math.floor(value + 0.5)))


def clamp_confidence(value: float) -> float:
    return min(1.0, max(0.0, float(value)))


def empty_input_estimate(modality: Modality) -> MoodEstimate:
    """Low-confidence neutral answer for input that cannot be analyzed."""
    return MoodEstimate(
        mood_label=CanonicalMood.NEUTRAL,
        confidence=0.5,
        intensity=1,
        source=InferenceSource.LOCAL_HEURISTIC,
        details={"empty_input": True, "fallback": True, "modality": modality.value},
    )


def mark_fallback(estimate: MoodEstimate, protocol: TieredInferenceProtocol) -> MoodEstimate:
    """Flag a local answer from a chain that also held remote tiers."""
    if estimate.source != InferenceSource.LOCAL_HEURISTIC or len(protocol.tiers) < 2:
        return estimate
    return estimate.model_copy(update={"details": {**estimate.details, "fallback": True}})


class HostedClassifierTier(InferenceTier[MoodEstimate]):
    """
    Remote classifier returning ``[{label, score}]``.

    The top-scoring label is folded onto the canonical moods using the
    modality's vocabulary.
    """

    source = InferenceSource.REMOTE_CLASSIFIER

    def __init__(
        self,
        classify: Classifier,
        model_id: str,
        modality: Modality,
        name: Optional[str] = None
    ):
        self.classify = classify
        self.model_id = model_id
        self.modality = modality
        self.name = name or f"hf_{modality.value}_classifier"

    async def attempt(self, payload: Any) -> MoodEstimate:
        predictions = await self.classify(payload, self.model_id)
        top = top_prediction(predictions)
        score = clamp_confidence(top.score)

        return MoodEstimate(
            mood_label=normalize_label(top.label, self.modality),
            confidence=score,
            intensity=clamp_intensity(score * 10),
            source=self.source,
            details={
                "raw_label": top.label,
                "model_id": self.model_id,
                "raw": [prediction.model_dump() for prediction in predictions],
            },
        )


class LocalHeuristicTier(InferenceTier[MoodEstimate]):
    """
    Stand-in for a missing or failed remote classifier.

    Samples a canonical mood uniformly with confidence in [0.6, 0.9], so
    demos and tests never fail for lack of credentials.
    """

    source = InferenceSource.LOCAL_HEURISTIC
    is_total = True

    def __init__(self, rng: random.Random, modality: Modality):
        self.rng = rng
        self.modality = modality
        self.name = f"{modality.value}_local_heuristic"

    async def attempt(self, payload: Any) -> MoodEstimate:
        mood = self.rng.choice(CANONICAL_MOODS)
        confidence = 0.6 + self.rng.random() * 0.3

        return MoodEstimate(
            mood_label=mood,
            confidence=confidence,
            intensity=clamp_intensity(math.floor(confidence * 10)),
            source=self.source,
            details={
                "mock": True,
                "payload_size": len(payload) if payload is not None else 0,
            },
        )


def heuristic_rng(seed: Optional[int], stream: str) -> random.Random:
    """Independent random stream per adapter; deterministic when seeded."""
    if seed is None:
        return random.Random()
    return random.Random(f"{seed}:{stream}")
