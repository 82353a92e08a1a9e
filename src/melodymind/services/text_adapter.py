"""
Text Adapter

Free text -> MoodEstimate through a deterministic keyword-priority classifier,
optionally preceded by a hosted go-emotions classifier.
"""

from dataclasses import dataclass
from typing import Optional, Tuple

import structlog

from ..api.huggingface_client import HuggingFaceClient
from ..models.config_models import EngineConfig
from ..models.mood_models import CanonicalMood, InferenceSource, Modality, MoodEstimate
from .inference_tiers import HostedClassifierTier, clamp_intensity, mark_fallback
from .tiered_inference import InferenceTier, TieredInferenceProtocol

logger = structlog.get_logger(__name__)

DEFAULT_INTENSITY = 5


@dataclass(frozen=True)
class TextInput:
    text: str
    intensity: Optional[int] = None


@dataclass(frozen=True)
class KeywordSet:
    name: str
    mood: CanonicalMood
    keywords: Tuple[str, ...]
    confidence: float


# Evaluated strictly in this order; energetic wins over happy for "pumped".
KEYWORD_SETS: Tuple[KeywordSet, ...] = (
    KeywordSet("energetic", CanonicalMood.ENERGETIC, (
        "energetic", "pumped", "hyped", "motivated", "active", "dynamic",
        "vigorous", "lively", "bouncy", "peppy", "enthusiastic", "passionate",
        "intense", "powerful", "strong", "ready", "fired up", "raring to go",
    ), 0.85),
    KeywordSet("happy", CanonicalMood.HAPPY, (
        "happy", "joy", "excited", "great", "wonderful", "amazing", "fantastic",
        "awesome", "brilliant", "delighted", "cheerful", "optimistic",
        "grateful", "proud", "love", "adore", "enjoy", "fun", "laugh", "smile",
        "celebration", "success", "victory", "win",
    ), 0.8),
    KeywordSet("sad", CanonicalMood.SAD, (
        "sad", "down", "depressed", "upset", "miserable", "heartbroken", "grief",
        "sorrow", "melancholy", "blue", "unhappy", "disappointed", "hurt",
        "pain", "loss", "cry", "tears", "lonely", "empty", "hopeless",
    ), 0.8),
    KeywordSet("angry", CanonicalMood.ANGRY, (
        "angry", "mad", "furious", "annoyed", "frustrated", "irritated", "rage",
        "hate", "disgusted", "outraged", "livid", "enraged", "pissed",
        "aggravated", "bothered", "upset", "fuming",
    ), 0.8),
    KeywordSet("anxious", CanonicalMood.ANXIOUS, (
        "anxious", "worried", "nervous", "scared", "afraid", "fearful",
        "stressed", "tense", "panic", "overwhelmed", "uneasy", "restless",
        "apprehensive", "concerned", "troubled", "distressed",
    ), 0.8),
    # calm text is reported as neutral
    KeywordSet("calm", CanonicalMood.NEUTRAL, (
        "calm", "peaceful", "relaxed", "chill", "serene", "tranquil", "quiet",
        "still", "gentle", "soft", "mellow", "soothing", "comfortable",
        "content", "satisfied", "at ease",
    ), 0.8),
)


def baseline_confidence(text: str) -> float:
    """Length-derived confidence used when no keyword matches."""
    return min(0.9, 0.3 + len(text) / 200)


class KeywordPriorityTier(InferenceTier[MoodEstimate]):
    """Substring keyword scan over ordered keyword sets; never fails."""

    name = "keyword_priority"
    source = InferenceSource.LOCAL_HEURISTIC
    is_total = True

    def classify(self, text: str) -> Tuple[CanonicalMood, float, Optional[str]]:
        folded = text.casefold()
        for keyword_set in KEYWORD_SETS:
            for keyword in keyword_set.keywords:
                if keyword in folded:
                    return keyword_set.mood, keyword_set.confidence, keyword_set.name
        return CanonicalMood.NEUTRAL, baseline_confidence(text), None

    async def attempt(self, payload: TextInput) -> MoodEstimate:
        mood, confidence, matched = self.classify(payload.text)
        intensity = payload.intensity if payload.intensity is not None else DEFAULT_INTENSITY

        return MoodEstimate(
            mood_label=mood,
            confidence=confidence,
            intensity=clamp_intensity(intensity),
            source=self.source,
            details={"mock": True, "matched_set": matched},
        )


class HostedTextClassifierTier(HostedClassifierTier):
    """go-emotions classifier over the raw text; honors a caller intensity."""

    def __init__(self, hf_client: HuggingFaceClient, model_id: str):
        super().__init__(
            hf_client.classify_text,
            model_id,
            Modality.TEXT,
            name="hf_text_classifier"
        )

    async def attempt(self, payload: TextInput) -> MoodEstimate:
        estimate = await super().attempt(payload.text)
        if payload.intensity is None:
            return estimate
        return estimate.model_copy(update={"intensity": clamp_intensity(payload.intensity)})


class TextAdapter:
    """Analyze free text for mood."""

    def __init__(
        self,
        config: EngineConfig,
        hf_client: Optional[HuggingFaceClient] = None
    ):
        self.logger = logger.bind(service="TextAdapter")
        self.keyword_tier = KeywordPriorityTier()

        tiers = []
        if config.text_remote_enabled and hf_client is not None:
            tiers.append(HostedTextClassifierTier(hf_client, config.hf_text_model_id))
        tiers.append(self.keyword_tier)

        self.protocol = TieredInferenceProtocol(
            tiers,
            name="text",
            timeout=config.request_timeout
        )
        self.logger.info("Text adapter initialized", tiers=self.protocol.tier_names)

    async def analyze(self, text: Optional[str], intensity: Optional[int] = None) -> MoodEstimate:
        """
        Estimate the mood expressed by ``text``.

        Args:
            text: Free text; None is treated as empty
            intensity: Caller-reported intensity (1-10), default 5

        Returns:
            MoodEstimate; never raises
        """
        estimate = await self.protocol.run(TextInput(text=text or "", intensity=intensity))
        self.logger.debug(
            "Text analysis result",
            mood=estimate.mood_label.value,
            confidence=round(estimate.confidence, 3)
        )
        return mark_fallback(estimate, self.protocol)
