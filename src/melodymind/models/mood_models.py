"""
Mood Models for the MelodyMind Mood Inference Engine

Pydantic value objects produced by the modality adapters, the lexicon scorer
and the recommendation adapter.
"""

from enum import Enum
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field


class CanonicalMood(str, Enum):
    """The only mood vocabulary callers outside the engine ever see."""
    HAPPY = "happy"
    SAD = "sad"
    ANGRY = "angry"
    ENERGETIC = "energetic"
    CALM = "calm"
    ANXIOUS = "anxious"
    NEUTRAL = "neutral"


class InferenceSource(str, Enum):
    """Which tier of a fallback chain produced an estimate."""
    REMOTE_LLM = "remote_llm"
    REMOTE_CLASSIFIER = "remote_classifier"
    LOCAL_HEURISTIC = "local_heuristic"


class Modality(str, Enum):
    """Input modality a raw label came from."""
    FACE = "face"
    TEXT = "text"
    SPEECH = "speech"


class MoodEstimate(BaseModel):
    """
    Single output value of every modality adapter.

    Immutable once produced; ``details`` carries the raw model output or
    the flags (``mock``, ``fallback``) that say a local tier answered.
    """
    model_config = ConfigDict(frozen=True)

    mood_label: CanonicalMood = Field(..., description="Canonical mood label")
    confidence: float = Field(..., ge=0, le=1, description="Confidence (0-1)")
    intensity: int = Field(..., ge=1, le=10, description="Intensity (1-10)")
    source: InferenceSource = Field(..., description="Tier that produced the estimate")
    details: Dict[str, Any] = Field(
        default_factory=dict,
        description="Opaque diagnostic payload"
    )


class EmotionShare(BaseModel):
    """One entry of an emotion breakdown."""
    model_config = ConfigDict(frozen=True)

    emotion: str = Field(..., description="Emotion name")
    score: float = Field(..., ge=0, le=1, description="Normalized share (0-1)")
    color: str = Field(..., description="Display color as a hex string")


class SentimentAnalysis(BaseModel):
    """
    Result of lyrics/free-text sentiment analysis.

    Produced by the lexicon engine and by the hosted LLM and classifier
    tiers layered on top of it.
    """
    model_config = ConfigDict(frozen=True)

    overall_mood: CanonicalMood = Field(..., description="Dominant canonical mood")
    confidence: float = Field(..., ge=0, le=1)
    intensity: int = Field(..., ge=1, le=10)
    emotions: List[EmotionShare] = Field(
        default_factory=list,
        description="Emotion breakdown, most to least dominant"
    )
    source: InferenceSource = Field(default=InferenceSource.LOCAL_HEURISTIC)
    reasoning: Optional[str] = Field(None, description="Model reasoning, if any")
    scores: Dict[str, float] = Field(
        default_factory=dict,
        description="Normalized per-emotion scores (lexicon tier only)"
    )
    raw_scores: Dict[str, float] = Field(
        default_factory=dict,
        description="Accumulated per-emotion scores after negation, before normalization"
    )

    @property
    def mood_label(self) -> CanonicalMood:
        return self.overall_mood

    def to_mood_estimate(self) -> MoodEstimate:
        """Collapse the analysis into a plain MoodEstimate."""
        return MoodEstimate(
            mood_label=self.overall_mood,
            confidence=self.confidence,
            intensity=self.intensity,
            source=self.source,
            details={
                "emotions": [emotion.model_dump() for emotion in self.emotions],
                "reasoning": self.reasoning,
                "scores": dict(self.scores),
            }
        )


class SongCandidate(BaseModel):
    """A catalog song offered to the recommendation adapter."""
    title: str = ""
    artist: str = ""
    genres: List[str] = Field(default_factory=list)
    mood_tags: List[str] = Field(default_factory=list)

    def embedding_text(self) -> str:
        return (
            f"{self.title} {self.artist} "
            f"{' '.join(self.genres)} {' '.join(self.mood_tags)}"
        )


class HistoryEntry(BaseModel):
    """A past mood journal entry, newest entries first."""
    mood_label: str = Field(..., description="Mood recorded for the entry")
    notes: Optional[str] = Field(None, description="Free-form journal notes")


class CuratedSong(BaseModel):
    """A curated recommendation for a mood."""
    model_config = ConfigDict(frozen=True)

    title: str
    artist: str
    mood: CanonicalMood
    genre: str
    reason: str


class MoodProfile(BaseModel):
    """Display metadata for a canonical mood."""
    model_config = ConfigDict(frozen=True)

    name: CanonicalMood
    color: str
    description: str


class RecommendationSeed(BaseModel):
    """Lookup seed handed to the song catalog for a mood."""
    genres: List[str]
    limit: int
    seed_history: List[HistoryEntry] = Field(default_factory=list)


class LyricsAnalysisResult(BaseModel):
    """Lyrics sentiment plus mood-matched recommendations."""
    overall_mood: CanonicalMood
    confidence: float
    intensity: int
    emotions: List[EmotionShare] = Field(default_factory=list)
    lyrics: str
    recommendations: List[CuratedSong] = Field(default_factory=list)
    source: InferenceSource
