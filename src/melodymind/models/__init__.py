"""
Models Module

Data models and configuration for the MelodyMind mood inference engine.
"""

from .config_models import EngineConfig
from .mood_models import (
    CanonicalMood,
    CuratedSong,
    EmotionShare,
    HistoryEntry,
    InferenceSource,
    LyricsAnalysisResult,
    Modality,
    MoodEstimate,
    MoodProfile,
    RecommendationSeed,
    SentimentAnalysis,
    SongCandidate,
)

__all__ = [
    "EngineConfig",
    "CanonicalMood",
    "CuratedSong",
    "EmotionShare",
    "HistoryEntry",
    "InferenceSource",
    "LyricsAnalysisResult",
    "Modality",
    "MoodEstimate",
    "MoodProfile",
    "RecommendationSeed",
    "SentimentAnalysis",
    "SongCandidate",
]
