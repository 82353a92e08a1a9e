"""
Services Module

Mood inference services: the tiered inference protocol, modality adapters,
lexicon sentiment scoring, lyrics analysis and recommendation ranking.
"""

from .audio_adapter import AudioAdapter
from .face_adapter import FaceAdapter
from .lexicon_sentiment_engine import LexiconSentimentEngine
from .lyrics_sentiment_service import LyricsAnalysisService, LyricsSentimentService
from .mood_catalog import curated_recommendations, describe_moods, genres_for_mood
from .mood_engine import MoodEngine
from .mood_vocabulary import MoodVocabulary, normalize_label
from .recommendation_adapter import RecommendationAdapter
from .text_adapter import TextAdapter
from .tiered_inference import InferenceTier, TieredInferenceProtocol

__all__ = [
    "AudioAdapter",
    "FaceAdapter",
    "LexiconSentimentEngine",
    "LyricsAnalysisService",
    "LyricsSentimentService",
    "curated_recommendations",
    "describe_moods",
    "genres_for_mood",
    "MoodEngine",
    "MoodVocabulary",
    "normalize_label",
    "RecommendationAdapter",
    "TextAdapter",
    "InferenceTier",
    "TieredInferenceProtocol",
]
