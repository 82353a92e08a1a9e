"""
Mood Vocabulary

Canonical mood taxonomy plus the lookup tables that fold each modality's
model vocabulary (facial expressions, go-emotions text classes, speech
emotions) onto the seven canonical moods. Unknown labels resolve to neutral.
"""

from types import MappingProxyType
from typing import Dict, List, Mapping

from ..models.mood_models import CanonicalMood, Modality

CANONICAL_MOODS = tuple(CanonicalMood)

EMOTION_COLORS: Mapping[CanonicalMood, str] = MappingProxyType({
    CanonicalMood.HAPPY: "#4caf50",
    CanonicalMood.SAD: "#f44336",
    CanonicalMood.ANGRY: "#ff5722",
    CanonicalMood.ENERGETIC: "#ff9800",
    CanonicalMood.CALM: "#2196f3",
    CanonicalMood.ANXIOUS: "#e91e63",
    CanonicalMood.NEUTRAL: "#9e9e9e",
})

_H = CanonicalMood.HAPPY
_S = CanonicalMood.SAD
_A = CanonicalMood.ANGRY
_E = CanonicalMood.ENERGETIC
_C = CanonicalMood.CALM
_X = CanonicalMood.ANXIOUS
_N = CanonicalMood.NEUTRAL

# Facial expression classifiers (FER-style label sets).
# surprise, disgust and fear are transient labels folded here.
FACE_LABELS: Mapping[str, CanonicalMood] = MappingProxyType({
    "happy": _H,
    "happiness": _H,
    "angry": _A,
    "anger": _A,
    "disgust": _A,
    "fear": _X,
    "fearful": _X,
    "surprise": _E,
    "surprised": _E,
    "sad": _S,
    "sadness": _S,
    "neutral": _N,
    "calm": _C,
    "relaxed": _C,
})

# go-emotions style text classes.
TEXT_LABELS: Mapping[str, CanonicalMood] = MappingProxyType({
    "joy": _H,
    "optimism": _H,
    "admiration": _H,
    "approval": _H,
    "gratitude": _H,
    "amusement": _H,
    "pride": _H,
    "love": _H,
    "excitement": _E,
    "enthusiasm": _E,
    "energy": _E,
    "vigor": _E,
    "disappointment": _S,
    "sadness": _S,
    "grief": _S,
    "remorse": _S,
    "embarrassment": _S,
    "melancholy": _S,
    "sorrow": _S,
    "anger": _A,
    "annoyance": _A,
    "frustration": _A,
    "irritation": _A,
    "rage": _A,
    "fear": _X,
    "anxiety": _X,
    "nervousness": _X,
    "worry": _X,
    "stress": _X,
    "tension": _X,
    "relief": _C,
    "peace": _C,
    "serenity": _C,
    "tranquility": _C,
    "relaxation": _C,
    "confusion": _N,
    "neutral": _N,
    "indifference": _N,
    "calm": _N,
    "relaxed": _N,
    "surprise": _N,
    "disgust": _N,
    "curiosity": _N,
    "realization": _N,
})

# Speech emotion recognizers, including the short superb codes.
SPEECH_LABELS: Mapping[str, CanonicalMood] = MappingProxyType({
    "happy": _H,
    "hap": _H,
    "anger": _A,
    "angry": _A,
    "ang": _A,
    "disgust": _A,
    "sad": _S,
    "sadness": _S,
    "fear": _X,
    "fearful": _X,
    "surprise": _E,
    "surprised": _E,
    "neutral": _N,
    "neu": _N,
    "calm": _C,
})

_TABLES: Dict[Modality, Mapping[str, CanonicalMood]] = {
    Modality.FACE: FACE_LABELS,
    Modality.TEXT: TEXT_LABELS,
    Modality.SPEECH: SPEECH_LABELS,
}


def _label_key(raw_label: object) -> str:
    if isinstance(raw_label, CanonicalMood):
        return raw_label.value
    if raw_label is None:
        return ""
    return str(raw_label).strip().lower()


def normalize_label(raw_label: object, modality: Modality) -> CanonicalMood:
    """
    Fold a raw model label onto the canonical mood set.

    Case-insensitive and total: anything absent from the modality's table,
    including ``None`` and non-strings, resolves to neutral.
    """
    return _TABLES[modality].get(_label_key(raw_label), CanonicalMood.NEUTRAL)


def parse_canonical(raw_label: object) -> CanonicalMood:
    """Accept a label only if it already is a canonical mood, else neutral."""
    try:
        return CanonicalMood(_label_key(raw_label))
    except ValueError:
        return CanonicalMood.NEUTRAL


def emotion_color(emotion: object) -> str:
    """Display color for an emotion name; unknown names get the neutral color."""
    return EMOTION_COLORS[parse_canonical(emotion)]


class MoodVocabulary:
    """Namespace over the label tables."""

    canonical_moods = CANONICAL_MOODS

    @staticmethod
    def normalize(raw_label: object, modality: Modality) -> CanonicalMood:
        return normalize_label(raw_label, modality)

    @staticmethod
    def known_labels(modality: Modality) -> List[str]:
        return sorted(_TABLES[modality])
