"""
Emotion lexicon used by the local sentiment scorer.

Loaded once at import and read-only for the life of the process.
"""

from dataclasses import dataclass
from enum import Enum, IntEnum
from types import MappingProxyType
from typing import Mapping, Tuple

from ..models.mood_models import CanonicalMood


class Emotion(IntEnum):
    """The six scoreable emotions; values index fixed-size score arrays."""
    HAPPY = 0
    SAD = 1
    ANGRY = 2
    ENERGETIC = 3
    CALM = 4
    ANXIOUS = 5

    @property
    def mood(self) -> CanonicalMood:
        return CanonicalMood[self.name]


class LexiconCategory(Enum):
    """Word-list categories and their score multipliers."""
    DIRECT = 2.0
    ACTIONS = 1.8
    CONCEPTS = 1.5
    INTENSIFIERS = 1.2

    @property
    def multiplier(self) -> float:
        return self.value


@dataclass(frozen=True)
class EmotionLexicon:
    """Word stems for one emotion plus its base weight."""
    direct: Tuple[str, ...]
    actions: Tuple[str, ...]
    concepts: Tuple[str, ...]
    intensifiers: Tuple[str, ...]
    weight: float

    def stems(self, category: LexiconCategory) -> Tuple[str, ...]:
        return getattr(self, category.name.lower())

    def negatable(self, word: str) -> bool:
        """Exact membership in the direct or concept lists."""
        return word in self.direct or word in self.concepts


NEGATIONS = frozenset({"not", "no", "never", "dont", "wont", "cant"})

LEXICON: Mapping[Emotion, EmotionLexicon] = MappingProxyType({
    Emotion.HAPPY: EmotionLexicon(
        direct=("happy", "joy", "joyful", "glad", "cheerful", "blissful",
                "ecstatic", "elated", "euphoric"),
        actions=("smile", "laugh", "dance", "sing", "celebrate", "party",
                 "cheer", "rejoice"),
        concepts=("love", "heart", "beautiful", "wonderful", "amazing",
                  "fantastic", "great", "magical", "dreams", "hope", "freedom",
                  "victory", "success", "bright", "sunshine", "light", "golden",
                  "rainbow", "stars"),
        intensifiers=("yes", "yeah", "alright", "awesome", "brilliant",
                      "perfect", "incredible"),
        weight=1.0,
    ),
    Emotion.SAD: EmotionLexicon(
        direct=("sad", "sorrowful", "melancholy", "depressed", "blue", "down",
                "low", "miserable", "heartbroken", "devastated"),
        actions=("cry", "weep", "mourn", "grieve", "sob", "sigh"),
        concepts=("pain", "hurt", "broken", "lonely", "empty", "dark", "night",
                  "rain", "storm", "clouds", "grey", "cold", "alone", "miss",
                  "gone", "lost", "death", "die", "goodbye", "farewell", "grief",
                  "burden", "heavy"),
        intensifiers=("so", "very", "too", "deeply", "terribly", "horribly"),
        weight=1.2,
    ),
    Emotion.ANGRY: EmotionLexicon(
        direct=("angry", "mad", "furious", "rage", "livid", "enraged", "irate",
                "incensed"),
        actions=("fight", "scream", "shout", "yell", "explode", "rage",
                 "attack"),
        concepts=("hate", "kill", "destroy", "break", "crash", "shatter",
                  "violence", "blood", "hell", "devil", "evil", "wrong", "bad",
                  "sick", "disgusted", "outraged"),
        intensifiers=("fucking", "damn", "hell", "pissed", "fuming"),
        weight=1.3,
    ),
    Emotion.ENERGETIC: EmotionLexicon(
        direct=("energetic", "powerful", "dynamic", "vibrant", "lively",
                "bouncy", "peppy", "intense"),
        actions=("run", "jump", "dance", "move", "rock", "pump", "explode",
                 "burst"),
        concepts=("energy", "power", "strong", "fast", "quick", "speed", "beat",
                  "rhythm", "fire", "wild", "crazy", "loud", "boom", "bang",
                  "explosive"),
        intensifiers=("so", "really", "super", "mega", "ultra"),
        weight=1.1,
    ),
    Emotion.CALM: EmotionLexicon(
        direct=("calm", "peaceful", "serene", "tranquil", "relaxed", "content",
                "zen"),
        actions=("breathe", "rest", "sleep", "meditate", "float", "drift"),
        concepts=("peace", "quiet", "soft", "gentle", "slow", "easy", "chill",
                  "still", "silence", "whisper", "breeze", "flow", "smooth",
                  "mellow", "soothing", "comfort", "warm", "cozy", "safe",
                  "secure"),
        intensifiers=("so", "very", "deeply", "completely"),
        weight=0.9,
    ),
    Emotion.ANXIOUS: EmotionLexicon(
        direct=("anxious", "worried", "nervous", "scared", "afraid", "fearful",
                "panic", "stressed", "troubled"),
        actions=("worry", "fret", "panic", "tremble", "shake", "hide"),
        concepts=("fear", "tension", "pressure", "overwhelmed", "uneasy",
                  "restless", "apprehensive", "concerned", "distressed",
                  "uncertain", "confused", "lost", "trapped", "stuck", "doubt"),
        intensifiers=("so", "very", "terribly", "extremely", "completely"),
        weight=1.1,
    ),
})
