"""
Mood Catalog

Display metadata per mood, mood -> seed genres, and a small curated set of
songs used when no catalog lookup is available.
"""

from types import MappingProxyType
from typing import List, Mapping, Tuple

from ..models.mood_models import CanonicalMood, CuratedSong, MoodProfile
from .mood_vocabulary import EMOTION_COLORS, parse_canonical

_DESCRIPTIONS: Mapping[CanonicalMood, str] = MappingProxyType({
    CanonicalMood.HAPPY: "Joyful and upbeat emotions",
    CanonicalMood.SAD: "Melancholic and sorrowful feelings",
    CanonicalMood.ANGRY: "Intense and aggressive emotions",
    CanonicalMood.ENERGETIC: "High-energy and dynamic feelings",
    CanonicalMood.CALM: "Peaceful and tranquil emotions",
    CanonicalMood.ANXIOUS: "Worried and nervous feelings",
    CanonicalMood.NEUTRAL: "Balanced and neutral emotions",
})

MOOD_GENRES: Mapping[CanonicalMood, Tuple[str, ...]] = MappingProxyType({
    CanonicalMood.HAPPY: ("pop", "dance", "electronic", "upbeat"),
    CanonicalMood.SAD: ("indie", "acoustic", "soul", "ballad"),
    CanonicalMood.ENERGETIC: ("rock", "metal", "hip-hop", "electronic"),
    CanonicalMood.ANGRY: ("metal", "punk", "grunge", "hard rock"),
    CanonicalMood.CALM: ("ambient", "classical", "chill", "acoustic"),
    CanonicalMood.ANXIOUS: ("ambient", "chill", "meditation", "soft rock"),
})

DEFAULT_GENRES = ("pop",)


def _song(title, artist, mood, genre, reason) -> CuratedSong:
    return CuratedSong(title=title, artist=artist, mood=mood, genre=genre, reason=reason)


_H, _S, _A = CanonicalMood.HAPPY, CanonicalMood.SAD, CanonicalMood.ANGRY
_E, _C = CanonicalMood.ENERGETIC, CanonicalMood.CALM

CURATED_SONGS: Mapping[CanonicalMood, Tuple[CuratedSong, ...]] = MappingProxyType({
    CanonicalMood.HAPPY: (
        _song("Happy", "Pharrell Williams", _H, "pop",
              "Perfect upbeat anthem to match your positive lyrics"),
        _song("Can't Stop the Feeling", "Justin Timberlake", _H, "pop",
              "Energetic pop song that radiates joy and positivity"),
        _song("Good Vibrations", "The Beach Boys", _H, "pop",
              "Classic feel-good song with uplifting harmonies"),
    ),
    CanonicalMood.SAD: (
        _song("Someone Like You", "Adele", _S, "soul",
              "Emotional ballad that captures the depth of sadness"),
        _song("Fix You", "Coldplay", _S, "rock",
              "Comforting song that provides solace in difficult times"),
        _song("Mad World", "Gary Jules", _S, "indie",
              "Melancholic masterpiece that resonates with sorrow"),
    ),
    CanonicalMood.ENERGETIC: (
        _song("Eye of the Tiger", "Survivor", _E, "rock",
              "High-energy anthem that matches your powerful lyrics"),
        _song("Thunderstruck", "AC/DC", _E, "rock",
              "Electrifying rock song with intense energy"),
        _song("Stronger", "Kanye West", _E, "hip-hop",
              "Empowering hip-hop track that builds momentum"),
    ),
    CanonicalMood.ANGRY: (
        _song("Killing in the Name", "Rage Against the Machine", _A, "metal",
              "Intense protest song that channels raw anger"),
        _song("Break Stuff", "Limp Bizkit", _A, "metal",
              "Aggressive nu-metal track that expresses frustration"),
        _song("Smells Like Teen Spirit", "Nirvana", _A, "grunge",
              "Grunge anthem that captures rebellious energy"),
    ),
    CanonicalMood.CALM: (
        _song("Weightless", "Marconi Union", _C, "ambient",
              "Scientifically designed to reduce anxiety and stress"),
        _song("Clair de Lune", "Claude Debussy", _C, "classical",
              "Peaceful classical piece that soothes the soul"),
        _song("Pure Shores", "All Saints", _C, "pop",
              "Dreamy pop song with tranquil vibes"),
    ),
    # anxious listeners are steered towards calming music
    CanonicalMood.ANXIOUS: (
        _song("Breathe", "Pink Floyd", _C, "progressive rock",
              "Meditative song that helps with anxiety and breathing"),
        _song("Weightless", "Marconi Union", _C, "ambient",
              "The most relaxing song ever recorded, perfect for anxiety"),
        _song("Mad World", "Gary Jules", _S, "indie",
              "Gentle melody that acknowledges anxious feelings"),
    ),
})


def describe_moods() -> List[MoodProfile]:
    """Every canonical mood with its display color and description."""
    return [
        MoodProfile(name=mood, color=EMOTION_COLORS[mood], description=_DESCRIPTIONS[mood])
        for mood in CanonicalMood
    ]


def genres_for_mood(mood: object) -> List[str]:
    """Seed genres for a mood; unknown and neutral moods get pop."""
    return list(MOOD_GENRES.get(parse_canonical(mood), DEFAULT_GENRES))


def curated_recommendations(mood: object, limit: int = 6) -> List[CuratedSong]:
    """Curated songs for a mood; moods without a list fall back to happy."""
    songs = CURATED_SONGS.get(parse_canonical(mood), CURATED_SONGS[CanonicalMood.HAPPY])
    return list(songs[:max(0, limit)])
