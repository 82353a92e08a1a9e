"""
Lexicon Sentiment Engine

Deterministic, dependency-free sentiment scorer and the final tier of the
lyrics sentiment chain. It weights lexicon matches by category and emotion,
discounts negated words, normalizes by text length and derives the dominant
mood, a confidence, an intensity and a ranked emotion breakdown.

The arithmetic below is order-sensitive; fixtures depend on it being
reproduced exactly.
"""

import math
import re
from typing import List, Optional, Sequence

import structlog

from ..models.mood_models import CanonicalMood, EmotionShare, InferenceSource, SentimentAnalysis
from .lexicon import LEXICON, NEGATIONS, Emotion, LexiconCategory
from .mood_vocabulary import EMOTION_COLORS

logger = structlog.get_logger(__name__)

_NON_WORD = re.compile(r"[^\w\s]", re.ASCII)

MIN_TOKEN_LENGTH = 3
NEGATION_PENALTY = 0.5
DOMINANCE_THRESHOLD = 0.05
BREAKDOWN_THRESHOLD = 0.05
BREAKDOWN_SIZE = 4


def _round_half_up(value: float) -> int:
    return math.floor(value + 0.5)


def tokenize(text: Optional[str]) -> List[str]:
    """Lowercase, replace non-word characters with spaces, drop short tokens."""
    cleaned = _NON_WORD.sub(" ", (text or "").lower())
    return [word for word in cleaned.split() if len(word) >= MIN_TOKEN_LENGTH]


class LexiconSentimentEngine:
    """
    Weighted multi-category lexicon scorer.

    Pure: the same text always yields an identical result.
    """

    def __init__(self, lexicon=LEXICON):
        self.lexicon = lexicon
        self.logger = logger.bind(service="LexiconSentimentEngine")

    def score(self, text: Optional[str]) -> SentimentAnalysis:
        """
        Score a text against the emotion lexicon.

        Args:
            text: Any string, including empty or very long ones

        Returns:
            SentimentAnalysis with source ``local_heuristic``
        """
        tokens = tokenize(text)
        total_words = len(tokens)

        raw_scores, word_counts = self._accumulate(tokens)
        self._apply_negations(tokens, raw_scores)
        raw_scores = [max(0.0, score) for score in raw_scores]

        scores = [
            self._normalize(raw_scores[emotion], word_counts[emotion], total_words)
            for emotion in Emotion
        ]

        ranked = sorted(Emotion, key=lambda emotion: scores[emotion], reverse=True)
        top_score = scores[ranked[0]]
        second_score = scores[ranked[1]]

        overall_mood = ranked[0].mood if top_score > DOMINANCE_THRESHOLD else CanonicalMood.NEUTRAL

        if top_score > 0:
            dominance = top_score - second_score
            confidence = min(0.95, max(0.6, top_score + dominance * 0.3))
        else:
            confidence = 0.5

        intensity = min(10, max(1, _round_half_up(sum(scores) * 8 + 2)))

        analysis = SentimentAnalysis(
            overall_mood=overall_mood,
            confidence=confidence,
            intensity=intensity,
            emotions=self._breakdown(scores),
            source=InferenceSource.LOCAL_HEURISTIC,
            scores={emotion.mood.value: scores[emotion] for emotion in Emotion},
            raw_scores={emotion.mood.value: raw_scores[emotion] for emotion in Emotion},
        )

        self.logger.debug(
            "Lexicon analysis complete",
            overall_mood=overall_mood.value,
            confidence=round(confidence, 3),
            intensity=intensity,
            token_count=total_words
        )

        return analysis

    def _accumulate(self, tokens: Sequence[str]):
        """Sum weighted substring matches per emotion, in lexicon order."""
        raw_scores = [0.0] * len(Emotion)
        word_counts = [0] * len(Emotion)

        for emotion in Emotion:
            entry = self.lexicon[emotion]
            for category in LexiconCategory:
                for stem in entry.stems(category):
                    matches = sum(1 for token in tokens if stem in token)
                    if matches > 0:
                        raw_scores[emotion] += matches * entry.weight * category.multiplier
                        word_counts[emotion] += matches

        return raw_scores, word_counts

    def _apply_negations(self, tokens: Sequence[str], raw_scores: List[float]):
        """Penalize the first emotion whose direct/concept list holds a negated word."""
        for current_word, next_word in zip(tokens, tokens[1:]):
            if current_word not in NEGATIONS:
                continue
            for emotion in Emotion:
                if self.lexicon[emotion].negatable(next_word):
                    raw_scores[emotion] -= NEGATION_PENALTY
                    break

    @staticmethod
    def _normalize(score: float, word_count: int, total_words: int) -> float:
        if word_count == 0:
            return 0.0

        frequency = word_count / total_words
        intensity_factor = min(1, frequency * 5)
        score = min(1, score / max(1, total_words * 0.02)) * intensity_factor

        if score > 0.1:
            score = min(1, score * 1.5)

        return float(score)

    @staticmethod
    def _breakdown(scores: Sequence[float]) -> List[EmotionShare]:
        """Top emotions by share of the total score."""
        total = sum(scores)
        shares = []
        for emotion in Emotion:
            share = scores[emotion] / total if total > 0 else 0.0
            if share > BREAKDOWN_THRESHOLD:
                shares.append(EmotionShare(
                    emotion=emotion.mood.value,
                    score=_round_half_up(share * 100) / 100,
                    color=EMOTION_COLORS[emotion.mood],
                ))

        shares.sort(key=lambda entry: entry.score, reverse=True)
        return shares[:BREAKDOWN_SIZE]
