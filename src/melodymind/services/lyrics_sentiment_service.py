"""
Lyrics Sentiment Service

Lyrics -> SentimentAnalysis through a hosted LLM, then a hosted sentiment
classifier, then the local lexicon engine. Any tier that answers neutral is
skipped in favor of the next one.
"""

from typing import List, Optional

import structlog
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from ..api.huggingface_client import HuggingFaceClient, top_prediction
from ..api.openrouter_client import OpenRouterClient
from ..errors import InvalidInputError, ResponseParseError
from ..models.config_models import EngineConfig
from ..models.mood_models import (
    CanonicalMood,
    EmotionShare,
    InferenceSource,
    LyricsAnalysisResult,
    SentimentAnalysis,
)
from ..utils.json_utils import parse_json_object
from .inference_tiers import clamp_confidence, clamp_intensity
from .lexicon_sentiment_engine import LexiconSentimentEngine
from .mood_catalog import curated_recommendations
from .mood_vocabulary import emotion_color, parse_canonical
from .tiered_inference import InferenceTier, TieredInferenceProtocol

logger = structlog.get_logger(__name__)

DEFAULT_LLM_CONFIDENCE = 0.7
DEFAULT_LLM_INTENSITY = 5
DEFAULT_EMOTION_SCORE = 0.5
CLASSIFIER_INPUT_LIMIT = 500

SENTIMENT_PROMPT = """Analyze the emotional sentiment of these song lyrics and provide a detailed analysis.

Lyrics:
"{lyrics}"

Please respond with a JSON object containing:
{{
  "overallMood": "one of: happy, sad, angry, energetic, calm, anxious, neutral",
  "confidence": "number between 0 and 1",
  "intensity": "number between 1 and 10",
  "emotions": [
    {{"emotion": "emotion_name", "score": 0.0-1.0, "color": "#hexcolor"}},
    {{"emotion": "emotion_name", "score": 0.0-1.0, "color": "#hexcolor"}}
  ],
  "reasoning": "brief explanation of your analysis"
}}

Focus on the emotional content, themes, and mood conveyed by the lyrics. Consider:
- Direct emotional words and phrases
- Metaphorical language and imagery
- Overall tone and atmosphere
- Context and implied emotions

Respond only with the JSON object, no additional text."""

# Three-way sentiment classifiers report either LABEL_n or plain names.
SENTIMENT_LABELS = {
    "label_0": CanonicalMood.SAD,
    "negative": CanonicalMood.SAD,
    "label_1": CanonicalMood.NEUTRAL,
    "neutral": CanonicalMood.NEUTRAL,
    "label_2": CanonicalMood.HAPPY,
    "positive": CanonicalMood.HAPPY,
}


class LLMEmotion(BaseModel):
    emotion: Optional[str] = None
    score: Optional[float] = None
    color: Optional[str] = None


class LLMSentimentPayload(BaseModel):
    """JSON object the LLM is asked to produce."""
    model_config = ConfigDict(populate_by_name=True)

    overall_mood: Optional[str] = Field(None, alias="overallMood")
    confidence: Optional[float] = None
    intensity: Optional[float] = None
    emotions: Optional[List[LLMEmotion]] = None
    reasoning: Optional[str] = None


class LLMSentimentTier(InferenceTier[SentimentAnalysis]):
    """Ask a hosted LLM for a structured sentiment analysis."""

    name = "llm_sentiment"
    source = InferenceSource.REMOTE_LLM

    def __init__(self, client: OpenRouterClient):
        self.client = client

    async def attempt(self, payload: str) -> SentimentAnalysis:
        content = await self.client.complete(SENTIMENT_PROMPT.format(lyrics=payload))

        try:
            analysis = LLMSentimentPayload.model_validate(parse_json_object(content))
        except (ValueError, ValidationError) as e:
            # json.JSONDecodeError is a ValueError
            raise ResponseParseError(f"Invalid JSON response from LLM: {e}")

        overall_mood = parse_canonical(analysis.overall_mood)
        confidence = clamp_confidence(
            analysis.confidence if analysis.confidence is not None else DEFAULT_LLM_CONFIDENCE
        )
        intensity = clamp_intensity(
            analysis.intensity if analysis.intensity is not None else DEFAULT_LLM_INTENSITY
        )

        if analysis.emotions is not None:
            emotions = [self._emotion_share(emotion) for emotion in analysis.emotions]
        else:
            emotions = [EmotionShare(
                emotion=overall_mood.value,
                score=confidence,
                color=emotion_color(overall_mood)
            )]

        return SentimentAnalysis(
            overall_mood=overall_mood,
            confidence=confidence,
            intensity=intensity,
            emotions=emotions,
            source=self.source,
            reasoning=analysis.reasoning or "AI-powered analysis",
        )

    @staticmethod
    def _emotion_share(emotion: LLMEmotion) -> EmotionShare:
        name = emotion.emotion or CanonicalMood.NEUTRAL.value
        score = emotion.score if emotion.score is not None else DEFAULT_EMOTION_SCORE
        return EmotionShare(
            emotion=name,
            score=clamp_confidence(score),
            color=emotion.color or emotion_color(name)
        )


class HostedSentimentTier(InferenceTier[SentimentAnalysis]):
    """Three-way (negative / neutral / positive) hosted sentiment classifier."""

    name = "hf_sentiment"
    source = InferenceSource.REMOTE_CLASSIFIER

    def __init__(self, hf_client: HuggingFaceClient, model_id: str):
        self.hf_client = hf_client
        self.model_id = model_id

    async def attempt(self, payload: str) -> SentimentAnalysis:
        predictions = await self.hf_client.classify_text(
            payload[:CLASSIFIER_INPUT_LIMIT],
            self.model_id
        )

        top = top_prediction(predictions)
        confidence = clamp_confidence(top.score)

        emotions = []
        for prediction in predictions:
            mood = SENTIMENT_LABELS.get(prediction.label.strip().lower(), CanonicalMood.NEUTRAL)
            emotions.append(EmotionShare(
                emotion=mood.value,
                score=clamp_confidence(prediction.score),
                color=emotion_color(mood)
            ))
        emotions.sort(key=lambda share: share.score, reverse=True)

        return SentimentAnalysis(
            overall_mood=SENTIMENT_LABELS.get(top.label.strip().lower(), CanonicalMood.NEUTRAL),
            confidence=confidence,
            intensity=clamp_intensity(confidence * 10),
            emotions=emotions,
            source=self.source,
        )


class LexiconSentimentTier(InferenceTier[SentimentAnalysis]):
    """Local lexicon scoring; always answers."""

    name = "lexicon_sentiment"
    source = InferenceSource.LOCAL_HEURISTIC
    is_total = True

    def __init__(self, engine: LexiconSentimentEngine):
        self.engine = engine

    async def attempt(self, payload: str) -> SentimentAnalysis:
        return self.engine.score(payload)


class LyricsSentimentService:
    """Tiered sentiment analysis of song lyrics."""

    def __init__(
        self,
        config: EngineConfig,
        openrouter_client: Optional[OpenRouterClient] = None,
        hf_client: Optional[HuggingFaceClient] = None,
        engine: Optional[LexiconSentimentEngine] = None
    ):
        self.logger = logger.bind(service="LyricsSentimentService")
        self.engine = engine or LexiconSentimentEngine()

        tiers = []
        if openrouter_client is not None:
            tiers.append(LLMSentimentTier(openrouter_client))
        if hf_client is not None:
            tiers.append(HostedSentimentTier(hf_client, config.hf_sentiment_model_id))
        tiers.append(LexiconSentimentTier(self.engine))

        self.protocol = TieredInferenceProtocol(
            tiers,
            name="lyrics_sentiment",
            timeout=config.request_timeout
        )
        self.logger.info("Lyrics sentiment service initialized", tiers=self.protocol.tier_names)

    async def analyze_lyrics_sentiment(self, lyrics: Optional[str]) -> SentimentAnalysis:
        """
        Analyze the sentiment of ``lyrics``.

        Remote failures and neutral remote verdicts fall through to the next
        tier; the lexicon engine always produces a result.
        """
        lyrics = lyrics or ""
        self.logger.debug("Analyzing lyrics sentiment", preview=lyrics[:100])
        return await self.protocol.run(lyrics)


class LyricsAnalysisService:
    """Lyrics sentiment plus mood-matched curated recommendations."""

    def __init__(
        self,
        sentiment_service: LyricsSentimentService,
        max_lyrics_length: int = 10_000,
        recommendation_limit: int = 6
    ):
        self.logger = logger.bind(service="LyricsAnalysisService")
        self.sentiment_service = sentiment_service
        self.max_lyrics_length = max_lyrics_length
        self.recommendation_limit = recommendation_limit

    def validate(self, lyrics: object) -> str:
        """Reject anything that is not non-empty text within the length limit."""
        if not isinstance(lyrics, str) or not lyrics.strip():
            raise InvalidInputError("Lyrics text is required")
        if len(lyrics) > self.max_lyrics_length:
            raise InvalidInputError(
                f"Lyrics too long (max {self.max_lyrics_length} characters)"
            )
        return lyrics

    async def analyze(self, lyrics: object) -> LyricsAnalysisResult:
        """
        Analyze lyrics and attach recommendations for the detected mood.

        Raises:
            InvalidInputError: If the lyrics are missing, blank or too long
        """
        lyrics = self.validate(lyrics)
        analysis = await self.sentiment_service.analyze_lyrics_sentiment(lyrics)
        recommendations = curated_recommendations(
            analysis.overall_mood,
            self.recommendation_limit
        )

        self.logger.info(
            "Lyrics analyzed",
            mood=analysis.overall_mood.value,
            source=analysis.source.value,
            recommendations=len(recommendations)
        )

        return LyricsAnalysisResult(
            overall_mood=analysis.overall_mood,
            confidence=analysis.confidence,
            intensity=analysis.intensity,
            emotions=analysis.emotions,
            lyrics=lyrics,
            recommendations=recommendations,
            source=analysis.source,
        )
