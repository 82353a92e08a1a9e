"""
Audio Adapter

Speech audio (and optional transcript) -> MoodEstimate. A hosted speech
emotion classifier when configured, the text adapter when the deployment
prefers transcripts, otherwise the local heuristic.
"""

import random
from typing import Optional

import structlog

from ..api.huggingface_client import HuggingFaceClient
from ..models.config_models import EngineConfig
from ..models.mood_models import Modality, MoodEstimate
from .inference_tiers import (
    HostedClassifierTier,
    LocalHeuristicTier,
    empty_input_estimate,
    heuristic_rng,
    mark_fallback,
)
from .text_adapter import TextAdapter
from .tiered_inference import TieredInferenceProtocol

logger = structlog.get_logger(__name__)


class AudioAdapter:
    """Analyze a captured speech sample."""

    def __init__(
        self,
        config: EngineConfig,
        text_adapter: TextAdapter,
        hf_client: Optional[HuggingFaceClient] = None,
        rng: Optional[random.Random] = None
    ):
        self.logger = logger.bind(service="AudioAdapter")
        self.text_adapter = text_adapter
        self.prefers_text = config.audio_prefers_text

        tiers = []
        if config.audio_remote_enabled and hf_client is not None:
            tiers.append(HostedClassifierTier(
                hf_client.classify_audio,
                config.hf_audio_model_id,
                Modality.SPEECH
            ))
        tiers.append(LocalHeuristicTier(
            rng or heuristic_rng(config.heuristic_seed, "audio"),
            Modality.SPEECH
        ))

        self.protocol = TieredInferenceProtocol(
            tiers,
            name="audio",
            timeout=config.request_timeout
        )
        self.logger.info(
            "Audio adapter initialized",
            tiers=self.protocol.tier_names,
            prefers_text=self.prefers_text
        )

    async def analyze(self, audio: Optional[bytes], transcript: Optional[str] = None) -> MoodEstimate:
        """
        Estimate the mood of a speech sample.

        A transcript goes straight to the text adapter when the deployment
        prefers text, or when there is no audio at all.

        Args:
            audio: Raw audio bytes (may be empty)
            transcript: Optional speech transcript

        Returns:
            MoodEstimate; never raises for remote failures
        """
        transcript = (transcript or "").strip()

        if transcript and (self.prefers_text or not audio):
            self.logger.debug("Analyzing transcript instead of audio", has_audio=bool(audio))
            return await self.text_adapter.analyze(transcript)

        if not audio:
            self.logger.warning("Empty audio payload without transcript")
            return empty_input_estimate(Modality.SPEECH)

        estimate = await self.protocol.run(audio)
        return mark_fallback(estimate, self.protocol)
