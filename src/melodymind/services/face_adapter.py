"""
Face Adapter

Facial image -> MoodEstimate. A hosted facial-expression classifier when
configured, otherwise the local heuristic.
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
from .tiered_inference import TieredInferenceProtocol

logger = structlog.get_logger(__name__)


class FaceAdapter:
    """Analyze a captured facial image."""

    def __init__(
        self,
        config: EngineConfig,
        hf_client: Optional[HuggingFaceClient] = None,
        rng: Optional[random.Random] = None
    ):
        self.logger = logger.bind(service="FaceAdapter")

        tiers = []
        if config.face_remote_enabled and hf_client is not None:
            tiers.append(HostedClassifierTier(
                hf_client.classify_image,
                config.hf_image_model_id,
                Modality.FACE
            ))
        tiers.append(LocalHeuristicTier(
            rng or heuristic_rng(config.heuristic_seed, "face"),
            Modality.FACE
        ))

        self.protocol = TieredInferenceProtocol(
            tiers,
            name="face",
            timeout=config.request_timeout
        )
        self.logger.info("Face adapter initialized", tiers=self.protocol.tier_names)

    async def analyze(self, image: bytes) -> MoodEstimate:
        """
        Estimate the mood shown in an image.

        Args:
            image: Binary image payload

        Returns:
            MoodEstimate; never raises for remote failures
        """
        if not image:
            self.logger.warning("Empty image payload")
            return empty_input_estimate(Modality.FACE)

        estimate = await self.protocol.run(image)
        return mark_fallback(estimate, self.protocol)
