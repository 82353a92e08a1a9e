"""
Tiered Inference Protocol

Runs an ordered chain of inference strategies (hosted LLM, hosted classifier,
local heuristic) and always returns an answer. Every modality adapter, the
lyrics sentiment service and the recommendation embedding step are built on
this skeleton.
"""

import asyncio
import time
from abc import ABC, abstractmethod
from typing import Any, Generic, List, Optional, Sequence, TypeVar

import structlog

from ..errors import TierFailure
from ..models.mood_models import CanonicalMood, InferenceSource
from ..utils.logging_config import log_performance

logger = structlog.get_logger(__name__)

ResultT = TypeVar("ResultT")


class InferenceTier(ABC, Generic[ResultT]):
    """
    One strategy in a fallback chain.

    ``attempt`` either returns a result or raises ``TierFailure``. A total
    tier (``is_total = True``) never fails and may close a chain.
    """

    name: str = "tier"
    source: InferenceSource = InferenceSource.LOCAL_HEURISTIC
    is_total: bool = False

    @abstractmethod
    async def attempt(self, payload: Any) -> ResultT:
        """Produce a result for ``payload`` or raise ``TierFailure``."""

    def is_inconclusive(self, result: ResultT) -> bool:
        """A neutral verdict from a non-final tier means "try the next tier"."""
        return result.mood_label == CanonicalMood.NEUTRAL


class TieredInferenceProtocol(Generic[ResultT]):
    """
    Try tiers strictly in order and accept the first conclusive result.

    Non-final tiers run under a timeout and any exception they raise is
    logged and swallowed. The final tier must be total; its result is
    accepted unconditionally, so ``run`` always returns.
    """

    def __init__(
        self,
        tiers: Sequence[InferenceTier[ResultT]],
        name: str = "inference",
        timeout: Optional[float] = 10.0
    ):
        """
        Initialize the protocol.

        Args:
            tiers: Ordered tiers; the last one must be total
            name: Chain name for logging
            timeout: Per-tier timeout in seconds for non-final tiers

        Raises:
            ValueError: If the chain is empty or does not end in a total tier
        """
        if not tiers:
            raise ValueError(f"{name}: a tier chain needs at least one tier")
        if not tiers[-1].is_total:
            raise ValueError(
                f"{name}: final tier {tiers[-1].name!r} must be total"
            )

        self.tiers: List[InferenceTier[ResultT]] = list(tiers)
        self.name = name
        self.timeout = timeout
        self.logger = logger.bind(service="TieredInferenceProtocol", chain=name)

    @property
    def tier_names(self) -> List[str]:
        return [tier.name for tier in self.tiers]

    async def run(self, payload: Any) -> ResultT:
        """
        Run the chain for one input.

        Args:
            payload: Modality-specific input handed to every tier

        Returns:
            The first conclusive result, or the final tier's result
        """
        start_time = time.time()
        skipped: List[str] = []

        for tier in self.tiers[:-1]:
            result = await self._attempt_guarded(tier, payload)
            if result is None:
                skipped.append(tier.name)
                continue

            self._log_accepted(tier, start_time, skipped)
            return result

        final_tier = self.tiers[-1]
        result = await final_tier.attempt(payload)
        self._log_accepted(final_tier, start_time, skipped)
        return result

    async def _attempt_guarded(
        self,
        tier: InferenceTier[ResultT],
        payload: Any
    ) -> Optional[ResultT]:
        """Attempt a non-final tier, returning None on any failure or an inconclusive result."""
        try:
            if self.timeout is not None:
                result = await asyncio.wait_for(tier.attempt(payload), self.timeout)
            else:
                result = await tier.attempt(payload)

            if tier.is_inconclusive(result):
                self.logger.info("Tier inconclusive, falling through", tier=tier.name)
                return None
            return result

        except TierFailure as e:
            self.logger.warning(
                "Tier failed, falling through",
                tier=tier.name,
                error_type=type(e).__name__,
                error=str(e)
            )
        except asyncio.TimeoutError:
            self.logger.warning(
                "Tier timed out, falling through",
                tier=tier.name,
                timeout=self.timeout
            )
        except Exception as e:
            self.logger.error(
                "Unexpected tier error, falling through",
                tier=tier.name,
                error_type=type(e).__name__,
                error=str(e)
            )
        return None

    def _log_accepted(
        self,
        tier: InferenceTier[ResultT],
        start_time: float,
        skipped: List[str]
    ):
        duration = time.time() - start_time
        self.logger.info(
            "Tier result accepted",
            tier=tier.name,
            source=tier.source.value,
            skipped_tiers=skipped
        )
        log_performance(
            f"{self.name}.run",
            duration,
            tier=tier.name,
            skipped_tiers=len(skipped)
        )
