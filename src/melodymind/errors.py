"""
Error types for the mood inference engine.

Every ``TierFailure`` is swallowed by the tiered inference protocol and turns
into a fallthrough to the next tier.
"""

from typing import Optional


class TierFailure(Exception):
    """An inference tier could not produce a usable result."""


class TierNotConfigured(TierFailure):
    """A tier is missing its credentials or model configuration."""


class RemoteTierError(TierFailure):
    """Network error or non-success HTTP status from a remote model."""

    def __init__(self, message: str, status: Optional[int] = None):
        super().__init__(message)
        self.status = status


class RemoteTimeoutError(RemoteTierError):
    """A remote model call exceeded its timeout."""


class ResponseParseError(TierFailure):
    """A remote response body did not match the expected schema."""


class InvalidInputError(ValueError):
    """Request input rejected before any analysis runs."""
