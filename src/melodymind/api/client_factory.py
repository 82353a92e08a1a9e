"""
API Client Factory

Builds the hosted model clients from the engine configuration. A missing
credential yields ``None`` so the matching tiers are left out of their chains.
"""

from typing import Optional

import structlog

from ..models.config_models import EngineConfig
from .huggingface_client import HuggingFaceClient
from .openrouter_client import OpenRouterClient

logger = structlog.get_logger(__name__)


class APIClientFactory:
    """Factory for creating configured API clients."""

    def __init__(self, config: EngineConfig):
        self.config = config
        self.logger = logger.bind(service="APIClientFactory")

    def create_huggingface_client(self) -> Optional[HuggingFaceClient]:
        """Hugging Face client, or None without ``HF_API_TOKEN``."""
        if not self.config.has_hf_token:
            self.logger.info("Hugging Face token not set, hosted classifiers disabled")
            return None

        client = HuggingFaceClient(
            api_key=self.config.hf_api_token,
            base_url=self.config.hf_base_url,
            timeout=self.config.request_timeout
        )
        self.logger.info("Hugging Face client created", timeout=self.config.request_timeout)
        return client

    def create_openrouter_client(self) -> Optional[OpenRouterClient]:
        """OpenRouter client, or None without ``OPENROUTER_API_KEY``."""
        if not self.config.llm_enabled:
            self.logger.info("OpenRouter key not set, LLM tier disabled")
            return None

        client = OpenRouterClient(
            api_key=self.config.openrouter_api_key,
            model=self.config.openrouter_model,
            base_url=self.config.openrouter_base_url,
            timeout=self.config.request_timeout
        )
        self.logger.info("OpenRouter client created", model=self.config.openrouter_model)
        return client
