"""
API Module

Clients for the hosted inference services used by the remote tiers.
"""

from .base_client import BaseAPIClient
from .client_factory import APIClientFactory
from .huggingface_client import HuggingFaceClient, LabelScore
from .openrouter_client import OpenRouterClient

__all__ = [
    "BaseAPIClient",
    "APIClientFactory",
    "HuggingFaceClient",
    "LabelScore",
    "OpenRouterClient",
]
