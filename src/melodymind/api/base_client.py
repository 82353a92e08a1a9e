"""
Base API Client

Unified HTTP request handling and error translation for the hosted model
clients. Every failure surfaces as a ``TierFailure`` subclass so the tiered
inference protocol can fall through to the next tier.
"""

import asyncio
import json
import time
from abc import ABC, abstractmethod
from typing import Any, Dict, Optional, Union

import aiohttp
import structlog

from ..errors import (
    RemoteTierError,
    RemoteTimeoutError,
    ResponseParseError,
    TierNotConfigured,
)
from ..utils.logging_config import log_api_request

logger = structlog.get_logger(__name__)


class BaseAPIClient(ABC):
    """
    Base HTTP client for hosted inference APIs.

    One attempt per call: a failed remote tier is abandoned, never retried
    within a request. Use as an async context manager to own the session.
    """

    def __init__(
        self,
        base_url: str,
        api_key: str,
        timeout: float = 10.0,
        service_name: str = "api"
    ):
        """
        Initialize base API client.

        Args:
            base_url: Base URL for the API
            api_key: Bearer token sent with every request
            timeout: Total request timeout in seconds
            service_name: Service name for logging and identification
        """
        self.base_url = base_url.rstrip('/')
        self.api_key = api_key
        self.timeout = timeout
        self.service_name = service_name
        self.session: Optional[aiohttp.ClientSession] = None

        self.logger = logger.bind(
            service=service_name,
            component="BaseAPIClient",
            base_url=self.base_url
        )

        self.logger.debug("Base API client initialized", timeout=timeout)

    async def __aenter__(self):
        """Async context manager entry."""
        self.session = aiohttp.ClientSession(
            timeout=aiohttp.ClientTimeout(total=self.timeout)
        )
        self.logger.debug("API client session started")
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        """Async context manager exit."""
        if self.session:
            await self.session.close()
            self.session = None
            self.logger.debug("API client session closed")

    def _default_headers(self) -> Dict[str, str]:
        return {
            "Authorization": f"Bearer {self.api_key}",
            "User-Agent": f"MelodyMind-{self.service_name}/1.0",
        }

    async def _post(
        self,
        endpoint: str,
        json_body: Optional[Dict[str, Any]] = None,
        data: Optional[bytes] = None,
        headers: Optional[Dict[str, str]] = None
    ) -> Any:
        """
        POST a JSON body or raw bytes and return the decoded JSON response.

        Args:
            endpoint: API endpoint (relative to base_url)
            json_body: JSON payload
            data: Raw binary payload (images, audio)
            headers: Additional headers

        Returns:
            Parsed JSON response data

        Raises:
            TierNotConfigured: No API key
            RemoteTierError: Client not initialized, network error or non-2xx status
            RemoteTimeoutError: Request exceeded the timeout
            ResponseParseError: Body is not valid JSON
        """
        if not self.api_key:
            raise TierNotConfigured(f"{self.service_name} API key not configured")

        if not self.session:
            raise RemoteTierError(
                f"{self.service_name} client not initialized. Use async context manager."
            )

        url = f"{self.base_url}/{endpoint.lstrip('/')}" if endpoint else self.base_url
        request_headers = self._default_headers()
        request_headers.update(headers or {})

        start_time = time.time()
        self.logger.debug(
            "Making API request",
            url=url,
            binary=data is not None,
            payload_size=len(data) if data is not None else None
        )

        try:
            async with self.session.post(
                url,
                json=json_body if data is None else None,
                data=data,
                headers=request_headers
            ) as response:
                duration = time.time() - start_time
                log_api_request("POST", url, response.status, duration, service=self.service_name)

                if response.status >= 400:
                    body = await response.text()
                    self.logger.warning(
                        f"{self.service_name} HTTP error",
                        status=response.status,
                        url=url,
                        body_preview=body[:200]
                    )
                    raise RemoteTierError(
                        f"{self.service_name} error {response.status}: {body[:200]}",
                        status=response.status
                    )

                result = await self._parse_response(response)

                error_info = self._extract_api_error(result)
                if error_info:
                    self.logger.warning(
                        "API error in response body",
                        error=error_info,
                        url=url
                    )
                    raise RemoteTierError(f"{self.service_name} API error: {error_info}")

                return result

        except asyncio.TimeoutError:
            self.logger.warning("Request timeout", url=url, timeout=self.timeout)
            raise RemoteTimeoutError(
                f"{self.service_name} request timed out after {self.timeout}s"
            )
        except aiohttp.ClientError as e:
            self.logger.warning(
                "HTTP client error",
                error=str(e),
                error_type=type(e).__name__,
                url=url
            )
            raise RemoteTierError(f"{self.service_name} client error: {e}")

    async def _parse_response(self, response: aiohttp.ClientResponse) -> Union[Dict[str, Any], list]:
        """Decode a JSON body regardless of the declared content type."""
        text = await response.text()
        try:
            return json.loads(text)
        except json.JSONDecodeError as e:
            self.logger.warning(f"{self.service_name} invalid JSON response", error=str(e))
            raise ResponseParseError(f"{self.service_name} returned invalid JSON")

    @abstractmethod
    def _extract_api_error(self, data: Any) -> Optional[str]:
        """
        Extract API-specific error information from response data.

        Args:
            data: Parsed response data

        Returns:
            Error message if found, None otherwise
        """

    def get_service_info(self) -> Dict[str, Any]:
        """Service configuration and status information."""
        return {
            "service_name": self.service_name,
            "base_url": self.base_url,
            "timeout": self.timeout,
            "session_active": self.session is not None,
        }
