"""
OpenRouter Chat Completions Client

Hosted LLM used as the first tier of lyrics sentiment analysis.
"""

from typing import Any, List, Optional

from pydantic import BaseModel, Field, ValidationError

from ..errors import ResponseParseError
from .base_client import BaseAPIClient


class ChatMessage(BaseModel):
    role: str = "assistant"
    content: Optional[str] = None


class ChatChoice(BaseModel):
    message: ChatMessage


class ChatCompletion(BaseModel):
    choices: List[ChatChoice] = Field(default_factory=list)


class OpenRouterClient(BaseAPIClient):
    """Client for the OpenAI-compatible ``/chat/completions`` endpoint."""

    def __init__(
        self,
        api_key: str,
        model: str,
        base_url: str = "https://openrouter.ai/api/v1",
        timeout: float = 10.0,
        referer: str = "http://localhost:8000",
        title: str = "MelodyMind Sentiment Analysis"
    ):
        super().__init__(
            base_url=base_url,
            api_key=api_key,
            timeout=timeout,
            service_name="openrouter"
        )
        self.model = model
        self.referer = referer
        self.title = title

    def _extract_api_error(self, data: Any) -> Optional[str]:
        if isinstance(data, dict) and data.get("error"):
            error = data["error"]
            if isinstance(error, dict):
                return str(error.get("message", "Unknown error"))
            return str(error)
        return None

    async def complete(
        self,
        prompt: str,
        max_tokens: int = 500,
        temperature: float = 0.3,
        top_p: float = 0.9
    ) -> str:
        """
        Send a single user message and return the reply text.

        Raises:
            ResponseParseError: If the reply has no content
        """
        data = await self._post(
            "chat/completions",
            json_body={
                "model": self.model,
                "messages": [{"role": "user", "content": prompt}],
                "max_tokens": max_tokens,
                "temperature": temperature,
                "top_p": top_p,
            },
            headers={
                "HTTP-Referer": self.referer,
                "X-Title": self.title,
            }
        )

        try:
            completion = ChatCompletion.model_validate(data)
        except ValidationError as e:
            raise ResponseParseError(f"Unexpected completion payload: {e}")

        if not completion.choices or not completion.choices[0].message.content:
            raise ResponseParseError("No response content from OpenRouter")

        return completion.choices[0].message.content
