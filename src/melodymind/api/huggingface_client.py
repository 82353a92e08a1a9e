"""
Hugging Face Inference API Client

Hosted classifiers (facial expression, speech emotion, text emotion and
sentiment) and sentence embeddings. Response bodies are validated here so
callers only ever see typed values.
"""

from typing import Any, List, Optional

from pydantic import BaseModel, TypeAdapter, ValidationError

from ..errors import ResponseParseError
from .base_client import BaseAPIClient


class LabelScore(BaseModel):
    """One class prediction."""
    label: str
    score: float


_LABEL_SCORES = TypeAdapter(List[LabelScore])
_VECTOR = TypeAdapter(List[float])


def top_prediction(predictions: List[LabelScore]) -> LabelScore:
    """Highest-scoring prediction; the first one wins ties."""
    best = predictions[0]
    for prediction in predictions[1:]:
        if prediction.score > best.score:
            best = prediction
    return best


class HuggingFaceClient(BaseAPIClient):
    """Client for ``{base_url}/{model_id}`` inference endpoints."""

    def __init__(
        self,
        api_key: str,
        base_url: str = "https://api-inference.huggingface.co/models",
        timeout: float = 10.0
    ):
        super().__init__(
            base_url=base_url,
            api_key=api_key,
            timeout=timeout,
            service_name="huggingface"
        )

    def _extract_api_error(self, data: Any) -> Optional[str]:
        if isinstance(data, dict) and "error" in data:
            return str(data["error"])
        return None

    async def classify_image(self, image: bytes, model_id: str) -> List[LabelScore]:
        """Run an image classifier over raw image bytes."""
        data = await self._post(model_id, data=image)
        return self._parse_label_scores(data, model_id)

    async def classify_audio(self, audio: bytes, model_id: str) -> List[LabelScore]:
        """Run an audio classifier over a raw audio buffer."""
        data = await self._post(model_id, data=audio)
        return self._parse_label_scores(data, model_id)

    async def classify_text(self, text: str, model_id: str) -> List[LabelScore]:
        """Run a text classifier."""
        data = await self._post(model_id, json_body={"inputs": text})
        return self._parse_label_scores(data, model_id)

    async def embed(self, text: str, model_id: str) -> List[float]:
        """Sentence embedding for ``text``; nested outputs use the first row."""
        data = await self._post(model_id, json_body={"inputs": text})
        if isinstance(data, list) and data and isinstance(data[0], list):
            data = data[0]

        try:
            vector = _VECTOR.validate_python(data)
        except ValidationError as e:
            raise ResponseParseError(f"Unexpected embedding payload from {model_id}: {e}")

        if not vector:
            raise ResponseParseError(f"Empty embedding from {model_id}")
        return vector

    def _parse_label_scores(self, data: Any, model_id: str) -> List[LabelScore]:
        """Accept ``[{label, score}]`` or the batched ``[[{label, score}]]`` shape."""
        if isinstance(data, list) and data and isinstance(data[0], list):
            data = data[0]

        try:
            predictions = _LABEL_SCORES.validate_python(data)
        except ValidationError as e:
            raise ResponseParseError(f"Unexpected classifier payload from {model_id}: {e}")

        if not predictions:
            raise ResponseParseError(f"No predictions from {model_id}")
        return predictions
