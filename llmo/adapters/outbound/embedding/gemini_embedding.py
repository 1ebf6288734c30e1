"""Gemini embeddings over the Generative Language REST API."""

import logging

import requests

from ....core.domain.exceptions import EmbeddingUpstreamError
from ....core.ports.embedding_port import EmbeddingPort

logger = logging.getLogger(__name__)

API_BASE_URL = "https://generativelanguage.googleapis.com/v1beta"
REQUEST_TIMEOUT = 30


class GeminiEmbedding(EmbeddingPort):
    """Embedding backend calling ``models/<model>:embedContent``."""

    name = "gemini"

    def __init__(
        self,
        api_key: str,
        model_name: str = "gemini-embedding-001",
        timeout: float = REQUEST_TIMEOUT,
    ) -> None:
        self.api_key = api_key
        self.model_name = model_name if model_name.startswith("models/") else f"models/{model_name}"
        self.timeout = timeout

    @property
    def is_configured(self) -> bool:
        return bool(self.api_key)

    def embed(self, text: str) -> list[float]:
        """Embed one text.

        Raises:
            EmbeddingUpstreamError: Non-200 response or no embedding in the body.
        """
        api_url = f"{API_BASE_URL}/{self.model_name}:embedContent"
        headers = {"x-goog-api-key": self.api_key}
        payload = {
            "model": self.model_name,
            "content": {"parts": [{"text": text}]},
        }

        response = requests.post(api_url, json=payload, headers=headers, timeout=self.timeout)
        if response.status_code != 200:
            raise EmbeddingUpstreamError(
                f"Gemini embedContent returned HTTP {response.status_code}",
                context={"status": response.status_code, "body": response.text[:200]},
            )

        values = response.json().get("embedding", {}).get("values")
        if not values:
            raise EmbeddingUpstreamError("Gemini embedContent response has no embedding values")
        return values
