"""OpenAI embeddings through the ``openai`` SDK."""

import logging
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from openai import OpenAI

from ....core.ports.embedding_port import EmbeddingPort

logger = logging.getLogger(__name__)


class OpenAIEmbedding(EmbeddingPort):
    """Embedding backend calling ``client.embeddings.create``."""

    name = "openai"

    def __init__(self, api_key: str, model_name: str = "text-embedding-3-small") -> None:
        self.api_key = api_key
        self.model_name = model_name
        self._client = None

    def _get_client(self) -> "OpenAI":
        """Lazy load the OpenAI client."""
        if self._client is None:
            from openai import OpenAI

            self._client = OpenAI(api_key=self.api_key)
        return self._client

    @property
    def is_configured(self) -> bool:
        return bool(self.api_key)

    def embed(self, text: str) -> list[float]:
        response = self._get_client().embeddings.create(input=text, model=self.model_name)
        return list(response.data[0].embedding)
