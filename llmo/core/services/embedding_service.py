"""Embedding with input truncation and error classification."""

import logging

from ..domain.exceptions import EmbeddingError, EmbeddingProviderError, EmbeddingUpstreamError
from ..ports.embedding_port import EmbeddingPort

logger = logging.getLogger(__name__)

MAX_EMBEDDING_CHARS = 8000


class EmbeddingService:
    """Embed text through the configured backend.

    Oversized input is truncated, never rejected. Failures are not retried
    here: only one embedding backend is active at a time.
    """

    def __init__(self, backend: EmbeddingPort, max_chars: int = MAX_EMBEDDING_CHARS) -> None:
        self.backend = backend
        self.max_chars = max_chars

    def embed(self, text: str) -> list[float]:
        """Embed one text.

        Args:
            text: Text to embed; cut to ``max_chars`` first.

        Returns:
            Embedding vector.

        Raises:
            EmbeddingProviderError: Backend has no credential/configuration.
            EmbeddingUpstreamError: Remote call failed or returned no vector.
        """
        if not self.backend.is_configured:
            raise EmbeddingProviderError(
                f"Embedding backend '{self.backend.name}' is not configured",
                context={"backend": self.backend.name},
            )

        if len(text) > self.max_chars:
            logger.debug("Truncating embedding input: %d -> %d chars", len(text), self.max_chars)
            text = text[: self.max_chars]

        try:
            vector = self.backend.embed(text)
        except EmbeddingError:
            raise
        except Exception as e:
            raise EmbeddingUpstreamError(
                f"Embedding request to '{self.backend.name}' failed",
                cause=e,
                context={"backend": self.backend.name},
            ) from e

        if not vector:
            raise EmbeddingUpstreamError(
                f"Embedding backend '{self.backend.name}' returned an empty vector",
                context={"backend": self.backend.name},
            )
        return vector
