"""Embedding Port Interface."""

from abc import ABC, abstractmethod


class EmbeddingPort(ABC):
    """Abstract interface for embedding backends."""

    name: str = "embedding"

    @property
    @abstractmethod
    def is_configured(self) -> bool:
        """Whether the backend has the credentials it needs."""
        ...

    @abstractmethod
    def embed(self, text: str) -> list[float]:
        """Embed one text into a fixed-length vector."""
        ...
