"""Model Backend Port Interface."""

from abc import ABC, abstractmethod


class ModelBackend(ABC):
    """A named language-model candidate used by the analysis engine."""

    name: str

    @abstractmethod
    def invoke(self, prompt: str) -> str:
        """Send a prompt and return the raw response text."""
        ...
