"""Language-model backends for the analysis engine."""

from .gemini_backend import GeminiBackend
from .openai_backend import OpenAIBackend

__all__ = ["GeminiBackend", "OpenAIBackend"]
