"""Embedding backends."""

from .gemini_embedding import GeminiEmbedding
from .openai_embedding import OpenAIEmbedding

__all__ = ["GeminiEmbedding", "OpenAIEmbedding"]
