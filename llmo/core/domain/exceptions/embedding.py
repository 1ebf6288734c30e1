"""Embedding exceptions for LLMO Checker."""

from .base import LLMOError


class EmbeddingError(LLMOError):
    """Failed to generate embeddings."""

    error_code = "LLMO_EMB_001"
    user_message = "An error occurred while embedding the content. Please try again later."


class EmbeddingProviderError(EmbeddingError):
    """Embedding provider is missing its credential or configuration."""

    error_code = "LLMO_EMB_002"
    user_message = "The embedding service is not configured. Please check the API key."


class EmbeddingUpstreamError(EmbeddingError):
    """Embedding API call failed or returned no vector."""

    error_code = "LLMO_EMB_003"
    user_message = "The embedding service is temporarily unavailable. Please try again later."
