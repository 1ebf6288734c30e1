"""Custom exception hierarchy for LLMO Checker.

All exceptions are re-exported here:

    from llmo.core.domain.exceptions import LLMOError, FetchError
"""

# Base classes
from .base import ExceptionContext, LLMOError

# Analysis exceptions
from .analysis import (
    AllBackendsFailedError,
    AnalysisError,
    AnalysisParseError,
    BackendInvocationError,
)

# Configuration exceptions
from .configuration import (
    ConfigurationError,
    InvalidConfigurationError,
    MissingAPIKeyError,
)

# Content exceptions
from .content import ContentError, InsufficientContentError

# Embedding exceptions
from .embedding import (
    EmbeddingError,
    EmbeddingProviderError,
    EmbeddingUpstreamError,
)

# Fetch exceptions
from .fetch import FetchError, FetchHTTPError, NonHTMLContentError

# Similarity exceptions
from .similarity import DimensionMismatchError, SimilarityError

# Storage exceptions
from .storage import StorageError

__all__ = [
    # Base
    "ExceptionContext",
    "LLMOError",
    # Configuration
    "ConfigurationError",
    "MissingAPIKeyError",
    "InvalidConfigurationError",
    # Fetch
    "FetchError",
    "FetchHTTPError",
    "NonHTMLContentError",
    # Content
    "ContentError",
    "InsufficientContentError",
    # Embedding
    "EmbeddingError",
    "EmbeddingProviderError",
    "EmbeddingUpstreamError",
    # Similarity
    "SimilarityError",
    "DimensionMismatchError",
    # Analysis
    "AnalysisError",
    "BackendInvocationError",
    "AnalysisParseError",
    "AllBackendsFailedError",
    # Storage
    "StorageError",
]
