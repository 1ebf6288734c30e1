"""Similarity exceptions for LLMO Checker."""

from .base import LLMOError


class SimilarityError(LLMOError):
    """Error while comparing embedding vectors."""

    error_code = "LLMO_SIM_001"


class DimensionMismatchError(SimilarityError):
    """Vectors of different lengths were compared.

    Both vectors come from the same configured provider, so this signals
    a broken invariant rather than bad input.
    """

    error_code = "LLMO_SIM_002"
