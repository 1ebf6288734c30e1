"""Cosine similarity between embedding vectors."""

from collections.abc import Sequence

import numpy as np

from ..domain import SimilarityScore, to_percentage
from ..domain.exceptions import DimensionMismatchError

__all__ = ["SimilarityScorer", "cosine_similarity", "to_percentage"]


def cosine_similarity(a: Sequence[float], b: Sequence[float]) -> float:
    """Cosine of the angle between two vectors.

    Args:
        a: First vector.
        b: Second vector, same length as ``a``.

    Returns:
        Similarity in [-1, 1]; exactly 0.0 when either vector has zero magnitude.

    Raises:
        DimensionMismatchError: If the vectors differ in length.
    """
    if len(a) != len(b):
        raise DimensionMismatchError(
            "Vectors must have the same length",
            context={"len_a": len(a), "len_b": len(b)},
        )

    va = np.asarray(a, dtype=np.float64)
    vb = np.asarray(b, dtype=np.float64)

    magnitude = float(np.linalg.norm(va) * np.linalg.norm(vb))
    if magnitude == 0.0:
        return 0.0

    # Rounding can push parallel vectors a hair past 1
    return float(np.clip(np.dot(va, vb) / magnitude, -1.0, 1.0))


class SimilarityScorer:
    """Score content against a query embedding."""

    def score(
        self, content_vector: Sequence[float], query_vector: Sequence[float]
    ) -> SimilarityScore:
        return SimilarityScore(score=cosine_similarity(content_vector, query_vector))
