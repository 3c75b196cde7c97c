"""Cosine similarity between embedding vectors."""

from collections.abc import Sequence

import numpy as np

from ..errors import DegenerateVectorError, DimensionMismatchError


def cosine_similarity(
    a: np.ndarray | Sequence[float], b: np.ndarray | Sequence[float]
) -> float:
    """Calculate cosine similarity between two vectors.

    Each vector is first divided by its largest absolute component, so
    very large or very small magnitudes neither overflow nor underflow.
    The result is ``dot(a, b) / sqrt(dot(a, a) * dot(b, b))`` on the
    rescaled vectors, which makes a vector compared with itself score
    exactly 1.0.

    Args:
        a: First vector
        b: Second vector, same length as ``a``

    Returns:
        Similarity in [-1.0, 1.0] (1.0 = same direction)

    Raises:
        ValueError: If either input is not a 1-D vector
        DimensionMismatchError: If the vectors differ in length
        DegenerateVectorError: If either vector has zero norm or non-finite values
    """
    a = np.asarray(a, dtype=np.float64)
    b = np.asarray(b, dtype=np.float64)

    if a.ndim != 1 or b.ndim != 1:
        raise ValueError(
            f"cosine_similarity expects 1-D vectors, got shapes {a.shape} and {b.shape}"
        )
    if a.shape[0] != b.shape[0]:
        raise DimensionMismatchError(a.shape[0], b.shape[0])

    if not (np.all(np.isfinite(a)) and np.all(np.isfinite(b))):
        raise DegenerateVectorError(
            "Cosine similarity is undefined for vectors with non-finite values"
        )

    scale_a = float(np.max(np.abs(a))) if a.size else 0.0
    scale_b = float(np.max(np.abs(b))) if b.size else 0.0
    if scale_a == 0.0 or scale_b == 0.0:
        raise DegenerateVectorError(
            "Cosine similarity is undefined for a zero-norm vector"
        )

    # Largest component becomes 1.0, so dot(a, a) lies in [1, len(a)]
    a = a / scale_a
    b = b / scale_b
    similarity = float(np.dot(a, b)) / float(
        np.sqrt(float(np.dot(a, a)) * float(np.dot(b, b)))
    )

    # Clamp to valid range to handle floating point precision
    return max(-1.0, min(1.0, similarity))
