"""Embedding models and the embedded value type."""

from dataclasses import dataclass
from typing import TypeAlias

import numpy as np

# Type aliases for clarity
Embedding: TypeAlias = np.ndarray  # Shape: (dim,), dtype float64


@dataclass(frozen=True, eq=False)
class EmbeddedValue:
    """A string paired with its embedding.

    Instances are produced by the embedding cache and never mutated. The
    embedding array is read-only when it comes from the cache, and equality
    compares content and vector values rather than identity.

    Attributes:
        content: The original string, exactly as supplied
        embedding: Its embedding vector
    """

    content: str
    embedding: Embedding

    @property
    def dimension(self) -> int:
        """Length of the embedding vector."""
        return int(self.embedding.shape[0])

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, EmbeddedValue):
            return NotImplemented
        return self.content == other.content and np.array_equal(
            self.embedding, other.embedding
        )

    def __hash__(self) -> int:
        return hash(self.content)

    def __repr__(self) -> str:
        return f"EmbeddedValue({self.content!r})"
