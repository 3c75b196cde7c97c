"""Abstract base class for embedding providers.

This module defines the interface that all embedding providers must
implement, so the cache can treat local models and remote APIs alike.
"""

from abc import ABC, abstractmethod
from collections.abc import Sequence

import numpy as np


class EmbeddingProvider(ABC):
    """Abstract base class for embedding providers.

    A provider turns one string into one fixed-length vector. Calls may be
    slow or rate-limited; callers are expected to go through an
    EmbeddingCache rather than calling providers directly. For a given
    string, a provider's output is treated as deterministic.
    """

    #: Short identifier used in logs and the registry
    name: str = "base"

    @abstractmethod
    def embed(self, text: str) -> np.ndarray | Sequence[float]:
        """Convert text to an embedding vector.

        Args:
            text: The text to embed

        Returns:
            1-D vector of floats with the provider's fixed dimension

        Raises:
            ProviderError: If embedding generation fails
        """
        pass
