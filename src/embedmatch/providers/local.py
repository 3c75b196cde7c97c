"""Local embedding generation using sentence-transformers."""

import logging
import threading
from typing import TYPE_CHECKING

import numpy as np

from ..errors import ProviderError
from .base import EmbeddingProvider

if TYPE_CHECKING:
    from sentence_transformers import SentenceTransformer

logger = logging.getLogger(__name__)

DEFAULT_LOCAL_MODEL = "all-mpnet-base-v2"


class LocalEmbeddingProvider(EmbeddingProvider):
    """Generate embeddings on this machine with sentence-transformers.

    The model is loaded on first use, so constructing the provider is cheap
    and importing this module does not pull in torch. Concurrent first calls
    share a single load.
    """

    name = "local"

    def __init__(self, model_name: str = DEFAULT_LOCAL_MODEL, device: str = "auto"):
        """Initialize local provider with specified model.

        Args:
            model_name: Name of sentence-transformers model to use
            device: Compute device ("auto", "cpu", "cuda", "mps")
        """
        self.model_name = model_name
        self.device = device
        self._model: SentenceTransformer | None = None  # Lazy load the model
        self._load_lock = threading.Lock()

    @property
    def model(self) -> "SentenceTransformer":
        """Lazy-load the model only when actually needed.

        Raises:
            ProviderError: If the model fails to load
        """
        if self._model is None:
            with self._load_lock:
                if self._model is None:
                    self._model = self._load_model()
        return self._model

    def _load_model(self) -> "SentenceTransformer":
        # Import here to avoid loading at module import time
        from sentence_transformers import SentenceTransformer

        device = None if self.device == "auto" else self.device
        try:
            model = SentenceTransformer(self.model_name, device=device)
        except Exception as e:
            raise ProviderError(
                f"Failed to load embedding model {self.model_name}: {e}", e
            ) from e
        logger.debug(
            f"Loaded {self.model_name} "
            f"({model.get_sentence_embedding_dimension()} dimensions)"
        )
        return model

    def embed(self, text: str) -> np.ndarray:
        """Generate the embedding for one text.

        Args:
            text: Text string to embed

        Returns:
            Numpy array of shape (dim,)

        Raises:
            ProviderError: If the model fails to load or encode
        """
        model = self.model
        try:
            embedding = model.encode(text, convert_to_numpy=True)
        except Exception as e:
            raise ProviderError(f"Failed to encode text with {self.model_name}: {e}", e) from e

        return np.asarray(embedding).reshape(-1)
