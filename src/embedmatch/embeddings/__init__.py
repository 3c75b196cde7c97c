"""Embedding cache, embedded values and corpus construction."""

from .cache import CacheStats, EmbeddingCache
from .corpus import build_corpus, make_embedded
from .models import EmbeddedValue, Embedding

__all__ = [
    "CacheStats",
    "EmbeddedValue",
    "Embedding",
    "EmbeddingCache",
    "build_corpus",
    "make_embedded",
]
