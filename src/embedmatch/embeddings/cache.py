"""Process-wide memoization of embedding provider calls.

The cache maps exact string content to its embedding vector. Entries are
only ever inserted, never replaced or evicted, so a vector handed out once
stays valid for the lifetime of the cache. Concurrent requests for the same
uncached string share a single provider call.
"""

import logging
import threading
from dataclasses import dataclass

import numpy as np

from ..errors import ProviderError
from ..providers.base import EmbeddingProvider
from .models import Embedding

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CacheStats:
    """Snapshot of cache counters.

    Attributes:
        size: Number of cached strings
        hits: Lookups answered from the cache (including single-flight waiters)
        misses: Lookups that had to call the provider
        provider_calls: Provider invocations, successful or not
    """

    size: int
    hits: int
    misses: int
    provider_calls: int


class _InFlight:
    """A provider call in progress that other threads can wait on."""

    def __init__(self) -> None:
        self.done = threading.Event()
        self.result: Embedding | None = None
        self.error: BaseException | None = None


class EmbeddingCache:
    """Memoizing front for an embedding provider.

    Example:
        cache = EmbeddingCache(OpenAIEmbeddingProvider())

        vec = cache.embed("apple")        # calls the provider
        same = cache.embed("apple")       # served from memory
        assert vec is same

    Keys are compared exactly: no whitespace stripping, case folding or
    unicode normalization. A failed provider call stores nothing, so the
    next request for the same string calls the provider again.
    """

    def __init__(self, provider: EmbeddingProvider):
        """Initialize an empty cache in front of ``provider``.

        Args:
            provider: Embedding provider used on cache misses
        """
        self.provider = provider
        self._entries: dict[str, Embedding] = {}
        self._in_flight: dict[str, _InFlight] = {}
        self._lock = threading.Lock()
        self._hits = 0
        self._misses = 0
        self._provider_calls = 0

    def embed(self, content: str) -> Embedding:
        """Return the embedding of ``content``, calling the provider at most once.

        Args:
            content: String to embed

        Returns:
            Read-only 1-D float64 array. Repeated calls return the same object.

        Raises:
            TypeError: If content is not a string
            ProviderError: If the provider fails or returns a malformed vector
        """
        if not isinstance(content, str):
            raise TypeError(
                f"content must be a string, got {type(content).__name__}"
            )

        with self._lock:
            cached = self._entries.get(content)
            if cached is not None:
                self._hits += 1
                return cached

            flight = self._in_flight.get(content)
            if flight is not None:
                self._hits += 1
                leader = False
            else:
                flight = _InFlight()
                self._in_flight[content] = flight
                self._misses += 1
                self._provider_calls += 1
                leader = True

        if not leader:
            logger.debug(f"Waiting on in-flight embedding for '{content[:50]}'")
            flight.done.wait()
            if flight.error is not None:
                raise flight.error
            assert flight.result is not None
            return flight.result

        try:
            vector = self._call_provider(content)
        except BaseException as e:
            flight.error = e
            with self._lock:
                del self._in_flight[content]
            flight.done.set()
            raise

        with self._lock:
            self._entries[content] = vector
            del self._in_flight[content]
        flight.result = vector
        flight.done.set()
        return vector

    def _call_provider(self, content: str) -> Embedding:
        """Invoke the provider and normalize its output."""
        logger.debug(
            f"Cache miss, requesting embedding from {self.provider.name} "
            f"for '{content[:50]}'"
        )
        try:
            raw = self.provider.embed(content)
        except ProviderError as e:
            logger.warning(f"Embedding provider {self.provider.name} failed: {e}")
            raise
        except Exception as e:
            logger.warning(f"Embedding provider {self.provider.name} failed: {e}")
            raise ProviderError(
                f"Embedding provider {self.provider.name} failed: {e}", e
            ) from e

        return _to_vector(raw, self.provider.name)

    def stats(self) -> CacheStats:
        """Return a snapshot of the cache counters."""
        with self._lock:
            return CacheStats(
                size=len(self._entries),
                hits=self._hits,
                misses=self._misses,
                provider_calls=self._provider_calls,
            )

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    def __contains__(self, content: object) -> bool:
        with self._lock:
            return content in self._entries


def _to_vector(raw: object, provider_name: str) -> Embedding:
    """Convert provider output into a read-only 1-D float64 array.

    Raises:
        ProviderError: If the output is not a non-empty finite 1-D vector
    """
    try:
        vector = np.array(raw, dtype=np.float64)
    except (TypeError, ValueError) as e:
        raise ProviderError(
            f"Provider {provider_name} returned a malformed embedding: {e}", e
        ) from e

    if vector.ndim != 1:
        raise ProviderError(
            f"Provider {provider_name} returned an embedding with shape "
            f"{vector.shape}, expected a 1-D vector"
        )
    if vector.size == 0:
        raise ProviderError(f"Provider {provider_name} returned an empty embedding")
    if not np.all(np.isfinite(vector)):
        raise ProviderError(
            f"Provider {provider_name} returned an embedding with non-finite values"
        )

    vector.setflags(write=False)
    return vector
