"""High-level API for embedmatch library usage.

The module-level functions share one process-wide Matcher, and with it one
embedding cache, built from configuration on first use. Hosts that manage
their own provider can install a matcher with ``set_default_matcher``.
"""

import logging
import threading
from collections.abc import Sequence

from .config import EmbedmatchConfig, load_config
from .embeddings.cache import EmbeddingCache
from .embeddings.models import EmbeddedValue, Embedding
from .matching.engine import Matcher
from .matching.models import MatchCandidate
from .providers import EmbeddingProvider, ProviderRegistry

logger = logging.getLogger(__name__)

_default_matcher: Matcher | None = None
_default_lock = threading.Lock()


def create_provider(config: EmbedmatchConfig) -> EmbeddingProvider:
    """Build the embedding provider named in ``config``.

    Raises:
        KeyError: If the provider name is not registered
        ProviderAuthError: If the provider needs credentials that are missing
    """
    name = config.provider.name
    if name == "local":
        return ProviderRegistry.create(
            name, model_name=config.provider.model, device=config.provider.device
        )
    return ProviderRegistry.create(name, model=config.provider.model)


def get_default_matcher() -> Matcher:
    """Return the process-wide matcher, creating it from config on first use."""
    global _default_matcher
    with _default_lock:
        if _default_matcher is None:
            config = load_config()
            cache = EmbeddingCache(create_provider(config))
            _default_matcher = Matcher(cache, max_workers=config.matching.max_workers)
            logger.debug(
                f"Created default matcher with provider {config.provider.name} "
                f"({config.provider.model}), max_workers={config.matching.max_workers}"
            )
        return _default_matcher


def set_default_matcher(matcher: Matcher | None) -> None:
    """Replace the process-wide matcher (None resets to lazy creation)."""
    global _default_matcher
    with _default_lock:
        _default_matcher = matcher


def embed(content: str) -> Embedding:
    """Return the cached embedding of ``content``.

    Raises:
        ProviderError: If the embedding could not be generated
    """
    return get_default_matcher().cache.embed(content)


def build_corpus(strings: Sequence[str]) -> list[EmbeddedValue]:
    """Embed ``strings`` once per distinct value, preserving order and repeats.

    Raises:
        ProviderError: If any embedding could not be generated
    """
    return get_default_matcher().corpus(strings)


def all_matches(query: str, candidates: Sequence[str]) -> list[MatchCandidate]:
    """Score every candidate against ``query``, in input order.

    Raises:
        ProviderError: If any embedding could not be generated
    """
    return get_default_matcher().all_matches(query, candidates)


def best_match(query: str, candidates: Sequence[str]) -> MatchCandidate:
    """Return the candidate most similar to ``query``.

    Raises:
        EmptyCandidateSetError: If candidates is empty
        ProviderError: If any embedding could not be generated
    """
    return get_default_matcher().best_match(query, candidates)
