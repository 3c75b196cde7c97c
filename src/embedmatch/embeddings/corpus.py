"""Corpus construction: embed a batch of strings once per distinct value."""

import logging
from collections.abc import Sequence
from concurrent.futures import FIRST_EXCEPTION, ThreadPoolExecutor, wait

from .cache import EmbeddingCache
from .models import EmbeddedValue

logger = logging.getLogger(__name__)


def make_embedded(content: str, cache: EmbeddingCache) -> EmbeddedValue:
    """Embed ``content`` through ``cache`` and pair it with its vector.

    Args:
        content: String to embed
        cache: Embedding cache to resolve the vector through

    Returns:
        EmbeddedValue for content

    Raises:
        ProviderError: If the embedding could not be generated
    """
    return EmbeddedValue(content, cache.embed(content))


def build_corpus(
    strings: Sequence[str], cache: EmbeddingCache, max_workers: int = 1
) -> list[EmbeddedValue]:
    """Embed every string in ``strings``, preserving order and repeats.

    Each distinct string is embedded once. Every position holding a repeated
    string receives the value computed for its first occurrence, so a
    provider that is not deterministic still yields one embedding per string
    within a corpus.

    Args:
        strings: Ordered strings, duplicates allowed
        cache: Embedding cache to resolve vectors through
        max_workers: Upper bound on concurrent provider calls (1 = sequential)

    Returns:
        List of EmbeddedValue with the same length and order as ``strings``

    Raises:
        TypeError: If strings is a bare string or holds a non-string entry
        ValueError: If max_workers is less than 1
        ProviderError: If any distinct string fails to embed. Nothing is returned.
    """
    if isinstance(strings, str):
        raise TypeError("strings must be a sequence of strings, not a single string")
    if max_workers < 1:
        raise ValueError(f"max_workers must be at least 1, got {max_workers}")

    for position, item in enumerate(strings):
        if not isinstance(item, str):
            raise TypeError(
                f"Corpus entries must be strings, got {type(item).__name__} "
                f"at position {position}"
            )

    if not strings:
        return []

    # dict preserves first-occurrence order
    distinct = list(dict.fromkeys(strings))
    logger.debug(
        f"Building corpus of {len(strings)} strings ({len(distinct)} distinct)"
    )

    if max_workers == 1 or len(distinct) == 1:
        embedded = [make_embedded(content, cache) for content in distinct]
    else:
        embedded = _embed_concurrently(distinct, cache, max_workers)

    by_content = dict(zip(distinct, embedded))
    return [by_content[content] for content in strings]


def _embed_concurrently(
    distinct: list[str], cache: EmbeddingCache, max_workers: int
) -> list[EmbeddedValue]:
    """Embed distinct strings on a bounded thread pool.

    On the first failure, work that has not started is cancelled and the
    error is raised once running calls have finished.
    """
    workers = min(max_workers, len(distinct))
    with ThreadPoolExecutor(
        max_workers=workers, thread_name_prefix="embedmatch"
    ) as executor:
        futures = [
            executor.submit(make_embedded, content, cache) for content in distinct
        ]
        done, pending = wait(futures, return_when=FIRST_EXCEPTION)

        for future in pending:
            future.cancel()

        for future in futures:
            if future in done and future.exception() is not None:
                logger.debug(
                    f"Corpus build aborted, cancelled {len(pending)} pending embeddings"
                )
                raise future.exception()  # type: ignore[misc]

    return [future.result() for future in futures]
