"""Match ranking engine.

Pairs an embedded query against an embedded candidate corpus and scores
every pair by cosine similarity. Comparison is exhaustive: every candidate
is scored on every call.
"""

import logging
from collections.abc import Sequence

from ..embeddings.cache import EmbeddingCache
from ..embeddings.corpus import build_corpus, make_embedded
from ..embeddings.models import EmbeddedValue
from ..errors import EmptyCandidateSetError
from .models import MatchCandidate

logger = logging.getLogger(__name__)


class Matcher:
    """Rank candidate strings by embedding similarity to a query.

    Example:
        matcher = Matcher(EmbeddingCache(LocalEmbeddingProvider()))

        best = matcher.best_match("fruit", ["apple", "bicycle", "banana"])
        print(best.candidate_content, best.score)

    The matcher holds no state of its own beyond the cache, so matchers
    sharing one cache share its embeddings.
    """

    def __init__(self, cache: EmbeddingCache, max_workers: int = 1):
        """Initialize matcher.

        Args:
            cache: Embedding cache used for queries and candidates
            max_workers: Concurrent provider calls allowed while building a corpus

        Raises:
            ValueError: If max_workers is less than 1
        """
        if max_workers < 1:
            raise ValueError(f"max_workers must be at least 1, got {max_workers}")
        self.cache = cache
        self.max_workers = max_workers

    def embed(self, content: str) -> EmbeddedValue:
        """Embed a single string through the cache."""
        return make_embedded(content, self.cache)

    def corpus(self, strings: Sequence[str]) -> list[EmbeddedValue]:
        """Embed a batch of strings, preserving order and repeats."""
        return build_corpus(strings, self.cache, max_workers=self.max_workers)

    def all_matches(
        self, query: str, candidates: Sequence[str]
    ) -> list[MatchCandidate]:
        """Score every candidate against ``query``.

        Args:
            query: String to match
            candidates: Strings to match against, duplicates allowed

        Returns:
            One MatchCandidate per candidate, in input order (unsorted)

        Raises:
            ProviderError: If any embedding could not be generated
        """
        query_value = self.embed(query)
        corpus = self.corpus(candidates)

        matches = [MatchCandidate.from_embedded(query_value, value) for value in corpus]
        logger.debug(f"Scored {len(matches)} candidates against '{query[:50]}'")
        return matches

    def ranked_matches(
        self, query: str, candidates: Sequence[str]
    ) -> list[MatchCandidate]:
        """Score every candidate and sort by descending score.

        The sort is stable, so candidates with equal scores keep their
        input order.
        """
        return sorted(
            self.all_matches(query, candidates),
            key=lambda match: match.score,
            reverse=True,
        )

    def best_match(self, query: str, candidates: Sequence[str]) -> MatchCandidate:
        """Return the highest-scoring candidate for ``query``.

        Ties go to the candidate that appears first in ``candidates``.

        Args:
            query: String to match
            candidates: Strings to match against

        Returns:
            The best MatchCandidate

        Raises:
            EmptyCandidateSetError: If candidates is empty
            ProviderError: If any embedding could not be generated
        """
        if isinstance(candidates, str):
            raise TypeError(
                "candidates must be a sequence of strings, not a single string"
            )
        if len(candidates) == 0:
            raise EmptyCandidateSetError(
                f"No candidates to match '{query[:50]}' against"
            )

        best = self.ranked_matches(query, candidates)[0]
        logger.debug(
            f"Best match for '{query[:50]}' is '{best.candidate_content[:50]}' "
            f"with score {best.score:.3f}"
        )
        return best
