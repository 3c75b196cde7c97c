"""embedmatch - fuzzy string matching by embedding similarity.

The functions ``embed``, ``build_corpus``, ``all_matches`` and ``best_match``
at the package root use the process-wide default matcher (see ``api``).
The cache-explicit corpus builder lives in ``embedmatch.embeddings``.
"""

from .embeddings import EmbeddedValue, EmbeddingCache, make_embedded
from .errors import (
    DegenerateVectorError,
    DimensionMismatchError,
    EmbedMatchError,
    EmptyCandidateSetError,
    ProviderError,
)
from .matching import MatchCandidate, Matcher, cosine_similarity

__version__ = "0.1.0"
__all__ = [
    "DegenerateVectorError",
    "DimensionMismatchError",
    "EmbedMatchError",
    "EmbeddedValue",
    "EmbeddingCache",
    "EmptyCandidateSetError",
    "MatchCandidate",
    "Matcher",
    "ProviderError",
    "all_matches",
    "best_match",
    "build_corpus",
    "cosine_similarity",
    "embed",
    "make_embedded",
]

_API_FUNCTIONS = ("embed", "build_corpus", "all_matches", "best_match")


def __getattr__(name: str):  # type: ignore[no-untyped-def]
    if name in _API_FUNCTIONS:
        from . import api

        return getattr(api, name)
    raise AttributeError(f"module 'embedmatch' has no attribute {name!r}")
