"""Similarity scoring and match ranking."""

from .engine import Matcher
from .models import MatchCandidate
from .similarity import cosine_similarity

__all__ = ["MatchCandidate", "Matcher", "cosine_similarity"]
