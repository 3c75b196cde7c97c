"""Unit tests for the Matcher ranking engine."""

import sys
from pathlib import Path

import pytest

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent.parent / "src"))

from test_helpers import FakeProvider

from embedmatch.embeddings.cache import EmbeddingCache
from embedmatch.errors import (
    DegenerateVectorError,
    DimensionMismatchError,
    EmptyCandidateSetError,
    ProviderError,
)
from embedmatch.matching.engine import Matcher

VECTORS = {
    "q": [1.0, 0.0],
    "c1": [0.0, 1.0],  # orthogonal, score 0.0
    "c2": [1.0, 0.0],  # same direction, score 1.0
    "c3": [1.0, 1.0],  # 45 degrees, score ~0.707
    "twin-a": [3.0, 1.0],
    "twin-b": [3.0, 1.0],
}


def make_matcher(max_workers: int = 1, **provider_kwargs) -> tuple[Matcher, FakeProvider]:
    provider = FakeProvider(vectors=VECTORS, **provider_kwargs)
    return Matcher(EmbeddingCache(provider), max_workers=max_workers), provider


class TestMatcherInitialization:
    """Test Matcher construction validation."""

    def test_default_is_sequential(self, cache) -> None:
        """Test that max_workers defaults to 1."""
        assert Matcher(cache).max_workers == 1

    def test_invalid_max_workers(self, cache) -> None:
        """Test that non-positive worker counts are rejected."""
        with pytest.raises(ValueError, match="max_workers must be at least 1, got 0"):
            Matcher(cache, max_workers=0)


class TestAllMatches:
    """Test all_matches ordering and scoring."""

    def test_results_in_input_order(self) -> None:
        """Test that results follow the candidate list, not the scores."""
        matcher, _ = make_matcher()
        matches = matcher.all_matches("q", ["c1", "c2", "c3"])

        assert [m.candidate_content for m in matches] == ["c1", "c2", "c3"]
        assert matches[0].score == 0.0
        assert matches[1].score == 1.0
        assert matches[2].score == pytest.approx(2**-0.5)

    def test_each_match_carries_query_and_embeddings(self) -> None:
        """Test that match records keep both sides for inspection."""
        matcher, _ = make_matcher()
        match = matcher.all_matches("q", ["c3"])[0]

        assert match.query_content == "q"
        assert match.query_embedding.tolist() == [1.0, 0.0]
        assert match.candidate_embedding.tolist() == [1.0, 1.0]

    def test_duplicates_preserved(self) -> None:
        """Test that repeated candidates produce repeated results."""
        matcher, provider = make_matcher()
        matches = matcher.all_matches("q", ["c3", "c1", "c3"])

        assert [m.candidate_content for m in matches] == ["c3", "c1", "c3"]
        assert matches[0] == matches[2]
        assert provider.calls == ["q", "c3", "c1"]

    def test_query_in_candidates_embedded_once(self) -> None:
        """Test that the query and an equal candidate share one call."""
        matcher, provider = make_matcher()
        matcher.all_matches("q", ["q", "c1"])

        assert provider.call_counts["q"] == 1

    def test_repeated_calls_use_cache(self) -> None:
        """Test that a second query round makes no new provider calls."""
        matcher, provider = make_matcher()
        matcher.all_matches("q", ["c1", "c2"])
        matcher.all_matches("q", ["c2", "c1"])

        assert provider.calls == ["q", "c1", "c2"]

    def test_empty_candidates_returns_empty_list(self) -> None:
        """Test that no candidates means no matches."""
        matcher, _ = make_matcher()
        assert matcher.all_matches("q", []) == []

    def test_concurrent_matcher_same_results(self) -> None:
        """Test that a pooled matcher returns the same ordered results."""
        sequential, _ = make_matcher()
        pooled, _ = make_matcher(max_workers=4)
        candidates = ["c3", "c1", "c2", "c1"]

        assert sequential.all_matches("q", candidates) == pooled.all_matches(
            "q", candidates
        )

    def test_provider_failure_returns_nothing(self) -> None:
        """Test that one failing candidate fails the whole call."""
        matcher, _ = make_matcher(fail_on={"c2"})
        with pytest.raises(ProviderError):
            matcher.all_matches("q", ["c1", "c2", "c3"])

    def test_inconsistent_dimensions_raise(self) -> None:
        """Test that a provider returning mixed dimensions is caught."""
        provider = FakeProvider(vectors={"q": [1.0, 0.0], "odd": [1.0, 0.0, 0.0]})
        matcher = Matcher(EmbeddingCache(provider))
        with pytest.raises(DimensionMismatchError):
            matcher.all_matches("q", ["odd"])

    def test_zero_vector_candidate_raises(self) -> None:
        """Test that a zero embedding surfaces as DegenerateVectorError."""
        provider = FakeProvider(vectors={"q": [1.0, 0.0], "zero": [0.0, 0.0]})
        matcher = Matcher(EmbeddingCache(provider))
        with pytest.raises(DegenerateVectorError):
            matcher.all_matches("q", ["zero"])


class TestRankedMatches:
    """Test ranked_matches sorting."""

    def test_sorted_by_descending_score(self) -> None:
        """Test that the best candidates come first."""
        matcher, _ = make_matcher()
        ranked = matcher.ranked_matches("q", ["c1", "c2", "c3"])

        assert [m.candidate_content for m in ranked] == ["c2", "c3", "c1"]

    def test_ties_keep_input_order(self) -> None:
        """Test that equal scores keep their original positions."""
        matcher, _ = make_matcher()
        ranked = matcher.ranked_matches("q", ["c1", "twin-b", "twin-a"])

        assert [m.candidate_content for m in ranked] == ["twin-b", "twin-a", "c1"]


class TestBestMatch:
    """Test best_match selection."""

    def test_returns_highest_score(self) -> None:
        """Test that the most similar candidate wins."""
        matcher, _ = make_matcher()
        best = matcher.best_match("q", ["c1", "c3", "c2"])

        assert best.candidate_content == "c2"
        assert best.score == 1.0

    def test_tie_goes_to_earliest_candidate(self) -> None:
        """Test that the first of several equal top scores wins."""
        matcher, _ = make_matcher()

        assert matcher.best_match("q", ["twin-a", "twin-b"]).candidate_content == "twin-a"
        assert matcher.best_match("q", ["twin-b", "twin-a"]).candidate_content == "twin-b"

    def test_self_match_scores_one(self) -> None:
        """Test that an identical string is the best match with score 1.0."""
        provider = FakeProvider(vectors={"X": [1.0, 2.0, 3.0], "Y": [3.0, -1.0, 0.5]})
        matcher = Matcher(EmbeddingCache(provider))

        best = matcher.best_match("X", ["X", "Y"])

        assert best.candidate_content == "X"
        assert best.score == 1.0

    def test_self_match_with_default_vectors(self, matcher) -> None:
        """Test self-matching with arbitrary provider vectors."""
        best = matcher.best_match("banana", ["apple", "banana", "cherry"])

        assert best.candidate_content == "banana"
        assert best.score == pytest.approx(1.0)

    def test_empty_candidates_raise(self, matcher, fake_provider) -> None:
        """Test that an empty candidate list raises without provider calls."""
        with pytest.raises(EmptyCandidateSetError, match="No candidates"):
            matcher.best_match("q", [])
        assert fake_provider.calls == []

    def test_empty_candidate_error_is_value_error(self, matcher) -> None:
        """Test that EmptyCandidateSetError can be caught as ValueError."""
        with pytest.raises(ValueError):
            matcher.best_match("q", [])

    def test_bare_string_candidates_rejected(self, matcher) -> None:
        """Test that a single string is not treated as a list of characters."""
        with pytest.raises(TypeError, match="not a single string"):
            matcher.best_match("q", "abc")  # type: ignore[arg-type]
