"""Match result model."""

from dataclasses import dataclass

import numpy as np

from ..embeddings.models import EmbeddedValue, Embedding
from .similarity import cosine_similarity


@dataclass(frozen=True, eq=False)
class MatchCandidate:
    """The comparison of a query string against one candidate string.

    Both embeddings are kept so a score can be inspected or recomputed
    after the fact. Build instances with ``from_embedded``; ``score`` is
    always the cosine similarity of the two embeddings.

    Attributes:
        query_content: The query string
        candidate_content: The candidate string
        query_embedding: Embedding of the query
        candidate_embedding: Embedding of the candidate
        score: Cosine similarity in [-1.0, 1.0]
    """

    query_content: str
    candidate_content: str
    query_embedding: Embedding
    candidate_embedding: Embedding
    score: float

    @classmethod
    def from_embedded(
        cls, query: EmbeddedValue, candidate: EmbeddedValue
    ) -> "MatchCandidate":
        """Score ``candidate`` against ``query``.

        Raises:
            DimensionMismatchError: If the embeddings differ in length
            DegenerateVectorError: If either embedding has zero norm
        """
        return cls(
            query_content=query.content,
            candidate_content=candidate.content,
            query_embedding=query.embedding,
            candidate_embedding=candidate.embedding,
            score=cosine_similarity(query.embedding, candidate.embedding),
        )

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, MatchCandidate):
            return NotImplemented
        return (
            self.query_content == other.query_content
            and self.candidate_content == other.candidate_content
            and self.score == other.score
            and np.array_equal(self.query_embedding, other.query_embedding)
            and np.array_equal(self.candidate_embedding, other.candidate_embedding)
        )

    def __hash__(self) -> int:
        return hash((self.query_content, self.candidate_content, self.score))

    def __repr__(self) -> str:
        return (
            f"MatchCandidate({self.query_content!r}, "
            f"{self.candidate_content!r}, {self.score})"
        )
