"""Cosine similarity ranking with a hard relevance floor and a top-k cut.

Used by stores that have no native vector operator (SQLite in development and
tests). PostgreSQL pushes the same semantics down to pgvector.
"""

from collections.abc import Sequence
from dataclasses import dataclass

import numpy as np

from ragstore.domain.entities.search import SearchResult
from ragstore.domain.exceptions import ValidationError


@dataclass(frozen=True)
class SimilarityCandidate:
    """A stored chunk considered for ranking."""

    chunk_id: str
    resource_id: str
    content: str
    embedding: Sequence[float]


def validate_search_bounds(limit: int) -> None:
    if limit < 1:
        raise ValidationError("limit must be at least 1")


def rank_by_similarity(
    query_embedding: Sequence[float],
    candidates: Sequence[SimilarityCandidate],
    *,
    min_similarity: float = 0.5,
    limit: int = 4,
) -> list[SearchResult]:
    """Score candidates, drop those at or below the floor, return the best ``limit``.

    Ordering is by similarity descending, then chunk id ascending so identical
    inputs always produce identical output.
    """
    validate_search_bounds(limit)
    if not candidates:
        return []

    query = np.asarray(query_embedding, dtype=np.float64)
    matrix = np.asarray([c.embedding for c in candidates], dtype=np.float64)
    if matrix.ndim != 2 or matrix.shape[1] != query.shape[0]:
        raise ValidationError(
            f"Query vector has {query.shape[0]} dimensions, stored vectors have "
            f"{matrix.shape[1] if matrix.ndim == 2 else 'mixed'}"
        )

    norms = np.linalg.norm(matrix, axis=1) * np.linalg.norm(query)
    dots = matrix @ query
    scores = np.divide(dots, norms, out=np.zeros_like(dots), where=norms != 0)

    scored = [
        (float(score), candidate)
        for score, candidate in zip(scores, candidates, strict=True)
        if score > min_similarity
    ]
    scored.sort(key=lambda pair: (-pair[0], pair[1].chunk_id))

    return [
        SearchResult(
            content=candidate.content,
            similarity=score,
            chunk_id=candidate.chunk_id,
            resource_id=candidate.resource_id,
        )
        for score, candidate in scored[:limit]
    ]
