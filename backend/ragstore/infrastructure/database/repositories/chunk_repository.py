"""SQLAlchemy implementation of ChunkRepository — pgvector-powered vector search."""

import logging
import uuid

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from ragstore.application.interfaces.chunk_repository import ChunkRepository
from ragstore.domain.entities import NewChunk, ResourceChunk, SearchResult
from ragstore.domain.similarity import (
    SimilarityCandidate,
    rank_by_similarity,
    validate_search_bounds,
)
from ragstore.infrastructure.database.models import ResourceChunkModel
from ragstore.infrastructure.database.errors import store_errors

logger = logging.getLogger(__name__)


class SQLAlchemyChunkRepository(ChunkRepository):
    """Concrete chunk repository.

    On PostgreSQL the floor, ordering and limit run inside pgvector. Other
    engines (SQLite for development and tests) load the candidate vectors and
    rank them in process with identical semantics.
    """

    def __init__(self, session: AsyncSession):
        self._session = session

    async def store_chunks(self, resource_id: str, chunks: list[NewChunk]) -> int:
        """Persist a batch of chunks for one resource, preserving chunker order."""
        if not chunks:
            return 0

        models = [
            ResourceChunkModel(
                id=str(uuid.uuid4()),
                resource_id=resource_id,
                chunk_index=index,
                content=chunk.content,
                embedding=chunk.embedding,
            )
            for index, chunk in enumerate(chunks)
        ]

        with store_errors("store_chunks"):
            self._session.add_all(models)
            await self._session.flush()
        logger.info("Stored %d chunks for resource %s", len(models), resource_id)
        return len(models)

    async def get_by_resource(self, resource_id: str) -> list[ResourceChunk]:
        stmt = (
            select(ResourceChunkModel)
            .where(ResourceChunkModel.resource_id == resource_id)
            .order_by(ResourceChunkModel.chunk_index)
        )
        with store_errors("get_chunks"):
            result = await self._session.execute(stmt)
        return [
            ResourceChunk(
                id=model.id,
                resource_id=model.resource_id,
                chunk_index=model.chunk_index,
                content=model.content,
                embedding=[float(v) for v in model.embedding],
                created_at=model.created_at,
            )
            for model in result.scalars().all()
        ]

    async def search_similar(
        self,
        query_embedding: list[float],
        *,
        min_similarity: float = 0.5,
        limit: int = 4,
    ) -> list[SearchResult]:
        """Find chunks most similar to the query embedding using cosine similarity."""
        validate_search_bounds(limit)
        with store_errors("search_similar"):
            if self._session.get_bind().dialect.name == "postgresql":
                return await self._search_pgvector(query_embedding, min_similarity, limit)
            return await self._search_in_process(query_embedding, min_similarity, limit)

    async def _search_pgvector(
        self, query_embedding: list[float], min_similarity: float, limit: int
    ) -> list[SearchResult]:
        # 1 - (embedding <=> query) is the cosine similarity.
        distance = ResourceChunkModel.embedding.cosine_distance(query_embedding)
        similarity = (1 - distance).label("similarity")

        # Ordering on the raw distance keeps the HNSW index usable.
        query = (
            select(
                ResourceChunkModel.id,
                ResourceChunkModel.resource_id,
                ResourceChunkModel.content,
                similarity,
            )
            .where((1 - distance) > min_similarity)
            .order_by(distance.asc(), ResourceChunkModel.id.asc())
            .limit(limit)
        )

        result = await self._session.execute(query)
        return [
            SearchResult(
                content=row.content,
                similarity=float(row.similarity),
                chunk_id=row.id,
                resource_id=row.resource_id,
            )
            for row in result.all()
        ]

    async def _search_in_process(
        self, query_embedding: list[float], min_similarity: float, limit: int
    ) -> list[SearchResult]:
        result = await self._session.execute(
            select(
                ResourceChunkModel.id,
                ResourceChunkModel.resource_id,
                ResourceChunkModel.content,
                ResourceChunkModel.embedding,
            )
        )
        candidates = [
            SimilarityCandidate(
                chunk_id=row.id,
                resource_id=row.resource_id,
                content=row.content,
                embedding=[float(v) for v in row.embedding],
            )
            for row in result.all()
        ]
        return rank_by_similarity(
            query_embedding,
            candidates,
            min_similarity=min_similarity,
            limit=limit,
        )
