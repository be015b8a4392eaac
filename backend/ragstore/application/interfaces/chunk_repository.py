"""Abstract repository interface (port) for resource chunks and vector search."""

from abc import ABC, abstractmethod

from ragstore.domain.entities import NewChunk, ResourceChunk, SearchResult


class ChunkRepository(ABC):
    """Port for chunk persistence and similarity search."""

    @abstractmethod
    async def store_chunks(self, resource_id: str, chunks: list[NewChunk]) -> int:
        """Persist all chunks for a resource, in order; all or nothing.

        Returns the number of chunks written.
        """
        ...

    @abstractmethod
    async def get_by_resource(self, resource_id: str) -> list[ResourceChunk]:
        """Return a resource's chunks in chunker order (vectors included)."""
        ...

    @abstractmethod
    async def search_similar(
        self,
        query_embedding: list[float],
        *,
        min_similarity: float = 0.5,
        limit: int = 4,
    ) -> list[SearchResult]:
        """Find chunks most similar to the query embedding.

        Args:
            query_embedding: The query vector.
            min_similarity: Hard floor; chunks scoring at or below it are dropped.
            limit: Maximum number of results.

        Returns:
            List of SearchResult ordered by descending similarity
            (ties broken by chunk id).
        """
        ...
