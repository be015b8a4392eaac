"""Abstract repository interface (port) for knowledge-base resources."""

from abc import ABC, abstractmethod

from ragstore.domain.entities import Resource


class ResourceRepository(ABC):
    """Port for resource persistence — implemented in the infrastructure layer."""

    @abstractmethod
    async def create(self, content: str) -> Resource:
        """Validate and persist a new resource, returning it with id and timestamps.

        Raises:
            EmptySourceError: if ``content`` is blank (nothing is written).
        """
        ...

    @abstractmethod
    async def get_by_id(self, resource_id: str) -> Resource | None:
        """Retrieve a single resource by its ID."""
        ...

    @abstractmethod
    async def get_all(self, skip: int = 0, limit: int = 100) -> list[Resource]:
        """Retrieve a paginated list of resources, newest first."""
        ...

    @abstractmethod
    async def delete(self, resource_id: str) -> bool:
        """Delete a resource and, in the same transaction, all of its chunks.

        Returns True if deleted, False if not found.
        """
        ...

    @abstractmethod
    async def list_without_chunks(self, limit: int = 100) -> list[Resource]:
        """Return resources that own zero chunks, oldest first."""
        ...
