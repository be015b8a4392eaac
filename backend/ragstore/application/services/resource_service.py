"""Application service (use case) for reading and deleting stored resources."""

from ragstore.application.interfaces import ChunkRepository, ResourceRepository
from ragstore.domain.entities import Resource, ResourceChunk
from ragstore.domain.exceptions import EntityNotFoundError


class ResourceService:
    """Resource lookups and cascade deletion. Depends on the repository ports (DI)."""

    def __init__(self, resource_repository: ResourceRepository, chunk_repository: ChunkRepository):
        self._resource_repo = resource_repository
        self._chunk_repo = chunk_repository

    async def get_resource(self, resource_id: str) -> Resource:
        resource = await self._resource_repo.get_by_id(resource_id)
        if resource is None:
            raise EntityNotFoundError("Resource", resource_id)
        return resource

    async def list_resources(self, skip: int = 0, limit: int = 100) -> list[Resource]:
        return await self._resource_repo.get_all(skip=skip, limit=limit)

    async def list_chunks(self, resource_id: str) -> list[ResourceChunk]:
        await self.get_resource(resource_id)
        return await self._chunk_repo.get_by_resource(resource_id)

    async def delete_resource(self, resource_id: str) -> bool:
        """Delete a resource and all of its chunks."""
        deleted = await self._resource_repo.delete(resource_id)
        if not deleted:
            raise EntityNotFoundError("Resource", resource_id)
        return deleted
