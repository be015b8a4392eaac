"""SQLAlchemy implementation of the ResourceRepository."""

import uuid

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from ragstore.application.interfaces import ResourceRepository
from ragstore.domain.entities import Resource
from ragstore.infrastructure.database.models import ResourceChunkModel, ResourceModel
from ragstore.infrastructure.database.errors import store_errors


class SQLAlchemyResourceRepository(ResourceRepository):
    """Concrete resource repository backed by PostgreSQL (or SQLite) via SQLAlchemy."""

    def __init__(self, session: AsyncSession):
        self._session = session

    def _to_entity(self, model: ResourceModel) -> Resource:
        """Map ORM model → domain entity."""
        return Resource(
            id=model.id,
            content=model.content,
            created_at=model.created_at,
            updated_at=model.updated_at,
        )

    async def create(self, content: str) -> Resource:
        # Validates before anything is sent to the database.
        resource = Resource(content=content, id=str(uuid.uuid4()))

        model = ResourceModel(
            id=resource.id,
            content=resource.content,
            created_at=resource.created_at,
            updated_at=resource.updated_at,
        )
        with store_errors("create_resource"):
            self._session.add(model)
            await self._session.flush()
        return self._to_entity(model)

    async def get_by_id(self, resource_id: str) -> Resource | None:
        with store_errors("get_resource"):
            model = await self._session.get(ResourceModel, resource_id)
        return self._to_entity(model) if model else None

    async def get_all(self, skip: int = 0, limit: int = 100) -> list[Resource]:
        stmt = (
            select(ResourceModel)
            .order_by(ResourceModel.created_at.desc(), ResourceModel.id)
            .offset(skip)
            .limit(limit)
        )
        with store_errors("list_resources"):
            result = await self._session.execute(stmt)
        return [self._to_entity(m) for m in result.scalars().all()]

    async def delete(self, resource_id: str) -> bool:
        with store_errors("delete_resource"):
            model = await self._session.get(ResourceModel, resource_id)
            if model is None:
                return False
            # Chunks go with it via ON DELETE CASCADE, inside the same transaction.
            await self._session.delete(model)
            await self._session.flush()
        return True

    async def list_without_chunks(self, limit: int = 100) -> list[Resource]:
        stmt = (
            select(ResourceModel)
            .outerjoin(ResourceChunkModel, ResourceChunkModel.resource_id == ResourceModel.id)
            .where(ResourceChunkModel.id.is_(None))
            .order_by(ResourceModel.created_at.asc(), ResourceModel.id)
            .limit(limit)
        )
        with store_errors("list_orphaned_resources"):
            result = await self._session.execute(stmt)
        return [self._to_entity(m) for m in result.scalars().all()]
