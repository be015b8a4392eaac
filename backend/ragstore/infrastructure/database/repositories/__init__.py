from .resource_repository import SQLAlchemyResourceRepository
from .chunk_repository import SQLAlchemyChunkRepository

__all__ = [
    "SQLAlchemyResourceRepository",
    "SQLAlchemyChunkRepository",
]
