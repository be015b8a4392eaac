from .resource_repository import ResourceRepository
from .embedding_provider import EmbeddingProvider
from .chunk_repository import ChunkRepository

__all__ = [
    "ResourceRepository",
    "EmbeddingProvider",
    "ChunkRepository",
]
