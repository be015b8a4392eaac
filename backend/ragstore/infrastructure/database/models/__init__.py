from .resource_models import ResourceModel
from .resource_chunk_models import ResourceChunkModel

__all__ = [
    "ResourceModel",
    "ResourceChunkModel",
]
