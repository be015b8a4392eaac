from .resources import (
    ChunkResponse,
    IngestResponse,
    ReconcileResponse,
    ResourceCreate,
    ResourceResponse,
)
from .retrieval import RetrievedChunkSchema, RetrieveRequest

__all__ = [
    "ChunkResponse",
    "IngestResponse",
    "ReconcileResponse",
    "ResourceCreate",
    "ResourceResponse",
    "RetrievedChunkSchema",
    "RetrieveRequest",
]
