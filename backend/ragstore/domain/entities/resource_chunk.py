"""Domain entities for resource chunks — text fragments with vector embeddings."""

from dataclasses import dataclass, field
from datetime import datetime, timezone


@dataclass
class NewChunk:
    """A chunk ready to be written: chunker output paired with its vector."""

    content: str
    embedding: list[float]


@dataclass
class ResourceChunk:
    """A text chunk from a resource, the atomic unit of retrieval.

    ``chunk_index`` mirrors the chunker's output order. The vector is
    immutable once written.
    """

    resource_id: str
    chunk_index: int
    content: str
    embedding: list[float] = field(default_factory=list)
    id: str | None = None
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
