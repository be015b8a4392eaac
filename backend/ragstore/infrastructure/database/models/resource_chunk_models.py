"""SQLAlchemy ORM model for resource chunks with pgvector embeddings."""

from sqlalchemy import (
    Column,
    DateTime,
    ForeignKey,
    Index,
    Integer,
    String,
    Text,
    UniqueConstraint,
    func,
)

from pgvector.sqlalchemy import Vector

from ragstore.config import get_settings
from ragstore.infrastructure.database.base import Base

EMBEDDING_DIMENSIONS = get_settings().embedding_dimensions


class ResourceChunkModel(Base):
    """A text chunk of a resource together with its embedding vector.

    Rows are written in one batch per resource during ingestion and never
    updated afterwards. The HNSW index serves cosine-distance ordering
    (HNSW supports at most 2000 dimensions).
    """

    __tablename__ = "embeddings"

    id = Column(String(36), primary_key=True)
    resource_id = Column(
        String(36),
        ForeignKey("resources.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    chunk_index = Column(Integer, nullable=False)
    content = Column(Text, nullable=False)
    embedding = Column(Vector(EMBEDDING_DIMENSIONS), nullable=False)
    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())

    __table_args__ = (
        UniqueConstraint("resource_id", "chunk_index", name="uq_embeddings_resource_chunk"),
        Index("embeddingIndex", embedding, postgresql_using="hnsw",
              postgresql_ops={"embedding": "vector_cosine_ops"}),
    )
