"""SQLAlchemy ORM model for knowledge-base resources."""

from datetime import datetime, timezone

from sqlalchemy import DateTime, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from ragstore.infrastructure.database.base import Base


class ResourceModel(Base):
    """ORM model — maps to the 'resources' table.

    Chunks reference this table with ON DELETE CASCADE, so deleting a row
    removes its embeddings in the same statement.
    """

    __tablename__ = "resources"

    id: Mapped[str] = mapped_column(String(36), primary_key=True)
    content: Mapped[str] = mapped_column(Text, nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc),
        nullable=False,
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc),
        onupdate=lambda: datetime.now(timezone.utc),
        nullable=False,
    )

    def __repr__(self) -> str:
        return f"<ResourceModel(id={self.id}, length={len(self.content or '')})>"
