"""Pydantic DTOs (Data Transfer Objects) for the resources API."""

from datetime import datetime

from pydantic import BaseModel, Field


class ResourceCreate(BaseModel):
    """Request body for adding knowledge to the base."""

    content: str = Field(
        ...,
        min_length=1,
        description="Source text to chunk, embed and store",
        examples=["The sky is blue. Grass is green."],
    )


class IngestResponse(BaseModel):
    """Agent-facing result of an ingestion."""

    id: str | None = None
    message: str


class ResourceResponse(BaseModel):
    """Schema returned to the client."""

    id: str
    content: str
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}


class ReconcileResponse(BaseModel):
    """Orphaned resources that were re-embedded, and those skipped because they yield no chunks."""

    reembedded: int = 0
    skipped: list[str] = Field(default_factory=list)


class ChunkResponse(BaseModel):
    """A stored chunk, without its vector."""

    id: str
    chunk_index: int
    content: str
