"""Pydantic schemas for retrieval API requests and responses."""

from pydantic import BaseModel, Field


class RetrieveRequest(BaseModel):
    """Request body for a similarity lookup."""

    query: str = Field(..., min_length=1, description="Question or text to find related knowledge for")
    min_similarity: float | None = Field(
        default=None,
        ge=-1.0,
        le=1.0,
        description="Relevance floor; results at or below it are dropped",
    )
    limit: int | None = Field(default=None, ge=1, le=100, description="Maximum number of results")


class RetrievedChunkSchema(BaseModel):
    """A single relevant chunk."""

    content: str
    similarity: float
