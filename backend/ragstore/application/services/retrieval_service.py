"""Retrieval service — embeds a query and runs threshold + top-k similarity search."""

from ragstore.application.interfaces import ChunkRepository, EmbeddingProvider
from ragstore.application.services.pipeline import pipeline_stage
from ragstore.config import KnowledgeBaseConfig
from ragstore.domain.entities import SearchResult
from ragstore.domain.exceptions import RetrievalError, ValidationError
from ragstore.infrastructure.logging.colored_logger import PipelineLogger, PipelineStage

plog = PipelineLogger("RetrievalService")

RETRIEVAL_FAILURE_MESSAGE = "Could not search the knowledge base, please try again."


def normalize_query(query: str) -> str:
    """Collapse literal ``\\n`` escape sequences and line breaks into single spaces."""
    return " ".join(query.replace("\\n", " ").split())


class RetrievalService:
    """Application service answering "what do we know about X?" for the agent.

    An empty result list is a normal outcome meaning no stored chunk cleared
    the relevance floor.
    """

    def __init__(
        self,
        chunk_repository: ChunkRepository,
        embedding_provider: EmbeddingProvider,
        config: KnowledgeBaseConfig,
    ):
        config.ensure_dimensions(embedding_provider.dimensions)
        self._chunk_repo = chunk_repository
        self._embedding_provider = embedding_provider
        self._config = config

    async def retrieve(
        self,
        query: str,
        *,
        min_similarity: float | None = None,
        limit: int | None = None,
    ) -> list[SearchResult]:
        """Return up to ``limit`` chunks scoring above ``min_similarity``, best first.

        Both tuning parameters default to the configured values.

        Raises:
            ValidationError: non-text or blank query (after normalisation),
                or ``limit`` below 1; no provider call is made.
            RetrievalError: embedding or search failed (``stage`` is "embed" or "search").
        """
        if not isinstance(query, str):
            raise ValidationError("Query must be text")
        normalized = normalize_query(query)
        if not normalized:
            raise ValidationError("Query must not be empty")

        floor = self._config.min_similarity if min_similarity is None else min_similarity
        top_k = self._config.retrieval_limit if limit is None else limit
        if top_k < 1:
            raise ValidationError("limit must be at least 1")

        plog.step_start(PipelineStage.RETRIEVE, "Retrieving knowledge", length=len(normalized))

        with pipeline_stage(RetrievalError, "embed"):
            with plog.timed_step(PipelineStage.EMBED, "Embedding query"):
                query_embedding = await self._embedding_provider.embed_one(normalized)

        with pipeline_stage(RetrievalError, "search"):
            with plog.timed_step(PipelineStage.SEARCH, "Searching chunks", floor=floor, limit=top_k):
                results = await self._chunk_repo.search_similar(
                    query_embedding,
                    min_similarity=floor,
                    limit=top_k,
                )

        plog.step_complete(PipelineStage.RETRIEVE, f"Retrieved {len(results)} chunks")
        return results
