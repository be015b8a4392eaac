"""Ingestion service — chunk → embed → store for new knowledge-base resources.

Coordinates:
1. Persisting the Resource via the ResourceRepository
2. Splitting its content with the configured Chunker
3. Embedding every chunk in one ordered batch via the EmbeddingProvider
4. Persisting the chunks via the ChunkRepository

Steps 1–4 share the caller's database transaction: the caller commits only
after ``ingest`` returns, so a failure (or cancellation) never leaves a
Resource without chunks behind.
"""

import logging
import time

from ragstore.application.interfaces import ChunkRepository, EmbeddingProvider, ResourceRepository
from ragstore.application.services.pipeline import pipeline_stage
from ragstore.config import KnowledgeBaseConfig
from ragstore.domain.chunking import Chunker, build_chunker
from ragstore.domain.entities import NewChunk, Resource, ensure_content
from ragstore.domain.exceptions import EmbeddingProviderError, IngestionError
from ragstore.infrastructure.logging.colored_logger import PipelineLogger, PipelineStage

logger = logging.getLogger(__name__)
plog = PipelineLogger("IngestionService")

INGEST_SUCCESS_MESSAGE = "Resource successfully created and embedded."
INGEST_FAILURE_MESSAGE = "Error, please try again."


class IngestionService:
    """Application service that turns raw text into a stored, embedded Resource."""

    def __init__(
        self,
        resource_repository: ResourceRepository,
        chunk_repository: ChunkRepository,
        embedding_provider: EmbeddingProvider,
        config: KnowledgeBaseConfig,
        *,
        chunker: Chunker | None = None,
    ):
        config.ensure_dimensions(embedding_provider.dimensions)
        self._resource_repo = resource_repository
        self._chunk_repo = chunk_repository
        self._embedding_provider = embedding_provider
        self._config = config
        self._chunker = chunker or build_chunker(config)

    async def ingest(self, content: str) -> Resource:
        """Store ``content`` as a new Resource together with its embedded chunks.

        Raises:
            EmptySourceError: blank content; nothing is written, nothing is embedded.
            IngestionError: any later failure, with ``stage`` naming the step.
        """
        ensure_content(content)

        start = time.monotonic()
        plog.step_start(PipelineStage.INGEST, "Ingesting resource", length=len(content))

        with pipeline_stage(IngestionError, "store_resource"):
            resource = await self._resource_repo.create(content)

        chunk_count = await self.embed_resource(resource)

        duration_ms = int((time.monotonic() - start) * 1000)
        plog.step_complete(
            PipelineStage.COMPLETE,
            f"Ingested resource {resource.id}",
            chunks=chunk_count,
            duration_ms=duration_ms,
        )
        return resource

    async def embed_resource(self, resource: Resource) -> int:
        """Chunk, embed and store the chunks of an already persisted resource.

        Returns:
            Number of chunks written.
        """
        with pipeline_stage(IngestionError, "chunk"):
            with plog.timed_step(PipelineStage.CHUNK, "Chunking resource", strategy=self._chunker.name):
                texts = self._chunker.chunk(resource.content)
            plog.detail(f"Produced {len(texts)} chunks", resource_id=resource.id)

        with pipeline_stage(IngestionError, "embed"):
            with plog.timed_step(PipelineStage.EMBED, "Embedding chunks", count=len(texts)):
                vectors = await self._embedding_provider.embed_many(texts)
            if len(vectors) != len(texts):
                raise EmbeddingProviderError(
                    provider=self._embedding_provider.provider_name,
                    status_code=0,
                    message=f"Expected {len(texts)} embeddings, received {len(vectors)}",
                )

        with pipeline_stage(IngestionError, "store_chunks"):
            with plog.timed_step(PipelineStage.STORE, "Storing chunks", resource_id=resource.id):
                written = await self._chunk_repo.store_chunks(
                    resource.id,
                    [
                        NewChunk(content=text, embedding=vector)
                        for text, vector in zip(texts, vectors, strict=True)
                    ],
                )
        return written
