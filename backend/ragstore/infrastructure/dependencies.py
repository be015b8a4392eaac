"""Dependency wiring — connects infrastructure adapters to the application services.

Used by FastAPI (``Depends``), the CLI and the agent toolbox alike, so every
entry point builds its services the same way: one AsyncSession per unit of
work, one KnowledgeBaseConfig, one embedding provider.
"""

from collections.abc import AsyncGenerator
from dataclasses import dataclass
from functools import lru_cache

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from ragstore.application.interfaces import EmbeddingProvider
from ragstore.application.services import (
    IngestionService,
    ReconciliationService,
    ResourceService,
    RetrievalService,
)
from ragstore.config import KnowledgeBaseConfig, Settings, get_settings
from ragstore.domain.exceptions import ConfigurationError
from ragstore.infrastructure.database.models import ResourceChunkModel
from ragstore.infrastructure.database.repositories import (
    SQLAlchemyChunkRepository,
    SQLAlchemyResourceRepository,
)
from ragstore.infrastructure.database.session import get_db_session
from ragstore.infrastructure.embeddings import HttpEmbeddingProvider


@dataclass
class KnowledgeBaseServices:
    """All application services bound to one session (one unit of work)."""

    ingestion: IngestionService
    retrieval: RetrievalService
    resources: ResourceService
    reconciliation: ReconciliationService


@lru_cache
def get_knowledge_base_config() -> KnowledgeBaseConfig:
    """Cached pipeline configuration derived from Settings."""
    return get_settings().to_knowledge_base_config()


def build_embedding_provider(settings: Settings | None = None) -> EmbeddingProvider:
    """Create the embedding provider adapter described by the settings."""
    settings = settings or get_settings()
    return HttpEmbeddingProvider(
        api_key=settings.embedding_api_key.strip(),
        base_url=settings.embedding_base_url,
        model=settings.embedding_model,
        model_dimensions=settings.embedding_dimensions,
        batch_size=settings.embedding_batch_size,
        timeout=settings.embedding_timeout,
        send_dimensions=settings.embedding_send_dimensions,
    )


def build_services(
    session: AsyncSession,
    *,
    embedding_provider: EmbeddingProvider | None = None,
    config: KnowledgeBaseConfig | None = None,
) -> KnowledgeBaseServices:
    """Wire every application service to ``session``."""
    provider = embedding_provider or build_embedding_provider()
    config = config or get_knowledge_base_config()
    column_dimensions = ResourceChunkModel.embedding.type.dim
    if config.embedding_dimensions != column_dimensions:
        raise ConfigurationError(
            f"embedding_dimensions={config.embedding_dimensions} does not match "
            f"the {column_dimensions}-dimensional embedding column"
        )

    resource_repo = SQLAlchemyResourceRepository(session)
    chunk_repo = SQLAlchemyChunkRepository(session)

    ingestion = IngestionService(
        resource_repository=resource_repo,
        chunk_repository=chunk_repo,
        embedding_provider=provider,
        config=config,
    )
    return KnowledgeBaseServices(
        ingestion=ingestion,
        retrieval=RetrievalService(
            chunk_repository=chunk_repo,
            embedding_provider=provider,
            config=config,
        ),
        resources=ResourceService(resource_repo, chunk_repo),
        reconciliation=ReconciliationService(resource_repo, ingestion),
    )


def get_embedding_provider() -> EmbeddingProvider:
    """FastAPI dependency — the configured embedding provider."""
    return build_embedding_provider()


async def get_services(
    session: AsyncSession = Depends(get_db_session),
    embedding_provider: EmbeddingProvider = Depends(get_embedding_provider),
    config: KnowledgeBaseConfig = Depends(get_knowledge_base_config),
) -> AsyncGenerator[KnowledgeBaseServices, None]:
    """Provides all services bound to the request's session."""
    yield build_services(session, embedding_provider=embedding_provider, config=config)


async def get_ingestion_service(
    services: KnowledgeBaseServices = Depends(get_services),
) -> AsyncGenerator[IngestionService, None]:
    yield services.ingestion


async def get_retrieval_service(
    services: KnowledgeBaseServices = Depends(get_services),
) -> AsyncGenerator[RetrievalService, None]:
    yield services.retrieval


async def get_resource_service(
    services: KnowledgeBaseServices = Depends(get_services),
) -> AsyncGenerator[ResourceService, None]:
    yield services.resources


async def get_reconciliation_service(
    services: KnowledgeBaseServices = Depends(get_services),
) -> AsyncGenerator[ReconciliationService, None]:
    yield services.reconciliation
