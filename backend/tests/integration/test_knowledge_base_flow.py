"""End-to-end ingestion and retrieval through the real repositories."""

import pytest

from ragstore.application.interfaces import EmbeddingProvider
from ragstore.config import KnowledgeBaseConfig
from ragstore.domain.entities import Resource
from ragstore.domain.exceptions import ConfigurationError
from ragstore.infrastructure.database import session_scope
from ragstore.infrastructure.database.models import ResourceModel
from ragstore.infrastructure.dependencies import build_services


@pytest.fixture
def services_for(embedding_provider, kb_config):
    def factory(session):
        return build_services(session, embedding_provider=embedding_provider, config=kb_config)

    return factory


@pytest.mark.asyncio
async def test_sky_and_grass_scenario(session_factory, services_for):
    async with session_scope(session_factory) as session:
        resource = await services_for(session).ingestion.ingest("The sky is blue. Grass is green.")

    async with session_scope(session_factory) as session:
        services = services_for(session)
        assert len(await services.resources.list_chunks(resource.id)) == 2
        sky = await services.retrieval.retrieve("What color is the sky?")
        food = await services.retrieval.retrieve("What is my favorite food?")

    assert sky[0].content == "The sky is blue"
    assert sky[0].similarity > 0.5
    assert all(r.content != "Grass is green" for r in sky)
    assert food == []


@pytest.mark.asyncio
async def test_results_from_several_resources_are_ranked_together(session_factory, services_for):
    async with session_scope(session_factory) as session:
        ingestion = services_for(session).ingestion
        await ingestion.ingest("The sky is blue.")
        await ingestion.ingest("The blue ocean meets the blue sky.")
        await ingestion.ingest("Grass is green.")

    async with session_scope(session_factory) as session:
        results = await services_for(session).retrieval.retrieve("blue sky", limit=4)

    assert [r.content for r in results] == ["The sky is blue", "The blue ocean meets the blue sky"]
    assert results[0].similarity >= results[1].similarity


@pytest.mark.asyncio
async def test_reconciliation_reembeds_resources_written_without_chunks(session_factory, services_for):
    async with session_scope(session_factory) as session:
        orphan = Resource(content="The sky is blue.", id="orphan-1")
        session.add(ResourceModel(id=orphan.id, content=orphan.content))

    async with session_scope(session_factory) as session:
        assert await services_for(session).retrieval.retrieve("sky") == []

    async with session_scope(session_factory) as session:
        assert (await services_for(session).reconciliation.reembed_orphaned()).repaired == 1

    async with session_scope(session_factory) as session:
        results = await services_for(session).retrieval.retrieve("sky")

    assert [r.content for r in results] == ["The sky is blue"]


@pytest.mark.asyncio
async def test_reconciliation_skips_orphans_without_chunkable_content(session_factory, services_for):
    async with session_scope(session_factory) as session:
        session.add(ResourceModel(id="orphan-dots", content="..."))
        session.add(ResourceModel(id="orphan-sky", content="The sky is blue."))

    async with session_scope(session_factory) as session:
        result = await services_for(session).reconciliation.reembed_orphaned()

    assert result.repaired == 1
    assert result.skipped_ids == ("orphan-dots",)

    async with session_scope(session_factory) as session:
        services = services_for(session)
        assert [r.id for r in await services.reconciliation.find_orphaned()] == ["orphan-dots"]
        assert [r.content for r in await services.retrieval.retrieve("sky")] == ["The sky is blue"]


class SixteenDimensionProvider(EmbeddingProvider):
    provider_name = "sixteen"

    @property
    def dimensions(self) -> int:
        return 16

    async def embed_many(self, texts: list[str]) -> list[list[float]]:
        return [[1.0] * 16 for _ in texts]


@pytest.mark.asyncio
async def test_build_services_rejects_config_wider_than_the_embedding_column(session_factory):
    config = KnowledgeBaseConfig(embedding_dimensions=16)

    async with session_factory() as session:
        with pytest.raises(ConfigurationError, match="8-dimensional embedding column"):
            build_services(session, embedding_provider=SixteenDimensionProvider(), config=config)
