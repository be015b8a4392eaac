"""Reconciliation service — repairs resources that were stored without chunks.

A resource with zero chunks can only exist if it was written outside the
ingestion transaction (older loaders, manual inserts, a crash between
separate commits). Such resources are invisible to retrieval until re-embedded.
"""

import logging

from ragstore.application.interfaces import ResourceRepository
from ragstore.application.services.ingestion_service import IngestionService
from ragstore.domain.entities import ReconcileResult, Resource
from ragstore.domain.exceptions import EmptySourceError, IngestionError
from ragstore.infrastructure.logging.colored_logger import PipelineLogger, PipelineStage

logger = logging.getLogger(__name__)
plog = PipelineLogger("ReconciliationService")


class ReconciliationService:
    """Finds orphaned resources and runs chunk → embed → store for them again."""

    def __init__(self, resource_repository: ResourceRepository, ingestion_service: IngestionService):
        self._resource_repo = resource_repository
        self._ingestion = ingestion_service

    async def find_orphaned(self, limit: int = 100) -> list[Resource]:
        """Return up to ``limit`` resources that currently own no chunks."""
        return await self._resource_repo.list_without_chunks(limit=limit)

    async def reembed_orphaned(self, limit: int = 100) -> ReconcileResult:
        """Re-embed orphaned resources within the current unit of work.

        An orphan whose content chunks to nothing is skipped and reported, so
        it cannot block the orphans behind it. Any other failure stops the run
        (IngestionError propagates, so the caller's transaction rolls back).
        """
        orphans = await self.find_orphaned(limit=limit)
        if not orphans:
            logger.info("No orphaned resources found")
            return ReconcileResult(repaired=0)

        plog.step_start(PipelineStage.RECONCILE, f"Re-embedding {len(orphans)} orphaned resources")
        repaired = 0
        skipped: list[str] = []
        for resource in orphans:
            try:
                chunks = await self._ingestion.embed_resource(resource)
            except IngestionError as e:
                if e.stage != "chunk" or not isinstance(e.__cause__, EmptySourceError):
                    raise
                logger.warning("Skipping resource %s: content yields no chunks", resource.id)
                skipped.append(resource.id)
                continue
            repaired += 1
            plog.detail("Re-embedded resource", resource_id=resource.id, chunks=chunks)
        plog.step_complete(
            PipelineStage.RECONCILE,
            f"Repaired {repaired} resources",
            skipped=len(skipped),
        )
        return ReconcileResult(repaired=repaired, skipped_ids=tuple(skipped))

