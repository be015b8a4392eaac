"""Resources API controller — add knowledge, inspect it, delete it."""

import logging

from fastapi import APIRouter, Depends, HTTPException, status

from ragstore.application.schemas import (
    ChunkResponse,
    IngestResponse,
    ReconcileResponse,
    ResourceCreate,
    ResourceResponse,
)
from ragstore.application.services import IngestionService, ReconciliationService, ResourceService
from ragstore.application.services.ingestion_service import (
    INGEST_FAILURE_MESSAGE,
    INGEST_SUCCESS_MESSAGE,
)
from ragstore.domain.exceptions import EntityNotFoundError, IngestionError, ValidationError
from ragstore.infrastructure.dependencies import (
    get_ingestion_service,
    get_reconciliation_service,
    get_resource_service,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/resources", tags=["resources"])


@router.post("", response_model=IngestResponse, status_code=status.HTTP_201_CREATED)
async def create_resource(
    data: ResourceCreate,
    service: IngestionService = Depends(get_ingestion_service),
) -> IngestResponse:
    """Chunk, embed and store new source text."""
    try:
        resource = await service.ingest(data.content)
    except ValidationError as e:
        raise HTTPException(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=str(e))
    except IngestionError as e:
        if isinstance(e.__cause__, ValidationError):
            # Content that chunks to nothing fails the same way on every retry.
            raise HTTPException(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=str(e.__cause__)) from e
        logger.warning("Ingestion failed at stage '%s'", e.stage, exc_info=e)
        code = status.HTTP_502_BAD_GATEWAY if e.stage == "embed" else status.HTTP_500_INTERNAL_SERVER_ERROR
        raise HTTPException(status_code=code, detail=INGEST_FAILURE_MESSAGE) from e
    return IngestResponse(id=resource.id, message=INGEST_SUCCESS_MESSAGE)


@router.get("", response_model=list[ResourceResponse])
async def list_resources(
    skip: int = 0,
    limit: int = 100,
    service: ResourceService = Depends(get_resource_service),
) -> list[ResourceResponse]:
    """Retrieve a paginated list of resources, newest first."""
    resources = await service.list_resources(skip=skip, limit=limit)
    return [ResourceResponse.model_validate(r, from_attributes=True) for r in resources]


@router.post("/reconcile", response_model=ReconcileResponse)
async def reconcile_resources(
    limit: int = 100,
    service: ReconciliationService = Depends(get_reconciliation_service),
) -> ReconcileResponse:
    """Re-embed resources that have no chunks."""
    try:
        result = await service.reembed_orphaned(limit=limit)
    except IngestionError as e:
        logger.warning("Reconciliation failed at stage '%s'", e.stage, exc_info=e)
        raise HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail=INGEST_FAILURE_MESSAGE) from e
    return ReconcileResponse(reembedded=result.repaired, skipped=list(result.skipped_ids))


@router.get("/{resource_id}", response_model=ResourceResponse)
async def get_resource(
    resource_id: str,
    service: ResourceService = Depends(get_resource_service),
) -> ResourceResponse:
    """Retrieve a single resource by ID."""
    try:
        resource = await service.get_resource(resource_id)
    except EntityNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    return ResourceResponse.model_validate(resource, from_attributes=True)


@router.get("/{resource_id}/chunks", response_model=list[ChunkResponse])
async def list_resource_chunks(
    resource_id: str,
    service: ResourceService = Depends(get_resource_service),
) -> list[ChunkResponse]:
    """List a resource's chunks in chunker order."""
    try:
        chunks = await service.list_chunks(resource_id)
    except EntityNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    return [ChunkResponse(id=c.id, chunk_index=c.chunk_index, content=c.content) for c in chunks]


@router.delete("/{resource_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_resource(
    resource_id: str,
    service: ResourceService = Depends(get_resource_service),
) -> None:
    """Delete a resource together with all of its chunks."""
    try:
        await service.delete_resource(resource_id)
    except EntityNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
