"""Retrieval API controller — similarity lookups against the knowledge base."""

import logging

from fastapi import APIRouter, Depends, HTTPException, status

from ragstore.application.schemas import RetrievedChunkSchema, RetrieveRequest
from ragstore.application.services import RetrievalService
from ragstore.application.services.retrieval_service import RETRIEVAL_FAILURE_MESSAGE
from ragstore.domain.exceptions import RetrievalError, ValidationError
from ragstore.infrastructure.dependencies import get_retrieval_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/retrieve", tags=["retrieval"])


@router.post("", response_model=list[RetrievedChunkSchema])
async def retrieve(
    body: RetrieveRequest,
    service: RetrievalService = Depends(get_retrieval_service),
) -> list[RetrievedChunkSchema]:
    """Return the chunks most relevant to the query; an empty list means nothing relevant is stored."""
    try:
        results = await service.retrieve(
            body.query,
            min_similarity=body.min_similarity,
            limit=body.limit,
        )
    except ValidationError as e:
        raise HTTPException(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=str(e))
    except RetrievalError as e:
        logger.warning("Retrieval failed at stage '%s'", e.stage, exc_info=e)
        code = status.HTTP_502_BAD_GATEWAY if e.stage == "embed" else status.HTTP_500_INTERNAL_SERVER_ERROR
        raise HTTPException(status_code=code, detail=RETRIEVAL_FAILURE_MESSAGE) from e
    return [RetrievedChunkSchema(content=r.content, similarity=r.similarity) for r in results]
