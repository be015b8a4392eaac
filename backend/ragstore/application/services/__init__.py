from .ingestion_service import IngestionService
from .retrieval_service import RetrievalService, normalize_query
from .reconciliation_service import ReconciliationService
from .resource_service import ResourceService

__all__ = [
    "IngestionService",
    "RetrievalService",
    "normalize_query",
    "ReconciliationService",
    "ResourceService",
]
