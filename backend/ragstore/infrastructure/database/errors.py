"""Translation of SQLAlchemy failures into the domain StoreError."""

import logging
from collections.abc import Iterator
from contextlib import contextmanager

from sqlalchemy.exc import SQLAlchemyError

from ragstore.domain.exceptions import StoreError

logger = logging.getLogger(__name__)


@contextmanager
def store_errors(operation: str) -> Iterator[None]:
    """Re-raise any SQLAlchemyError raised inside the block as StoreError(operation)."""
    try:
        yield
    except SQLAlchemyError as exc:
        logger.error("Store operation '%s' failed: %s", operation, exc)
        raise StoreError(operation) from exc
