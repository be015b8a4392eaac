"""Shared helper for the straight-line ingestion/retrieval pipelines."""

from collections.abc import Iterator
from contextlib import contextmanager

from ragstore.domain.exceptions import PipelineError


@contextmanager
def pipeline_stage(error_type: type[PipelineError], stage: str) -> Iterator[None]:
    """Run one fallible step; any failure becomes ``error_type(stage)`` chained to its cause.

    Cancellation (``asyncio.CancelledError``) is a BaseException and passes through untouched.
    """
    try:
        yield
    except PipelineError:
        raise
    except Exception as exc:
        raise error_type(stage) from exc
