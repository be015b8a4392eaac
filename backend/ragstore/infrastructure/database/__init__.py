from .base import Base
from .session import (
    async_session_factory,
    build_engine,
    build_session_factory,
    engine,
    get_db_session,
    init_models,
    session_scope,
)
from .models import ResourceChunkModel, ResourceModel

__all__ = [
    "Base",
    "engine",
    "async_session_factory",
    "build_engine",
    "build_session_factory",
    "get_db_session",
    "init_models",
    "session_scope",
    "ResourceModel",
    "ResourceChunkModel",
]
