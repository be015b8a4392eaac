"""Shared test configuration.

The environment is pinned before any ``ragstore`` module is imported: the
embeddings table reads its vector size from Settings at import time, and the
module-level engine must never point at a real PostgreSQL server.
"""

import os

os.environ["DATABASE_URL"] = "sqlite:///:memory:"
os.environ["EMBEDDING_DIMENSIONS"] = "8"
os.environ["EMBEDDING_API_KEY"] = "test-key"
os.environ["APP_ENV"] = "test"

import re  # noqa: E402

import pytest  # noqa: E402
import pytest_asyncio  # noqa: E402

from ragstore.application.interfaces import EmbeddingProvider  # noqa: E402
from ragstore.config import KnowledgeBaseConfig  # noqa: E402
from ragstore.infrastructure.database import build_engine, build_session_factory, init_models  # noqa: E402

TEST_DIMENSIONS = 8
KEYWORDS = ("sky", "blue", "grass", "green", "food", "favorite", "pizza", "ocean")


class KeywordEmbeddingProvider(EmbeddingProvider):
    """Deterministic fake: one dimension per keyword, counting its occurrences.

    Texts sharing keywords point the same way; texts without any keyword map
    to the zero vector, which is never similar to anything.
    """

    provider_name = "keyword-fake"

    def __init__(self):
        self.calls: list[list[str]] = []

    @property
    def dimensions(self) -> int:
        return TEST_DIMENSIONS

    async def embed_many(self, texts: list[str]) -> list[list[float]]:
        self.calls.append(list(texts))
        vectors = []
        for text in texts:
            words = re.findall(r"[a-z]+", text.lower())
            vectors.append([float(words.count(keyword)) for keyword in KEYWORDS])
        return vectors


@pytest.fixture
def embedding_provider() -> KeywordEmbeddingProvider:
    return KeywordEmbeddingProvider()


@pytest.fixture
def kb_config() -> KnowledgeBaseConfig:
    return KnowledgeBaseConfig(embedding_dimensions=TEST_DIMENSIONS)


@pytest_asyncio.fixture
async def db_engine():
    """A fresh in-memory SQLite database with all tables created."""
    engine = build_engine("sqlite:///:memory:")
    await init_models(engine)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(db_engine):
    return build_session_factory(db_engine)
