"""Unit tests for application settings configuration."""

from pathlib import Path

import pytest

from ragstore.config import KnowledgeBaseConfig, Settings
from ragstore.domain.exceptions import ConfigurationError


def test_settings_uses_backend_env_file_independent_of_cwd():
    """Settings should always include backend/.env as an env source."""
    env_files = Settings.model_config.get("env_file")
    assert env_files is not None

    normalized = {str(Path(item)) for item in env_files}
    expected_backend_env = str(Path(__file__).resolve().parents[2] / ".env")

    assert expected_backend_env in normalized
    assert str(Path(".env")) in normalized


def test_pipeline_defaults():
    fields = Settings.model_fields
    assert fields["embedding_model"].default == "text-embedding-ada-002"
    assert fields["embedding_dimensions"].default == 1536
    assert fields["embedding_batch_size"].default == 50
    assert fields["min_similarity"].default == 0.5
    assert fields["retrieval_limit"].default == 4
    assert fields["chunking_strategy"].default == "sentence"


def test_to_knowledge_base_config_projects_settings():
    settings = Settings(
        embedding_dimensions=8,
        chunking_strategy="recursive",
        chunk_size=300,
        chunk_overlap=30,
        min_similarity=0.3,
        retrieval_limit=6,
    )

    config = settings.to_knowledge_base_config()

    assert config == KnowledgeBaseConfig(
        embedding_dimensions=8,
        chunking_strategy="recursive",
        chunk_size=300,
        chunk_overlap=30,
        min_similarity=0.3,
        retrieval_limit=6,
    )


@pytest.mark.parametrize(
    "kwargs",
    [
        {"embedding_dimensions": 0},
        {"chunking_strategy": "tokens"},
        {"chunk_size": 100, "chunk_overlap": 100},
        {"retrieval_limit": 0},
    ],
)
def test_invalid_knowledge_base_config_is_rejected(kwargs):
    with pytest.raises(ConfigurationError):
        KnowledgeBaseConfig(**kwargs)


def test_ensure_dimensions_detects_model_mismatch():
    config = KnowledgeBaseConfig(embedding_dimensions=1536)
    config.ensure_dimensions(1536)
    with pytest.raises(ConfigurationError, match="3072"):
        config.ensure_dimensions(3072)
