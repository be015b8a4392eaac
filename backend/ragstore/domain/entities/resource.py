"""Domain entity for knowledge-base resources — the source text an agent submits."""

from dataclasses import dataclass, field
from datetime import datetime, timezone

from ragstore.domain.exceptions import EmptySourceError, ValidationError


def ensure_content(content: str | None) -> str:
    """Return ``content`` unchanged, or raise if it is not text or is blank."""
    if content is not None and not isinstance(content, str):
        raise ValidationError("Resource content must be text")
    if content is None or not content.strip():
        raise EmptySourceError()
    return content


@dataclass
class Resource:
    """Core domain entity: a unit of source material submitted to the knowledge base.

    A Resource exclusively owns its chunks; deleting it deletes them.
    Blank content is rejected at construction, before anything touches the store.
    """

    content: str
    id: str | None = None
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    updated_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    def __post_init__(self) -> None:
        ensure_content(self.content)
