"""Value objects returned by the retrieval and agent-facing ingestion paths."""

from dataclasses import dataclass


@dataclass(frozen=True)
class SearchResult:
    """A chunk that cleared the relevance floor, with its cosine similarity."""

    content: str
    similarity: float
    chunk_id: str = ""
    resource_id: str = ""

    def as_dict(self) -> dict[str, str | float]:
        """The shape exposed to the agent: ``{content, similarity}``."""
        return {"content": self.content, "similarity": self.similarity}


@dataclass(frozen=True)
class IngestResult:
    """Outcome of an agent-initiated ingestion: the new id (if any) and a short message."""

    id: str | None
    message: str

    @property
    def ok(self) -> bool:
        return self.id is not None


@dataclass(frozen=True)
class ReconcileResult:
    """Outcome of a reconciliation run.

    ``skipped_ids`` are orphans whose content yields no chunks; they can never
    be embedded and are left for an operator to delete.
    """

    repaired: int
    skipped_ids: tuple[str, ...] = ()

    @property
    def skipped(self) -> int:
        return len(self.skipped_ids)
