"""Text chunking — splits resource content into ordered, embeddable fragments.

Every chunker honours the same contract: deterministic, order-preserving,
never returns empty strings, and raises EmptySourceError instead of
returning an empty list.
"""

import re
from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

from ragstore.domain.exceptions import ConfigurationError, EmptySourceError

if TYPE_CHECKING:
    from ragstore.config import KnowledgeBaseConfig

# ── Constants ───────────────────────────────────────────────────────
_SENTENCE_DELIMITERS = re.compile(r"[.!?]+")
_RECURSIVE_SEPARATORS = ("\n\n", "\n", ". ", " ")


class Chunker(ABC):
    """Port for text splitting strategies."""

    name: str = ""

    @abstractmethod
    def split(self, text: str) -> list[str]:
        """Split text into fragments; may return an empty list."""
        ...

    def chunk(self, text: str) -> list[str]:
        """Split ``text`` into an ordered list of non-empty fragments.

        Raises:
            EmptySourceError: if nothing but whitespace or delimiters remains.
        """
        fragments = [part for part in self.split(text or "") if part]
        if not fragments:
            raise EmptySourceError("Source text produced no chunks")
        return fragments


class SentenceChunker(Chunker):
    """Splits on sentence-terminating punctuation and trims each fragment.

    ``"The sky is blue. Grass is green."`` → ``["The sky is blue", "Grass is green"]``.
    """

    name = "sentence"

    def split(self, text: str) -> list[str]:
        return [part.strip() for part in _SENTENCE_DELIMITERS.split(text) if part.strip()]


class RecursiveChunker(Chunker):
    """Size-bounded recursive character splitter with overlap.

    Splits on paragraph breaks first, then lines, then sentences, then words,
    merging neighbouring pieces up to ``chunk_size`` characters. Each new chunk
    starts with the last ``chunk_overlap`` characters of the previous one.
    """

    name = "recursive"

    def __init__(self, chunk_size: int = 1200, chunk_overlap: int = 200):
        if chunk_size < 1 or not 0 <= chunk_overlap < chunk_size:
            raise ConfigurationError("chunk_overlap must be >= 0 and smaller than chunk_size")
        self._chunk_size = chunk_size
        self._chunk_overlap = chunk_overlap

    def split(self, text: str) -> list[str]:
        text = text.strip()
        if not text:
            return []
        if len(text) <= self._chunk_size:
            return [text]

        chunks: list[str] = []
        self._recursive_split(text, _RECURSIVE_SEPARATORS, chunks)
        return chunks

    def _recursive_split(self, text: str, separators: tuple[str, ...], chunks: list[str]) -> None:
        """Recursively split text using the separator hierarchy."""
        if len(text) <= self._chunk_size:
            if text.strip():
                chunks.append(text.strip())
            return

        remaining = separators
        sep = ""
        for index, candidate in enumerate(separators):
            if candidate in text:
                sep = candidate
                remaining = separators[index + 1:]
                break

        if not sep:
            # No separator left: hard cut on character boundaries.
            step = self._chunk_size - self._chunk_overlap
            for start in range(0, len(text), step):
                piece = text[start:start + self._chunk_size].strip()
                if piece:
                    chunks.append(piece)
                if start + self._chunk_size >= len(text):
                    break
            return

        current = ""
        for part in text.split(sep):
            if len(part) > self._chunk_size:
                if current.strip():
                    chunks.append(current.strip())
                    current = ""
                self._recursive_split(part, remaining, chunks)
                continue

            candidate = f"{current}{sep}{part}" if current else part
            if len(candidate) > self._chunk_size and current:
                chunks.append(current.strip())
                overlap = current[-self._chunk_overlap:] if self._chunk_overlap else ""
                current = f"{overlap}{sep}{part}" if overlap else part
                if len(current) > self._chunk_size:
                    current = part
            else:
                current = candidate

        if current.strip():
            chunks.append(current.strip())


def build_chunker(config: "KnowledgeBaseConfig") -> Chunker:
    """Instantiate the chunker named by ``config.chunking_strategy``."""
    if config.chunking_strategy == SentenceChunker.name:
        return SentenceChunker()
    if config.chunking_strategy == RecursiveChunker.name:
        return RecursiveChunker(chunk_size=config.chunk_size, chunk_overlap=config.chunk_overlap)
    raise ConfigurationError(f"Unknown chunking strategy '{config.chunking_strategy}'")
