"""Abstract interface (port) for embedding generation."""

from abc import ABC, abstractmethod


class EmbeddingProvider(ABC):
    """Port for generating text embeddings — implemented in the infrastructure layer."""

    provider_name: str = "embedding"

    @abstractmethod
    async def embed_many(self, texts: list[str]) -> list[list[float]]:
        """Generate embedding vectors for a batch of texts.

        Args:
            texts: Ordered list of text strings to embed.

        Returns:
            One vector per input, in input order. Each vector has
            ``dimensions`` components.

        Raises:
            EmbeddingProviderError: on any failure; no partial results.
        """
        ...

    async def embed_one(self, text: str) -> list[float]:
        """Generate a single embedding, typically for a search query."""
        vectors = await self.embed_many([text])
        return vectors[0]

    @property
    @abstractmethod
    def dimensions(self) -> int:
        """Return the dimensionality of the embedding vectors produced by this provider."""
        ...
