"""Embedding provider for OpenAI-compatible ``/embeddings`` endpoints.

Works against OpenAI, OpenRouter, Azure-style gateways and local servers
(Ollama, vLLM, LM Studio) that accept
``{"model": ..., "input": [...]}`` and answer
``{"data": [{"index": i, "embedding": [...]}, ...]}``.
Default model: text-embedding-ada-002 (1536 dimensions).
"""

import logging
from typing import Any

import httpx

from ragstore.application.interfaces.embedding_provider import EmbeddingProvider
from ragstore.domain.exceptions import EmbeddingProviderError

logger = logging.getLogger(__name__)

_DEFAULT_BATCH_SIZE = 50  # Max texts per embedding API call


class HttpEmbeddingProvider(EmbeddingProvider):
    """Infrastructure adapter — generates embeddings via an OpenAI-compatible HTTP API.

    Batches are sent sequentially so the output order always matches the
    input order. Any failure aborts the whole call; nothing is retried here.
    """

    provider_name = "openai-compatible"

    def __init__(
        self,
        api_key: str,
        base_url: str = "https://api.openai.com/v1",
        model: str = "text-embedding-ada-002",
        model_dimensions: int = 1536,
        *,
        batch_size: int = _DEFAULT_BATCH_SIZE,
        timeout: float = 60.0,
        send_dimensions: bool = False,
        http_client: httpx.AsyncClient | None = None,
    ):
        self._api_key = api_key
        self._base_url = base_url.rstrip("/")
        self._model = model
        self._dimensions = model_dimensions
        self._batch_size = max(1, batch_size)
        self._timeout = timeout
        self._send_dimensions = send_dimensions
        self._http_client = http_client

    @property
    def dimensions(self) -> int:
        return self._dimensions

    @property
    def model(self) -> str:
        return self._model

    def _get_headers(self) -> dict[str, str]:
        headers = {"Content-Type": "application/json"}
        if self._api_key:
            headers["Authorization"] = f"Bearer {self._api_key}"
        return headers

    async def _get_client(self) -> httpx.AsyncClient:
        if self._http_client is not None:
            return self._http_client
        return httpx.AsyncClient(timeout=self._timeout)

    async def embed_many(self, texts: list[str]) -> list[list[float]]:
        """Generate embeddings for ``texts``, one vector per input, in order."""
        if not texts:
            return []

        client = await self._get_client()
        should_close = self._http_client is None

        vectors: list[list[float]] = []
        try:
            for batch_start in range(0, len(texts), self._batch_size):
                batch = texts[batch_start : batch_start + self._batch_size]
                vectors.extend(await self._embed_batch(client, batch))
        finally:
            if should_close:
                await client.aclose()

        logger.info(
            "Generated %d embeddings (model=%s, dims=%d)",
            len(vectors),
            self._model,
            self._dimensions,
        )
        return vectors

    async def _embed_batch(self, client: httpx.AsyncClient, batch: list[str]) -> list[list[float]]:
        url = f"{self._base_url}/embeddings"
        payload: dict[str, Any] = {
            "model": self._model,
            "input": batch,
        }
        if self._send_dimensions:
            payload["dimensions"] = self._dimensions

        try:
            response = await client.post(url, headers=self._get_headers(), json=payload)
        except httpx.HTTPError as exc:
            logger.error("Embedding request failed: %s", exc)
            raise EmbeddingProviderError(
                provider=self.provider_name,
                status_code=0,
                message=f"{type(exc).__name__} while calling the embedding API",
            ) from exc

        if response.status_code != 200:
            self._raise_provider_error(response)

        vectors = self._parse_vectors(response)
        if len(vectors) != len(batch):
            raise EmbeddingProviderError(
                provider=self.provider_name,
                status_code=response.status_code,
                message=f"Expected {len(batch)} embeddings, received {len(vectors)}",
            )
        for vector in vectors:
            if len(vector) != self._dimensions:
                raise EmbeddingProviderError(
                    provider=self.provider_name,
                    status_code=response.status_code,
                    message=(
                        f"Expected {self._dimensions}-dimensional embeddings, "
                        f"received {len(vector)}"
                    ),
                )
        return vectors

    def _parse_vectors(self, response: httpx.Response) -> list[list[float]]:
        """Extract vectors from the response body, ordered by their ``index`` field."""
        try:
            items = response.json()["data"]
            # Providers may answer out of order.
            indexed = sorted(
                ((item.get("index", position), item["embedding"]) for position, item in enumerate(items)),
                key=lambda pair: pair[0],
            )
            if [index for index, _ in indexed] != list(range(len(indexed))):
                raise ValueError("embedding indexes must cover 0..n-1 exactly once")
            return [[float(v) for v in embedding] for _, embedding in indexed]
        except (ValueError, KeyError, TypeError, AttributeError) as exc:
            raise EmbeddingProviderError(
                provider=self.provider_name,
                status_code=response.status_code,
                message="Malformed embeddings response",
            ) from exc

    def _raise_provider_error(self, response: httpx.Response) -> None:
        """Raise EmbeddingProviderError from a non-200 httpx Response."""
        try:
            error = response.json().get("error", {})
            message = error.get("message", response.text) if isinstance(error, dict) else str(error)
        except (ValueError, AttributeError):
            message = response.text
        logger.error("Embedding API error %d: %s", response.status_code, message[:500])

        raise EmbeddingProviderError(
            provider=self.provider_name,
            status_code=response.status_code,
            message=message[:500],
        )
