"""Unit tests for the HttpEmbeddingProvider."""

import json

import httpx
import pytest

from ragstore.domain.exceptions import EmbeddingProviderError
from ragstore.infrastructure.embeddings import HttpEmbeddingProvider


# ── Helpers ──


def _embeddings_body(vectors: list[list[float]], *, reverse: bool = False) -> dict:
    """Build an OpenAI-style embeddings JSON response."""
    data = [
        {"object": "embedding", "index": i, "embedding": vector}
        for i, vector in enumerate(vectors)
    ]
    if reverse:
        data.reverse()
    return {"object": "list", "data": data, "model": "text-embedding-ada-002"}


def _vector_for(text: str, dims: int = 3) -> list[float]:
    return [float(len(text))] + [0.0] * (dims - 1)


class _RecordingHandler:
    """MockTransport handler echoing one vector per input and recording requests."""

    def __init__(self, dims: int = 3, status_code: int = 200, body: dict | None = None):
        self.requests: list[dict] = []
        self.headers: list[httpx.Headers] = []
        self._dims = dims
        self._status_code = status_code
        self._body = body

    def __call__(self, request: httpx.Request) -> httpx.Response:
        payload = json.loads(request.content)
        self.requests.append(payload)
        self.headers.append(request.headers)
        if self._body is not None:
            return httpx.Response(self._status_code, json=self._body)
        vectors = [_vector_for(text, self._dims) for text in payload["input"]]
        return httpx.Response(self._status_code, json=_embeddings_body(vectors))


def _provider(handler, **kwargs) -> HttpEmbeddingProvider:
    client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
    kwargs.setdefault("model_dimensions", 3)
    return HttpEmbeddingProvider(
        api_key="sk-test",
        base_url="https://embeddings.test/v1/",
        http_client=client,
        **kwargs,
    )


# ── Tests ──


@pytest.mark.asyncio
async def test_embed_many_returns_one_vector_per_text_in_order():
    handler = _RecordingHandler()
    provider = _provider(handler)

    vectors = await provider.embed_many(["a", "bbb", "cc"])

    assert vectors == [[1.0, 0.0, 0.0], [3.0, 0.0, 0.0], [2.0, 0.0, 0.0]]
    assert handler.requests[0] == {"model": "text-embedding-ada-002", "input": ["a", "bbb", "cc"]}
    assert handler.headers[0]["authorization"] == "Bearer sk-test"


@pytest.mark.asyncio
async def test_embed_many_with_empty_input_makes_no_request():
    handler = _RecordingHandler()
    assert await _provider(handler).embed_many([]) == []
    assert handler.requests == []


@pytest.mark.asyncio
async def test_embed_many_batches_sequentially():
    handler = _RecordingHandler()
    provider = _provider(handler, batch_size=2)

    vectors = await provider.embed_many(["a", "bb", "ccc", "dddd", "eeeee"])

    assert [r["input"] for r in handler.requests] == [["a", "bb"], ["ccc", "dddd"], ["eeeee"]]
    assert [v[0] for v in vectors] == [1.0, 2.0, 3.0, 4.0, 5.0]


@pytest.mark.asyncio
async def test_out_of_order_response_is_sorted_by_index():
    body = _embeddings_body([[1.0, 0.0, 0.0], [2.0, 0.0, 0.0]], reverse=True)
    provider = _provider(_RecordingHandler(body=body))

    vectors = await provider.embed_many(["x", "y"])

    assert vectors == [[1.0, 0.0, 0.0], [2.0, 0.0, 0.0]]


@pytest.mark.asyncio
async def test_embed_one_returns_single_vector():
    provider = _provider(_RecordingHandler())
    assert await provider.embed_one("four") == [4.0, 0.0, 0.0]


@pytest.mark.asyncio
async def test_dimensions_field_only_sent_when_enabled():
    handler = _RecordingHandler()
    await _provider(handler, send_dimensions=True).embed_many(["a"])
    assert handler.requests[0]["dimensions"] == 3


@pytest.mark.asyncio
async def test_error_status_raises_provider_error_with_message():
    body = {"error": {"message": "Invalid API key", "type": "invalid_request_error"}}
    provider = _provider(_RecordingHandler(status_code=401, body=body))

    with pytest.raises(EmbeddingProviderError) as exc_info:
        await provider.embed_many(["a"])

    assert exc_info.value.status_code == 401
    assert exc_info.value.message == "Invalid API key"
    assert exc_info.value.provider == "openai-compatible"


@pytest.mark.asyncio
async def test_transport_failure_raises_provider_error():
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    with pytest.raises(EmbeddingProviderError) as exc_info:
        await _provider(handler).embed_many(["a"])

    assert exc_info.value.status_code == 0
    assert isinstance(exc_info.value.__cause__, httpx.ConnectError)


@pytest.mark.asyncio
async def test_count_mismatch_raises_provider_error():
    body = _embeddings_body([[1.0, 0.0, 0.0]])
    with pytest.raises(EmbeddingProviderError, match="Expected 2 embeddings"):
        await _provider(_RecordingHandler(body=body)).embed_many(["a", "b"])


@pytest.mark.asyncio
async def test_dimension_mismatch_raises_provider_error():
    provider = _provider(_RecordingHandler(dims=5))
    with pytest.raises(EmbeddingProviderError, match="3-dimensional"):
        await provider.embed_many(["a"])


@pytest.mark.asyncio
async def test_malformed_body_raises_provider_error():
    provider = _provider(_RecordingHandler(body={"unexpected": True}))
    with pytest.raises(EmbeddingProviderError, match="Malformed"):
        await provider.embed_many(["a"])


@pytest.mark.asyncio
@pytest.mark.parametrize("indexes", [[1, 1], [0, 2], [1, 2]])
async def test_duplicate_or_missing_indexes_raise_provider_error(indexes):
    body = _embeddings_body([[1.0, 0.0, 0.0], [2.0, 0.0, 0.0]])
    for item, index in zip(body["data"], indexes):
        item["index"] = index

    with pytest.raises(EmbeddingProviderError, match="Malformed"):
        await _provider(_RecordingHandler(body=body)).embed_many(["a", "b"])
