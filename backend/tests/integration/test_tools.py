"""Integration tests for the agent-facing knowledge-base tools."""

import json

import pytest

from ragstore.application.interfaces import EmbeddingProvider
from ragstore.domain.entities import ToolCall, ToolCallFunction
from ragstore.domain.exceptions import EmbeddingProviderError, ValidationError
from ragstore.infrastructure.dependencies import build_services
from ragstore.presentation.tools import TOOL_DEFINITIONS, KnowledgeBaseToolbox


class TimeoutEmbeddingProvider(EmbeddingProvider):
    provider_name = "timeout"

    @property
    def dimensions(self) -> int:
        return 8

    async def embed_many(self, texts: list[str]) -> list[list[float]]:
        raise EmbeddingProviderError(self.provider_name, 0, "ReadTimeout while calling the embedding API")


def _toolbox(session_factory, provider, config) -> KnowledgeBaseToolbox:
    return KnowledgeBaseToolbox(
        session_factory=session_factory,
        services_factory=lambda session: build_services(
            session, embedding_provider=provider, config=config
        ),
    )


def _call(name: str, **arguments) -> ToolCall:
    return ToolCall(
        id="call_1",
        type="function",
        function=ToolCallFunction(name=name, arguments=json.dumps(arguments)),
    )


def test_tool_definitions_name_both_tools():
    names = [tool["function"]["name"] for tool in TOOL_DEFINITIONS]
    assert names == ["add_resource", "get_information"]
    assert TOOL_DEFINITIONS[0]["function"]["parameters"]["required"] == ["content"]
    assert TOOL_DEFINITIONS[1]["function"]["parameters"]["required"] == ["question"]


@pytest.mark.asyncio
async def test_add_then_get_information(session_factory, embedding_provider, kb_config):
    toolbox = _toolbox(session_factory, embedding_provider, kb_config)

    added = await toolbox.add_resource("The sky is blue. Grass is green.")
    info = await toolbox.get_information("What color is the sky?")
    nothing = await toolbox.get_information("What is my favorite food?")

    assert added.ok
    assert added.message == "Resource successfully created and embedded."
    assert info[0]["content"] == "The sky is blue"
    assert info[0]["similarity"] > 0.5
    assert nothing == []


@pytest.mark.asyncio
async def test_add_resource_with_blank_content_returns_message(session_factory, embedding_provider, kb_config):
    result = await _toolbox(session_factory, embedding_provider, kb_config).add_resource("  ")

    assert not result.ok
    assert result.message == "Resource content must not be empty"
    assert embedding_provider.calls == []


@pytest.mark.asyncio
async def test_add_resource_failure_leaves_no_orphan(session_factory, embedding_provider, kb_config):
    failing = _toolbox(session_factory, TimeoutEmbeddingProvider(), kb_config)

    result = await failing.add_resource("The sky is blue.")

    assert result.id is None
    assert result.message == "Error, please try again."
    working = _toolbox(session_factory, embedding_provider, kb_config)
    assert await working.get_information("sky") == []
    async with session_factory() as session:
        services = build_services(session, embedding_provider=embedding_provider, config=kb_config)
        assert await services.resources.list_resources() == []


@pytest.mark.asyncio
async def test_get_information_failure_returns_message(session_factory, kb_config):
    result = await _toolbox(session_factory, TimeoutEmbeddingProvider(), kb_config).get_information("sky")
    assert result == "Could not search the knowledge base, please try again."


@pytest.mark.asyncio
async def test_dispatch_encodes_results_as_json(session_factory, embedding_provider, kb_config):
    toolbox = _toolbox(session_factory, embedding_provider, kb_config)

    added = json.loads(await toolbox.dispatch(_call("add_resource", content="Grass is green.")))
    found = json.loads(await toolbox.dispatch(_call("get_information", question="Is grass green?")))

    assert added["id"]
    assert found == [{"content": "Grass is green", "similarity": pytest.approx(1.0)}]


@pytest.mark.asyncio
async def test_dispatch_rejects_unknown_tool(session_factory, embedding_provider, kb_config):
    with pytest.raises(ValidationError):
        await _toolbox(session_factory, embedding_provider, kb_config).dispatch(_call("delete_everything"))


@pytest.mark.asyncio
async def test_add_resource_without_chunkable_content_returns_message(session_factory, embedding_provider, kb_config):
    toolbox = _toolbox(session_factory, embedding_provider, kb_config)

    result = await toolbox.add_resource("...")

    assert result.id is None
    assert result.message == "Source text produced no chunks"
    assert embedding_provider.calls == []


@pytest.mark.asyncio
@pytest.mark.parametrize(
    ("name", "arguments"),
    [
        ("add_resource", {"content": 5}),
        ("add_resource", {"content": None}),
        ("get_information", {"question": 5}),
        ("get_information", {"question": ["sky"]}),
    ],
)
async def test_dispatch_rejects_non_string_arguments(session_factory, embedding_provider, kb_config, name, arguments):
    toolbox = _toolbox(session_factory, embedding_provider, kb_config)

    with pytest.raises(ValidationError, match="must be a string"):
        await toolbox.dispatch(_call(name, **arguments))

    assert embedding_provider.calls == []
