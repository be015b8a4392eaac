"""Agent tool adapter — exposes the knowledge base as two function-calling tools.

``add_resource`` stores new knowledge; ``get_information`` looks it up.
Each tool call runs in its own unit of work, and failures come back to the
model as short messages instead of exceptions.
"""

import json
import logging
from collections.abc import Callable
from typing import Any

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from ragstore.application.services.ingestion_service import (
    INGEST_FAILURE_MESSAGE,
    INGEST_SUCCESS_MESSAGE,
)
from ragstore.application.services.retrieval_service import RETRIEVAL_FAILURE_MESSAGE
from ragstore.domain.entities import IngestResult, ToolCall
from ragstore.domain.exceptions import (
    IngestionError,
    RetrievalError,
    StoreError,
    ValidationError,
)
from ragstore.infrastructure.database.session import async_session_factory, session_scope
from ragstore.infrastructure.dependencies import KnowledgeBaseServices, build_services

logger = logging.getLogger(__name__)

TOOL_DEFINITIONS: list[dict[str, Any]] = [
    {
        "type": "function",
        "function": {
            "name": "add_resource",
            "description": (
                "Add a resource to your knowledge base. If the user provides a random "
                "piece of knowledge unprompted, use this tool without asking for confirmation."
            ),
            "parameters": {
                "type": "object",
                "properties": {
                    "content": {
                        "type": "string",
                        "description": "The content or resource to add to the knowledge base",
                    },
                },
                "required": ["content"],
            },
        },
    },
    {
        "type": "function",
        "function": {
            "name": "get_information",
            "description": "Get information from your knowledge base to answer questions.",
            "parameters": {
                "type": "object",
                "properties": {
                    "question": {
                        "type": "string",
                        "description": "The user's question",
                    },
                },
                "required": ["question"],
            },
        },
    },
]


class KnowledgeBaseToolbox:
    """Executes knowledge-base tool calls requested by a chat model."""

    def __init__(
        self,
        session_factory: async_sessionmaker[AsyncSession] | None = None,
        services_factory: Callable[[AsyncSession], KnowledgeBaseServices] = build_services,
    ):
        self._session_factory = session_factory or async_session_factory
        self._services_factory = services_factory

    async def add_resource(self, content: str) -> IngestResult:
        """Ingest ``content``; never raises for expected failures."""
        try:
            async with session_scope(self._session_factory) as session:
                resource = await self._services_factory(session).ingestion.ingest(content)
        except ValidationError as e:
            return IngestResult(id=None, message=str(e))
        except IngestionError as e:
            if isinstance(e.__cause__, ValidationError):
                return IngestResult(id=None, message=str(e.__cause__))
            logger.warning("add_resource failed: %s", e, exc_info=e)
            return IngestResult(id=None, message=INGEST_FAILURE_MESSAGE)
        except StoreError as e:
            logger.warning("add_resource failed: %s", e, exc_info=e)
            return IngestResult(id=None, message=INGEST_FAILURE_MESSAGE)
        return IngestResult(id=resource.id, message=INGEST_SUCCESS_MESSAGE)

    async def get_information(self, question: str) -> list[dict[str, Any]] | str:
        """Relevant chunks as ``{content, similarity}`` dicts, or an error message."""
        try:
            async with session_scope(self._session_factory) as session:
                results = await self._services_factory(session).retrieval.retrieve(question)
        except ValidationError as e:
            return str(e)
        except (RetrievalError, StoreError) as e:
            logger.warning("get_information failed: %s", e, exc_info=e)
            return RETRIEVAL_FAILURE_MESSAGE
        return [r.as_dict() for r in results]

    async def dispatch(self, tool_call: ToolCall) -> str:
        """Run ``tool_call`` and return its JSON-encoded result for the model.

        Raises:
            ValidationError: unknown tool name or unparseable arguments.
        """
        name = tool_call.function.name
        try:
            arguments = json.loads(tool_call.function.arguments or "{}")
        except json.JSONDecodeError as e:
            raise ValidationError(f"Invalid arguments for tool '{name}'") from e
        if not isinstance(arguments, dict):
            raise ValidationError(f"Invalid arguments for tool '{name}'")

        logger.debug("Dispatching tool call %s (%s)", tool_call.id, name)
        if name == "add_resource":
            result = await self.add_resource(_text_argument(name, arguments, "content"))
            return json.dumps({"id": result.id, "message": result.message})
        if name == "get_information":
            return json.dumps(await self.get_information(_text_argument(name, arguments, "question")))
        raise ValidationError(f"Unknown tool '{name}'")


def _text_argument(tool_name: str, arguments: dict[str, Any], key: str) -> str:
    value = arguments.get(key, "")
    if not isinstance(value, str):
        raise ValidationError(f"Argument '{key}' for tool '{tool_name}' must be a string")
    return value
