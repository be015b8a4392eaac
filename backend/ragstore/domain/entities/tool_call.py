"""Domain entities for agent tool calls addressed to the knowledge base."""

from dataclasses import dataclass


@dataclass
class ToolCallFunction:
    """The function invocation details within a tool call."""

    name: str
    arguments: str  # JSON-encoded arguments string


@dataclass
class ToolCall:
    """A tool call requested by the language model in its response."""

    id: str
    type: str  # "function"
    function: ToolCallFunction
