from .resource import Resource, ensure_content
from .resource_chunk import NewChunk, ResourceChunk
from .search import IngestResult, ReconcileResult, SearchResult
from .tool_call import ToolCall, ToolCallFunction

__all__ = [
    "Resource",
    "ensure_content",
    "NewChunk",
    "ResourceChunk",
    "IngestResult",
    "ReconcileResult",
    "SearchResult",
    "ToolCall",
    "ToolCallFunction",
]
