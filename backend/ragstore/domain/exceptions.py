"""Domain-specific exceptions — framework-independent."""


class EntityNotFoundError(Exception):
    """Raised when a requested entity does not exist."""

    def __init__(self, entity_type: str, entity_id: int | str):
        self.entity_type = entity_type
        self.entity_id = entity_id
        super().__init__(f"{entity_type} with id '{entity_id}' not found")


class ValidationError(Exception):
    """Raised for empty or malformed input, before any I/O happens.

    The message is always safe to show to an end user.
    """


class EmptySourceError(ValidationError):
    """Raised when source text is empty or chunks to nothing."""

    def __init__(self, message: str = "Resource content must not be empty"):
        super().__init__(message)


class ConfigurationError(Exception):
    """Raised when the knowledge base is wired with inconsistent settings."""


class EmbeddingProviderError(Exception):
    """Raised when an embedding provider call fails or returns unusable data.

    Provider-agnostic — works for OpenAI, OpenRouter, a local server, etc.
    ``status_code`` is 0 when the request never produced an HTTP response.
    """

    def __init__(self, provider: str, status_code: int, message: str):
        self.provider = provider
        self.status_code = status_code
        self.message = message
        super().__init__(f"[{provider}] {status_code}: {message}")


class StoreError(Exception):
    """Raised when the persistent store fails (connection loss, constraint violation)."""

    def __init__(self, operation: str):
        self.operation = operation
        super().__init__(f"Store operation '{operation}' failed")


class PipelineError(Exception):
    """Base for orchestration failures; records which stage failed.

    The underlying cause is chained via ``raise ... from``; ``str()`` only names
    the stage so provider/store internals never leak through the message.
    """

    operation = "pipeline"

    def __init__(self, stage: str):
        self.stage = stage
        super().__init__(f"{self.operation} failed at stage '{stage}'")


class IngestionError(PipelineError):
    """Raised when a resource could not be stored, chunked, or embedded."""

    operation = "Ingestion"


class RetrievalError(PipelineError):
    """Raised when a query could not be embedded or searched."""

    operation = "Retrieval"
