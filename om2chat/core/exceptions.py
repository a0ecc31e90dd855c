"""
Exception hierarchy for the om2chat application.

Provides layered exception structure for domain-specific errors.
All exceptions include context for observability and debugging, plus the
HTTP status the API layer reports them with.

Dependencies: None (pure domain layer)
System role: Centralized exception handling across the application
"""

from typing import Any


class Om2ChatException(Exception):
    """Base exception for all om2chat application errors."""

    status_code: int = 500

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        """
        Initialize base exception with message and optional context.

        Args:
            message: Human-readable error message
            details: Optional dictionary of additional context for debugging
        """
        self.message = message
        self.details = details or {}
        super().__init__(message)

    def __str__(self) -> str:
        """Return string representation including details."""
        if self.details:
            return f"{self.message} | Details: {self.details}"
        return self.message


class ConfigurationError(Om2ChatException):
    """Raised when required configuration (e.g. OPENAI_API_KEY) is missing."""

    def __init__(self, setting: str, details: dict[str, Any] | None = None) -> None:
        details = details or {}
        details["setting"] = setting
        super().__init__(f"Missing {setting}", details)


class InvalidInputError(Om2ChatException):
    """Raised when a request body is malformed or a field is missing."""

    status_code = 400

    def __init__(
        self,
        message: str,
        field: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """
        Initialize validation error.

        Args:
            message: Error message
            field: Field name that failed validation
            details: Additional context
        """
        details = details or {}
        if field:
            details["field"] = field
        super().__init__(message, details)


class DocumentNotFoundError(Om2ChatException):
    """Raised when a document cannot be found."""

    status_code = 404

    def __init__(self, document_id: str, details: dict[str, Any] | None = None) -> None:
        """
        Initialize document not found error.

        Args:
            document_id: ID of the missing document
            details: Additional context
        """
        details = details or {}
        details["document_id"] = str(document_id)
        super().__init__("Document not found", details)


class PublicLinkNotFoundError(Om2ChatException):
    """Raised when a share link token or ID is unknown, or the link is inactive."""

    status_code = 404

    def __init__(self, reference: str, details: dict[str, Any] | None = None) -> None:
        details = details or {}
        details["reference"] = str(reference)
        super().__init__("Public link not found or inactive", details)


class PipelineStageError(Om2ChatException):
    """
    Base for failures of an outbound step of the chat pipeline.

    ``message`` keeps the upstream provider message; ``public_message``
    prefixes it with the stage that failed.
    """

    stage_prefix: str = "Pipeline stage failed"

    def __init__(
        self,
        message: str,
        document_id: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        details = details or {}
        if document_id:
            details["document_id"] = str(document_id)
        super().__init__(message, details)

    @property
    def public_message(self) -> str:
        """Message reported to API clients."""
        return f"{self.stage_prefix}: {self.message}"


class EmbeddingFailure(PipelineStageError):
    """Raised when embedding generation fails."""

    stage_prefix = "Failed to get embedding"


class SearchFailure(PipelineStageError):
    """Raised when the vector similarity search fails."""

    stage_prefix = "Vector search failed"


class CompletionFailure(PipelineStageError):
    """Raised when the chat completion call fails."""

    stage_prefix = "OpenAI completion failed"


class PersistenceFailure(Om2ChatException):
    """Raised (and only logged) when chat history cannot be written."""

    pass


class IngestionError(Om2ChatException):
    """Raised when a document cannot be chunked, embedded or stored."""

    def __init__(
        self,
        message: str,
        document_id: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        details = details or {}
        if document_id:
            details["document_id"] = str(document_id)
        super().__init__(message, details)
