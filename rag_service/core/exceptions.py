"""
Exception hierarchy for the RAG service.

Provides layered exception structure for domain-specific errors.
All exceptions include context for observability and debugging, and a
status code the HTTP layer maps onto its response.

Dependencies: None (pure domain layer)
System role: Centralized exception handling across the application
"""

from typing import Any


class RAGServiceException(Exception):
    """Base exception for all RAG service errors."""

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


class ValidationError(RAGServiceException):
    """Raised when input validation fails."""

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


class UnauthorizedError(RAGServiceException):
    """Raised when a provider credential is missing."""

    status_code = 401

    def __init__(
        self,
        message: str,
        provider: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """
        Initialize unauthorized error.

        Args:
            message: Error message
            provider: Provider whose credential is missing
            details: Additional context
        """
        details = details or {}
        if provider:
            details["provider"] = provider
        super().__init__(message, details)


class NotFoundError(RAGServiceException):
    """Raised when an operation targets an unknown identifier."""

    status_code = 404

    def __init__(
        self,
        message: str,
        resource_id: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """
        Initialize not found error.

        Args:
            message: Error message
            resource_id: Identifier that could not be resolved
            details: Additional context
        """
        details = details or {}
        if resource_id:
            details["resource_id"] = resource_id
        super().__init__(message, details)


class UpstreamError(RAGServiceException):
    """Base exception for embedding and generation backend failures."""

    status_code = 502

    def __init__(
        self,
        message: str,
        provider: str | None = None,
        upstream_status: int | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """
        Initialize upstream error.

        Args:
            message: Error message
            provider: Backend that failed
            upstream_status: HTTP status returned by the backend, if any
            details: Additional context
        """
        details = details or {}
        if provider:
            details["provider"] = provider
        if upstream_status is not None:
            details["upstream_status"] = upstream_status
        self.upstream_status = upstream_status
        super().__init__(message, details)


class EmbeddingError(UpstreamError):
    """Raised when embedding generation fails."""

    pass


class GenerationError(UpstreamError):
    """Raised when a generation backend fails or returns no text."""

    pass


class StreamingNotSupportedError(UpstreamError):
    """Raised when streaming is requested from a backend that cannot stream."""

    status_code = 501


class InternalError(RAGServiceException):
    """Raised for serialization and filesystem failures."""

    status_code = 500


class VectorStoreError(InternalError):
    """Raised when vector store persistence fails."""

    def __init__(
        self,
        message: str,
        operation: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """
        Initialize vector store error.

        Args:
            message: Error message
            operation: Operation that failed (load, add, delete, clear)
            details: Additional context
        """
        details = details or {}
        if operation:
            details["operation"] = operation
        super().__init__(message, details)
