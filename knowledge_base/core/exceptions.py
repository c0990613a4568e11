"""
Exception hierarchy for the knowledge base application.

Provides layered exception structure for domain-specific errors.
All exceptions include context for observability and debugging, and carry
the HTTP status the API layer should map them to.

Dependencies: None (pure domain layer)
System role: Centralized exception handling across the application
"""

from typing import Any


class KnowledgeBaseException(Exception):
    """Base exception for all knowledge base application errors."""

    status_code: int = 500

    def __init__(
        self,
        message: str,
        details: dict[str, Any] | None = None,
        hint: str | None = None,
    ) -> None:
        """
        Initialize base exception with message and optional context.

        Args:
            message: Human-readable error message
            details: Optional dictionary of additional context for debugging
            hint: Optional user-facing suggestion for resolving the error
        """
        self.message = message
        self.details = details or {}
        self.hint = hint
        super().__init__(message)

    def __str__(self) -> str:
        """Return string representation including details."""
        if self.details:
            return f"{self.message} | Details: {self.details}"
        return self.message


class ValidationError(KnowledgeBaseException):
    """Raised when input validation fails."""

    status_code = 400

    def __init__(
        self,
        message: str,
        field: str | None = None,
        details: dict[str, Any] | None = None,
        hint: str | None = None,
    ) -> None:
        """
        Initialize validation error.

        Args:
            message: Error message
            field: Field name that failed validation
            details: Additional context
            hint: Optional user-facing suggestion
        """
        details = details or {}
        if field:
            details["field"] = field
        super().__init__(message, details, hint)


class DocumentNotFoundError(KnowledgeBaseException):
    """Raised when a document slug does not exist in a collection."""

    status_code = 404

    def __init__(self, collection: str, slug: str) -> None:
        """
        Initialize document not found error.

        Args:
            collection: Collection name (articles, profiles)
            slug: Missing document slug
        """
        super().__init__(
            f"{collection[:-1].capitalize()} not found: {slug}",
            details={"collection": collection, "slug": slug},
        )


class UnauthorizedError(KnowledgeBaseException):
    """Raised when a write is attempted without the correct edit token."""

    def __init__(self, message: str = "Unauthorized", status_code: int = 401) -> None:
        """
        Initialize unauthorized error.

        Args:
            message: Error message
            status_code: 401 when the token is missing, 403 when it is wrong
        """
        super().__init__(message)
        self.status_code = status_code


class ConfigurationError(KnowledgeBaseException):
    """Raised when required configuration is missing."""

    def __init__(self, message: str, setting: str | None = None, hint: str | None = None) -> None:
        details = {"setting": setting} if setting else None
        super().__init__(message, details, hint=hint or "Check the server environment configuration")


class UpstreamServiceError(KnowledgeBaseException):
    """Raised when the embedding or generation service fails or returns malformed data."""

    def __init__(
        self,
        message: str,
        service: str,
        upstream_error: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """
        Initialize upstream service error.

        Args:
            message: Error message
            service: Which upstream failed ("embedding" or "generation")
            upstream_error: Upstream error payload for diagnostics
            details: Additional context
        """
        details = details or {}
        details["service"] = service
        if upstream_error:
            details["upstream_error"] = upstream_error
        super().__init__(message, details, hint="The upstream model service failed; try again later")


class VectorStoreError(KnowledgeBaseException):
    """Raised when chunk storage or vector query operations fail."""

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
            operation: Operation that failed (search, replace, delete)
            details: Additional context
        """
        details = details or {}
        if operation:
            details["operation"] = operation
        super().__init__(message, details)
