"""
Exception hierarchy for the mediation service.

Provides layered exception structure for domain-specific errors.
All exceptions include context for observability and debugging.

Dependencies: None (pure domain layer)
System role: Centralized exception handling across the application
"""

from typing import Any


class MediatorException(Exception):
    """Base exception for all mediation service errors."""

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


class ValidationError(MediatorException):
    """Raised when input validation fails."""

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
        self.field = field
        super().__init__(message, details)


class NotFoundError(MediatorException):
    """Raised when a requested resource does not exist."""

    pass


class SessionNotFoundError(NotFoundError):
    """Raised when a session cannot be found by id or code."""

    def __init__(self, lookup: str, details: dict[str, Any] | None = None) -> None:
        """
        Initialize session not found error.

        Args:
            lookup: Session id or code that was looked up
            details: Additional context
        """
        details = details or {}
        details["session"] = lookup
        super().__init__(f"Session not found: {lookup}", details)


class AuthenticationError(MediatorException):
    """Raised when a PIN does not match the role being entered."""

    def __init__(
        self,
        message: str = "Incorrect PIN for this session",
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message, details)


class GatewayError(MediatorException):
    """Raised when a text-generation call fails, times out, or is unusable."""

    def __init__(
        self,
        message: str,
        operation: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """
        Initialize gateway error.

        Args:
            message: Error message
            operation: Gateway operation that failed (reply, summary, report)
            details: Additional context
        """
        details = details or {}
        if operation:
            details["operation"] = operation
        super().__init__(message, details)


class PersistenceError(MediatorException):
    """Raised when a store read or write fails; nothing is assumed committed."""

    def __init__(
        self,
        message: str,
        operation: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        details = details or {}
        if operation:
            details["operation"] = operation
        super().__init__(message, details)
