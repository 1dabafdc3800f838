"""
Custom application-specific exceptions.

Every exception carries the HTTP status the API layer should answer with.
"""
from typing import List, Optional


class BaseAppException(Exception):
    """Base exception for the application."""
    http_status = 500
    default_message = "Error processing the request"

    def __init__(self, message: Optional[str] = None):
        super().__init__(message or self.default_message)


class InvalidArgumentError(BaseAppException, ValueError):
    """Raised for malformed caller input."""
    http_status = 400


class NotFoundError(BaseAppException):
    """Raised when a quiz name or an issued quiz id is unknown."""
    http_status = 404


class InvalidStateError(BaseAppException):
    """Raised when the service is missing something it needs, e.g. its configuration."""
    http_status = 500


class ConfigurationError(InvalidStateError):
    """Raised when the quiz configuration cannot be loaded or fails validation."""

    def __init__(self, message: Optional[str] = None, violations: Optional[List] = None):
        self.violations = list(violations or [])
        if message is None and self.violations:
            message = "Invalid quiz configuration: " + "; ".join(str(v) for v in self.violations)
        super().__init__(message)


class ResultPersistenceError(BaseAppException):
    """Raised when a graded quiz result cannot be written to disk."""
    http_status = 500
    default_message = "Error while saving quiz results."
