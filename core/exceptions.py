"""Custom exception classes for the application.

Defines domain-specific exceptions that can be raised throughout the
application and handled consistently by exception handlers.
"""

from typing import Optional, Any, Dict


class AppException(Exception):
    """Base exception class for all application exceptions.

    Attributes:
        message: Human-readable error message.
        status_code: HTTP status code to return.
        details: Optional additional error details.
    """

    def __init__(
        self,
        message: str,
        status_code: int = 500,
        details: Optional[Dict[str, Any]] = None
    ):
        """Initialize application exception.

        Args:
            message: Error message.
            status_code: HTTP status code (default: 500).
            details: Optional dictionary with additional error context.
        """
        self.message = message
        self.status_code = status_code
        self.details = details or {}
        super().__init__(self.message)


class NotFoundError(AppException):
    """Exception raised when a requested resource is not found."""

    def __init__(self, resource: str, identifier: Any):
        """Initialize not found error.

        Args:
            resource: Type of resource (e.g., 'DietHistory', 'Recipe').
            identifier: ID or identifier that was not found.
        """
        message = f"{resource} with id '{identifier}' not found"
        super().__init__(message, status_code=404, details={"resource": resource, "id": str(identifier)})


class ValidationError(AppException):
    """Exception raised when an entity invariant is violated."""

    def __init__(self, message: str, field: Optional[str] = None):
        """Initialize validation error.

        Args:
            message: Validation error message.
            field: Optional field name that failed validation.
        """
        details = {"field": field} if field else {}
        super().__init__(message, status_code=400, details=details)


class ParseError(AppException):
    """Exception raised when an identifier or date string cannot be parsed."""

    def __init__(self, message: str, field: Optional[str] = None, value: Optional[str] = None):
        """Initialize parse error.

        Args:
            message: Parse error message.
            field: Optional field name carrying the malformed value.
            value: Optional raw value that failed to parse.
        """
        details = {}
        if field:
            details["field"] = field
        if value is not None:
            details["value"] = value
        super().__init__(message, status_code=400, details=details)


class StorageError(AppException):
    """Exception raised when a store operation fails.

    Covers I/O, serialization, catalog loading and schema migration
    failures. ``operation`` and ``entity`` identify what was attempted.
    """

    def __init__(self, message: str, operation: Optional[str] = None, entity: Optional[str] = None):
        """Initialize storage error.

        Args:
            message: Storage error message.
            operation: Optional operation that failed (e.g., 'save_profile').
            entity: Optional entity/table involved (e.g., 'health_profiles').
        """
        details = {}
        if operation:
            details["operation"] = operation
        if entity:
            details["entity"] = entity
        super().__init__(message, status_code=500, details=details)
        self.operation = operation
        self.entity = entity


class ConfigurationError(AppException):
    """Exception raised when application configuration is invalid."""

    def __init__(self, message: str, config_key: Optional[str] = None):
        """Initialize configuration error.

        Args:
            message: Configuration error message.
            config_key: Optional configuration key that is invalid.
        """
        details = {"config_key": config_key} if config_key else {}
        super().__init__(message, status_code=500, details=details)
