"""
Portfolio API - Custom Exception Hierarchy
===========================================

What:  Application-specific exceptions for the error scenarios of the API.
How:   Each exception carries a user-facing message and an optional context
       dict. Global exception handlers (registered in main.py) map them to
       structured JSON error responses with the matching HTTP status code.
Who:   Raised by services and routes; caught by the global handlers.

Exception Hierarchy:
    PortfolioError (base)
    ├── ValidationError           → 400 Bad Request
    ├── NotFoundError             → 404 Not Found
    ├── FileStorageError          → 500 Internal Server Error
    ├── DatabaseError             → 500 Internal Server Error
    └── StorageUnavailableError   → 503 Service Unavailable
"""

from typing import Any, Dict, Optional


class PortfolioError(Exception):
    """
    Base exception for all Portfolio API errors.

    Attributes:
        message:  User-facing error description (safe to return in API response)
        context:  Additional debug info (logged, only returned for 400s)
    """

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        context: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.context = context or {}
        super().__init__(self.message)


class ValidationError(PortfolioError):
    """
    Raised when client input fails validation.

    When:    Unknown or mistyped fields, malformed ids, empty or oversized uploads.
    HTTP:    400 Bad Request

    Example response:
        {
            "error": "validation_error",
            "message": "Request contains invalid fields",
            "details": {"errors": [{"field": "colour", "message": "Extra inputs are not permitted"}]}
        }
    """

    def __init__(
        self,
        message: str = "Validation failed",
        field: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        if field:
            ctx["field"] = field
        super().__init__(message=message, context=ctx)
        self.field = field


class NotFoundError(PortfolioError):
    """
    Raised when a record addressed by id does not exist.

    HTTP:    404 Not Found

    SQLAlchemy returns None for missing rows; the service layer converts that
    None into this exception.
    """

    def __init__(
        self,
        resource: str = "record",
        resource_id: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        message = f"The requested {resource} was not found"
        if resource_id:
            message = f"{resource} with ID '{resource_id}' was not found"
        ctx = context or {}
        ctx["resource"] = resource
        if resource_id:
            ctx["resource_id"] = resource_id
        super().__init__(message=message, context=ctx)


class FileStorageError(PortfolioError):
    """
    Raised when writing an uploaded file to disk fails.

    When:    Disk full, permission denied, upload directory not writable.
    HTTP:    500 Internal Server Error
    """

    def __init__(
        self,
        message: str = "File storage operation failed",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class DatabaseError(PortfolioError):
    """
    Raised when a database statement fails for a reason other than connectivity.

    HTTP:    500 Internal Server Error

    The message returned to the client is always generic. Statement text,
    constraint names and driver errors are logged server-side only.
    """

    def __init__(
        self,
        message: str = "A database error occurred. Please try again later.",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class StorageUnavailableError(PortfolioError):
    """
    Raised when the database cannot be reached.

    When:    Connection refused, connection dropped mid-statement, pool exhausted.
    HTTP:    503 Service Unavailable (clients may retry later)
    """

    def __init__(
        self,
        message: str = "The data store is temporarily unavailable. Please try again later.",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)
