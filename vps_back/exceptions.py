"""
vps-back — Custom Exception Hierarchy
======================================

What:  Application-specific exceptions for the error scenarios of the API.
How:   Each exception class carries a message and optional context dict.
       Global exception handlers (registered in main.py) catch these and
       return the JSON error envelope with the matching HTTP status code.
Who:   Raised by services, dependencies and routes; caught by global handlers.

Exception Hierarchy:
    VpsBackError (base)
    ├── ValidationError          → 400 Bad Request (client can fix)
    ├── UnauthorizedError        → 401 Unauthorized
    ├── NotFoundError            → 404 Not Found
    └── InternalError            → 500 Internal Server Error (generic message)
        ├── DatabaseError
        └── HeaderEncodingError

Error envelope:
    {
        "error": {"code": "not_found", "message": "Unknown project: foo"},
        "request_id": "a1b2c3d4"
    }
"""

from typing import Any, Dict, Optional


class VpsBackError(Exception):
    """
    Base exception for all application errors.

    Attributes:
        message:  User-facing error description (safe to return in API response)
        context:  Additional debug info (logged but NOT returned to client)
    """

    code = "internal_server_error"
    status_code = 500

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        context: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.context = context or {}
        super().__init__(self.message)


class ValidationError(VpsBackError):
    """
    Raised when client input fails a business rule.

    When:    Unparsable bottle filename, blank source name.
    HTTP:    400 Bad Request

    Schema-level problems (wrong JSON types, out-of-range coordinates) are
    rejected earlier by FastAPI with its own 422 response.
    """

    code = "validation_error"
    status_code = 400

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


class UnauthorizedError(VpsBackError):
    """Missing or wrong `x-api-key` on a /secure route. HTTP 401."""

    code = "unauthorized"
    status_code = 401

    def __init__(
        self,
        message: str = "Invalid API key",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class NotFoundError(VpsBackError):
    """
    Raised when a requested resource does not exist.

    When:    Unknown Homebrew project, sticker id with no row.
    HTTP:    404 Not Found

    SQLAlchemy returns None for missing records; services convert that
    None into this exception so routes never deal with status codes.
    """

    code = "not_found"
    status_code = 404

    def __init__(
        self,
        message: str = "The requested resource was not found",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class InternalError(VpsBackError):
    """
    Server-side failure. The client only ever sees a generic message;
    `message` and `context` are logged.
    """

    code = "server_error"
    status_code = 500


class DatabaseError(InternalError):
    """
    Raised when database operations fail unexpectedly.

    When:    Connection lost mid-query, constraint violation, lock timeout, etc.
    HTTP:    500 Internal Server Error

    Never retried: the failure is surfaced to the request that caused it.
    """

    def __init__(
        self,
        message: str = "A database error occurred",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class HeaderEncodingError(InternalError):
    """A redirect target could not be carried in the `Location` header. HTTP 500."""

    def __init__(
        self,
        message: str = "Failed to build Location header",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)
