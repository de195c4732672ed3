"""
AskBoard Backend: Custom Exception Hierarchy
=============================================

What:  Application-specific exceptions for the different failure scenarios.
How:   Each exception class carries a message and optional context dict.
       Global exception handlers (registered in main.py) catch these and
       return structured JSON error responses with correct HTTP status codes.
Who:   Raised by the Store and services; caught by global handlers.

Exception Hierarchy:
    AskBoardError (base)
    ├── ValidationError          → 400 Bad Request
    ├── NotFoundError            → 404 Not Found
    ├── ConflictError            → 409 Conflict
    └── StoreError               → 500 Internal Server Error
        ├── MalformedRowError    → 500 Internal Server Error
        └── StoreTimeoutError    → 504 Gateway Timeout

Propagation policy:
    Store failures are never retried or swallowed by the services. They bubble
    up unmodified to the handlers, so a failure anywhere in an aggregation
    fails the whole request (no partial results).
"""

from typing import Any, Dict, Optional


class AskBoardError(Exception):
    """
    Base exception for all AskBoard application errors.

    Attributes:
        message:  User-facing error description (safe to return in API response)
        context:  Additional debug info (logged but NOT returned to client)
    """

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        context: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.context = context or {}
        super().__init__(self.message)


class ValidationError(AskBoardError):
    """
    Raised when client input breaks a business rule.

    When:    Vote value outside {-1, +1}, self-vote while disabled, blank text.
    HTTP:    400 Bad Request

    Schema-level problems (wrong types, missing fields) are rejected earlier by
    FastAPI with 422; this exception covers rules pydantic cannot express.
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


class NotFoundError(AskBoardError):
    """
    Raised when a requested resource does not exist.

    When:    GET /api/questions/{qid} or /api/users/{uid} for an unknown id.
    HTTP:    404 Not Found
    """

    def __init__(
        self,
        resource: str = "resource",
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


class ConflictError(AskBoardError):
    """
    Raised when a write collides with an existing row it may not replace.

    When:    A user answers a question they have already answered.
    HTTP:    409 Conflict
    """

    def __init__(
        self,
        message: str = "The resource already exists",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class StoreError(AskBoardError):
    """
    Raised when the persistent store fails.

    What:    Connection loss, constraint violation, malformed query, deadline.
    HTTP:    500 Internal Server Error

    Security Note:
        The message returned to the client is always generic. The original
        exception is chained (`raise ... from`) and its type recorded in
        `context` for server-side logs only.
    """

    def __init__(
        self,
        message: str = "A database error occurred. Please try again later.",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class MalformedRowError(StoreError):
    """
    Raised when a row returned by the store does not fit its record type.

    When:    A missing column or a value of the wrong type reaches
             `validate_rows()`. Such rows are rejected instead of being passed
             on with undefined fields.
    """

    def __init__(
        self,
        record: str,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        ctx["record"] = record
        super().__init__(
            message=f"The store returned a malformed {record} row",
            context=ctx,
        )
        self.record = record


class StoreTimeoutError(StoreError):
    """
    Raised when a single store call exceeds its deadline.

    When:    After settings.store_timeout_seconds without a response.
    HTTP:    504 Gateway Timeout
    """

    def __init__(
        self,
        timeout: float,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        ctx["timeout_seconds"] = timeout
        super().__init__(
            message=f"The database did not respond within {timeout:g} seconds",
            context=ctx,
        )
        self.timeout = timeout
