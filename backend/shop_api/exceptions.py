"""
ShopAPI Backend — Custom Exception Hierarchy
==============================================

What:  Application-specific exceptions for the three failure classes a request can hit.
Why:   Services raise domain exceptions; global handlers in main.py map them to
       HTTP status codes and one consistent JSON error body.
How:   Each exception carries a message and a context dict that the handler
       returns as `details`.
Who:   Raised by the query builder and services; caught by global handlers.

Exception Hierarchy:
    ShopAPIError (base)
    ├── ValidationError   → 400 Bad Request (client can fix)
    ├── NotFoundError     → 404 Not Found
    └── DatabaseError     → 500 Internal Server Error

None of these are retried, and transient and permanent datastore failures
surface identically.
"""

from typing import Any, Dict, Optional


class ShopAPIError(Exception):
    """
    Base exception for all ShopAPI application errors.

    Attributes:
        message:  User-facing error description
        context:  Structured detail returned to the client as `details`
    """

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        context: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.context = context or {}
        super().__init__(self.message)


class ValidationError(ShopAPIError):
    """
    Raised when client input fails validation beyond what the schemas catch.

    When:    Partial update with no effective fields, unknown filter keys,
             malformed document identifiers.
    HTTP:    400 Bad Request
    """

    def __init__(
        self,
        message: str = "Validation failed",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class NotFoundError(ShopAPIError):
    """
    Raised when no row or document matches the requested identifier.

    SQLAlchemy and PyMongo return None for missing records; services convert
    that into NotFoundError so routes never deal with status codes.

    HTTP:    404 Not Found
    """

    def __init__(
        self,
        resource: str = "resource",
        resource_id: Optional[Any] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        message = f"{resource.capitalize()} not found"
        ctx = context or {}
        ctx["resource"] = resource
        if resource_id is not None:
            ctx["resource_id"] = str(resource_id)
        super().__init__(message=message, context=ctx)
        self.resource = resource


class DatabaseError(ShopAPIError):
    """
    Raised when a datastore operation fails unexpectedly.

    What:    Connection lost, constraint violation, driver error.
    HTTP:    500 Internal Server Error

    The response carries a generic message plus the underlying driver error
    text under `details.reason`.
    """

    def __init__(
        self,
        message: str = "Error accessing the database",
        reason: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        if reason is not None:
            ctx["reason"] = reason
        super().__init__(message=message, context=ctx)
        self.reason = reason
