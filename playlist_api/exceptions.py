"""
Playlist API: Custom Exception Hierarchy
===========================================

What:  Application-specific exceptions raised by the service and database layers.
How:   Each exception carries a message and an optional context dict.
       Global exception handlers (registered in main.py) turn them into
       HTTP responses.
Who:   Raised by services and Database.create_schema(); caught by the handlers in main.py
       or, at startup, by the server process.

Exception Hierarchy:
    PlaylistApiError (base)
    ├── NotFoundError   → 404 Not Found (empty body)
    ├── ConflictError   → 409 Conflict
    └── DatabaseError   → startup failure (schema could not be created)

Anything else (including raw SQLAlchemy errors) falls through to the
catch-all handler and becomes a generic 500.
"""

from typing import Any, Dict, Optional


class PlaylistApiError(Exception):
    """
    Base exception for all application errors.

    Attributes:
        message:  Error description (safe to return in an API response)
        context:  Additional debug info (logged, not returned to the client)
    """

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        context: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.context = context or {}
        super().__init__(self.message)


class NotFoundError(PlaylistApiError):
    """
    Raised when a song or playlist id does not exist.

    When:    Get/Update/Delete on a missing id; add-song when either the
             playlist or the song is missing.
    HTTP:    404 Not Found, no body
    """

    def __init__(
        self,
        resource: str = "resource",
        resource_id: Optional[Any] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        message = f"The requested {resource} was not found"
        if resource_id is not None:
            message = f"{resource} with ID '{resource_id}' was not found"
        ctx = context or {}
        ctx["resource"] = resource
        if resource_id is not None:
            ctx["resource_id"] = resource_id
        super().__init__(message=message, context=ctx)
        self.resource = resource
        self.resource_id = resource_id


class ConflictError(PlaylistApiError):
    """
    Raised when creating a row whose caller-supplied id is already taken.

    HTTP:    409 Conflict
    """

    def __init__(
        self,
        resource: str = "resource",
        resource_id: Optional[Any] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        message = f"{resource} with ID '{resource_id}' already exists"
        ctx = context or {}
        ctx["resource"] = resource
        ctx["resource_id"] = resource_id
        super().__init__(message=message, context=ctx)
        self.resource = resource
        self.resource_id = resource_id


class DatabaseError(PlaylistApiError):
    """
    Raised when the storage layer cannot be initialized.

    When:    Database.create_schema() during application startup (bad URL,
             unwritable SQLite path, server unreachable).

    Context carries the driver error type and the URL with the password
    masked. Storage failures during a request are not wrapped; they reach
    the catch-all handler as a generic 500.
    """

    def __init__(
        self,
        message: str = "A database error occurred. Please try again later.",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)
