"""
Inkpost Backend — Custom Exception Hierarchy
=============================================

What:  Application-specific exceptions for the different error scenarios.
How:   Each exception class carries a message and optional context dict.
       Global exception handlers (registered in main.py) catch these and
       return structured JSON error responses with the matching HTTP status.
Who:   Raised by services, security helpers and routes; caught by global handlers.

Exception Hierarchy:
    InkpostError (base)
    ├── ValidationError           → 400 Bad Request (client can fix)
    ├── InvalidCredentialsError   → 400 Bad Request ("wrong credentials")
    ├── NotAuthorError            → 400 Bad Request ("you are not the author")
    ├── AuthenticationError       → 401 Unauthorized (missing/invalid token)
    ├── NotFoundError             → 404 Not Found
    ├── FileStorageError          → 500 Internal Server Error
    └── DatabaseError             → 500 Internal Server Error
"""

from typing import Any, Dict, Optional


class InkpostError(Exception):
    """
    Base exception for all Inkpost application errors.

    Attributes:
        message:  User-facing error description (safe to return in API response)
        context:  Additional debug info (logged, and returned only where the handler says so)
    """

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        context: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.context = context or {}
        super().__init__(self.message)


class ValidationError(InkpostError):
    """
    Raised when client input fails a business rule.

    When:    Short username, duplicate username, unsupported cover type, oversized upload.
    HTTP:    400 Bad Request

    Example response:
        {
            "error": "validation_error",
            "message": "username already taken",
            "details": {"field": "username"}
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


class InvalidCredentialsError(InkpostError):
    """
    Raised by login when the username is unknown or the password does not match.

    Both cases share one message so the response does not reveal which
    usernames exist.
    """

    def __init__(self, context: Optional[Dict[str, Any]] = None):
        super().__init__(message="wrong credentials", context=context)


class AuthenticationError(InkpostError):
    """
    Raised when the identity cookie is missing, malformed, tampered with or expired.

    HTTP:    401 Unauthorized
    """

    def __init__(
        self,
        message: str = "Not authenticated",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class NotAuthorError(InkpostError):
    """
    Raised when a user tries to edit a post written by someone else.

    HTTP:    400 Bad Request (the status API clients already handle for this case)
    """

    def __init__(self, context: Optional[Dict[str, Any]] = None):
        super().__init__(message="you are not the author", context=context)


class NotFoundError(InkpostError):
    """
    Raised when a requested resource does not exist.

    When:    GET /post/{id} or PUT /post with an unknown id; missing upload file.
    HTTP:    404 Not Found

    SQLAlchemy returns None for missing records; the service layer converts
    that None into this exception.
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


class FileStorageError(InkpostError):
    """
    Raised when file system operations fail.

    When:    Disk full, permission denied, rename failed.
    HTTP:    500 Internal Server Error
    """

    def __init__(
        self,
        message: str = "File storage operation failed",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class DatabaseError(InkpostError):
    """
    Raised when database operations fail unexpectedly.

    HTTP:    500 Internal Server Error

    The message returned to the client is always generic; the original
    exception type is kept in context for the server log.
    """

    def __init__(
        self,
        message: str = "A database error occurred. Please try again later.",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)
