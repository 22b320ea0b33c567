"""
Boutique Backend — Custom Exception Hierarchy
==============================================

What:  Application-specific exceptions for every failure a request can hit.
How:   Each exception carries a message and an optional context dict.
       Global exception handlers (registered in main.py) catch these and
       return structured JSON error responses with the right HTTP status.
Who:   Raised by services and access-control dependencies; caught by handlers.

Exception Hierarchy:
    BoutiqueError (base)
    ├── ValidationError              → 400 Bad Request
    ├── AuthError                    → 401 Unauthorized
    │   └── InvalidCredentialsError  → 400 Bad Request (login contract)
    ├── AuthzError                   → 403 Forbidden
    ├── NotFoundError                → 404 Not Found
    ├── StoreError                   → 500 Internal Server Error
    └── FileStorageError             → 500 Internal Server Error
"""

from typing import Any, Dict, Optional


class BoutiqueError(Exception):
    """
    Base exception for all Boutique application errors.

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


class ValidationError(BoutiqueError):
    """
    Raised when client input is missing or malformed.

    When:    Missing email/password, missing product fields, bad image file.
    HTTP:    400 Bad Request

    Example response:
        {
            "error": "validation_error",
            "message": "All product fields must be filled in.",
            "details": {"missing": ["price", "image"]}
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


class AuthError(BoutiqueError):
    """
    Raised when the caller cannot be authenticated.

    When:    Bearer token absent, malformed, expired, or signed with another key.
    HTTP:    401 Unauthorized

    The message never says which verification step failed.
    """

    def __init__(
        self,
        message: str = "Authentication failed.",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class InvalidCredentialsError(AuthError):
    """
    Raised by login when the email is unknown or the password does not match.

    Both cases produce this exact error, so a caller cannot probe which
    emails are registered. Login has always answered these with 400, so the
    gateway maps this subclass to 400 rather than the 401 used for tokens.
    """

    def __init__(self, context: Optional[Dict[str, Any]] = None):
        super().__init__(message="Incorrect email or password.", context=context)


class AuthzError(BoutiqueError):
    """
    Raised when an authenticated caller lacks the role a route requires.

    HTTP:    403 Forbidden
    """

    def __init__(
        self,
        message: str = "Access denied, admin role required.",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class NotFoundError(BoutiqueError):
    """
    Raised when a referenced resource does not exist.

    When:    PUT /products/{id} where no row has that id.
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


class StoreError(BoutiqueError):
    """
    Raised when the relational store fails.

    When:    Connection lost, unique-constraint violation (duplicate email),
             any other SQLAlchemy error.
    HTTP:    500 Internal Server Error

    Security Note:
        The client always receives the message chosen by the service; the
        driver error (SQL, constraint names) goes to the log via context.
    """

    def __init__(
        self,
        message: str = "A database error occurred. Please try again later.",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class FileStorageError(BoutiqueError):
    """
    Raised when writing an uploaded image to disk fails.

    When:    Disk full, permission denied, directory not writable.
    HTTP:    500 Internal Server Error
    """

    def __init__(
        self,
        message: str = "File storage operation failed",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)
