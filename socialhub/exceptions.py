"""
SocialHub Backend - Custom Exception Hierarchy
================================================

What:  Application-specific exceptions for failures that are not expected
       business outcomes.
How:   Each exception class carries a message and optional context dict.
       Global exception handlers (registered in main.py) catch these and
       return structured JSON error responses with correct HTTP status codes.
Who:   Raised by the auth guard and services; ValidationError is built by the
       request-validation handler in main.py.

Exception Hierarchy:
    SocialHubError (base)
    ├── ValidationError       → 400 Bad Request (built from pydantic request errors)
    ├── AuthenticationError   → 401 Unauthorized (missing/invalid token)
    └── PersistenceError      → 500 Internal Server Error

Expected outcomes such as "post not found", "not the owner" or "already
liked" are NOT exceptions; see socialhub.services.rejections.
"""

from typing import Any, Dict, List, Optional


class SocialHubError(Exception):
    """
    Base exception for all SocialHub application errors.

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


class ValidationError(SocialHubError):
    """
    Client input that failed validation, with one entry per violated field.

    HTTP: 400 Bad Request

    Example response:
        {
            "error": "validation_error",
            "message": "Text is required",
            "errors": [{"field": "text", "message": "Text is required", "location": "body"}]
        }
    """

    def __init__(
        self,
        message: str = "Validation failed",
        errors: Optional[List[Dict[str, str]]] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        self.errors = errors or []
        ctx = context or {}
        ctx.setdefault("fields", [e.get("field") for e in self.errors])
        super().__init__(message=message, context=ctx)


class AuthenticationError(SocialHubError):
    """
    Raised by the auth guard when a request carries no usable credential.

    HTTP: 401 Unauthorized (with WWW-Authenticate: Bearer)
    """

    def __init__(
        self,
        message: str = "Token is not valid",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class PersistenceError(SocialHubError):
    """
    Raised when database operations fail unexpectedly.

    HTTP: 500 Internal Server Error

    The message returned to the client is always generic. The underlying
    driver error is logged server-side only.
    """

    def __init__(
        self,
        message: str = "Server Error",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)
