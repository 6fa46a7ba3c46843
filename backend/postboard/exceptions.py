"""
Postboard Backend — Custom Exception Hierarchy
================================================

What:  Application-specific exceptions for every failure a request can end in.
Why:   Services raise domain failures; one error layer (error_handlers.py)
       turns them into HTTP responses. Routes contain no try/except.
How:   Each class carries a user-facing message, an optional context dict
       (logged, never returned verbatim for server errors), and class-level
       `status_code` / `error_code` used by the handlers.

Exception Hierarchy:
    PostboardError (base)                  → 500 internal_server_error
    ├── ValidationError                    → 400 validation_error
    ├── UnauthorizedError                  → 401 unauthorized
    │   └── InvalidCredentialsError        → 401 invalid_credentials
    ├── NotFoundError                      → 404 not_found
    ├── DuplicateUserError                 → 409 duplicate_user
    ├── RateLimitExceededError             → 429 rate_limit_exceeded
    └── DatabaseError                      → 500 server_error
"""

from typing import Any, Dict, Optional


class PostboardError(Exception):
    """
    Base exception for all Postboard application errors.

    Attributes:
        message:  User-facing error description (safe to return in API response)
        context:  Additional debug info
    """

    status_code: int = 500
    error_code: str = "internal_server_error"

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        context: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.context = context or {}
        super().__init__(self.message)


class ValidationError(PostboardError):
    """
    Raised when client input fails a business rule that the Pydantic schema
    cannot express (e.g. an update that changes nothing).
    """

    status_code = 400
    error_code = "validation_error"

    def __init__(
        self,
        message: str = "Validation failed",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class UnauthorizedError(PostboardError):
    """
    Raised when a protected route is called without a valid session token.

    When: Missing Authorization header, bad signature, expired token, or a
          token whose user no longer exists.
    """

    status_code = 401
    error_code = "unauthorized"

    def __init__(
        self,
        message: str = "Authentication required",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class InvalidCredentialsError(UnauthorizedError):
    """
    Raised by login when the e-mail is unknown or the password is wrong.

    Both cases share one message so the response does not reveal which
    e-mail addresses are registered.
    """

    error_code = "invalid_credentials"

    def __init__(self, context: Optional[Dict[str, Any]] = None):
        super().__init__(message="Invalid email or password", context=context)


class NotFoundError(PostboardError):
    """
    Raised when a requested resource does not exist (or is not visible to
    the caller: posts owned by someone else are reported as missing).
    """

    status_code = 404
    error_code = "not_found"

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


class DuplicateUserError(PostboardError):
    """Raised by registration when the login credential is already taken."""

    status_code = 409
    error_code = "duplicate_user"

    def __init__(self, email: str, context: Optional[Dict[str, Any]] = None):
        ctx = context or {}
        ctx["email"] = email
        super().__init__(message=f"A user with email '{email}' already exists", context=ctx)
        self.email = email


class RateLimitExceededError(PostboardError):
    """Raised when a client exceeds the per-IP request rate limit."""

    status_code = 429
    error_code = "rate_limit_exceeded"

    def __init__(
        self,
        retry_after: int = 60,
        context: Optional[Dict[str, Any]] = None,
    ):
        message = (
            f"Too many requests. Please wait {retry_after} seconds before retrying."
        )
        ctx = context or {}
        ctx["retry_after"] = retry_after
        super().__init__(message=message, context=ctx)
        self.retry_after = retry_after


class DatabaseError(PostboardError):
    """
    Raised when a database operation fails unexpectedly.

    The message returned to the client is always generic; the driver error
    is logged server-side only.
    """

    status_code = 500
    error_code = "server_error"

    def __init__(
        self,
        message: str = "A database error occurred. Please try again later.",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)
