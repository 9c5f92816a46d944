"""
Blog API — Exception Hierarchy and Status Table
=================================================

What:  Application-specific exceptions plus the single table that maps them
       to HTTP status codes and machine-readable error codes.
How:   Stores and services raise these; one handler registered in main.py
       resolves the response through `resolve_status()`.
Who:   Raised by stores, services, and the auth guard.

Exception Hierarchy:
    BlogError (base)
    ├── ValidationError          → 400 validation_error
    ├── DuplicateUserError       → 400 duplicate_user
    ├── InvalidCredentialsError  → 400 invalid_credentials
    ├── UnauthenticatedError     → 401 unauthenticated
    ├── ForbiddenError           → 403 forbidden
    ├── NotFoundError            → 404 not_found
    │   └── UserNotFoundError    → 400 user_not_found
    └── StoreError               → 500 store_failure
"""

from typing import Any, Dict, Optional, Tuple, Type


class BlogError(Exception):
    """
    Base exception for all application errors.

    Attributes:
        message:  User-facing error description (returned in the response)
        context:  Extra debug info, logged server-side
    """

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        context: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.context = context or {}
        super().__init__(self.message)


class ValidationError(BlogError):
    """Raised when client input is missing or malformed."""

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


class DuplicateUserError(BlogError):
    """Raised when signup hits the unique constraint on email."""

    def __init__(self, email: Optional[str] = None):
        super().__init__(
            message="User already exists",
            context={"email": email} if email else None,
        )


class InvalidCredentialsError(BlogError):
    """Password did not match the stored hash."""

    def __init__(self):
        super().__init__(message="Invalid credentials")


class UnauthenticatedError(BlogError):
    """No bearer token was presented on an authenticated route."""

    def __init__(self):
        super().__init__(message="Access denied. No token provided.")


class ForbiddenError(BlogError):
    """
    A bearer token was presented but failed verification.

    Covers bad signatures, malformed strings, expired tokens, and tokens
    missing the identity claims. The reason goes into `context` only.
    """

    def __init__(self, reason: Optional[str] = None):
        super().__init__(
            message="Invalid token.",
            context={"reason": reason} if reason else None,
        )


class NotFoundError(BlogError):
    """
    Raised when a requested blog post does not exist.

    The message can be overridden so that delete can report the same text
    for "missing" and "not yours" without revealing which one applied.
    """

    def __init__(
        self,
        resource: str = "Blog post",
        resource_id: Optional[Any] = None,
        message: Optional[str] = None,
    ):
        ctx: Dict[str, Any] = {"resource": resource}
        if resource_id is not None:
            ctx["resource_id"] = resource_id
        super().__init__(message=message or f"{resource} not found", context=ctx)


class UserNotFoundError(NotFoundError):
    """Login named an email with no account."""

    def __init__(self, email: Optional[str] = None):
        super().__init__(resource="User", message="User not found")
        if email:
            self.context["email"] = email


class StoreError(BlogError):
    """
    Raised when a database statement fails for any reason.

    No distinction is made between transient and permanent failures and
    nothing is retried. `detail` carries the underlying driver text and is
    returned to the client in the `details` field.
    """

    def __init__(
        self,
        message: str = "Database query failed",
        detail: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)
        self.detail = detail


# ── Status Table ──────────────────────────────────────────────────────────
# Most specific class wins: resolve_status() walks the MRO, so
# UserNotFoundError resolves to 400 before NotFoundError's 404.
STATUS_TABLE: Dict[Type[BlogError], Tuple[int, str]] = {
    ValidationError: (400, "validation_error"),
    DuplicateUserError: (400, "duplicate_user"),
    UserNotFoundError: (400, "user_not_found"),
    InvalidCredentialsError: (400, "invalid_credentials"),
    UnauthenticatedError: (401, "unauthenticated"),
    ForbiddenError: (403, "forbidden"),
    NotFoundError: (404, "not_found"),
    StoreError: (500, "store_failure"),
    BlogError: (500, "server_error"),
}


def resolve_status(exc: BlogError) -> Tuple[int, str]:
    """Return `(status_code, error_code)` for an application exception."""
    for cls in type(exc).__mro__:
        if cls in STATUS_TABLE:
            return STATUS_TABLE[cls]
    return STATUS_TABLE[BlogError]
