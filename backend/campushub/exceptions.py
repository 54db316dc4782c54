"""
CampusHub Backend — Custom Exception Hierarchy
================================================

What:  Application-specific exceptions for the different failure scenarios.
Why:   Services raise these instead of returning error dicts; the global
       handlers in main.py turn them into consistent JSON responses.
How:   Each exception carries a client-safe message and an optional context
       dict that is logged server-side but never returned.

Exception Hierarchy:
    CampusHubError (base)
    ├── ValidationError          → 400 Bad Request
    ├── DuplicateIdentityError   → 409 Conflict (generic signup failure)
    ├── AuthFailureError         → 401 Unauthorized (generic login failure)
    ├── UnauthorizedError        → 401 Unauthorized (no valid session)
    ├── NotFoundError            → 404 Not Found
    ├── StoreUnavailableError    → 503 Service Unavailable
    ├── RateLimitExceededError   → 429 Too Many Requests (rendered by middleware)
    └── PayloadTooLargeError     → 413 Payload Too Large (rendered by middleware)
"""

from typing import Any, Dict, Optional


class CampusHubError(Exception):
    """
    Base exception for all CampusHub application errors.

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


class ValidationError(CampusHubError):
    """Client input failed a business rule (size limit, content type, blank field)."""

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


class DuplicateIdentityError(CampusHubError):
    """
    Raised when a signup collides with an existing username or email.

    The message stays generic; which column collided is only recorded in
    context for the server log.
    """

    def __init__(
        self,
        message: str = "Error during signup",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class AuthFailureError(CampusHubError):
    """
    Raised for every failed credential check.

    Unknown user, wrong password and malformed input all produce this same
    exception with the same message, so callers cannot tell them apart.
    """

    def __init__(self, context: Optional[Dict[str, Any]] = None):
        super().__init__(message="Invalid username or password", context=context)


class UnauthorizedError(CampusHubError):
    """Raised when a privileged action runs without a live session."""

    def __init__(
        self,
        message: str = "Authentication required",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class NotFoundError(CampusHubError):
    """Raised when a requested resource does not exist."""

    def __init__(
        self,
        resource: str = "resource",
        resource_id: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        message = f"The requested {resource} was not found"
        if resource_id:
            message = f"{resource} '{resource_id}' was not found"
        ctx = context or {}
        ctx["resource"] = resource
        if resource_id:
            ctx["resource_id"] = resource_id
        super().__init__(message=message, context=ctx)


class StoreUnavailableError(CampusHubError):
    """
    Raised when the database cannot serve a request.

    Never retried in-process: a write such as registration either happens once
    or the request fails once.
    """

    def __init__(
        self,
        message: str = "The service is temporarily unavailable. Please try again later.",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class RateLimitExceededError(CampusHubError):
    """
    A client exceeded the per-IP rate limit on credential endpoints.

    RateLimitMiddleware answers before routing, so this is only used to
    phrase its 429 body; no exception handler sees it.
    """

    def __init__(
        self,
        retry_after: int = 60,
        context: Optional[Dict[str, Any]] = None,
    ):
        message = (
            f"Too many attempts. Please wait {retry_after} seconds before trying again."
        )
        ctx = context or {}
        ctx["retry_after"] = retry_after
        super().__init__(message=message, context=ctx)
        self.retry_after = retry_after


class PayloadTooLargeError(CampusHubError):
    """
    A request body declared more bytes than the route accepts.

    Like RateLimitExceededError, only UploadLimitMiddleware uses it, to phrase
    its 413 body.
    """

    def __init__(
        self,
        limit: int,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        ctx["limit"] = limit
        super().__init__(message="Upload is too large.", context=ctx)
        self.limit = limit
