"""
Application exception hierarchy.

Services raise these; the handlers registered in ``microblog.main`` turn
them into ``{"error": message}`` JSON bodies with the matching status code.

    MicroblogError (base)          -> 500
    ├── ValidationError            -> 400
    ├── AuthError                  -> 401
    ├── AuthorizationError         -> 403
    ├── NotFoundError              -> 404
    ├── ConflictError              -> 400
    └── InternalError              -> 500
"""
from typing import Any


class MicroblogError(Exception):
    """
    Base exception for all application errors.

    Attributes:
        message:  User-facing error description, safe to return in a response.
        context:  Extra debug info; logged, never returned to the client.
    """

    status_code: int = 500

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        context: dict[str, Any] | None = None,
    ):
        self.message = message
        self.context = context or {}
        super().__init__(self.message)


class ValidationError(MicroblogError):
    """Malformed, missing or oversized client input."""

    status_code = 400

    def __init__(
        self,
        message: str = "Validation failed",
        field: str | None = None,
        context: dict[str, Any] | None = None,
    ):
        ctx = context or {}
        if field:
            ctx["field"] = field
        super().__init__(message=message, context=ctx)
        self.field = field


class AuthError(MicroblogError):
    """Bad credentials, or a missing, invalid or expired bearer token."""

    status_code = 401

    def __init__(self, message: str = "Invalid username or password", context: dict[str, Any] | None = None):
        super().__init__(message=message, context=context)


class AuthorizationError(MicroblogError):
    """The principal is authenticated but may not perform the action."""

    status_code = 403

    def __init__(self, message: str = "Unauthorized", context: dict[str, Any] | None = None):
        super().__init__(message=message, context=context)


class NotFoundError(MicroblogError):
    """A referenced entity does not exist."""

    status_code = 404

    def __init__(
        self,
        resource: str = "Resource",
        resource_id: Any = None,
        context: dict[str, Any] | None = None,
    ):
        ctx = context or {}
        ctx["resource"] = resource
        if resource_id is not None:
            ctx["resource_id"] = resource_id
        super().__init__(message=f"{resource} not found", context=ctx)
        self.resource = resource


class ConflictError(MicroblogError):
    """A uniqueness constraint would be violated."""

    status_code = 400

    def __init__(self, message: str = "Resource already exists", context: dict[str, Any] | None = None):
        super().__init__(message=message, context=context)


class InternalError(MicroblogError):
    """Storage or other server-side failure."""

    status_code = 500

    def __init__(self, message: str = "Internal server error", context: dict[str, Any] | None = None):
        super().__init__(message=message, context=context)
