"""Error handling module with RFC 7807 Problem Details."""

from analytics_hub.core.errors.exceptions import (
    AppException,
    AuthorizationError,
    ConflictError,
    ForbiddenError,
    NotFoundError,
    UnauthorizedError,
    ValidationError,
)
from analytics_hub.core.errors.handlers import (
    FieldError,
    ProblemDetail,
    register_exception_handlers,
)


__all__ = [
    # Exceptions
    "AppException",
    "AuthorizationError",
    "ConflictError",
    # Handlers
    "FieldError",
    "ForbiddenError",
    "NotFoundError",
    "ProblemDetail",
    "UnauthorizedError",
    "ValidationError",
    "register_exception_handlers",
]
