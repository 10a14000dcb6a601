"""Core services and cross-cutting concerns."""

from analytics_hub.core.database import Base, get_db
from analytics_hub.core.errors import (
    AppException,
    AuthorizationError,
    ConflictError,
    ForbiddenError,
    NotFoundError,
    UnauthorizedError,
    ValidationError,
    register_exception_handlers,
)


__all__ = [
    # Errors
    "AppException",
    "AuthorizationError",
    # Database
    "Base",
    "ConflictError",
    "ForbiddenError",
    "NotFoundError",
    "UnauthorizedError",
    "ValidationError",
    "get_db",
    "register_exception_handlers",
]
