"""Domain exceptions for the application.

These exceptions represent business-logic errors and are automatically
converted to RFC 7807 Problem Details responses by the exception handlers.

Routine authorization denial is not an exception inside the access core:
checkers return ``False`` and guards return ``Denied``. Only the guard
``enforce`` step turns a denial into ``UnauthorizedError`` or
``AuthorizationError`` at the request boundary.
"""

from typing import Any


class AppException(Exception):
    """Base exception for all application errors.

    All domain exceptions should inherit from this class.

    Attributes:
        message: Human-readable error message
        error_code: Machine-readable error code for clients
        status_code: HTTP status code for the response
        details: Additional error details
    """

    message: str = "An unexpected error occurred"
    error_code: str = "internal_error"
    status_code: int = 500

    def __init__(
        self,
        message: str | None = None,
        error_code: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        self.message = message or self.message
        self.error_code = error_code or self.error_code
        self.details = details or {}
        super().__init__(self.message)


class NotFoundError(AppException):
    """Raised when a requested resource is not found.

    Example:
        raise NotFoundError("Role not found", resource="role", resource_id=name)
    """

    message = "Resource not found"
    error_code = "not_found"
    status_code = 404

    def __init__(
        self,
        message: str | None = None,
        resource: str | None = None,
        resource_id: str | None = None,
        **kwargs: Any,
    ) -> None:
        details = kwargs.pop("details", {})
        if resource:
            details["resource"] = resource
        if resource_id:
            details["resource_id"] = resource_id
        super().__init__(message=message, details=details, **kwargs)


class ConflictError(AppException):
    """Raised when there's a conflict with existing data.

    Example:
        raise ConflictError("Menu slug already exists", details={"slug": slug})
    """

    message = "Resource conflict"
    error_code = "conflict"
    status_code = 409


class ValidationError(AppException):
    """Raised when input data breaks a write-time invariant.

    Example:
        raise ValidationError(
            "Maximum menu depth exceeded",
            errors=[{"field": "parent_id", "message": "Menu depth is limited to 3"}]
        )
    """

    message = "Validation error"
    error_code = "validation_error"
    status_code = 422

    def __init__(
        self,
        message: str | None = None,
        errors: list[dict[str, Any]] | None = None,
        **kwargs: Any,
    ) -> None:
        details = kwargs.pop("details", {})
        if errors:
            details["errors"] = errors
        super().__init__(message=message, details=details, **kwargs)


class UnauthorizedError(AppException):
    """Raised when no authenticated user is attached to the request.

    Example:
        raise UnauthorizedError("Authentication required")
    """

    message = "Authentication required"
    error_code = "unauthorized"
    status_code = 401


class ForbiddenError(AppException):
    """Raised when an authenticated user is not allowed to proceed.

    Example:
        raise ForbiddenError("User account is deactivated", error_code="user_inactive")
    """

    message = "Access forbidden"
    error_code = "forbidden"
    status_code = 403


class AuthorizationError(ForbiddenError):
    """Raised by authorization guards when a permission or role check fails.

    The required permissions (or roles) are exposed in ``details`` so the
    problem response tells the client what was missing.

    Example:
        raise AuthorizationError(required_permissions=["users.delete"])
    """

    message = "Insufficient permissions"
    error_code = "permission_denied"

    def __init__(
        self,
        message: str | None = None,
        required_permissions: list[str] | None = None,
        **kwargs: Any,
    ) -> None:
        details = kwargs.pop("details", {})
        if required_permissions:
            details["required_permissions"] = required_permissions
        super().__init__(message=message, details=details, **kwargs)
