"""RFC 7807 Problem Details exception handlers.

Route handlers translate authorization outcomes at the boundary:
``UnauthorizedError`` becomes a 401 (no session user), ``ForbiddenError`` and
``AuthorizationError`` become a 403 (user present, access denied). Anything
unexpected, including persistence failures, becomes an opaque 500.

See: https://tools.ietf.org/html/rfc7807
"""

from typing import TYPE_CHECKING, Any, cast

import structlog
from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from analytics_hub.config import settings
from analytics_hub.core.errors.exceptions import AppException


if TYPE_CHECKING:
    from starlette.types import ExceptionHandler


logger = structlog.get_logger()


class FieldError(BaseModel):
    """Represents a single field validation error."""

    field: str
    message: str
    type: str | None = None


class ProblemDetail(BaseModel):
    """RFC 7807 Problem Details response schema.

    Attributes:
        type: URI reference identifying the problem type
        title: Short human-readable summary
        status: HTTP status code
        detail: Human-readable explanation specific to this occurrence
        instance: URI reference identifying this specific occurrence
        errors: List of field-level errors (for validation errors)
        request_id: Request ID for correlating logs
    """

    type: str
    title: str
    status: int
    detail: str
    instance: str | None = None
    errors: list[FieldError] | None = None
    request_id: str | None = None

    model_config = {"extra": "allow"}


def _problem_type(error_code: str) -> str:
    """Build the documentation URI for an error code."""
    return f"{settings.api_docs_base_url}/errors/{error_code}"


def _request_context(request: Request) -> dict[str, Any]:
    """Collect identifiers the session layer may have attached to the request."""
    context: dict[str, Any] = {"path": str(request.url.path)}
    for key in ("request_id", "user_id"):
        value = getattr(request.state, key, None)
        if value is not None:
            context[key] = str(value)
    return context


async def app_exception_handler(request: Request, exc: AppException) -> JSONResponse:
    """Render an ``AppException`` as a Problem Details response.

    Authentication and authorization failures are routine outcomes and are
    logged at info level; other domain errors at warning.
    """
    context = _request_context(request)
    log = logger.info if exc.status_code in (401, 403) else logger.warning
    log(
        "app_exception",
        error_code=exc.error_code,
        message=exc.message,
        status_code=exc.status_code,
        details=exc.details,
        **context,
    )

    content: dict[str, Any] = ProblemDetail(
        type=_problem_type(exc.error_code),
        title=exc.error_code.replace("_", " ").title(),
        status=exc.status_code,
        detail=exc.message,
        instance=context["path"],
        request_id=context.get("request_id"),
    ).model_dump(exclude_none=True)

    for key, value in exc.details.items():
        content.setdefault(key, value)

    return JSONResponse(status_code=exc.status_code, content=content)


async def validation_exception_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Render request validation errors with field-level detail."""
    errors: list[FieldError] = []

    for error in exc.errors():
        # Drop the "body"/"path"/"query" prefix from the location
        field_parts = [
            str(part) for part in error.get("loc", ()) if part not in ("body", "path", "query")
        ]
        errors.append(
            FieldError(
                field=".".join(field_parts) or "unknown",
                message=error.get("msg", "Invalid value"),
                type=error.get("type"),
            )
        )

    context = _request_context(request)
    logger.warning("validation_error", error_count=len(errors), **context)

    return JSONResponse(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        content=ProblemDetail(
            type=_problem_type("validation_error"),
            title="Validation Error",
            status=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail="Request validation failed",
            instance=context["path"],
            errors=errors,
            request_id=context.get("request_id"),
        ).model_dump(exclude_none=True),
    )


async def generic_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Render unexpected failures as a generic 500.

    The error is logged with its traceback but never exposed to clients.
    """
    context = _request_context(request)
    logger.exception("unhandled_exception", error_type=type(exc).__name__, **context)

    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=ProblemDetail(
            type=_problem_type("internal_error"),
            title="Internal Server Error",
            status=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="An unexpected error occurred",
            instance=context["path"],
            request_id=context.get("request_id"),
        ).model_dump(exclude_none=True),
    )


def register_exception_handlers(app: FastAPI) -> None:
    """Register all exception handlers with the FastAPI app."""
    app.add_exception_handler(
        AppException, cast("ExceptionHandler", app_exception_handler)
    )
    app.add_exception_handler(
        RequestValidationError, cast("ExceptionHandler", validation_exception_handler)
    )
    app.add_exception_handler(Exception, generic_exception_handler)
