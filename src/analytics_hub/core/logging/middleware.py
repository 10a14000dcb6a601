"""Request logging middleware.

Logs every HTTP request and its outcome with structlog. Authorization
failures show up here as 401/403 completions at warning level, which makes
denied access visible without logging inside the access core itself.
"""

import time
from typing import Any

import structlog
from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint


logger = structlog.get_logger()


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Middleware that logs HTTP requests and responses.

    Logs include:
    - Request method and path
    - Response status code
    - Request duration
    - User ID (if the session layer attached one)
    """

    def __init__(self, app: Any, exclude_paths: list[str] | None = None) -> None:
        """Initialize the middleware.

        Args:
            app: The ASGI application
            exclude_paths: Path prefixes to skip (e.g., health checks)
        """
        super().__init__(app)
        self.exclude_paths = exclude_paths or [
            "/health/live",
            "/docs",
            "/redoc",
            "/openapi.json",
        ]

    async def dispatch(
        self,
        request: Request,
        call_next: RequestResponseEndpoint,
    ) -> Response:
        """Process the request and log details."""
        if any(request.url.path.startswith(path) for path in self.exclude_paths):
            return await call_next(request)

        start_time = time.perf_counter()
        method = request.method
        path = request.url.path

        logger.debug(
            "request_started",
            method=method,
            path=path,
            client_ip=request.client.host if request.client else None,
        )

        try:
            response = await call_next(request)
        except Exception as exc:
            logger.exception(
                "request_failed",
                method=method,
                path=path,
                duration_ms=round((time.perf_counter() - start_time) * 1000, 2),
                error=str(exc),
            )
            raise

        completion_data: dict[str, Any] = {
            "method": method,
            "path": path,
            "status_code": response.status_code,
            "duration_ms": round((time.perf_counter() - start_time) * 1000, 2),
        }

        user_id = getattr(request.state, "user_id", None)
        if user_id:
            completion_data["user_id"] = str(user_id)

        if response.status_code >= 500:
            logger.error("request_completed", **completion_data)
        elif response.status_code >= 400:
            logger.warning("request_completed", **completion_data)
        else:
            logger.info("request_completed", **completion_data)

        return response
