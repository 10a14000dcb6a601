"""Logging module with structured logging and request tracking."""

from analytics_hub.core.logging.config import configure_logging
from analytics_hub.core.logging.middleware import RequestLoggingMiddleware


__all__ = [
    "RequestLoggingMiddleware",
    "configure_logging",
]
