"""Logging module with structured logging and request tracking."""

import logging

import structlog

from blog_rbac.config import Settings, settings as default_settings
from blog_rbac.core.logging.middleware import RequestLoggingMiddleware


def configure_logging(settings: Settings | None = None) -> None:
    """Configure structlog for the process.

    Production renders JSON lines and caches assembled loggers; every other
    environment uses the console renderer and picks up reconfiguration, so
    ``structlog.testing.capture_logs`` sees every event.
    """
    settings = settings or default_settings
    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            (
                structlog.processors.JSONRenderer()
                if settings.is_production
                else structlog.dev.ConsoleRenderer()
            ),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(
            logging.getLevelName(settings.log_level)
        ),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(),
        cache_logger_on_first_use=settings.is_production,
    )


__all__ = [
    "RequestLoggingMiddleware",
    "configure_logging",
]
