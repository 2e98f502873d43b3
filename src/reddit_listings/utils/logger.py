"""
Structured logging configuration using structlog.

Provides JSON-formatted logging with context processors for
timestamps and log levels, plus a summary event per listing fetch.
"""
import logging
import os
import sys
from typing import Any, Optional

import structlog


_SHARED_PROCESSORS = (
    structlog.contextvars.merge_contextvars,
    structlog.processors.add_log_level,
    structlog.processors.StackInfoRenderer(),
    structlog.dev.set_exc_info,
    structlog.processors.TimeStamper(fmt="iso", utc=True),
)


def _renderer(development: bool) -> Any:
    if development:
        return structlog.dev.ConsoleRenderer()
    return structlog.processors.JSONRenderer()


def setup_logging(
    level: Optional[str] = None,
    development: Optional[bool] = None,
) -> None:
    """
    Configure structlog for the listings client.

    Args:
        level: Log level name; defaults to LOG_LEVEL, then INFO
        development: Render colored console output instead of JSON lines;
            defaults to ENVIRONMENT=development

    Example:
        >>> setup_logging("DEBUG")
        >>> get_logger(__name__).debug("listing_decoded", children=3)
    """
    level_name = (level or os.getenv("LOG_LEVEL", "INFO")).upper()
    log_level = getattr(logging, level_name, logging.INFO)
    if development is None:
        development = os.getenv("ENVIRONMENT", "production") == "development"

    logging.basicConfig(format="%(message)s", stream=sys.stdout, level=log_level)

    structlog.configure(
        processors=[*_SHARED_PROCESSORS, _renderer(development)],
        wrapper_class=structlog.make_filtering_bound_logger(log_level),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(),
        cache_logger_on_first_use=True,
    )


def get_logger(name: str = __name__) -> structlog.BoundLogger:
    """
    Get a structured logger instance.

    Example:
        >>> logger = get_logger(__name__)
        >>> logger.info("listing_fetch_started", fullnames=3)
    """
    return structlog.get_logger(name)


def log_listing_fetch(
    operation: str,
    duration_ms: float,
    requests: int,
    error: Optional[str] = None,
    **extra: Any,
) -> None:
    """
    Log one listing fetch in structured format.

    Args:
        operation: Service operation name ("get" or "get_posts")
        duration_ms: Wall time of the fetch in milliseconds
        requests: Number of wire requests issued
        error: Error message if the fetch failed
        **extra: Additional context (bucket sizes, warning count, ...)

    Example:
        >>> log_listing_fetch("get", 123.4, requests=1, posts=1, warnings=0)
    """
    logger = get_logger("listing_fetch")

    log_data = {
        "operation": operation,
        "duration_ms": round(duration_ms, 2),
        "requests": requests,
        "error": error,
        **extra,
    }

    if error:
        logger.error("listing_fetch_failed", **log_data)
    else:
        logger.info("listing_fetch_completed", **log_data)
