"""Structured logging for Daybook.

Daybook only ever creates loggers; nothing is configured on import.
Applications that want Daybook's output rendered call :func:`setup_logging`
once at startup. The stdlib root logger is left alone so the embedding
application keeps control of its own handlers.
"""

import logging

import structlog

from daybook.config import get_settings


def setup_logging(level: str | None = None) -> None:
    """Configure structlog for Daybook's log events.

    Args:
        level: Level name such as ``"DEBUG"``. Defaults to the configured
            ``log_level``; unknown names fall back to INFO.
    """
    settings = get_settings()
    level_name = (level or settings.log_level).upper()
    log_level = logging.getLevelNamesMapping().get(level_name, logging.INFO)

    renderer = (
        structlog.dev.ConsoleRenderer(colors=True)
        if settings.is_development
        else structlog.processors.JSONRenderer()
    )

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.StackInfoRenderer(),
            structlog.dev.set_exc_info,
            structlog.processors.TimeStamper(fmt="iso"),
            renderer,
        ],
        wrapper_class=structlog.make_filtering_bound_logger(log_level),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(),
        cache_logger_on_first_use=True,
    )


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    """Get a logger named after the calling module."""
    return structlog.get_logger(name)
