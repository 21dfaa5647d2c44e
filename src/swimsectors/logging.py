"""Structured logging configuration for swimsectors.

Usage:
    from swimsectors.logging import configure_logging, get_logger

    # Call once when the CLI starts
    configure_logging(level="INFO", log_format="console")

    # Get a logger in any module
    logger = get_logger(__name__)
    logger.info("ranking_progress", processed=500)

Environment variables (used when no explicit value is passed):
    LOG_LEVEL: DEBUG, INFO, WARNING, ERROR (default: INFO)
    LOG_FORMAT: json, console (default: console for dev, json for prod)
    ENVIRONMENT: local, development, production (default: local)
"""

import logging
import os
import sys
from typing import Any

import structlog


def _get_environment() -> str:
    return os.getenv("ENVIRONMENT", "local").lower()


def _resolve_level(level: str | None) -> int:
    name = (level or os.getenv("LOG_LEVEL", "INFO")).upper()
    return getattr(logging, name, logging.INFO)


def _resolve_format(log_format: str | None) -> str:
    explicit = log_format or os.getenv("LOG_FORMAT")
    if explicit:
        return explicit.lower()
    return "json" if _get_environment() == "production" else "console"


def _add_environment(
    logger: logging.Logger, method_name: str, event_dict: dict[str, Any]
) -> dict[str, Any]:
    """Tag every entry with the running environment."""
    event_dict["environment"] = _get_environment()
    return event_dict


def configure_logging(level: str | None = None, log_format: str | None = None) -> None:
    """Configure structlog and the standard library root logger.

    Args:
        level: Log level name; falls back to LOG_LEVEL
        log_format: "json" or "console"; falls back to LOG_FORMAT / ENVIRONMENT
    """
    renderer_name = _resolve_format(log_format)
    log_level = _resolve_level(level)

    shared_processors: list[structlog.typing.Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
        _add_environment,
    ]

    if renderer_name == "json":
        processors = [
            *shared_processors,
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(),
        ]
    else:
        processors = [
            *shared_processors,
            structlog.dev.ConsoleRenderer(
                colors=sys.stderr.isatty(),
                exception_formatter=structlog.dev.plain_traceback,
            ),
        ]

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    # Batch output goes to stdout via rich, keep log lines on stderr
    logging.basicConfig(
        format="%(message)s",
        stream=sys.stderr,
        level=log_level,
        force=True,
    )

    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)
    logging.getLogger("supabase").setLevel(logging.WARNING)


def get_logger(name: str | None = None) -> structlog.stdlib.BoundLogger:
    """Get a logger instance, typically with ``__name__``."""
    return structlog.get_logger(name)


def bind_context(**kwargs: Any) -> None:
    """Bind context variables included in all subsequent log entries.

    Example:
        bind_context(year=2024, b_sector_percentage=120)
    """
    structlog.contextvars.bind_contextvars(**kwargs)


def clear_context() -> None:
    """Clear all bound context variables at the end of a run."""
    structlog.contextvars.clear_contextvars()
