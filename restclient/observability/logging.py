"""Structured logging configuration.

The client logs through structlog. Applications either call
``configure_logging`` themselves or ``configure_from_settings`` to take the
``RESTCLIENT_LOG_*`` environment variables into account.
"""

import logging
import sys
from typing import TextIO

import structlog

from restclient.settings.app import AppSettings


def _processors(json_format: bool) -> list[structlog.types.Processor]:
    """Processor chain shared by both output formats."""
    renderer: structlog.types.Processor
    if json_format:
        renderer = structlog.processors.JSONRenderer(sort_keys=True)
    else:
        renderer = structlog.dev.ConsoleRenderer(colors=False)
    return [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        renderer,
    ]


def configure_logging(
    level: int = logging.INFO,
    output: TextIO | None = None,
    json_format: bool = True,
) -> None:
    """Configure structured logging.

    Args:
        level: Minimum level to emit (default: INFO).
        output: Output stream (default: current stderr).
        json_format: Render JSON lines instead of console text.
    """
    stream = output if output is not None else sys.stderr
    structlog.configure(
        processors=_processors(json_format),
        wrapper_class=structlog.make_filtering_bound_logger(level),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(file=stream),
        cache_logger_on_first_use=False,
    )
    logging.basicConfig(format="%(message)s", stream=stream, level=level)


def configure_from_settings(
    settings: AppSettings,
    verbose: bool = False,
    json_format: bool | None = None,
) -> None:
    """Configure logging from environment settings.

    Args:
        settings: Loaded application settings.
        verbose: Force DEBUG level (payload previews are logged at DEBUG).
        json_format: Override ``settings.log_json`` when given.
    """
    level = logging.DEBUG if verbose else level_from_name(settings.log_level)
    configure_logging(
        level=level,
        json_format=settings.log_json if json_format is None else json_format,
    )


def level_from_name(name: str) -> int:
    """Map a level name such as ``"debug"`` to a logging level."""
    level = logging.getLevelName(name.strip().upper())
    if isinstance(level, int):
        return level
    return logging.INFO


def get_logger(name: str | None = None) -> structlog.stdlib.BoundLogger:
    """Get a bound logger instance.

    Args:
        name: Optional logger name.

    Returns:
        Bound logger instance.
    """
    logger: structlog.stdlib.BoundLogger = structlog.get_logger(name)
    return logger


def bind_request_context(correlation_id: str) -> None:
    """Attach a correlation id to every event logged in this context."""
    structlog.contextvars.bind_contextvars(correlation_id=correlation_id)


def clear_request_context() -> None:
    """Remove the correlation id bound by ``bind_request_context``."""
    structlog.contextvars.unbind_contextvars("correlation_id")
