"""Observability module for logging."""

from restclient.observability.logging import (
    bind_request_context,
    clear_request_context,
    configure_from_settings,
    configure_logging,
    get_logger,
)


__all__ = [
    "bind_request_context",
    "clear_request_context",
    "configure_from_settings",
    "configure_logging",
    "get_logger",
]
