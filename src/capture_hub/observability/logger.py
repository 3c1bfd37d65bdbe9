"""Structured logging setup.

Uses structlog over stdlib logging, with JSON output for production and
a console renderer for development.  Every entry carries the current
hub's ``last_event_id`` once something has been captured, so log lines
can be correlated with captured events.
"""

from __future__ import annotations

import logging
import sys
from typing import Any

import structlog

from capture_hub.core.enums import LogFormat


def _add_last_event_id(
    logger: Any, method_name: str, event_dict: dict[str, Any]
) -> dict[str, Any]:
    """Structlog processor: add the current hub's last event ID."""
    from capture_hub.hub.current import get_current_hub

    last_event_id = get_current_hub().last_event_id()
    if last_event_id:
        event_dict.setdefault("last_event_id", last_event_id)
    return event_dict


def setup_logging(
    level: str = "INFO",
    format: str | LogFormat = LogFormat.JSON,
) -> None:
    """Configure structured logging for the application.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR).
        format: "json" for production, "console" for development.
    """
    log_level = getattr(logging, level.upper(), logging.INFO)

    processors: list[Any] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.filter_by_level,
        _add_last_event_id,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
    ]

    if LogFormat(format) == LogFormat.JSON:
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.append(structlog.dev.ConsoleRenderer())

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    logging.basicConfig(
        format="%(message)s",
        stream=sys.stderr,
        level=log_level,
    )


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    """Get a structured logger for a module."""
    return structlog.get_logger(name)
