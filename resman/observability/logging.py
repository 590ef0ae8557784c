"""Structured logging configuration using structlog."""

from __future__ import annotations

import logging
import sys
from typing import Any

import structlog


def setup_logging(level: str = "info", fmt: str = "json") -> None:
    """Configure structlog output to stderr.

    ``fmt="json"`` renders one JSON object per line for log shippers;
    ``fmt="console"`` renders human-readable lines for local runs.
    """
    log_level = getattr(logging, level.upper(), logging.INFO)
    renderers: list[Any] = (
        [structlog.dev.ConsoleRenderer(colors=False)]
        if fmt == "console"
        else [structlog.processors.format_exc_info, structlog.processors.JSONRenderer()]
    )

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.StackInfoRenderer(),
            structlog.dev.set_exc_info,
            structlog.processors.TimeStamper(fmt="iso", utc=True, key="ts"),
            *renderers,
        ],
        wrapper_class=structlog.make_filtering_bound_logger(log_level),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
        cache_logger_on_first_use=True,
    )


def get_logger(component: str, **context: Any) -> structlog.stdlib.BoundLogger:
    """Get a logger bound with a component name and any extra context."""
    return structlog.get_logger(component=component, **context)  # type: ignore[return-value]
