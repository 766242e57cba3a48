"""Structured logging configuration using structlog.

Logs always go to stderr; stdout is reserved for the rendered report.
"""

from __future__ import annotations

import logging
import sys

import structlog


# Third-party stdlib loggers, silent unless the level is debug.
_LIBRARY_LOGGERS = ("kubernetes_asyncio", "aiohttp", "asyncio")


def _configure_stdlib(log_level: int) -> None:
    logging.basicConfig(level=log_level, stream=sys.stderr, format="%(levelname)s %(name)s: %(message)s")
    library_level = log_level if log_level <= logging.DEBUG else logging.CRITICAL + 1
    for name in _LIBRARY_LOGGERS:
        logging.getLogger(name).setLevel(library_level)


def setup_logging(level: str = "warning", fmt: str = "json") -> None:
    """Configure structlog for JSON (or console) output to stderr.

    Third-party stdlib loggers are silenced unless *level* is ``debug``.
    """
    log_level = getattr(logging, level.upper(), logging.WARNING)
    _configure_stdlib(log_level)

    renderer: structlog.types.Processor
    if fmt == "console":
        renderer = structlog.dev.ConsoleRenderer(colors=False)
    else:
        renderer = structlog.processors.JSONRenderer()

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.StackInfoRenderer(),
            structlog.dev.set_exc_info,
            structlog.processors.TimeStamper(fmt="iso", utc=True, key="ts"),
            renderer,
        ],
        wrapper_class=structlog.make_filtering_bound_logger(log_level),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
        cache_logger_on_first_use=False,
    )


def get_logger(component: str) -> structlog.stdlib.BoundLogger:
    """Get a logger bound with a component name."""
    return structlog.get_logger(component=component)  # type: ignore[return-value]
