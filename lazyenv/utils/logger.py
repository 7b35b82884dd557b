"""Structured logging for lazyenv.

Loggers are structlog ``BoundLogger`` objects wrapping stdlib loggers under
the ``lazyenv`` namespace, so the host application's logging configuration
decides what is emitted. Nothing is printed until a handler is installed,
either by the host or by :func:`configure_logging`.
"""

from __future__ import annotations

import logging

import structlog

from lazyenv.config import settings

ROOT_LOGGER = "lazyenv"

_PROCESSORS = [
    structlog.stdlib.filter_by_level,
    structlog.processors.TimeStamper(fmt="iso"),
    structlog.stdlib.add_log_level,
    structlog.processors.StackInfoRenderer(),
    structlog.processors.format_exc_info,
    structlog.processors.JSONRenderer(),
]


def configure_logging(level: int | str | None = None) -> structlog.stdlib.BoundLogger:
    """Send lazyenv events to stderr and return the package logger.

    ``level`` defaults to ``LAZYENV_LOG_LEVEL`` (see :mod:`lazyenv.config`).
    """
    if level is None:
        level = settings.log_level
    if isinstance(level, str):
        level = getattr(logging, level.upper(), logging.WARNING)

    logging.basicConfig(format="%(message)s", handlers=[logging.StreamHandler()])
    logging.getLogger(ROOT_LOGGER).setLevel(level)
    return get_logger("root")


def get_logger(component: str) -> structlog.stdlib.BoundLogger:
    """Return a logger bound to ``component`` without touching global configuration."""
    name = ROOT_LOGGER if component == "root" else f"{ROOT_LOGGER}.{component}"
    return structlog.wrap_logger(
        logging.getLogger(name),
        processors=_PROCESSORS,
        wrapper_class=structlog.stdlib.BoundLogger,
    ).bind(component=component)


__all__ = ["ROOT_LOGGER", "configure_logging", "get_logger"]
