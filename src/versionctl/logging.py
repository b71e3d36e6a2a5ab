"""Structured logging for versionctl.

Configures `structlog <https://www.structlog.org/>`_ to render
human-readable events on stderr, so stdout only ever carries the
version being printed.

Usage::

    from versionctl.logging import configure_logging, get_logger

    configure_logging("debug")
    log = get_logger()
    log.info("repo version", version="1.2.3")

Library code never calls :func:`configure_logging`; components accept
a logger as a constructor argument instead.
"""

from __future__ import annotations

import logging
import sys
from enum import Enum

import structlog


class LogLevel(str, Enum):
    """Verbosity levels accepted on the command line."""

    ERROR = "error"
    WARN = "warn"
    INFO = "info"
    DEBUG = "debug"

    def __str__(self) -> str:
        return self.value


_LEVELS = {
    LogLevel.ERROR: logging.ERROR,
    LogLevel.WARN: logging.WARNING,
    LogLevel.INFO: logging.INFO,
    LogLevel.DEBUG: logging.DEBUG,
}


def configure_logging(level: LogLevel | str = LogLevel.ERROR) -> None:
    """Configure structlog and the stdlib root logger.

    Should be called once at startup, before any logging calls.

    Args:
        level: One of ``error``, ``warn``, ``info`` or ``debug``

    Raises:
        ValueError: If ``level`` is not a recognised level
    """
    try:
        numeric_level = _LEVELS[LogLevel(level)]
    except ValueError:
        raise ValueError(f"Unrecognized log level {level!r}") from None

    logging.basicConfig(
        format="%(message)s",
        stream=sys.stderr,
        level=numeric_level,
        force=True,
    )

    shared_processors: list[structlog.types.Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
    ]

    structlog.configure(
        processors=[
            *shared_processors,
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    formatter = structlog.stdlib.ProcessorFormatter(
        processors=[
            structlog.stdlib.ProcessorFormatter.remove_processors_meta,
            structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty()),
        ],
    )
    for handler in logging.root.handlers:
        handler.setFormatter(formatter)


def get_logger(name: str = "versionctl") -> structlog.stdlib.BoundLogger:
    """Return a bound structlog logger.

    Args:
        name: Logger name, used for filtering and identification

    Returns:
        A :class:`structlog.stdlib.BoundLogger` instance
    """
    return structlog.get_logger(name)


__all__ = [
    "LogLevel",
    "configure_logging",
    "get_logger",
]
