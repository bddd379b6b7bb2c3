"""Logging helpers using structlog.

Diagnostics go to stderr; stdout is reserved for command output.
"""

from __future__ import annotations

import logging
import sys
from typing import Any

import structlog


class StderrLogger:
    """structlog sink that resolves ``sys.stderr`` at write time.

    The stream is not captured when logging is configured, so a swapped or
    closed stderr (redirection, test capture) never poisons cached loggers.
    """

    def msg(self, message: str) -> None:
        stream = sys.stderr
        if stream is None or stream.closed:
            return
        print(message, file=stream, flush=True)

    log = debug = info = warn = warning = error = critical = exception = fatal = msg


def _stderr_logger_factory(*args: Any) -> StderrLogger:
    return StderrLogger()


def get_logger(name: str | None = None) -> structlog.typing.FilteringBoundLogger:
    """Return a configured structlog logger, configuring the stack on first use."""

    if not structlog.is_configured():
        configure_logging()

    return structlog.get_logger(name)


def configure_logging(level: str = "WARNING") -> None:
    """Configure structlog and stdlib logging at ``level``."""

    numeric_level = getattr(logging, level.upper(), logging.WARNING)

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.add_log_level,
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(numeric_level),
        logger_factory=_stderr_logger_factory,
        cache_logger_on_first_use=True,
    )

    logging.basicConfig(level=numeric_level, format="%(message)s")
