"""Logging for DSON Core, with a TRACE level below DEBUG.

Library modules only create loggers; output is configured by
:func:`setup_logging`, which the ``dson`` command calls on start-up.
"""

from __future__ import annotations

import logging
import os
import sys
from typing import Final, cast

from yachalk import chalk

TRACE_LEVEL: Final[int] = logging.DEBUG - 5

LOG_LEVEL_ENV: Final[str] = "DSON_LOG_LEVEL"


class DsonLogger(logging.Logger):
    """Logger with a ``trace()`` method for per-token diagnostics."""

    def trace(self, msg: object, *args: object) -> None:
        if self.isEnabledFor(TRACE_LEVEL):
            self._log(TRACE_LEVEL, msg, args, stacklevel=2)


if logging.getLevelName(TRACE_LEVEL) != "TRACE":
    logging.addLevelName(TRACE_LEVEL, "TRACE")

logging.setLoggerClass(DsonLogger)


LOG_FORMAT = "[%(levelname)s] %(message)s"
DEBUG_LOG_FORMAT = "[%(levelname)s] [%(name)s:%(lineno)d] %(message)s"


class ChalkFormatter(logging.Formatter):
    """Colour each record according to its severity."""

    def format(self, record: logging.LogRecord) -> str:
        level = record.levelno
        message = super().format(record)

        if level >= logging.ERROR:
            return chalk.red(message)
        if level >= logging.WARNING:
            return chalk.yellow(message)
        if level >= logging.INFO:
            return chalk.green(message)
        if level >= logging.DEBUG:
            return chalk.gray(message)
        return chalk.blue(message)


_LEVEL_NAMES: Final[dict[str, int]] = {
    "TRACE": TRACE_LEVEL,
    "DEBUG": logging.DEBUG,
    "INFO": logging.INFO,
    "WARNING": logging.WARNING,
    "WARN": logging.WARNING,
    "ERROR": logging.ERROR,
    "CRITICAL": logging.CRITICAL,
}


def resolve_env_log_level() -> int | None:
    """Return the level named by ``DSON_LOG_LEVEL`` (name or number), or None."""
    val = os.environ.get(LOG_LEVEL_ENV, "").strip().upper()
    if not val:
        return None
    if val.isdigit():
        return int(val)
    return _LEVEL_NAMES.get(val)


def setup_logging(level: int | None = None) -> None:
    """Send dson_core log records to stderr with coloured output.

    With no *level*, ``DSON_LOG_LEVEL`` is consulted; the default is WARNING.
    """
    if level is None:
        level = resolve_env_log_level() or logging.WARNING

    root = logging.getLogger("dson_core")
    root.setLevel(level)
    for handler in root.handlers[:]:
        root.removeHandler(handler)

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(ChalkFormatter(LOG_FORMAT if level >= logging.INFO else DEBUG_LOG_FORMAT))
    root.addHandler(handler)
    root.propagate = False


def get_logger(name: str) -> DsonLogger:
    logger = logging.getLogger(name)
    return cast("DsonLogger", logger)
