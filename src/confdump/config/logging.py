# topmark:header:start
#
#   project      : ConfDump
#   file         : logging.py
#   file_relpath : src/confdump/config/logging.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Logging for ConfDump.

stdout carries the exported entry stream, so every record goes to stderr. On top
of the standard levels a ``TRACE`` level (below ``DEBUG``) records the settings
walk and each parsed assignment; ``DEBUG`` covers parser sessions and context
lifecycle. Records are colored by severity with ``yachalk``.

The level comes from ``-v`` on the command line or from ``CONFDUMP_LOG_LEVEL``
(a level name such as ``TRACE`` or a number); without either only CRITICAL
records are shown.
"""

from __future__ import annotations

import logging
import os
import sys
from typing import TYPE_CHECKING, Callable, Final, cast

from yachalk import chalk

from confdump.constants import LOG_LEVEL_ENV_VAR

if TYPE_CHECKING:
    from collections.abc import Mapping

TRACE_LEVEL: Final[int] = logging.DEBUG - 5


class ConfdumpLogger(logging.Logger):
    """`logging.Logger` with a `trace()` method."""

    def trace(
        self,
        msg: object,
        *args: object,
        extra: Mapping[str, object] | None = None,
    ) -> None:
        """Log ``msg % args`` at TRACE level."""
        if self.isEnabledFor(TRACE_LEVEL):
            self._log(TRACE_LEVEL, msg=msg, args=args, extra=extra, stacklevel=2)


if not hasattr(logging, "TRACE"):
    logging.addLevelName(TRACE_LEVEL, "TRACE")
    logging.TRACE = TRACE_LEVEL  # type: ignore

logging.setLoggerClass(ConfdumpLogger)


LOG_FORMAT = "[%(levelname)s] %(message)s"
DEBUG_LOG_FORMAT = "[%(levelname)s] [%(name)s:%(lineno)d] %(message)s"

# Lowest level of each color band, most severe first.
_LEVEL_COLORS: Final[tuple[tuple[int, Callable[[str], str]], ...]] = (
    (logging.CRITICAL, chalk.red_bright),
    (logging.ERROR, chalk.red),
    (logging.WARNING, chalk.yellow),
    (logging.INFO, chalk.green),
    (logging.DEBUG, chalk.gray),
    (TRACE_LEVEL, chalk.blue),
)


class ChalkFormatter(logging.Formatter):
    """Formatter coloring each record by severity."""

    def format(self, record: logging.LogRecord) -> str:
        message = super().format(record)
        for threshold, color in _LEVEL_COLORS:
            if record.levelno >= threshold:
                return color(message)
        return chalk.dim(message)


def resolve_env_log_level() -> int | None:
    """Return the level named by ``CONFDUMP_LOG_LEVEL``, or None when unset or unknown.

    Accepts level names in any case (``WARN`` and ``FATAL`` included) and plain
    integers.
    """
    raw = os.environ.get(LOG_LEVEL_ENV_VAR, "").strip().upper()
    if not raw:
        return None
    if raw.isdigit():
        return int(raw)
    if raw == "TRACE":
        return TRACE_LEVEL
    level = logging.getLevelName(raw)
    return level if isinstance(level, int) else None


def setup_logging(level: int | None = None) -> None:
    """Install a single colored stderr handler on the root logger.

    Args:
        level (int | None): Root level. `None` consults ``CONFDUMP_LOG_LEVEL``
            and falls back to CRITICAL.
    """
    if level is None:
        level = resolve_env_log_level() or logging.CRITICAL

    root_logger = logging.getLogger()
    root_logger.setLevel(level)
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(ChalkFormatter(LOG_FORMAT if level >= logging.INFO else DEBUG_LOG_FORMAT))
    root_logger.addHandler(handler)
    root_logger.propagate = False


def get_logger(name: str) -> ConfdumpLogger:
    """Return the `ConfdumpLogger` named ``name`` (usually ``__name__``)."""
    return cast("ConfdumpLogger", logging.getLogger(name))
