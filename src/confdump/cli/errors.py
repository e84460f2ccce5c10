# topmark:header:start
#
#   project      : ConfDump
#   file         : errors.py
#   file_relpath : src/confdump/cli/errors.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Exit codes and Click exceptions for the ConfDump CLI.

Exit codes follow BSD ``sysexits``:

| Code | Meaning                                                   |
| ---- | --------------------------------------------------------- |
| 0    | entries (or the listing) were written                     |
| 1    | generic failure                                           |
| 64   | conflicting scopes, ``-v`` combined with ``-q``           |
| 70   | malformed schema or engine misuse (`InvariantViolation`)  |
| 78   | deferred module parser error or malformed ``--set`` value |

Commands raise the `ConfdumpCliError` subclasses below; wrapping engine calls in
`engine_errors()` turns the engine's own exceptions into them.
"""

from __future__ import annotations

from contextlib import contextmanager
from enum import IntEnum
from typing import IO, TYPE_CHECKING, Any

import click

from confdump.config.logging import get_logger
from confdump.core.errors import InvariantViolation, ParserError, SettingValueError

if TYPE_CHECKING:
    from collections.abc import Iterator

logger = get_logger(__name__)


class ExitCode(IntEnum):
    """Process exit status of a ConfDump command."""

    SUCCESS = 0
    FAILURE = 1
    USAGE_ERROR = 64  # EX_USAGE
    INTERNAL_ERROR = 70  # EX_SOFTWARE
    CONFIG_ERROR = 78  # EX_CONFIG


class ConfdumpCliError(click.ClickException):
    """Base class for all ConfDump CLI errors."""

    exit_code = ExitCode.FAILURE

    def show(self, file: IO[Any] | None = None) -> None:  # pragma: no cover - Click prints errors
        """Report the error through the console stored on the Click context, if any."""
        ctx = click.get_current_context(silent=True)
        console = ctx.obj.get("console") if ctx is not None and isinstance(ctx.obj, dict) else None
        if console is None:
            super().show(file)
            return
        console.error(self.format_message())


class ConfdumpUsageError(ConfdumpCliError):
    """Contradictory command-line flags."""

    exit_code = ExitCode.USAGE_ERROR


class ConfdumpConfigError(ConfdumpCliError):
    """The configuration cannot be exported as given."""

    exit_code = ExitCode.CONFIG_ERROR


class ConfdumpInternalError(ConfdumpCliError):
    """The engine rejected its own input; this is a bug in a schema or in ConfDump."""

    exit_code = ExitCode.INTERNAL_ERROR


@contextmanager
def engine_errors(action: str) -> Iterator[None]:
    """Translate engine exceptions raised while performing ``action``.

    Raises:
        ConfdumpConfigError: For `ParserError` and `SettingValueError`.
        ConfdumpInternalError: For `InvariantViolation`.
    """
    try:
        yield
    except InvariantViolation as exc:
        logger.error("%s: invariant violation: %s", action, exc)
        raise ConfdumpInternalError(f"Internal error: {exc}") from exc
    except SettingValueError as exc:
        raise ConfdumpConfigError(f"Invalid override: {exc.message}") from exc
    except ParserError as exc:
        raise ConfdumpConfigError(exc.message) from exc
