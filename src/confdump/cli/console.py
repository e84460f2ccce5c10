# topmark:header:start
#
#   project      : ConfDump
#   file         : console.py
#   file_relpath : src/confdump/cli/console.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Program output for ConfDump commands.

Commands write the exported entry stream, the settings-root listing and the
version string through a console stored in ``ctx.obj["console"]``; diagnostics
go to `logging` instead. `ConsoleLike` is the surface commands depend on and
`ClickConsole` is the Click-backed implementation the CLI group installs.
"""

from __future__ import annotations

import sys
from typing import Any, Final, Protocol, TextIO

import click

# click.style() keyword sets for the recurring output elements.
KEY_STYLE: Final[dict[str, Any]] = {"fg": "cyan"}
HEADING_STYLE: Final[dict[str, Any]] = {"bold": True, "underline": True}
ERROR_STYLE: Final[dict[str, Any]] = {"fg": "bright_red"}


class ConsoleLike(Protocol):
    """Output surface used by ConfDump commands."""

    def print(self, text: str = "", *, nl: bool = True) -> None:
        """Write ``text`` to the output stream."""
        ...

    def error(self, text: str, *, nl: bool = True) -> None:
        """Write ``text`` to the error stream."""
        ...

    def styled(self, text: str, **style_kwargs: Any) -> str:
        """Return ``text`` with ANSI styling applied when color is enabled."""
        ...

    def heading(self, text: str) -> None:
        """Write a section heading (``Settings roots:``, ``ConfDump version:``)."""
        ...

    def style_key(self, key: str) -> str:
        """Return a setting key styled for ``key = value`` output."""
        ...


class ClickConsole:
    """`ConsoleLike` implementation writing through `click.echo`.

    Args:
        enable_color (bool): Emit ANSI styling; when False every ``styled`` call
            returns its input unchanged.
        out (TextIO | None): Entry stream destination. Defaults to `sys.stdout`.
        err (TextIO | None): Error destination. Defaults to `sys.stderr`.
    """

    enable_color: bool
    out: TextIO
    err: TextIO

    def __init__(
        self,
        *,
        enable_color: bool = True,
        out: TextIO | None = None,
        err: TextIO | None = None,
    ) -> None:
        self.enable_color = enable_color
        self.out = out or sys.stdout
        self.err = err or sys.stderr

    def print(self, text: str = "", *, nl: bool = True) -> None:
        """Write ``text`` to the output stream."""
        click.echo(text, nl=nl, file=self.out, color=self.enable_color)

    def error(self, text: str, *, nl: bool = True) -> None:
        """Write ``text`` to the error stream, in red when color is enabled."""
        click.echo(self.styled(text, **ERROR_STYLE), nl=nl, file=self.err, color=self.enable_color)

    def styled(self, text: str, **style_kwargs: Any) -> str:
        """Apply `click.style` unless color is disabled."""
        if not self.enable_color:
            return text
        return click.style(text, **style_kwargs)

    def heading(self, text: str) -> None:
        """Write ``text`` bold and underlined."""
        self.print(self.styled(text, **HEADING_STYLE))

    def style_key(self, key: str) -> str:
        """Color ``key`` cyan."""
        return self.styled(key, **KEY_STYLE)
