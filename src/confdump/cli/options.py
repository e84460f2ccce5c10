# topmark:header:start
#
#   project      : ConfDump
#   file         : options.py
#   file_relpath : src/confdump/cli/options.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Reusable Click options for ConfDump and the functions resolving them.

Decorators:

- `common_verbose_options`: ``-v``/``-q`` on the command group.
- `common_color_options`: ``--color``/``--no-color`` on the command group.
- `common_dump_options`: scope shorthands and `DumpFlags` switches of ``dump``.
- `output_format_option`: ``--output-format`` for every subcommand.

Resolvers turn the raw option values into a logging level, a color decision, a
`DumpScope` and a `DumpFlags` set, raising `ConfdumpUsageError` on conflicts.
"""

from __future__ import annotations

import logging
import os
import sys
from typing import TYPE_CHECKING, Callable, ParamSpec, TypeVar

import click

from confdump.cli.cli_types import EnumChoiceParam
from confdump.cli.errors import ConfdumpUsageError
from confdump.cli.keys import CliOpt
from confdump.config.logging import TRACE_LEVEL
from confdump.core.enum_mixins import KeyedStrEnum
from confdump.core.formats import OutputFormat
from confdump.export.types import DumpFlags, DumpScope

if TYPE_CHECKING:
    from collections.abc import Mapping

P = ParamSpec("P")
R = TypeVar("R")

# Number of -v flags -> logging level; more than three behaves like three.
VERBOSE_LEVELS: Mapping[int, int] = {
    0: logging.WARNING,
    1: logging.INFO,
    2: logging.DEBUG,
    3: TRACE_LEVEL,
}


def resolve_verbosity(verbose_count: int, quiet_count: int) -> int:
    """Return the logging level selected by ``-v``/``-q``.

    ``-v`` shows the ``# scope:`` header in text dumps and, absent
    ``CONFDUMP_LOG_LEVEL``, enables INFO logging; ``-vv`` adds DEBUG records of
    every parser session and ``-vvv`` TRACE records of the settings walk. ``-q``
    selects ERROR.

    Raises:
        ConfdumpUsageError: Both ``-v`` and ``-q`` were given.
    """
    if verbose_count and quiet_count:
        raise ConfdumpUsageError("The '--verbose' and '--quiet' options are mutually exclusive.")
    if quiet_count:
        return logging.ERROR
    return VERBOSE_LEVELS[min(verbose_count, 3)]


def common_verbose_options(f: Callable[P, R]) -> Callable[P, R]:
    """Add ``-v/--verbose`` and ``-q/--quiet`` (both counted)."""
    f = click.option(
        "-v",
        "--verbose",
        count=True,
        help="Show more detail; repeat up to three times for engine tracing.",
    )(f)
    f = click.option(
        "-q",
        "--quiet",
        count=True,
        help="Only report errors.",
    )(f)
    return f


class ColorMode(KeyedStrEnum):
    """``--color`` choice."""

    AUTO = ("auto", "Color when stdout is a terminal")
    ALWAYS = ("always", "Always color", ("yes", "force"))
    NEVER = ("never", "Never color", ("no", "none"))


def resolve_color_mode(
    *,
    cli_mode: ColorMode | None,
    output_format: OutputFormat | None,
    stdout_isatty: bool | None = None,
) -> bool:
    """Decide whether the console emits ANSI styling.

    Machine formats are never colored. Otherwise an explicit ``--color`` wins,
    then ``FORCE_COLOR`` and ``NO_COLOR``, then whether stdout is a terminal.

    Args:
        cli_mode (ColorMode | None): From ``--color``/``--no-color``.
        output_format (OutputFormat | None): Output format, if already known.
        stdout_isatty (bool | None): Override terminal detection (tests).

    Returns:
        bool: True to enable color.
    """
    if output_format is not None and output_format.is_machine:
        return False
    if cli_mode is ColorMode.ALWAYS:
        return True
    if cli_mode is ColorMode.NEVER:
        return False
    force_color = os.getenv("FORCE_COLOR")
    if force_color and force_color != "0":
        return True
    if os.getenv("NO_COLOR") is not None:
        return False
    if stdout_isatty is None:
        try:
            stdout_isatty = sys.stdout.isatty()
        except (AttributeError, ValueError):
            stdout_isatty = False
    return bool(stdout_isatty)


def common_color_options(f: Callable[P, R]) -> Callable[P, R]:
    """Add ``--color MODE`` and ``--no-color``."""
    f = click.option(
        "--color",
        "color_mode",
        type=EnumChoiceParam(ColorMode),
        default=None,
        help=f"Color output ({', '.join(ColorMode.choices())}); default: auto.",
    )(f)
    f = click.option(
        "--no-color",
        "no_color",
        is_flag=True,
        help="Disable color output (same as --color never).",
    )(f)
    return f


def common_dump_options(f: Callable[P, R]) -> Callable[P, R]:
    """Add the dump policy options.

    ``--scope``, its shorthands ``-a/--all`` and ``-n/--non-default``,
    ``--hide-list-defaults`` and ``--dedup/--no-dedup``.
    """
    f = click.option(
        CliOpt.SCOPE,
        "scope",
        type=EnumChoiceParam(DumpScope),
        default=None,
        help=f"Dump scope ({', '.join(DumpScope.choices())}); default: all.",
    )(f)
    f = click.option(
        "-a",
        CliOpt.ALL_WITH_HIDDEN,
        "all_with_hidden",
        is_flag=True,
        help="Dump all settings, hidden ones included (same as --scope all-with-hidden).",
    )(f)
    f = click.option(
        "-n",
        CliOpt.NON_DEFAULT,
        "non_default",
        is_flag=True,
        help="Dump only settings that differ from their default (same as --scope changed).",
    )(f)
    f = click.option(
        CliOpt.HIDE_LIST_DEFAULTS,
        "hide_list_defaults",
        is_flag=True,
        help="Inside named sections, dump only explicitly set fields.",
    )(f)
    f = click.option(
        f"{CliOpt.DEDUP}/--no-dedup",
        "dedup",
        default=True,
        show_default=True,
        help="Emit every key at most once across all settings roots.",
    )(f)
    return f


def resolve_dump_scope(
    scope: DumpScope | None,
    *,
    all_with_hidden: bool,
    non_default: bool,
) -> DumpScope:
    """Combine ``--scope`` with its ``-a`` / ``-n`` shorthands.

    Raises:
        ConfdumpUsageError: More than one scope was requested.
    """
    requested: list[DumpScope] = []
    if scope is not None:
        requested.append(scope)
    if all_with_hidden:
        requested.append(DumpScope.ALL_WITH_HIDDEN)
    if non_default:
        requested.append(DumpScope.CHANGED)
    if len(set(requested)) > 1:
        raise ConfdumpUsageError(
            f"Conflicting dump scopes: {', '.join(s.key for s in requested)}. "
            f"Use only one of {CliOpt.SCOPE}, -a, -n."
        )
    return requested[0] if requested else DumpScope.ALL_WITHOUT_HIDDEN


def resolve_dump_flags(*, hide_list_defaults: bool, dedup: bool) -> DumpFlags:
    """Return the `DumpFlags` selected on the command line."""
    flags = DumpFlags.NONE
    if hide_list_defaults:
        flags |= DumpFlags.HIDE_LIST_DEFAULTS
    if dedup:
        flags |= DumpFlags.DEDUPLICATE_KEYS
    return flags


def output_format_option(f: Callable[P, R]) -> Callable[P, R]:
    """Add ``--output-format`` (parsed to `OutputFormat`, `None` when omitted)."""
    return click.option(
        CliOpt.OUTPUT_FORMAT,
        "output_format",
        type=EnumChoiceParam(OutputFormat),
        default=None,
        help=f"Output format ({', '.join(OutputFormat.choices())}); default: text.",
    )(f)
