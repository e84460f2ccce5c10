# topmark:header:start
#
#   project      : ConfDump
#   file         : dump.py
#   file_relpath : src/confdump/cli/commands/dump.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""ConfDump `dump` command.

Builds the built-in configuration snapshot, applies ``--set`` overrides, exports
every settings root through an export context and prints the entry stream as
text, TOML or JSON.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from confdump.cli.cmd_common import build_config, export_config, is_verbose
from confdump.cli.errors import engine_errors
from confdump.cli.keys import CliCmd, CliOpt
from confdump.cli.options import (
    common_dump_options,
    output_format_option,
    resolve_dump_flags,
    resolve_dump_scope,
)
from confdump.config.logging import get_logger
from confdump.core.formats import OutputFormat
from confdump.export.render import render_json, render_text, render_toml

if TYPE_CHECKING:
    from confdump.cli.console import ConsoleLike
    from confdump.export.types import DumpScope

logger = get_logger(__name__)


@click.command(
    name=CliCmd.DUMP,
    help="Dump the effective configuration as flattened key/value entries.",
    epilog=(
        "Examples:\n\n"
        "  confdump dump -n\n\n"
        "  confdump dump --set mail_location=maildir:~/Maildir --output-format toml\n\n"
        "  confdump dump --set plugin/quota=maildir --hide-list-defaults"
    ),
)
@common_dump_options
@click.option(
    CliOpt.SET,
    "overrides",
    multiple=True,
    metavar="[MODULE:]KEY=VALUE",
    help="Override a setting before dumping (repeatable).",
)
@output_format_option
def dump_command(
    *,
    scope: DumpScope | None,
    all_with_hidden: bool,
    non_default: bool,
    hide_list_defaults: bool,
    dedup: bool,
    overrides: tuple[str, ...],
    output_format: OutputFormat | None,
) -> None:
    """Dump the effective configuration.

    Args:
        scope (DumpScope | None): Explicit dump scope from ``--scope``.
        all_with_hidden (bool): ``-a`` shorthand for the all-with-hidden scope.
        non_default (bool): ``-n`` shorthand for the changed scope.
        hide_list_defaults (bool): Inside named sections, dump only set fields.
        dedup (bool): Emit every key at most once.
        overrides (tuple[str, ...]): ``[module:]key=value`` assignments.
        output_format (OutputFormat | None): Output format (text by default).
    """
    ctx = click.get_current_context()
    ctx.ensure_object(dict)
    console: ConsoleLike = ctx.obj["console"]

    dump_scope = resolve_dump_scope(
        scope,
        all_with_hidden=all_with_hidden,
        non_default=non_default,
    )
    flags = resolve_dump_flags(hide_list_defaults=hide_list_defaults, dedup=dedup)
    fmt: OutputFormat = output_format or OutputFormat.TEXT
    logger.debug("dump: scope=%s flags=%r format=%s", dump_scope.key, flags, fmt.value)

    config = build_config(overrides)
    entries = export_config(config, dump_scope, flags)

    with engine_errors("render"):
        if fmt == OutputFormat.JSON:
            rendered = render_json(entries) + "\n"
        elif fmt == OutputFormat.TOML:
            rendered = render_toml(entries)
        else:
            rendered = render_text(entries, console.style_key)

    if fmt == OutputFormat.TEXT and is_verbose(ctx):
        console.print(console.styled(f"# scope: {dump_scope.key}", bold=True))
    console.print(rendered, nl=False)
