# topmark:header:start
#
#   project      : ConfDump
#   file         : version.py
#   file_relpath : src/confdump/cli/commands/version.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""ConfDump `version` command."""

from __future__ import annotations

import json
from typing import TYPE_CHECKING, Any, cast

import click
import tomlkit

from confdump.cli.cmd_common import is_verbose
from confdump.cli.keys import CliCmd
from confdump.cli.options import output_format_option
from confdump.constants import CONFDUMP_VERSION
from confdump.core.formats import OutputFormat

if TYPE_CHECKING:
    from confdump.cli.console import ConsoleLike


@click.command(name=CliCmd.VERSION, help="Show the installed ConfDump version.")
@output_format_option
def version_command(*, output_format: OutputFormat | None = None) -> None:
    """Print the version; ``-v`` adds a heading in text output."""
    ctx = click.get_current_context()
    console: ConsoleLike = ctx.obj["console"]
    payload = {"version": CONFDUMP_VERSION}

    if output_format is OutputFormat.JSON:
        console.print(json.dumps(payload))
    elif output_format is OutputFormat.TOML:
        console.print(cast("str", cast("Any", tomlkit).dumps(payload)), nl=False)
    else:
        if is_verbose(ctx):
            console.heading("ConfDump version:")
        console.print(console.styled(CONFDUMP_VERSION, bold=True))
