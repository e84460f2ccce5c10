# topmark:header:start
#
#   project      : ConfDump
#   file         : roots.py
#   file_relpath : src/confdump/cli/commands/roots.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""ConfDump `roots` command.

Lists the settings roots attached to an export context, in export order, and
the bootstrap values the context reads from the master-service root.
"""

from __future__ import annotations

import json
from typing import TYPE_CHECKING, Any, cast

import click
import tomlkit

from confdump.cli.cmd_common import build_config
from confdump.cli.errors import engine_errors
from confdump.cli.keys import CliCmd, CliOpt
from confdump.cli.options import output_format_option
from confdump.constants import VALUE_NOT_SET
from confdump.core.formats import OutputFormat
from confdump.export.context import ExportContext
from confdump.export.render import EntryCollector
from confdump.export.types import DumpFlags, DumpScope
from confdump.settings.types import SettingType

if TYPE_CHECKING:
    from confdump.cli.console import ConsoleLike


@click.command(
    name=CliCmd.ROOTS,
    help="List the settings roots in export order and the bootstrap settings.",
)
@click.option(
    CliOpt.SET,
    "overrides",
    multiple=True,
    metavar="[MODULE:]KEY=VALUE",
    help="Override a setting before listing (repeatable).",
)
@output_format_option
def roots_command(
    *,
    overrides: tuple[str, ...],
    output_format: OutputFormat | None,
) -> None:
    """List settings roots and bootstrap settings."""
    ctx = click.get_current_context()
    ctx.ensure_object(dict)
    console: ConsoleLike = ctx.obj["console"]

    config = build_config(overrides)
    roots: list[dict[str, Any]] = []
    with engine_errors("roots"):
        with ExportContext(DumpScope.ALL_WITHOUT_HIDDEN, DumpFlags.NONE, EntryCollector()) as ectx:
            ectx.set_module_parsers(config.global_filter_parser().module_parsers)
            for idx in range(ectx.parser_count()):
                root = ectx.parser_info(idx)
                roots.append(
                    {
                        "index": idx,
                        "module": root.module_name,
                        "settings": sum(1 for d in root.defines if d.type != SettingType.ALIAS),
                    }
                )
            bootstrap = {
                "base_dir": ectx.base_dir(),
                "import_environment": ectx.import_environment(),
            }

    fmt: OutputFormat = output_format or OutputFormat.TEXT
    if fmt == OutputFormat.JSON:
        console.print(json.dumps({"roots": roots, "bootstrap": bootstrap}, indent=2))
        return
    if fmt == OutputFormat.TOML:
        doc = {
            "bootstrap": bootstrap,
            "roots": {r["module"]: {"index": r["index"], "settings": r["settings"]} for r in roots},
        }
        console.print(cast("str", cast("Any", tomlkit).dumps(doc)), nl=False)
        return

    console.heading("Settings roots:")
    for r in roots:
        console.print(f"  {r['index']:>2}  {r['module']:<16} {r['settings']} settings")
    console.print()
    console.heading("Bootstrap settings:")
    for key, value in bootstrap.items():
        console.print(f"  {key} = {value or VALUE_NOT_SET}")
