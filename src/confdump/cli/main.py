# topmark:header:start
#
#   project      : ConfDump
#   file         : main.py
#   file_relpath : src/confdump/cli/main.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""ConfDump command-line entry point (``confdump``).

The group callback resolves ``-v``/``-q``, logging and color once and stores the
result in ``ctx.obj``:

- ``verbosity_level``: program-output level derived from ``-v``/``-q``.
- ``log_level``: level handed to `setup_logging()` (`None` keeps it quiet).
- ``console``: the `ClickConsole` every subcommand writes through.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from confdump.cli.commands.dump import dump_command
from confdump.cli.commands.roots import roots_command
from confdump.cli.commands.version import version_command
from confdump.cli.console import ClickConsole
from confdump.cli.keys import CliCmd
from confdump.cli.options import (
    ColorMode,
    common_color_options,
    common_verbose_options,
    resolve_color_mode,
    resolve_verbosity,
)
from confdump.config.logging import get_logger, resolve_env_log_level, setup_logging

if TYPE_CHECKING:
    from confdump.config.logging import ConfdumpLogger

logger: ConfdumpLogger = get_logger(__name__)


def init_common_state(
    ctx: click.Context,
    *,
    verbose: int,
    quiet: int,
    color_mode: ColorMode | None,
    no_color: bool,
) -> None:
    """Populate ``ctx.obj`` with verbosity, logging and console state.

    ``CONFDUMP_LOG_LEVEL`` takes precedence for logging; without it only ``-v``
    turns engine logging on.

    Raises:
        ConfdumpUsageError: ``-v`` and ``-q`` were combined.
    """
    state = ctx.ensure_object(dict)

    verbosity = resolve_verbosity(verbose, quiet)
    env_level = resolve_env_log_level()
    log_level = env_level if env_level is not None else (verbosity if verbose else None)
    setup_logging(level=log_level)

    enable_color = resolve_color_mode(
        cli_mode=ColorMode.NEVER if no_color else color_mode or ColorMode.AUTO,
        output_format=None,
    )
    ctx.color = enable_color
    state.update(
        verbosity_level=verbosity,
        log_level=log_level,
        color_enabled=enable_color,
        console=ClickConsole(enable_color=enable_color),
    )
    logger.debug("verbosity=%s log_level=%s color=%s", verbosity, log_level, enable_color)


@click.group(
    context_settings={"help_option_names": ["-h", "--help"]},
    invoke_without_command=True,
    help="ConfDump: flatten a server configuration into key/value entries.",
)
@common_verbose_options
@common_color_options
@click.pass_context
def cli(
    ctx: click.Context,
    verbose: int,
    quiet: int,
    color_mode: ColorMode | None,
    no_color: bool,
) -> None:
    """Entry point for the ConfDump CLI."""
    init_common_state(ctx, verbose=verbose, quiet=quiet, color_mode=color_mode, no_color=no_color)

    if ctx.invoked_subcommand is None:
        console: ClickConsole = ctx.obj["console"]
        console.print(f"Hint: use 'confdump {CliCmd.DUMP} -n' to show the changed settings.")
        console.print()
        console.print(ctx.get_help())


for _command in (dump_command, roots_command, version_command):
    cli.add_command(_command)

if __name__ == "__main__":
    cli()
