# topmark:header:start
#
#   project      : ConfDump
#   file         : cmd_common.py
#   file_relpath : src/confdump/cli/cmd_common.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Common command utilities for Click-based commands.

This module holds small, focused helpers used by multiple CLI commands: building
the configuration snapshot with ``--set`` overrides applied, running an export
pass, and translating engine exceptions into CLI errors with exit codes.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

import click

from confdump.cli.errors import engine_errors
from confdump.config.logging import get_logger
from confdump.constants import SETTINGS_SEPARATOR
from confdump.core.errors import ParserError, SettingValueError
from confdump.export.context import ExportContext, export_all_parsers
from confdump.export.render import EntryCollector
from confdump.export.types import SectionCounter
from confdump.settings.builtin import default_config

if TYPE_CHECKING:
    from collections.abc import Iterable

    from confdump.export.types import DumpFlags, DumpScope, ExportEntry
    from confdump.settings.filter import ModuleParser, ParsedConfig

logger = get_logger(__name__)

# Separates an explicit module name from the key in ``--set module:key=value``.
MODULE_KEY_SEPARATOR = ":"


def get_effective_verbosity(ctx: click.Context) -> int:
    """Return the program-output verbosity level stored on the Click context.

    The level uses logging values (``INFO`` for ``-v``, ``ERROR`` for ``-q``) and
    defaults to ``WARNING``.
    """
    return int((ctx.obj or {}).get("verbosity_level", logging.WARNING))


def is_verbose(ctx: click.Context) -> bool:
    """Whether at least one ``-v`` was given."""
    return get_effective_verbosity(ctx) <= logging.INFO


def _find_override_target(config: ParsedConfig, module_name: str | None, key: str) -> ModuleParser:
    base_key = key.split(SETTINGS_SEPARATOR, 1)[0]
    for module_parser in config.global_filter_parser().module_parsers:
        if module_name is not None:
            if module_parser.root.module_name == module_name:
                return module_parser
        elif module_parser.root.find(base_key) is not None:
            return module_parser
    if module_name is not None:
        raise SettingValueError(key, f"Unknown settings module {module_name!r}")
    raise SettingValueError(key, "Unknown setting")


def apply_overrides(config: ParsedConfig, overrides: Iterable[str]) -> None:
    """Apply ``[module:]key=value`` assignments to ``config``.

    Without an explicit module, the first module parser whose schema defines the
    key receives the assignment.

    Raises:
        SettingValueError: An assignment is malformed, names an unknown key or
            module, or its value does not parse.
    """
    for override in overrides:
        target, eq, value = override.partition("=")
        if not eq or not target.strip():
            raise SettingValueError(override, "Expected [module:]key=value")
        module_name: str | None = None
        key = target.strip()
        if MODULE_KEY_SEPARATOR in key:
            module_name, key = (part.strip() for part in key.split(MODULE_KEY_SEPARATOR, 1))
        module_parser = _find_override_target(config, module_name, key)
        logger.debug("Override %s:%s = %r", module_parser.root.module_name, key, value)
        module_parser.parser.parse_line(f"{key}={value}")


def build_config(overrides: Iterable[str]) -> ParsedConfig:
    """Return the built-in configuration with ``overrides`` applied.

    Raises:
        ConfdumpConfigError: An override is malformed.
    """
    config = default_config()
    with engine_errors("override"):
        apply_overrides(config, overrides)
    return config


def _first_delayed_error(config: ParsedConfig) -> str:
    for module_parser in config.global_filter_parser().module_parsers:
        if module_parser.delayed_error is not None:
            return f"{module_parser.root.module_name}: {module_parser.delayed_error}"
    return "Export aborted"


def export_config(config: ParsedConfig, scope: DumpScope, flags: DumpFlags) -> list[ExportEntry]:
    """Export every module parser of ``config`` and return the collected entries.

    The export works on a duplicate of the module parsers, so ``config`` is left
    untouched.

    Raises:
        ConfdumpConfigError: A module parser carries a deferred error.
        ConfdumpInternalError: The engine detected an invariant violation.
    """
    collector = EntryCollector()
    with engine_errors("dump"):
        # export_all_parsers consumes and frees the context
        ctx = ExportContext(scope, flags, collector)
        ctx.dup_module_parsers(config)
        if not export_all_parsers(ctx, SectionCounter()):
            raise ParserError(_first_delayed_error(config))
    logger.info("Exported %d entries", len(collector))
    return collector.entries
