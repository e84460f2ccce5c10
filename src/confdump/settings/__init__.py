# topmark:header:start
#
#   project      : ConfDump
#   file         : __init__.py
#   file_relpath : src/confdump/settings/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Settings model consumed by the export engine.

This package provides the schema (`SchemaRoot`, `SettingDefinition`), the value side
(`SettingsParser` with its change mask) and the configuration snapshot
(`ModuleParser`, `FilterParser`, `ParsedConfig`).
"""

from __future__ import annotations

from confdump.settings.filter import FilterParser, ModuleParser, ParsedConfig
from confdump.settings.parser import SettingsParser
from confdump.settings.schema import SchemaRoot, SettingDefinition
from confdump.settings.types import ChangeRecord, SettingType, ValueRecord

__all__ = [
    "ChangeRecord",
    "FilterParser",
    "ModuleParser",
    "ParsedConfig",
    "SchemaRoot",
    "SettingDefinition",
    "SettingType",
    "SettingsParser",
    "ValueRecord",
]
