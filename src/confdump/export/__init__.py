# topmark:header:start
#
#   project      : ConfDump
#   file         : __init__.py
#   file_relpath : src/confdump/export/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Configuration export engine.

Flattens module parsers into an ordered stream of ``(key, value, key_type)``
entries delivered to a caller-supplied callback:

- [`confdump.export.types`][]: dump scope, flags, key types, section counter.
- [`confdump.export.formatting`][]: canonical text of one typed scalar value.
- [`confdump.export.walker`][]: recursive schema walk with deduplication.
- [`confdump.export.context`][]: export context lifecycle and parser sessions.
- [`confdump.export.render`][]: collector callback and text/TOML/JSON renderers.
"""

from __future__ import annotations

from confdump.export.context import ExportContext, ExportState, export_all_parsers
from confdump.export.formatting import (
    ExportedValue,
    export_type,
    format_size,
    format_time,
    format_time_msecs,
)
from confdump.export.render import EntryCollector, render_json, render_text, render_toml
from confdump.export.types import (
    ConfigKeyType,
    DumpDecision,
    DumpFlags,
    DumpScope,
    ExportCallback,
    ExportEntry,
    SectionCounter,
)
from confdump.export.walker import export_settings, section_name

__all__ = [
    "ConfigKeyType",
    "DumpDecision",
    "DumpFlags",
    "DumpScope",
    "EntryCollector",
    "ExportCallback",
    "ExportContext",
    "ExportEntry",
    "ExportState",
    "ExportedValue",
    "SectionCounter",
    "export_all_parsers",
    "export_settings",
    "export_type",
    "format_size",
    "format_time",
    "format_time_msecs",
    "render_json",
    "render_text",
    "render_toml",
    "section_name",
]
