# topmark:header:start
#
#   project      : ConfDump
#   file         : render.py
#   file_relpath : src/confdump/export/render.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Sinks for the exported entry stream.

`EntryCollector` is a ready-made export callback that keeps every entry in
emission order. The ``render_*`` helpers turn a collected stream into text:

- ``text``: one ``key = value`` line per entry; string-multimap announcements
  carry no value and are omitted.
- ``toml``: a nested document where every key path segment becomes a table.
  Section-list entries and multimap announcements are implied by the tables
  and are omitted. TOML has no ``null``, so `None` values are stripped.
- ``json``: an array of ``{"key", "value", "type"}`` objects.
"""

from __future__ import annotations

import json
from collections.abc import Mapping
from typing import TYPE_CHECKING, Any, cast

import tomlkit

from confdump.config.logging import get_logger
from confdump.constants import SETTINGS_SEPARATOR
from confdump.core.errors import InvariantViolation
from confdump.export.types import ConfigKeyType, ExportEntry

if TYPE_CHECKING:
    from collections.abc import Callable, Iterable, Iterator

    from confdump.config.logging import ConfdumpLogger

logger: ConfdumpLogger = get_logger(__name__)


class EntryCollector:
    """Export callback accumulating `ExportEntry` objects in emission order."""

    entries: list[ExportEntry]

    def __init__(self) -> None:
        self.entries = []

    def __call__(self, key: str, value: str, key_type: ConfigKeyType, context: Any) -> None:
        self.entries.append(ExportEntry(key=key, value=value, key_type=key_type))

    def __iter__(self) -> Iterator[ExportEntry]:
        return iter(self.entries)

    def __len__(self) -> int:
        return len(self.entries)

    def keys(self) -> list[str]:
        """Return the emitted keys in order."""
        return [entry.key for entry in self.entries]

    def as_dict(self) -> dict[str, str]:
        """Return ``key -> value`` for every entry (later duplicates win)."""
        return {entry.key: entry.value for entry in self.entries}


def render_text(
    entries: Iterable[ExportEntry],
    style_key: Callable[[str], str] | None = None,
) -> str:
    """Render entries as ``key = value`` lines.

    Args:
        entries (Iterable[ExportEntry]): The exported stream.
        style_key (Callable[[str], str] | None): Applied to every key, e.g. to
            add terminal color.

    Returns:
        str: The rendered lines, newline-terminated (empty for an empty stream).
    """
    lines: list[str] = []
    for entry in entries:
        if entry.key_type is ConfigKeyType.KEY_LIST:
            continue
        key = style_key(entry.key) if style_key is not None else entry.key
        lines.append(f"{key} = {entry.value}")
    return "".join(f"{line}\n" for line in lines)


def _strip_none_for_toml(value: object) -> object:
    """Remove TOML-incompatible `None` from nested mappings."""
    if isinstance(value, Mapping):
        out: dict[str, object] = {}
        m: Mapping[object, object] = cast("Mapping[object, object]", value)
        for k_any, v_any in m.items():
            if v_any is None:
                logger.debug("Ignoring `None` entry in Mapping for key %s", k_any)
                continue
            out[str(k_any)] = _strip_none_for_toml(v_any)
        return out
    return value


def entries_to_tree(entries: Iterable[ExportEntry]) -> dict[str, Any]:
    """Nest entries by key path segment.

    Raises:
        InvariantViolation: A key is both a value and a prefix of another key.
    """
    tree: dict[str, Any] = {}
    for entry in entries:
        if entry.key_type in (ConfigKeyType.LIST, ConfigKeyType.KEY_LIST):
            continue
        *parents, leaf = entry.key.split(SETTINGS_SEPARATOR)
        node = tree
        for segment in parents:
            child = node.setdefault(segment, {})
            if not isinstance(child, dict):
                raise InvariantViolation(f"{entry.key}: {segment!r} is both a value and a section")
            node = cast("dict[str, Any]", child)
        if isinstance(node.get(leaf), dict):
            raise InvariantViolation(f"{entry.key}: key is both a value and a section")
        node[leaf] = entry.value
    return tree


def render_toml(entries: Iterable[ExportEntry]) -> str:
    """Render entries as a nested TOML document."""
    cleaned: Any = _strip_none_for_toml(entries_to_tree(entries))
    return cast("str", cast("Any", tomlkit).dumps(cast("Mapping[str, Any]", cleaned)))


def render_json(entries: Iterable[ExportEntry]) -> str:
    """Render entries as a JSON array of ``{"key", "value", "type"}`` objects."""
    payload = [
        {"key": entry.key, "value": entry.value, "type": entry.key_type.value}
        for entry in entries
    ]
    return json.dumps(payload, indent=2)
