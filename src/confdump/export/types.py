# topmark:header:start
#
#   project      : ConfDump
#   file         : types.py
#   file_relpath : src/confdump/export/types.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Export policy enums and small value types.

Exports:
    - `DumpScope`: which fields are dumped even when equal to their default.
    - `DumpFlags`: bit set refining list-default handling and key deduplication.
    - `ConfigKeyType`: classification passed to the callback with every entry.
    - `DumpDecision`: per-field tri-state computed by the walker for the formatter.
    - `SectionCounter`: running section index shared across one export pass.
    - `ExportEntry` / `ExportCallback`: the emitted stream's item and sink types.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum, IntFlag
from typing import Any

from confdump.core.enum_mixins import KeyedStrEnum


class DumpScope(KeyedStrEnum):
    """Policy selecting which fields are emitted even when equal to their default."""

    ALL_WITH_HIDDEN = ("all-with-hidden", "All settings, hidden ones included", ("hidden", "a"))
    ALL_WITHOUT_HIDDEN = ("all", "All settings; hidden ones only when explicitly set")
    SET = ("set", "Settings explicitly set, even to their default value")
    CHANGED = ("changed", "Settings that differ from their default value", ("n", "non-default"))


class DumpFlags(IntFlag):
    """Bit set of export flags."""

    NONE = 0
    # Inside uniquely-named sections, suppress fields that were not explicitly set.
    HIDE_LIST_DEFAULTS = 1
    # Emit every fully-qualified key at most once per export pass.
    DEDUPLICATE_KEYS = 2


class ConfigKeyType(Enum):
    """Kind of an emitted entry."""

    NORMAL = "normal"
    # Space-separated identifiers of the sections in a nested section list.
    LIST = "list"
    # Name field of a uniquely-named section.
    UNIQUE_KEY = "unique_key"
    # Announcement that the entries of a string multimap follow.
    KEY_LIST = "key_list"


class DumpDecision(Enum):
    """How the type formatter treats one field's value against its default."""

    FORCE_EMIT = "force_emit"
    FORCE_SUPPRESS = "force_suppress"
    COMPARE_DEFAULT = "compare_default"


@dataclass
class SectionCounter:
    """Running global section index for one export pass.

    Indices are reserved in blocks (one per list element) and never reused, also
    across sibling lists and across module parsers exported with the same counter.

    Attributes:
        value (int): The next unreserved index.
    """

    value: int = 0

    def reserve(self, count: int) -> int:
        """Reserve ``count`` consecutive indices and return the first one."""
        start = self.value
        self.value += count
        return start


@dataclass(frozen=True)
class ExportEntry:
    """One emitted key/value entry.

    Attributes:
        key (str): Fully-qualified key path.
        value (str): Canonical text of the value.
        key_type (ConfigKeyType): Classification of the entry.
    """

    key: str
    value: str
    key_type: ConfigKeyType


# Callback invoked once per emitted entry: (key, value, key_type, callback_context).
ExportCallback = Callable[[str, str, ConfigKeyType, Any], None]
