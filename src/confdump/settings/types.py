# topmark:header:start
#
#   project      : ConfDump
#   file         : types.py
#   file_relpath : src/confdump/settings/types.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Setting type tags and record aliases.

This module hosts stable, import-friendly definitions that the schema, the
parser and the export engine all depend on, without risk of circular imports.

Exports:
    - `SettingType`: the scalar/nested type tag carried by every definition.
    - `ValueRecord` / `ChangeRecord`: structural aliases for one schema's current
      values and its parallel change-tracking mask.
"""

from __future__ import annotations

from enum import Enum
from typing import Any

# One schema's current values, addressed by field name. Nested-section-list fields
# hold a list of child records; string-multimap fields hold an ordered dict[str, str].
ValueRecord = dict[str, Any]

# Parallel change mask: ``True`` for explicitly set scalar fields, a list of child
# masks (index-synchronized with the value list) for nested-section-list fields.
ChangeRecord = dict[str, Any]


class SettingType(Enum):
    """Type tag of a setting definition."""

    BOOL = "bool"
    SIZE = "size"
    UINT = "uint"
    UINT_OCT = "uint_oct"
    TIME = "time"
    TIME_MSECS = "time_msecs"
    IN_PORT = "in_port"
    STR = "str"
    STR_VARS = "str_vars"
    ENUM = "enum"
    DEFLIST = "deflist"
    DEFLIST_UNIQUE = "deflist_unique"
    STRLIST = "strlist"
    ALIAS = "alias"

    @property
    def is_deflist(self) -> bool:
        """Whether this type holds a list of nested sections."""
        return self in (SettingType.DEFLIST, SettingType.DEFLIST_UNIQUE)

    @property
    def is_scalar(self) -> bool:
        """Whether this type is rendered by the scalar type formatter."""
        return self not in (
            SettingType.DEFLIST,
            SettingType.DEFLIST_UNIQUE,
            SettingType.STRLIST,
            SettingType.ALIAS,
        )
