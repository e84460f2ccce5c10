# topmark:header:start
#
#   project      : ConfDump
#   file         : schema.py
#   file_relpath : src/confdump/settings/schema.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Static settings schema: definitions and schema roots.

A `SchemaRoot` describes one configuration section: an ordered sequence of
`SettingDefinition` entries, an optional record of default values, and (when the
schema is used as a uniquely-named list element) the key of its name field.

Field access:
    Definitions address the value record through a named accessor
    (`SettingDefinition.get`) rather than raw offsets. The accessor name defaults
    to the definition key, so a schema may expose a setting under a different key
    than the record field that stores it.

Identity:
    Schema roots compare by identity. The export engine locates the master-service
    root among attached parsers with ``is``, never by structural equality.
"""

from __future__ import annotations

import copy
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

from confdump.constants import ENUM_ALTERNATIVE_SEPARATOR, SETTING_STRVAR_UNEXPANDED
from confdump.core.errors import InvariantViolation
from confdump.settings.types import SettingType

if TYPE_CHECKING:
    from confdump.settings.types import ValueRecord


@dataclass(frozen=True)
class SettingDefinition:
    """One setting in a schema.

    Attributes:
        key (str): Setting key as it appears in exported key paths.
        type (SettingType): Type tag driving formatting and recursion.
        field (str | None): Name of the value-record field; defaults to ``key``.
        hidden (bool): Hidden settings are only dumped under the "all" scope when
            explicitly set.
        list_info (SchemaRoot | None): Child schema for nested-section-list types.
    """

    key: str
    type: SettingType
    field: str | None = None
    hidden: bool = False
    list_info: SchemaRoot | None = None

    def __post_init__(self) -> None:
        if self.type.is_deflist and self.list_info is None:
            raise InvariantViolation(f"Setting {self.key!r}: section list without child schema")
        if self.type == SettingType.DEFLIST_UNIQUE and (
            self.list_info is not None and self.list_info.name_key is None
        ):
            raise InvariantViolation(f"Setting {self.key!r}: unique section list without name key")

    @property
    def field_name(self) -> str:
        """Name of the record field that stores this setting."""
        return self.field or self.key

    def get(self, record: Mapping[str, Any] | None) -> Any:
        """Return this setting's value from ``record`` (``None`` if absent)."""
        if record is None:
            return None
        return record.get(self.field_name)


@dataclass(frozen=True, eq=False)
class SchemaRoot:
    """Static description of one configuration section.

    Attributes:
        module_name (str): Name of the settings module (for diagnostics and listings).
        defines (tuple[SettingDefinition, ...]): Ordered definitions; keys are unique.
        defaults (Mapping[str, Any] | None): Default value record, if the schema has one.
        name_key (str | None): Key of the name field when this schema is used as a
            uniquely-named list element.
    """

    module_name: str
    defines: tuple[SettingDefinition, ...]
    defaults: Mapping[str, Any] | None = None
    name_key: str | None = None
    _by_key: dict[str, SettingDefinition] = field(init=False, repr=False)

    def __post_init__(self) -> None:
        by_key: dict[str, SettingDefinition] = {}
        for definition in self.defines:
            if definition.key in by_key:
                raise InvariantViolation(
                    f"Schema {self.module_name!r}: duplicate setting {definition.key!r}"
                )
            by_key[definition.key] = definition
        if self.name_key is not None and self.name_key not in by_key:
            raise InvariantViolation(
                f"Schema {self.module_name!r}: name key {self.name_key!r} is not defined"
            )
        object.__setattr__(self, "_by_key", by_key)

    def find(self, key: str) -> SettingDefinition | None:
        """Return the definition for ``key`` or None."""
        return self._by_key.get(key)

    def default_of(self, definition: SettingDefinition) -> Any:
        """Return the default value of ``definition`` (``None`` when there is none)."""
        return definition.get(self.defaults)

    def is_name_field(self, definition: SettingDefinition) -> bool:
        """Whether ``definition`` is the name field of this (unique-list element) schema."""
        return self.name_key is not None and definition.key == self.name_key

    def new_values(self) -> ValueRecord:
        """Return a fresh value record initialized from the defaults.

        Section lists start empty, string multimaps start as empty ordered dicts,
        enumerations are reduced to their first (default) alternative and
        variable-expandable strings gain the "unexpanded" tag character.
        """
        record: ValueRecord = {}
        for definition in self.defines:
            if definition.type == SettingType.ALIAS:
                continue
            default: Any = self.default_of(definition)
            if definition.type.is_deflist:
                record[definition.field_name] = []
            elif definition.type == SettingType.STRLIST:
                record[definition.field_name] = dict(default) if default else {}
            elif definition.type == SettingType.ENUM:
                record[definition.field_name] = None if default is None else enum_choice(default)
            elif definition.type == SettingType.STR_VARS:
                record[definition.field_name] = (
                    None if default is None else SETTING_STRVAR_UNEXPANDED + default
                )
            else:
                record[definition.field_name] = copy.copy(default)
        return record


def enum_choice(value: str) -> str:
    """Return the chosen alternative of an enumeration value.

    Enumeration defaults list every legal alternative, the default one first
    (``"fcntl:flock:dotlock"``); stored values hold only the chosen one.
    """
    return value.split(ENUM_ALTERNATIVE_SEPARATOR, 1)[0]


def enum_alternatives(value: str) -> tuple[str, ...]:
    """Return every legal alternative listed in an enumeration default."""
    return tuple(value.split(ENUM_ALTERNATIVE_SEPARATOR))
