# topmark:header:start
#
#   project      : ConfDump
#   file         : parser.py
#   file_relpath : src/confdump/settings/parser.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Settings parser: one schema's current values plus its change mask.

`SettingsParser` is the value-side counterpart of a `SchemaRoot`. It owns a value
record (initialized from the schema defaults) and a parallel change mask that
records which fields were explicitly set. The two are kept index-synchronized for
nested section lists: `add_section` always appends to both.

Scope:
    - *In scope*: typed assignment, ``key=value`` line assignment for scalar and
      string-multimap settings, nested section creation, deep duplication.
    - *Out of scope*: configuration file syntax, ``%variable`` expansion and
      settings validation. Those belong to the server that builds the parsers.
"""

from __future__ import annotations

import copy
from typing import TYPE_CHECKING, Any, cast

from confdump.config.logging import get_logger
from confdump.constants import SETTINGS_SEPARATOR
from confdump.core.errors import SettingValueError
from confdump.settings.types import SettingType
from confdump.settings.values import parse_value

if TYPE_CHECKING:
    from confdump.config.logging import ConfdumpLogger
    from confdump.settings.schema import SchemaRoot, SettingDefinition
    from confdump.settings.types import ChangeRecord, ValueRecord

logger: ConfdumpLogger = get_logger(__name__)


def _mask_has_change(mask: object) -> bool:
    # a field's mask entry is a flag, or a list of child masks for section lists
    if isinstance(mask, list):
        return any(_mask_has_change(child) for child in cast("list[object]", mask))
    if isinstance(mask, dict):
        entries = cast("dict[str, object]", mask).values()
        return any(_mask_has_change(entry) for entry in entries)
    return bool(mask)


class SettingsParser:
    """Current values and change mask for one `SchemaRoot`.

    Args:
        root (SchemaRoot): The schema describing the record.
        values (ValueRecord | None): Existing value record to wrap; a fresh record
            built from the schema defaults when None.
        changes (ChangeRecord | None): Existing change mask to wrap; empty when None.

    Notes:
        Parsers returned by `add_section` and `sections` are *views*: they wrap the
        child records stored inside this parser's lists, so edits through them are
        visible to the export engine.
    """

    root: SchemaRoot

    def __init__(
        self,
        root: SchemaRoot,
        values: ValueRecord | None = None,
        changes: ChangeRecord | None = None,
    ) -> None:
        self.root = root
        self._values: ValueRecord = values if values is not None else root.new_values()
        self._changes: ChangeRecord = changes if changes is not None else {}

    def __repr__(self) -> str:
        return f"SettingsParser(root={self.root.module_name!r})"

    def get_set(self) -> ValueRecord:
        """Return the value record."""
        return self._values

    def get_changes(self) -> ChangeRecord:
        """Return the change mask."""
        return self._changes

    def _definition(self, key: str) -> SettingDefinition:
        definition = self.root.find(key)
        if definition is None:
            raise SettingValueError(key, f"Unknown setting in {self.root.module_name}")
        return definition

    def get_value(self, key: str) -> Any:
        """Return the current value of ``key``.

        Variable-expandable strings are returned as stored, i.e. with their tag
        character.

        Raises:
            SettingValueError: ``key`` is not defined by the schema.
        """
        return self._definition(key).get(self._values)

    def is_changed(self, key: str) -> bool:
        """Whether ``key`` was explicitly set.

        For a section list this means some field of some section, at any depth,
        was explicitly set; built-in sections added with ``changed=False`` do not
        count.
        """
        return _mask_has_change(self._changes.get(self._definition(key).field_name))

    def set_value(self, key: str, value: Any, *, changed: bool = True) -> None:
        """Assign an already-typed value to a scalar setting.

        With ``changed=False`` the value is installed as a default: the change mask
        is left untouched, as for built-in sections.

        Raises:
            SettingValueError: ``key`` is unknown or not a scalar setting.
        """
        definition = self._definition(key)
        if not definition.type.is_scalar:
            raise SettingValueError(key, f"Cannot assign a value to a {definition.type.value}")
        self._values[definition.field_name] = value
        if changed:
            self._changes[definition.field_name] = True
        logger.trace("%s: set %s = %r", self.root.module_name, key, value)

    def set_strlist(self, key: str, subkey: str, value: str) -> None:
        """Add or replace one ``subkey`` entry of a string-multimap setting.

        Raises:
            SettingValueError: ``key`` is not a string multimap, or ``subkey``
                contains the key separator and would nest below another entry.
        """
        definition = self._definition(key)
        if definition.type != SettingType.STRLIST:
            raise SettingValueError(key, "Not a string list setting")
        if SETTINGS_SEPARATOR in subkey:
            raise SettingValueError(
                f"{key}{SETTINGS_SEPARATOR}{subkey}",
                f"Subkey must not contain {SETTINGS_SEPARATOR!r}",
            )
        strings: dict[str, str] = self._values.setdefault(definition.field_name, {})
        strings[subkey] = value
        self._changes[definition.field_name] = True

    def parse_line(self, line: str) -> None:
        """Apply one ``key=value`` assignment.

        ``key`` names a scalar setting, or ``strlist-key/subkey`` for a string-multimap
        entry. The value text is converted with
        [`parse_value`][confdump.settings.values.parse_value].

        Raises:
            SettingValueError: The line is malformed, the key is unknown, or the value
                does not parse.
        """
        key, sep, text = line.partition("=")
        key = key.strip()
        if not sep or not key:
            raise SettingValueError(line, "Expected key=value")
        text = text.strip()

        base, sub_sep, subkey = key.partition(SETTINGS_SEPARATOR)
        if sub_sep:
            self.set_strlist(base, subkey, text)
            return

        definition = self._definition(key)
        if not definition.type.is_scalar:
            raise SettingValueError(key, f"Cannot assign a value to a {definition.type.value}")
        self.set_value(key, parse_value(self.root, definition, text))

    def add_section(
        self,
        key: str,
        name: str | None = None,
        *,
        changed: bool = True,
    ) -> SettingsParser:
        """Append a nested section to section list ``key`` and return a view on it.

        Args:
            key (str): A nested-section-list setting of this schema.
            name (str | None): For uniquely-named lists, the section name; assigned to
                the child schema's name field.
            changed (bool): Whether the name assignment counts as explicitly set.

        Returns:
            SettingsParser: A parser view on the new child section.

        Raises:
            SettingValueError: ``key`` is unknown or not a section list.
        """
        definition = self._definition(key)
        if not definition.type.is_deflist or definition.list_info is None:
            raise SettingValueError(key, "Not a section list setting")
        child = SettingsParser(definition.list_info)
        if name is not None and definition.list_info.name_key is not None:
            child.set_value(definition.list_info.name_key, name, changed=changed)

        self._values.setdefault(definition.field_name, []).append(child.get_set())
        self._changes.setdefault(definition.field_name, []).append(child.get_changes())
        logger.trace("%s: added %s section %r", self.root.module_name, key, name)
        return child

    def sections(self, key: str) -> list[SettingsParser]:
        """Return parser views on the existing sections of list ``key``."""
        definition = self._definition(key)
        if not definition.type.is_deflist or definition.list_info is None:
            raise SettingValueError(key, "Not a section list setting")
        values: list[ValueRecord] = self._values.get(definition.field_name) or []
        changes: list[ChangeRecord] = self._changes.get(definition.field_name) or []
        return [
            SettingsParser(definition.list_info, v, c) for v, c in zip(values, changes, strict=True)
        ]

    def dup(self) -> SettingsParser:
        """Return an independent deep copy sharing only the schema."""
        return SettingsParser(
            self.root,
            copy.deepcopy(self._values),
            copy.deepcopy(self._changes),
        )
