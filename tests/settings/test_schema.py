# topmark:header:start
#
#   project      : ConfDump
#   file         : test_schema.py
#   file_relpath : tests/settings/test_schema.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Tests for schema construction invariants and record helpers."""

from __future__ import annotations

import pytest

from confdump.core.errors import InvariantViolation
from confdump.settings.schema import (
    SchemaRoot,
    SettingDefinition,
    enum_alternatives,
    enum_choice,
)
from confdump.settings.types import SettingType as T
from tests.schemas_confdump import LISTENER, ROOT, SOCKET


def test_duplicate_keys_are_rejected() -> None:
    with pytest.raises(InvariantViolation, match="duplicate setting 'a'"):
        SchemaRoot("dup", (SettingDefinition("a", T.STR), SettingDefinition("a", T.UINT)))


def test_name_key_must_be_defined() -> None:
    with pytest.raises(InvariantViolation):
        SchemaRoot("child", (SettingDefinition("path", T.STR),), name_key="name")


def test_section_list_requires_child_schema() -> None:
    with pytest.raises(InvariantViolation):
        SettingDefinition("socket", T.DEFLIST)


def test_unique_list_requires_named_child() -> None:
    """It should refuse a unique list whose element schema has no name field."""
    with pytest.raises(InvariantViolation):
        SettingDefinition("socket", T.DEFLIST_UNIQUE, list_info=SOCKET)


def test_definition_reads_through_field_name() -> None:
    definition = SettingDefinition("listen_address", T.STR, field="listen")
    root = SchemaRoot("m", (definition,), defaults={"listen": "*"})

    assert definition.field_name == "listen"
    assert definition.get({"listen": "::"}) == "::"
    assert definition.get(None) is None
    assert root.default_of(definition) == "*"
    assert root.new_values() == {"listen": "*"}


def test_new_values_shapes_every_type() -> None:
    values = ROOT.new_values()
    assert values == {
        "flag": False,
        "size": 1024,
        "secret": False,
        "label": "x",
        "listener": [],
        "socket": [],
        "extra": {},
    }


def test_new_values_copies_multimap_defaults() -> None:
    root = SchemaRoot(
        "m",
        (SettingDefinition("plugin", T.STRLIST),),
        defaults={"plugin": {"a": "1"}},
    )
    values = root.new_values()
    values["plugin"]["b"] = "2"
    assert root.defaults is not None
    assert root.defaults["plugin"] == {"a": "1"}


def test_schema_without_defaults() -> None:
    root = SchemaRoot("m", (SettingDefinition("a", T.UINT), SettingDefinition("e", T.ENUM)))
    assert root.new_values() == {"a": None, "e": None}


def test_is_name_field() -> None:
    name_def = LISTENER.find("name")
    port_def = LISTENER.find("port")
    assert name_def is not None
    assert port_def is not None
    assert LISTENER.is_name_field(name_def)
    assert not LISTENER.is_name_field(port_def)
    assert not SOCKET.is_name_field(port_def)


def test_schema_roots_compare_by_identity() -> None:
    clone = SchemaRoot(ROOT.module_name, ROOT.defines, ROOT.defaults)
    assert clone != ROOT
    assert ROOT == ROOT


def test_enum_helpers() -> None:
    assert enum_choice("fcntl:flock:dotlock") == "fcntl"
    assert enum_choice("dotlock") == "dotlock"
    assert enum_alternatives("yes:no:required") == ("yes", "no", "required")
