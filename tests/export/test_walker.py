# topmark:header:start
#
#   project      : ConfDump
#   file         : test_walker.py
#   file_relpath : tests/export/test_walker.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Tests for the recursive schema walker: scopes, sections, multimaps, dedup."""

from __future__ import annotations

import pytest

from confdump.core.errors import InvariantViolation
from confdump.export.types import (
    ConfigKeyType,
    DumpDecision,
    DumpFlags,
    DumpScope,
    ExportEntry,
    SectionCounter,
)
from confdump.export.walker import dump_decision, section_name
from confdump.settings.filter import ModuleParser
from tests.conftest import parametrize
from tests.schemas_confdump import (
    LISTENER,
    ROOT,
    export_entries,
    export_parser,
    new_root_parser,
)

pytestmark = pytest.mark.export

DEDUP = DumpFlags.DEDUPLICATE_KEYS
HIDE = DumpFlags.HIDE_LIST_DEFAULTS


def _keys(entries: list[ExportEntry]) -> list[str]:
    return [e.key for e in entries]


def test_changed_scope_on_defaults_only_announces_multimap() -> None:
    parser = new_root_parser()
    entries = export_entries([ModuleParser(ROOT, parser)], DumpScope.CHANGED)
    assert entries == [ExportEntry("extra", "", ConfigKeyType.KEY_LIST)]


@parametrize(
    "scope, expected",
    [
        (DumpScope.CHANGED, ["extra"]),
        (DumpScope.SET, ["extra"]),
        (DumpScope.ALL_WITHOUT_HIDDEN, ["flag", "size", "label", "extra"]),
        (DumpScope.ALL_WITH_HIDDEN, ["flag", "size", "secret", "label", "extra"]),
    ],
)
def test_scope_selects_default_fields(scope: DumpScope, expected: list[str]) -> None:
    entries = export_entries([ModuleParser(ROOT, new_root_parser())], scope)
    assert _keys(entries) == expected


def test_all_scope_formats_defaults() -> None:
    values = export_parser(new_root_parser(), DumpScope.ALL_WITHOUT_HIDDEN)
    assert values == {"flag": "no", "size": "1 k", "label": "x", "extra": ""}


def test_set_scope_emits_explicitly_set_default_value() -> None:
    parser = new_root_parser()
    parser.set_value("flag", False)

    assert export_parser(parser, DumpScope.SET) == {"flag": "no", "extra": ""}
    assert export_parser(parser, DumpScope.CHANGED) == {"extra": ""}


def test_hidden_field_under_all_scope_only_when_set() -> None:
    parser = new_root_parser()
    assert "secret" not in export_parser(parser, DumpScope.ALL_WITHOUT_HIDDEN)

    parser.set_value("secret", False)
    assert export_parser(parser, DumpScope.ALL_WITHOUT_HIDDEN)["secret"] == "no"


def test_changed_value_is_emitted_under_every_scope() -> None:
    parser = new_root_parser()
    parser.set_value("size", 2048)
    for scope in DumpScope:
        assert export_parser(parser, scope)["size"] == "2 k"


def test_alias_never_emits() -> None:
    entries = export_entries([ModuleParser(ROOT, new_root_parser())], DumpScope.ALL_WITH_HIDDEN)
    assert "label_alias" not in _keys(entries)


def test_section_indices_follow_earlier_list() -> None:
    parser = new_root_parser()
    parser.add_section("listener", "imap")
    parser.add_section("listener", "pop3")
    for path in ("a", "b", "c"):
        parser.add_section("socket").set_value("path", path)

    entries = export_entries([ModuleParser(ROOT, parser)])

    assert entries[:3] == [
        ExportEntry("listener", "imap pop3", ConfigKeyType.LIST),
        ExportEntry("listener/imap/name", "imap", ConfigKeyType.UNIQUE_KEY),
        ExportEntry("listener/pop3/name", "pop3", ConfigKeyType.UNIQUE_KEY),
    ]
    assert entries[3:] == [
        ExportEntry("socket", "2 3 4", ConfigKeyType.LIST),
        ExportEntry("socket/2/path", "a", ConfigKeyType.NORMAL),
        ExportEntry("socket/3/path", "b", ConfigKeyType.NORMAL),
        ExportEntry("socket/4/path", "c", ConfigKeyType.NORMAL),
        ExportEntry("extra", "", ConfigKeyType.KEY_LIST),
    ]


def test_section_indices_start_from_counter() -> None:
    parser = new_root_parser()
    parser.add_section("socket").set_value("path", "a")
    parser.add_section("socket").set_value("path", "b")
    counter = SectionCounter(10)

    entries = export_entries([ModuleParser(ROOT, parser)], counter=counter)

    assert entries[0] == ExportEntry("socket", "10 11", ConfigKeyType.LIST)
    assert counter.value == 12


def test_unique_section_name_is_escaped() -> None:
    parser = new_root_parser()
    parser.add_section("listener", "a b/c")

    values = export_parser(parser)

    assert values["listener"] == "a\\_b\\sc"
    assert values["listener/a\\_b\\sc/name"] == "a b/c"


def test_unique_section_without_name_uses_index() -> None:
    parser = new_root_parser()
    parser.add_section("listener")
    parser.add_section("listener", "").set_value("port", 25)

    values = export_parser(parser)

    assert values["listener"] == "0 1"
    assert values["listener/1/port"] == "25"


def test_hide_list_defaults_suppresses_unchanged_fields() -> None:
    parser = new_root_parser()
    listener = parser.add_section("listener", "imaps", changed=False)
    listener.set_value("port", 993, changed=False)
    listener.set_value("ssl", True)

    shown = export_parser(parser, DumpScope.CHANGED, DEDUP)
    hidden = export_parser(parser, DumpScope.CHANGED, DEDUP | HIDE)

    assert shown["listener/imaps/port"] == "993"
    assert "listener/imaps/port" not in hidden
    assert hidden["listener/imaps/ssl"] == "yes"
    # the name field identifies the section and is always kept
    assert hidden["listener/imaps/name"] == "imaps"


def test_hide_list_defaults_yields_to_forcing_scope() -> None:
    parser = new_root_parser()
    listener = parser.add_section("listener", "imap", changed=False)
    listener.set_value("port", 143, changed=False)

    values = export_parser(parser, DumpScope.ALL_WITHOUT_HIDDEN, DEDUP | HIDE)

    assert values["listener/imap/port"] == "143"
    assert values["listener/imap/ssl"] == "no"


def test_hide_list_defaults_ignored_outside_unique_lists() -> None:
    parser = new_root_parser()
    parser.add_section("socket", changed=False).set_value("path", "a", changed=False)

    values = export_parser(parser, DumpScope.CHANGED, DEDUP | HIDE)

    assert values["socket/0/path"] == "a"


def test_multimap_entries_follow_announcement() -> None:
    parser = new_root_parser()
    parser.set_strlist("extra", "quota", "maildir")
    parser.set_strlist("extra", "acl", "vfile")

    entries = export_entries([ModuleParser(ROOT, parser)])

    assert entries == [
        ExportEntry("extra", "", ConfigKeyType.KEY_LIST),
        ExportEntry("extra/quota", "maildir", ConfigKeyType.NORMAL),
        ExportEntry("extra/acl", "vfile", ConfigKeyType.NORMAL),
    ]


def test_multimap_missing_value_is_skipped() -> None:
    parser = new_root_parser()
    parser.get_set()["extra"] = None
    assert export_entries([ModuleParser(ROOT, parser)]) == []


def _two_roots_sharing_keys() -> list[ModuleParser]:
    first = new_root_parser()
    first.set_value("flag", True)
    first.set_strlist("extra", "a", "1")
    second = new_root_parser()
    second.set_value("flag", True)
    second.set_strlist("extra", "a", "2")
    second.set_strlist("extra", "b", "3")
    return [ModuleParser(ROOT, first), ModuleParser(ROOT, second)]


def test_dedup_emits_shared_keys_once() -> None:
    entries = export_entries(_two_roots_sharing_keys(), DumpScope.CHANGED, DEDUP)

    assert entries == [
        ExportEntry("flag", "yes", ConfigKeyType.NORMAL),
        ExportEntry("extra", "", ConfigKeyType.KEY_LIST),
        ExportEntry("extra/a", "1", ConfigKeyType.NORMAL),
    ]


def test_without_dedup_shared_keys_repeat() -> None:
    entries = export_entries(_two_roots_sharing_keys(), DumpScope.CHANGED, DumpFlags.NONE)

    assert _keys(entries) == [
        "flag",
        "extra",
        "extra/a",
        "flag",
        "extra",
        "extra/a",
        "extra/b",
    ]


def test_counter_is_shared_across_parsers() -> None:
    parsers: list[ModuleParser] = []
    for _ in range(2):
        parser = new_root_parser()
        parser.add_section("socket").set_value("path", "a")
        parser.add_section("socket").set_value("path", "b")
        parsers.append(ModuleParser(ROOT, parser))
    counter = SectionCounter()

    entries = export_entries(parsers, DumpScope.CHANGED, DEDUP, counter)

    lists = [e for e in entries if e.key_type is ConfigKeyType.LIST]
    # dedup drops the second list entry, but its sections keep fresh indices
    assert lists == [ExportEntry("socket", "0 1", ConfigKeyType.LIST)]
    assert "socket/2/path" in _keys(entries)
    assert "socket/3/path" in _keys(entries)
    assert counter.value == 4


def test_mismatched_section_and_change_lists_is_invariant_violation() -> None:
    parser = new_root_parser()
    parser.add_section("listener", "imap")
    parser.get_changes()["listener"].clear()

    with pytest.raises(InvariantViolation):
        export_entries([ModuleParser(ROOT, parser)])


@parametrize(
    "scope, flags, changed, is_name, expected",
    [
        (DumpScope.ALL_WITH_HIDDEN, DumpFlags.NONE, False, False, DumpDecision.FORCE_EMIT),
        (DumpScope.SET, DumpFlags.NONE, True, False, DumpDecision.FORCE_EMIT),
        (DumpScope.SET, DumpFlags.NONE, False, False, DumpDecision.COMPARE_DEFAULT),
        (DumpScope.CHANGED, DumpFlags.NONE, True, False, DumpDecision.COMPARE_DEFAULT),
        (DumpScope.CHANGED, HIDE, False, False, DumpDecision.FORCE_SUPPRESS),
        (DumpScope.CHANGED, HIDE, True, False, DumpDecision.FORCE_EMIT),
        (DumpScope.CHANGED, HIDE, False, True, DumpDecision.FORCE_EMIT),
        (DumpScope.ALL_WITHOUT_HIDDEN, HIDE, False, False, DumpDecision.FORCE_EMIT),
    ],
)
def test_dump_decision_in_unique_section(
    scope: DumpScope,
    flags: DumpFlags,
    changed: bool,
    is_name: bool,
    expected: DumpDecision,
) -> None:
    definition = LISTENER.find("name" if is_name else "port")
    assert definition is not None
    decision = dump_decision(
        scope,
        flags,
        LISTENER,
        definition,
        parent_unique_deflist=True,
        changed=changed,
    )
    assert decision is expected


def test_dump_decision_outside_unique_section_ignores_hide_flag() -> None:
    definition = LISTENER.find("port")
    assert definition is not None
    decision = dump_decision(
        DumpScope.CHANGED,
        HIDE,
        LISTENER,
        definition,
        parent_unique_deflist=False,
        changed=False,
    )
    assert decision is DumpDecision.COMPARE_DEFAULT


def test_section_name_for_plain_list_is_index() -> None:
    definition = ROOT.find("socket")
    assert definition is not None
    assert section_name(definition, {"path": "x"}, 7) == "7"


def test_section_name_for_unique_list_is_escaped_name() -> None:
    definition = ROOT.find("listener")
    assert definition is not None
    assert section_name(definition, {"name": "a,b"}, 7) == "a\\+b"
    assert section_name(definition, {"name": ""}, 7) == "7"
    assert section_name(definition, {}, 7) == "7"
