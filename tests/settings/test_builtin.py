# topmark:header:start
#
#   project      : ConfDump
#   file         : test_builtin.py
#   file_relpath : tests/settings/test_builtin.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Tests for the built-in schemas and the default configuration.

Also pins down the default configuration's export under the "changed" scope,
which exercises global section numbering across nested lists and
deduplication across protocol modules.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from confdump.export.context import ExportContext, export_all_parsers
from confdump.export.render import EntryCollector
from confdump.export.types import ConfigKeyType, DumpFlags, DumpScope, SectionCounter
from confdump.settings.builtin import (
    ALL_ROOTS,
    MASTER_SERVICE_SETTINGS,
    MASTER_SETTINGS,
    default_config,
)
from confdump.settings.types import SettingType
from tests.conftest import parametrize

if TYPE_CHECKING:
    from confdump.export.types import ExportEntry
    from confdump.settings.schema import SchemaRoot


def _walk(root: SchemaRoot) -> list[SchemaRoot]:
    found = [root]
    for definition in root.defines:
        if definition.list_info is not None:
            found.extend(_walk(definition.list_info))
    return found


def _export(scope: DumpScope, flags: DumpFlags = DumpFlags.DEDUPLICATE_KEYS) -> list[ExportEntry]:
    collector = EntryCollector()
    ctx = ExportContext(scope, flags, collector)
    ctx.dup_module_parsers(default_config())
    assert export_all_parsers(ctx, SectionCounter())
    return collector.entries


def test_root_order() -> None:
    assert [root.module_name for root in ALL_ROOTS] == [
        "master_service",
        "master",
        "mail",
        "imap",
        "pop3",
    ]
    assert ALL_ROOTS[0] is MASTER_SERVICE_SETTINGS


def test_defaults_name_defined_settings() -> None:
    """It should only carry defaults for settings the schema defines."""
    for root in ALL_ROOTS:
        for schema in _walk(root):
            assert schema.defaults is not None
            fields = {d.field_name for d in schema.defines}
            assert set(schema.defaults) <= fields, schema.module_name


def test_enum_defaults_list_alternatives() -> None:
    for root in ALL_ROOTS:
        for schema in _walk(root):
            for definition in schema.defines:
                if definition.type == SettingType.ENUM:
                    default = schema.default_of(definition)
                    assert default is not None and ":" in default, definition.key


def test_default_services_are_not_marked_changed() -> None:
    config = default_config()
    master = config.global_filter_parser().find(MASTER_SETTINGS)
    assert master is not None

    services = master.parser.sections("service")
    assert [s.get_value("name") for s in services] == [
        "imap-login",
        "pop3-login",
        "imap",
        "auth",
        "config",
    ]
    assert not any(s.is_changed("name") for s in services)
    assert not master.parser.is_changed("service")


def test_default_config_changed_scope() -> None:
    """It should number nested sections globally across the service list."""
    values = {e.key: e.value for e in _export(DumpScope.CHANGED)}

    assert values["service"] == "imap-login pop3-login imap auth config"
    assert values["service/imap-login/name"] == "imap-login"
    assert values["service/imap-login/executable"] == "imap-login"
    assert "service/imap-login/unix_listener" not in values
    assert values["service/imap-login/inet_listener"] == "imap imaps"
    assert values["service/imap-login/inet_listener/imaps/port"] == "993"
    assert values["service/imap-login/inet_listener/imaps/ssl"] == "yes"
    assert "service/imap-login/inet_listener/imap/ssl" not in values
    assert values["service/imap/unix_listener"] == "9"
    assert values["service/imap/unix_listener/9/path"] == "imap-master"
    assert "service/imap/unix_listener/9/mode" not in values
    assert values["service/auth/unix_listener"] == "10 11"
    assert values["service/config/unix_listener/12/path"] == "config"
    assert "base_dir" not in values


@parametrize("scope", list(DumpScope))
def test_default_services_show_under_every_scope(scope: DumpScope) -> None:
    """It should emit the default services even though their masks are clean."""
    values = {e.key: e.value for e in _export(scope)}

    assert values["service"] == "imap-login pop3-login imap auth config"
    assert values["service/imap/name"] == "imap"
    assert values["service/imap/executable"] == "imap"

def test_default_config_dedups_protocol_plugin_maps() -> None:
    entries = _export(DumpScope.CHANGED)
    announcements = [e.key for e in entries if e.key_type is ConfigKeyType.KEY_LIST]
    assert announcements == ["plugin"]


def test_default_config_hidden_setting_needs_hidden_scope() -> None:
    plain = {e.key: e.value for e in _export(DumpScope.ALL_WITHOUT_HIDDEN)}
    hidden = {e.key: e.value for e in _export(DumpScope.ALL_WITH_HIDDEN)}

    assert "config_cache_size" not in plain
    assert hidden["config_cache_size"] == "1 M"
    assert plain["base_dir"] == "/var/run/dovecot"
    assert plain["mail_temp_dir"] == "/tmp"
    assert plain["lock_method"] == "fcntl"
    assert plain["service/imap/unix_listener/9/mode"] == "0600"
