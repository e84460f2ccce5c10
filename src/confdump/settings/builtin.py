# topmark:header:start
#
#   project      : ConfDump
#   file         : builtin.py
#   file_relpath : src/confdump/settings/builtin.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Built-in settings schemas of a mail server deployment.

These roots give the CLI something realistic to dump and give the tests a schema
that exercises every setting type:

- ``master_service``: process-wide bootstrap settings; the distinguished root from
  which export contexts read ``base_dir`` and ``import_environment``.
- ``master``: process limits, listeners and the uniquely-named ``service {}``
  sections with their nested ``inet_listener`` / ``unix_listener`` sections.
- ``mail``: storage settings, ``namespace {}`` sections with nested ``mailbox {}``
  sections, and the ``plugin {}`` string multimap.
- ``imap`` / ``pop3``: protocol modules; both repeat ``mail_plugins`` and
  ``plugin`` so that deduplication across roots is observable.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Final

from confdump.settings.filter import ParsedConfig
from confdump.settings.schema import SchemaRoot, SettingDefinition
from confdump.settings.types import SettingType

if TYPE_CHECKING:
    from confdump.settings.parser import SettingsParser

T = SettingType


def _d(
    key: str,
    stype: SettingType,
    *,
    hidden: bool = False,
    list_info: SchemaRoot | None = None,
) -> SettingDefinition:
    return SettingDefinition(key=key, type=stype, hidden=hidden, list_info=list_info)


# --- master_service ---

MASTER_SERVICE_SETTINGS: Final[SchemaRoot] = SchemaRoot(
    module_name="master_service",
    defines=(
        _d("base_dir", T.STR),
        _d("state_dir", T.STR),
        _d("instance_name", T.STR),
        _d("log_path", T.STR),
        _d("info_log_path", T.STR),
        _d("debug_log_path", T.STR),
        _d("log_timestamp", T.STR),
        _d("log_debug", T.STR),
        _d("log_core_filter", T.STR),
        _d("process_shutdown_filter", T.STR),
        _d("syslog_facility", T.STR),
        _d("import_environment", T.STR),
        _d("stats_writer_socket_path", T.STR),
        _d("config_cache_size", T.SIZE, hidden=True),
        _d("version_ignore", T.BOOL),
        _d("shutdown_clients", T.BOOL),
        _d("verbose_proctitle", T.BOOL),
        _d("haproxy_trusted_networks", T.STR),
        _d("haproxy_timeout", T.TIME),
    ),
    defaults={
        "base_dir": "/var/run/dovecot",
        "state_dir": "/var/lib/dovecot",
        "instance_name": "dovecot",
        "log_path": "syslog",
        "info_log_path": "",
        "debug_log_path": "",
        "log_timestamp": "%b %d %H:%M:%S ",
        "log_debug": "",
        "log_core_filter": "",
        "process_shutdown_filter": "",
        "syslog_facility": "mail",
        "import_environment": "TZ CORE_OUTOFMEM CORE_ERROR LISTEN_PID LISTEN_FDS",
        "stats_writer_socket_path": "stats-writer",
        "config_cache_size": 1024 * 1024,
        "version_ignore": False,
        "shutdown_clients": True,
        "verbose_proctitle": False,
        "haproxy_trusted_networks": "",
        "haproxy_timeout": 3,
    },
)

# --- master: services and listeners ---

INET_LISTENER_SETTINGS: Final[SchemaRoot] = SchemaRoot(
    module_name="inet_listener",
    defines=(
        _d("name", T.STR),
        _d("address", T.STR),
        _d("port", T.IN_PORT),
        _d("ssl", T.BOOL),
        _d("reuse_port", T.BOOL),
        _d("haproxy", T.BOOL),
    ),
    defaults={
        "name": "",
        "address": "",
        "port": 0,
        "ssl": False,
        "reuse_port": False,
        "haproxy": False,
    },
    name_key="name",
)

UNIX_LISTENER_SETTINGS: Final[SchemaRoot] = SchemaRoot(
    module_name="unix_listener",
    defines=(
        _d("path", T.STR),
        _d("mode", T.UINT_OCT),
        _d("user", T.STR),
        _d("group", T.STR),
    ),
    defaults={
        "path": "",
        "mode": 0o600,
        "user": "",
        "group": "",
    },
)

SERVICE_SETTINGS: Final[SchemaRoot] = SchemaRoot(
    module_name="service",
    defines=(
        _d("name", T.STR),
        _d("protocol", T.STR),
        _d("type", T.STR),
        _d("executable", T.STR),
        _d("user", T.STR),
        _d("group", T.STR),
        _d("chroot", T.STR),
        _d("drop_priv_before_exec", T.BOOL),
        _d("process_min_avail", T.UINT),
        _d("process_limit", T.UINT),
        _d("client_limit", T.UINT),
        _d("service_count", T.UINT),
        _d("idle_kill", T.TIME),
        _d("vsz_limit", T.SIZE),
        _d("unix_listener", T.DEFLIST, list_info=UNIX_LISTENER_SETTINGS),
        _d("inet_listener", T.DEFLIST_UNIQUE, list_info=INET_LISTENER_SETTINGS),
    ),
    defaults={
        "name": "",
        "protocol": "",
        "type": "",
        "executable": "",
        "user": "",
        "group": "",
        "chroot": "",
        "drop_priv_before_exec": False,
        "process_min_avail": 0,
        "process_limit": 0,
        "client_limit": 0,
        "service_count": 0,
        "idle_kill": 0,
        "vsz_limit": 0,
    },
    name_key="name",
)

MASTER_SETTINGS: Final[SchemaRoot] = SchemaRoot(
    module_name="master",
    defines=(
        _d("protocols", T.STR),
        _d("listen", T.STR),
        _d("listen_address", T.ALIAS),
        _d("ssl", T.ENUM),
        _d("default_process_limit", T.UINT),
        _d("default_client_limit", T.UINT),
        _d("default_idle_kill", T.TIME),
        _d("default_vsz_limit", T.SIZE),
        _d("first_valid_uid", T.UINT),
        _d("last_valid_uid", T.UINT),
        _d("login_trusted_networks", T.STR, hidden=True),
        _d("service", T.DEFLIST_UNIQUE, list_info=SERVICE_SETTINGS),
    ),
    defaults={
        "protocols": "imap pop3 lmtp",
        "listen": "*, ::",
        "ssl": "yes:no:required",
        "default_process_limit": 100,
        "default_client_limit": 1000,
        "default_idle_kill": 60,
        "default_vsz_limit": 256 * 1024 * 1024,
        "first_valid_uid": 500,
        "last_valid_uid": 0,
        "login_trusted_networks": "",
    },
)

# --- mail: namespaces, mailboxes and plugin settings ---

MAILBOX_SETTINGS: Final[SchemaRoot] = SchemaRoot(
    module_name="mailbox",
    defines=(
        _d("name", T.STR),
        _d("auto", T.ENUM),
        _d("special_use", T.STR),
        _d("comment", T.STR),
        _d("autoexpunge", T.TIME),
    ),
    defaults={
        "name": "",
        "auto": "no:create:subscribe",
        "special_use": "",
        "comment": "",
        "autoexpunge": 0,
    },
    name_key="name",
)

NAMESPACE_SETTINGS: Final[SchemaRoot] = SchemaRoot(
    module_name="namespace",
    defines=(
        _d("name", T.STR),
        _d("type", T.ENUM),
        _d("separator", T.STR),
        _d("prefix", T.STR_VARS),
        _d("location", T.STR_VARS),
        _d("inbox", T.BOOL),
        _d("hidden", T.BOOL),
        _d("list", T.ENUM),
        _d("subscriptions", T.BOOL),
        _d("mailbox", T.DEFLIST_UNIQUE, list_info=MAILBOX_SETTINGS),
    ),
    defaults={
        "name": "",
        "type": "private:shared:public",
        "separator": "",
        "prefix": "",
        "location": "",
        "inbox": False,
        "hidden": False,
        "list": "yes:children:no",
        "subscriptions": True,
    },
    name_key="name",
)

MAIL_SETTINGS: Final[SchemaRoot] = SchemaRoot(
    module_name="mail",
    defines=(
        _d("mail_location", T.STR_VARS),
        _d("mail_uid", T.STR),
        _d("mail_gid", T.STR),
        _d("mail_plugins", T.STR_VARS),
        _d("mail_plugin_dir", T.STR),
        _d("mail_temp_dir", T.STR_VARS),
        _d("mmap_disable", T.BOOL),
        _d("lock_method", T.ENUM),
        _d("mail_max_keyword_length", T.UINT),
        _d("mailbox_idle_check_interval", T.TIME),
        _d("mail_attachment_min_size", T.SIZE),
        _d("mail_server_comment", T.STR, hidden=True),
        _d("namespace", T.DEFLIST_UNIQUE, list_info=NAMESPACE_SETTINGS),
        _d("plugin", T.STRLIST),
    ),
    defaults={
        "mail_location": "",
        "mail_uid": "",
        "mail_gid": "",
        "mail_plugins": "",
        "mail_plugin_dir": "/usr/lib/dovecot/modules",
        "mail_temp_dir": "/tmp",
        "mmap_disable": False,
        "lock_method": "fcntl:flock:dotlock",
        "mail_max_keyword_length": 50,
        "mailbox_idle_check_interval": 30,
        "mail_attachment_min_size": 128 * 1024,
        "mail_server_comment": "",
    },
)

# --- protocol modules ---

IMAP_SETTINGS: Final[SchemaRoot] = SchemaRoot(
    module_name="imap",
    defines=(
        _d("imap_max_line_length", T.SIZE),
        _d("imap_idle_notify_interval", T.TIME),
        _d("imap_hibernate_timeout", T.TIME),
        _d("imap_capability", T.STR),
        _d("imap_logout_format", T.STR),
        _d("imap_client_workarounds", T.STR),
        _d("imap_fetch_failure", T.ENUM),
        _d("mail_plugins", T.STR_VARS),
        _d("plugin", T.STRLIST),
    ),
    defaults={
        "imap_max_line_length": 64 * 1024,
        "imap_idle_notify_interval": 2 * 60,
        "imap_hibernate_timeout": 0,
        "imap_capability": "",
        "imap_logout_format": "in=%i out=%o",
        "imap_client_workarounds": "",
        "imap_fetch_failure": "disconnect-immediately:disconnect-after:no-after",
        "mail_plugins": "",
    },
)

POP3_SETTINGS: Final[SchemaRoot] = SchemaRoot(
    module_name="pop3",
    defines=(
        _d("pop3_no_flag_updates", T.BOOL),
        _d("pop3_enable_last", T.BOOL),
        _d("pop3_reuse_xuidl", T.BOOL),
        _d("pop3_lock_session", T.BOOL),
        _d("pop3_uidl_format", T.STR_VARS),
        _d("pop3_logout_format", T.STR_VARS),
        _d("pop3_delete_type", T.ENUM),
        _d("mail_plugins", T.STR_VARS),
        _d("plugin", T.STRLIST),
    ),
    defaults={
        "pop3_no_flag_updates": False,
        "pop3_enable_last": False,
        "pop3_reuse_xuidl": False,
        "pop3_lock_session": False,
        "pop3_uidl_format": "%08Xu%08Xv",
        "pop3_logout_format": "top=%t/%p, retr=%r/%b, del=%d/%m, size=%s",
        "pop3_delete_type": "default:expunge:flag",
        "mail_plugins": "",
    },
)

ALL_ROOTS: Final[tuple[SchemaRoot, ...]] = (
    MASTER_SERVICE_SETTINGS,
    MASTER_SETTINGS,
    MAIL_SETTINGS,
    IMAP_SETTINGS,
    POP3_SETTINGS,
)


def _add_service(
    master: SettingsParser,
    name: str,
    *,
    inet: tuple[tuple[str, int, bool], ...] = (),
    unix: tuple[tuple[str, int], ...] = (),
) -> None:
    service = master.add_section("service", name, changed=False)
    service.set_value("executable", name, changed=False)
    for listener_name, port, ssl in inet:
        listener = service.add_section("inet_listener", listener_name, changed=False)
        listener.set_value("port", port, changed=False)
        listener.set_value("ssl", ssl, changed=False)
    for path, mode in unix:
        listener = service.add_section("unix_listener", changed=False)
        listener.set_value("path", path, changed=False)
        listener.set_value("mode", mode, changed=False)


def default_config() -> ParsedConfig:
    """Return the built-in configuration: schema defaults plus the default services.

    Default services are installed without touching the change masks. They still
    show up under every scope: section lists are always emitted, and their names
    and executables differ from the empty schema defaults.
    """
    config = ParsedConfig.from_roots(ALL_ROOTS)
    master_parser = config.global_filter_parser().find(MASTER_SETTINGS)
    assert master_parser is not None
    master = master_parser.parser

    _add_service(
        master,
        "imap-login",
        inet=(("imap", 143, False), ("imaps", 993, True)),
    )
    _add_service(
        master,
        "pop3-login",
        inet=(("pop3", 110, False), ("pop3s", 995, True)),
    )
    _add_service(master, "imap", unix=(("imap-master", 0o600),))
    _add_service(master, "auth", unix=(("auth-userdb", 0o600), ("auth-master", 0o600)))
    _add_service(master, "config", unix=(("config", 0o600),))
    return config
