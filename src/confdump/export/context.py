# topmark:header:start
#
#   project      : ConfDump
#   file         : context.py
#   file_relpath : src/confdump/export/context.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Export context and parser session management.

An `ExportContext` owns everything one export request needs: the dump scope and
flags, the emission callback and its opaque context, the set of already-emitted
keys, the current key prefix, and the attached module parsers (borrowed, or an
owned duplicate).

Lifecycle:
    ``INITIALIZED`` → (attach parsers) ``ATTACHED`` → ``export_parser()`` calls →
    ``FREED``. The context is freed exactly once, either by `ExportContext.free`
    (or leaving a ``with`` block) or by `export_all_parsers`, which consumes it.
    Using a freed context, or exporting again or freeing the context from inside
    the callback of a running export, is an invariant violation.

Example:
    ```python
    from confdump.export import DumpFlags, DumpScope, EntryCollector, ExportContext
    from confdump.export import SectionCounter, export_all_parsers
    from confdump.settings.builtin import default_config

    sink = EntryCollector()
    ctx = ExportContext(DumpScope.CHANGED, DumpFlags.DEDUPLICATE_KEYS, sink)
    ctx.dup_module_parsers(default_config())
    ok = export_all_parsers(ctx, SectionCounter())
    ```
"""

from __future__ import annotations

from enum import Enum
from typing import TYPE_CHECKING, Any

from confdump.config.logging import get_logger
from confdump.core.errors import InvariantViolation, ParserError, SettingValueError
from confdump.export.types import DumpFlags
from confdump.export.walker import export_settings
from confdump.settings.builtin import MASTER_SERVICE_SETTINGS

if TYPE_CHECKING:
    from collections.abc import Sequence
    from types import TracebackType

    from confdump.config.logging import ConfdumpLogger
    from confdump.export.types import ConfigKeyType, DumpScope, ExportCallback, SectionCounter
    from confdump.settings.filter import ModuleParser, ParsedConfig
    from confdump.settings.schema import SchemaRoot

logger: ConfdumpLogger = get_logger(__name__)


class ExportState(Enum):
    """Lifecycle state of an `ExportContext`."""

    INITIALIZED = "initialized"
    ATTACHED = "attached"
    EXPORTING = "exporting"
    FREED = "freed"


class ExportContext:
    """State of one export request.

    Args:
        scope (DumpScope): Which fields are dumped even when equal to their default.
        flags (DumpFlags): List-default hiding and key deduplication.
        callback (ExportCallback): Called once per emitted entry with
            ``(key, value, key_type, context)``.
        context (Any): Opaque object passed through to ``callback``.

    Attributes:
        scope (DumpScope): The dump scope.
        flags (DumpFlags): The dump flags.
        prefix (str): Key prefix of the section currently being walked.
    """

    scope: DumpScope
    flags: DumpFlags
    prefix: str

    def __init__(
        self,
        scope: DumpScope,
        flags: DumpFlags,
        callback: ExportCallback,
        context: Any = None,
    ) -> None:
        self.scope = scope
        self.flags = flags
        self.prefix = ""
        self._callback = callback
        self._context = context
        self._keys: set[str] = set()
        self._module_parsers: Sequence[ModuleParser] | None = None
        self._dup_module_parsers: list[ModuleParser] | None = None
        self._state = ExportState.INITIALIZED
        logger.debug("Export context created (scope=%s, flags=%r)", scope.key, flags)

    def __enter__(self) -> ExportContext:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.free()

    # --- state ---

    @property
    def state(self) -> ExportState:
        """Current lifecycle state."""
        return self._state

    @property
    def freed(self) -> bool:
        """Whether the context has been released."""
        return self._state is ExportState.FREED

    @property
    def owns_parsers(self) -> bool:
        """Whether the attached module parsers are an owned duplicate."""
        return self._dup_module_parsers is not None

    def _check_alive(self) -> None:
        if self._state is ExportState.FREED:
            raise InvariantViolation("Export context used after free")

    def _parsers(self) -> Sequence[ModuleParser]:
        self._check_alive()
        if self._module_parsers is None:
            raise InvariantViolation("No module parsers attached to export context")
        return self._module_parsers

    # --- emission (used by the tree walker) ---

    def emit(self, key: str, value: str, key_type: ConfigKeyType) -> None:
        """Pass one entry to the callback."""
        self._callback(key, value, key_type, self._context)

    def is_emitted(self, key: str) -> bool:
        """Whether ``key`` was already emitted in this pass (only tracked when deduplicating)."""
        return key in self._keys

    def mark_emitted(self, key: str) -> None:
        """Record ``key`` as emitted when deduplication is enabled."""
        if DumpFlags.DEDUPLICATE_KEYS in self.flags:
            self._keys.add(key)

    # --- parser session ---

    def set_module_parsers(self, module_parsers: Sequence[ModuleParser]) -> None:
        """Attach a borrowed module-parser list; the context never modifies or frees it."""
        self._check_alive()
        self._module_parsers = module_parsers
        self._dup_module_parsers = None
        self._state = ExportState.ATTACHED

    def dup_module_parsers(self, config: ParsedConfig) -> None:
        """Attach an owned deep copy of the configuration's global module parsers.

        Schema roots are shared; value records and change masks are duplicated, so
        the copy can be exported (or edited) without touching ``config``.
        """
        self._check_alive()
        global_filter = config.global_filter_parser()
        self._dup_module_parsers = [mp.dup() for mp in global_filter.module_parsers]
        self._module_parsers = self._dup_module_parsers
        self._state = ExportState.ATTACHED
        logger.debug("Duplicated %d module parsers", len(self._dup_module_parsers))

    def parser_count(self) -> int:
        """Return the number of attached module parsers."""
        return len(self._parsers())

    def parser_info(self, parser_idx: int) -> SchemaRoot:
        """Return the schema root of module parser ``parser_idx``."""
        return self._parsers()[parser_idx].root

    def module_parser(self, parser_idx: int) -> ModuleParser:
        """Return attached module parser ``parser_idx``."""
        return self._parsers()[parser_idx]

    def export_parser(self, parser_idx: int, counter: SectionCounter) -> None:
        """Export module parser ``parser_idx`` through the callback.

        Args:
            parser_idx (int): Index into the attached module parsers.
            counter (SectionCounter): Running section index; read as the starting
                index and advanced past every section this parser contains.

        Raises:
            ParserError: The module parser carries a deferred error. Nothing is
                emitted for it.
            InvariantViolation: The context is freed or already exporting, or the
                parser's schema and values are inconsistent.
        """
        module_parser = self._parsers()[parser_idx]
        if module_parser.delayed_error is not None:
            raise ParserError(module_parser.delayed_error)
        if self._state is ExportState.EXPORTING:
            raise InvariantViolation("Re-entrant export on the same context")

        logger.debug(
            "Exporting parser %d (%s) from section index %d",
            parser_idx,
            module_parser.root.module_name,
            counter.value,
        )
        self._state = ExportState.EXPORTING
        self.prefix = ""
        try:
            parser = module_parser.parser
            export_settings(
                self,
                module_parser.root,
                False,
                parser.get_set(),
                parser.get_changes(),
                counter,
            )
        finally:
            self.prefix = ""
            self._state = ExportState.ATTACHED

    # --- bootstrap values ---

    def _master_service_value(self, key: str) -> str:
        for module_parser in self._parsers():
            if module_parser.root is not MASTER_SERVICE_SETTINGS:
                continue
            try:
                value = module_parser.parser.get_value(key)
            except SettingValueError as exc:
                raise InvariantViolation(exc.message) from exc
            if value is None:
                raise InvariantViolation(f"Master service setting {key!r} has no value")
            return str(value)
        raise InvariantViolation("Master service settings are not among the module parsers")

    def import_environment(self) -> str:
        """Return the master service ``import_environment`` setting."""
        return self._master_service_value("import_environment")

    def base_dir(self) -> str:
        """Return the master service ``base_dir`` setting."""
        return self._master_service_value("base_dir")

    # --- teardown ---

    def free(self) -> None:
        """Release owned parsers and the dedup set. Calling it again is a no-op.

        Raises:
            InvariantViolation: Called from the callback of a running export.
        """
        if self._state is ExportState.FREED:
            return
        if self._state is ExportState.EXPORTING:
            raise InvariantViolation("Export context freed during its own export")
        self._dup_module_parsers = None
        self._module_parsers = None
        self._keys.clear()
        self._state = ExportState.FREED
        logger.debug("Export context freed")


def export_all_parsers(ctx: ExportContext, counter: SectionCounter) -> bool:
    """Export every attached module parser in order, then free ``ctx``.

    Stops at the first module parser carrying a deferred error, which is logged.
    The context is freed exactly once whether or not the export succeeds, so it
    must not be used (or freed) by the caller afterwards.

    Args:
        ctx (ExportContext): Context with module parsers attached; consumed.
        counter (SectionCounter): Running section index shared by all parsers.

    Returns:
        bool: True when every parser was exported, False on a deferred error.
    """
    try:
        for parser_idx in range(ctx.parser_count()):
            try:
                ctx.export_parser(parser_idx, counter)
            except ParserError as exc:
                logger.error("%s", exc.message)
                return False
        return True
    finally:
        ctx.free()
