# topmark:header:start
#
#   project      : ConfDump
#   file         : walker.py
#   file_relpath : src/confdump/export/walker.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Tree walker: recursive export of one schema against its values and change mask.

For every definition of a schema, in schema order, the walker:

1. decides (from the dump scope, the change mask and, inside uniquely-named
   sections, the ``HIDE_LIST_DEFAULTS`` flag) whether the value is forced out,
   forced back, or compared against its default;
2. formats scalar values through
   [`export_type`][confdump.export.formatting.export_type];
3. renders nested section lists as a space-separated list of section identifiers
   (the running section index, or the escaped section name for unique lists);
4. emits string multimaps as an announcement entry followed by one entry per pair;
5. emits the entry through the context (deduplicated when requested);
6. recurses into each nested section with an extended key prefix.

Section indices come from a `SectionCounter` that is reserved once per list, so
later sibling lists and later module parsers never reuse an index.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from confdump.config.logging import get_logger
from confdump.constants import SETTINGS_SEPARATOR
from confdump.core.errors import InvariantViolation
from confdump.export.formatting import ExportedValue, export_type
from confdump.export.types import ConfigKeyType, DumpDecision, DumpFlags, DumpScope
from confdump.settings.escape import escape_section_name
from confdump.settings.types import SettingType

if TYPE_CHECKING:
    from collections.abc import Mapping

    from confdump.config.logging import ConfdumpLogger
    from confdump.export.context import ExportContext
    from confdump.export.types import SectionCounter
    from confdump.settings.schema import SchemaRoot, SettingDefinition
    from confdump.settings.types import ChangeRecord, ValueRecord

logger: ConfdumpLogger = get_logger(__name__)


def _scope_forces_default(scope: DumpScope, definition: SettingDefinition, changed: bool) -> bool:
    if scope is DumpScope.ALL_WITH_HIDDEN:
        return True
    if scope is DumpScope.ALL_WITHOUT_HIDDEN and not definition.hidden:
        return True
    if scope in (DumpScope.ALL_WITHOUT_HIDDEN, DumpScope.SET):
        # Hidden settings under "all" are dumped like "set": only when explicitly set.
        return changed
    return False


def dump_decision(
    scope: DumpScope,
    flags: DumpFlags,
    info: SchemaRoot,
    definition: SettingDefinition,
    *,
    parent_unique_deflist: bool,
    changed: bool,
) -> DumpDecision:
    """Return how the formatter treats ``definition``'s value.

    Inside a uniquely-named section with ``HIDE_LIST_DEFAULTS``, the schema default
    says nothing about one particular section (``service imap`` and
    ``service auth`` have different effective defaults). An unchanged field is
    therefore suppressed, and a changed field (or the section's name field) is
    always emitted. The scope still wins when it forces emission.
    """
    force = _scope_forces_default(scope, definition, changed)
    if parent_unique_deflist and DumpFlags.HIDE_LIST_DEFAULTS in flags:
        if not changed and not info.is_name_field(definition):
            if not force:
                return DumpDecision.FORCE_SUPPRESS
        else:
            force = True
    return DumpDecision.FORCE_EMIT if force else DumpDecision.COMPARE_DEFAULT


def section_name(definition: SettingDefinition, child_values: Mapping[str, Any], idx: int) -> str:
    """Return the key path segment identifying one element of a section list.

    Non-unique lists use the running section index. Unique lists use the escaped
    value of the element's name field, falling back to the index when it is empty.
    """
    if definition.type != SettingType.DEFLIST_UNIQUE or definition.list_info is None:
        return str(idx)
    name_key = definition.list_info.name_key
    name_def = definition.list_info.find(name_key) if name_key is not None else None
    name = name_def.get(child_values) if name_def is not None else None
    if not name:
        return str(idx)
    return escape_section_name(name)


def _key_type(
    info: SchemaRoot,
    definition: SettingDefinition,
    parent_unique_deflist: bool,
) -> ConfigKeyType:
    if parent_unique_deflist and info.is_name_field(definition):
        return ConfigKeyType.UNIQUE_KEY
    if definition.type.is_deflist:
        return ConfigKeyType.LIST
    return ConfigKeyType.NORMAL


def _export_strlist(ctx: ExportContext, key: str, strings: Mapping[str, str] | None) -> None:
    if strings is None:
        return
    if ctx.is_emitted(key):
        # already added all of these
        return
    ctx.mark_emitted(key)
    ctx.emit(key, "", ConfigKeyType.KEY_LIST)
    for subkey, text in strings.items():
        ctx.emit(f"{key}{SETTINGS_SEPARATOR}{subkey}", text, ConfigKeyType.NORMAL)


def export_settings(
    ctx: ExportContext,
    info: SchemaRoot,
    parent_unique_deflist: bool,
    values: ValueRecord,
    changes: ChangeRecord,
    counter: SectionCounter,
) -> None:
    """Emit every setting of ``info`` below the context's current key prefix.

    Args:
        ctx (ExportContext): Export context holding scope, flags, prefix and the
            dedup set; entries are emitted through its callback.
        info (SchemaRoot): Schema being exported.
        parent_unique_deflist (bool): Whether ``values`` is an element of a
            uniquely-named section list.
        values (ValueRecord): Current values of ``info``.
        changes (ChangeRecord): Change mask parallel to ``values``.
        counter (SectionCounter): Running section index for this export pass.

    Raises:
        InvariantViolation: A section list's value and change lists differ in
            length, or a value cannot be formatted for its type.
    """
    logger.trace("Exporting %s at prefix %r", info.module_name, ctx.prefix)

    for definition in info.defines:
        stype = definition.type
        if stype == SettingType.ALIAS:
            continue

        value: Any = definition.get(values)
        key = f"{ctx.prefix}{definition.key}"

        if stype == SettingType.STRLIST:
            _export_strlist(ctx, key, value)
            continue

        children: list[ValueRecord] = []
        child_changes: list[ChangeRecord] = []
        start_idx = 0
        if stype.is_deflist:
            if value is not None:
                children = value
                child_changes = changes.get(definition.field_name) or []
                if len(children) != len(child_changes):
                    raise InvariantViolation(
                        f"{key}: {len(children)} sections but {len(child_changes)} change masks"
                    )
            start_idx = counter.reserve(len(children))
            exported = ExportedValue(
                " ".join(
                    section_name(definition, child, start_idx + i)
                    for i, child in enumerate(children)
                )
            )
        else:
            changed = bool(changes.get(definition.field_name))
            decision = dump_decision(
                ctx.scope,
                ctx.flags,
                info,
                definition,
                parent_unique_deflist=parent_unique_deflist,
                changed=changed,
            )
            exported = export_type(stype, value, info.default_of(definition), decision)

        if (exported.text or exported.dumped) and not ctx.is_emitted(key):
            ctx.emit(key, exported.text, _key_type(info, definition, parent_unique_deflist))
            ctx.mark_emitted(key)

        if not children:
            continue

        prefix = ctx.prefix
        for i, (child, child_change) in enumerate(zip(children, child_changes)):
            name = section_name(definition, child, start_idx + i)
            ctx.prefix = f"{prefix}{definition.key}{SETTINGS_SEPARATOR}{name}{SETTINGS_SEPARATOR}"
            assert definition.list_info is not None
            export_settings(
                ctx,
                definition.list_info,
                stype == SettingType.DEFLIST_UNIQUE,
                child,
                child_change,
                counter,
            )
        ctx.prefix = prefix
