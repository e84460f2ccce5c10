# topmark:header:start
#
#   project      : ConfDump
#   file         : formatting.py
#   file_relpath : src/confdump/export/formatting.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Type formatter: canonical text for one typed scalar value.

Rules:
    - booleans render as ``yes``/``no``;
    - byte sizes use the largest unit among B, k, M, G, T that divides exactly
      (``1536`` → ``"1536 B"``, ``1024`` → ``"1 k"``);
    - second intervals walk secs → mins → hours → days → weeks while each step
      divides exactly (``120`` → ``"2 mins"``);
    - millisecond intervals that are whole seconds use the seconds rule, anything
      else renders as ``"<n> ms"``;
    - octal integers render with a leading ``0``;
    - variable-expandable strings lose their tag character;
    - enumerations compare and render only the chosen alternative.

Zero sizes and intervals render as ``"0"``. A missing current value never
emits. A missing default counts as "differs".
"""

from __future__ import annotations

from typing import Any, Final, NamedTuple

from confdump.constants import SETTING_STRVAR_EXPANDED, SETTING_STRVAR_UNEXPANDED
from confdump.core.errors import InvariantViolation
from confdump.export.types import DumpDecision
from confdump.settings.schema import enum_choice
from confdump.settings.types import SettingType

_SIZE_SUFFIXES: Final[tuple[str, ...]] = ("B", "k", "M", "G", "T")

# (unit name, divisor from the previous unit)
_TIME_UNITS: Final[tuple[tuple[str, int], ...]] = (
    ("mins", 60),
    ("hours", 60),
    ("days", 24),
    ("weeks", 7),
)

_STRVAR_TAGS: Final[frozenset[str]] = frozenset(
    {SETTING_STRVAR_UNEXPANDED, SETTING_STRVAR_EXPANDED}
)


class ExportedValue(NamedTuple):
    """Result of formatting one value.

    Attributes:
        text (str): The canonical text ("" when nothing was emitted).
        dumped (bool): Whether a string value was emitted; lets an empty string
            count as content.
    """

    text: str
    dumped: bool = False


NOT_EXPORTED: Final[ExportedValue] = ExportedValue("", False)


def format_size(size: int) -> str:
    """Render a byte size with the largest exactly-dividing unit."""
    if size == 0:
        return "0"
    suffix = _SIZE_SUFFIXES[0]
    for candidate in _SIZE_SUFFIXES[1:]:
        if size % 1024 != 0:
            break
        size //= 1024
        suffix = candidate
    return f"{size} {suffix}"


def format_time(secs: int) -> str:
    """Render a second interval with the largest exactly-dividing unit."""
    if secs == 0:
        return "0"
    suffix = "secs"
    for unit, divisor in _TIME_UNITS:
        if secs % divisor != 0:
            break
        secs //= divisor
        suffix = unit
    return f"{secs} {suffix}"


def format_time_msecs(msecs: int) -> str:
    """Render a millisecond interval; whole seconds use `format_time`."""
    if msecs % 1000 == 0:
        return format_time(msecs // 1000)
    return f"{msecs} ms"


def _differs(decision: DumpDecision, value: Any, default: Any) -> bool:
    if decision is DumpDecision.FORCE_EMIT:
        return True
    if decision is DumpDecision.FORCE_SUPPRESS:
        return False
    return default is None or value != default


def _format_number(stype: SettingType, value: int) -> str:
    if stype == SettingType.SIZE:
        return format_size(value)
    if stype == SettingType.UINT_OCT:
        return f"0{value:o}"
    if stype == SettingType.TIME:
        return format_time(value)
    if stype == SettingType.TIME_MSECS:
        return format_time_msecs(value)
    # UINT, IN_PORT
    return str(value)


def export_type(
    stype: SettingType,
    value: Any,
    default: Any,
    decision: DumpDecision,
) -> ExportedValue:
    """Format ``value`` of type ``stype`` unless it is suppressed against ``default``.

    Args:
        stype (SettingType): Scalar type tag of the setting.
        value (Any): Current value as stored in the value record.
        default (Any): Default value from the schema, or None when unknown.
        decision (DumpDecision): Forced emission, forced suppression, or comparison
            against ``default``.

    Returns:
        ExportedValue: The text and whether a string value was emitted.

    Raises:
        InvariantViolation: ``stype`` is not a scalar type, or a variable-expandable
            string lacks its tag character.
    """
    if not stype.is_scalar:
        raise InvariantViolation(f"Unsupported setting type for value export: {stype.value}")
    if value is None:
        return NOT_EXPORTED

    if stype == SettingType.BOOL:
        if _differs(decision, value, default):
            return ExportedValue("yes" if value else "no")
        return NOT_EXPORTED

    if stype in (
        SettingType.SIZE,
        SettingType.UINT,
        SettingType.UINT_OCT,
        SettingType.TIME,
        SettingType.TIME_MSECS,
        SettingType.IN_PORT,
    ):
        if _differs(decision, value, default):
            return ExportedValue(_format_number(stype, value))
        return NOT_EXPORTED

    if stype == SettingType.STR_VARS:
        if not value or value[0] not in _STRVAR_TAGS:
            raise InvariantViolation(f"String variable value without expansion tag: {value!r}")
        stripped: str = value[1:]
        if _differs(decision, stripped, default):
            return ExportedValue(stripped, dumped=True)
        return NOT_EXPORTED

    if stype == SettingType.STR:
        if _differs(decision, value, default):
            return ExportedValue(value, dumped=True)
        return NOT_EXPORTED

    # SettingType.ENUM
    chosen = enum_choice(value)
    default_chosen = None if default is None else enum_choice(default)
    if _differs(decision, chosen, default_chosen):
        return ExportedValue(chosen)
    return NOT_EXPORTED
