# topmark:header:start
#
#   project      : ConfDump
#   file         : values.py
#   file_relpath : src/confdump/settings/values.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Conversion of textual setting values into their typed form.

These helpers accept the same spellings that the export engine produces
(``"1 k"``, ``"2 mins"``, ``"0750"``, ``"yes"``) plus the usual short forms, so a
dumped value can be fed back through `SettingsParser.parse_line`.

All helpers raise `SettingValueError` with the offending key on malformed input.
"""

from __future__ import annotations

import re
from typing import TYPE_CHECKING, Any, Final

from confdump.constants import SETTING_STRVAR_UNEXPANDED
from confdump.core.errors import InvariantViolation, SettingValueError
from confdump.settings.schema import enum_alternatives
from confdump.settings.types import SettingType

if TYPE_CHECKING:
    from confdump.settings.schema import SchemaRoot, SettingDefinition

_NUMBER_WITH_UNIT: Final[re.Pattern[str]] = re.compile(r"^\s*([0-9]+)\s*([A-Za-z]*)\s*$")
_DECIMAL: Final[re.Pattern[str]] = re.compile(r"[0-9]+")
_OCTAL: Final[re.Pattern[str]] = re.compile(r"[0-7]+")

_SIZE_MULTIPLIERS: Final[dict[str, int]] = {
    "": 1,
    "b": 1,
    "k": 1024,
    "kb": 1024,
    "m": 1024**2,
    "mb": 1024**2,
    "g": 1024**3,
    "gb": 1024**3,
    "t": 1024**4,
    "tb": 1024**4,
}

_TIME_MSECS_MULTIPLIERS: Final[dict[str, int]] = {
    "ms": 1,
    "msec": 1,
    "msecs": 1,
    "millisecs": 1,
    "milliseconds": 1,
    "": 1000,
    "s": 1000,
    "sec": 1000,
    "secs": 1000,
    "second": 1000,
    "seconds": 1000,
    "m": 60 * 1000,
    "min": 60 * 1000,
    "mins": 60 * 1000,
    "minute": 60 * 1000,
    "minutes": 60 * 1000,
    "h": 3600 * 1000,
    "hour": 3600 * 1000,
    "hours": 3600 * 1000,
    "d": 86400 * 1000,
    "day": 86400 * 1000,
    "days": 86400 * 1000,
    "w": 7 * 86400 * 1000,
    "week": 7 * 86400 * 1000,
    "weeks": 7 * 86400 * 1000,
}

_TRUE_WORDS: Final[frozenset[str]] = frozenset({"yes", "y", "1"})
_FALSE_WORDS: Final[frozenset[str]] = frozenset({"no", "n", "0"})

MAX_PORT: Final[int] = 65535


def _split_number(key: str, text: str) -> tuple[int, str]:
    match = _NUMBER_WITH_UNIT.match(text)
    if match is None:
        raise SettingValueError(key, f"Invalid number: {text!r}")
    return int(match.group(1)), match.group(2).lower()


def parse_bool(key: str, text: str) -> bool:
    """Parse ``yes``/``no`` (also ``y``/``n`` and ``1``/``0``)."""
    word = text.strip().lower()
    if word in _TRUE_WORDS:
        return True
    if word in _FALSE_WORDS:
        return False
    raise SettingValueError(key, f"Invalid boolean value: {text!r} (use yes or no)")


def parse_size(key: str, text: str) -> int:
    """Parse a byte size such as ``"512"``, ``"1 k"`` or ``"10M"``."""
    number, unit = _split_number(key, text)
    multiplier = _SIZE_MULTIPLIERS.get(unit)
    if multiplier is None:
        raise SettingValueError(key, f"Unknown size unit: {unit!r}")
    return number * multiplier


def parse_time_msecs(key: str, text: str) -> int:
    """Parse an interval to milliseconds; a bare number means seconds."""
    number, unit = _split_number(key, text)
    multiplier = _TIME_MSECS_MULTIPLIERS.get(unit)
    if multiplier is None:
        raise SettingValueError(key, f"Unknown time unit: {unit!r}")
    return number * multiplier


def parse_time(key: str, text: str) -> int:
    """Parse an interval to whole seconds."""
    msecs = parse_time_msecs(key, text)
    if msecs % 1000 != 0:
        raise SettingValueError(key, f"Milliseconds not supported for this setting: {text!r}")
    return msecs // 1000


def parse_uint(key: str, text: str) -> int:
    """Parse a non-negative decimal integer."""
    stripped = text.strip()
    if _DECIMAL.fullmatch(stripped) is None:
        raise SettingValueError(key, f"Invalid number: {text!r}")
    return int(stripped)


def parse_uint_oct(key: str, text: str) -> int:
    """Parse an octal integer (``"0700"``; the leading zero is optional)."""
    stripped = text.strip()
    if _OCTAL.fullmatch(stripped) is None:
        raise SettingValueError(key, f"Invalid octal number: {text!r}")
    return int(stripped, 8)


def parse_port(key: str, text: str) -> int:
    """Parse a network port number (0..65535)."""
    port = parse_uint(key, text)
    if port > MAX_PORT:
        raise SettingValueError(key, f"Invalid port number: {port}")
    return port


def parse_enum(key: str, text: str, default: str | None) -> str:
    """Validate ``text`` against the alternatives listed in the enumeration default."""
    value = text.strip()
    if default is not None and value not in enum_alternatives(default):
        choices = ", ".join(enum_alternatives(default))
        raise SettingValueError(key, f"Invalid value {value!r} (allowed: {choices})")
    return value


def parse_value(schema: SchemaRoot, definition: SettingDefinition, text: str) -> Any:
    """Convert ``text`` into the stored form of a scalar ``definition``.

    Variable-expandable strings are stored with the "unexpanded" tag character in
    front of the text.

    Raises:
        SettingValueError: The text is malformed for the setting type.
        InvariantViolation: ``definition`` is not a scalar setting.
    """
    key = definition.key
    stype = definition.type
    if stype == SettingType.BOOL:
        return parse_bool(key, text)
    if stype == SettingType.SIZE:
        return parse_size(key, text)
    if stype == SettingType.UINT:
        return parse_uint(key, text)
    if stype == SettingType.UINT_OCT:
        return parse_uint_oct(key, text)
    if stype == SettingType.TIME:
        return parse_time(key, text)
    if stype == SettingType.TIME_MSECS:
        return parse_time_msecs(key, text)
    if stype == SettingType.IN_PORT:
        return parse_port(key, text)
    if stype == SettingType.STR:
        return text
    if stype == SettingType.STR_VARS:
        return SETTING_STRVAR_UNEXPANDED + text
    if stype == SettingType.ENUM:
        return parse_enum(key, text, schema.default_of(definition))
    raise InvariantViolation(f"Setting {key!r} of type {stype.value} has no scalar value")
