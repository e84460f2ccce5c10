# topmark:header:start
#
#   project      : ConfDump
#   file         : escape.py
#   file_relpath : src/confdump/settings/escape.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Escaping of section names embedded in key paths.

A uniquely-named section contributes its name as one key path segment, so the
characters that delimit keys, values and list items must not appear verbatim.
"""

from __future__ import annotations

from typing import Final

from confdump.constants import SETTINGS_SEPARATOR

_ESCAPES: Final[dict[str, str]] = {
    "=": "\\e",
    SETTINGS_SEPARATOR: "\\s",
    "\\": "\\\\",
    " ": "\\_",
    ",": "\\+",
}
_UNESCAPES: Final[dict[str, str]] = {v[1]: k for k, v in _ESCAPES.items()}


def escape_section_name(name: str) -> str:
    """Return ``name`` with separator, space, ``=``, ``,`` and backslash escaped."""
    if not any(c in _ESCAPES for c in name):
        return name
    return "".join(_ESCAPES.get(c, c) for c in name)


def unescape_section_name(escaped: str) -> str:
    """Reverse `escape_section_name`; unknown escapes keep the escaped character."""
    out: list[str] = []
    chars = iter(escaped)
    for c in chars:
        if c != "\\":
            out.append(c)
            continue
        nxt = next(chars, "")
        out.append(_UNESCAPES.get(nxt, nxt))
    return "".join(out)
