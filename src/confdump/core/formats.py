# topmark:header:start
#
#   project      : ConfDump
#   file         : formats.py
#   file_relpath : src/confdump/core/formats.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Output formats shared by the ConfDump commands and renderers."""

from __future__ import annotations

from confdump.core.enum_mixins import KeyedStrEnum


class OutputFormat(KeyedStrEnum):
    """Rendering of an exported entry stream (or of a command's listing).

    ``text`` is the only format that may carry ANSI color. ``toml`` nests keys
    by path segment and ``json`` keeps the flat stream including entry types.
    """

    TEXT = ("text", "key = value lines", ("txt", "plain"))
    TOML = ("toml", "nested TOML tables", ("tml",))
    JSON = ("json", "JSON array of entries")

    @property
    def is_machine(self) -> bool:
        """Whether this format is parsed by programs and must stay colorless."""
        return self is not OutputFormat.TEXT
