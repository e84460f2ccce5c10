# topmark:header:start
#
#   project      : ConfDump
#   file         : filter.py
#   file_relpath : src/confdump/settings/filter.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Module parsers and the parsed-configuration snapshot.

A `ModuleParser` pairs a `SchemaRoot` with the `SettingsParser` holding its values,
plus an optional *deferred error*: a failure recorded when the parser was built and
surfaced only when the parser is exported. An ordered list of module parsers is one
full configuration snapshot.

`ParsedConfig` is the result of parsing a configuration; its global filter parser
exposes the module-parser list that export contexts duplicate.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from confdump.config.logging import get_logger
from confdump.settings.parser import SettingsParser

if TYPE_CHECKING:
    from collections.abc import Iterable

    from confdump.config.logging import ConfdumpLogger
    from confdump.settings.schema import SchemaRoot

logger: ConfdumpLogger = get_logger(__name__)


@dataclass
class ModuleParser:
    """One schema root with its values and an optional deferred error.

    Attributes:
        root (SchemaRoot): The schema root describing the module's settings.
        parser (SettingsParser): Current values and change mask.
        delayed_error (str | None): Error recorded at construction time, if any.
    """

    root: SchemaRoot
    parser: SettingsParser
    delayed_error: str | None = None

    def dup(self) -> ModuleParser:
        """Return a copy with independently duplicated values (schema shared)."""
        return ModuleParser(
            root=self.root,
            parser=self.parser.dup(),
            delayed_error=self.delayed_error,
        )


@dataclass
class FilterParser:
    """Settings that apply under one configuration filter.

    Only the global (unfiltered) parser is used for export.

    Attributes:
        module_parsers (list[ModuleParser]): Ordered module parsers of this filter.
    """

    module_parsers: list[ModuleParser] = field(default_factory=lambda: [])

    def find(self, root: SchemaRoot) -> ModuleParser | None:
        """Return the module parser for ``root`` (identity match) or None."""
        for module_parser in self.module_parsers:
            if module_parser.root is root:
                return module_parser
        return None


@dataclass
class ParsedConfig:
    """A parsed configuration: its global filter parser.

    Attributes:
        global_filter (FilterParser): Settings outside any filter block.
    """

    global_filter: FilterParser

    def global_filter_parser(self) -> FilterParser:
        """Return the global filter parser whose module parsers get exported."""
        return self.global_filter

    @classmethod
    def from_roots(cls, roots: Iterable[SchemaRoot]) -> ParsedConfig:
        """Build a snapshot where every root holds its default values."""
        module_parsers = [ModuleParser(root=root, parser=SettingsParser(root)) for root in roots]
        logger.debug("Built default configuration with %d module parsers", len(module_parsers))
        return cls(global_filter=FilterParser(module_parsers=module_parsers))
