# topmark:header:start
#
#   project      : ConfDump
#   file         : test_export_property.py
#   file_relpath : tests/export/test_export_property.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

# pyright: strict

"""Property tests for the export engine.

Asserts over generated parsers that:
1) wider scopes emit a superset of the keys of narrower scopes,
2) deduplication never emits a key twice,
3) exporting the same parsers twice yields the same stream, and
4) sizes and intervals render with the largest exactly-dividing unit and parse back.
"""

from __future__ import annotations

import pytest
from hypothesis import HealthCheck, given, settings
from hypothesis import strategies as st

from confdump.export.formatting import format_size, format_time
from confdump.export.types import DumpFlags, DumpScope
from confdump.settings.filter import ModuleParser
from confdump.settings.parser import SettingsParser
from confdump.settings.values import parse_size, parse_time
from tests.schemas_confdump import ROOT, export_entries
from tests.strategies_confdump import s_root_parser

pytestmark: pytest.MarkDecorator = pytest.mark.hypothesis_slow

# Narrowest first.
SCOPES: tuple[DumpScope, ...] = (
    DumpScope.CHANGED,
    DumpScope.SET,
    DumpScope.ALL_WITHOUT_HIDDEN,
    DumpScope.ALL_WITH_HIDDEN,
)

FLAG_SETS: tuple[DumpFlags, ...] = (
    DumpFlags.DEDUPLICATE_KEYS,
    DumpFlags.DEDUPLICATE_KEYS | DumpFlags.HIDE_LIST_DEFAULTS,
)

SIZE_UNITS: dict[str, int] = {"B": 1, "k": 1024, "M": 1024**2, "G": 1024**3, "T": 1024**4}
TIME_UNITS: dict[str, int] = {
    "secs": 1,
    "mins": 60,
    "hours": 3600,
    "days": 86400,
    "weeks": 7 * 86400,
}


def _module_parsers(parsers: list[SettingsParser]) -> list[ModuleParser]:
    return [ModuleParser(ROOT, parser) for parser in parsers]


@settings(suppress_health_check=[HealthCheck.too_slow], deadline=None, max_examples=60)
@given(
    parsers=st.lists(s_root_parser(), min_size=1, max_size=3),
    flags=st.sampled_from(FLAG_SETS),
)
def test_wider_scope_emits_superset_of_keys(
    parsers: list[SettingsParser],
    flags: DumpFlags,
) -> None:
    """Each scope's key set contains the key set of every narrower scope."""
    module_parsers = _module_parsers(parsers)
    key_sets = [
        {entry.key for entry in export_entries(module_parsers, scope, flags)} for scope in SCOPES
    ]
    for narrower, wider in zip(key_sets, key_sets[1:]):
        assert narrower <= wider


@settings(suppress_health_check=[HealthCheck.too_slow], deadline=None, max_examples=60)
@given(
    parsers=st.lists(s_root_parser(), min_size=1, max_size=3),
    scope=st.sampled_from(SCOPES),
)
def test_deduplicated_stream_has_unique_keys(
    parsers: list[SettingsParser],
    scope: DumpScope,
) -> None:
    """With key deduplication, no fully-qualified key is emitted twice."""
    keys = [entry.key for entry in export_entries(_module_parsers(parsers), scope)]
    assert len(keys) == len(set(keys))


@settings(suppress_health_check=[HealthCheck.too_slow], deadline=None, max_examples=40)
@given(parser=s_root_parser(), scope=st.sampled_from(SCOPES))
def test_export_is_repeatable(parser: SettingsParser, scope: DumpScope) -> None:
    """Exporting unchanged parsers twice yields identical streams."""
    module_parsers = _module_parsers([parser])
    first = export_entries(module_parsers, scope)
    second = export_entries(module_parsers, scope)
    assert first == second


@settings(deadline=None, max_examples=200)
@given(size=st.integers(min_value=1, max_value=2**50))
def test_size_uses_largest_exact_unit(size: int) -> None:
    """A rendered size multiplies back exactly, and a larger unit would not divide it."""
    number, unit = format_size(size).split(" ")
    assert int(number) * SIZE_UNITS[unit] == size
    if unit != "T":
        assert int(number) % 1024 != 0
    assert parse_size("size", format_size(size)) == size


@settings(deadline=None, max_examples=200)
@given(secs=st.integers(min_value=1, max_value=10**9))
def test_time_uses_largest_exact_unit(secs: int) -> None:
    """A rendered interval multiplies back exactly and parses to the same seconds."""
    number, unit = format_time(secs).split(" ")
    assert int(number) * TIME_UNITS[unit] == secs
    assert parse_time("secs", format_time(secs)) == secs
