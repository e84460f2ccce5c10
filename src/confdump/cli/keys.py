# topmark:header:start
#
#   project      : ConfDump
#   file         : keys.py
#   file_relpath : src/confdump/cli/keys.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Command names and long option spellings of the ``confdump`` CLI.

Option declarations and error messages (``Use only one of --scope, -a, -n``)
refer to options through these constants so a rename stays in one place.
"""

from __future__ import annotations

from typing import Final


class CliCmd:
    """Subcommand names of the ``confdump`` group."""

    DUMP: Final[str] = "dump"
    ROOTS: Final[str] = "roots"
    VERSION: Final[str] = "version"


class CliOpt:
    """Long option spellings, leading ``--`` included.

    Short forms (``-a``, ``-n``, ``-v``, ``-q``) are declared next to the
    options in `confdump.cli.options`.
    """

    # Dump policy
    SCOPE: Final[str] = "--scope"
    ALL_WITH_HIDDEN: Final[str] = "--all"
    NON_DEFAULT: Final[str] = "--non-default"
    HIDE_LIST_DEFAULTS: Final[str] = "--hide-list-defaults"
    DEDUP: Final[str] = "--dedup"

    # Value overrides
    SET: Final[str] = "--set"

    # Output
    OUTPUT_FORMAT: Final[str] = "--output-format"
