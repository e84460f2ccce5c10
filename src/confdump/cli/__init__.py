# topmark:header:start
#
#   project      : ConfDump
#   file         : __init__.py
#   file_relpath : src/confdump/cli/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""``confdump`` command line.

`confdump.cli.main.cli` is the Click group behind the ``confdump`` console
script; [`confdump.cli.commands`][] holds ``dump``, ``roots`` and ``version``.
Shared option decorators, parameter types, exit codes and the output console
live beside it so the engine packages never import Click.
"""

from __future__ import annotations
