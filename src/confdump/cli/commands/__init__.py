# topmark:header:start
#
#   project      : ConfDump
#   file         : __init__.py
#   file_relpath : src/confdump/cli/commands/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Click subcommands of the ConfDump CLI."""

from __future__ import annotations
