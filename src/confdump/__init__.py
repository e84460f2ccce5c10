# topmark:header:start
#
#   project      : ConfDump
#   file         : __init__.py
#   file_relpath : src/confdump/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""ConfDump package.

ConfDump flattens a server's resolved, hierarchical settings tree into an
ordered stream of key/value entries. The stream can be rendered for humans
("dump the effective configuration") or handed to a subordinate process.
It exposes both a CLI and a small typed API built around
[`confdump.export.context.ExportContext`][confdump.export.context.ExportContext].
"""

from __future__ import annotations
