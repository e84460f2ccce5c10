# topmark:header:start
#
#   project      : ConfDump
#   file         : __init__.py
#   file_relpath : src/confdump/core/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Core, dependency-light building blocks shared across ConfDump.

Keep this package free of Click and console concerns so it can be imported
from the settings model, the export engine and the CLI alike.
"""

from __future__ import annotations
