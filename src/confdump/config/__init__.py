# topmark:header:start
#
#   project      : ConfDump
#   file         : __init__.py
#   file_relpath : src/confdump/config/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Runtime configuration of ConfDump itself (logging and environment overrides).

Not to be confused with [`confdump.settings`][confdump.settings], which models the
server settings that ConfDump exports.
"""

from __future__ import annotations

from confdump.config import logging

__all__ = ["logging"]
