# topmark:header:start
#
#   project      : ConfDump
#   file         : errors.py
#   file_relpath : src/confdump/core/errors.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Exceptions raised by the ConfDump settings model and export engine.

Two classes of failure exist:

- ``ConfdumpError`` and its subclasses are *recoverable*: a module parser that
  carries a deferred construction error, or an override value that does not
  parse. Callers report them and carry on (or stop cleanly).
- ``InvariantViolation`` signals a malformed schema or misuse of the engine
  (unsupported scalar type, value/change lists out of sync, missing
  master-service root, use after free). It deliberately does not derive from
  ``ConfdumpError`` so that ``except ConfdumpError`` never swallows it.
"""

from __future__ import annotations


class ConfdumpError(Exception):
    """Base class for recoverable ConfDump errors."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class ParserError(ConfdumpError):
    """A module parser carries a deferred error and cannot be exported."""


class SettingValueError(ConfdumpError):
    """A textual setting value could not be converted to its typed form.

    Attributes:
        key (str): The setting key the value was meant for.
    """

    def __init__(self, key: str, message: str) -> None:
        super().__init__(f"{key}: {message}")
        self.key = key


class InvariantViolation(RuntimeError):
    """Internal contract violation (schema bug or engine misuse); never recovered."""
