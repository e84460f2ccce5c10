# topmark:header:start
#
#   project      : ConfDump
#   file         : constants.py
#   file_relpath : src/confdump/constants.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""ConfDump Constants."""

from __future__ import annotations

from importlib.metadata import PackageNotFoundError
from importlib.metadata import version as get_version
from typing import Final

try:
    CONFDUMP_VERSION: str = get_version("confdump")
except PackageNotFoundError:  # running from a source checkout
    CONFDUMP_VERSION = "0.0.0"

# Separator between key path segments, and between a string-list key and its subkey.
SETTINGS_SEPARATOR: Final[str] = "/"

# Leading tag character stored in front of variable-expandable string values.
SETTING_STRVAR_UNEXPANDED: Final[str] = "0"
SETTING_STRVAR_EXPANDED: Final[str] = "1"

# Separator between the chosen alternative and the other legal alternatives of an enum.
ENUM_ALTERNATIVE_SEPARATOR: Final[str] = ":"

# Environment variable that forces the internal log level.
LOG_LEVEL_ENV_VAR: Final[str] = "CONFDUMP_LOG_LEVEL"

VALUE_NOT_SET: str = "<not set>"
