# topmark:header:start
#
#   project      : ConfDump
#   file         : __main__.py
#   file_relpath : src/confdump/__main__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""``python -m confdump``: same commands as the ``confdump`` script.

    python -m confdump dump -n --output-format json
"""

from __future__ import annotations

from confdump.cli.main import cli

if __name__ == "__main__":
    cli(prog_name="confdump")
