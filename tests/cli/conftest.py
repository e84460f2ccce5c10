# topmark:header:start
#
#   project      : ConfDump
#   file         : conftest.py
#   file_relpath : tests/cli/conftest.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""CLI test helpers for invoking ConfDump through Click's test runner.

`run_cli()` invokes the Click group in-process; the ``assert_*`` helpers check the
exit code and show the captured output when the check fails.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import pytest
from click.testing import CliRunner, Result

from confdump.cli.main import cli
from confdump.cli.errors import ExitCode
from confdump.config import logging

if TYPE_CHECKING:
    from collections.abc import Iterator, Sequence


def run_cli(argv: str | Sequence[str] | None) -> Result:
    """Invoke the CLI in-process.

    Args:
        argv (str | Sequence[str] | None): CLI argument vector, e.g.
            ``["dump", "-n"]``.

    Returns:
        Result: The `click.testing.Result` produced by
            `click.testing.CliRunner.invoke`.

    Example:
        ```python
        result = run_cli(["dump", "-n", "--output-format", "json"])
        assert result.exit_code == ExitCode.SUCCESS
        ```
    """
    runner = CliRunner()
    return runner.invoke(cli, argv)


def output_lines(result: Result) -> list[str]:
    """Return the non-empty lines of the command's standard output."""
    return [line for line in result.stdout.splitlines() if line.strip()]


def assert_SUCCESS(result: Result) -> None:
    """Assert that the command exited successfully (code 0).

    Args:
        result (Result): The Result object returned by `run_cli`.
    """
    assert result.exit_code == ExitCode.SUCCESS, result.output


def assert_USAGE_ERROR(result: Result) -> None:
    """Assert that the command exited with USAGE_ERROR (code 64).

    Args:
        result (Result): The Result object returned by `run_cli`.
    """
    assert result.exit_code == ExitCode.USAGE_ERROR, result.output


def assert_CONFIG_ERROR(result: Result) -> None:
    """Assert that the command exited with CONFIG_ERROR (code 78).

    Args:
        result (Result): The Result object returned by `run_cli`.
    """
    assert result.exit_code == ExitCode.CONFIG_ERROR, result.output


def assert_INTERNAL_ERROR(result: Result) -> None:
    """Assert that the command exited with INTERNAL_ERROR (code 70).

    Args:
        result (Result): The Result object returned by `run_cli`.
    """
    assert result.exit_code == ExitCode.INTERNAL_ERROR, result.output


@pytest.fixture(autouse=True)
def restore_test_logging() -> Iterator[None]:
    """Re-attach suite logging after each CLI run, which reconfigures the root logger."""
    yield
    logging.setup_logging(level=logging.TRACE_LEVEL)
