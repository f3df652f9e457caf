"""
CLI Error Handling
==================

Provides consistent error messages and exit codes for the zxtape commands.
"""

import sys
import traceback
from enum import IntEnum
from typing import NoReturn

import click

from zxtape.errors import ZXTapeError


class ExitCode(IntEnum):
    """Standard exit codes for the CLI."""
    SUCCESS = 0
    FORMAT_ERROR = 1     # Malformed or unsupported tape image
    INVALID_ARGS = 2     # Invalid arguments or missing files
    INTERNAL_ERROR = 3   # Unexpected internal error


def handle_cli_exception(
    error: Exception,
    verbose: bool = False,
    error_type: str | None = None
) -> NoReturn:
    """
    Report an exception and exit with the matching exit code.

    Args:
        error: The exception that was raised
        verbose: If True, print full traceback for internal errors
        error_type: Optional prefix for the error message (e.g., "Decode")

    Raises:
        SystemExit: Always exits with an appropriate exit code
    """
    if isinstance(error, ZXTapeError):
        prefix = f"{error_type} error: " if error_type else "Error: "
        click.echo(f"{prefix}{error}", err=True)
        sys.exit(ExitCode.FORMAT_ERROR)

    elif isinstance(error, (click.BadParameter, FileNotFoundError, PermissionError)):
        click.echo(f"Error: {error}", err=True)
        sys.exit(ExitCode.INVALID_ARGS)

    else:
        click.echo(f"Internal error: {error}", err=True)
        if verbose:
            traceback.print_exc()
        sys.exit(ExitCode.INTERNAL_ERROR)
