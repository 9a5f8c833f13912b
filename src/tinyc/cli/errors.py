"""
tnc Exit Codes and Error Reporting
==================================

Maps the exceptions that can escape a tnc run to a process exit code
and a one-shot message on stderr.

    TinyError                          → SYNTAX_ERROR (message as formatted)
    click.BadParameter, missing or
    unreadable input file              → INVALID_ARGS ("Error: ...")
    anything else                      → INTERNAL_ERROR ("Internal error: ...")
"""

import sys
import traceback
from enum import IntEnum
from typing import NoReturn

import click

from tinyc.errors import TinyError


class ExitCode(IntEnum):
    """Process exit codes of the tnc command."""
    SUCCESS = 0
    SYNTAX_ERROR = 1
    INVALID_ARGS = 2
    INTERNAL_ERROR = 3


_ARGUMENT_ERRORS = (click.BadParameter, FileNotFoundError, PermissionError)


def exit_code_for(error: Exception) -> ExitCode:
    """Classify an exception escaping a tnc run."""
    if isinstance(error, TinyError):
        return ExitCode.SYNTAX_ERROR
    if isinstance(error, _ARGUMENT_ERRORS):
        return ExitCode.INVALID_ARGS
    return ExitCode.INTERNAL_ERROR


def handle_cli_exception(error: Exception, verbose: bool = False) -> NoReturn:
    """
    Report an exception on stderr and exit with its code.

    Diagnostics already read 'file:line:col: error: ...', so they are
    echoed unchanged. Internal errors get a traceback under --verbose.
    """
    code = exit_code_for(error)

    if code == ExitCode.SYNTAX_ERROR:
        click.echo(str(error), err=True)
    elif code == ExitCode.INVALID_ARGS:
        click.echo(f"Error: {error}", err=True)
    else:
        click.echo(f"Internal error: {error}", err=True)
        if verbose:
            traceback.print_exc()

    sys.exit(code)
