"""
tnc - TINY Front-End Command-Line Interface
===========================================

This module implements the command-line interface for the TINY front
end. It scans and parses a TINY source file and reports syntax errors,
optionally printing the token stream or the syntax tree.

Usage Examples
--------------
Check a program for syntax errors:
    $ tnc sample.tny

Print the syntax tree:
    $ tnc sample.tny --ast

Print the token stream:
    $ tnc sample.tny --tokens

Echo numbered source lines, with debug logging:
    $ tnc -e -v sample.tny
"""

import logging
import sys
from pathlib import Path

import click

from tinyc import __version__
from tinyc.cli.errors import handle_cli_exception
from tinyc.frontend import FrontEndOptions, TinyFrontEnd
from tinyc.frontend.ast import TreePrinter
from tinyc.frontend.lexer import TinyLexer, format_token

logger = logging.getLogger(__name__)


def setup_logging(verbose: bool) -> None:
    """Configure logging based on verbosity."""
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(levelname)s: %(message)s" if verbose else "%(message)s",
    )


# =============================================================================
# CLI Definition
# =============================================================================

@click.command()
@click.argument(
    "input_file",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
)
@click.option(
    "--ast",
    is_flag=True,
    help="Print the syntax tree",
)
@click.option(
    "--tokens",
    is_flag=True,
    help="Print the token stream and exit",
)
@click.option(
    "-e", "--echo",
    is_flag=True,
    help="Echo numbered source lines",
)
@click.option(
    "-v", "--verbose",
    is_flag=True,
    help="Verbose output",
)
@click.version_option(version=__version__, prog_name="tnc")
def main(
    input_file: Path,
    ast: bool,
    tokens: bool,
    echo: bool,
    verbose: bool,
) -> None:
    """
    Parse a TINY source file and report syntax errors.

    INPUT_FILE is the TINY source file to parse.

    \b
    Examples:
        tnc sample.tny               # Check for syntax errors
        tnc sample.tny --ast         # Print the syntax tree
        tnc sample.tny --tokens      # Print the token stream
        tnc -e sample.tny            # Echo numbered source lines

    \b
    Exit codes:
        0  no syntax errors
        1  syntax errors (reported on stderr)
        2  invalid arguments or missing file
        3  internal error
    """
    setup_logging(verbose)

    try:
        if tokens:
            source = input_file.read_text(encoding="utf-8")
            for token in TinyLexer(source, str(input_file)).tokenize():
                click.echo(f"{token.line}: {format_token(token)}")
            return

        options = FrontEndOptions(
            echo_source=echo,
            trace_parse=False,
            listing=sys.stdout if echo else None,
        )
        front_end = TinyFrontEnd(options)
        logger.debug("front-end options: %s", options)

        if verbose:
            click.echo(f"Parsing {input_file}...")

        result = front_end.compile_file(str(input_file))

        if ast:
            click.echo(TreePrinter().print(result.tree))

        # With --echo each diagnostic was already listed as it was found
        front_end.diagnostics.raise_if_errors(summary_only=options.listing is not None)

        if verbose:
            click.echo(f"Tokenized: {result.token_count} tokens")

        click.echo(f"Parsed {input_file}: no syntax errors")

    except Exception as e:
        handle_cli_exception(e, verbose)


if __name__ == "__main__":
    main()
