"""
TINY Front-End Driver
=====================

This module runs the TINY front end over a source text or file:

    Source → Lex → Parse → Syntax Tree

Usage
-----
Command line:
    $ tnc sample.tny --ast

Programmatic:
    >>> from tinyc.frontend import TinyFrontEnd
    >>> result = TinyFrontEnd().compile_source("read x; write x")
    >>> result.success
    True

Listing Output
--------------
When a listing stream is configured the driver writes to it the way the
classic TINY driver does: numbered source lines (echo_source), each
token as the parser pulls it (trace_scan), every syntax error as it is
found, and the printed syntax tree after an error-free parse
(trace_parse).

Error Handling
--------------
Syntax errors do not raise. The parser records all of them, the result
reports success=False and still carries the tree, and later stages are
skipped. Callers that want an exception can call
front_end.diagnostics.raise_if_errors().
"""

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterable, Iterator, Optional, TextIO

from tinyc.frontend.ast import SyntaxNode, TreePrinter
from tinyc.frontend.errors import DiagnosticCollector, TinySyntaxError
from tinyc.frontend.lexer import TinyLexer, Token, format_token
from tinyc.frontend.parser import TinyParser

logger = logging.getLogger(__name__)


@dataclass
class FrontEndOptions:
    """
    Front-end configuration options.

    Attributes:
        echo_source: Write numbered source lines to the listing
        trace_scan: Write each token to the listing as it is scanned
        trace_parse: Write the syntax tree to the listing after a clean parse
        listing: Text stream receiving listing output and diagnostics
    """
    echo_source: bool = False
    trace_scan: bool = False
    trace_parse: bool = True
    listing: Optional[TextIO] = None


@dataclass
class FrontEndResult:
    """
    Result of running the front end.

    Attributes:
        filename: Source filename
        success: True if no syntax error was found
        tree: The Program node (present even when success is False)
        token_count: Number of tokens consumed by the parser
        errors: Syntax errors, in source order
    """
    filename: str = ""
    success: bool = False
    tree: Optional[SyntaxNode] = None
    token_count: int = 0
    errors: list[TinySyntaxError] = field(default_factory=list)


class TinyFrontEnd:
    """
    Lexer and parser pipeline for extended TINY.

    Example:
        front_end = TinyFrontEnd(FrontEndOptions(listing=sys.stdout))
        result = front_end.compile_file("sample.tny")
        if not result.success:
            print(front_end.diagnostics.report())

    Attributes:
        options: Front-end configuration options
        diagnostics: Syntax errors from the most recent run
    """

    def __init__(self, options: Optional[FrontEndOptions] = None):
        """
        Initialize the front end.

        Args:
            options: Front-end configuration (uses defaults if None)
        """
        self.options = options or FrontEndOptions()
        self.diagnostics = DiagnosticCollector()

    def compile_source(self, source: str, filename: str = "<input>") -> FrontEndResult:
        """
        Scan and parse TINY source code.

        Args:
            source: TINY source code string
            filename: Source filename for error messages

        Returns:
            FrontEndResult with the tree and any syntax errors
        """
        self.diagnostics.clear()
        result = FrontEndResult(filename=filename)
        listing = self.options.listing
        source_lines = source.splitlines()

        if listing is not None and self.options.echo_source:
            self._echo_source(filename, source_lines)

        logger.debug("parsing %s", filename)
        tokens: Iterable[Token] = TinyLexer(source, filename).tokenize()
        if self.options.trace_scan:
            tokens = self._trace_tokens(tokens)

        parser = TinyParser(tokens, filename, source_lines, listing=listing)
        result.tree = parser.parse()
        result.token_count = parser.token_count

        for error in parser.diagnostics.errors:
            self.diagnostics.add(error)
        result.errors = list(self.diagnostics.errors)
        result.success = not parser.error

        if result.success:
            logger.debug("%s: %d tokens, no syntax errors", filename, result.token_count)
            if listing is not None and self.options.trace_parse:
                listing.write("\nSyntax tree:\n")
                listing.write(TreePrinter().print(result.tree))
                listing.write("\n")
        else:
            # Later stages only run on an error-free tree
            logger.debug(
                "%s: %d syntax errors, later stages skipped",
                filename, self.diagnostics.error_count(),
            )

        return result

    def compile_file(self, filepath: str) -> FrontEndResult:
        """
        Scan and parse a TINY source file.

        Args:
            filepath: Path to the TINY source file

        Returns:
            FrontEndResult with the tree and any syntax errors

        Raises:
            FileNotFoundError: If source file not found
        """
        path = Path(filepath)
        if not path.exists():
            raise FileNotFoundError(f"Source file not found: {filepath}")

        source = path.read_text(encoding="utf-8")
        return self.compile_source(source, str(filepath))

    def _echo_source(self, filename: str, source_lines: list[str]) -> None:
        """Write the source to the listing with line numbers."""
        listing = self.options.listing
        listing.write(f"\nTINY COMPILATION: {filename}\n")
        for number, line in enumerate(source_lines, start=1):
            listing.write(f"{number:4d}: {line}\n")

    def _trace_tokens(self, tokens: Iterable[Token]) -> Iterator[Token]:
        """Pass tokens through, writing each to the listing."""
        listing = self.options.listing
        for token in tokens:
            logger.debug("scanned %r", token)
            if listing is not None:
                listing.write(f"\t{token.line}: {format_token(token)}\n")
            yield token


# =============================================================================
# Convenience Functions
# =============================================================================

def compile_tiny(source: str, filename: str = "<input>") -> SyntaxNode:
    """
    Parse TINY source code, raising on syntax errors.

    Args:
        source: TINY source code
        filename: Source filename for error messages

    Returns:
        The Program node

    Raises:
        TinyCompilationError: If any syntax error was found

    Example:
        >>> tree = compile_tiny("int x; read x; write x")
        >>> tree.declarations.op.name
        'INT'
    """
    front_end = TinyFrontEnd(FrontEndOptions(trace_parse=False))
    result = front_end.compile_source(source, filename)
    front_end.diagnostics.raise_if_errors()
    return result.tree
