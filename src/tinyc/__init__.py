"""
tinyc - Front End for the Extended TINY Language
================================================

This package provides the scanner and parser of a small educational
compiler for TINY, the teaching language from Louden's "Compiler
Construction: Principles and Practice", extended with declarations,
string and bool types, do-while and for loops, and switch statements.

Main Components
---------------
- **frontend**: lexer, parser, syntax tree and driver
- **cli**: the tnc command-line tool

Quick Start
-----------
Parse a program and print its tree:
    >>> from tinyc import parse_source, TreePrinter
    >>> result = parse_source("read x; if x < 10 then write x end")
    >>> print(TreePrinter().print(result.tree))

Run the front end on a file:
    >>> from tinyc import TinyFrontEnd
    >>> result = TinyFrontEnd().compile_file("sample.tny")
    >>> result.success
    True
"""

# =============================================================================
# Version Information
# =============================================================================

__version__ = "1.0.0"

# =============================================================================
# Public API Imports
# =============================================================================

from tinyc.errors import TinyError, SourceLocation
from tinyc.frontend import (
    TinyFrontEnd,
    FrontEndOptions,
    FrontEndResult,
    TinyLexer,
    TinyParser,
    ParseResult,
    parse_source,
    SyntaxNode,
    TreePrinter,
    TinySyntaxError,
    TinyCompilationError,
)

__all__ = [
    "__version__",
    "TinyError",
    "SourceLocation",
    "TinyFrontEnd",
    "FrontEndOptions",
    "FrontEndResult",
    "TinyLexer",
    "TinyParser",
    "ParseResult",
    "parse_source",
    "SyntaxNode",
    "TreePrinter",
    "TinySyntaxError",
    "TinyCompilationError",
]
