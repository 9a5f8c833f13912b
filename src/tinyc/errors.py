"""
TINY Toolchain Error Hierarchy
==============================

This module defines the root of the exception hierarchy for the TINY
toolchain. All exceptions inherit from TinyError, allowing callers to
catch every toolchain error with a single except clause if desired.

Exception Hierarchy
-------------------
TinyError (base)
└── TinySyntaxError (tinyc.frontend.errors)
    ├── UnexpectedTokenError - token does not fit the grammar
    └── TrailingInputError - input continues after the program

Design Philosophy
-----------------
Errors capture source location information (filename, line, column)
so that messages point the user straight at the offending text:

    filename:line:column: error: description
        source_line_text
        ^ (pointer to error location)
    hint: suggestion for fixing (when available)
"""

from dataclasses import dataclass


# =============================================================================
# Base Exception Class
# =============================================================================

class TinyError(Exception):
    """
    Base exception for all TINY toolchain errors.

    Catch this to handle any error produced by the toolchain:

        try:
            front_end.compile_file("sample.tny")
        except TinyError as e:
            print(f"Error: {e}")
    """
    pass


# =============================================================================
# Source Location Tracking
# =============================================================================

@dataclass(frozen=True)
class SourceLocation:
    """
    A position in TINY source text.

    Used by tokens, syntax tree nodes and diagnostics. Frozen so that a
    location can be shared between a token and the nodes built from it.

    Attributes:
        filename: Name of the source file (or "<input>" for string input)
        line: Line number (1-indexed)
        column: Column number (1-indexed)
    """
    filename: str
    line: int
    column: int

    def __str__(self) -> str:
        """Format as 'filename:line:column' for error messages."""
        return f"{self.filename}:{self.line}:{self.column}"
