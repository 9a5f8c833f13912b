"""
TINY Front-End Error Hierarchy
==============================

This module defines the diagnostics produced by the TINY front end.
All of them inherit from TinyError so that a driver can treat every
toolchain failure the same way.

Exception Hierarchy
-------------------
TinySyntaxError (base for all front-end diagnostics)
├── UnexpectedTokenError - lookahead does not fit the grammar rule
└── TrailingInputError - tokens remain after the program
TinyCompilationError - aggregate report of collected diagnostics

The parser never raises these. It builds them as structured records,
hands them to a DiagnosticCollector and keeps parsing, so a parse always
ends with a complete tree. Callers that prefer exception semantics can
ask the collector to raise an aggregate afterwards.

Error Message Format
--------------------
    sample.tny:3:6: error: unexpected token -> reserved word: then
        if x then write x
             ^
    hint: expected ':='
"""

from typing import List, Optional

from tinyc.errors import TinyError, SourceLocation


# =============================================================================
# Base Front-End Diagnostic
# =============================================================================

class TinySyntaxError(TinyError):
    """
    Syntax error in TINY source code.

    Attributes:
        message: The error description
        location: Where in the source the error occurred
        hint: A suggestion for fixing the error
        source_line: The source text of the offending line
    """

    def __init__(
        self,
        message: str,
        location: Optional[SourceLocation] = None,
        hint: Optional[str] = None,
        source_line: Optional[str] = None,
    ):
        self.message = message
        self.location = location
        self.hint = hint
        self.source_line = source_line
        super().__init__(self._format_message())

    @property
    def lineno(self) -> int:
        """Line of the error, or 0 when the location is unknown."""
        return self.location.line if self.location else 0

    def _format_message(self) -> str:
        """
        Format the error with location, source context and hint.

            sample.tny:3:6: error: unexpected token -> reserved word: then
                if x then write x
                     ^
            hint: expected ':='
        """
        parts = []

        if self.location:
            parts.append(f"{self.location}: error: {self.message}")
        else:
            parts.append(f"error: {self.message}")

        if self.source_line is not None and self.location is not None:
            parts.append(f"    {self.source_line}")
            if self.location.column > 0:
                padding = " " * (4 + self.location.column - 1)
                parts.append(f"{padding}^")

        if self.hint:
            parts.append(f"hint: {self.hint}")

        return "\n".join(parts)


class TinyCompilationError(TinySyntaxError):
    """
    Aggregate error wrapping a pre-formatted diagnostic report.

    The message is already the output of DiagnosticCollector.report(),
    so it is passed through without a location prefix.
    """

    def _format_message(self) -> str:
        return self.message


# =============================================================================
# Parser Diagnostics
# =============================================================================

class UnexpectedTokenError(TinySyntaxError):
    """
    The lookahead token does not fit the grammar rule being parsed.

    Recorded when match() sees the wrong token category, and when the
    statement or factor dispatch finds no production for the lookahead.
    """

    def __init__(
        self,
        found: str,
        expected: Optional[str] = None,
        location: Optional[SourceLocation] = None,
        source_line: Optional[str] = None,
    ):
        self.found = found
        self.expected = expected

        hint = None
        if expected:
            hint = f"expected {expected}"

        super().__init__(
            f"unexpected token -> {found}",
            location=location,
            hint=hint,
            source_line=source_line,
        )


class TrailingInputError(TinySyntaxError):
    """
    Input continues after the program has been parsed.

    Usually caused by a missing ';' between statements or a stray
    'end', 'until' or 'break' that closes nothing.
    """

    def __init__(
        self,
        found: str,
        location: Optional[SourceLocation] = None,
        source_line: Optional[str] = None,
    ):
        self.found = found
        super().__init__(
            "code ends before file",
            location=location,
            hint=f"unparsed input starts at {found}",
            source_line=source_line,
        )


# =============================================================================
# Diagnostic Collection
# =============================================================================

class DiagnosticCollector:
    """
    Collects front-end diagnostics for batch reporting.

    The parser adds every syntax error here instead of raising, which
    is what lets a parse run to completion on malformed input. The
    collector doubles as the error flag: has_errors() is True as soon
    as one diagnostic has been recorded.

    Example:
        collector = DiagnosticCollector()
        collector.add(UnexpectedTokenError("EOF", "'end'"))
        if collector.has_errors():
            print(collector.report())
    """

    def __init__(self):
        self.errors: List[TinySyntaxError] = []

    def add(self, error: TinySyntaxError) -> None:
        """Add a diagnostic to the collection."""
        self.errors.append(error)

    def has_errors(self) -> bool:
        """Return True if any diagnostics have been collected."""
        return len(self.errors) > 0

    def error_count(self) -> int:
        """Return the number of collected diagnostics."""
        return len(self.errors)

    def summary(self) -> str:
        """The closing count line of a report, e.g. '2 errors'."""
        error_word = "error" if len(self.errors) == 1 else "errors"
        return f"{len(self.errors)} {error_word}"

    def report(self) -> str:
        """Format all diagnostics followed by a summary line."""
        lines = []

        for error in self.errors:
            lines.append(str(error))
            lines.append("")

        lines.append(self.summary())

        return "\n".join(lines)

    def clear(self) -> None:
        """Forget all collected diagnostics."""
        self.errors.clear()

    def raise_if_errors(self, summary_only: bool = False) -> None:
        """
        Raise a TinyCompilationError if any diagnostics were collected.

        Args:
            summary_only: Carry only the count line, for callers whose
                          listing already received each diagnostic
        """
        if self.has_errors():
            message = self.summary() if summary_only else self.report()
            raise TinyCompilationError(message)
