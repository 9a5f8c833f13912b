"""
TINY Command-Line Interface
===========================

This package provides the command-line tool for the TINY front end:

- **tnc**: scan and parse TINY source, print tokens or the syntax tree

The tool is a Click-based CLI application with help text and
consistent exit codes (see tinyc.cli.errors).
"""

__all__ = ["tnc"]
