"""
TINY Compiler Front End
=======================

This package implements the syntactic analysis stage of a small
educational compiler for an extended TINY language. It provides:

- A scanner producing tokens on demand
- A recursive descent parser producing a syntax tree
- Diagnostics that are collected rather than raised
- A driver running both stages with listing and trace output

Pipeline
--------
    TINY Source → Lexer → Parser → Syntax Tree

The tree is handed unchanged to later stages (semantic analysis, code
generation), which run only when the parse found no syntax error.

Usage
-----
>>> from tinyc.frontend import parse_source, TreePrinter
>>> result = parse_source("int x, y; x := 1 + 2; write x")
>>> result.error
False
>>> print(TreePrinter().print(result.tree))
Program
  Declare: int
    Id: x
      Id: y
  Assign to: x
    Op: +
      Const: 1
      Const: 2
  Write
    Id: x

Language Summary
----------------
- Declarations: int, string and bool variable lists, before statements
- Statements: assignment, read, write, if/else, repeat-until,
  do-while, for (to/downto), switch/case/default
- Expressions: + - * / with one optional comparison (< = <= > >=)
- Literals: decimal numbers and quoted strings
"""

from tinyc.frontend.ast import (
    MAX_CHILDREN,
    ASTVisitor,
    ExpressionKind,
    NodeKind,
    StatementKind,
    SyntaxNode,
    TreePrinter,
    iter_cases,
    iter_sequence,
    iter_siblings,
    iter_tree,
    iter_varlist,
    new_expression_node,
    new_program_node,
    new_statement_node,
)
from tinyc.frontend.compiler import (
    FrontEndOptions,
    FrontEndResult,
    TinyFrontEnd,
    compile_tiny,
)
from tinyc.frontend.errors import (
    DiagnosticCollector,
    TinyCompilationError,
    TinySyntaxError,
    TrailingInputError,
    UnexpectedTokenError,
)
from tinyc.frontend.lexer import TinyLexer, Token, TokenType, format_token
from tinyc.frontend.parser import ParseResult, TinyParser, parse_source

__all__ = [
    # Driver
    "TinyFrontEnd",
    "FrontEndOptions",
    "FrontEndResult",
    "compile_tiny",
    # Errors
    "TinySyntaxError",
    "UnexpectedTokenError",
    "TrailingInputError",
    "TinyCompilationError",
    "DiagnosticCollector",
    # Lexer
    "TinyLexer",
    "Token",
    "TokenType",
    "format_token",
    # Parser
    "TinyParser",
    "ParseResult",
    "parse_source",
    # Syntax tree
    "MAX_CHILDREN",
    "NodeKind",
    "StatementKind",
    "ExpressionKind",
    "SyntaxNode",
    "ASTVisitor",
    "TreePrinter",
    "new_statement_node",
    "new_expression_node",
    "new_program_node",
    "iter_sequence",
    "iter_varlist",
    "iter_cases",
    "iter_siblings",
    "iter_tree",
]
