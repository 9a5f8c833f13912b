"""
TINY Recursive Descent Parser
=============================

This module implements the parser for the extended TINY language. It
pulls tokens from the scanner one at a time, keeping exactly one token
of lookahead, and builds the syntax tree defined in tinyc.frontend.ast.

Grammar (EBNF)
--------------
program         ::= declarations stmt_sequence
declarations    ::= decl_stmt { ';' decl_stmt }
decl_stmt       ::= ('int' | 'string' | 'bool') varlist
varlist         ::= ID { ',' ID }
stmt_sequence   ::= statement { ';' statement }
statement       ::= if_stmt | repeat_stmt | assign_stmt | read_stmt
                  | write_stmt | while_stmt | for_stmt | switch_stmt
if_stmt         ::= 'if' exp 'then' stmt_sequence ['else' stmt_sequence] 'end'
repeat_stmt     ::= 'repeat' stmt_sequence 'until' exp
while_stmt      ::= 'do' stmt_sequence 'while' exp
for_stmt        ::= 'for' for_init to_stmt 'then' stmt_sequence 'end'
for_init        ::= ID [':=' exp]
to_stmt         ::= ('to' | 'downto') factor
switch_stmt     ::= 'switch' factor case_stmt { case_stmt } [default_stmt]
case_stmt       ::= 'case' factor stmt_sequence 'break'
default_stmt    ::= 'default' stmt_sequence
assign_stmt     ::= ID ':=' exp
read_stmt       ::= 'read' ID
write_stmt      ::= 'write' exp
exp             ::= simple_exp [relop simple_exp]
relop           ::= '<' | '=' | '<=' | '>' | '>='
simple_exp      ::= term { ('+' | '-') term }
term            ::= factor { ('*' | '/') factor }
factor          ::= NUM | ID | STR | '(' exp ')'

Error Policy
------------
Syntax errors never stop the parse. A mismatched token is reported and
left in place, as if the expected token had been present; a token that
starts no statement or factor is reported and skipped. Every diagnostic
is kept in a DiagnosticCollector (and echoed to the optional listing),
and parse() always returns the complete Program tree. The 'error'
property tells the driver whether later stages should run.

Example Usage
-------------
>>> from tinyc.frontend.lexer import TinyLexer
>>> from tinyc.frontend.parser import TinyParser
>>> parser = TinyParser(TinyLexer("int x; read x; write x * 2"))
>>> tree = parser.parse()
>>> parser.error
False
"""

import logging
from dataclasses import dataclass, field
from typing import Callable, Iterable, Iterator, Optional, TextIO, Union

from tinyc.frontend.ast import (
    ExpressionKind,
    StatementKind,
    SyntaxNode,
    new_expression_node,
    new_program_node,
    new_statement_node,
)
from tinyc.frontend.errors import (
    DiagnosticCollector,
    TinySyntaxError,
    TrailingInputError,
    UnexpectedTokenError,
)
from tinyc.frontend.lexer import (
    KEYWORDS,
    RELATIONAL_OPERATORS,
    SYMBOLS,
    TYPE_KEYWORDS,
    TinyLexer,
    Token,
    TokenType,
    format_token,
)

logger = logging.getLogger(__name__)


# Human-readable names used in "expected ..." hints
_KEYWORD_SPELLING = {token_type: word for word, token_type in KEYWORDS.items()}
_CATEGORY_NAMES = {
    TokenType.ID: "identifier",
    TokenType.NUM: "number",
    TokenType.STR: "string literal",
    TokenType.EOF: "end of file",
}


def describe_token_type(token_type: TokenType) -> str:
    """Name a token category the way it is written in source."""
    if token_type in _KEYWORD_SPELLING:
        return f"'{_KEYWORD_SPELLING[token_type]}'"
    if token_type in SYMBOLS:
        return f"'{SYMBOLS[token_type]}'"
    return _CATEGORY_NAMES.get(token_type, token_type.name.lower())


class TinyParser:
    """
    Recursive descent parser for extended TINY.

    One instance performs one parse. All parsing state (the lookahead
    token and the diagnostics) lives on the instance, so independent
    parsers never interfere with each other.

    Attributes:
        filename: Source filename for error reporting
        source_lines: Source lines for error context
        listing: Optional text stream receiving formatted diagnostics
        diagnostics: Collected syntax errors
        token_count: Number of tokens pulled from the scanner
    """

    # Lookahead tokens that close a statement sequence
    SEQUENCE_TERMINATORS = frozenset({
        TokenType.EOF,
        TokenType.END,
        TokenType.ELSE,
        TokenType.UNTIL,
        TokenType.WHILE,
        TokenType.BREAK,
    })

    def __init__(
        self,
        tokens: Union[TinyLexer, Iterable[Token]],
        filename: Optional[str] = None,
        source_lines: Optional[list[str]] = None,
        listing: Optional[TextIO] = None,
    ):
        """
        Initialize the parser.

        Args:
            tokens: A TinyLexer, or any iterable of tokens ending in EOF
            filename: Source filename (taken from the lexer when omitted)
            source_lines: Source lines for diagnostics (taken from the
                          lexer when omitted)
            listing: Text stream that receives each diagnostic as it occurs
        """
        if isinstance(tokens, TinyLexer):
            if filename is None:
                filename = tokens.filename
            if source_lines is None:
                source_lines = tokens.source.splitlines()
            self._tokens: Iterator[Token] = tokens.tokenize()
        else:
            self._tokens = iter(tokens)

        self.filename = filename or "<input>"
        self.source_lines = source_lines or []
        self.listing = listing
        self.diagnostics = DiagnosticCollector()
        self.token_count = 0

        # The single token of lookahead
        self._token: Optional[Token] = None

    @property
    def error(self) -> bool:
        """True once any syntax error has been recorded."""
        return self.diagnostics.has_errors()

    def parse(self) -> SyntaxNode:
        """
        Parse the whole token stream.

        Returns:
            The Program node, even when syntax errors were recorded
        """
        self._advance()
        tree = self._parse_program()

        if self._token.type != TokenType.EOF:
            self._report(TrailingInputError(
                format_token(self._token),
                self._token.location,
                self._get_source_line(self._token.line),
            ))

        logger.debug(
            "parsed %s: %d tokens, %d syntax errors",
            self.filename, self.token_count, self.diagnostics.error_count(),
        )
        return tree

    # =========================================================================
    # Token Access Methods
    # =========================================================================

    def _advance(self) -> None:
        """Replace the lookahead with the next token from the scanner."""
        token = next(self._tokens, None)
        if token is None:
            # Exhausted stream: keep presenting an EOF
            if self._token is None or self._token.type != TokenType.EOF:
                line = self._token.line if self._token else 1
                column = self._token.column if self._token else 1
                self._token = Token(TokenType.EOF, "", line, column, self.filename)
            return
        self.token_count += 1
        self._token = token

    def _check(self, *types: TokenType) -> bool:
        """Check if the lookahead is one of the given types."""
        return self._token.type in types

    def _match(self, expected: TokenType) -> None:
        """
        Consume the lookahead if it has the expected type.

        On a mismatch the error is recorded and the lookahead is left in
        place; the caller carries on as if the token had been present.
        """
        if self._token.type == expected:
            self._advance()
        else:
            self._unexpected(describe_token_type(expected))

    def _unexpected(self, expected: str) -> None:
        """Record the lookahead as an unexpected token."""
        self._report(UnexpectedTokenError(
            format_token(self._token),
            expected=expected,
            location=self._token.location,
            source_line=self._get_source_line(self._token.line),
        ))

    def _report(self, error: TinySyntaxError) -> None:
        """Record a diagnostic and echo it to the listing."""
        self.diagnostics.add(error)
        logger.debug("syntax error: %s", error.message)
        if self.listing is not None:
            self.listing.write(f"{error}\n")

    def _get_source_line(self, line: int) -> Optional[str]:
        """Get source line for error reporting."""
        if 0 < line <= len(self.source_lines):
            return self.source_lines[line - 1]
        return None

    # =========================================================================
    # Program Structure
    # =========================================================================

    def _parse_program(self) -> SyntaxNode:
        """Parse declarations into slot 0 and statements into slot 1."""
        program = new_program_node(self._token.location)
        program.children[0] = self._parse_declarations()
        program.children[1] = self._parse_statement_sequence()
        return program

    def _parse_declarations(self) -> Optional[SyntaxNode]:
        """
        Parse the declaration list, sibling-chained.

        Each declaration after the first must be preceded by ';'. The ';'
        after the last declaration separates the list from the statements,
        so a non-type token after it ends the list without an error.
        """
        head = self._parse_decl_stmt()
        if head is None:
            return None

        tail = head
        while not self._check(TokenType.EOF):
            self._match(TokenType.SEMI)
            decl = self._parse_decl_stmt()
            if decl is None:
                break
            tail.sibling = decl
            tail = decl

        return head

    def _parse_decl_stmt(self) -> Optional[SyntaxNode]:
        """Parse one declaration; None if the lookahead is not a type keyword."""
        if self._token.type not in TYPE_KEYWORDS:
            return None

        decl = new_statement_node(StatementKind.DECLARATION, self._token.location)
        decl.op = self._token.type
        self._match(self._token.type)
        decl.children[1] = self._parse_varlist()
        return decl

    def _parse_varlist(self) -> SyntaxNode:
        """
        Parse 'ID {, ID}' into Identifier nodes chained through slot 0.
        """
        first = self._parse_declared_name()
        current = first
        while self._check(TokenType.COMMA):
            self._match(TokenType.COMMA)
            current.children[0] = self._parse_declared_name()
            current = current.children[0]
        return first

    def _parse_declared_name(self) -> SyntaxNode:
        ident = new_expression_node(ExpressionKind.IDENTIFIER, self._token.location)
        if self._check(TokenType.ID):
            ident.name = self._token.lexeme
        self._match(TokenType.ID)
        return ident

    # =========================================================================
    # Statement Parsing
    # =========================================================================

    def _parse_statement_sequence(self) -> Optional[SyntaxNode]:
        """
        Parse statements separated by ';' until a sequence terminator.

        Statements that failed to parse (None) are skipped. Each new
        statement is linked after the end of the previous statement's
        sibling chain, so it lands after an If's threaded Else.
        """
        head = self._parse_statement()
        tail = head

        while not self._check(*self.SEQUENCE_TERMINATORS):
            self._match(TokenType.SEMI)
            stmt = self._parse_statement()
            if stmt is None:
                continue
            if head is None:
                head = tail = stmt
            else:
                while tail.sibling is not None:
                    tail = tail.sibling
                tail.sibling = stmt
                tail = stmt

        return head

    def _parse_statement(self) -> Optional[SyntaxNode]:
        """Dispatch on the lookahead to one statement rule."""
        token_type = self._token.type

        if token_type == TokenType.IF:
            return self._parse_if_statement()
        if token_type == TokenType.REPEAT:
            return self._parse_repeat_statement()
        if token_type == TokenType.ID:
            return self._parse_assign_statement()
        if token_type == TokenType.READ:
            return self._parse_read_statement()
        if token_type == TokenType.WRITE:
            return self._parse_write_statement()
        if token_type == TokenType.DO:
            return self._parse_while_statement()
        if token_type == TokenType.FOR:
            return self._parse_for_statement()
        if token_type == TokenType.SWITCH:
            return self._parse_switch_statement()

        # No statement starts here; skip the token to guarantee progress
        self._unexpected("statement")
        self._advance()
        return None

    def _parse_if_statement(self) -> SyntaxNode:
        """
        Parse 'if exp then seq [else seq] end'.

        The else part becomes an Else node threaded as the If's sibling.
        """
        stmt = new_statement_node(StatementKind.IF, self._token.location)
        self._match(TokenType.IF)
        stmt.children[0] = self._parse_expression()
        self._match(TokenType.THEN)
        stmt.children[1] = self._parse_statement_sequence()

        if self._check(TokenType.ELSE):
            else_part = new_statement_node(StatementKind.ELSE, self._token.location)
            self._match(TokenType.ELSE)
            else_part.children[0] = self._parse_statement_sequence()
            stmt.sibling = else_part

        self._match(TokenType.END)
        return stmt

    def _parse_repeat_statement(self) -> SyntaxNode:
        """Parse 'repeat seq until exp'."""
        stmt = new_statement_node(StatementKind.REPEAT, self._token.location)
        self._match(TokenType.REPEAT)
        stmt.children[0] = self._parse_statement_sequence()
        self._match(TokenType.UNTIL)
        stmt.children[1] = self._parse_expression()
        return stmt

    def _parse_while_statement(self) -> SyntaxNode:
        """Parse 'do seq while exp', a post-test loop."""
        stmt = new_statement_node(StatementKind.WHILE, self._token.location)
        self._match(TokenType.DO)
        stmt.children[0] = self._parse_statement_sequence()
        self._match(TokenType.WHILE)
        stmt.children[1] = self._parse_expression()
        return stmt

    def _parse_for_statement(self) -> SyntaxNode:
        """Parse 'for ID [:= exp] (to | downto) factor then seq end'."""
        stmt = new_statement_node(StatementKind.FOR, self._token.location)
        self._match(TokenType.FOR)
        stmt.children[0] = self._parse_for_init()
        stmt.children[1] = self._parse_to_statement()
        self._match(TokenType.THEN)
        stmt.children[2] = self._parse_statement_sequence()
        self._match(TokenType.END)
        return stmt

    def _parse_for_init(self) -> SyntaxNode:
        """
        Parse the loop variable and its optional initial value.

        Without ':=' the Assign node names the loop variable and has no
        expression; the loop then starts from the variable's current value.
        """
        init = new_statement_node(StatementKind.ASSIGN, self._token.location)
        if self._check(TokenType.ID):
            init.name = self._token.lexeme
        self._match(TokenType.ID)

        if self._check(TokenType.TO, TokenType.DOWNTO):
            return init

        self._match(TokenType.ASSIGN)
        init.children[0] = self._parse_expression()
        return init

    def _parse_to_statement(self) -> SyntaxNode:
        """Parse '(to | downto) factor' into a ToBound or DownToBound node."""
        if self._check(TokenType.TO):
            bound = new_statement_node(StatementKind.TO_BOUND, self._token.location)
            self._match(TokenType.TO)
        else:
            bound = new_statement_node(StatementKind.DOWNTO_BOUND, self._token.location)
            self._match(TokenType.DOWNTO)
        bound.children[0] = self._parse_factor()
        return bound

    def _parse_switch_statement(self) -> SyntaxNode:
        """Parse 'switch factor case_stmt {case_stmt} [default seq]'."""
        stmt = new_statement_node(StatementKind.SWITCH, self._token.location)
        self._match(TokenType.SWITCH)
        stmt.children[0] = self._parse_factor()
        stmt.children[1] = self._parse_case_chain()
        return stmt

    def _parse_case_chain(self) -> SyntaxNode:
        """
        Parse the Case clauses and optional Default of a switch.

        The first Case is mandatory. Cases are sibling-chained in source
        order and the Default, if present, ends the chain.
        """
        head = self._parse_case_statement()
        tail = head
        while self._check(TokenType.CASE):
            tail.sibling = self._parse_case_statement()
            tail = tail.sibling

        if self._check(TokenType.DEFAULT):
            default = new_statement_node(StatementKind.DEFAULT, self._token.location)
            self._match(TokenType.DEFAULT)
            default.children[0] = self._parse_statement_sequence()
            tail.sibling = default

        return head

    def _parse_case_statement(self) -> SyntaxNode:
        """Parse 'case factor seq break'."""
        case = new_statement_node(StatementKind.CASE, self._token.location)
        self._match(TokenType.CASE)
        case.children[0] = self._parse_factor()
        case.children[1] = self._parse_statement_sequence()
        self._match(TokenType.BREAK)
        return case

    def _parse_assign_statement(self) -> SyntaxNode:
        """Parse 'ID := exp'."""
        stmt = new_statement_node(StatementKind.ASSIGN, self._token.location)
        if self._check(TokenType.ID):
            stmt.name = self._token.lexeme
        self._match(TokenType.ID)
        self._match(TokenType.ASSIGN)
        stmt.children[0] = self._parse_expression()
        return stmt

    def _parse_read_statement(self) -> SyntaxNode:
        """Parse 'read ID'."""
        stmt = new_statement_node(StatementKind.READ, self._token.location)
        self._match(TokenType.READ)
        if self._check(TokenType.ID):
            stmt.name = self._token.lexeme
        self._match(TokenType.ID)
        return stmt

    def _parse_write_statement(self) -> SyntaxNode:
        """Parse 'write exp'."""
        stmt = new_statement_node(StatementKind.WRITE, self._token.location)
        self._match(TokenType.WRITE)
        stmt.children[0] = self._parse_expression()
        return stmt

    # =========================================================================
    # Expression Parsing (Operator Precedence)
    # =========================================================================

    def _parse_expression(self) -> Optional[SyntaxNode]:
        """
        Parse 'simple_exp [relop simple_exp]'.

        Relational operators do not chain: after one comparison the
        expression ends and any further relop is left to the caller.
        """
        left = self._parse_simple_expression()
        if not self._check(*RELATIONAL_OPERATORS):
            return left

        comparison = new_expression_node(ExpressionKind.BINARY_OP, self._token.location)
        comparison.op = self._token.type
        comparison.children[0] = left
        self._match(self._token.type)
        comparison.children[1] = self._parse_simple_expression()
        return comparison

    def _parse_simple_expression(self) -> Optional[SyntaxNode]:
        """Parse additive expression (+ -)."""
        return self._parse_binary(
            self._parse_term,
            (TokenType.PLUS, TokenType.MINUS),
        )

    def _parse_term(self) -> Optional[SyntaxNode]:
        """Parse multiplicative expression (* /)."""
        return self._parse_binary(
            self._parse_factor,
            (TokenType.TIMES, TokenType.OVER),
        )

    def _parse_binary(
        self,
        operand_parser: Callable[[], Optional[SyntaxNode]],
        operators: tuple[TokenType, ...],
    ) -> Optional[SyntaxNode]:
        """
        Generic left-associative binary expression parser.

        Args:
            operand_parser: Function to parse operands
            operators: Token types accepted at this precedence level
        """
        expr = operand_parser()

        while self._check(*operators):
            op_node = new_expression_node(ExpressionKind.BINARY_OP, self._token.location)
            op_node.op = self._token.type
            op_node.children[0] = expr
            self._match(self._token.type)
            op_node.children[1] = operand_parser()
            expr = op_node

        return expr

    def _parse_factor(self) -> Optional[SyntaxNode]:
        """Parse a number, identifier, string or parenthesized expression."""
        token = self._token

        if token.type == TokenType.NUM:
            node = new_expression_node(ExpressionKind.CONSTANT, token.location)
            node.value = int(token.lexeme)
            self._match(TokenType.NUM)
            return node

        if token.type == TokenType.ID:
            node = new_expression_node(ExpressionKind.IDENTIFIER, token.location)
            node.name = token.lexeme
            self._match(TokenType.ID)
            return node

        if token.type == TokenType.STR:
            node = new_expression_node(ExpressionKind.STRING_LITERAL, token.location)
            node.name = token.lexeme
            self._match(TokenType.STR)
            return node

        if token.type == TokenType.LPAREN:
            self._match(TokenType.LPAREN)
            node = self._parse_expression()
            self._match(TokenType.RPAREN)
            return node

        # No factor starts here; skip the token to guarantee progress
        self._unexpected("expression")
        self._advance()
        return None


# =============================================================================
# Convenience Functions
# =============================================================================

@dataclass
class ParseResult:
    """
    Outcome of parsing one source text.

    Attributes:
        tree: The Program node (always present)
        diagnostics: Syntax errors recorded during the parse
        token_count: Number of tokens consumed from the scanner
    """
    tree: SyntaxNode
    diagnostics: list[TinySyntaxError] = field(default_factory=list)
    token_count: int = 0

    @property
    def error(self) -> bool:
        """True if any syntax error was recorded."""
        return len(self.diagnostics) > 0


def parse_source(
    source: str,
    filename: str = "<input>",
    listing: Optional[TextIO] = None,
) -> ParseResult:
    """
    Parse TINY source code.

    This is a convenience function that combines scanning and parsing.

    Args:
        source: The TINY source code
        filename: Source filename for error messages
        listing: Optional text stream receiving diagnostics as they occur

    Returns:
        ParseResult with the tree and any syntax errors
    """
    parser = TinyParser(TinyLexer(source, filename), listing=listing)
    tree = parser.parse()
    return ParseResult(
        tree=tree,
        diagnostics=list(parser.diagnostics.errors),
        token_count=parser.token_count,
    )
