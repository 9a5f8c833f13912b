"""
TINY Lexer (Scanner)
====================

This module implements the scanner for the extended TINY language.
It converts source text into the token stream consumed by the parser.

Token Categories
----------------
- Reserved words: if then else end repeat until read write do while
  for to downto switch case break default int string bool
- Identifiers: a letter or underscore, then letters, digits, underscores
- Numbers: decimal digit runs
- Strings: 'single' or "double" quoted, no escapes, single line
- Symbols: := = < <= > >= + - * / ( ) ; ,

Comments
--------
Braces delimit comments and may span lines: { this is a comment }

Malformed Input
---------------
The scanner is total: it never raises. An illegal character, an
unterminated comment or an unterminated string becomes an ERROR token
carrying the offending text, and the parser reports it as an unexpected
token like any other.

Example Usage
-------------
>>> from tinyc.frontend.lexer import TinyLexer
>>> for token in TinyLexer("read x; write x + 1").tokenize():
...     print(token)
Token(READ, 'read', 1:1)
Token(ID, 'x', 1:6)
Token(SEMI, ';', 1:7)
Token(WRITE, 'write', 1:9)
Token(ID, 'x', 1:15)
Token(PLUS, '+', 1:17)
Token(NUM, '1', 1:19)
Token(EOF, 1:20)
"""

import logging
import string
from dataclasses import dataclass
from enum import Enum, auto
from typing import Iterator, Optional

from tinyc.errors import SourceLocation

logger = logging.getLogger(__name__)


# =============================================================================
# Token Type Enumeration
# =============================================================================

class TokenType(Enum):
    """
    Lexical categories of the extended TINY language.

    Reserved words get their own categories so that the parser can
    dispatch on the token type alone.
    """

    # === Bookkeeping ===
    EOF = auto()            # End of input
    ERROR = auto()          # Malformed input

    # === Reserved Words - Statements ===
    IF = auto()
    THEN = auto()
    ELSE = auto()
    END = auto()
    REPEAT = auto()
    UNTIL = auto()
    READ = auto()
    WRITE = auto()
    DO = auto()
    WHILE = auto()
    FOR = auto()
    TO = auto()
    DOWNTO = auto()
    SWITCH = auto()
    CASE = auto()
    BREAK = auto()
    DEFAULT = auto()

    # === Reserved Words - Types ===
    INT = auto()
    STRING = auto()
    BOOL = auto()

    # === Multi-character Tokens ===
    ID = auto()             # Identifier
    NUM = auto()            # Decimal number
    STR = auto()            # String literal

    # === Special Symbols ===
    ASSIGN = auto()         # :=
    EQ = auto()             # =
    LT = auto()             # <
    LTE = auto()            # <=
    GT = auto()             # >
    GTE = auto()            # >=
    PLUS = auto()           # +
    MINUS = auto()          # -
    TIMES = auto()          # *
    OVER = auto()           # /
    LPAREN = auto()         # (
    RPAREN = auto()         # )
    SEMI = auto()           # ;
    COMMA = auto()          # ,


# =============================================================================
# Keyword and Symbol Tables
# =============================================================================

KEYWORDS: dict[str, TokenType] = {
    "if": TokenType.IF,
    "then": TokenType.THEN,
    "else": TokenType.ELSE,
    "end": TokenType.END,
    "repeat": TokenType.REPEAT,
    "until": TokenType.UNTIL,
    "read": TokenType.READ,
    "write": TokenType.WRITE,
    "do": TokenType.DO,
    "while": TokenType.WHILE,
    "for": TokenType.FOR,
    "to": TokenType.TO,
    "downto": TokenType.DOWNTO,
    "switch": TokenType.SWITCH,
    "case": TokenType.CASE,
    "break": TokenType.BREAK,
    "default": TokenType.DEFAULT,
    "int": TokenType.INT,
    "string": TokenType.STRING,
    "bool": TokenType.BOOL,
}

# Source spelling of each special symbol
SYMBOLS: dict[TokenType, str] = {
    TokenType.ASSIGN: ":=",
    TokenType.EQ: "=",
    TokenType.LT: "<",
    TokenType.LTE: "<=",
    TokenType.GT: ">",
    TokenType.GTE: ">=",
    TokenType.PLUS: "+",
    TokenType.MINUS: "-",
    TokenType.TIMES: "*",
    TokenType.OVER: "/",
    TokenType.LPAREN: "(",
    TokenType.RPAREN: ")",
    TokenType.SEMI: ";",
    TokenType.COMMA: ",",
}

TYPE_KEYWORDS = frozenset({TokenType.INT, TokenType.STRING, TokenType.BOOL})

RELATIONAL_OPERATORS = frozenset({
    TokenType.LT,
    TokenType.EQ,
    TokenType.LTE,
    TokenType.GT,
    TokenType.GTE,
})


# =============================================================================
# Token Data Class
# =============================================================================

@dataclass(frozen=True)
class Token:
    """
    A single token of TINY source.

    Attributes:
        type: The TokenType classification
        lexeme: The source text (string literal contents without quotes)
        line: Line number in source (1-indexed)
        column: Column number in source (1-indexed)
        filename: Name of the source file
    """
    type: TokenType
    lexeme: str
    line: int
    column: int
    filename: str = "<input>"

    def __repr__(self) -> str:
        if self.type == TokenType.EOF:
            return f"Token(EOF, {self.line}:{self.column})"
        return f"Token({self.type.name}, {self.lexeme!r}, {self.line}:{self.column})"

    @property
    def location(self) -> SourceLocation:
        """Return a SourceLocation for error reporting."""
        return SourceLocation(self.filename, self.line, self.column)

    def is_reserved_word(self) -> bool:
        """Return True if this token is a reserved word."""
        return self.type in KEYWORDS.values()


def format_token(token: Token) -> str:
    """
    Render a token for listings and diagnostics.

    Reserved words print as 'reserved word: if', symbols as their
    spelling, and the multi-character tokens with their text:

        >>> format_token(Token(TokenType.NUM, "12", 1, 1))
        'NUM, val= 12'
    """
    if token.is_reserved_word():
        return f"reserved word: {token.lexeme}"
    if token.type in SYMBOLS:
        return SYMBOLS[token.type]
    if token.type == TokenType.NUM:
        return f"NUM, val= {token.lexeme}"
    if token.type == TokenType.ID:
        return f"ID, name= {token.lexeme}"
    if token.type == TokenType.STR:
        return f"STR, val= {token.lexeme}"
    if token.type == TokenType.ERROR:
        return f"ERROR: {token.lexeme}"
    if token.type == TokenType.EOF:
        return "EOF"
    return f"Unknown token: {token.type.name}"


# =============================================================================
# Lexer Implementation
# =============================================================================

class TinyLexer:
    """
    Tokenizes extended TINY source code.

    Tokens are produced on demand by next_token(), which is how the
    parser pulls its single token of lookahead. tokenize() is a
    convenience generator over the whole input.

    After every next_token() call the 'lineno' and 'lexeme' registers
    describe the token just scanned.

    Usage:
        lexer = TinyLexer(source_text, filename)
        tokens = list(lexer.tokenize())

    Attributes:
        source: The source code being tokenized
        filename: Name of the source file (for error reporting)
    """

    IDENT_START = string.ascii_letters + "_"
    IDENT_CHARS = string.ascii_letters + string.digits + "_"
    WHITESPACE = " \t\r\n\f\v"
    QUOTES = "'\""

    def __init__(self, source: str, filename: str = "<input>"):
        self.source = source
        self.filename = filename

        self._pos = 0
        self._line = 1
        self._column = 1

        # Registers describing the most recently scanned token
        self.lineno = 0
        self.lexeme = ""

    def tokenize(self) -> Iterator[Token]:
        """
        Generate every token of the source, ending with one EOF token.

        Yields:
            Token objects in source order
        """
        while True:
            token = self.next_token()
            yield token
            if token.type == TokenType.EOF:
                return

    def next_token(self) -> Token:
        """
        Scan and return the next token.

        Once the input is exhausted every call returns an EOF token.
        """
        token = self._scan()
        self.lineno = token.line
        self.lexeme = token.lexeme
        if token.type == TokenType.ERROR:
            logger.debug("%s: malformed input %r", token.location, token.lexeme)
        return token

    # =========================================================================
    # Character Access Methods
    # =========================================================================

    def _at_end(self) -> bool:
        return self._pos >= len(self.source)

    def _peek(self, offset: int = 0) -> str:
        """Look at the character at position + offset; '' past the end."""
        pos = self._pos + offset
        if pos >= len(self.source):
            return ""
        return self.source[pos]

    def _advance(self) -> str:
        """Consume one character, keeping line and column current."""
        if self._at_end():
            return ""

        char = self.source[self._pos]
        self._pos += 1

        if char == "\n":
            self._line += 1
            self._column = 1
        else:
            self._column += 1

        return char

    def _make_token(
        self,
        token_type: TokenType,
        lexeme: str,
        start_line: int,
        start_column: int,
    ) -> Token:
        return Token(
            type=token_type,
            lexeme=lexeme,
            line=start_line,
            column=start_column,
            filename=self.filename,
        )

    # =========================================================================
    # Token Scanning
    # =========================================================================

    def _scan(self) -> Token:
        """Skip whitespace and comments, then scan one token."""
        while True:
            char = self._peek()

            if char and char in self.WHITESPACE:
                self._advance()
                continue

            if char == "{":
                error = self._skip_comment()
                if error is not None:
                    return error
                continue

            break

        start_line = self._line
        start_column = self._column

        if self._at_end():
            return self._make_token(TokenType.EOF, "", start_line, start_column)

        char = self._peek()

        if char in self.IDENT_START:
            return self._scan_identifier(start_line, start_column)

        if char in string.digits:
            return self._scan_number(start_line, start_column)

        if char in self.QUOTES:
            return self._scan_string(start_line, start_column)

        return self._scan_symbol(start_line, start_column)

    def _skip_comment(self) -> Optional[Token]:
        """
        Skip a { ... } comment.

        Returns:
            None on success, or an ERROR token if the comment never closes
        """
        start_line = self._line
        start_column = self._column
        self._advance()  # consume {

        while not self._at_end():
            if self._advance() == "}":
                return None

        return self._make_token(TokenType.ERROR, "{", start_line, start_column)

    def _scan_identifier(self, start_line: int, start_column: int) -> Token:
        """Scan an identifier or reserved word."""
        chars = []
        while self._peek() and self._peek() in self.IDENT_CHARS:
            chars.append(self._advance())

        name = "".join(chars)
        token_type = KEYWORDS.get(name, TokenType.ID)
        return self._make_token(token_type, name, start_line, start_column)

    def _scan_number(self, start_line: int, start_column: int) -> Token:
        """Scan a decimal number."""
        chars = []
        while self._peek() and self._peek() in string.digits:
            chars.append(self._advance())

        return self._make_token(TokenType.NUM, "".join(chars), start_line, start_column)

    def _scan_string(self, start_line: int, start_column: int) -> Token:
        """
        Scan a quoted string literal.

        The closing quote must match the opening one and appear on the
        same line; otherwise the partial text becomes an ERROR token.
        """
        quote = self._advance()

        chars = []
        while not self._at_end() and self._peek() != "\n":
            char = self._advance()
            if char == quote:
                return self._make_token(
                    TokenType.STR, "".join(chars), start_line, start_column
                )
            chars.append(char)

        return self._make_token(
            TokenType.ERROR, quote + "".join(chars), start_line, start_column
        )

    def _scan_symbol(self, start_line: int, start_column: int) -> Token:
        """Scan a special symbol; anything unrecognized is an ERROR token."""
        char = self._advance()

        if char == ":":
            if self._peek() == "=":
                self._advance()
                return self._make_token(TokenType.ASSIGN, ":=", start_line, start_column)
            return self._make_token(TokenType.ERROR, ":", start_line, start_column)

        if char == "<":
            if self._peek() == "=":
                self._advance()
                return self._make_token(TokenType.LTE, "<=", start_line, start_column)
            return self._make_token(TokenType.LT, "<", start_line, start_column)

        if char == ">":
            if self._peek() == "=":
                self._advance()
                return self._make_token(TokenType.GTE, ">=", start_line, start_column)
            return self._make_token(TokenType.GT, ">", start_line, start_column)

        single_tokens = {
            "=": TokenType.EQ,
            "+": TokenType.PLUS,
            "-": TokenType.MINUS,
            "*": TokenType.TIMES,
            "/": TokenType.OVER,
            "(": TokenType.LPAREN,
            ")": TokenType.RPAREN,
            ";": TokenType.SEMI,
            ",": TokenType.COMMA,
        }

        if char in single_tokens:
            return self._make_token(single_tokens[char], char, start_line, start_column)

        return self._make_token(TokenType.ERROR, char, start_line, start_column)
