# =============================================================================
# test_lexer.py - Lexer Unit Tests
# =============================================================================
# Tests for the extended TINY scanner.
#
# Test coverage includes:
#   - Reserved words, identifiers, numbers and both string quote styles
#   - All special symbols, including the two-character ones
#   - Brace comments, single- and multi-line
#   - Line and column tracking
#   - Malformed input becoming ERROR tokens (the scanner never raises)
#   - format_token rendering used by listings and diagnostics
# =============================================================================

import pytest
from tinyc.frontend.lexer import (
    KEYWORDS,
    TinyLexer,
    Token,
    TokenType,
    format_token,
)


# =============================================================================
# Helper Function
# =============================================================================

def tokenize(source: str) -> list:
    """
    Helper to tokenize and drop the trailing EOF token.
    Tests are focused on meaningful tokens, not the terminator.
    """
    tokens = list(TinyLexer(source, "<test>").tokenize())
    assert tokens[-1].type == TokenType.EOF
    return tokens[:-1]


def types(source: str) -> list:
    """Helper returning only the token types."""
    return [t.type for t in tokenize(source)]


# =============================================================================
# Basic Token Recognition Tests
# =============================================================================

class TestBasicTokens:
    """Test basic token recognition for simple inputs."""

    def test_empty_source(self):
        """Empty source produces only EOF."""
        tokens = list(TinyLexer("").tokenize())
        assert len(tokens) == 1
        assert tokens[0].type == TokenType.EOF

    def test_whitespace_only(self):
        """Whitespace of every kind is skipped."""
        assert tokenize("  \t\n\r\n  ") == []

    def test_identifier(self):
        """Simple identifier."""
        tokens = tokenize("count")
        assert len(tokens) == 1
        assert tokens[0].type == TokenType.ID
        assert tokens[0].lexeme == "count"

    def test_identifier_with_digits_and_underscore(self):
        """Identifiers may contain digits and underscores after the first letter."""
        tokens = tokenize("loop_1 _tmp")
        assert [t.lexeme for t in tokens] == ["loop_1", "_tmp"]
        assert all(t.type == TokenType.ID for t in tokens)

    def test_number(self):
        """Decimal digit runs become NUM tokens."""
        tokens = tokenize("12345")
        assert tokens[0].type == TokenType.NUM
        assert tokens[0].lexeme == "12345"

    def test_number_then_identifier(self):
        """A digit run ends at the first letter."""
        assert types("12ab") == [TokenType.NUM, TokenType.ID]

    @pytest.mark.parametrize("word", sorted(KEYWORDS))
    def test_reserved_words(self, word):
        """Every reserved word gets its own token type."""
        tokens = tokenize(word)
        assert tokens[0].type == KEYWORDS[word]
        assert tokens[0].is_reserved_word()

    def test_reserved_words_are_case_sensitive(self):
        """Uppercase spellings of reserved words are identifiers."""
        assert types("IF Then") == [TokenType.ID, TokenType.ID]

    def test_reserved_word_prefix_is_identifier(self):
        """An identifier that starts with a reserved word stays an identifier."""
        tokens = tokenize("ifx readme")
        assert [t.type for t in tokens] == [TokenType.ID, TokenType.ID]


# =============================================================================
# String Literal Tests
# =============================================================================

class TestStrings:
    """Test quoted string literals."""

    def test_double_quoted(self):
        """Double-quoted string; lexeme excludes the quotes."""
        tokens = tokenize('"hello world"')
        assert tokens[0].type == TokenType.STR
        assert tokens[0].lexeme == "hello world"

    def test_single_quoted(self):
        """Single quotes delimit strings too."""
        tokens = tokenize("'abc'")
        assert tokens[0].type == TokenType.STR
        assert tokens[0].lexeme == "abc"

    def test_other_quote_inside(self):
        """The other quote character is ordinary text inside a string."""
        tokens = tokenize("\"it's\"")
        assert tokens[0].lexeme == "it's"

    def test_empty_string(self):
        """Empty string literal."""
        tokens = tokenize('""')
        assert tokens[0].type == TokenType.STR
        assert tokens[0].lexeme == ""

    def test_unterminated_string(self):
        """An unterminated string becomes an ERROR token with its text."""
        tokens = tokenize('"abc')
        assert tokens[0].type == TokenType.ERROR
        assert tokens[0].lexeme == '"abc'

    def test_string_may_not_span_lines(self):
        """A newline ends an unterminated string; scanning resumes after it."""
        tokens = tokenize('"abc\nx')
        assert tokens[0].type == TokenType.ERROR
        assert tokens[1].type == TokenType.ID
        assert tokens[1].line == 2


# =============================================================================
# Symbol Tests
# =============================================================================

class TestSymbols:
    """Test special symbols."""

    @pytest.mark.parametrize("text,expected", [
        (":=", TokenType.ASSIGN),
        ("=", TokenType.EQ),
        ("<", TokenType.LT),
        ("<=", TokenType.LTE),
        (">", TokenType.GT),
        (">=", TokenType.GTE),
        ("+", TokenType.PLUS),
        ("-", TokenType.MINUS),
        ("*", TokenType.TIMES),
        ("/", TokenType.OVER),
        ("(", TokenType.LPAREN),
        (")", TokenType.RPAREN),
        (";", TokenType.SEMI),
        (",", TokenType.COMMA),
    ])
    def test_symbol(self, text, expected):
        """Each symbol maps to its token type."""
        tokens = tokenize(text)
        assert len(tokens) == 1
        assert tokens[0].type == expected
        assert tokens[0].lexeme == text

    def test_adjacent_symbols(self):
        """Symbols need no separating whitespace."""
        assert types("x:=(a+b)*2;") == [
            TokenType.ID, TokenType.ASSIGN, TokenType.LPAREN, TokenType.ID,
            TokenType.PLUS, TokenType.ID, TokenType.RPAREN, TokenType.TIMES,
            TokenType.NUM, TokenType.SEMI,
        ]

    def test_less_than_then_equals_with_space(self):
        """'< =' is two tokens."""
        assert types("< =") == [TokenType.LT, TokenType.EQ]

    def test_lone_colon_is_error(self):
        """A colon not followed by '=' is malformed."""
        tokens = tokenize("x : y")
        assert tokens[1].type == TokenType.ERROR
        assert tokens[1].lexeme == ":"
        assert tokens[2].type == TokenType.ID

    def test_illegal_character(self):
        """Characters outside the language become ERROR tokens."""
        tokens = tokenize("a @ b")
        assert [t.type for t in tokens] == [TokenType.ID, TokenType.ERROR, TokenType.ID]
        assert tokens[1].lexeme == "@"


# =============================================================================
# Comment Tests
# =============================================================================

class TestComments:
    """Test brace comments."""

    def test_comment_skipped(self):
        """A comment produces no tokens."""
        assert types("{ a comment } x") == [TokenType.ID]

    def test_multiline_comment(self):
        """Comments may span lines; line numbers keep counting."""
        tokens = tokenize("{ first\nsecond\n} x")
        assert tokens[0].lexeme == "x"
        assert tokens[0].line == 3

    def test_comment_between_tokens(self):
        """Comments separate tokens like whitespace."""
        assert types("x{c}:=1") == [TokenType.ID, TokenType.ASSIGN, TokenType.NUM]

    def test_unterminated_comment(self):
        """An unterminated comment becomes an ERROR token, then EOF."""
        tokens = list(TinyLexer("x { never closed").tokenize())
        assert [t.type for t in tokens] == [TokenType.ID, TokenType.ERROR, TokenType.EOF]
        assert tokens[1].lexeme == "{"


# =============================================================================
# Position Tracking Tests
# =============================================================================

class TestPositions:
    """Test line and column tracking."""

    def test_columns(self):
        """Columns are 1-indexed and point at the token start."""
        tokens = list(TinyLexer("read x; write x + 1").tokenize())
        positions = [(t.line, t.column) for t in tokens]
        assert positions == [
            (1, 1), (1, 6), (1, 7), (1, 9), (1, 15), (1, 17), (1, 19), (1, 20),
        ]

    def test_lines(self):
        """Line numbers advance on newlines and columns reset."""
        tokens = tokenize("read x;\n  write x")
        assert tokens[3].type == TokenType.WRITE
        assert (tokens[3].line, tokens[3].column) == (2, 3)

    def test_location_carries_filename(self):
        """Token locations name the source file."""
        token = next(TinyLexer("x", "prog.tny").tokenize())
        assert str(token.location) == "prog.tny:1:1"

    def test_registers_follow_last_token(self):
        """lineno and lexeme describe the most recently scanned token."""
        lexer = TinyLexer("a\n\nbeta")
        lexer.next_token()
        assert (lexer.lineno, lexer.lexeme) == (1, "a")
        lexer.next_token()
        assert (lexer.lineno, lexer.lexeme) == (3, "beta")

    def test_eof_repeats(self):
        """After the input is exhausted next_token keeps returning EOF."""
        lexer = TinyLexer("x")
        lexer.next_token()
        assert lexer.next_token().type == TokenType.EOF
        assert lexer.next_token().type == TokenType.EOF


# =============================================================================
# Token Formatting Tests
# =============================================================================

class TestFormatToken:
    """Test the listing format of tokens."""

    @pytest.mark.parametrize("token_type,lexeme,expected", [
        (TokenType.IF, "if", "reserved word: if"),
        (TokenType.INT, "int", "reserved word: int"),
        (TokenType.ASSIGN, ":=", ":="),
        (TokenType.LTE, "<=", "<="),
        (TokenType.NUM, "12", "NUM, val= 12"),
        (TokenType.ID, "x", "ID, name= x"),
        (TokenType.STR, "hi", "STR, val= hi"),
        (TokenType.ERROR, "@", "ERROR: @"),
        (TokenType.EOF, "", "EOF"),
    ])
    def test_format(self, token_type, lexeme, expected):
        """Each token category renders in its listing form."""
        assert format_token(Token(token_type, lexeme, 1, 1)) == expected

    def test_repr(self):
        """Token repr shows type, lexeme and position."""
        token = Token(TokenType.ID, "x", 2, 5)
        assert repr(token) == "Token(ID, 'x', 2:5)"
        assert repr(Token(TokenType.EOF, "", 3, 1)) == "Token(EOF, 3:1)"
