# =============================================================================
# test_lexer.py - Lexer Unit Tests
# =============================================================================
# Tests for the P4 subset lexer/tokenizer.
#
# Test coverage includes:
#   - Keywords, identifiers and punctuation
#   - Whitespace handling and optional comments
#   - Source positions (line, column, offset) on every token
#   - Lazy token generation
#   - Error conditions (invalid characters, unterminated comments)
# =============================================================================

import pytest
from p4lite.errors import P4Error, SourceLocation
from p4lite.frontend.lexer import P4Lexer, P4TokenType, split_source_lines
from p4lite.frontend.errors import (
    InvalidCharacterError,
    LexError,
    P4SyntaxError,
    UnterminatedCommentError,
)


# =============================================================================
# Helper Function
# =============================================================================

def tokenize(source: str, allow_comments: bool = False) -> list:
    """Tokenize and drop the trailing EOF token."""
    lexer = P4Lexer(source, "<test>", allow_comments=allow_comments)
    return [t for t in lexer.tokenize() if t.type != P4TokenType.EOF]


def types(source: str, allow_comments: bool = False) -> list:
    return [t.type for t in tokenize(source, allow_comments)]


# =============================================================================
# Basic Token Recognition Tests
# =============================================================================

class TestBasicTokens:
    """Test token recognition for simple inputs."""

    def test_empty_source(self):
        """Empty source produces only the EOF token."""
        tokens = list(P4Lexer("", "<test>").tokenize())
        assert len(tokens) == 1
        assert tokens[0].type == P4TokenType.EOF
        assert tokens[0].value is None

    def test_whitespace_only(self):
        """All ASCII whitespace is skipped."""
        assert tokenize(" \t\r\n\f\v  \n") == []

    def test_keywords(self):
        """Every keyword gets its own token type."""
        source = "control apply in out inout true false if else"
        assert types(source) == [
            P4TokenType.CONTROL,
            P4TokenType.APPLY,
            P4TokenType.IN,
            P4TokenType.OUT,
            P4TokenType.INOUT,
            P4TokenType.TRUE,
            P4TokenType.FALSE,
            P4TokenType.IF,
            P4TokenType.ELSE,
        ]

    def test_identifier(self):
        tokens = tokenize("ingress")
        assert len(tokens) == 1
        assert tokens[0].type == P4TokenType.IDENTIFIER
        assert tokens[0].value == "ingress"

    def test_identifier_with_underscore_and_digits(self):
        tokens = tokenize("_hdr_v4 x1")
        assert [t.value for t in tokens] == ["_hdr_v4", "x1"]
        assert all(t.type == P4TokenType.IDENTIFIER for t in tokens)

    def test_keyword_prefix_is_identifier(self):
        """Identifiers that merely start with a keyword are not keywords."""
        assert types("controller input iffy") == [P4TokenType.IDENTIFIER] * 3

    def test_keywords_are_case_sensitive(self):
        assert types("If TRUE Control") == [P4TokenType.IDENTIFIER] * 3

    def test_punctuation(self):
        assert types("( ) { } , ; = || && !") == [
            P4TokenType.LPAREN,
            P4TokenType.RPAREN,
            P4TokenType.LBRACE,
            P4TokenType.RBRACE,
            P4TokenType.COMMA,
            P4TokenType.SEMICOLON,
            P4TokenType.ASSIGN,
            P4TokenType.OR,
            P4TokenType.AND,
            P4TokenType.NOT,
        ]

    def test_tokens_without_spaces(self):
        """Operators need no surrounding whitespace."""
        tokens = tokenize("a&&!b||c")
        assert [t.value for t in tokens] == ["a", "&&", "!", "b", "||", "c"]

    def test_token_repr(self):
        tokens = list(P4Lexer("a", "<test>").tokenize())
        assert repr(tokens[0]) == "Token(IDENTIFIER, 'a', 1:1)"
        assert repr(tokens[1]) == "Token(EOF, 1:2)"


# =============================================================================
# Position Tracking Tests
# =============================================================================

class TestPositions:
    """Every token records where it starts."""

    def test_first_token_position(self):
        token = tokenize("control")[0]
        assert (token.line, token.column, token.offset) == (1, 1, 0)

    def test_position_after_newline(self):
        tokens = tokenize("control c\n  apply")
        apply_token = tokens[2]
        assert apply_token.type == P4TokenType.APPLY
        assert apply_token.line == 2
        assert apply_token.column == 3
        assert apply_token.offset == 12

    def test_two_character_operator_position(self):
        tokens = tokenize("a || b")
        assert tokens[1].column == 3
        assert tokens[2].column == 6

    def test_eof_position(self):
        tokens = list(P4Lexer("a\nbc", "<test>").tokenize())
        eof = tokens[-1]
        assert eof.type == P4TokenType.EOF
        assert (eof.line, eof.column, eof.offset) == (2, 3, 4)

    @pytest.mark.parametrize("separator", ["\f", "\v", "\r"])
    def test_only_newline_starts_a_line(self, separator):
        tokens = tokenize(f"a{separator}b\nc")
        assert [t.line for t in tokens] == [1, 1, 2]
        assert tokens[1].column == 3

    def test_split_source_lines(self):
        source = "a\r\nb\fc\vd\re\nf"
        assert split_source_lines(source) == ["a", "b\fc\vd\re", "f"]

    def test_location_property(self):
        token = tokenize("\n   x")[0]
        assert token.location == SourceLocation("<test>", 2, 4)
        assert token.location.offset == 4
        assert str(token.location) == "<test>:2:4"


# =============================================================================
# Laziness Tests
# =============================================================================

class TestLazyTokenization:
    """tokenize() is a generator that scans on demand."""

    def test_tokens_before_error_are_produced(self):
        stream = P4Lexer("a $", "<test>").tokenize()
        assert next(stream).value == "a"
        with pytest.raises(InvalidCharacterError):
            next(stream)

    def test_single_eof(self):
        tokens = list(P4Lexer("a b", "<test>").tokenize())
        assert [t.type for t in tokens].count(P4TokenType.EOF) == 1


# =============================================================================
# Comment Tests
# =============================================================================

class TestComments:
    """Comments are only recognized when enabled."""

    def test_comments_rejected_by_default(self):
        with pytest.raises(InvalidCharacterError) as exc_info:
            tokenize("a // note")
        assert exc_info.value.char == "/"

    def test_line_comment(self):
        tokens = tokenize("a // note\nb", allow_comments=True)
        assert [t.value for t in tokens] == ["a", "b"]

    def test_block_comment(self):
        tokens = tokenize("a /* one\ntwo */ b", allow_comments=True)
        assert [t.value for t in tokens] == ["a", "b"]
        assert tokens[1].line == 2

    def test_comment_at_end(self):
        assert tokenize("a /* done */", allow_comments=True)[-1].value == "a"

    def test_unterminated_block_comment(self):
        with pytest.raises(UnterminatedCommentError) as exc_info:
            tokenize("a /* never closed", allow_comments=True)
        assert exc_info.value.location.column == 3
        assert "unterminated block comment" in str(exc_info.value)

    def test_single_slash_is_invalid(self):
        with pytest.raises(InvalidCharacterError):
            tokenize("a / b", allow_comments=True)


# =============================================================================
# Error Tests
# =============================================================================

class TestLexErrors:
    """Characters that start no token raise LexError."""

    def test_lex_error_alias(self):
        assert LexError is InvalidCharacterError

    def test_error_hierarchy(self):
        with pytest.raises(LexError) as exc_info:
            tokenize("#")
        assert isinstance(exc_info.value, P4SyntaxError)
        assert isinstance(exc_info.value, P4Error)

    def test_digit_cannot_start_token(self):
        with pytest.raises(LexError) as exc_info:
            tokenize("control 1foo() { apply {} }")
        error = exc_info.value
        assert error.char == "1"
        assert error.position.line == 1
        assert error.position.column == 9
        assert error.position.offset == 8

    def test_error_message_has_caret(self):
        with pytest.raises(LexError) as exc_info:
            tokenize("control 1foo() { apply {} }")
        lines = str(exc_info.value).splitlines()
        assert lines[0] == "<test>:1:9: error: invalid character '1' (0x31)"
        assert lines[1] == "    control 1foo() { apply {} }"
        assert lines[2] == " " * 12 + "^"

    def test_error_on_second_line(self):
        with pytest.raises(LexError) as exc_info:
            tokenize("a\n  b @")
        error = exc_info.value
        assert (error.location.line, error.location.column) == (2, 5)
        assert error.source_line == "  b @"

    def test_error_source_line_drops_carriage_return(self):
        with pytest.raises(LexError) as exc_info:
            tokenize("a\r\n  b @\r\nc")
        error = exc_info.value
        assert (error.location.line, error.location.column) == (2, 5)
        assert error.source_line == "  b @"
        assert "\r" not in str(error)

    @pytest.mark.parametrize("char", ["|", "&"])
    def test_single_logical_operator_char(self, char):
        """A lone '|' or '&' is not a token; the hint suggests doubling it."""
        with pytest.raises(LexError) as exc_info:
            tokenize(f"a {char} b")
        assert exc_info.value.char == char
        assert exc_info.value.location.column == 3
        assert f"did you mean '{char}{char}'?" in str(exc_info.value)

    def test_non_ascii_identifier(self):
        with pytest.raises(LexError) as exc_info:
            tokenize("café")
        assert exc_info.value.char == "é"
        assert exc_info.value.location.column == 4
