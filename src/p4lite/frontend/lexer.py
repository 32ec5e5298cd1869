"""
P4 Lexer (Tokenizer)
====================

This module implements a lexer for the P4 control-block subset.
It converts source text into a stream of tokens for the parser.

Token Categories
----------------
- Keywords: control, apply, in, out, inout, true, false, if, else
- Identifiers: [a-zA-Z_][a-zA-Z0-9_]*
- Operators: ||, &&, !, =
- Delimiters: (, ), {, }, ,, ;

Whitespace
----------
ASCII whitespace (space, tab, CR, LF, FF, VT) separates tokens and is
discarded. The subset has no comment syntax; with allow_comments=True the
lexer also skips '// ...' and '/* ... */' as full P4 does.

Example Usage
-------------
>>> from p4lite.frontend.lexer import P4Lexer
>>> lexer = P4Lexer('control c() { apply { } }', "test.p4")
>>> for token in lexer.tokenize():
...     print(token)
Token(CONTROL, 'control', 1:1)
Token(IDENTIFIER, 'c', 1:9)
Token(LPAREN, '(', 1:10)
Token(RPAREN, ')', 1:11)
Token(LBRACE, '{', 1:13)
Token(APPLY, 'apply', 1:15)
Token(LBRACE, '{', 1:21)
Token(RBRACE, '}', 1:23)
Token(RBRACE, '}', 1:25)
Token(EOF, 1:26)
"""

from dataclasses import dataclass
from enum import Enum, auto
from typing import Iterator, Optional
import string

from p4lite.errors import SourceLocation
from p4lite.frontend.errors import (
    END_OF_INPUT,
    InvalidCharacterError,
    UnterminatedCommentError,
)


# =============================================================================
# Token Type Enumeration
# =============================================================================

class P4TokenType(Enum):
    """
    Token types for the P4 subset.

    Keywords are distinguished from identifiers to simplify parsing.
    """

    # === Structural Tokens ===
    EOF = auto()            # End of input

    # === Identifiers ===
    IDENTIFIER = auto()     # Names of controls, types, variables

    # === Keywords - Declarations ===
    CONTROL = auto()        # control
    APPLY = auto()          # apply

    # === Keywords - Parameter Directions ===
    IN = auto()             # in
    OUT = auto()            # out
    INOUT = auto()          # inout

    # === Keywords - Literals ===
    TRUE = auto()           # true
    FALSE = auto()          # false

    # === Keywords - Control Flow ===
    IF = auto()             # if
    ELSE = auto()           # else

    # === Operators ===
    OR = auto()             # ||
    AND = auto()            # &&
    NOT = auto()            # !
    ASSIGN = auto()         # =

    # === Delimiters ===
    LPAREN = auto()         # (
    RPAREN = auto()         # )
    LBRACE = auto()         # {
    RBRACE = auto()         # }
    COMMA = auto()          # ,
    SEMICOLON = auto()      # ;

    def describe(self) -> str:
        """Human-readable name used in 'expected ...' diagnostics."""
        return TOKEN_DESCRIPTIONS[self]


# =============================================================================
# Keyword and Punctuation Tables
# =============================================================================

KEYWORDS: dict[str, P4TokenType] = {
    "control": P4TokenType.CONTROL,
    "apply": P4TokenType.APPLY,
    "in": P4TokenType.IN,
    "out": P4TokenType.OUT,
    "inout": P4TokenType.INOUT,
    "true": P4TokenType.TRUE,
    "false": P4TokenType.FALSE,
    "if": P4TokenType.IF,
    "else": P4TokenType.ELSE,
}

SINGLE_CHAR_TOKENS: dict[str, P4TokenType] = {
    "(": P4TokenType.LPAREN,
    ")": P4TokenType.RPAREN,
    "{": P4TokenType.LBRACE,
    "}": P4TokenType.RBRACE,
    ",": P4TokenType.COMMA,
    ";": P4TokenType.SEMICOLON,
    "=": P4TokenType.ASSIGN,
    "!": P4TokenType.NOT,
}

# Two-character operators, keyed by their (repeated) character
DOUBLE_CHAR_TOKENS: dict[str, P4TokenType] = {
    "|": P4TokenType.OR,
    "&": P4TokenType.AND,
}

TOKEN_DESCRIPTIONS: dict[P4TokenType, str] = {
    P4TokenType.EOF: END_OF_INPUT,
    P4TokenType.IDENTIFIER: "identifier",
    P4TokenType.OR: "'||'",
    P4TokenType.AND: "'&&'",
}
TOKEN_DESCRIPTIONS.update({t: f"'{k}'" for k, t in KEYWORDS.items()})
TOKEN_DESCRIPTIONS.update({t: f"'{c}'" for c, t in SINGLE_CHAR_TOKENS.items()})


# =============================================================================
# Token Data Class
# =============================================================================

@dataclass(frozen=True)
class P4Token:
    """
    Represents a single token from P4 source code.

    Attributes:
        type: The P4TokenType classification
        value: The lexeme (None for EOF)
        line: Line number in source (1-indexed)
        column: Column number in source (1-indexed)
        offset: Character offset in source (0-indexed)
        filename: Name of the source file
    """
    type: P4TokenType
    value: Optional[str]
    line: int
    column: int
    offset: int
    filename: str

    def __repr__(self) -> str:
        if self.value is not None:
            return f"Token({self.type.name}, {self.value!r}, {self.line}:{self.column})"
        return f"Token({self.type.name}, {self.line}:{self.column})"

    @property
    def location(self) -> SourceLocation:
        """Return a SourceLocation for error reporting."""
        return SourceLocation(self.filename, self.line, self.column, self.offset)

    def describe(self) -> str:
        """Text shown as the 'found' part of a parse error."""
        if self.type == P4TokenType.EOF:
            return END_OF_INPUT
        return self.value


# =============================================================================
# Lexer Implementation
# =============================================================================

class P4Lexer:
    """
    Tokenizes P4 subset source code.

    tokenize() is a generator: tokens are produced on demand and the
    stream always ends with exactly one EOF token, unless a lexical error
    is raised first.

    Usage:
        lexer = P4Lexer(source_text, filename)
        tokens = list(lexer.tokenize())
    """

    IDENT_START = string.ascii_letters + "_"
    IDENT_CHARS = string.ascii_letters + string.digits + "_"
    WHITESPACE = " \t\n\r\f\v"

    def __init__(
        self,
        source: str,
        filename: str = "<input>",
        allow_comments: bool = False,
    ):
        """
        Initialize the lexer with source code.

        Args:
            source: The P4 source code to tokenize
            filename: Name of the source file (for error messages)
            allow_comments: Skip // and /* */ comments
        """
        self.source = source
        self.filename = filename
        self.allow_comments = allow_comments

        self._pos = 0
        self._line = 1
        self._column = 1
        self._line_start_pos = 0

    def tokenize(self) -> Iterator[P4Token]:
        """
        Generate tokens from the source code.

        Raises:
            InvalidCharacterError: On a character that starts no token
            UnterminatedCommentError: On an unclosed block comment
        """
        while True:
            self._skip_whitespace_and_comments()
            if self._at_end():
                break
            yield self._scan_token()

        yield self._make_token(P4TokenType.EOF, None, self._line, self._column, self._pos)

    # =========================================================================
    # Character Access Methods
    # =========================================================================

    def _at_end(self) -> bool:
        return self._pos >= len(self.source)

    def _peek(self, offset: int = 0) -> str:
        """Character at current position + offset, or '' past the end."""
        pos = self._pos + offset
        if pos >= len(self.source):
            return ""
        return self.source[pos]

    def _advance(self) -> str:
        """Consume and return the current character, tracking line/column."""
        if self._at_end():
            return ""

        char = self.source[self._pos]
        self._pos += 1

        if char == "\n":
            self._line += 1
            self._column = 1
            self._line_start_pos = self._pos
        else:
            self._column += 1

        return char

    # =========================================================================
    # Token Creation
    # =========================================================================

    def _make_token(
        self,
        token_type: P4TokenType,
        value: Optional[str],
        line: int,
        column: int,
        offset: int,
    ) -> P4Token:
        return P4Token(
            type=token_type,
            value=value,
            line=line,
            column=column,
            offset=offset,
            filename=self.filename,
        )

    # =========================================================================
    # Whitespace and Comment Handling
    # =========================================================================

    def _skip_whitespace_and_comments(self) -> None:
        while not self._at_end():
            char = self._peek()

            if char in self.WHITESPACE:
                self._advance()
                continue

            if self.allow_comments and char == "/":
                if self._peek(1) == "/":
                    self._skip_line_comment()
                    continue
                if self._peek(1) == "*":
                    self._skip_block_comment()
                    continue

            break

    def _skip_line_comment(self) -> None:
        while not self._at_end() and self._peek() != "\n":
            self._advance()

    def _skip_block_comment(self) -> None:
        start = SourceLocation(self.filename, self._line, self._column, self._pos)
        source_line = self._get_current_line()

        # Consume the /*
        self._advance()
        self._advance()

        while not self._at_end():
            if self._peek() == "*" and self._peek(1) == "/":
                self._advance()
                self._advance()
                return
            self._advance()

        raise UnterminatedCommentError(start, source_line)

    # =========================================================================
    # Token Scanning
    # =========================================================================

    def _scan_token(self) -> P4Token:
        start_line = self._line
        start_column = self._column
        start_pos = self._pos

        char = self._peek()

        # Identifiers and keywords
        if char in self.IDENT_START:
            chars = []
            while self._peek() and self._peek() in self.IDENT_CHARS:
                chars.append(self._advance())
            name = "".join(chars)
            token_type = KEYWORDS.get(name, P4TokenType.IDENTIFIER)
            return self._make_token(token_type, name, start_line, start_column, start_pos)

        if char in SINGLE_CHAR_TOKENS:
            self._advance()
            return self._make_token(
                SINGLE_CHAR_TOKENS[char], char, start_line, start_column, start_pos
            )

        # || and && (a single | or & is not a token)
        if char in DOUBLE_CHAR_TOKENS and self._peek(1) == char:
            self._advance()
            self._advance()
            return self._make_token(
                DOUBLE_CHAR_TOKENS[char], char * 2, start_line, start_column, start_pos
            )

        raise InvalidCharacterError(
            char,
            SourceLocation(self.filename, start_line, start_column, start_pos),
            self._get_current_line(),
        )

    # =========================================================================
    # Utility Methods
    # =========================================================================

    def _get_current_line(self) -> str:
        """Get the current line of source text for error reporting."""
        line_end = self.source.find("\n", self._line_start_pos)
        if line_end == -1:
            line_end = len(self.source)
        return self.source[self._line_start_pos:line_end].rstrip("\r")


def split_source_lines(source: str) -> list[str]:
    """
    Split source into lines numbered the way the lexer numbers them.

    Only '\\n' ends a line; a trailing '\\r' is dropped from each line.
    str.splitlines() also breaks at '\\f', '\\v' and a lone '\\r', which
    the lexer treats as ordinary whitespace.
    """
    return [line.rstrip("\r") for line in source.split("\n")]
