"""
P4 Frontend Error Hierarchy
===========================

This module defines the exceptions raised while lexing and parsing P4
source. All of them inherit from P4SyntaxError, which itself inherits from
the base P4Error for consistent error handling across p4lite.

Exception Hierarchy
-------------------
P4SyntaxError (base for all frontend errors)
├── InvalidCharacterError (LexError) - character that starts no token
├── UnterminatedCommentError - /* without */ (comments enabled only)
├── UnexpectedTokenError - token outside the expected set
│   └── UnexpectedEndOfInputError - input ended mid-construct
└── NestingTooDeepError - blocks or parentheses nested past the limit

Error Message Format
--------------------
    switch.p4:3:12: error: unexpected token '}'
        if (a && ) { }
                 ^
    hint: expected one of '!', '(', 'false', 'true', identifier

The parser never recovers from an error: the first one aborts the parse
and no partial tree is produced.
"""

from typing import Iterable, Optional

from p4lite.errors import P4Error, SourceLocation


# Description used for the end-of-input pseudo token
END_OF_INPUT = "end of input"


# =============================================================================
# Base Syntax Exception
# =============================================================================

class P4SyntaxError(P4Error):
    """
    Base exception for all lexer and parser errors.

    Attributes:
        message: The error description
        location: Where in the source the error occurred
        hint: A suggestion for fixing the error
        source_line: The actual source text at the error location
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

    def _format_message(self) -> str:
        """
        Format the error message with location, source context, and hint.

            switch.p4:1:9: error: invalid character '1'
                control 1foo() { apply {} }
                        ^
        """
        parts = []

        if self.location:
            parts.append(f"{self.location}: error: {self.message}")
        else:
            parts.append(f"error: {self.message}")

        # Source context with caret pointer
        if self.source_line is not None and self.location is not None:
            parts.append(f"    {self.source_line}")
            if self.location.column > 0:
                padding = " " * (4 + self.location.column - 1)
                parts.append(f"{padding}^")

        if self.hint:
            parts.append(f"hint: {self.hint}")

        return "\n".join(parts)


# =============================================================================
# Lexical Errors
# =============================================================================

class InvalidCharacterError(P4SyntaxError):
    """
    Character that cannot begin any valid token.

    A lone '|' or '&' also ends up here, since only '||' and '&&'
    are operators.

    Attributes:
        char: The offending character
    """

    def __init__(
        self,
        char: str,
        location: Optional[SourceLocation] = None,
        source_line: Optional[str] = None,
    ):
        self.char = char
        hint = None
        if char in "|&":
            hint = f"did you mean '{char}{char}'?"
        super().__init__(
            f"invalid character '{char}' (0x{ord(char):02X})",
            location=location,
            hint=hint,
            source_line=source_line,
        )

    @property
    def position(self) -> Optional[SourceLocation]:
        return self.location


LexError = InvalidCharacterError


class UnterminatedCommentError(P4SyntaxError):
    """Block comment opened with /* but never closed."""

    def __init__(
        self,
        location: Optional[SourceLocation] = None,
        source_line: Optional[str] = None,
    ):
        super().__init__(
            "unterminated block comment",
            location=location,
            hint="add closing */ to terminate the comment",
            source_line=source_line,
        )


# =============================================================================
# Parse Errors
# =============================================================================

def format_expected(expected: Iterable[str]) -> str:
    """Render an expected-token set in a stable, readable order."""
    items = sorted(set(expected))
    if len(items) == 1:
        return items[0]
    return "one of " + ", ".join(items)


class UnexpectedTokenError(P4SyntaxError):
    """
    Unexpected token during parsing.

    Raised when the parser required one of a specific set of tokens and
    found something else.

    Attributes:
        found: Description of the token actually found
        expected: The set of token descriptions that would have been accepted
    """

    def __init__(
        self,
        found: str,
        expected: Iterable[str] = (),
        location: Optional[SourceLocation] = None,
        source_line: Optional[str] = None,
    ):
        self.found = found
        self.expected = frozenset(expected)

        hint = None
        if self.expected:
            hint = f"expected {format_expected(self.expected)}"

        super().__init__(
            self._describe(),
            location=location,
            hint=hint,
            source_line=source_line,
        )

    def _describe(self) -> str:
        return f"unexpected token '{self.found}'"

    @property
    def position(self) -> Optional[SourceLocation]:
        return self.location


class UnexpectedEndOfInputError(UnexpectedTokenError):
    """Input ended while a construct was still open."""

    def __init__(
        self,
        expected: Iterable[str] = (),
        location: Optional[SourceLocation] = None,
        source_line: Optional[str] = None,
    ):
        super().__init__(
            END_OF_INPUT,
            expected=expected,
            location=location,
            source_line=source_line,
        )

    def _describe(self) -> str:
        return "unexpected end of input"


class NestingTooDeepError(P4SyntaxError):
    """Blocks or parenthesized expressions nested beyond the configured limit."""

    def __init__(
        self,
        limit: int,
        location: Optional[SourceLocation] = None,
        source_line: Optional[str] = None,
    ):
        self.limit = limit
        super().__init__(
            f"nesting deeper than {limit} levels",
            location=location,
            hint="raise ParserOptions.max_nesting_depth or flatten the program",
            source_line=source_line,
        )
