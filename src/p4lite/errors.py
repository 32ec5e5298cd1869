"""
p4lite Error Hierarchy
======================

This module defines the root of the exception hierarchy for p4lite and
the source location type shared by every component. All exceptions inherit
from P4Error, allowing callers to catch all p4lite errors with a single
except clause.

Exception Hierarchy
-------------------
P4Error (base)
└── P4SyntaxError (see p4lite.frontend.errors)
    ├── InvalidCharacterError / LexError
    ├── UnterminatedCommentError
    ├── UnexpectedTokenError
    │   └── UnexpectedEndOfInputError
    └── NestingTooDeepError

Error messages follow this format:
    filename:line:column: error: description
        source_line_text
            ^ (pointer to error location)
    hint: suggestion for fixing (when available)
"""

from dataclasses import dataclass, field


# =============================================================================
# Base Exception Class
# =============================================================================

class P4Error(Exception):
    """
    Base exception for all p4lite errors.

        try:
            program = parse_source(text, "switch.p4")
        except P4Error as e:
            print(f"Error: {e}")
    """
    pass


# =============================================================================
# Source Location Tracking
# =============================================================================

@dataclass(frozen=True)
class SourceLocation:
    """
    Represents a location in source code for error reporting.

    Attributes:
        filename: Name of the source file (or "<input>" for string input)
        line: Line number (1-indexed)
        column: Column number (1-indexed)
        offset: Character offset from the start of the source (0-indexed)
    """
    filename: str
    line: int
    column: int
    offset: int = field(default=0, compare=False)

    def __str__(self) -> str:
        """Format as 'filename:line:column' for error messages."""
        return f"{self.filename}:{self.line}:{self.column}"

