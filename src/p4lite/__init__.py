"""
p4lite - Parser for a P4 Control-Block Subset
=============================================

This package parses a restricted subset of the P4 language for
programmable network switches into an immutable abstract syntax tree.
The tree is intended for downstream analysis and code generation tools.

Main Components
---------------
- **frontend**: lexer, recursive descent parser, AST and source printer
- **config**: parser options with environment variable overrides
- **cli**: the p4parse command-line tool

Quick Start
-----------
Parse a program:
    >>> from p4lite import parse_source
    >>> program = parse_source("control c(in bool a) { apply { } }")
    >>> program.declarations[0].parameters[0].name
    'a'

Or use the command-line tool:
    $ p4parse switch.p4 --ast
    $ cat switch.p4 | p4parse --format
"""

__version__ = "0.1.0"
__author__ = "p4lite contributors"

from p4lite.config import ParserOptions, get_default_options, set_default_options
from p4lite.errors import P4Error, SourceLocation
from p4lite.frontend import (
    P4Frontend,
    ParseResult,
    parse_source,
    parse_expression,
    parse_file,
    format_program,
    P4SyntaxError,
    LexError,
    UnexpectedTokenError,
    UnexpectedEndOfInputError,
)

__all__ = [
    # Version info
    "__version__",
    "__author__",
    # Configuration
    "ParserOptions",
    "get_default_options",
    "set_default_options",
    # Parsing
    "P4Frontend",
    "ParseResult",
    "parse_source",
    "parse_expression",
    "parse_file",
    "format_program",
    # Exception hierarchy
    "P4Error",
    "SourceLocation",
    "P4SyntaxError",
    "LexError",
    "UnexpectedTokenError",
    "UnexpectedEndOfInputError",
]
