"""
P4 Frontend Driver
==================

This module provides the main interface for turning P4 source into an AST.
It orchestrates the complete process:

    Source → Lex → Parse → ProgramNode

Usage
-----
Command line:
    $ p4parse switch.p4

Programmatic:
    >>> from p4lite.frontend import P4Frontend
    >>> result = P4Frontend().parse_source('control c() { apply { } }')
    >>> len(result.program.declarations)
    1

Error Handling
--------------
Parsing stops at the first error, which propagates to the caller as a
P4SyntaxError subclass. There is no partial result.
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Optional
import logging
import time

from p4lite.config import ParserOptions, get_default_options
from p4lite.frontend.ast import ASTPrinter, ProgramNode
from p4lite.frontend.lexer import P4Lexer, split_source_lines
from p4lite.frontend.parser import P4Parser

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ParseResult:
    """
    Result of a successful parse.

    Attributes:
        filename: Source filename
        program: Root of the AST
        token_count: Number of tokens lexed, including EOF
        parse_time_ms: Wall time spent lexing and parsing
    """
    filename: str
    program: ProgramNode
    token_count: int
    parse_time_ms: float


class P4Frontend:
    """
    Lexes and parses P4 source.

    Example:
        frontend = P4Frontend(ParserOptions(allow_comments=True))
        result = frontend.parse_file("switch.p4")
        print(result.program)

    Attributes:
        options: Parser configuration options
    """

    def __init__(self, options: Optional[ParserOptions] = None):
        self.options = options or get_default_options()

    def parse_source(self, source: str, filename: Optional[str] = None) -> ParseResult:
        """
        Parse P4 source text.

        Args:
            source: P4 source code
            filename: Source filename for error messages

        Returns:
            ParseResult with the program and statistics

        Raises:
            P4SyntaxError: If lexing or parsing fails
        """
        filename = filename or self.options.default_filename
        start = time.perf_counter()

        tokens = self._lex(source, filename)
        program = self._parse(tokens, filename, split_source_lines(source))

        elapsed_ms = (time.perf_counter() - start) * 1000
        logger.info(f"Parsed {filename} in {elapsed_ms:.2f}ms")
        if logger.isEnabledFor(logging.DEBUG):
            logger.debug(f"Parsed AST:\n{ASTPrinter().print(program)}")

        return ParseResult(
            filename=filename,
            program=program,
            token_count=len(tokens),
            parse_time_ms=elapsed_ms,
        )

    def parse_file(self, filepath: str | Path) -> ParseResult:
        """
        Parse a P4 source file (read as UTF-8).

        Raises:
            P4SyntaxError: If lexing or parsing fails
            FileNotFoundError: If the file does not exist
        """
        path = Path(filepath)
        if not path.exists():
            raise FileNotFoundError(f"Source file not found: {filepath}")

        source = path.read_text(encoding="utf-8")
        return self.parse_source(source, str(filepath))

    def _lex(self, source: str, filename: str) -> list:
        lexer = P4Lexer(source, filename, allow_comments=self.options.allow_comments)
        tokens = list(lexer.tokenize())
        logger.debug(f"Tokenized {filename}: {len(tokens)} tokens")
        return tokens

    def _parse(self, tokens: list, filename: str, source_lines: list[str]) -> ProgramNode:
        parser = P4Parser(tokens, filename, source_lines, self.options)
        return parser.parse()


def parse_file(filepath: str | Path, options: Optional[ParserOptions] = None) -> ProgramNode:
    """Parse a P4 source file and return its AST."""
    return P4Frontend(options).parse_file(filepath).program
