"""
p4parse - P4 Parser Command-Line Interface
==========================================

This module implements the command-line interface for the P4 subset
parser. It reads a program from a file or standard input, parses it, and
reports the result.

Usage Examples
--------------
Check that a program parses:
    $ p4parse switch.p4

Read from standard input:
    $ cat switch.p4 | p4parse

Dump the AST:
    $ p4parse --ast switch.p4

Print the program in canonical form:
    $ p4parse --format switch.p4

Accept // and /* */ comments:
    $ p4parse --allow-comments switch.p4
"""

import logging
import sys
from pathlib import Path
from typing import Optional

import click

from p4lite import __version__
from p4lite.cli.errors import handle_cli_exception
from p4lite.config import ParserOptions, log_level_from_env
from p4lite.frontend import ASTPrinter, P4Frontend, format_program


def setup_logging(verbose: bool) -> None:
    """Configure logging based on verbosity and P4LITE_LOG_LEVEL."""
    level = logging.DEBUG if verbose else getattr(logging, log_level_from_env())
    logging.basicConfig(
        level=level,
        format="%(levelname)s: %(message)s" if verbose else "%(message)s",
    )


# =============================================================================
# CLI Definition
# =============================================================================

@click.command()
@click.argument(
    "input_file",
    required=False,
    type=click.Path(exists=True, dir_okay=False, allow_dash=True, path_type=Path),
)
@click.option(
    "--ast",
    "show_ast",
    is_flag=True,
    help="Print the parsed AST",
)
@click.option(
    "--format",
    "show_format",
    is_flag=True,
    help="Print the program in canonical form",
)
@click.option(
    "--allow-comments",
    is_flag=True,
    help="Skip // and /* */ comments (not part of the subset)",
)
@click.option(
    "--max-depth",
    type=click.IntRange(min=1),
    default=None,
    help="Maximum nesting of blocks and parentheses",
)
@click.option(
    "-v", "--verbose",
    is_flag=True,
    help="Verbose output",
)
@click.version_option(version=__version__, prog_name="p4parse")
def main(
    input_file: Optional[Path],
    show_ast: bool,
    show_format: bool,
    allow_comments: bool,
    max_depth: Optional[int],
    verbose: bool,
) -> None:
    """
    Parse a P4 control-block program.

    INPUT_FILE is the P4 source to parse; standard input is read when it
    is omitted or '-'.

    \b
    Examples:
        p4parse switch.p4            # Check syntax
        p4parse --ast switch.p4      # Dump the AST
        p4parse --format switch.p4   # Canonical source
        cat switch.p4 | p4parse      # Read from stdin

    \b
    Supported subset:
        - control blocks with in/out/inout parameters
        - variable declarations and no-argument instantiations
        - apply bodies with blocks and if/else
        - boolean expressions with ||, && and !
    """
    if show_ast and show_format:
        raise click.UsageError("--ast and --format cannot be used together")

    setup_logging(verbose)

    options = ParserOptions.from_env()
    if allow_comments:
        options.allow_comments = True
    if max_depth is not None:
        options.max_nesting_depth = max_depth

    try:
        if input_file is None or str(input_file) == "-":
            source = sys.stdin.read()
            filename = "<stdin>"
        else:
            source = input_file.read_text(encoding="utf-8")
            filename = str(input_file)

        result = P4Frontend(options).parse_source(source, filename)

        if show_ast:
            click.echo(ASTPrinter().print(result.program))
            return

        if show_format:
            click.echo(format_program(result.program), nl=False)
            return

        if verbose:
            click.echo(f"Tokenized: {result.token_count} tokens")
            click.echo(f"Parse time: {result.parse_time_ms:.2f}ms")

        count = len(result.program.declarations)
        click.echo(f"Parsed {count} control declaration(s) from {filename}")

    except Exception as e:
        handle_cli_exception(e, verbose)


if __name__ == "__main__":
    main()
