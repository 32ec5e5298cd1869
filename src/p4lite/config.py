"""
p4lite Configuration
====================

Parser configuration shared by the library entry points and the CLI.
Configuration can come from:
- Default values (defined here)
- Explicit ParserOptions passed to parse_source / P4Frontend
- Environment variables (via ParserOptions.from_env)

Environment Variables
---------------------
    P4LITE_ALLOW_COMMENTS      "1"/"true"/"yes" to skip // and /* */ comments
    P4LITE_MAX_NESTING_DEPTH   Maximum block/parenthesis nesting (integer)
    P4LITE_LOG_LEVEL           Logging level used by the CLI (e.g. "DEBUG")
"""

from dataclasses import dataclass
from typing import Optional
import os


_TRUE_VALUES = ("1", "true", "yes", "on")


@dataclass
class ParserOptions:
    """
    Options controlling lexing and parsing.

    Attributes:
        allow_comments: Skip '//' line and '/* */' block comments. The
                        accepted subset has no comment syntax, so this is
                        off by default.
        max_nesting_depth: Maximum depth of nested blocks and parenthesized
                           expressions before NestingTooDeepError is raised.
        default_filename: Name used in diagnostics when no filename is given.
    """
    allow_comments: bool = False
    max_nesting_depth: int = 64
    default_filename: str = "<input>"

    def __post_init__(self):
        if self.max_nesting_depth < 1:
            raise ValueError(
                f"max_nesting_depth must be positive, got {self.max_nesting_depth}"
            )

    @classmethod
    def from_env(cls) -> "ParserOptions":
        """
        Create ParserOptions from environment variables.

        Invalid values are ignored and the default is kept.
        """
        options = cls()

        if allow := os.environ.get("P4LITE_ALLOW_COMMENTS"):
            options.allow_comments = allow.strip().lower() in _TRUE_VALUES

        if depth := os.environ.get("P4LITE_MAX_NESTING_DEPTH"):
            try:
                value = int(depth)
            except ValueError:
                value = 0
            if value > 0:
                options.max_nesting_depth = value

        return options


def log_level_from_env(default: str = "WARNING") -> str:
    """Return the logging level name requested by P4LITE_LOG_LEVEL."""
    level = os.environ.get("P4LITE_LOG_LEVEL", default).strip().upper()
    if level in ("CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG"):
        return level
    return default


# =============================================================================
# Default Options
# =============================================================================

_default_options: Optional[ParserOptions] = None


def get_default_options() -> ParserOptions:
    """
    Get the default parser options.

    Created from environment variables on first access. Can be overridden
    by calling set_default_options().
    """
    global _default_options
    if _default_options is None:
        _default_options = ParserOptions.from_env()
    return _default_options


def set_default_options(options: Optional[ParserOptions]) -> None:
    """
    Set the default parser options.

    Passing None discards the current defaults so the next call to
    get_default_options() reads the environment again.
    """
    global _default_options
    _default_options = options
