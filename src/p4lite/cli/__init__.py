"""
p4lite Command-Line Interface
=============================

This package provides the command-line tool for p4lite:

- **p4parse**: parse a P4 program and report, dump or reformat it

The tool is a Click-based CLI application with help text and
consistent error reporting.
"""

__all__ = ["p4parse"]
