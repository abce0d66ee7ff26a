"""Command-line interface for textrude.

This module provides the CLI using Typer with rich output for
user-friendly feedback on stderr.

Key features:
- STL to a file (written atomically) or to stdout
- Verbose/quiet output modes
- Missing glyph warnings after the run
- Detailed error reporting
"""

from textrude.cli.app import cli, main

__all__ = ["cli", "main"]
