"""Command-line interface for siegecraft.

This module provides the CLI using Typer with rich output for
user-friendly feedback and progress reporting.

Key features:
- Single-template resize to stdout or file (ASCII, SVG, JSON)
- Parallel batch resizing with a progress bar
- Error kind and offending position reported on stderr
"""

from siegecraft.cli.app import cli, main

__all__ = ["cli", "main"]
