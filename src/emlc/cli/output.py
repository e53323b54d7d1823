"""Utility functions for cli output."""

#  Copyright (c) 2025 Tom Villani, Ph.D.

# src/emlc/cli/output.py
import argparse
import sys
from typing import TextIO

from rich.console import Console
from rich.markup import escape


def should_use_rich_output(args: argparse.Namespace, stream: TextIO | None = None) -> bool:
    """Determine if Rich output should be used based on TTY and args.

    Parameters
    ----------
    args : argparse.Namespace
        Parsed command line arguments
    stream : optional, default None
        Uses sys.stdout unless otherwise specified.

    Returns
    -------
    bool
        True if Rich output should be used

    Notes
    -----
    Rich output is used when the --rich flag is set and either --force-rich
    is set or the stream is a TTY.

    """
    if not getattr(args, "rich", False):
        return False

    if getattr(args, "force_rich", False):
        return True

    target = stream or sys.stdout
    isatty = getattr(target, "isatty", None)
    if callable(isatty):
        try:
            return bool(isatty())
        except ValueError:
            # Closed streams raise on isatty()
            return False
    return False


def print_success(message: str, use_rich: bool) -> None:
    """Print a success message to stdout, styled when ``use_rich`` is set."""
    if use_rich:
        Console().print(f"[green]✓[/green] {escape(message)}", highlight=False)
    else:
        print(message)


def print_error(message: str, use_rich: bool) -> None:
    """Print an error message to stderr, styled when ``use_rich`` is set."""
    if use_rich:
        Console(stderr=True).print(f"[bold red]Error:[/bold red] {escape(message)}", highlight=False)
    else:
        print(f"Error: {message}", file=sys.stderr)
