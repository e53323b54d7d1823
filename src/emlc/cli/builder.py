#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/emlc/cli/builder.py
"""Argument parser construction and exit codes for the emlc CLI."""

import argparse

from emlc.constants import __version__
from emlc.exceptions import (
    FileError,
    FormatError,
    OutputWriteError,
    ParsingError,
    RenderingError,
    ValidationError,
)

EXIT_SUCCESS = 0
EXIT_ERROR = 1
EXIT_VALIDATION_ERROR = 3
EXIT_FORMAT_ERROR = 5
EXIT_PARSING_ERROR = 6
EXIT_RENDERING_ERROR = 7

HELP_ALIASES = ("-h", "--help", "/?")
VERSION_ALIASES = ("-v", "--version")

_DESCRIPTION = """Convert between EML and angle-bracket markup.

Formats are chosen from the file extensions: an input ending in .eml is read
as EML, anything else as markup. An output ending in .eml is written as EML,
.xml/.xaml/.fxml as strict (XML-style) markup, and any other extension
(.html, .php, ...) as loose (HTML-style) markup.
"""

_EPILOG = """examples:
  emlc page.eml page.html
  emlc layout.fxml layout.eml
  emlc --strict --indent 2 view.eml view.xaml

configuration is read from .emlc.toml/.yaml/.yml/.json or [tool.emlc] in
pyproject.toml, searched from the working directory upward, or from the file
named by --config or EMLC_CONFIG.
"""


def version_string() -> str:
    """Return the text printed by ``--version``."""
    return f"emlc version {__version__}"


def non_negative_int(value: str) -> int:
    """Argparse type accepting an integer of zero or more.

    Raises
    ------
    argparse.ArgumentTypeError
        If ``value`` is not an integer or is negative

    """
    try:
        number = int(value)
    except ValueError as e:
        raise argparse.ArgumentTypeError(f"invalid integer value: '{value}'") from e
    if number < 0:
        raise argparse.ArgumentTypeError(f"value must be non-negative, got {number}")
    return number


def positive_int(value: str) -> int:
    """Argparse type accepting an integer of one or more."""
    number = non_negative_int(value)
    if number == 0:
        raise argparse.ArgumentTypeError("value must be positive, got 0")
    return number


def create_parser() -> argparse.ArgumentParser:
    """Create and configure the argument parser.

    Help and version flags are plain switches; ``main`` short-circuits on
    them so that neither path raises ``SystemExit``.

    """
    parser = argparse.ArgumentParser(
        prog="emlc",
        description=_DESCRIPTION,
        epilog=_EPILOG,
        formatter_class=argparse.RawDescriptionHelpFormatter,
        add_help=False,
    )

    parser.add_argument("input", nargs="?", help="Input file (.eml for EML, anything else for markup)")
    parser.add_argument("output", nargs="?", help="Output file; the extension selects the output format")

    parser.add_argument("-h", "--help", action="store_true", help="Show this help message and exit (also /?)")
    parser.add_argument("-v", "--version", action="store_true", help="Show the program version and exit")

    conversion = parser.add_argument_group("conversion options")
    conversion.add_argument(
        "--strict",
        action="store_true",
        default=None,
        help="Fail on the first structural anomaly instead of recovering silently",
    )
    conversion.add_argument(
        "--indent",
        type=non_negative_int,
        metavar="N",
        help="Spaces per nesting level in the output (default: 4)",
    )
    conversion.add_argument(
        "--max-nesting-depth",
        type=positive_int,
        metavar="N",
        help="Deepest element nesting parsed before further levels are flattened (default: 128, at most 256)",
    )
    conversion.add_argument(
        "--minimize-boolean-attributes",
        action="store_true",
        default=None,
        help="Write valueless attributes as a bare key in HTML-style output",
    )

    config = parser.add_argument_group("configuration")
    config.add_argument("--config", metavar="PATH", help="Load options from this configuration file")
    config.add_argument("--no-config", action="store_true", help="Ignore configuration files and EMLC_CONFIG")

    logging_group = parser.add_argument_group("logging and output")
    logging_group.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        default="WARNING",
        help="Logging level (default: WARNING)",
    )
    logging_group.add_argument("--log-file", metavar="PATH", help="Also write log records to this file")
    logging_group.add_argument(
        "--verbose", action="store_true", help="Log at DEBUG level with timestamps and logger names"
    )
    logging_group.add_argument("--rich", action="store_true", help="Use rich terminal styling for messages")
    logging_group.add_argument(
        "--force-rich", action="store_true", help="Use rich styling even when stdout is not a terminal"
    )

    return parser


def get_exit_code_for_exception(exception: Exception) -> int:
    """Map an exception to an appropriate CLI exit code.

    Failures to open either file map to ``EXIT_ERROR``.

    Parameters
    ----------
    exception : Exception
        The exception to map to an exit code

    Returns
    -------
    int
        The appropriate exit code for the exception type

    """
    if isinstance(exception, (FileError, OutputWriteError)):
        return EXIT_ERROR

    if isinstance(exception, ValidationError):
        return EXIT_VALIDATION_ERROR

    if isinstance(exception, FormatError):
        return EXIT_FORMAT_ERROR

    if isinstance(exception, ParsingError):
        return EXIT_PARSING_ERROR

    if isinstance(exception, RenderingError):
        return EXIT_RENDERING_ERROR

    return EXIT_ERROR
