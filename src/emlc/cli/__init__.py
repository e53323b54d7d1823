"""Command-line interface for the emlc converter.

This module provides the ``emlc`` command, converting one file between EML
and angle-bracket markup. The input and output formats come from the file
extensions.

Examples
--------
EML to HTML::

    $ emlc page.eml page.html

FXML to EML::

    $ emlc layout.fxml layout.eml

Fail on malformed input instead of recovering::

    $ emlc --strict view.xaml view.eml

Use a configuration file::

    $ emlc --config team.emlc.toml page.eml page.xml
    $ export EMLC_CONFIG=~/emlc.yaml

"""

import argparse
import logging
import os
import sys
from typing import Any

from emlc.api import convert_file
from emlc.cli.builder import (
    EXIT_ERROR,
    EXIT_SUCCESS,
    EXIT_VALIDATION_ERROR,
    HELP_ALIASES,
    VERSION_ALIASES,
    create_parser,
    get_exit_code_for_exception,
    version_string,
)
from emlc.cli.config import CONFIG_ENV_VAR, config_to_options, load_config_with_priority
from emlc.cli.output import print_error, print_success, should_use_rich_output
from emlc.exceptions import EmlcError
from emlc.logging_utils import configure_logging

logger = logging.getLogger(__name__)


def _setup_logging(parsed_args: argparse.Namespace, use_rich: bool) -> None:
    """Configure logging from the parsed command line."""
    log_level = logging.DEBUG if parsed_args.verbose else getattr(logging, parsed_args.log_level)
    configure_logging(log_level, log_file=parsed_args.log_file, trace_mode=parsed_args.verbose, use_rich=use_rich)


def _collect_options(parsed_args: argparse.Namespace) -> dict[str, Any]:
    """Merge configuration file values with command line overrides.

    Command line flags win over configuration values. ``--no-config`` skips
    every configuration source, including ``--config`` and ``EMLC_CONFIG``.

    Raises
    ------
    argparse.ArgumentTypeError
        If a configuration file cannot be loaded or holds a bad value

    """
    options: dict[str, Any] = {}
    if not parsed_args.no_config:
        config = load_config_with_priority(parsed_args.config, os.environ.get(CONFIG_ENV_VAR))
        options.update(config_to_options(config))

    cli_overrides = {
        "strict_mode": parsed_args.strict,
        "indent_width": parsed_args.indent,
        "max_nesting_depth": parsed_args.max_nesting_depth,
        "minimize_boolean_attributes": parsed_args.minimize_boolean_attributes,
    }
    options.update({key: value for key, value in cli_overrides.items() if value is not None})
    return options


def main(args: list[str] | None = None) -> int:
    """Execute the emlc command.

    Parameters
    ----------
    args : list[str], optional
        Command line arguments, defaults to ``sys.argv[1:]``

    Returns
    -------
    int
        Process exit code

    """
    argv = sys.argv[1:] if args is None else list(args)
    parser = create_parser()

    # Help and version bypass argument validation entirely
    if not argv or any(arg in HELP_ALIASES for arg in argv):
        parser.print_help()
        return EXIT_SUCCESS
    if any(arg in VERSION_ALIASES for arg in argv):
        print(version_string())
        return EXIT_SUCCESS

    parsed_args = parser.parse_args(argv)
    use_rich = should_use_rich_output(parsed_args)

    if not parsed_args.input or not parsed_args.output:
        missing = "input" if not parsed_args.input else "output"
        print_error(f"Missing {missing} file path.", use_rich)
        parser.print_help(sys.stderr)
        return EXIT_ERROR

    _setup_logging(parsed_args, use_rich)

    try:
        options = _collect_options(parsed_args)
    except argparse.ArgumentTypeError as e:
        print_error(str(e), use_rich)
        return EXIT_VALIDATION_ERROR
    logger.debug(f"Effective options: {options}")

    try:
        convert_file(parsed_args.input, parsed_args.output, **options)
    except EmlcError as e:
        logger.debug("Conversion failed", exc_info=True)
        print_error(e.message, use_rich)
        return get_exit_code_for_exception(e)
    except ValueError as e:
        # Option dataclasses reject out-of-range values in __post_init__
        print_error(str(e), use_rich)
        return EXIT_VALIDATION_ERROR

    print_success(f"Converted {parsed_args.input} -> {parsed_args.output}", use_rich)
    return EXIT_SUCCESS


__all__ = ["main"]


if __name__ == "__main__":
    sys.exit(main())
