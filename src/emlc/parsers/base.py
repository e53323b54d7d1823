#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/emlc/parsers/base.py
"""Base classes for document parsers.

This module defines the abstract base class that both front-end parsers
inherit from, together with the ``ParseAnomaly`` record used to report
structural problems that the parsers recover from.

Recovery is silent by default: a stray character is skipped, an
unterminated comment runs to EOF, a mismatched closing tag unwinds to its
enclosing element. Each recovery is recorded on ``parser.anomalies`` and
logged at DEBUG level; with ``strict_mode`` the first one raises
``ParsingError`` instead.

"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from pathlib import Path
from typing import IO, Union

from emlc.ast import Document
from emlc.exceptions import FileAccessError, FileNotFoundError, InvalidOptionsError, ParsingError, ValidationError
from emlc.options.base import BaseParserOptions
from emlc.utils.encoding import normalize_stream_to_text, read_text_with_encoding_detection

logger = logging.getLogger(__name__)

ParserInput = Union[str, Path, IO[bytes], IO[str], bytes]


@dataclass(frozen=True)
class ParseAnomaly:
    """A structural problem the parser recovered from.

    Parameters
    ----------
    kind : str
        Anomaly category, e.g. ``"unterminated-comment"`` or
        ``"stray-close-tag"``
    position : int
        Offset in the source text where the anomaly was detected
    message : str
        Human-readable description

    """

    kind: str
    position: int
    message: str


class BaseParser(ABC):
    """Abstract base class for the EML and markup parsers.

    Parameters
    ----------
    options : BaseParserOptions or None, default = None
        Format-specific parsing options

    Attributes
    ----------
    anomalies : list of ParseAnomaly
        Recoveries performed during the most recent ``parse`` call

    Examples
    --------
    Creating a custom parser:

        >>> class NullParser(BaseParser):
        ...     def parse(self, input_data):
        ...         return Document(children=[])

    """

    def __init__(self, options: BaseParserOptions | None = None) -> None:
        """Initialize the parser with optional configuration."""
        self.options: BaseParserOptions | None = options
        self.anomalies: list[ParseAnomaly] = []

    @staticmethod
    def _validate_options_type(options: BaseParserOptions | None, expected_type: type, parser_name: str) -> None:
        """Validate that options are of the correct type for this parser.

        Parameters
        ----------
        options : BaseParserOptions or None
            The options object to validate
        expected_type : type
            The expected options class type
        parser_name : str
            Name of the parser (for error messages)

        Raises
        ------
        InvalidOptionsError
            If options are not None and not an instance of expected_type

        """
        if options is not None and not isinstance(options, expected_type):
            raise InvalidOptionsError(
                converter_name=parser_name,
                expected_type=expected_type,
                received_type=type(options),
            )

    @abstractmethod
    def parse(self, input_data: ParserInput) -> Document:
        """Parse the input document into an AST.

        Parameters
        ----------
        input_data : str, Path, IO[bytes], IO[str], or bytes
            Source text, a path to a source file, raw bytes, or a file-like
            object

        Returns
        -------
        Document
            Root of the parsed tree

        Raises
        ------
        ParsingError
            Only in strict mode, on the first structural anomaly
        FileNotFoundError
            If ``input_data`` is a Path that does not exist

        """
        raise NotImplementedError

    def _record_anomaly(self, kind: str, position: int, message: str) -> None:
        """Record a recovered anomaly, or raise when strict mode is enabled.

        Parameters
        ----------
        kind : str
            Anomaly category
        position : int
            Offset in the scanned text
        message : str
            Human-readable description

        Raises
        ------
        ParsingError
            If ``options.strict_mode`` is True

        """
        anomaly = ParseAnomaly(kind=kind, position=position, message=message)
        self.anomalies.append(anomaly)
        logger.debug(f"{kind} at offset {position}: {message}")

        if self.options is not None and self.options.strict_mode:
            raise ParsingError(f"{message} (offset {position})", anomaly_kind=kind, position=position)

    @staticmethod
    def _load_text_content(input_data: ParserInput) -> str:
        """Load source text from the supported input types.

        A ``str`` is treated as source text unless it is a short single-line
        string naming an existing file. ``Path`` objects are always read.

        Parameters
        ----------
        input_data : str, Path, IO[bytes], IO[str], or bytes
            Input data to load

        Returns
        -------
        str
            Source text

        Raises
        ------
        FileNotFoundError
            If a Path does not exist
        FileAccessError
            If a file exists but cannot be read
        ValidationError
            If the input type is not supported

        """
        if isinstance(input_data, bytes):
            return read_text_with_encoding_detection(input_data)
        elif isinstance(input_data, Path):
            return _read_file(input_data)
        elif isinstance(input_data, str):
            # Linux limits path components to 255 chars; longer strings are content
            if len(input_data) <= 260 and "\n" not in input_data:
                try:
                    path = Path(input_data)
                    if path.is_file():
                        return _read_file(path)
                except OSError:
                    pass
            return input_data
        elif hasattr(input_data, "read"):
            if hasattr(input_data, "seek"):
                input_data.seek(0)
            return normalize_stream_to_text(input_data)
        raise ValidationError(
            f"Unsupported input type: {type(input_data).__name__}",
            parameter_name="input_data",
            parameter_value=input_data,
        )


def _read_file(path: Path) -> str:
    """Read and decode a source file, mapping OS errors to emlc exceptions."""
    if not path.exists():
        raise FileNotFoundError(str(path))
    try:
        data = path.read_bytes()
    except OSError as e:
        raise FileAccessError(str(path), original_error=e) from e
    return read_text_with_encoding_detection(data)
