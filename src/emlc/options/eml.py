#  Copyright (c) 2025 Tom Villani, Ph.D.

# emlc/options/eml.py
"""Configuration options for EML parsing and rendering.

EML is the compact element notation ``tag (key="value") { content }``.
"""

from __future__ import annotations

from dataclasses import dataclass

from emlc.options.base import BaseParserOptions, BaseRendererOptions


@dataclass(frozen=True)
class EmlParserOptions(BaseParserOptions):
    """Configuration options for EML-to-AST parsing.

    Parameters
    ----------
    strict_mode : bool, default False
        Raise ParsingError on the first anomaly (stray character,
        unterminated comment or brace block). When False, the parser skips
        the offending input and keeps going.
    max_nesting_depth : int, default 128
        Nested blocks deeper than this are kept as text instead of being
        parsed recursively.

    Examples
    --------
        >>> from emlc.parsers.eml import EmlParser
        >>> parser = EmlParser(EmlParserOptions(strict_mode=True))
        >>> doc = parser.parse('div (class="a") { span { Hi } }')

    """

    def __post_init__(self) -> None:
        """Validate options by calling parent validation."""
        super().__post_init__()


@dataclass(frozen=True)
class EmlRendererOptions(BaseRendererOptions):
    """Configuration options for AST-to-EML rendering.

    Parameters
    ----------
    indent_width : int, default 4
        Spaces per nesting level

    """

    def __post_init__(self) -> None:
        """Validate options by calling parent validation."""
        super().__post_init__()
