#  Copyright (c) 2025 Tom Villani, Ph.D.

# emlc/options/markup.py
"""Configuration options for angle-bracket markup parsing and rendering.

The markup family covers HTML and PHP-templated HTML (``loose`` mode) as
well as XML, XAML and FXML (``strict`` mode).
"""

from __future__ import annotations

from dataclasses import dataclass, field

from emlc.constants import (
    DEFAULT_MARKUP_MODE,
    DEFAULT_MINIMIZE_BOOLEAN_ATTRIBUTES,
    DEFAULT_PRESERVE_ATTRIBUTE_SPACING,
    MARKUP_MODE_LOOSE,
    MARKUP_MODE_STRICT,
    MarkupMode,
)
from emlc.options.base import BaseParserOptions, BaseRendererOptions


@dataclass(frozen=True)
class MarkupParserOptions(BaseParserOptions):
    """Configuration options for markup-to-AST parsing.

    Parameters
    ----------
    strict_mode : bool, default False
        Raise ParsingError on the first anomaly (stray or mismatched closing
        tag, unterminated comment or instruction).
    max_nesting_depth : int, default 128
        Elements opened deeper than this get no children of their own; their
        content is parsed as siblings instead.

    """

    def __post_init__(self) -> None:
        """Validate options by calling parent validation."""
        super().__post_init__()


@dataclass(frozen=True)
class MarkupRendererOptions(BaseRendererOptions):
    """Configuration options for AST-to-markup rendering.

    Parameters
    ----------
    mode : {"strict", "loose"}, default "loose"
        ``strict`` (XML family): childless elements self-close as ``<tag/>``
        unless the source wrote an explicit empty block.
        ``loose`` (HTML family): only void elements self-close, written as
        ``<tag>``; every other element is expanded.
    indent_width : int, default 4
        Spaces per nesting level
    minimize_boolean_attributes : bool, default False
        In loose mode, write valueless attributes as a bare key
        (``<input disabled>``) instead of ``disabled=""``
    preserve_attribute_spacing : bool, default False
        Reuse the whitespace that preceded each attribute in the source
        instead of a single space

    Examples
    --------
        >>> from emlc.renderers.markup import MarkupRenderer
        >>> renderer = MarkupRenderer(MarkupRendererOptions(mode="strict"))

    """

    mode: MarkupMode = field(
        default=DEFAULT_MARKUP_MODE,
        metadata={
            "help": "Markup family: strict (XML/XAML/FXML) or loose (HTML/PHP)",
            "choices": [MARKUP_MODE_STRICT, MARKUP_MODE_LOOSE],
            "importance": "core",
        },
    )
    minimize_boolean_attributes: bool = field(
        default=DEFAULT_MINIMIZE_BOOLEAN_ATTRIBUTES,
        metadata={"help": "Write valueless attributes as bare keys in loose mode", "importance": "advanced"},
    )
    preserve_attribute_spacing: bool = field(
        default=DEFAULT_PRESERVE_ATTRIBUTE_SPACING,
        metadata={"help": "Reuse source whitespace between attributes", "importance": "advanced"},
    )

    def __post_init__(self) -> None:
        """Validate the markup mode.

        Raises
        ------
        ValueError
            If ``mode`` is not ``"strict"`` or ``"loose"``.

        """
        super().__post_init__()
        if self.mode not in (MARKUP_MODE_STRICT, MARKUP_MODE_LOOSE):
            raise ValueError(f"mode must be 'strict' or 'loose', got {self.mode!r}")

    @property
    def is_strict(self) -> bool:
        """Return True for XML-family output."""
        return self.mode == MARKUP_MODE_STRICT
