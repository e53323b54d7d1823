"""Base classes for parser and renderer options.

This module defines the foundation classes for the format-specific options
used by the emlc parsers and renderers.
"""

from __future__ import annotations

import sys
from dataclasses import dataclass, field, replace
from typing import Any

if sys.version_info >= (3, 11):
    from typing import Self
else:
    from typing_extensions import Self

from emlc.constants import (
    DEFAULT_INDENT_WIDTH,
    DEFAULT_MAX_NESTING_DEPTH,
    DEFAULT_STRICT_MODE,
    MAX_NESTING_DEPTH_LIMIT,
)


@dataclass(frozen=True)
class CloneFrozenMixin:
    """Mixin providing frozen dataclass cloning capabilities."""

    def create_updated(self, **kwargs: Any) -> Self:
        """Create a new instance with updated field values.

        Parameters
        ----------
        **kwargs : Any
            Field names and their new values

        Returns
        -------
        Self
            New instance with specified fields updated

        """
        return replace(self, **kwargs)


@dataclass(frozen=True)
class BaseRendererOptions(CloneFrozenMixin):
    """Base class for all renderer options.

    Parameters
    ----------
    indent_width : int, default 4
        Number of spaces per nesting level in rendered output

    """

    indent_width: int = field(
        default=DEFAULT_INDENT_WIDTH,
        metadata={"help": "Spaces per nesting level in rendered output", "type": int, "importance": "core"},
    )

    def __post_init__(self) -> None:
        """Validate numeric ranges for base renderer options.

        Raises
        ------
        ValueError
            If any field value is outside its valid range.

        """
        if self.indent_width < 0:
            raise ValueError(f"indent_width must be non-negative, got {self.indent_width}")


@dataclass(frozen=True)
class BaseParserOptions(CloneFrozenMixin):
    """Base class for all parser options.

    Parameters
    ----------
    strict_mode : bool, default False
        Raise ParsingError on the first structural anomaly instead of
        recovering silently
    max_nesting_depth : int, default 128
        Deepest element nesting that is parsed recursively; deeper content
        is flattened into the enclosing level. At most 256

    """

    strict_mode: bool = field(
        default=DEFAULT_STRICT_MODE,
        metadata={"help": "Raise errors on malformed input instead of recovering", "importance": "advanced"},
    )
    max_nesting_depth: int = field(
        default=DEFAULT_MAX_NESTING_DEPTH,
        metadata={
            "help": "Maximum element nesting depth parsed recursively",
            "type": int,
            "importance": "security",
        },
    )

    def __post_init__(self) -> None:
        """Validate numeric ranges for base parser options.

        Raises
        ------
        ValueError
            If any field value is outside its valid range.

        """
        if self.max_nesting_depth < 1:
            raise ValueError(f"max_nesting_depth must be positive, got {self.max_nesting_depth}")
        if self.max_nesting_depth > MAX_NESTING_DEPTH_LIMIT:
            raise ValueError(
                f"max_nesting_depth must be at most {MAX_NESTING_DEPTH_LIMIT}, got {self.max_nesting_depth}"
            )
