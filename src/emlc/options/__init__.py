#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Configuration options for the emlc parsers and renderers.

Each parser and renderer takes a frozen options dataclass. Use
``create_updated`` (or ``create_updated_options``) to derive a modified copy.
"""

from __future__ import annotations

from typing import Any

from emlc.options.base import BaseParserOptions, BaseRendererOptions, CloneFrozenMixin
from emlc.options.eml import EmlParserOptions, EmlRendererOptions
from emlc.options.markup import MarkupParserOptions, MarkupRendererOptions


def create_updated_options(options: Any, **kwargs: Any) -> Any:
    """Create a new options instance with updated values.

    Parameters
    ----------
    options : Any
        The original options instance (a frozen options dataclass)
    **kwargs
        Field values to override. Keys that the options class does not
        define are ignored, so one flat config mapping can feed both the
        parser and the renderer options.

    Returns
    -------
    Any
        New options instance with updated values

    Examples
    --------
        >>> opts = MarkupRendererOptions()
        >>> create_updated_options(opts, mode="strict", strict_mode=True).mode
        'strict'

    """
    valid = {name for name in options.__dataclass_fields__}
    return options.create_updated(**{key: value for key, value in kwargs.items() if key in valid})


__all__ = [
    "BaseParserOptions",
    "BaseRendererOptions",
    "CloneFrozenMixin",
    "EmlParserOptions",
    "EmlRendererOptions",
    "MarkupParserOptions",
    "MarkupRendererOptions",
    "create_updated_options",
]
