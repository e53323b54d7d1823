#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/emlc/converter_metadata.py
"""Converter metadata definitions for the emlc library.

Each supported format (``eml``, ``html``, ``php``, ``xml``, ``xaml``,
``fxml``) is described by a ``ConverterMetadata`` record naming its parser,
renderer, option classes and file extensions. The markup formats share one
parser and one renderer and differ only in the renderer defaults they carry
(``mode="strict"`` for the XML family).
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from typing import Any, Optional, Union


@dataclass
class ConverterMetadata:
    """Metadata describing a format's converters.

    Parameters
    ----------
    format_name : str
        Unique identifier for the format (e.g., "eml", "xaml")
    extensions : list[str]
        File extensions mapped to the format (e.g., [".xaml"])
    parser_class : Union[str, type, None], optional
        Parser class, or a fully qualified name loaded on first use
    renderer_class : Union[str, type, None], optional
        Renderer class, or a fully qualified name loaded on first use
    parser_options_class : Union[str, type, None]
        Parser options class or its fully qualified name
    renderer_options_class : Union[str, type, None]
        Renderer options class or its fully qualified name
    renderer_defaults : dict[str, Any]
        Renderer option values implied by the format, applied before any
        user overrides (e.g. ``{"mode": "strict"}`` for XML)
    description : str
        Human-readable description of the format
    priority : int
        Selection priority when several converters claim a format or an
        extension (higher wins)

    """

    format_name: str
    extensions: list[str] = field(default_factory=list)
    parser_class: Optional[Union[str, type]] = None
    renderer_class: Optional[Union[str, type]] = None
    parser_options_class: Optional[Union[str, type]] = None
    renderer_options_class: Optional[Union[str, type]] = None
    renderer_defaults: dict[str, Any] = field(default_factory=dict)
    description: str = ""
    priority: int = 0

    def matches_extension(self, filename: str) -> bool:
        """Check if filename matches any supported extension.

        Parameters
        ----------
        filename : str
            Filename to check

        Returns
        -------
        bool
            True if extension matches

        """
        if not filename:
            return False

        _, ext = os.path.splitext(filename.lower())
        return ext in self.extensions

    def get_parser_display_name(self) -> str:
        """Get friendly display name for the parser class."""
        return _display_name(self.parser_class)

    def get_renderer_display_name(self) -> str:
        """Get friendly display name for the renderer class."""
        return _display_name(self.renderer_class)

    def get_converter_display_string(self) -> str:
        """Get combined display string in the form ``Parser: X | Renderer: Y``."""
        return f"Parser: {self.get_parser_display_name()} | Renderer: {self.get_renderer_display_name()}"


def _display_name(class_spec: Optional[Union[str, type]]) -> str:
    if class_spec is None:
        return "N/A"
    if isinstance(class_spec, type):
        return f"{class_spec.__module__}.{class_spec.__qualname__}"
    return class_spec
