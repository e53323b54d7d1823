#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/emlc/constants.py
"""Constants shared across the emlc parsers, renderers and CLI.

This module centralizes the fixed tag sets that drive content handling,
the default option values, and the format names used by the converter
registry.

"""

from __future__ import annotations

from typing import Literal

__version__ = "1.0.0"

# =============================================================================
# Tree
# =============================================================================

# Tag name reserved for the synthetic root node; never rendered with tags.
ROOT_TAG = "ROOT"

# =============================================================================
# Tag sets
# =============================================================================

# Standard HTML void elements: no content model, no closing tag.
VOID_ELEMENTS: frozenset[str] = frozenset(
    {
        "area",
        "base",
        "br",
        "col",
        "embed",
        "hr",
        "img",
        "input",
        "link",
        "meta",
        "param",
        "source",
        "track",
        "wbr",
    }
)

# EML tags whose block body is captured as raw code (ProcessingInstruction).
RAW_CODE_TAGS: frozenset[str] = frozenset({"php"})

# EML tags whose block body is captured verbatim as a single Text child.
VERBATIM_TAGS: frozenset[str] = frozenset({"pre", "code", "script", "style"})

# Markup elements whose body is raw text up to the matching close tag.
RAW_TEXT_ELEMENTS: frozenset[str] = frozenset({"script", "style"})

# =============================================================================
# Formats
# =============================================================================

DocumentFormat = Literal["eml", "html", "php", "xml", "xaml", "fxml"]

MarkupMode = Literal["strict", "loose"]

MARKUP_MODE_STRICT: MarkupMode = "strict"
MARKUP_MODE_LOOSE: MarkupMode = "loose"

# Output extensions rendered in strict (XML-family) mode.
STRICT_MARKUP_EXTENSIONS: tuple[str, ...] = (".xml", ".xaml", ".fxml")

EML_EXTENSION = ".eml"

# =============================================================================
# Defaults
# =============================================================================

DEFAULT_INDENT_WIDTH = 4
DEFAULT_STRICT_MODE = False
DEFAULT_MAX_NESTING_DEPTH = 128
# Parsers and renderers use two call frames per nesting level.
MAX_NESTING_DEPTH_LIMIT = 256
DEFAULT_MARKUP_MODE: MarkupMode = MARKUP_MODE_LOOSE
DEFAULT_MINIMIZE_BOOLEAN_ATTRIBUTES = False
DEFAULT_PRESERVE_ATTRIBUTE_SPACING = False

# Regex used to decide whether an EML block holds nested elements or plain text.
EML_NESTED_SYNTAX_PATTERN = r"\b[a-zA-Z_][a-zA-Z0-9_.-]*\s*[({]"

# Leading character of an EML block comment that carries a markup declaration or instruction.
EML_PASSTHROUGH_MARKER = "!"
