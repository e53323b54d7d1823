#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/emlc/parsers/__init__.py
"""Front-end parsers producing the shared document tree."""

from emlc.parsers.base import BaseParser, ParseAnomaly
from emlc.parsers.eml import EmlParser
from emlc.parsers.markup import MarkupParser

__all__ = [
    "BaseParser",
    "ParseAnomaly",
    "EmlParser",
    "MarkupParser",
]
