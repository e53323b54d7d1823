#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/emlc/renderers/__init__.py
"""Back-end renderers writing the shared document tree."""

from emlc.renderers.base import BaseRenderer
from emlc.renderers.eml import EmlRenderer
from emlc.renderers.markup import MarkupRenderer

__all__ = [
    "BaseRenderer",
    "EmlRenderer",
    "MarkupRenderer",
]
