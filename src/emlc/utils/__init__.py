#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/emlc/utils/__init__.py
"""Utility modules for the emlc package.

Encoding detection for source files and output destination handling.
"""

from emlc.utils.encoding import normalize_stream_to_text, read_text_with_encoding_detection
from emlc.utils.io_utils import write_content

__all__ = [
    "normalize_stream_to_text",
    "read_text_with_encoding_detection",
    "write_content",
]
