#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/emlc/renderers/base.py
"""Base classes for AST renderers.

This module defines the abstract base class that both renderers inherit
from, along with the text helpers they share: attribute value quoting,
block payload normalization and the markup spelling of processing
instructions.

"""

from __future__ import annotations

from abc import ABC, abstractmethod
from pathlib import Path
from typing import IO, Union

from emlc.ast import Document, ProcessingInstruction
from emlc.exceptions import InvalidOptionsError
from emlc.options.base import BaseRendererOptions
from emlc.utils.io_utils import write_content

RendererOutput = Union[str, Path, IO[bytes], IO[str]]


class BaseRenderer(ABC):
    """Abstract base class for the EML and markup renderers.

    Rendering is total: every tree the parsers can produce renders without
    error. Failures only come from writing the output.

    Parameters
    ----------
    options : BaseRendererOptions or None, default = None
        Format-specific rendering options

    """

    def __init__(self, options: BaseRendererOptions | None = None):
        """Initialize the renderer with optional configuration."""
        self.options = options

    @abstractmethod
    def render(self, doc: Document, output: RendererOutput) -> None:
        """Render the AST to a file or file-like object.

        Parameters
        ----------
        doc : Document
            AST Document node to render
        output : str, Path, IO[bytes], or IO[str]
            Output destination

        Raises
        ------
        OSError
            If output cannot be written

        """
        pass

    @abstractmethod
    def render_to_string(self, doc: Document) -> str:
        """Render the AST to a string.

        Parameters
        ----------
        doc : Document
            AST Document node to render

        Returns
        -------
        str
            Rendered document

        """
        pass

    @staticmethod
    def _validate_options_type(options: BaseRendererOptions | None, expected_type: type, renderer_name: str) -> None:
        """Validate that options are of the correct type for this renderer.

        Parameters
        ----------
        options : BaseRendererOptions or None
            The options object to validate
        expected_type : type
            The expected options class type
        renderer_name : str
            Name of the renderer (for error messages)

        Raises
        ------
        InvalidOptionsError
            If options are not None and not an instance of expected_type

        """
        if options is not None and not isinstance(options, expected_type):
            raise InvalidOptionsError(
                converter_name=renderer_name,
                expected_type=expected_type,
                received_type=type(options),
            )

    @staticmethod
    def write_text_output(text: str, output: RendererOutput) -> None:
        """Write text output to a file path or IO stream.

        Parameters
        ----------
        text : str
            Rendered text to write
        output : str, Path, IO[bytes], or IO[str]
            Output destination

        Examples
        --------
            >>> from io import StringIO
            >>> buffer = StringIO()
            >>> BaseRenderer.write_text_output("foo {}\\n", buffer)
            >>> buffer.getvalue()
            'foo {}\\n'

        """
        write_content(text, output)

    @staticmethod
    def _quote_attribute_value(value: str, escape: bool = False) -> str:
        """Quote an attribute value.

        Double quotes are used unless the value contains ``"`` but no ``'``.
        A value containing both has its ``"`` written as ``&quot;`` when
        ``escape`` is set.

        Examples
        --------
            >>> BaseRenderer._quote_attribute_value("a")
            '"a"'
            >>> BaseRenderer._quote_attribute_value('say "hi"')
            '\\'say "hi"\\''

        """
        if '"' in value and "'" not in value:
            return f"'{value}'"
        if escape:
            value = value.replace('"', "&quot;")
        return f'"{value}"'

    @staticmethod
    def _block_payload(text: str) -> str:
        """Normalize a multi-line payload that sits between an opening and a closing delimiter.

        Trailing spaces and tabs are trimmed (they are the source indentation
        of the closing delimiter), and the payload is made to start and end
        with a line break so both delimiters sit on their own lines.

        Examples
        --------
            >>> BaseRenderer._block_payload("\\n    x = 1\\n    ")
            '\\n    x = 1\\n'
            >>> BaseRenderer._block_payload(" echo 1;")
            '\\n echo 1;\\n'

        """
        payload = text.rstrip(" \t")
        if not payload.startswith("\n"):
            payload = "\n" + payload
        if not payload.endswith("\n"):
            payload += "\n"
        return payload

    @staticmethod
    def _instruction_markup(node: ProcessingInstruction) -> str:
        """Spell a generic instruction or declaration in markup syntax.

        Examples
        --------
            >>> BaseRenderer._instruction_markup(ProcessingInstruction("!DOCTYPE", "html"))
            '<!DOCTYPE html>'
            >>> BaseRenderer._instruction_markup(ProcessingInstruction("xml", 'version="1.0"'))
            '<?xml version="1.0"?>'

        """
        payload = f" {node.content}" if node.content else ""
        if node.is_declaration:
            return f"<{node.target}{payload}>"
        return f"<?{node.target}{payload}?>"
