#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/emlc/renderers/eml.py
"""EML rendering from AST.

This module provides the EmlRenderer class which converts the AST to EML
text, depth-first, indenting each nesting level by ``indent_width`` spaces.

Element blocks are chosen from the children:

- no children and no explicit block: ``tag``
- no children with an explicit block: ``tag {}``
- a single one-line text child: ``tag { text }``
- a single multi-line text child: ``tag {`` payload ``}``, payload verbatim
- anything else: a braced block with one child per line

Markup constructs with no EML syntax (``<?xml ...?>``, ``<!DOCTYPE ...>``)
are written as block comments marked with ``!`` (``/*! <?xml ...?> */``),
which the EML parser turns back into the original instruction. Comments
without the marker are never restored as markup.

"""

from __future__ import annotations

import logging
import textwrap

from emlc.ast import (
    Attribute,
    Comment,
    CommentBlock,
    Document,
    Element,
    Import,
    NodeVisitor,
    ProcessingInstruction,
    Text,
    Whitespace,
)
from emlc.constants import EML_PASSTHROUGH_MARKER
from emlc.options.eml import EmlRendererOptions
from emlc.renderers.base import BaseRenderer, RendererOutput

logger = logging.getLogger(__name__)


class EmlRenderer(NodeVisitor, BaseRenderer):
    """Render AST to EML text.

    Parameters
    ----------
    options : EmlRendererOptions or None, default = None
        EML rendering options

    Examples
    --------
        >>> from emlc.ast import Document, Element, Text
        >>> doc = Document(children=[Element("h1", children=[Text(" Hello World ")])])
        >>> EmlRenderer().render_to_string(doc)
        'h1 { Hello World }\\n'

    """

    def __init__(self, options: EmlRendererOptions | None = None):
        """Initialize the EML renderer with options."""
        BaseRenderer._validate_options_type(options, EmlRendererOptions, "eml")
        options = options or EmlRendererOptions()
        BaseRenderer.__init__(self, options)
        self.options: EmlRendererOptions = options
        self._output: list[str] = []
        self._depth: int = 0

    def render_to_string(self, doc: Document) -> str:
        """Render AST document to an EML string.

        Parameters
        ----------
        doc : Document
            AST Document node to render

        Returns
        -------
        str
            EML text, one trailing line break per top-level construct

        """
        self._output = []
        self._depth = 0
        doc.accept(self)
        return "".join(self._output)

    def render(self, doc: Document, output: RendererOutput) -> None:
        """Render AST document to an EML file or stream.

        Parameters
        ----------
        doc : Document
            AST Document node to render
        output : str, Path, IO[bytes], or IO[str]
            Output destination

        """
        self.write_text_output(self.render_to_string(doc), output)

    def _indent(self) -> str:
        return " " * (self.options.indent_width * self._depth)

    def _emit_line(self, line: str) -> None:
        self._output.append(self._indent() + line + "\n")

    def visit_document(self, node: Document) -> None:
        """Render the top-level node sequence at depth zero."""
        for child in node.children:
            child.accept(self)

    def visit_element(self, node: Element) -> None:
        """Render ``tag [ (attributes) ] [ block ]``."""
        head = node.tag + self._render_attributes(node.attributes)

        if not node.children:
            self._emit_line(head + " {}" if node.explicit_empty_block else head)
            return

        text = node.single_text
        if text is not None:
            stripped = text.content.strip()
            if not stripped:
                self._emit_line(head + " {}")
            elif not text.has_line_break:
                self._emit_line(f"{head} {{ {stripped} }}")
            else:
                payload = self._block_payload(text.content)
                self._output.append(f"{self._indent()}{head} {{{payload}{self._indent()}}}\n")
            return

        self._emit_line(head + " {")
        self._depth += 1
        for child in node.children:
            child.accept(self)
        self._depth -= 1
        self._emit_line("}")

    def _render_attributes(self, attributes: list[Attribute]) -> str:
        """Render ``(key="value", flag)``; empty string when there are no attributes."""
        if not attributes:
            return ""
        parts = []
        for attr in attributes:
            if attr.is_boolean:
                parts.append(attr.key)
            else:
                parts.append(f"{attr.key}={self._quote_attribute_value(attr.value or '')}")
        return " (" + ", ".join(parts) + ")"

    def visit_text(self, node: Text) -> None:
        """Render text that shares its parent with other nodes on its own line."""
        stripped = node.content.strip()
        if stripped:
            self._emit_line(stripped)

    def visit_comment(self, node: Comment) -> None:
        """Render ``// text``; multi-line comments become ``/* text */``."""
        if "\n" in node.content:
            self._emit_line(f"/* {node.content} */")
        elif node.content:
            self._emit_line(f"// {node.content}")
        else:
            self._emit_line("//")

    def visit_comment_block(self, node: CommentBlock) -> None:
        """Render ``/*payload*/`` with the payload untouched."""
        self._emit_line(f"/*{node.content}*/")

    def visit_processing_instruction(self, node: ProcessingInstruction) -> None:
        """Render raw code as ``php { ... }``; other instructions as passthrough comments."""
        if not node.is_raw_code:
            self._emit_line(f"/*{EML_PASSTHROUGH_MARKER} {self._instruction_markup(node)} */")
            return

        lines = textwrap.dedent(node.content).split("\n")
        while lines and not lines[0].strip():
            lines.pop(0)
        while lines and not lines[-1].strip():
            lines.pop()

        if not lines:
            self._emit_line(f"{node.target} {{}}")
            return

        self._emit_line(f"{node.target} {{")
        self._depth += 1
        for line in lines:
            if line.strip():
                self._emit_line(line.rstrip())
            else:
                self._output.append("\n")
        self._depth -= 1
        self._emit_line("}")

    def visit_import(self, node: Import) -> None:
        """Render ``import payload;``."""
        self._emit_line(f"import {node.content};")

    def visit_whitespace(self, node: Whitespace) -> None:
        """Render ``line_count - 1`` blank lines."""
        self._output.append("\n" * node.blank_lines)
