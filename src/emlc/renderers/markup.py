#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/emlc/renderers/markup.py
"""Angle-bracket markup rendering from AST.

This module provides the MarkupRenderer class which converts the AST to
HTML/PHP (``loose`` mode) or XML/XAML/FXML (``strict`` mode).

The modes differ only in how childless elements close:

- strict: ``<tag/>``, or ``<tag></tag>`` when the source wrote an explicit
  empty block
- loose: void elements render as ``<tag>``; every other element expands to
  ``<tag></tag>``

"""

from __future__ import annotations

import logging

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
from emlc.options.markup import MarkupRendererOptions
from emlc.parsers._scanner import WHITESPACE_CHARS
from emlc.renderers.base import BaseRenderer, RendererOutput

logger = logging.getLogger(__name__)


class MarkupRenderer(NodeVisitor, BaseRenderer):
    """Render AST to angle-bracket markup.

    Parameters
    ----------
    options : MarkupRendererOptions or None, default = None
        Markup rendering options; ``mode`` selects strict or loose output

    Examples
    --------
        >>> from emlc.ast import Document, Element
        >>> doc = Document(children=[Element("br"), Element("div")])
        >>> MarkupRenderer().render_to_string(doc)
        '<br>\\n<div></div>\\n'
        >>> MarkupRenderer(MarkupRendererOptions(mode="strict")).render_to_string(doc)
        '<br/>\\n<div/>\\n'

    """

    def __init__(self, options: MarkupRendererOptions | None = None):
        """Initialize the markup renderer with options."""
        BaseRenderer._validate_options_type(options, MarkupRendererOptions, "markup")
        options = options or MarkupRendererOptions()
        BaseRenderer.__init__(self, options)
        self.options: MarkupRendererOptions = options
        self._output: list[str] = []
        self._depth: int = 0

    def render_to_string(self, doc: Document) -> str:
        """Render AST document to a markup string.

        Parameters
        ----------
        doc : Document
            AST Document node to render

        Returns
        -------
        str
            Markup text, one trailing line break per top-level construct

        """
        self._output = []
        self._depth = 0
        doc.accept(self)
        return "".join(self._output)

    def render(self, doc: Document, output: RendererOutput) -> None:
        """Render AST document to a markup file or stream.

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
        """Render an element with its content inline, as a verbatim block, or as nested lines."""
        open_tag = f"<{node.tag}{self._render_attributes(node.attributes)}"
        close_tag = f"</{node.tag}>"

        text = node.single_text
        if not node.children or (text is not None and not text.content.strip()):
            self._emit_line(self._render_childless(node, open_tag))
            return

        if text is not None:
            if not text.has_line_break:
                self._emit_line(f"{open_tag}>{text.content.strip()}{close_tag}")
            else:
                payload = self._block_payload(text.content)
                self._output.append(f"{self._indent()}{open_tag}>{payload}{self._indent()}{close_tag}\n")
            return

        self._emit_line(open_tag + ">")
        self._depth += 1
        for child in node.children:
            child.accept(self)
        self._depth -= 1
        self._emit_line(close_tag)

    def _render_childless(self, node: Element, open_tag: str) -> str:
        """Return the self-closed, void or expanded-empty form of an element."""
        if self.options.is_strict:
            if node.explicit_empty_block or node.children:
                return f"{open_tag}></{node.tag}>"
            return open_tag + "/>"
        if node.is_void:
            return open_tag + ">"
        return f"{open_tag}></{node.tag}>"

    def _render_attributes(self, attributes: list[Attribute]) -> str:
        """Render `` key="value"`` pairs in source order."""
        parts = []
        for attr in attributes:
            separator = " "
            if self.options.preserve_attribute_spacing and attr.separator and not attr.separator.strip(WHITESPACE_CHARS):
                separator = attr.separator

            if attr.is_boolean and self.options.minimize_boolean_attributes and not self.options.is_strict:
                parts.append(separator + attr.key)
            else:
                parts.append(f"{separator}{attr.key}={self._quote_attribute_value(attr.value or '', escape=True)}")
        return "".join(parts)

    def visit_text(self, node: Text) -> None:
        """Render text that shares its parent with other nodes on its own line."""
        stripped = node.content.strip()
        if stripped:
            self._emit_line(stripped)

    def visit_comment(self, node: Comment) -> None:
        """Render ``<!-- text -->`` with the payload trimmed."""
        self._emit_line(f"<!-- {node.content.strip()} -->")

    def visit_comment_block(self, node: CommentBlock) -> None:
        """Render ``<!--payload-->`` with the payload untouched."""
        self._emit_line(f"<!--{node.content}-->")

    def visit_processing_instruction(self, node: ProcessingInstruction) -> None:
        """Render ``<?php ... ?>`` on their own lines; other instructions on one line."""
        if node.is_raw_code:
            payload = self._block_payload(node.content)
            self._output.append(f"{self._indent()}<?{node.target}{payload}{self._indent()}?>\n")
            return
        self._emit_line(self._instruction_markup(node))

    def visit_import(self, node: Import) -> None:
        """Render ``<?import payload?>``."""
        self._emit_line(f"<?import {node.content}?>")

    def visit_whitespace(self, node: Whitespace) -> None:
        """Render ``line_count - 1`` blank lines."""
        self._output.append("\n" * node.blank_lines)
