#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/emlc/parsers/markup.py
"""Angle-bracket markup to AST converter.

One parser covers the whole markup family (HTML, PHP-templated HTML, XML,
XAML, FXML). It is a recursive-descent scanner with one call frame per open
element, producing a tree of the same shape as the EML parser.

Recognized constructs:

- ``<!-- comment -->``
- ``<?php ... ?>`` raw code, ``<?import x?>`` imports, other ``<?target ...?>``
- ``<!DOCTYPE ...>`` style declarations and ``<![CDATA[...]]>`` sections
- ``<tag attr="v" flag>``, ``<tag/>``, ``</tag>``

A ``<`` that starts none of these is kept as literal text. Malformed
structure is recovered silently: a closing tag that matches an enclosing
element closes the elements in between, and a closing tag that matches
nothing is skipped.

"""

from __future__ import annotations

import logging

from emlc.ast import Attribute, Comment, Document, Element, Node, Text, Whitespace
from emlc.constants import RAW_TEXT_ELEMENTS, STRICT_MARKUP_EXTENSIONS, VOID_ELEMENTS
from emlc.converter_metadata import ConverterMetadata
from emlc.options.markup import MarkupParserOptions
from emlc.parsers._scanner import Scanner, is_ident_part, is_ident_start, is_whitespace, strip_whitespace
from emlc.parsers.base import BaseParser, ParserInput
from emlc.parsers.eml import declaration_from_raw, instruction_from_raw

logger = logging.getLogger(__name__)

_CDATA_OPEN = "<![CDATA["
_CDATA_CLOSE = "]]>"


def classify_text(text: str) -> Node | None:
    """Turn the text between two constructs into a node.

    Whitespace-only text becomes a Whitespace node when it holds two or more
    line breaks and is dropped otherwise. Any other text becomes a Text node
    with its edge whitespace intact.

    Examples
    --------
        >>> classify_text("\\n\\n\\n")
        Whitespace(line_count=3)
        >>> classify_text("\\n    ") is None
        True
        >>> classify_text(" Hi ")
        Text(content=' Hi ')

    """
    if not text:
        return None
    if not strip_whitespace(text):
        line_breaks = text.count("\n")
        if line_breaks > 1:
            return Whitespace(line_count=line_breaks)
        return None
    return Text(content=text)


class MarkupParser(BaseParser):
    """Convert HTML/XML/XAML/FXML/PHP markup to the AST.

    Parameters
    ----------
    options : MarkupParserOptions or None, default = None
        Parser configuration options

    Examples
    --------
        >>> doc = MarkupParser().parse_string("<foo></foo><bar/>")
        >>> [(el.tag, el.explicit_empty_block) for el in doc.children]
        [('foo', True), ('bar', False)]

    """

    def __init__(self, options: MarkupParserOptions | None = None) -> None:
        """Initialize the markup parser with options."""
        BaseParser._validate_options_type(options, MarkupParserOptions, "markup")
        options = options or MarkupParserOptions()
        super().__init__(options)
        self.options: MarkupParserOptions = options

    def parse(self, input_data: ParserInput) -> Document:
        """Parse markup input into an AST.

        Parameters
        ----------
        input_data : str, Path, IO[bytes], IO[str], or bytes
            Markup text, a path to a markup file, raw bytes, or a stream

        Returns
        -------
        Document
            Root of the parsed tree

        Raises
        ------
        ParsingError
            Only in strict mode, on the first structural anomaly

        """
        return self.parse_string(self._load_text_content(input_data))

    def parse_string(self, text: str) -> Document:
        """Parse markup source text (never treated as a path) into an AST."""
        self.anomalies = []
        scanner = Scanner(text)
        children, _closed = self._parse_children(scanner, open_tags=[])

        metadata: dict[str, object] = {"source_format": "markup"}
        if self.anomalies:
            metadata["anomaly_count"] = len(self.anomalies)
            logger.debug(f"Recovered from {len(self.anomalies)} anomalies while parsing markup")
        return Document(children=children, metadata=metadata)

    def _parse_children(self, scanner: Scanner, open_tags: list[str]) -> tuple[list[Node], bool]:
        """Parse nodes until the closing tag of the innermost open element.

        Parameters
        ----------
        scanner : Scanner
            Cursor over the document
        open_tags : list[str]
            Tags of the open elements, outermost first

        Returns
        -------
        tuple[list[Node], bool]
            The parsed nodes, and whether the innermost element's closing tag
            was found and consumed. False means a mismatched closing tag was
            left for an enclosing frame, or the input ended.

        """
        nodes: list[Node] = []

        while not scanner.eof():
            construct = self._find_construct(scanner)
            if construct == -1:
                self._append(nodes, classify_text(scanner.rest()))
                scanner.pos = scanner.length
                break

            self._append(nodes, classify_text(scanner.slice(scanner.pos, construct)))
            scanner.pos = construct

            if scanner.startswith("<!--"):
                nodes.append(self._parse_comment(scanner))
            elif scanner.startswith(_CDATA_OPEN):
                nodes.append(self._parse_cdata(scanner))
            elif scanner.startswith("<?"):
                nodes.append(self._parse_instruction(scanner))
            elif scanner.startswith("</"):
                close_start = scanner.pos
                scanner.advance(2)
                name = scanner.read_while(is_ident_part)
                if open_tags and name == open_tags[-1]:
                    self._consume_tag_end(scanner, close_start)
                    return nodes, True
                if name in open_tags:
                    self._record_anomaly(
                        "mismatched-close-tag",
                        close_start,
                        f"</{name}> closes <{name}> while <{open_tags[-1]}> is still open",
                    )
                    scanner.pos = close_start
                    return nodes, False
                self._record_anomaly("stray-close-tag", close_start, f"</{name}> does not match any open element")
                self._consume_tag_end(scanner, close_start)
            elif scanner.startswith("<!"):
                nodes.append(self._parse_declaration(scanner))
            else:
                nodes.append(self._parse_element(scanner, open_tags))

        if open_tags:
            self._record_anomaly("unclosed-element", scanner.pos, f"<{open_tags[-1]}> is not closed before end of input")
        return nodes, False

    @staticmethod
    def _append(nodes: list[Node], node: Node | None) -> None:
        if node is not None:
            nodes.append(node)

    @staticmethod
    def _find_construct(scanner: Scanner) -> int:
        """Return the offset of the next ``<`` that starts a construct, or -1."""
        index = scanner.find("<")
        while index != -1:
            following = scanner.peek(index - scanner.pos + 1)
            if following in ("!", "?"):
                return index
            if following == "/" and is_ident_start(scanner.peek(index - scanner.pos + 2)):
                return index
            if is_ident_start(following):
                return index
            index = scanner.find("<", index + 1)
        return -1

    def _consume_tag_end(self, scanner: Scanner, tag_start: int) -> None:
        """Consume through the next ``>``."""
        _skipped, closed = scanner.read_until(">")
        if not closed:
            self._record_anomaly("unterminated-tag", tag_start, "Tag is not closed before end of input")

    def _parse_comment(self, scanner: Scanner) -> Comment:
        start = scanner.pos
        scanner.advance(4)
        content, closed = scanner.read_until("-->")
        if not closed:
            self._record_anomaly("unterminated-comment", start, "Comment is not closed before end of input")
        return Comment(content=strip_whitespace(content))

    def _parse_cdata(self, scanner: Scanner) -> Text:
        """Keep a CDATA section, delimiters included, as text."""
        start = scanner.pos
        scanner.advance(len(_CDATA_OPEN))
        body, closed = scanner.read_until(_CDATA_CLOSE)
        if not closed:
            self._record_anomaly("unterminated-comment", start, "CDATA section is not closed before end of input")
        return Text(content=_CDATA_OPEN + body + _CDATA_CLOSE)

    def _parse_instruction(self, scanner: Scanner) -> Node:
        start = scanner.pos
        scanner.advance(2)
        raw, closed = scanner.read_until("?>")
        if not closed:
            self._record_anomaly(
                "unterminated-instruction", start, "Processing instruction is not closed before end of input"
            )
        return instruction_from_raw(raw)

    def _parse_declaration(self, scanner: Scanner) -> Node:
        start = scanner.pos
        scanner.advance(2)
        raw, closed = scanner.read_until(">")
        if not closed:
            self._record_anomaly("unterminated-tag", start, "Declaration is not closed before end of input")
        return declaration_from_raw(raw)

    def _parse_element(self, scanner: Scanner, open_tags: list[str]) -> Element:
        """Parse an opening tag and, unless it is void or self-closed, its children."""
        tag_start = scanner.pos
        scanner.advance()
        tag = scanner.read_while(is_ident_part)
        attributes = self._parse_attributes(scanner)

        self_closing = False
        if scanner.startswith("/>"):
            self_closing = True
            scanner.advance()
        if scanner.peek() == ">":
            scanner.advance()
        else:
            self._record_anomaly("unterminated-tag", tag_start, f"<{tag}> is not closed before end of input")

        if self_closing or tag in VOID_ELEMENTS:
            return Element(tag=tag, attributes=attributes)

        if len(open_tags) + 1 > self.options.max_nesting_depth:
            self._record_anomaly(
                "nesting-too-deep",
                tag_start,
                f"<{tag}> exceeds max_nesting_depth={self.options.max_nesting_depth}; content parsed as siblings",
            )
            return Element(tag=tag, attributes=attributes, explicit_empty_block=True)

        if tag.lower() in RAW_TEXT_ELEMENTS:
            children = self._parse_raw_text(scanner, tag, tag_start)
        else:
            open_tags.append(tag)
            try:
                children, _closed = self._parse_children(scanner, open_tags)
            finally:
                open_tags.pop()

        return Element(tag=tag, attributes=attributes, children=children, explicit_empty_block=not children)

    def _parse_attributes(self, scanner: Scanner) -> list[Attribute]:
        """Parse attributes up to ``>`` or ``/>``, skipping characters that cannot start a key."""
        attributes: list[Attribute] = []

        while not scanner.eof():
            separator = scanner.read_whitespace()
            char = scanner.peek()
            if char == "" or char == ">" or scanner.startswith("/>"):
                break
            if not is_ident_start(char):
                self._record_anomaly("unexpected-character", scanner.pos, f"Unexpected character {char!r} in tag")
                scanner.advance()
                continue

            key = scanner.read_while(is_ident_part)
            value: str | None = None
            checkpoint = scanner.pos
            scanner.skip_whitespace()
            if scanner.peek() == "=":
                scanner.advance()
                scanner.skip_whitespace()
                value = self._read_attribute_value(scanner)
            else:
                scanner.pos = checkpoint

            attributes.append(Attribute(key=key, value=value, separator=separator))

        return attributes

    def _read_attribute_value(self, scanner: Scanner) -> str:
        """Read a quoted value, or a bare one up to whitespace, ``>`` or ``/>``."""
        quote = scanner.peek()
        if quote in ('"', "'"):
            start = scanner.pos
            scanner.advance()
            value, closed = scanner.read_until(quote)
            if not closed:
                self._record_anomaly("unterminated-tag", start, "Quoted attribute value is not closed")
            return value

        start = scanner.pos
        while not scanner.eof():
            char = scanner.peek()
            if is_whitespace(char) or char == ">" or scanner.startswith("/>"):
                break
            scanner.advance()
        return scanner.slice(start, scanner.pos)

    def _parse_raw_text(self, scanner: Scanner, tag: str, tag_start: int) -> list[Node]:
        """Read a ``<script>``/``<style>`` body as text up to its closing tag (any case)."""
        closing = "</" + tag.lower()
        end = scanner.text.lower().find(closing, scanner.pos)
        if end == -1:
            self._record_anomaly("unclosed-element", tag_start, f"<{tag}> is not closed before end of input")
            body = scanner.rest()
            scanner.pos = scanner.length
        else:
            body = scanner.slice(scanner.pos, end)
            scanner.pos = end
            self._consume_tag_end(scanner, end)
        return [Text(content=body)] if body else []


def _markup_metadata(format_name: str, extensions: list[str], description: str) -> ConverterMetadata:
    strict = any(ext in STRICT_MARKUP_EXTENSIONS for ext in extensions)
    return ConverterMetadata(
        format_name=format_name,
        extensions=extensions,
        parser_class=MarkupParser,
        renderer_class="emlc.renderers.markup.MarkupRenderer",
        parser_options_class=MarkupParserOptions,
        renderer_options_class="emlc.options.markup.MarkupRendererOptions",
        renderer_defaults={"mode": "strict" if strict else "loose"},
        description=description,
        priority=10,
    )


# Converter metadata for registration; one entry per markup dialect
CONVERTER_METADATA = [
    _markup_metadata("html", [".html", ".htm"], "HTML (loose: void tags, expanded empty elements)"),
    _markup_metadata("php", [".php"], "PHP-templated HTML (loose)"),
    _markup_metadata("xml", [".xml"], "XML (strict: self-closing empty elements)"),
    _markup_metadata("xaml", [".xaml"], "XAML (strict)"),
    _markup_metadata("fxml", [".fxml"], "JavaFX FXML (strict)"),
]
