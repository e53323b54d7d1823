#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/emlc/parsers/eml.py
"""EML to AST converter.

This module provides the recursive-descent parser for EML, the compact
element notation::

    // line comment
    /* block comment */
    import com.example.Foo;

    div (class="card", hidden) {
        h1 { Hello World }
        pre {
            kept   exactly
        }
        php {
            echo $title;
        }
    }

Content blocks are interpreted by tag name. ``php`` blocks are raw code and
become a ``ProcessingInstruction``. ``pre``, ``code``, ``script`` and
``style`` blocks are verbatim text. Any other block is re-parsed as nested
EML when it contains an identifier directly followed by ``(`` or ``{``, and
is otherwise kept as a single text child exactly as written.

"""

from __future__ import annotations

import logging
import re

from emlc.ast import (
    Attribute,
    Comment,
    CommentBlock,
    Document,
    Element,
    Import,
    Node,
    ProcessingInstruction,
    Text,
    Whitespace,
)
from emlc.constants import (
    EML_EXTENSION,
    EML_NESTED_SYNTAX_PATTERN,
    EML_PASSTHROUGH_MARKER,
    RAW_CODE_TAGS,
    VERBATIM_TAGS,
)
from emlc.converter_metadata import ConverterMetadata
from emlc.options.eml import EmlParserOptions
from emlc.parsers._scanner import Scanner, is_ident_part, is_ident_start, is_whitespace, strip_whitespace
from emlc.parsers.base import BaseParser, ParserInput

logger = logging.getLogger(__name__)

_NESTED_SYNTAX_RE = re.compile(EML_NESTED_SYNTAX_PATTERN)
_BRACE_RE = re.compile(r"[{}]")

_IMPORT_KEYWORD = "import"


def contains_eml_syntax(text: str) -> bool:
    """Return True if a block body looks like nested EML rather than plain text.

    The test is a single search for an identifier immediately followed
    (optionally after whitespace) by ``(`` or ``{``. Plain text that happens
    to contain such a sequence, e.g. ``call foo(x)``, is classified as
    nested EML.

    Examples
    --------
        >>> contains_eml_syntax(" span { Hi } ")
        True
        >>> contains_eml_syntax(" Hello World ")
        False

    """
    return _NESTED_SYNTAX_RE.search(text) is not None


def markup_passthrough_node(payload: str) -> Node | None:
    """Restore a markup declaration or instruction kept inside an EML block comment.

    EML has no syntax for ``<?xml ...?>`` or ``<!DOCTYPE ...>``, so the EML
    renderer writes them as marked block comments (``/*! <?xml ...?> */``).
    This reverses that. Unmarked comments stay comments even when their text
    looks like markup.

    Parameters
    ----------
    payload : str
        Block comment payload, marker included

    Returns
    -------
    Node or None
        A ProcessingInstruction for ``<?target ...?>`` and ``<!X ...>``
        payloads behind the marker, None for ordinary comments

    """
    if not payload.startswith(EML_PASSTHROUGH_MARKER):
        return None
    stripped = strip_whitespace(payload[len(EML_PASSTHROUGH_MARKER) :])
    if stripped.startswith("<?") and stripped.endswith("?>") and len(stripped) >= 4:
        return instruction_from_raw(stripped[2:-2])
    if stripped.startswith("<!") and not stripped.startswith("<!--") and stripped.endswith(">"):
        return declaration_from_raw(stripped[2:-1])
    return None


def instruction_from_raw(raw: str) -> Node:
    """Build the node for the text between ``<?`` and ``?>``.

    ``php`` yields a raw-code ProcessingInstruction whose payload is kept
    byte-for-byte, ``import `` yields an Import, and anything else a generic
    ProcessingInstruction split into target and payload.

    Examples
    --------
        >>> instruction_from_raw("import javafx.scene.control.Button")
        Import(content='javafx.scene.control.Button')
        >>> instruction_from_raw('xml version="1.0"')
        ProcessingInstruction(target='xml', content='version="1.0"')

    """
    if raw.startswith("php") and not is_ident_part(raw[3:4]):
        return ProcessingInstruction(target="php", content=raw[3:])
    if raw.startswith("import "):
        return Import(content=strip_whitespace(raw[7:]))

    scanner = Scanner(raw)
    target = scanner.read_while(lambda c: not is_whitespace(c))
    return ProcessingInstruction(target=target, content=strip_whitespace(scanner.rest()))


def declaration_from_raw(raw: str) -> ProcessingInstruction:
    """Build the node for the text between ``<!`` and ``>`` (e.g. ``DOCTYPE html``)."""
    scanner = Scanner(raw)
    name = scanner.read_while(lambda c: not is_whitespace(c))
    return ProcessingInstruction(target="!" + name, content=strip_whitespace(scanner.rest()))


class EmlParser(BaseParser):
    """Convert EML source text to the AST.

    Parameters
    ----------
    options : EmlParserOptions or None, default = None
        Parser configuration options

    Examples
    --------
        >>> doc = EmlParser().parse_string('div (class="a") { span { Hi } }')
        >>> doc.children[0].children[0].tag
        'span'

    """

    def __init__(self, options: EmlParserOptions | None = None) -> None:
        """Initialize the EML parser with options."""
        BaseParser._validate_options_type(options, EmlParserOptions, "eml")
        options = options or EmlParserOptions()
        super().__init__(options)
        self.options: EmlParserOptions = options

    def parse(self, input_data: ParserInput) -> Document:
        """Parse EML input into an AST.

        Parameters
        ----------
        input_data : str, Path, IO[bytes], IO[str], or bytes
            EML text, a path to an ``.eml`` file, raw bytes, or a stream

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
        """Parse EML source text (never treated as a path) into an AST."""
        self.anomalies = []
        children = self._parse_fragment(text, depth=0, offset=0)

        metadata: dict[str, object] = {"source_format": "eml"}
        if self.anomalies:
            metadata["anomaly_count"] = len(self.anomalies)
            logger.debug(f"Recovered from {len(self.anomalies)} anomalies while parsing EML")
        return Document(children=children, metadata=metadata)

    def _parse_fragment(self, text: str, depth: int, offset: int) -> list[Node]:
        """Parse a complete node sequence.

        Parameters
        ----------
        text : str
            Source fragment (the whole document or the body of a block)
        depth : int
            Element nesting level of the nodes in this fragment
        offset : int
            Position of ``text`` in the document, used for anomaly offsets

        """
        scanner = Scanner(text)
        nodes: list[Node] = []

        while not scanner.eof():
            gap = scanner.read_whitespace()
            line_breaks = gap.count("\n")
            if line_breaks > 1:
                nodes.append(Whitespace(line_count=line_breaks))
            if scanner.eof():
                break

            if scanner.startswith("//"):
                scanner.advance(2)
                content = scanner.read_while(lambda c: c != "\n")
                nodes.append(Comment(content=strip_whitespace(content)))
                continue

            if scanner.startswith("/*"):
                start = scanner.pos
                scanner.advance(2)
                content, closed = scanner.read_until("*/")
                if not closed:
                    self._record_anomaly(
                        "unterminated-comment", offset + start, "Block comment is not closed before end of input"
                    )
                nodes.append(markup_passthrough_node(content) or CommentBlock(content=content))
                continue

            import_node = self._try_parse_import(scanner)
            if import_node is not None:
                nodes.append(import_node)
                continue

            if not is_ident_start(scanner.peek()):
                self._record_anomaly(
                    "unexpected-character", offset + scanner.pos, f"Unexpected character {scanner.peek()!r}"
                )
                scanner.advance()
                continue

            nodes.append(self._parse_element(scanner, depth, offset))

        return nodes

    @staticmethod
    def _try_parse_import(scanner: Scanner) -> Import | None:
        """Parse ``import <payload>;`` at the cursor.

        The keyword must be followed by whitespace and the directive needs a
        terminating ``;``. Otherwise nothing is consumed and ``import`` is
        scanned as an ordinary tag.
        """
        if not scanner.startswith(_IMPORT_KEYWORD):
            return None
        after = scanner.peek(len(_IMPORT_KEYWORD))
        if after and not is_whitespace(after):
            return None

        end = scanner.find(";", scanner.pos + len(_IMPORT_KEYWORD))
        if end == -1:
            return None

        content = scanner.slice(scanner.pos + len(_IMPORT_KEYWORD), end)
        scanner.pos = end + 1
        return Import(content=strip_whitespace(content))

    def _parse_element(self, scanner: Scanner, depth: int, offset: int) -> Node:
        """Parse ``tag [ (attributes) ] [ { block } ]`` at the cursor."""
        tag = scanner.read_while(is_ident_part)

        attributes: list[Attribute] = []
        if self._skip_to(scanner, "("):
            scanner.advance()
            attributes = self._parse_attributes(scanner, offset)

        if not self._skip_to(scanner, "{"):
            return Element(tag=tag, attributes=attributes)

        block_start = scanner.pos
        scanner.advance()
        inner = self._read_balanced_braces(scanner, offset + block_start)

        if tag in RAW_CODE_TAGS:
            return ProcessingInstruction(target=tag, content=inner)

        children: list[Node] = []
        if tag in VERBATIM_TAGS:
            if inner:
                children.append(Text(content=inner))
        elif contains_eml_syntax(inner):
            if depth + 1 > self.options.max_nesting_depth:
                self._record_anomaly(
                    "nesting-too-deep",
                    offset + block_start,
                    f"Block of <{tag}> exceeds max_nesting_depth={self.options.max_nesting_depth}; kept as text",
                )
                children.append(Text(content=inner))
            else:
                children = self._parse_fragment(inner, depth + 1, offset + block_start + 1)
        elif inner:
            children.append(Text(content=inner))

        return Element(tag=tag, attributes=attributes, children=children, explicit_empty_block=not children)

    @staticmethod
    def _skip_to(scanner: Scanner, char: str) -> bool:
        """Skip whitespace if ``char`` follows it; otherwise leave the cursor where it was.

        Leaving the whitespace unconsumed lets blank lines after a bare
        element become a Whitespace node.
        """
        checkpoint = scanner.pos
        scanner.skip_whitespace()
        if scanner.peek() == char:
            return True
        scanner.pos = checkpoint
        return False

    def _parse_attributes(self, scanner: Scanner, offset: int) -> list[Attribute]:
        """Parse an attribute list after its opening ``(`` through the closing ``)``."""
        attributes: list[Attribute] = []
        list_start = scanner.pos - 1

        while True:
            separator = scanner.read_while(lambda c: is_whitespace(c) or c == ",")
            if scanner.eof():
                self._record_anomaly(
                    "unterminated-tag", offset + list_start, "Attribute list is not closed before end of input"
                )
                break
            if scanner.peek() == ")":
                scanner.advance()
                break

            key = scanner.read_while(is_ident_part)
            if not key:
                self._record_anomaly(
                    "empty-attribute-key",
                    offset + scanner.pos,
                    f"Unexpected character {scanner.peek()!r} in attribute list",
                )
                scanner.advance()
                continue

            value: str | None = None
            checkpoint = scanner.pos
            scanner.skip_whitespace()
            if scanner.peek() == "=":
                scanner.advance()
                scanner.skip_whitespace()
                value = self._read_attribute_value(scanner, offset)
            else:
                scanner.pos = checkpoint

            attributes.append(Attribute(key=key, value=value, separator=separator))

        return attributes

    def _read_attribute_value(self, scanner: Scanner, offset: int) -> str:
        """Read a quoted value, or a bare one up to whitespace, ``)`` or ``,``."""
        quote = scanner.peek()
        if quote in ('"', "'"):
            start = scanner.pos
            scanner.advance()
            value, closed = scanner.read_until(quote)
            if not closed:
                self._record_anomaly(
                    "unterminated-tag", offset + start, "Quoted attribute value is not closed before end of input"
                )
            return value
        return scanner.read_while(lambda c: not is_whitespace(c) and c not in "),")

    def _read_balanced_braces(self, scanner: Scanner, block_start: int) -> str:
        """Consume a brace block body and its closing ``}``; the opening ``{`` is already consumed.

        Unbalanced input runs to the end of the text.
        """
        start = scanner.pos
        depth = 1
        for match in _BRACE_RE.finditer(scanner.text, scanner.pos):
            if match.group() == "{":
                depth += 1
                continue
            depth -= 1
            if depth == 0:
                scanner.pos = match.end()
                return scanner.slice(start, match.start())

        self._record_anomaly("unterminated-block", block_start, "Content block is not closed before end of input")
        scanner.pos = scanner.length
        return scanner.slice(start)


# Converter metadata for registration
CONVERTER_METADATA = ConverterMetadata(
    format_name="eml",
    extensions=[EML_EXTENSION],
    parser_class=EmlParser,
    renderer_class="emlc.renderers.eml.EmlRenderer",
    parser_options_class=EmlParserOptions,
    renderer_options_class="emlc.options.eml.EmlRendererOptions",
    description="Compact element notation: tag (key=\"value\") { content }",
    priority=10,
)
