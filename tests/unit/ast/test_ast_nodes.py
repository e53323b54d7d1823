#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# tests/unit/ast/test_ast_nodes.py
"""Unit tests for the AST node classes."""

import pytest

from emlc.ast import (
    Attribute,
    Comment,
    CommentBlock,
    Document,
    Element,
    Import,
    ProcessingInstruction,
    Text,
    Whitespace,
    get_node_children,
)
from emlc.constants import ROOT_TAG


@pytest.mark.unit
class TestDocument:
    """Tests for the synthetic root node."""

    def test_document_tag_is_root_sentinel(self) -> None:
        """The root exposes the reserved sentinel tag."""
        assert Document().tag == ROOT_TAG == "ROOT"

    def test_document_defaults_are_independent(self) -> None:
        """Each document gets its own children list and metadata dict."""
        first = Document()
        second = Document()
        first.children.append(Text("x"))
        first.metadata["a"] = 1

        assert second.children == []
        assert second.metadata == {}


@pytest.mark.unit
class TestElement:
    """Tests for Element nodes."""

    def test_is_void(self) -> None:
        """Void detection uses the HTML void element set, case-sensitively."""
        assert Element("br").is_void
        assert Element("img").is_void
        assert not Element("div").is_void
        assert not Element("BR").is_void

    def test_single_text(self) -> None:
        """single_text returns the sole Text child only."""
        text = Text(" Hi ")
        assert Element("h1", children=[text]).single_text is text
        assert Element("h1").single_text is None
        assert Element("h1", children=[Text("a"), Text("b")]).single_text is None
        assert Element("h1", children=[Element("b")]).single_text is None

    def test_get_attribute_returns_first_match(self) -> None:
        """Repeated keys are kept; lookup returns the first one."""
        element = Element("a", attributes=[Attribute("k", "1"), Attribute("k", "2"), Attribute("flag")])

        assert element.get_attribute("k") == "1"
        assert element.get_attribute("flag") is None
        assert element.get_attribute("missing", "default") == "default"
        assert len(element.attributes) == 3

    def test_explicit_empty_block_defaults_false(self) -> None:
        """Elements default to having no explicit empty block."""
        assert Element("foo").explicit_empty_block is False


@pytest.mark.unit
class TestLeafNodes:
    """Tests for the leaf node kinds."""

    def test_attribute_is_boolean(self) -> None:
        """An attribute without a value is boolean."""
        assert Attribute("disabled").is_boolean
        assert not Attribute("id", "").is_boolean

    def test_text_line_break_detection(self) -> None:
        """Text reports whether its payload spans lines."""
        assert not Text(" one line ").has_line_break
        assert Text("two\nlines").has_line_break

    def test_processing_instruction_kinds(self) -> None:
        """php is raw code and a leading ``!`` marks a declaration."""
        assert ProcessingInstruction("php", " echo 1; ").is_raw_code
        assert not ProcessingInstruction("xml", 'version="1.0"').is_raw_code
        assert ProcessingInstruction("!DOCTYPE", "html").is_declaration
        assert not ProcessingInstruction("php").is_declaration

    def test_whitespace_blank_lines(self) -> None:
        """A run of N line breaks represents N-1 blank lines."""
        assert Whitespace(2).blank_lines == 1
        assert Whitespace(5).blank_lines == 4

    def test_whitespace_rejects_single_line_break(self) -> None:
        """Whitespace nodes only exist for two or more line breaks."""
        with pytest.raises(ValueError):
            Whitespace(1)


@pytest.mark.unit
class TestAccept:
    """Tests for visitor dispatch."""

    @pytest.mark.parametrize(
        "node,method",
        [
            (Document(), "visit_document"),
            (Element("a"), "visit_element"),
            (Text("x"), "visit_text"),
            (Comment("x"), "visit_comment"),
            (CommentBlock("x"), "visit_comment_block"),
            (ProcessingInstruction("php"), "visit_processing_instruction"),
            (Import("a.B"), "visit_import"),
            (Whitespace(2), "visit_whitespace"),
        ],
    )
    def test_accept_dispatches_by_kind(self, node, method) -> None:
        """Each node kind calls exactly its own visit method."""

        class Recorder:
            def __getattr__(self, name):
                return lambda visited: (name, visited)

        assert node.accept(Recorder()) == (method, node)

    def test_get_node_children(self) -> None:
        """Only Document and Element own children."""
        child = Text("x")
        assert get_node_children(Element("p", children=[child])) == [child]
        assert get_node_children(Document(children=[child])) == [child]
        assert get_node_children(child) == []
        assert get_node_children(Whitespace(2)) == []
