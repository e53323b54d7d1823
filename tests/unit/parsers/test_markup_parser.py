#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# tests/unit/parsers/test_markup_parser.py
"""Unit tests for markup to AST converter.

Tests cover:
- Elements, attributes, void and self-closing tags
- Comments, processing instructions, imports and declarations
- Raw text elements and CDATA
- Whitespace materialization
- Recovery from malformed structure and strict mode

"""

import pytest

from emlc import render
from emlc.ast import Comment, Document, Element, Import, ProcessingInstruction, Text, Whitespace, tree_depth
from emlc.exceptions import InvalidOptionsError, ParsingError
from emlc.options import EmlParserOptions, MarkupParserOptions
from emlc.parsers.markup import MarkupParser, classify_text


def _parse(text: str, **options) -> Document:
    return MarkupParser(MarkupParserOptions(**options)).parse_string(text)


@pytest.mark.unit
class TestMarkupElements:
    """Tests for element and attribute parsing."""

    def test_explicit_empty_versus_self_closed(self) -> None:
        doc = _parse("<foo></foo><bar/>")
        assert doc.children == [Element("foo", explicit_empty_block=True), Element("bar")]

    def test_nested_elements_drop_indentation(self) -> None:
        doc = _parse('<div class="a" id="b">\n    <span>Hi</span>\n</div>')
        div = doc.children[0]
        assert [(a.key, a.value) for a in div.attributes] == [("class", "a"), ("id", "b")]
        assert div.children == [Element("span", children=[Text("Hi")])]

    def test_void_elements_take_no_children(self) -> None:
        doc = _parse("<p>a<br>b</p>")
        p = doc.children[0]
        assert p.children == [Text("a"), Element("br"), Text("b")]

    def test_attribute_forms(self) -> None:
        doc = _parse("<input type=text disabled value='x \"y\"' data-id = \"7\">")
        attrs = doc.children[0].attributes
        assert [(a.key, a.value) for a in attrs] == [
            ("type", "text"),
            ("disabled", None),
            ("value", 'x "y"'),
            ("data-id", "7"),
        ]

    def test_bare_value_stops_before_self_close(self) -> None:
        doc = _parse("<img src=a.png/>")
        img = doc.children[0]
        assert img.get_attribute("src") == "a.png"

    def test_attribute_separator_is_recorded(self) -> None:
        doc = _parse('<a\n   href="x"  id="y">t</a>')
        attrs = doc.children[0].attributes
        assert attrs[0].separator == "\n   "
        assert attrs[1].separator == "  "

    def test_mixed_content_keeps_edge_spaces(self) -> None:
        doc = _parse("<p>Hello <b>you</b> there</p>")
        assert doc.children[0].children == [
            Text("Hello "),
            Element("b", children=[Text("you")]),
            Text(" there"),
        ]

    def test_namespaced_tags(self) -> None:
        doc = _parse('<fx:root xmlns:fx="http://javafx.com/fxml"><Button fx:id="ok"/></fx:root>')
        root = doc.children[0]
        assert root.tag == "fx:root"
        assert root.children[0].get_attribute("fx:id") == "ok"

    def test_less_than_in_text_is_literal(self) -> None:
        doc = _parse("<p>a < b</p>")
        assert doc.children[0].children == [Text("a < b")]


@pytest.mark.unit
class TestMarkupInstructions:
    """Tests for comments, instructions and declarations."""

    def test_comment_is_trimmed(self) -> None:
        assert _parse("<!--  hi  -->").children == [Comment("hi")]

    def test_php_payload_is_kept_exactly(self) -> None:
        doc = _parse("<?php\n    echo $a;\n?>")
        assert doc.children == [ProcessingInstruction("php", "\n    echo $a;\n")]

    def test_php_prefix_requires_boundary(self) -> None:
        doc = _parse("<?phpinfo x?>")
        assert doc.children == [ProcessingInstruction("phpinfo", "x")]

    def test_import(self) -> None:
        assert _parse("<?import com.example.Foo?>").children == [Import("com.example.Foo")]

    def test_generic_instruction(self) -> None:
        doc = _parse('<?xml version="1.0" encoding="UTF-8"?>\n<root/>')
        assert doc.children[0] == ProcessingInstruction("xml", 'version="1.0" encoding="UTF-8"')
        assert doc.children[1] == Element("root")

    def test_doctype_declaration(self) -> None:
        doc = _parse("<!DOCTYPE html>\n<html></html>")
        assert doc.children[0] == ProcessingInstruction("!DOCTYPE", "html")
        assert doc.children[0].is_declaration

    def test_cdata_is_text(self) -> None:
        doc = _parse("<x><![CDATA[a < b]]></x>")
        assert doc.children[0].children == [Text("<![CDATA[a < b]]>")]

    def test_script_body_is_raw_text(self) -> None:
        doc = _parse("<script>if (a < b) { x('<p>'); }</SCRIPT>")
        script = doc.children[0]
        assert script.children == [Text("if (a < b) { x('<p>'); }")]

    def test_empty_style_is_explicit(self) -> None:
        assert _parse("<style></style>").children == [Element("style", explicit_empty_block=True)]


@pytest.mark.unit
class TestMarkupWhitespace:
    """Tests for whitespace materialization."""

    def test_classify_text(self) -> None:
        assert classify_text("") is None
        assert classify_text("\n   ") is None
        assert classify_text("\n\n\n") == Whitespace(3)
        assert classify_text(" Hi ") == Text(" Hi ")

    def test_blank_lines_between_siblings(self) -> None:
        doc = _parse("<a/>\n\n\n<b/>\n<c/>")
        assert doc.children == [Element("a"), Whitespace(3), Element("b"), Element("c")]


@pytest.mark.unit
class TestMarkupRecovery:
    """Tests for silent recovery and strict mode."""

    def test_stray_close_tag_is_skipped(self) -> None:
        parser = MarkupParser()
        doc = parser.parse_string("<a></a></b><c/>")
        assert doc.children == [Element("a", explicit_empty_block=True), Element("c")]
        assert [a.kind for a in parser.anomalies] == ["stray-close-tag"]
        assert parser.anomalies[0].position == 7

    def test_mismatched_close_unwinds(self) -> None:
        parser = MarkupParser()
        doc = parser.parse_string("<div><span>x</div><p/>")
        div = doc.children[0]
        assert div.children == [Element("span", children=[Text("x")])]
        assert doc.children[1] == Element("p")
        assert [a.kind for a in parser.anomalies] == ["mismatched-close-tag"]

    def test_unclosed_element_at_end(self) -> None:
        parser = MarkupParser()
        doc = parser.parse_string("<div><p>text")
        assert doc.children[0].children[0].children == [Text("text")]
        assert {a.kind for a in parser.anomalies} == {"unclosed-element"}

    def test_unterminated_comment(self) -> None:
        parser = MarkupParser()
        doc = parser.parse_string("<!-- open")
        assert doc.children == [Comment("open")]
        assert parser.anomalies[0].kind == "unterminated-comment"

    def test_unterminated_instruction(self) -> None:
        parser = MarkupParser()
        doc = parser.parse_string("<?php echo 1;")
        assert doc.children == [ProcessingInstruction("php", " echo 1;")]
        assert parser.anomalies[0].kind == "unterminated-instruction"

    def test_unexpected_character_in_tag(self) -> None:
        parser = MarkupParser()
        doc = parser.parse_string('<a @ href="x"></a>')
        assert doc.children[0].get_attribute("href") == "x"
        assert parser.anomalies[0].kind == "unexpected-character"

    def test_nesting_limit_flattens(self) -> None:
        parser = MarkupParser(MarkupParserOptions(max_nesting_depth=1))
        doc = parser.parse_string("<a><b>x</b></a>")
        a = doc.children[0]
        assert a.children[0] == Element("b", explicit_empty_block=True)
        assert a.children[1] == Text("x")
        kinds = [anomaly.kind for anomaly in parser.anomalies]
        assert kinds[0] == "nesting-too-deep"
        assert "stray-close-tag" in kinds

    def test_deep_input_at_largest_nesting_limit(self) -> None:
        parser = MarkupParser(MarkupParserOptions(max_nesting_depth=256))
        doc = parser.parse_string("<a>" * 3000)

        assert tree_depth(doc) <= 257
        assert render(doc, "html").startswith("<a>\n")

    def test_strict_mode_raises(self) -> None:
        with pytest.raises(ParsingError) as excinfo:
            _parse("<a></b></a>", strict_mode=True)
        assert excinfo.value.anomaly_kind == "stray-close-tag"

    def test_clean_input_has_no_anomalies(self, sample_html: str) -> None:
        parser = MarkupParser(MarkupParserOptions(strict_mode=True))
        doc = parser.parse_string(sample_html)
        assert parser.anomalies == []
        assert doc.metadata == {"source_format": "markup"}

    def test_wrong_options_type(self) -> None:
        with pytest.raises(InvalidOptionsError):
            MarkupParser(EmlParserOptions())
