#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# tests/unit/parsers/test_eml_parser.py
"""Unit tests for EML to AST converter.

Tests cover:
- Elements, attributes and content blocks
- The three block interpretation modes (raw code, verbatim, nested/plain)
- Comments, imports and whitespace runs
- Markup passthrough comments
- Silent recovery and strict mode
- Input types

"""

from io import BytesIO, StringIO
from pathlib import Path

import pytest

from emlc.ast import (
    Comment,
    CommentBlock,
    Document,
    Element,
    Import,
    ProcessingInstruction,
    Text,
    Whitespace,
)
from emlc.exceptions import FileNotFoundError, InvalidOptionsError, ParsingError
from emlc.options import EmlParserOptions, MarkupParserOptions
from emlc.parsers.eml import EmlParser, contains_eml_syntax, instruction_from_raw, markup_passthrough_node


def _parse(text: str, **options) -> Document:
    return EmlParser(EmlParserOptions(**options)).parse_string(text)


@pytest.mark.unit
class TestEmlElements:
    """Tests for element, attribute and block parsing."""

    def test_nested_elements_with_attributes(self) -> None:
        doc = _parse('div (class="a", id="b") { span { Hi } }')

        div = doc.children[0]
        assert isinstance(div, Element)
        assert div.tag == "div"
        assert [(a.key, a.value) for a in div.attributes] == [("class", "a"), ("id", "b")]
        assert len(div.children) == 1
        span = div.children[0]
        assert span.tag == "span"
        assert span.children == [Text(" Hi ")]
        assert not span.explicit_empty_block

    def test_bare_element_has_no_block(self) -> None:
        doc = _parse("foo")
        assert doc.children == [Element("foo")]

    def test_empty_block_is_explicit(self) -> None:
        doc = _parse("foo {}")
        assert doc.children == [Element("foo", explicit_empty_block=True)]

    def test_whitespace_only_block_keeps_text(self) -> None:
        doc = _parse("foo {   }")
        element = doc.children[0]
        assert element.children == [Text("   ")]
        assert not element.explicit_empty_block

    def test_attributes_and_block_across_lines(self) -> None:
        doc = _parse('input (type="checkbox", checked)\n{\n}')
        element = doc.children[0]
        assert element.get_attribute("type") == "checkbox"
        assert element.attributes[1].is_boolean
        assert element.children == [Text("\n")]

    def test_single_quoted_and_bare_values(self) -> None:
        doc = _parse("a (title='say \"hi\"', width=10 height = 20)")
        attrs = doc.children[0].attributes
        assert [(a.key, a.value) for a in attrs] == [("title", 'say "hi"'), ("width", "10"), ("height", "20")]

    def test_attribute_separator_is_recorded(self) -> None:
        doc = _parse("a (x=1,  y=2)")
        attrs = doc.children[0].attributes
        assert attrs[0].separator == ""
        assert attrs[1].separator == ",  "

    def test_dotted_and_namespaced_tags(self) -> None:
        doc = _parse('fx:root (fx:id="main") { javafx.scene.Button {} }')
        root = doc.children[0]
        assert root.tag == "fx:root"
        assert root.attributes[0].key == "fx:id"
        assert root.children[0].tag == "javafx.scene.Button"

    def test_siblings(self) -> None:
        doc = _parse("a\nb {}\nc { text }")
        assert [child.tag for child in doc.children] == ["a", "b", "c"]


@pytest.mark.unit
class TestEmlBlockModes:
    """Tests for content block interpretation by tag name."""

    def test_php_block_is_raw_code(self) -> None:
        doc = _parse("php {\n    if ($a) { echo $b; }\n}")
        node = doc.children[0]
        assert node == ProcessingInstruction("php", "\n    if ($a) { echo $b; }\n")
        assert node.is_raw_code

    def test_verbatim_block_is_not_reparsed(self) -> None:
        doc = _parse("pre {\n  div { not an element }\n}")
        pre = doc.children[0]
        assert pre.children == [Text("\n  div { not an element }\n")]

    @pytest.mark.parametrize("tag", ["pre", "code", "script", "style"])
    def test_empty_verbatim_block_stays_explicit(self, tag: str) -> None:
        element = _parse(f"{tag} {{}}").children[0]
        assert element.children == []
        assert element.explicit_empty_block

    def test_plain_text_block(self) -> None:
        element = _parse("h1 { Hello World }").children[0]
        assert element.children == [Text(" Hello World ")]

    def test_heuristic_false_positive_is_preserved(self) -> None:
        """Text that looks like ``ident(`` is parsed as nested EML."""
        element = _parse("p { call foo(x) }").children[0]
        assert [child.tag for child in element.children] == ["call", "foo"]
        assert element.children[1].attributes[0].key == "x"

    def test_contains_eml_syntax(self) -> None:
        assert contains_eml_syntax(" span { Hi } ")
        assert contains_eml_syntax("a (x=1)")
        assert contains_eml_syntax("tag\n{")
        assert not contains_eml_syntax(" Hello World ")
        assert not contains_eml_syntax("1 + (2)")


@pytest.mark.unit
class TestEmlOtherConstructs:
    """Tests for comments, imports and whitespace."""

    def test_line_comment_is_trimmed(self) -> None:
        doc = _parse("//   hi there  \nfoo")
        assert doc.children[0] == Comment("hi there")
        assert doc.children[1] == Element("foo")

    def test_block_comment_is_verbatim(self) -> None:
        doc = _parse("/* keep  this */")
        assert doc.children == [CommentBlock(" keep  this ")]

    def test_import(self) -> None:
        doc = _parse("import   com.example.Foo ;")
        assert doc.children == [Import("com.example.Foo")]

    def test_import_without_semicolon_is_a_tag(self) -> None:
        doc = _parse("import")
        assert doc.children == [Element("import")]

    def test_importer_tag_is_not_an_import(self) -> None:
        doc = _parse("importer { x; }")
        assert doc.children[0].tag == "importer"

    def test_whitespace_runs(self) -> None:
        doc = _parse("a\n\n\nb\nc")
        assert doc.children == [Element("a"), Whitespace(3), Element("b"), Element("c")]

    def test_whitespace_inside_block(self) -> None:
        div = _parse("div {\n  a {}\n\n  b {}\n}").children[0]
        assert [type(child).__name__ for child in div.children] == ["Element", "Whitespace", "Element"]
        assert div.children[1].line_count == 2

    def test_declaration_passthrough_comment(self) -> None:
        doc = _parse("/*! <!DOCTYPE html> */\nhtml {}")
        assert doc.children[0] == ProcessingInstruction("!DOCTYPE", "html")

    def test_instruction_passthrough_comment(self) -> None:
        doc = _parse('/*! <?xml version="1.0"?> */')
        assert doc.children == [ProcessingInstruction("xml", 'version="1.0"')]

    def test_markup_comment_text_is_not_passthrough(self) -> None:
        assert markup_passthrough_node("! <!-- x --> ") is None
        assert markup_passthrough_node(" plain ") is None

    def test_unmarked_instruction_comment_stays_comment(self) -> None:
        assert markup_passthrough_node(" <?php debug(); ?> ") is None
        doc = _parse("/* <?php\n  debug();\n?> */")
        assert doc.children == [CommentBlock(" <?php\n  debug();\n?> ")]

    def test_instruction_from_raw(self) -> None:
        assert instruction_from_raw("php echo 1; ") == ProcessingInstruction("php", " echo 1; ")
        assert instruction_from_raw("import a.B") == Import("a.B")
        assert instruction_from_raw("phpinfo x") == ProcessingInstruction("phpinfo", "x")


@pytest.mark.unit
class TestEmlRecovery:
    """Tests for silent recovery and strict mode."""

    def test_unexpected_character_is_skipped(self) -> None:
        parser = EmlParser()
        doc = parser.parse_string("@ foo")
        assert doc.children == [Element("foo")]
        assert [a.kind for a in parser.anomalies] == ["unexpected-character"]
        assert parser.anomalies[0].position == 0
        assert doc.metadata["anomaly_count"] == 1

    def test_unterminated_comment_runs_to_end(self) -> None:
        parser = EmlParser()
        doc = parser.parse_string("/* open")
        assert doc.children == [CommentBlock(" open")]
        assert parser.anomalies[0].kind == "unterminated-comment"

    def test_unterminated_block_runs_to_end(self) -> None:
        parser = EmlParser()
        doc = parser.parse_string("div { span { Hi }")
        div = doc.children[0]
        assert div.children[0].tag == "span"
        assert parser.anomalies[0].kind == "unterminated-block"

    def test_unterminated_attribute_list(self) -> None:
        parser = EmlParser()
        doc = parser.parse_string("a (x=1")
        assert doc.children[0].get_attribute("x") == "1"
        assert parser.anomalies[0].kind == "unterminated-tag"

    def test_empty_attribute_key_is_skipped(self) -> None:
        parser = EmlParser()
        doc = parser.parse_string('a (="v", b)')
        assert [attr.key for attr in doc.children[0].attributes] == ["v", "b"]
        assert parser.anomalies
        assert {a.kind for a in parser.anomalies} == {"empty-attribute-key"}

    def test_nested_anomaly_position_is_absolute(self) -> None:
        parser = EmlParser()
        parser.parse_string("div { @ }")
        assert parser.anomalies[0].position == 6

    def test_nesting_limit_keeps_text(self) -> None:
        parser = EmlParser(EmlParserOptions(max_nesting_depth=1))
        doc = parser.parse_string("a { b { c {} } }")
        a = doc.children[0]
        b = a.children[0]
        assert b.tag == "b"
        assert b.children == [Text(" c {} ")]
        assert parser.anomalies[0].kind == "nesting-too-deep"

    def test_strict_mode_raises(self) -> None:
        with pytest.raises(ParsingError) as excinfo:
            _parse("div { @ }", strict_mode=True)
        assert excinfo.value.anomaly_kind == "unexpected-character"
        assert excinfo.value.position == 6

    def test_clean_input_has_no_anomalies(self, sample_eml: str) -> None:
        parser = EmlParser(EmlParserOptions(strict_mode=True))
        doc = parser.parse_string(sample_eml)
        assert parser.anomalies == []
        assert "anomaly_count" not in doc.metadata

    def test_anomalies_reset_between_parses(self) -> None:
        parser = EmlParser()
        parser.parse_string("@")
        parser.parse_string("ok")
        assert parser.anomalies == []


@pytest.mark.unit
class TestEmlInputTypes:
    """Tests for the accepted input types."""

    def test_parse_path(self, tmp_path: Path) -> None:
        path = tmp_path / "page.eml"
        path.write_text("h1 { Hi }", encoding="utf-8")
        assert EmlParser().parse(path).children[0].tag == "h1"

    def test_parse_missing_path(self, tmp_path: Path) -> None:
        with pytest.raises(FileNotFoundError):
            EmlParser().parse(tmp_path / "missing.eml")

    def test_parse_bytes_with_bom(self) -> None:
        doc = EmlParser().parse(b"\xef\xbb\xbfh1 { Hi }")
        assert doc.children[0].tag == "h1"

    def test_parse_binary_stream(self) -> None:
        assert EmlParser().parse(BytesIO(b"br")).children == [Element("br")]

    def test_parse_text_stream(self) -> None:
        assert EmlParser().parse(StringIO("br")).children == [Element("br")]

    def test_parse_string_content(self) -> None:
        assert EmlParser().parse("br\nhr").children == [Element("br"), Element("hr")]

    def test_metadata_records_source_format(self) -> None:
        assert EmlParser().parse_string("a").metadata["source_format"] == "eml"

    def test_wrong_options_type(self) -> None:
        with pytest.raises(InvalidOptionsError):
            EmlParser(MarkupParserOptions())
