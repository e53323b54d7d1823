#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# tests/unit/test_converter_registry.py
"""Unit tests for the converter registry and metadata."""

import pytest

from emlc.converter_metadata import ConverterMetadata
from emlc.converter_registry import DEFAULT_FORMAT, ConverterRegistry, registry
from emlc.exceptions import FormatError
from emlc.options import EmlParserOptions, MarkupParserOptions, MarkupRendererOptions
from emlc.parsers import EmlParser, MarkupParser
from emlc.renderers import EmlRenderer, MarkupRenderer


@pytest.mark.unit
class TestRegistryLookup:
    """Tests for format lookup."""

    def test_singleton(self) -> None:
        assert ConverterRegistry() is registry

    def test_builtin_formats(self) -> None:
        assert registry.list_formats() == ["eml", "fxml", "html", "php", "xaml", "xml"]

    def test_parser_and_renderer_classes(self) -> None:
        assert registry.get_parser("eml") is EmlParser
        assert registry.get_renderer("eml") is EmlRenderer
        for fmt in ("html", "php", "xml", "xaml", "fxml"):
            assert registry.get_parser(fmt) is MarkupParser
            assert registry.get_renderer(fmt) is MarkupRenderer

    def test_unknown_format(self) -> None:
        with pytest.raises(FormatError) as excinfo:
            registry.get_parser("docx")
        assert excinfo.value.format_type == "docx"
        assert "eml" in excinfo.value.supported_formats


@pytest.mark.unit
class TestOptionsCreation:
    """Tests for options factories."""

    def test_parser_options_ignore_unknown_keys(self) -> None:
        options = registry.create_parser_options("html", strict_mode=True, indent_width=2)
        assert options == MarkupParserOptions(strict_mode=True)

    def test_eml_parser_options(self) -> None:
        assert isinstance(registry.create_parser_options("eml"), EmlParserOptions)

    @pytest.mark.parametrize(
        "fmt,mode", [("html", "loose"), ("php", "loose"), ("xml", "strict"), ("xaml", "strict"), ("fxml", "strict")]
    )
    def test_renderer_mode_defaults(self, fmt: str, mode: str) -> None:
        assert registry.create_renderer_options(fmt).mode == mode

    def test_renderer_overrides_win(self) -> None:
        options = registry.create_renderer_options("xml", mode="loose", indent_width=0)
        assert options == MarkupRendererOptions(mode="loose", indent_width=0)


@pytest.mark.unit
class TestFormatDetection:
    """Tests for extension-driven format detection."""

    @pytest.mark.parametrize(
        "path,fmt",
        [
            ("page.eml", "eml"),
            ("PAGE.EML", "eml"),
            ("index.html", "html"),
            ("index.htm", "html"),
            ("index.php", "php"),
            ("data.xml", "xml"),
            ("view.xaml", "xaml"),
            ("layout.fxml", "fxml"),
            ("notes.txt", DEFAULT_FORMAT),
            ("no_extension", DEFAULT_FORMAT),
            ("archive.eml.bak", DEFAULT_FORMAT),
        ],
    )
    def test_detect_format(self, path: str, fmt: str) -> None:
        assert registry.detect_format(path) == fmt

    def test_hint_wins(self) -> None:
        assert registry.detect_format("page.html", hint="eml") == "eml"

    def test_unknown_hint_is_ignored(self) -> None:
        assert registry.detect_format("page.xml", hint="bogus") == "xml"


@pytest.mark.unit
class TestRegistration:
    """Tests for registering additional converters."""

    def test_register_and_unregister(self) -> None:
        metadata = ConverterMetadata(
            format_name="xhtml",
            extensions=[".xhtml"],
            parser_class="emlc.parsers.markup.MarkupParser",
            renderer_class="emlc.renderers.markup.MarkupRenderer",
            parser_options_class="emlc.options.markup.MarkupParserOptions",
            renderer_options_class="emlc.options.markup.MarkupRendererOptions",
            renderer_defaults={"mode": "strict"},
        )
        registry.register(metadata)
        try:
            assert registry.detect_format("page.xhtml") == "xhtml"
            assert registry.get_parser("xhtml") is MarkupParser
            assert registry.create_renderer_options("xhtml").mode == "strict"
        finally:
            assert registry.unregister("xhtml")
        assert not registry.unregister("xhtml")
        assert registry.detect_format("page.xhtml") == DEFAULT_FORMAT

    def test_metadata_matches_extension(self) -> None:
        metadata = registry.get_format_info("html")[0]
        assert metadata.matches_extension("A.HTM")
        assert not metadata.matches_extension("a.xml")
