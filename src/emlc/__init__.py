"""emlc - bidirectional converter between EML and angle-bracket markup.

EML is a compact element notation::

    div (class="card") {
        h1 { Hello World }
    }

emlc converts it to and from HTML, PHP-templated HTML, XML, XAML and FXML.
Two front-end parsers (EML and markup) build the same document tree, and two
renderers (EML and markup) write it back out, preserving comments, raw
``php`` code, imports, blank lines and the difference between an element
written with an empty block (``tag {}`` / ``<tag></tag>``) and one written
without (``tag`` / ``<tag/>``).

Examples
--------
Convert text:

    >>> from emlc import convert
    >>> convert("<foo></foo>", "html", "eml")
    'foo {}\\n'

Convert files, choosing formats from their extensions:

    >>> from emlc import convert_file
    >>> convert_file("index.eml", "index.html")

Work with the tree directly:

    >>> from emlc import parse, render
    >>> doc = parse("import com.example.Foo;")
    >>> render(doc, "fxml")
    '<?import com.example.Foo?>\\n'

"""

from emlc.api import convert, convert_file, parse, render
from emlc.ast import Document, Element
from emlc.constants import __version__
from emlc.exceptions import EmlcError, FormatError, ParsingError
from emlc.options import EmlParserOptions, EmlRendererOptions, MarkupParserOptions, MarkupRendererOptions
from emlc.parsers import EmlParser, MarkupParser
from emlc.renderers import EmlRenderer, MarkupRenderer

__all__ = [
    "__version__",
    "convert",
    "convert_file",
    "parse",
    "render",
    "Document",
    "Element",
    "EmlcError",
    "FormatError",
    "ParsingError",
    "EmlParser",
    "MarkupParser",
    "EmlRenderer",
    "MarkupRenderer",
    "EmlParserOptions",
    "EmlRendererOptions",
    "MarkupParserOptions",
    "MarkupRendererOptions",
]
