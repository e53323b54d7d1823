#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/emlc/api.py
"""High-level conversion API.

``parse`` and ``render`` expose the two halves of a conversion; ``convert``
chains them for in-memory text and ``convert_file`` for files, choosing the
formats from the file extensions.

Keyword options are routed to whichever options class defines them, so a
single call can carry parser settings (``strict_mode``,
``max_nesting_depth``) and renderer settings (``indent_width``,
``minimize_boolean_attributes``, ...).

Examples
--------
    >>> from emlc import convert
    >>> print(convert('div (class="a", id="b") { span { Hi } }', "eml", "xml"), end="")
    <div class="a" id="b">
        <span>Hi</span>
    </div>

"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import IO, Any, Optional, Union

from emlc.ast import Document
from emlc.converter_registry import registry
from emlc.exceptions import FileAccessError, FileNotFoundError, OutputWriteError
from emlc.options import create_updated_options
from emlc.options.base import BaseParserOptions, BaseRendererOptions

logger = logging.getLogger(__name__)


def _build_parser(source_format: str, parser_options: Optional[BaseParserOptions], **kwargs: Any) -> Any:
    parser_class = registry.get_parser(source_format)
    if parser_options is None:
        parser_options = registry.create_parser_options(source_format, **kwargs)
    elif kwargs:
        parser_options = create_updated_options(parser_options, **kwargs)
    return parser_class(parser_options)


def _build_renderer(target_format: str, renderer_options: Optional[BaseRendererOptions], **kwargs: Any) -> Any:
    renderer_class = registry.get_renderer(target_format)
    if renderer_options is None:
        renderer_options = registry.create_renderer_options(target_format, **kwargs)
    elif kwargs:
        renderer_options = create_updated_options(renderer_options, **kwargs)
    return renderer_class(renderer_options)


def parse(
    source: Union[str, Path, IO[bytes], IO[str], bytes],
    source_format: str = "eml",
    *,
    parser_options: Optional[BaseParserOptions] = None,
    **kwargs: Any,
) -> Document:
    """Parse EML or markup into a document tree.

    Parameters
    ----------
    source : str, Path, IO[bytes], IO[str], or bytes
        Source text. A ``str`` is always treated as text, never as a path;
        pass a ``Path`` to read a file.
    source_format : str, default "eml"
        Registered format name (``eml``, ``html``, ``php``, ``xml``,
        ``xaml``, ``fxml``)
    parser_options : BaseParserOptions, optional
        Pre-configured parser options
    **kwargs
        Individual option overrides, e.g. ``strict_mode=True``

    Returns
    -------
    Document
        Root of the parsed tree

    Raises
    ------
    FormatError
        If the format is not registered
    ParsingError
        In strict mode, on the first structural anomaly

    """
    parser = _build_parser(source_format, parser_options, **kwargs)
    if isinstance(source, str):
        return parser.parse_string(source)
    return parser.parse(source)


def render(
    doc: Document,
    target_format: str = "html",
    *,
    renderer_options: Optional[BaseRendererOptions] = None,
    **kwargs: Any,
) -> str:
    """Render a document tree as EML or markup text.

    Parameters
    ----------
    doc : Document
        Tree to render
    target_format : str, default "html"
        Registered format name. The XML family renders in strict mode and
        HTML/PHP in loose mode unless ``mode`` is overridden.
    renderer_options : BaseRendererOptions, optional
        Pre-configured renderer options
    **kwargs
        Individual option overrides, e.g. ``indent_width=2``

    Returns
    -------
    str
        Rendered text

    """
    renderer = _build_renderer(target_format, renderer_options, **kwargs)
    return renderer.render_to_string(doc)


def convert(source: str, source_format: str, target_format: str, **kwargs: Any) -> str:
    """Convert source text from one format to another.

    Parameters
    ----------
    source : str
        Source text
    source_format : str
        Format of ``source``
    target_format : str
        Format to produce
    **kwargs
        Parser and renderer option overrides

    Returns
    -------
    str
        Converted text

    """
    doc = parse(source, source_format, **kwargs)
    return render(doc, target_format, **kwargs)


def convert_file(
    input_path: Union[str, Path],
    output_path: Union[str, Path],
    *,
    source_format: Optional[str] = None,
    target_format: Optional[str] = None,
    **kwargs: Any,
) -> Document:
    """Convert one file into another, picking formats from the extensions.

    Parameters
    ----------
    input_path : str or Path
        File to read. ``.eml`` is parsed as EML, anything else as markup.
    output_path : str or Path
        File to write. ``.eml`` renders EML, ``.xml``/``.xaml``/``.fxml``
        strict markup, anything else loose markup.
    source_format : str, optional
        Override the format detected from ``input_path``
    target_format : str, optional
        Override the format detected from ``output_path``
    **kwargs
        Parser and renderer option overrides

    Returns
    -------
    Document
        The parsed tree

    Raises
    ------
    FileNotFoundError
        If the input file does not exist
    FileAccessError
        If the input file cannot be read
    OutputWriteError
        If the output file cannot be written
    ParsingError
        In strict mode, on the first structural anomaly

    """
    input_path = Path(input_path)
    output_path = Path(output_path)
    source_format = source_format or registry.detect_format(input_path)
    target_format = target_format or registry.detect_format(output_path)
    logger.info(f"Converting {input_path} ({source_format}) -> {output_path} ({target_format})")

    if not input_path.is_file():
        if input_path.exists():
            raise FileAccessError(str(input_path))
        raise FileNotFoundError(str(input_path))

    parser = _build_parser(source_format, None, **kwargs)
    doc = parser.parse(input_path)
    if parser.anomalies:
        logger.info(f"Recovered from {len(parser.anomalies)} structural anomalies in {input_path}")

    renderer = _build_renderer(target_format, None, **kwargs)
    text = renderer.render_to_string(doc)
    try:
        renderer.write_text_output(text, output_path)
    except OSError as e:
        raise OutputWriteError(str(output_path), original_error=e) from e
    return doc
