#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/emlc/converter_registry.py
"""Converter registry for format dispatch.

This module implements a registry of parsers and renderers keyed by format
name, enabling:
- Lazy loading of parser and renderer classes
- Discovery of the built-in formats from the ``emlc.parsers`` package
- Third-party formats via the ``emlc.converters`` entry point group
- Format detection from file extensions

Format selection is purely extension-driven: ``.eml`` is EML, and any other
extension is markup. Extensions that no format claims fall back to loose
HTML-family markup.
"""

from __future__ import annotations

import importlib
import importlib.metadata
import logging
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from emlc.converter_metadata import ConverterMetadata
from emlc.exceptions import FormatError

logger = logging.getLogger(__name__)

# Format used for paths whose extension no converter claims.
DEFAULT_FORMAT = "html"

_BUILTIN_MODULES = ("eml", "markup")


def _sanitize_for_log(value: str) -> str:
    """Replace line breaks so user-supplied names cannot forge log lines."""
    return value.replace("\n", "\\n").replace("\r", "\\r")


def _load_class(class_spec: Union[str, type, None], class_type_name: str) -> Optional[type]:
    """Load a parser, renderer or options class.

    Parameters
    ----------
    class_spec : Union[str, type, None]
        Direct class reference, or a fully qualified name such as
        ``"emlc.renderers.eml.EmlRenderer"``
    class_type_name : str
        Type name for log messages (e.g., "options", "parser", "renderer")

    Returns
    -------
    Optional[type]
        The loaded class, or None when it cannot be imported

    """
    if class_spec is None:
        return None
    if isinstance(class_spec, type):
        return class_spec

    module_path, _, class_name = class_spec.rpartition(".")
    try:
        # nosemgrep: python.lang.security.audit.non-literal-import.non-literal-import
        module = importlib.import_module(module_path)
        return getattr(module, class_name)
    except (ImportError, AttributeError, ValueError) as e:
        logger.warning(f"Could not load {class_type_name} class '{_sanitize_for_log(class_spec)}': {e}")
        return None


class ConverterRegistry:
    """Registry for managing parsers and renderers by format.

    Several converters may be registered for one format; the highest
    priority converter whose class can be loaded wins.

    Attributes
    ----------
    _instance : ConverterRegistry or None
        Singleton instance of the registry
    _converters : dict
        Registered converters by format name, each a priority-sorted list
    _initialized : bool
        Whether auto-discovery has been run

    """

    _instance: Optional[ConverterRegistry] = None
    _converters: Dict[str, List[ConverterMetadata]] = {}
    _initialized: bool = False

    def __new__(cls) -> ConverterRegistry:
        """Create or return singleton instance."""
        if cls._instance is None:
            cls._instance = super().__new__(cls)
            cls._instance._converters = {}
            cls._instance._initialized = False
        return cls._instance

    def register(self, metadata: ConverterMetadata) -> None:
        """Register a converter with its metadata.

        Parameters
        ----------
        metadata : ConverterMetadata
            Converter metadata to register

        """
        if metadata.format_name not in self._converters:
            self._converters[metadata.format_name] = []
            logger.debug(f"Registered converter: {metadata.format_name} (priority={metadata.priority})")
        else:
            logger.debug(f"Adding additional converter for '{metadata.format_name}' (priority={metadata.priority})")

        self._converters[metadata.format_name].append(metadata)
        self._converters[metadata.format_name].sort(key=lambda m: m.priority, reverse=True)

    def unregister(self, format_name: str) -> bool:
        """Unregister every converter for a format.

        Returns
        -------
        bool
            True if unregistered, False if not found

        """
        if format_name in self._converters:
            del self._converters[format_name]
            logger.debug(f"Unregistered converter: {format_name}")
            return True
        return False

    def _metadata_for(self, format_name: str) -> List[ConverterMetadata]:
        self.auto_discover()
        if format_name not in self._converters:
            raise FormatError(format_type=format_name, supported_formats=self.list_formats())
        return self._converters[format_name]

    def get_parser(self, format_name: str) -> type:
        """Get the parser class for a format.

        Raises
        ------
        FormatError
            If the format is not registered or no parser can be loaded

        """
        for metadata in self._metadata_for(format_name):
            parser_class = _load_class(metadata.parser_class, "parser")
            if parser_class is not None:
                logger.debug(
                    f"Selected parser for '{_sanitize_for_log(format_name)}': {metadata.get_parser_display_name()}"
                )
                return parser_class
        raise FormatError(f"No parser available for format '{format_name}'.", format_type=format_name)

    def get_renderer(self, format_name: str) -> type:
        """Get the renderer class for a format.

        Raises
        ------
        FormatError
            If the format is not registered or no renderer can be loaded

        """
        for metadata in self._metadata_for(format_name):
            renderer_class = _load_class(metadata.renderer_class, "renderer")
            if renderer_class is not None:
                logger.debug(
                    f"Selected renderer for '{_sanitize_for_log(format_name)}': "
                    f"{metadata.get_renderer_display_name()}"
                )
                return renderer_class
        raise FormatError(f"No renderer available for format '{format_name}'.", format_type=format_name)

    def get_parser_options_class(self, format_name: str) -> Optional[type]:
        """Get the parser options class for a format, or None if it has none."""
        for metadata in self._metadata_for(format_name):
            options_class = _load_class(metadata.parser_options_class, "options")
            if options_class is not None:
                return options_class
        return None

    def get_renderer_options_class(self, format_name: str) -> Optional[type]:
        """Get the renderer options class for a format, or None if it has none."""
        for metadata in self._metadata_for(format_name):
            options_class = _load_class(metadata.renderer_options_class, "options")
            if options_class is not None:
                return options_class
        return None

    def create_parser_options(self, format_name: str, **overrides: Any) -> Any:
        """Build parser options for a format, applying the overrides its class defines.

        Parameters
        ----------
        format_name : str
            Registered format name
        **overrides
            Option values; keys the options class does not define are ignored

        Returns
        -------
        Any
            Parser options instance, or None when the format has no options class

        """
        options_class = self.get_parser_options_class(format_name)
        if options_class is None:
            return None
        return options_class(**_known_fields(options_class, overrides))

    def create_renderer_options(self, format_name: str, **overrides: Any) -> Any:
        """Build renderer options for a format.

        The format's ``renderer_defaults`` (e.g. ``mode="strict"`` for XML)
        are applied first, then ``overrides``.

        Returns
        -------
        Any
            Renderer options instance, or None when the format has no options class

        """
        options_class = self.get_renderer_options_class(format_name)
        if options_class is None:
            return None
        values: dict[str, Any] = {}
        for metadata in reversed(self._metadata_for(format_name)):
            values.update(metadata.renderer_defaults)
        values.update(overrides)
        return options_class(**_known_fields(options_class, values))

    def detect_format(self, path: Union[str, Path, None], hint: Optional[str] = None) -> str:
        """Detect the format of a file from its extension.

        Parameters
        ----------
        path : str, Path, or None
            File path to inspect
        hint : str, optional
            Explicit format name; used as-is when registered

        Returns
        -------
        str
            Format name; ``"html"`` when no format claims the extension

        Examples
        --------
            >>> registry.detect_format("view.xaml")
            'xaml'
            >>> registry.detect_format("notes.txt")
            'html'

        """
        self.auto_discover()
        if hint and hint in self._converters:
            return hint

        if path is not None:
            format_name = self._detect_by_filename(str(path))
            if format_name:
                logger.debug(f"Format detected from filename: {format_name}")
                return format_name

        logger.debug(f"No format detected, defaulting to {DEFAULT_FORMAT}")
        return DEFAULT_FORMAT

    def _detect_by_filename(self, filename: str) -> Optional[str]:
        all_converters = [
            (format_name, metadata)
            for format_name, metadata_list in self._converters.items()
            for metadata in metadata_list
        ]
        for format_name, metadata in sorted(all_converters, key=lambda x: x[1].priority, reverse=True):
            if metadata.matches_extension(filename):
                return format_name
        return None

    def list_formats(self) -> List[str]:
        """List all registered format names, sorted."""
        self.auto_discover()
        return sorted(self._converters.keys())

    def get_format_info(self, format_name: str) -> Optional[List[ConverterMetadata]]:
        """Get the priority-sorted metadata list for a format, or None if not registered."""
        self.auto_discover()
        return self._converters.get(format_name)

    def auto_discover(self) -> None:
        """Register the built-in formats and any entry point plugins.

        Built-in parser modules expose ``CONVERTER_METADATA``, either a single
        ``ConverterMetadata`` or a list of them (the markup module registers
        one entry per dialect).
        """
        if self._initialized:
            return
        self._initialized = True

        for module_name in _BUILTIN_MODULES:
            # nosemgrep: python.lang.security.audit.non-literal-import.non-literal-import
            module = importlib.import_module(f"emlc.parsers.{module_name}")
            self._register_module_metadata(getattr(module, "CONVERTER_METADATA", None))
            logger.debug(f"Auto-registered parser converter: {module_name}")

        self._discover_plugins()

    def _register_module_metadata(self, metadata: Union[ConverterMetadata, List[ConverterMetadata], None]) -> None:
        if metadata is None:
            return
        if isinstance(metadata, ConverterMetadata):
            self.register(metadata)
            return
        for item in metadata:
            self.register(item)

    def _discover_plugins(self) -> None:
        """Register converters published under the ``emlc.converters`` entry point group."""
        for entry_point in importlib.metadata.entry_points(group="emlc.converters"):
            dist_name = entry_point.dist.name if entry_point.dist else "unknown"
            try:
                converter_metadata = entry_point.load()
            except Exception as e:
                logger.warning(f"Failed to load plugin '{entry_point.name}' from '{dist_name}': {e}")
                continue

            if isinstance(converter_metadata, ConverterMetadata):
                self.register(converter_metadata)
                logger.info(
                    f"Registered plugin converter: {converter_metadata.format_name} "
                    f"(priority={converter_metadata.priority}) from package '{dist_name}'"
                )
            else:
                logger.warning(
                    f"Entry point '{entry_point.name}' from '{dist_name}' did not return a ConverterMetadata instance"
                )


def _known_fields(options_class: type, values: dict[str, Any]) -> dict[str, Any]:
    fields = getattr(options_class, "__dataclass_fields__", {})
    return {key: value for key, value in values.items() if key in fields}


# Global registry instance
registry = ConverterRegistry()
