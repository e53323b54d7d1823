#  Copyright (c) 2025 Tom Villani, Ph.D.

"""Configuration file discovery and loading for the emlc CLI.

This module handles automatic discovery of configuration files, loading
configs from TOML, YAML or JSON, and turning the loaded keys into parser and
renderer option overrides.

Recognized keys::

    strict = true                        # strict_mode for both parsers
    indent_width = 2
    max_nesting_depth = 64
    minimize_boolean_attributes = true   # loose markup output only
    preserve_attribute_spacing = false

"""

import argparse
import json
import logging
import sys
from pathlib import Path

if sys.version_info >= (3, 11):
    import tomllib
else:
    import tomli as tomllib  # type: ignore[import-not-found,unused-ignore]
from typing import Any, Dict, Optional

import yaml

logger = logging.getLogger(__name__)

CONFIG_ENV_VAR = "EMLC_CONFIG"

DEDICATED_CONFIG_FILENAMES = [".emlc.toml", ".emlc.yaml", ".emlc.yml", ".emlc.json"]
CONFIG_FILENAMES = DEDICATED_CONFIG_FILENAMES + ["pyproject.toml"]

# Config key -> (option field name, expected type)
CONFIG_KEYS: Dict[str, tuple[str, type]] = {
    "strict": ("strict_mode", bool),
    "indent_width": ("indent_width", int),
    "max_nesting_depth": ("max_nesting_depth", int),
    "minimize_boolean_attributes": ("minimize_boolean_attributes", bool),
    "preserve_attribute_spacing": ("preserve_attribute_spacing", bool),
}


def _load_pyproject_emlc_section(pyproject_path: Path) -> Dict[str, Any]:
    """Load the ``[tool.emlc]`` section from a pyproject.toml file.

    Parameters
    ----------
    pyproject_path : Path
        Path to pyproject.toml file

    Returns
    -------
    dict
        Configuration dictionary from ``[tool.emlc]``, or empty dict if not found

    Raises
    ------
    argparse.ArgumentTypeError
        If pyproject.toml cannot be parsed

    """
    try:
        with open(pyproject_path, "rb") as f:
            data = tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        raise argparse.ArgumentTypeError(f"Invalid TOML in pyproject.toml {pyproject_path}: {e}") from e
    except OSError as e:
        raise argparse.ArgumentTypeError(f"Error reading pyproject.toml {pyproject_path}: {e}") from e

    config = data.get("tool", {}).get("emlc")
    if config is None:
        return {}
    if not isinstance(config, dict):
        raise argparse.ArgumentTypeError(
            f"[tool.emlc] section in {pyproject_path} must be a table, got {type(config).__name__}"
        )
    return config


def find_config_in_parents(start_dir: Optional[Path] = None) -> Optional[Path]:
    """Find a configuration file by searching parent directories.

    Walks up from ``start_dir`` to the filesystem root, checking each
    directory for ``.emlc.toml``, ``.emlc.yaml``, ``.emlc.yml``,
    ``.emlc.json`` and finally a pyproject.toml with a ``[tool.emlc]``
    section.

    Parameters
    ----------
    start_dir : Path, optional
        Starting directory for search, defaults to current working directory

    Returns
    -------
    Path or None
        Path to first config file found, or None if not found

    """
    current = (start_dir or Path.cwd()).resolve()

    while True:
        for filename in DEDICATED_CONFIG_FILENAMES:
            config_path = current / filename
            if config_path.is_file():
                return config_path

        pyproject_path = current / "pyproject.toml"
        if pyproject_path.is_file():
            try:
                if _load_pyproject_emlc_section(pyproject_path):
                    return pyproject_path
            except argparse.ArgumentTypeError:
                # Unreadable pyproject.toml files are skipped during discovery
                logger.debug(f"Skipping unreadable {pyproject_path}")

        parent = current.parent
        if parent == current:
            break
        current = parent

    return None


def discover_config_file(start_dir: Optional[Path] = None) -> Optional[Path]:
    """Discover a configuration file in the standard locations.

    The parent-directory search runs first; the user's home directory is
    checked for the dedicated file names last.

    Returns
    -------
    Path or None
        Path to discovered config file, or None if not found

    """
    config_in_parents = find_config_in_parents(start_dir)
    if config_in_parents:
        return config_in_parents

    home = Path.home()
    for filename in DEDICATED_CONFIG_FILENAMES:
        config_path = home / filename
        if config_path.is_file():
            return config_path

    return None


def load_config_file(config_path: Path | str) -> Dict[str, Any]:
    """Load configuration from a TOML, YAML, JSON, or pyproject.toml file.

    Parameters
    ----------
    config_path : Path or str
        Path to the configuration file

    Returns
    -------
    dict
        Configuration dictionary loaded from file

    Raises
    ------
    argparse.ArgumentTypeError
        If the file cannot be read, parsed, or has invalid format

    Examples
    --------
    >>> config = load_config_file(".emlc.toml")
    >>> config.get("indent_width")
    2

    """
    config_path = Path(config_path)

    if not config_path.exists():
        raise argparse.ArgumentTypeError(f"Configuration file does not exist: {config_path}")
    if not config_path.is_file():
        raise argparse.ArgumentTypeError(f"Configuration path is not a file: {config_path}")

    filename = config_path.name.lower()
    ext = config_path.suffix.lower()

    if filename == "pyproject.toml":
        config = _load_pyproject_emlc_section(config_path)
    elif ext == ".toml":
        config = _load_structured(config_path, "TOML")
    elif ext in (".yaml", ".yml"):
        config = _load_structured(config_path, "YAML")
    elif ext == ".json":
        config = _load_structured(config_path, "JSON")
    else:
        raise argparse.ArgumentTypeError(f"Unsupported config file format: {ext}. Use .toml, .yaml, or .json")

    logger.debug(f"Loaded configuration from {config_path}")
    return config


def _load_structured(config_path: Path, kind: str) -> Dict[str, Any]:
    """Load a TOML, YAML or JSON document whose root must be a mapping."""
    try:
        if kind == "TOML":
            with open(config_path, "rb") as f:
                config = tomllib.load(f)
        else:
            with open(config_path, "r", encoding="utf-8") as f:
                config = yaml.safe_load(f) if kind == "YAML" else json.load(f)
    except (tomllib.TOMLDecodeError, yaml.YAMLError, json.JSONDecodeError) as e:
        raise argparse.ArgumentTypeError(f"Invalid {kind} in config file {config_path}: {e}") from e
    except OSError as e:
        raise argparse.ArgumentTypeError(f"Error reading {kind} config {config_path}: {e}") from e

    # An empty YAML document loads as None
    if config is None and kind == "YAML":
        return {}
    if not isinstance(config, dict):
        raise argparse.ArgumentTypeError(f"{kind} config file must contain a mapping, got {type(config).__name__}")
    return config


def merge_configs(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    """Merge two configuration dictionaries, ``override`` winning on conflicts.

    Nested dictionaries are merged recursively, not replaced entirely.

    Examples
    --------
    >>> merge_configs({"strict": False, "indent_width": 2}, {"strict": True})
    {'strict': True, 'indent_width': 2}

    """
    result = base.copy()

    for key, value in override.items():
        if key in result and isinstance(result[key], dict) and isinstance(value, dict):
            result[key] = merge_configs(result[key], value)
        else:
            result[key] = value

    return result


def load_config_with_priority(
    explicit_path: Optional[str] = None, env_var_path: Optional[str] = None
) -> Dict[str, Any]:
    """Load configuration with proper priority handling.

    Priority order (highest to lowest):
    1. Explicit config file path (``--config`` flag)
    2. Environment variable config path (``EMLC_CONFIG``)
    3. Auto-discovered config file

    Returns
    -------
    dict
        Loaded configuration dictionary (empty dict if no config found)

    Raises
    ------
    argparse.ArgumentTypeError
        If a config file is specified but cannot be loaded

    """
    if explicit_path:
        return load_config_file(explicit_path)

    if env_var_path:
        return load_config_file(env_var_path)

    discovered_path = discover_config_file()
    if discovered_path:
        return load_config_file(discovered_path)

    return {}


def config_to_options(config: Dict[str, Any]) -> Dict[str, Any]:
    """Translate configuration keys into option field overrides.

    Parameters
    ----------
    config : dict
        Loaded configuration

    Returns
    -------
    dict
        Option field names mapped to values, e.g. ``{"strict_mode": True}``

    Raises
    ------
    argparse.ArgumentTypeError
        If a recognized key has a value of the wrong type

    Examples
    --------
    >>> config_to_options({"strict": True, "indent_width": 2})
    {'strict_mode': True, 'indent_width': 2}

    """
    options: Dict[str, Any] = {}
    for key, value in config.items():
        if key not in CONFIG_KEYS:
            logger.warning(f"Ignoring unknown configuration key: {key}")
            continue

        field_name, expected_type = CONFIG_KEYS[key]
        # bool is an int subclass; reject it for integer keys
        if not isinstance(value, expected_type) or (expected_type is int and isinstance(value, bool)):
            raise argparse.ArgumentTypeError(
                f"Configuration key '{key}' must be {expected_type.__name__}, got {type(value).__name__}"
            )
        options[field_name] = value
    return options


def get_config_search_paths() -> list[Path]:
    """Get representative paths for configuration file search, in search order."""
    cwd = Path.cwd()
    home = Path.home()
    return [cwd / filename for filename in CONFIG_FILENAMES] + [
        home / filename for filename in DEDICATED_CONFIG_FILENAMES
    ]
