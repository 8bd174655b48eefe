#  Copyright (c) 2025 Tom Villani, Ph.D.

"""Configuration file discovery and loading for wxmark.

A configuration file holds a serialized RendererOptions value in the
editor's JSON shape::

    template = "default"
    codeTheme = "monokai"

    [base]
    color = "#333333"
    lineHeight = 1.75

    [block.p]
    fontSize = 15

JSON, TOML and YAML files are supported, as is a ``[tool.wxmark]`` table
in ``pyproject.toml``. The optional top-level ``template`` key names a
template to render with; every other key is a renderer option.
"""

from __future__ import annotations

import json
import logging
import os
import sys
from pathlib import Path
from typing import Any, Dict, Optional

if sys.version_info >= (3, 11):
    import tomllib
else:
    import tomli as tomllib  # type: ignore[import-not-found,unused-ignore]

import yaml

from wxmark.exceptions import ConfigurationError, ValidationError
from wxmark.options import RendererOptions

logger = logging.getLogger(__name__)

CONFIG_FILENAMES = [".wxmark.toml", ".wxmark.yaml", ".wxmark.yml", ".wxmark.json"]
CONFIG_ENV_VAR = "WXMARK_CONFIG"
TEMPLATE_KEY = "template"


def _load_pyproject_section(pyproject_path: Path) -> Dict[str, Any]:
    """Load the ``[tool.wxmark]`` table from a pyproject.toml file.

    Returns an empty dict when the table is absent.
    """
    try:
        with open(pyproject_path, "rb") as f:
            data = tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        raise ConfigurationError(
            f"Invalid TOML in pyproject.toml {pyproject_path}: {e}", str(pyproject_path), e
        ) from e

    config = data.get("tool", {}).get("wxmark", {})
    if not isinstance(config, dict):
        raise ConfigurationError(
            f"[tool.wxmark] section in {pyproject_path} must be a table, got {type(config).__name__}",
            str(pyproject_path),
        )
    return config


def find_config_in_parents(start_dir: Optional[Path] = None) -> Optional[Path]:
    """Find a configuration file in *start_dir* or one of its parents.

    Each directory is checked for the dedicated config files first
    (``.wxmark.toml``, ``.wxmark.yaml``, ``.wxmark.yml``, ``.wxmark.json``)
    and then for a ``pyproject.toml`` with a ``[tool.wxmark]`` table.

    Parameters
    ----------
    start_dir : Path, optional
        Starting directory, defaults to the current working directory

    Returns
    -------
    Path or None
        The first configuration file found

    """
    current = (start_dir or Path.cwd()).resolve()

    while True:
        for filename in CONFIG_FILENAMES:
            config_path = current / filename
            if config_path.is_file():
                return config_path

        pyproject_path = current / "pyproject.toml"
        if pyproject_path.is_file():
            try:
                if _load_pyproject_section(pyproject_path):
                    return pyproject_path
            except (ConfigurationError, OSError) as e:
                logger.debug("Skipping unreadable %s: %s", pyproject_path, e)

        parent = current.parent
        if parent == current:
            break
        current = parent

    return None


def discover_config_file(start_dir: Optional[Path] = None) -> Optional[Path]:
    """Discover a configuration file in the parent chain, then the home directory."""
    found = find_config_in_parents(start_dir)
    if found:
        return found

    home = Path.home()
    for filename in CONFIG_FILENAMES:
        config_path = home / filename
        if config_path.is_file():
            return config_path

    return None


def load_config_file(config_path: Path | str) -> Dict[str, Any]:
    """Load configuration from a JSON, TOML, YAML or pyproject.toml file.

    The format is chosen from the file name and extension.

    Parameters
    ----------
    config_path : Path or str
        Path to the configuration file

    Returns
    -------
    dict
        Configuration mapping

    Raises
    ------
    ConfigurationError
        If the file is missing, unreadable, malformed, or its root is not a
        mapping

    """
    config_path = Path(config_path)

    if not config_path.exists():
        raise ConfigurationError(f"Configuration file does not exist: {config_path}", str(config_path))
    if not config_path.is_file():
        raise ConfigurationError(f"Configuration path is not a file: {config_path}", str(config_path))

    filename = config_path.name.lower()
    ext = config_path.suffix.lower()

    try:
        if filename == "pyproject.toml":
            return _load_pyproject_section(config_path)
        if ext == ".toml":
            with open(config_path, "rb") as f:
                config = tomllib.load(f)
        elif ext in (".yaml", ".yml"):
            with open(config_path, "r", encoding="utf-8") as f:
                config = yaml.safe_load(f)
        elif ext == ".json":
            with open(config_path, "r", encoding="utf-8") as f:
                config = json.load(f)
        else:
            raise ConfigurationError(
                f"Unsupported config file format: {ext}. Use .json, .toml, or .yaml", str(config_path)
            )
    except ConfigurationError:
        raise
    except (OSError, ValueError, yaml.YAMLError) as e:
        # TOMLDecodeError and JSONDecodeError are ValueErrors
        raise ConfigurationError(f"Error reading config file {config_path}: {e}", str(config_path), e) from e

    if config is None:
        return {}
    if not isinstance(config, dict):
        raise ConfigurationError(
            f"Config file {config_path} must contain a mapping at root level, got {type(config).__name__}",
            str(config_path),
        )
    return config


def load_config_with_priority(explicit_path: Optional[str] = None, discover: bool = True) -> Dict[str, Any]:
    """Load configuration from the highest-priority source.

    Priority order:

    1. Explicit path (``--config``)
    2. The ``WXMARK_CONFIG`` environment variable
    3. Auto-discovered file, unless *discover* is False

    Returns an empty dict when no configuration is found.
    """
    if explicit_path:
        return load_config_file(explicit_path)

    env_path = os.environ.get(CONFIG_ENV_VAR)
    if env_path:
        return load_config_file(env_path)

    if discover:
        discovered = discover_config_file()
        if discovered:
            logger.info("Using configuration file: %s", discovered)
            return load_config_file(discovered)

    return {}


def options_from_config(config: Dict[str, Any]) -> tuple[RendererOptions, Optional[str]]:
    """Split a configuration mapping into renderer options and a template id.

    Raises
    ------
    ConfigurationError
        If the options in the mapping are invalid

    """
    data = dict(config)
    template = data.pop(TEMPLATE_KEY, None)
    try:
        options = RendererOptions.from_dict(data)
    except (ValidationError, TypeError) as e:
        raise ConfigurationError(f"Invalid renderer options in configuration: {e}", original_error=e) from e
    return options, template


def load_options(config_path: Path | str) -> RendererOptions:
    """Load RendererOptions from a configuration file, ignoring any template key."""
    options, _template = options_from_config(load_config_file(config_path))
    return options


__all__ = [
    "CONFIG_ENV_VAR",
    "CONFIG_FILENAMES",
    "discover_config_file",
    "find_config_in_parents",
    "load_config_file",
    "load_config_with_priority",
    "load_options",
    "options_from_config",
]
