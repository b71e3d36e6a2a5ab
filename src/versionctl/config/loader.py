"""Configuration loading.

Configuration is resolved in this order:

1. An explicit file passed by the caller (``.json`` or ``.toml``)
2. The ``[tool.versionctl]`` table of the nearest ``pyproject.toml``
3. Built-in defaults
"""

from __future__ import annotations

import json
import tomllib
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from versionctl.config.models import VersionctlConfig
from versionctl.exceptions import ConfigNotFoundError, ConfigValidationError

TOOL_TABLE = "versionctl"


def find_pyproject_toml(start: Path | None = None) -> Path:
    """Find the nearest pyproject.toml, searching upwards.

    Args:
        start: Directory to start from (defaults to cwd)

    Returns:
        Path to pyproject.toml

    Raises:
        ConfigNotFoundError: If no pyproject.toml is found
    """
    current = (start or Path.cwd()).resolve()
    for directory in (current, *current.parents):
        candidate = directory / "pyproject.toml"
        if candidate.is_file():
            return candidate

    raise ConfigNotFoundError(f"No pyproject.toml found in {current} or its parents")


def load_pyproject_toml(path: Path) -> dict[str, Any]:
    """Load and parse a TOML file.

    Raises:
        ConfigNotFoundError: If the file does not exist
        ConfigValidationError: If the file is not valid TOML
    """
    if not path.is_file():
        raise ConfigNotFoundError(f"File not found: {path}")

    try:
        with path.open("rb") as f:
            return tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        raise ConfigValidationError(f"Invalid TOML in {path}: {e}") from e


def extract_versionctl_config(pyproject: dict[str, Any]) -> dict[str, Any]:
    """Extract the ``[tool.versionctl]`` table, or an empty dict."""
    return pyproject.get("tool", {}).get(TOOL_TABLE, {})


def load_config_file(path: Path) -> VersionctlConfig:
    """Load configuration from a standalone JSON or TOML file.

    A TOML file may either hold the settings at top level or be a
    pyproject.toml with a ``[tool.versionctl]`` table.

    Raises:
        ConfigNotFoundError: If the file does not exist
        ConfigValidationError: If the file cannot be parsed or validated
    """
    if not path.is_file():
        raise ConfigNotFoundError(f"Config file not found: {path}")

    if path.suffix == ".toml":
        data = load_pyproject_toml(path)
        if "tool" in data:
            data = extract_versionctl_config(data)
    else:
        try:
            data = json.loads(path.read_text())
        except json.JSONDecodeError as e:
            raise ConfigValidationError(f"Invalid JSON in {path}: {e}") from e

    return _validate(data, path)


def load_config(path: Path | None = None, *, project_path: Path | None = None) -> VersionctlConfig:
    """Load versionctl configuration.

    Args:
        path: Explicit config file; takes precedence when given
        project_path: Directory to search for pyproject.toml from

    Returns:
        Validated configuration

    Raises:
        ConfigNotFoundError: If an explicit file does not exist
        ConfigValidationError: If configuration is invalid
    """
    if path is not None:
        return load_config_file(path)

    try:
        pyproject_path = find_pyproject_toml(project_path)
    except ConfigNotFoundError:
        return VersionctlConfig()

    data = extract_versionctl_config(load_pyproject_toml(pyproject_path))
    return _validate(data, pyproject_path)


def _validate(data: Any, source: Path) -> VersionctlConfig:
    if not isinstance(data, dict):
        raise ConfigValidationError(f"Invalid configuration in {source}: expected a table")
    try:
        return VersionctlConfig.model_validate(data)
    except ValidationError as e:
        raise ConfigValidationError(f"Invalid configuration in {source}:\n{e}") from e
