"""Project manifest version manipulation.

This module reads and writes the version field of the project
manifests versionctl knows about:

- ``pyproject.toml``: the ``[project].version`` key
- ``package.json``: the top-level ``"version"`` key

pyproject.toml is edited with targeted regex replacement rather than
a full TOML rewrite, so formatting and comments are preserved.
"""

from __future__ import annotations

import json
import re
import tomllib
from pathlib import Path

from versionctl.exceptions import ProjectError, VersionNotFoundError

_PROJECT_SECTION = re.compile(r"^\[project\][^\n]*\n?.*?(?=^\[|\Z)", re.MULTILINE | re.DOTALL)
_VERSION_KEY = re.compile(
    r"""^(version\s*=\s*)("(?:[^"\\\n]|\\.)*"|'[^'\n]*')""",
    re.MULTILINE,
)
_TOML_ESCAPES = {
    "\\": "\\\\",
    '"': '\\"',
    "\b": "\\b",
    "\t": "\\t",
    "\n": "\\n",
    "\f": "\\f",
    "\r": "\\r",
}


def _toml_string(value: str) -> str:
    """Quote ``value`` as a TOML basic string."""
    escaped = []
    for char in value:
        if char in _TOML_ESCAPES:
            escaped.append(_TOML_ESCAPES[char])
        elif ord(char) < 0x20 or ord(char) == 0x7F:
            escaped.append(f"\\u{ord(char):04X}")
        else:
            escaped.append(char)
    return '"' + "".join(escaped) + '"'


def get_pyproject_version(path: Path) -> str:
    """Get ``[project].version`` from a pyproject.toml.

    Raises:
        ProjectError: If the file is not valid TOML
        VersionNotFoundError: If the file declares no project version
    """
    try:
        data = tomllib.loads(path.read_text())
    except tomllib.TOMLDecodeError as e:
        raise ProjectError(f"Invalid TOML in {path}: {e}") from e

    version = data.get("project", {}).get("version")
    if not isinstance(version, str):
        raise VersionNotFoundError(f"Could not find [project].version in {path}")
    return version


def set_pyproject_version(path: Path, new_version: str) -> None:
    """Set ``[project].version`` in a pyproject.toml.

    The version key is replaced in place. When it is missing it is
    added at the top of the ``[project]`` table, and when the table
    itself is missing it is appended to the file.

    Args:
        path: Path to pyproject.toml
        new_version: Version string to write
    """
    content = path.read_text()
    section = _PROJECT_SECTION.search(content)
    quoted = _toml_string(new_version)

    if section is None:
        if content:
            content = content.rstrip("\n") + "\n\n"
        content = f"{content}[project]\nversion = {quoted}\n"
    else:
        body = section.group(0)
        updated, count = _VERSION_KEY.subn(lambda m: m.group(1) + quoted, body, count=1)
        if count == 0:
            header, _, rest = body.partition("\n")
            updated = f"{header}\nversion = {quoted}\n{rest}"
        content = content[: section.start()] + updated + content[section.end() :]

    path.write_text(content)


def get_package_json_version(path: Path) -> str:
    """Get the top-level ``version`` from a package.json.

    Raises:
        ProjectError: If the file is not a JSON object
        VersionNotFoundError: If no version is declared
    """
    data = _load_package_json(path)
    version = data.get("version")
    if not isinstance(version, str):
        raise VersionNotFoundError(f"Could not find version in {path}")
    return version


def set_package_json_version(path: Path, new_version: str) -> None:
    """Set the top-level ``version`` in a package.json, keeping key order."""
    data = _load_package_json(path)
    data["version"] = new_version
    path.write_text(json.dumps(data, indent=2, ensure_ascii=False) + "\n")


def _load_package_json(path: Path) -> dict:
    try:
        data = json.loads(path.read_text())
    except json.JSONDecodeError as e:
        raise ProjectError(f"Invalid JSON in {path}: {e}") from e
    if not isinstance(data, dict):
        raise ProjectError(f"Expected a JSON object in {path}")
    return data


_READERS = {
    "pyproject.toml": get_pyproject_version,
    "package.json": get_package_json_version,
}

_WRITERS = {
    "pyproject.toml": set_pyproject_version,
    "package.json": set_package_json_version,
}


def _check_manifest(file_path: Path) -> None:
    if not file_path.is_file():
        raise ProjectError(f"Manifest not found: {file_path}")
    if file_path.name not in _WRITERS:
        known = ", ".join(sorted(_WRITERS))
        raise ProjectError(f"Unknown manifest {file_path.name!r} (supported: {known})")


def get_version(file_path: Path) -> str:
    """Read the version declared in a known manifest.

    Raises:
        ProjectError: If the file is missing or not a known manifest
        VersionNotFoundError: If the manifest declares no version
    """
    file_path = Path(file_path)
    _check_manifest(file_path)
    return _READERS[file_path.name](file_path)


def set_version(file_path: Path, new_version: str) -> Path:
    """Write a version into a known manifest.

    Args:
        file_path: Path to pyproject.toml or package.json
        new_version: Version string to write

    Returns:
        Path to the updated manifest

    Raises:
        ProjectError: If the file is missing or not a known manifest
    """
    file_path = Path(file_path)
    _check_manifest(file_path)
    _WRITERS[file_path.name](file_path, new_version)
    return file_path
