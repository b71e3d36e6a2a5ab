"""Project manifest handling for versionctl."""

from __future__ import annotations

from versionctl.project.manifests import get_version, set_version

__all__ = [
    "get_version",
    "set_version",
]
