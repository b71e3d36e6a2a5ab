"""versionctl: compute semantic versions from commit history and branch rules."""

from __future__ import annotations

__version__ = "0.1.0"

from versionctl.config import Rule, VersionctlConfig, load_config  # noqa: E402
from versionctl.core import (  # noqa: E402
    Analyzer,
    BumpType,
    Version,
    VersionChange,
    compute_current_version,
    compute_next_version,
    create_analyzer,
    parse_version,
)

__all__ = [
    "Analyzer",
    "BumpType",
    "Rule",
    "Version",
    "VersionChange",
    "VersionctlConfig",
    "__version__",
    "compute_current_version",
    "compute_next_version",
    "create_analyzer",
    "load_config",
    "parse_version",
]
