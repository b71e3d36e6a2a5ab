"""Core business logic for versionctl.

This module contains the fundamental building blocks:
- Version parsing, formatting and bumping
- Commit message classification
- Branch rule matching and template rendering
- Current and next version decisions
"""

from __future__ import annotations

from versionctl.core.analyzer import (
    Analyzer,
    AncestorState,
    compute_current_version,
    compute_next_version,
    create_analyzer,
)
from versionctl.core.commits import CommitParser, create_parser
from versionctl.core.rules import RuleMatch, inject, match_rule, render, sanitize
from versionctl.core.version import (
    BumpType,
    PreRelease,
    Version,
    VersionChange,
    VersionFormat,
    parse_version,
)

__all__ = [
    # Analyzer
    "Analyzer",
    "AncestorState",
    # Version
    "BumpType",
    # Commits
    "CommitParser",
    "PreRelease",
    # Rules
    "RuleMatch",
    "Version",
    "VersionChange",
    "VersionFormat",
    "compute_current_version",
    "compute_next_version",
    "create_analyzer",
    "create_parser",
    "inject",
    "match_rule",
    "parse_version",
    "render",
    "sanitize",
]
