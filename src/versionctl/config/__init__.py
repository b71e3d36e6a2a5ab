"""Configuration management for versionctl."""

from __future__ import annotations

from versionctl.config.loader import load_config
from versionctl.config.models import Rule, VersionctlConfig

__all__ = [
    "Rule",
    "VersionctlConfig",
    "load_config",
]
