"""Command line interface for versionctl."""

from __future__ import annotations

from versionctl.cli.app import app, run

__all__ = ["app", "run"]
