"""Helpers shared by the repository-aware commands."""

from __future__ import annotations

from typing import TYPE_CHECKING, NoReturn

from rich.markup import escape

from versionctl.config import load_config
from versionctl.core.analyzer import create_analyzer
from versionctl.exceptions import VersionctlError
from versionctl.logging import get_logger

if TYPE_CHECKING:
    from pathlib import Path

    from rich.console import Console

    from versionctl.core.analyzer import Analyzer


def fail(err_console: Console, error: Exception) -> NoReturn:
    """Report an error and exit with status 1."""
    err_console.print(f"[red]error:[/] {escape(str(error))}")
    raise SystemExit(1) from error


def load_analyzer(
    config_path: Path | None,
    project_path: Path | None,
    err_console: Console,
) -> Analyzer:
    """Load configuration and build an analyzer for the repository.

    Exits with status 1 when either step fails.
    """
    try:
        config = load_config(config_path, project_path=project_path)
    except VersionctlError as e:
        fail(err_console, e)

    try:
        return create_analyzer(config, project_path, logger=get_logger("versionctl.analyzer"))
    except VersionctlError as e:
        fail(err_console, e)
