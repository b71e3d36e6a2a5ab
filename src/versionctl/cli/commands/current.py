"""Implementation of the 'current' command.

Prints the highest version tagged in the repository.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from versionctl.cli.commands._shared import fail, load_analyzer
from versionctl.exceptions import VersionctlError

if TYPE_CHECKING:
    from pathlib import Path

    from rich.console import Console

    from versionctl.core.version import VersionFormat


def run_current(
    config_path: Path | None,
    project_path: Path | None,
    fmt: VersionFormat,
    console: Console,
    err_console: Console,
) -> None:
    """Run the current command.

    Args:
        config_path: Optional explicit config file
        project_path: Optional repository directory
        fmt: Output format
        console: Console for standard output
        err_console: Console for error output
    """
    analyzer = load_analyzer(config_path, project_path, err_console)

    try:
        current_version = analyzer.get_current_version()
    except VersionctlError as e:
        fail(err_console, e)

    console.print(current_version.format(fmt), markup=False, emoji=False)
