"""Implementation of the 'set' command.

Writes a version string into a project manifest. The string is written
as given, so any output of ``versionctl next --format ...`` can be used.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from rich.markup import escape

from versionctl.cli.commands._shared import fail
from versionctl.exceptions import ProjectError
from versionctl.project.manifests import set_version

if TYPE_CHECKING:
    from pathlib import Path

    from rich.console import Console


def run_set(file: Path, version: str, console: Console, err_console: Console) -> None:
    """Run the set command.

    Args:
        file: Manifest to update
        version: Version string to write
        console: Console for standard output
        err_console: Console for error output
    """
    try:
        updated = set_version(file, version)
    except (ProjectError, OSError) as e:
        fail(err_console, e)

    console.print(
        f"[green]✓[/] Updated version in {escape(str(updated))} to {escape(version)}", emoji=False
    )
