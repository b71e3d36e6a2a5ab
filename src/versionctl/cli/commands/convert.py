"""Implementation of the 'convert' command."""

from __future__ import annotations

from typing import TYPE_CHECKING

from versionctl.cli.commands._shared import fail
from versionctl.core.version import Version
from versionctl.exceptions import InvalidVersionError

if TYPE_CHECKING:
    from rich.console import Console

    from versionctl.core.version import VersionFormat


def run_convert(value: str, fmt: VersionFormat, console: Console, err_console: Console) -> None:
    """Parse ``value`` and print it in ``fmt``."""
    try:
        version = Version.parse(value)
    except InvalidVersionError as e:
        fail(err_console, e)

    console.print(version.format(fmt), markup=False, emoji=False)
