"""Command line interface for versionctl."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

import typer
from rich.console import Console

from versionctl import __version__
from versionctl.core.version import VersionFormat
from versionctl.logging import LogLevel, configure_logging

app = typer.Typer(
    name="versionctl",
    help="A version management tool: compute versions from commit history and branch rules.",
    no_args_is_help=True,
    add_completion=False,
)

console = Console(highlight=False, soft_wrap=True)
err_console = Console(stderr=True, highlight=False, soft_wrap=True)


@dataclass
class State:
    """Options shared by all commands."""

    config_path: Path | None = None
    project_path: Path | None = None


@app.callback()
def main(
    ctx: typer.Context,
    config: Path | None = typer.Option(
        None, "--config", "-c", help="Path to a configuration file (.json or .toml)."
    ),
    log_level: LogLevel = typer.Option(
        LogLevel.ERROR, "--log-level", "-l", help="Logging verbosity level."
    ),
    path: Path | None = typer.Option(
        None, "--path", "-p", help="Repository directory (defaults to the current directory)."
    ),
) -> None:
    """Compute current and next versions from git history."""
    configure_logging(log_level)
    ctx.obj = State(config_path=config, project_path=path)


@app.command()
def convert(
    value: str = typer.Argument(..., help="Version to convert."),
    fmt: VersionFormat = typer.Argument(VersionFormat.SEMVER, metavar="FORMAT", help="Output format."),
) -> None:
    """Convert a version into another format."""
    from versionctl.cli.commands.convert import run_convert

    run_convert(value, fmt, console, err_console)


@app.command()
def current(
    ctx: typer.Context,
    fmt: VersionFormat = typer.Option(VersionFormat.SEMVER, "--format", "-f", help="Output format."),
) -> None:
    """Print the current version."""
    from versionctl.cli.commands.current import run_current

    state: State = ctx.obj
    run_current(state.config_path, state.project_path, fmt, console, err_console)


@app.command(name="next")
def next_(
    ctx: typer.Context,
    fmt: VersionFormat = typer.Option(VersionFormat.SEMVER, "--format", "-f", help="Output format."),
) -> None:
    """Print the next version."""
    from versionctl.cli.commands.next import run_next

    state: State = ctx.obj
    run_next(state.config_path, state.project_path, fmt, console, err_console)


@app.command(name="set")
def set_(
    file: Path = typer.Argument(..., help="Manifest to update (pyproject.toml or package.json)."),
    version: str = typer.Argument(..., help="Version to write."),
) -> None:
    """Set the version field of a known project manifest."""
    from versionctl.cli.commands.set import run_set

    run_set(file, version, console, err_console)


@app.command()
def version() -> None:
    """Print the versionctl version."""
    console.print(__version__)


def run() -> None:
    """Entry point for the ``versionctl`` console script."""
    app()
