"""Tests for the command line interface."""

from __future__ import annotations

import json
from pathlib import Path

import pytest
from typer.testing import CliRunner

from versionctl import __version__
from versionctl.cli.app import app

runner = CliRunner()


class TestVersionCommand:
    """Tests for 'versionctl version'."""

    def test_prints_version(self):
        """The tool's own version is printed."""
        result = runner.invoke(app, ["version"])

        assert result.exit_code == 0
        assert result.output.strip() == __version__


class TestConvertCommand:
    """Tests for 'versionctl convert'."""

    @pytest.mark.parametrize(
        ("fmt", "expected"),
        [
            ("semver", "1.2.3-rc.4+abc"),
            ("git", "v1.2.3-rc.4+abc"),
            ("docker", "1.2.3-rc.4-abc"),
            ("node", "1.2.3-rc.4-abc"),
        ],
    )
    def test_formats(self, fmt: str, expected: str):
        """Each format renders the version."""
        result = runner.invoke(app, ["convert", "1.2.3-rc.4+abc", fmt])

        assert result.exit_code == 0
        assert result.output.strip() == expected

    def test_default_format(self):
        """semver is the default format."""
        result = runner.invoke(app, ["convert", "1.2.3"])

        assert result.exit_code == 0
        assert result.output.strip() == "1.2.3"

    def test_invalid_version(self):
        """An unparseable version exits with status 1."""
        result = runner.invoke(app, ["convert", "not-a-version"])

        assert result.exit_code == 1
        assert "error:" in result.output
        assert "not-a-version" in result.output

    @pytest.mark.parametrize(
        "version",
        ["1.2.3-rc.1+[bold]x", "1.2.3+[red]build[/red]", "1.0.0+:smile:"],
    )
    def test_metadata_printed_verbatim(self, version: str):
        """Bracketed or emoji-like metadata is printed as is."""
        result = runner.invoke(app, ["convert", version])

        assert result.exit_code == 0
        assert result.output.strip() == version

    def test_unknown_format(self):
        """Unknown formats are a usage error."""
        result = runner.invoke(app, ["convert", "1.2.3", "rpm"])

        assert result.exit_code == 2


class TestCurrentCommand:
    """Tests for 'versionctl current'."""

    def test_current(self, git_repo):
        """The highest release tag is printed."""
        git_repo.commit("initial")
        git_repo.tag("v1.0.0")
        git_repo.tag("v1.1.0-rc.2")

        result = runner.invoke(app, ["--path", str(git_repo.path), "current"])

        assert result.exit_code == 0
        assert result.output.strip() == "1.1.0-rc.2"

    def test_current_git_format(self, git_repo):
        """--format applies to the printed version."""
        git_repo.commit("initial")
        git_repo.tag("v2.0.0")

        result = runner.invoke(app, ["--path", str(git_repo.path), "current", "--format", "git"])

        assert result.exit_code == 0
        assert result.output.strip() == "v2.0.0"

    def test_not_a_repository(self, tmp_path: Path):
        """A directory outside git exits with status 1."""
        result = runner.invoke(app, ["--path", str(tmp_path), "current"])

        assert result.exit_code == 1
        assert "error:" in result.output


class TestNextCommand:
    """Tests for 'versionctl next'."""

    def test_next_from_pyproject_config(self, temp_git_repo_with_pyproject: Path, git_repo):
        """Configuration is read from the repository's pyproject.toml."""
        git_repo.commit("initial")
        git_repo.tag("v1.0.0")
        git_repo.commit("minor: add a thing")

        result = runner.invoke(app, ["--path", str(temp_git_repo_with_pyproject), "next"])

        assert result.exit_code == 0
        assert result.output.strip() == "1.1.0"

    def test_next_with_explicit_config(self, git_repo, tmp_path: Path):
        """--config selects a standalone configuration file."""
        config = tmp_path / "versionctl.json"
        config.write_text(
            json.dumps(
                {
                    "rules": [{"branch": ".*", "prereleaseToken": "beta"}],
                    "tags": {"fix:": "patch"},
                }
            )
        )
        git_repo.commit("fix: a bug")

        result = runner.invoke(
            app,
            ["--config", str(config), "--path", str(git_repo.path), "next", "-f", "docker"],
        )

        assert result.exit_code == 0
        assert result.output.strip() == "0.0.1-beta.1"

    def test_no_change(self, git_repo):
        """Nothing releasable exits with status 1."""
        git_repo.commit("chore: tidy")

        result = runner.invoke(app, ["--path", str(git_repo.path), "next"])

        assert result.exit_code == 1
        assert "Version unchanged" in result.output

    def test_missing_config_file(self, git_repo, tmp_path: Path):
        """A missing --config file exits with status 1."""
        result = runner.invoke(
            app,
            ["--config", str(tmp_path / "missing.json"), "--path", str(git_repo.path), "next"],
        )

        assert result.exit_code == 1
        assert "not found" in result.output

    def test_debug_logging(self, git_repo):
        """--log-level debug reports the decision on stderr."""
        git_repo.commit("feat: something")

        result = runner.invoke(app, ["--log-level", "debug", "--path", str(git_repo.path), "next"])

        assert result.exit_code == 0
        assert "next version" in result.output
        assert result.output.strip().splitlines()[-1] == "0.1.0"

    def test_invalid_log_level(self, git_repo):
        """Unknown log levels are a usage error."""
        result = runner.invoke(app, ["--log-level", "trace", "--path", str(git_repo.path), "next"])

        assert result.exit_code == 2


class TestSetCommand:
    """Tests for 'versionctl set'."""

    def test_set_pyproject(self, tmp_path: Path):
        """The pyproject.toml version is replaced."""
        path = tmp_path / "pyproject.toml"
        path.write_text('[project]\nname = "demo"\nversion = "0.1.0"\n')

        result = runner.invoke(app, ["set", str(path), "0.2.0-rc.1"])

        assert result.exit_code == 0
        assert "Updated version" in result.output
        assert path.read_text() == '[project]\nname = "demo"\nversion = "0.2.0-rc.1"\n'

    def test_set_package_json(self, tmp_path: Path):
        """The package.json version is replaced."""
        path = tmp_path / "package.json"
        path.write_text('{"name": "demo", "version": "0.1.0"}')

        result = runner.invoke(app, ["set", str(path), "1.0.0"])

        assert result.exit_code == 0
        assert json.loads(path.read_text())["version"] == "1.0.0"

    def test_unknown_manifest(self, tmp_path: Path):
        """Unknown manifests exit with status 1."""
        path = tmp_path / "setup.cfg"
        path.write_text("[metadata]\nversion = 0.1.0\n")

        result = runner.invoke(app, ["set", str(path), "1.0.0"])

        assert result.exit_code == 1
        assert "Unknown manifest" in result.output

    def test_bracketed_version_reported_verbatim(self, tmp_path: Path):
        """The confirmation shows the version exactly as written."""
        path = tmp_path / "package.json"
        path.write_text('{"version": "0.1.0"}')

        result = runner.invoke(app, ["set", str(path), "1.0.0+[bold]x"])

        assert result.exit_code == 0
        assert "to 1.0.0+[bold]x" in result.output
        assert json.loads(path.read_text())["version"] == "1.0.0+[bold]x"
