"""Shared test fixtures."""

from __future__ import annotations

import shutil
import subprocess
from typing import TYPE_CHECKING

import pytest

from versionctl.config.models import Rule, VersionctlConfig

if TYPE_CHECKING:
    from pathlib import Path

_GIT_IDENTITY = [
    "-c",
    "user.name=Test",
    "-c",
    "user.email=test@test.com",
    "-c",
    "commit.gpgsign=false",
    "-c",
    "tag.gpgsign=false",
]


@pytest.fixture
def test_config() -> VersionctlConfig:
    """Configuration with explicit patch/minor/major header tags."""
    return VersionctlConfig(
        breaking_change_tags=["breaking:"],
        rules=[
            Rule(branch="main"),
            Rule(branch="dev", prerelease_token="rc"),
            Rule(branch="(?P<branch>.*)", prerelease_token="{branch}", metadata="{branch}"),
        ],
        tags={
            "patch:": "patch",
            "minor:": "minor",
            "major:": "major",
        },
    )


class GitRepoBuilder:
    """Builds throwaway git histories for tests."""

    def __init__(self, path: Path) -> None:
        self.path = path
        self.git("init", "-q")
        self.git("symbolic-ref", "HEAD", "refs/heads/main")

    def git(self, *args: str) -> str:
        result = subprocess.run(
            ["git", *_GIT_IDENTITY, *args],
            cwd=self.path,
            capture_output=True,
            text=True,
            check=True,
        )
        return result.stdout.strip()

    def commit(self, message: str) -> str:
        """Create an empty commit and return its hash."""
        self.git("commit", "-q", "--allow-empty", "-m", message)
        return self.git("rev-parse", "HEAD")

    def tag(self, name: str, *, annotated: bool = False) -> None:
        """Tag HEAD."""
        if annotated:
            self.git("tag", "-a", name, "-m", f"release {name}")
        else:
            self.git("tag", name)

    def checkout(self, branch: str) -> None:
        """Check out ``branch``, creating it at HEAD if needed."""
        exists = subprocess.run(
            ["git", "rev-parse", "--verify", "--quiet", f"refs/heads/{branch}"],
            cwd=self.path,
            capture_output=True,
        ).returncode == 0
        if exists:
            self.git("checkout", "-q", branch)
        else:
            self.git("checkout", "-q", "-b", branch)


@pytest.fixture
def git_repo(tmp_path: Path) -> GitRepoBuilder:
    """An empty git repository on branch main."""
    if shutil.which("git") is None:
        pytest.skip("git is not installed")
    repo_path = tmp_path / "repo"
    repo_path.mkdir()
    return GitRepoBuilder(repo_path)


@pytest.fixture
def temp_git_repo_with_pyproject(git_repo: GitRepoBuilder) -> Path:
    """A git repository with a pyproject.toml carrying versionctl config."""
    (git_repo.path / "pyproject.toml").write_text(
        """\
[project]
name = "test-project"
version = "1.0.0"

[tool.versionctl]
breaking_change_tags = ["breaking:"]
tag_prefix = "v"

[tool.versionctl.tags]
"patch:" = "patch"
"minor:" = "minor"
"major:" = "major"

[[tool.versionctl.rules]]
branch = "^main$"

[[tool.versionctl.rules]]
branch = "^dev$"
prerelease_token = "rc"

[[tool.versionctl.rules]]
branch = "(?P<branch>.*)"
prerelease_token = "{branch}"
metadata = "{branch}"
"""
    )
    return git_repo.path
