"""Repository access for versionctl."""

from __future__ import annotations

from versionctl.vcs.base import Commit, InMemoryRepository, RepositoryReader
from versionctl.vcs.git import GitRepository

__all__ = [
    "Commit",
    "GitRepository",
    "InMemoryRepository",
    "RepositoryReader",
]
