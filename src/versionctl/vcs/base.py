"""Repository reader interface.

The analyzer only needs three things from a repository: the current
branch, the list of tags, and the commit ancestry of HEAD. Anything
implementing :class:`RepositoryReader` can supply them, which lets the
analyzer run against git or against pre-fetched data.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from collections.abc import Iterable, Iterator


@dataclass(frozen=True)
class Commit:
    """A commit as seen by the analyzer.

    Attributes:
        sha: Full commit hash
        message: Full commit message (header and body)
        tags: Names of the tags pointing at this commit
    """

    sha: str
    message: str
    tags: tuple[str, ...] = field(default_factory=tuple)


@runtime_checkable
class RepositoryReader(Protocol):
    """Read-only access to the repository data the analyzer needs."""

    def current_branch(self) -> str:
        """Return the short name of the checked out branch."""
        ...

    def list_tags(self) -> list[str]:
        """Return the names of all tags in the repository."""
        ...

    def walk_ancestry(self, ref: str = "HEAD") -> Iterator[Commit]:
        """Yield commits reachable from ``ref``, newest first.

        The walk is lazy; callers stop it by simply no longer iterating.
        """
        ...


class InMemoryRepository:
    """A :class:`RepositoryReader` over already-fetched data.

    ``commits`` is the ancestry of HEAD, newest first.
    """

    def __init__(
        self,
        branch: str,
        tags: Iterable[str] = (),
        commits: Iterable[Commit] = (),
    ) -> None:
        self.branch = branch
        self.tags = list(tags)
        self.commits = list(commits)

    def current_branch(self) -> str:
        return self.branch

    def list_tags(self) -> list[str]:
        return list(self.tags)

    def walk_ancestry(self, ref: str = "HEAD") -> Iterator[Commit]:
        yield from self.commits
