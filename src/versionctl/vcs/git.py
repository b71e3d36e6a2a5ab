"""Git repository reader.

Reads branch, tag and commit data by running the ``git`` executable.
Nothing here ever writes to the repository.
"""

from __future__ import annotations

import subprocess
from pathlib import Path
from typing import TYPE_CHECKING

from versionctl.exceptions import GitError
from versionctl.vcs.base import Commit

if TYPE_CHECKING:
    from collections.abc import Iterator

_FIELD_SEP = "\x1f"
_RECORD_SEP = b"\x00"
_CHUNK_SIZE = 64 * 1024


class GitRepository:
    """Read-only view of a local git working copy.

    Args:
        path: Any directory inside the working copy (defaults to cwd)

    Raises:
        GitError: If ``path`` is not inside a git working copy
    """

    def __init__(self, path: Path | None = None) -> None:
        start = Path(path) if path is not None else Path.cwd()
        if not start.is_dir():
            raise GitError(f"Not a directory: {start}")
        toplevel = _run(["rev-parse", "--show-toplevel"], cwd=start)
        self.path = Path(toplevel.strip())

    def __repr__(self) -> str:
        return f"GitRepository({str(self.path)!r})"

    def _git(self, *args: str) -> str:
        return _run(list(args), cwd=self.path)

    def current_branch(self) -> str:
        """Return the short name of the checked out branch.

        Raises:
            GitError: If HEAD is detached
        """
        try:
            return self._git("symbolic-ref", "--quiet", "--short", "HEAD").strip()
        except GitError as e:
            raise GitError("HEAD is detached; cannot determine the current branch") from e

    def list_tags(self) -> list[str]:
        """Return the names of all tags."""
        return [line for line in self._git("tag", "--list").splitlines() if line]

    def tags_by_commit(self) -> dict[str, list[str]]:
        """Map commit hashes to the tags pointing at them.

        Annotated tags are peeled to the commit they tag.
        """
        output = self._git(
            "for-each-ref",
            "--format=%(objectname)%09%(*objectname)%09%(refname:short)",
            "refs/tags",
        )
        tags: dict[str, list[str]] = {}
        for line in output.splitlines():
            if not line:
                continue
            sha, peeled, name = line.split("\t", 2)
            tags.setdefault(peeled or sha, []).append(name)
        return tags

    def walk_ancestry(self, ref: str = "HEAD") -> Iterator[Commit]:
        """Yield the commits reachable from ``ref``, newest first.

        ``git log`` output is streamed, so a caller that stops iterating
        early does not pay for reading the rest of the history; the git
        process is terminated when the generator is closed.

        Raises:
            GitError: If ``ref`` cannot be resolved or git fails
        """
        tags = self.tags_by_commit()
        args = ["git", "log", "-z", f"--format=%H{_FIELD_SEP}%B", ref, "--"]
        try:
            process = subprocess.Popen(
                args,
                cwd=self.path,
                stdout=subprocess.PIPE,
                stderr=subprocess.PIPE,
            )
        except FileNotFoundError as e:
            raise GitError("git executable not found") from e

        assert process.stdout is not None
        assert process.stderr is not None
        try:
            buffer = b""
            while chunk := process.stdout.read1(_CHUNK_SIZE):
                buffer += chunk
                *records, buffer = buffer.split(_RECORD_SEP)
                for record in records:
                    if commit := _parse_record(record, tags):
                        yield commit
            if commit := _parse_record(buffer, tags):
                yield commit

            stderr = process.stderr.read().decode(errors="replace")
            if process.wait() != 0:
                raise GitError(f"git log {ref} failed", stderr=stderr)
        finally:
            if process.poll() is None:
                process.kill()
                process.wait()
            process.stdout.close()
            process.stderr.close()


def _parse_record(record: bytes, tags: dict[str, list[str]]) -> Commit | None:
    text = record.decode(errors="replace").lstrip("\n")
    if not text:
        return None
    sha, _, message = text.partition(_FIELD_SEP)
    return Commit(sha=sha, message=message.rstrip("\n"), tags=tuple(tags.get(sha, ())))


def _run(args: list[str], cwd: Path) -> str:
    try:
        result = subprocess.run(
            ["git", *args],
            cwd=cwd,
            capture_output=True,
            text=True,
            check=True,
        )
    except FileNotFoundError as e:
        raise GitError("git executable not found") from e
    except subprocess.CalledProcessError as e:
        raise GitError(f"git {' '.join(args)} failed", stderr=e.stderr) from e
    return result.stdout
