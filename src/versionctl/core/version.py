"""Semantic version parsing and manipulation.

Versions have the form ``MAJOR.MINOR.PATCH[-TOKEN.COUNT][+METADATA]``.
The prerelease part is always a token followed by a numeric counter
(e.g. ``rc.1``) so that successive prereleases on the same channel
can be counted up.

All values are immutable: bumping or releasing a version returns a
new :class:`Version`.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from enum import Enum
from functools import total_ordering

from versionctl.exceptions import InvalidVersionError

VERSION_PATTERN = re.compile(
    r"^(?P<major>\d+)"
    r"\.(?P<minor>\d+)"
    r"\.(?P<patch>\d+)"
    r"(?:-(?P<token>[^+]+)\.(?P<count>\d+))?"
    r"(?:\+(?P<metadata>.+))?$"
)


class BumpType(str, Enum):
    """Magnitude of a version bump, from smallest to largest."""

    NONE = "none"
    PRERELEASE = "prerelease"
    PATCH = "patch"
    MINOR = "minor"
    MAJOR = "major"

    def __str__(self) -> str:
        return self.value

    @property
    def rank(self) -> int:
        """Position of this bump type in the total order."""
        return _BUMP_RANKS[self]


_BUMP_RANKS = {bump: rank for rank, bump in enumerate(BumpType)}


class VersionFormat(str, Enum):
    """Output styles supported by :meth:`Version.format`."""

    SEMVER = "semver"
    GIT = "git"
    DOCKER = "docker"
    NODE = "node"

    def __str__(self) -> str:
        return self.value


@total_ordering
@dataclass(frozen=True, eq=False)
class VersionChange:
    """A requested version bump.

    ``prerelease_token`` is only meaningful when ``bump`` is
    :attr:`BumpType.PRERELEASE`.

    Ordering only looks at the bump magnitude.
    """

    bump: BumpType = BumpType.NONE
    prerelease_token: str = ""

    def compare(self, other: VersionChange) -> int:
        """Compare bump magnitudes.

        Returns:
            -1, 0 or 1 when this change is smaller, equal or larger
        """
        return _cmp(self.bump.rank, other.bump.rank)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, VersionChange):
            return NotImplemented
        return self.bump == other.bump and self.prerelease_token == other.prerelease_token

    def __hash__(self) -> int:
        return hash((self.bump, self.prerelease_token))

    def __lt__(self, other: VersionChange) -> bool:
        if not isinstance(other, VersionChange):
            return NotImplemented
        return self.compare(other) < 0

    def __str__(self) -> str:
        if self.bump is BumpType.PRERELEASE and self.prerelease_token:
            return f"{self.bump} ({self.prerelease_token})"
        return str(self.bump)


@dataclass(frozen=True)
class PreRelease:
    """Prerelease component of a version, e.g. ``rc.2``."""

    token: str
    count: int = 1

    def __str__(self) -> str:
        return f"{self.token}.{self.count}"


@dataclass(frozen=True, eq=False)
class Version:
    """A semantic version.

    Equality and ordering ignore ``metadata``. Equality compares the
    prerelease component while ordering only looks at whether one is
    present: at equal ``major.minor.patch`` a release orders after any
    prerelease, and two prereleases order the same.

    Attributes:
        major: Major version number
        minor: Minor version number
        patch: Patch version number
        prerelease: Prerelease component, ``None`` for a release
        metadata: Build metadata, empty when absent
    """

    major: int = 0
    minor: int = 0
    patch: int = 0
    prerelease: PreRelease | None = None
    metadata: str = field(default="")

    @classmethod
    def parse(cls, text: str) -> Version:
        """Parse a version string.

        Args:
            text: Version string, e.g. ``1.2.3-rc.1+build``

        Returns:
            Parsed Version

        Raises:
            InvalidVersionError: If the string is not a valid version
        """
        match = VERSION_PATTERN.match(text)
        if match is None:
            raise InvalidVersionError(f"Invalid version string: {text!r}")

        prerelease = None
        if match.group("token") is not None:
            prerelease = PreRelease(
                token=match.group("token"),
                count=int(match.group("count")),
            )

        return cls(
            major=int(match.group("major")),
            minor=int(match.group("minor")),
            patch=int(match.group("patch")),
            prerelease=prerelease,
            metadata=match.group("metadata") or "",
        )

    @property
    def is_prerelease(self) -> bool:
        """Whether this version carries a prerelease component."""
        return self.prerelease is not None

    @property
    def is_release(self) -> bool:
        """Whether this version is a release (no prerelease component)."""
        return self.prerelease is None

    def format(self, style: VersionFormat | str = VersionFormat.SEMVER) -> str:
        """Render the version in one of the supported styles.

        ``semver`` is the canonical form, ``git`` prefixes it with ``v``,
        ``docker`` and ``node`` replace ``+`` with ``-``. Empty or
        unrecognised styles render as ``semver``.

        Args:
            style: Output style

        Returns:
            Formatted version string
        """
        semver = self._semver()
        style = str(style)
        if style == VersionFormat.GIT.value:
            return f"v{semver}"
        if style in (VersionFormat.DOCKER.value, VersionFormat.NODE.value):
            return semver.replace("+", "-")
        return semver

    def _semver(self) -> str:
        text = f"{self.major}.{self.minor}.{self.patch}"
        if self.prerelease is not None:
            text = f"{text}-{self.prerelease}"
        if self.metadata:
            text = f"{text}+{self.metadata}"
        return text

    def __str__(self) -> str:
        return self._semver()

    def _key(self) -> tuple[int, int, int, int]:
        return (self.major, self.minor, self.patch, 1 if self.prerelease is None else 0)

    def compare(self, other: Version) -> int:
        """Compare two versions, ignoring prerelease counters and metadata.

        Returns:
            -1, 0 or 1 when this version is lower, equal or higher
        """
        return _cmp(self._key(), other._key())

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Version):
            return NotImplemented
        return self._identity() == other._identity()

    def __hash__(self) -> int:
        return hash(self._identity())

    def _identity(self) -> tuple[int, int, int, PreRelease | None]:
        return (self.major, self.minor, self.patch, self.prerelease)

    def __lt__(self, other: Version) -> bool:
        if not isinstance(other, Version):
            return NotImplemented
        return self.compare(other) < 0

    def __le__(self, other: Version) -> bool:
        if not isinstance(other, Version):
            return NotImplemented
        return self.compare(other) <= 0

    def __gt__(self, other: Version) -> bool:
        if not isinstance(other, Version):
            return NotImplemented
        return self.compare(other) > 0

    def __ge__(self, other: Version) -> bool:
        if not isinstance(other, Version):
            return NotImplemented
        return self.compare(other) >= 0

    def diff(self, other: Version) -> VersionChange:
        """Return the coarsest component that differs between two versions.

        Prerelease and metadata are not considered.
        """
        if self.major != other.major:
            return VersionChange(BumpType.MAJOR)
        if self.minor != other.minor:
            return VersionChange(BumpType.MINOR)
        if self.patch != other.patch:
            return VersionChange(BumpType.PATCH)
        return VersionChange(BumpType.NONE)

    def release(self) -> Version:
        """Return this version with prerelease and metadata stripped."""
        return Version(self.major, self.minor, self.patch)

    def bump(self, change: VersionChange) -> Version:
        """Return a new version bumped by ``change``.

        Metadata is always cleared. A prerelease bump keeps the version
        numbers and either increments the counter (same token) or starts
        a new counter at 1 (different or missing token).

        Args:
            change: Requested change

        Returns:
            Bumped Version

        Raises:
            InvalidVersionError: If a prerelease bump has an empty token
        """
        if change.bump is BumpType.NONE:
            return self
        if change.bump is BumpType.MAJOR:
            return Version(self.major + 1, 0, 0)
        if change.bump is BumpType.MINOR:
            return Version(self.major, self.minor + 1, 0)
        if change.bump is BumpType.PATCH:
            return Version(self.major, self.minor, self.patch + 1)
        if not change.prerelease_token:
            raise InvalidVersionError(f"Empty prerelease token for {self}")

        if self.prerelease is not None and self.prerelease.token == change.prerelease_token:
            prerelease = PreRelease(self.prerelease.token, self.prerelease.count + 1)
        else:
            prerelease = PreRelease(change.prerelease_token, 1)
        return Version(self.major, self.minor, self.patch, prerelease=prerelease)

    def with_metadata(self, metadata: str) -> Version:
        """Return a copy of this version carrying ``metadata``."""
        return Version(self.major, self.minor, self.patch, self.prerelease, metadata)


def parse_version(text: str) -> Version:
    """Parse a version string.

    Convenience wrapper around :meth:`Version.parse`.
    """
    return Version.parse(text)


def _cmp(left: object, right: object) -> int:
    return (left > right) - (left < right)  # type: ignore[operator]
