"""Commit message classification.

A commit message is split into a header (its first line) and a body
(every following line). The header decides the bump: it must start
with one of the configured header tags, e.g. ``feat:``. Any body line
starting with a breaking change tag, e.g. ``BREAKING CHANGE:``, raises
the bump to major.

Messages whose header carries no known tag do not contribute to the
next version.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from versionctl.core.version import BumpType, VersionChange
from versionctl.exceptions import ConfigValidationError

if TYPE_CHECKING:
    from collections.abc import Iterable, Mapping

DEFAULT_PARSER = "default"


class CommitParser:
    """Classifies commit messages into version changes.

    When several header tags prefix the same header, the longest tag
    wins; tags of equal length keep their declaration order.
    """

    name = DEFAULT_PARSER

    def __init__(
        self,
        tags: Mapping[str, BumpType | str],
        breaking_change_tags: Iterable[str] = (),
    ) -> None:
        ordered = sorted(enumerate(tags.items()), key=lambda item: (-len(item[1][0]), item[0]))
        self.tags: list[tuple[str, BumpType]] = [
            (prefix, BumpType(bump)) for _, (prefix, bump) in ordered
        ]
        for prefix, bump in self.tags:
            if bump is BumpType.PRERELEASE:
                raise ConfigValidationError(
                    f"Header tag {prefix!r} cannot map to a prerelease bump"
                )
        self.breaking_change_tags: list[str] = list(breaking_change_tags)

    def match_header(self, header: str) -> BumpType:
        """Return the bump type implied by a commit header."""
        for prefix, bump in self.tags:
            if header.startswith(prefix):
                return bump
        return BumpType.NONE

    def parse(self, message: str) -> VersionChange:
        """Classify a commit message.

        Args:
            message: Full commit message

        Returns:
            The version change the commit calls for; ``BumpType.NONE``
            when the header carries no known tag
        """
        header, *body = message.split("\n")
        bump = self.match_header(header)
        if bump is BumpType.NONE:
            return VersionChange(BumpType.NONE)

        for line in body:
            if bump is BumpType.MAJOR:
                break
            if any(line.startswith(tag) for tag in self.breaking_change_tags):
                bump = BumpType.MAJOR

        return VersionChange(bump)


PARSERS: dict[str, type[CommitParser]] = {
    DEFAULT_PARSER: CommitParser,
}


def create_parser(
    name: str,
    tags: Mapping[str, BumpType | str],
    breaking_change_tags: Iterable[str] = (),
) -> CommitParser:
    """Create a commit parser by name.

    Args:
        name: Registered parser name
        tags: Header tag to bump type mapping
        breaking_change_tags: Body prefixes that force a major bump

    Returns:
        Configured parser

    Raises:
        ConfigValidationError: If no parser is registered under ``name``
    """
    try:
        parser_class = PARSERS[name]
    except KeyError:
        known = ", ".join(sorted(PARSERS))
        raise ConfigValidationError(f"Unknown commit parser {name!r} (known: {known})") from None
    return parser_class(tags, breaking_change_tags)
