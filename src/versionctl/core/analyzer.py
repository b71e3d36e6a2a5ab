"""Current and next version decisions.

The analyzer combines two views of the repository:

- the *repo version*: the highest version found among all tags, and
- the *ancestor state*: walking back from HEAD to the nearest commit
  carrying a release tag, the version of that release (*ancestor
  version*) and the largest change called for by the commits in
  between (*ancestor change*).

The difference between the ancestor version and the repo version tells
how much of the ancestor change has already been absorbed by a newer
tag elsewhere in the repository (e.g. a prerelease cut from another
branch). The matched branch rule then decides whether the result is a
release or a prerelease and which metadata it carries.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

from versionctl.core.commits import create_parser
from versionctl.core.rules import RuleMatch, match_rule
from versionctl.core.version import BumpType, Version, VersionChange
from versionctl.exceptions import InvalidVersionError, NoVersionChangeError
from versionctl.logging import get_logger
from versionctl.vcs.base import InMemoryRepository
from versionctl.vcs.git import GitRepository

if TYPE_CHECKING:
    from collections.abc import Iterable, Sequence
    from pathlib import Path

    from versionctl.config.models import Rule, VersionctlConfig
    from versionctl.core.commits import CommitParser
    from versionctl.vcs.base import Commit, RepositoryReader


@dataclass(frozen=True)
class AncestorState:
    """What the commit ancestry of HEAD says about the next version.

    Attributes:
        version: Highest release tagged on the nearest released ancestor,
            ``0.0.0`` if no ancestor was ever released
        change: Largest change among the commits after that release
        commits: Number of unreleased commits inspected
    """

    version: Version = field(default_factory=Version)
    change: VersionChange = field(default_factory=VersionChange)
    commits: int = 0


def versions_from_tags(tags: Iterable[str], tag_prefix: str = "v", logger: Any = None) -> list[Version]:
    """Parse release-prefixed tags into versions, highest first.

    Tags without ``tag_prefix`` and tags that do not parse are skipped.

    Args:
        tags: Tag names
        tag_prefix: Prefix marking version tags, e.g. ``v``
        logger: Optional logger for skipped tags

    Returns:
        Versions sorted from highest to lowest
    """
    versions: list[Version] = []
    for tag in tags:
        if not tag.startswith(tag_prefix):
            continue
        try:
            versions.append(Version.parse(tag[len(tag_prefix) :]))
        except InvalidVersionError:
            if logger is not None:
                logger.debug("skipping tag", tag=tag)
    return sorted(versions, key=_precedence, reverse=True)


def _precedence(version: Version) -> tuple[int, int, int, bool, int]:
    # Among prereleases of the same numbers the higher counter wins.
    count = version.prerelease.count if version.prerelease else 0
    return (version.major, version.minor, version.patch, version.is_release, count)


def get_repo_version(tags: Iterable[str], tag_prefix: str = "v", logger: Any = None) -> Version:
    """Return the highest version among ``tags``, or ``0.0.0``."""
    versions = versions_from_tags(tags, tag_prefix, logger)
    return versions[0] if versions else Version()


def get_ancestor_state(
    commits: Iterable[Commit],
    parser: CommitParser,
    tag_prefix: str = "v",
    logger: Any = None,
) -> AncestorState:
    """Walk commits newest first up to the nearest release.

    Iteration stops at the first commit carrying a release tag, so only
    the unreleased part of the history is consumed.

    Args:
        commits: Ancestry of HEAD, newest first
        parser: Commit message classifier
        tag_prefix: Prefix marking version tags
        logger: Optional logger

    Returns:
        The ancestor version and the largest unreleased change
    """
    change = VersionChange(BumpType.NONE)
    count = 0
    for commit in commits:
        releases = [v for v in versions_from_tags(commit.tags, tag_prefix) if v.is_release]
        if releases:
            if logger is not None:
                logger.debug("release commit", commit=commit.sha, release=str(releases[0]))
            return AncestorState(version=releases[0], change=change, commits=count)

        count += 1
        commit_change = parser.parse(commit.message)
        if logger is not None:
            logger.debug("commit", commit=commit.sha, change=str(commit_change))
        if commit_change > change:
            change = commit_change

    return AncestorState(change=change, commits=count)


def decide_next_version(rule_match: RuleMatch, repo_version: Version, ancestor: AncestorState) -> Version:
    """Compute the next version from already gathered repository state.

    Args:
        rule_match: Rule matched by the current branch
        repo_version: Highest version among all tags
        ancestor: State of HEAD's unreleased ancestry

    Returns:
        The next version

    Raises:
        NoVersionChangeError: If no commit since the last release calls
            for a change
        InvalidVersionError: If a prerelease rule renders an empty token
    """
    if ancestor.change.bump is BumpType.NONE:
        raise NoVersionChangeError(
            f"Version unchanged: no releasable commits since {ancestor.version}"
        )

    diff = ancestor.version.diff(repo_version)

    if rule_match.is_prerelease:
        version = repo_version.bump(ancestor.change) if diff < ancestor.change else repo_version
        token = rule_match.prerelease_token()
        if not token:
            raise InvalidVersionError(
                f"Rule {rule_match.rule.branch!r} rendered an empty prerelease token"
            )
        version = version.bump(VersionChange(BumpType.PRERELEASE, token))
    elif repo_version.is_release or diff < ancestor.change:
        version = repo_version.bump(ancestor.change)
    else:
        version = repo_version.release()

    if rule_match.rule.metadata:
        version = version.with_metadata(rule_match.metadata())
    return version


class Analyzer:
    """Decides the current and next version of a repository.

    Args:
        reader: Source of branch, tag and commit data
        parser: Commit message classifier
        rules: Branch rules, tried in order
        tag_prefix: Prefix marking version tags
        logger: structlog logger; a ``versionctl.analyzer`` logger by default
    """

    def __init__(
        self,
        reader: RepositoryReader,
        parser: CommitParser,
        rules: Sequence[Rule],
        *,
        tag_prefix: str = "v",
        logger: Any = None,
    ) -> None:
        self.reader = reader
        self.parser = parser
        self.rules = list(rules)
        self.tag_prefix = tag_prefix
        self.log = logger if logger is not None else get_logger("versionctl.analyzer")

    def get_repo_version(self) -> Version:
        """Return the highest tagged version in the repository."""
        return get_repo_version(self.reader.list_tags(), self.tag_prefix, self.log)

    def get_ancestor_state(self) -> AncestorState:
        """Inspect HEAD's ancestry back to the nearest release."""
        return get_ancestor_state(
            self.reader.walk_ancestry("HEAD"),
            self.parser,
            self.tag_prefix,
            self.log,
        )

    def get_current_version(self) -> Version:
        """Return the current version of the repository."""
        return self.get_repo_version()

    def get_next_version(self) -> Version:
        """Return the version the next release of HEAD should carry.

        Raises:
            NoRuleMatchedError: If the current branch matches no rule
            InvalidPatternError: If a rule pattern is not a valid regex
            NoVersionChangeError: If there is nothing to release
        """
        branch = self.reader.current_branch()
        self.log.info("branch", branch=branch)
        rule_match = match_rule(branch, self.rules)
        self.log.info("rule", pattern=rule_match.rule.branch, groups=rule_match.groups)

        repo_version = self.get_repo_version()
        self.log.info("repo version", version=str(repo_version))

        ancestor = self.get_ancestor_state()
        self.log.info(
            "ancestor state",
            version=str(ancestor.version),
            change=str(ancestor.change),
            commits=ancestor.commits,
        )
        self.log.info("repo + ancestor version diff", diff=str(ancestor.version.diff(repo_version)))

        version = decide_next_version(rule_match, repo_version, ancestor)
        self.log.info("next version", version=str(version))
        return version


def create_analyzer(config: VersionctlConfig, path: Path | None = None, logger: Any = None) -> Analyzer:
    """Build an analyzer for the git working copy at ``path``.

    Args:
        config: Loaded configuration
        path: Directory inside the working copy (defaults to cwd)
        logger: Optional structlog logger

    Raises:
        GitError: If ``path`` is not a git working copy
        ConfigValidationError: If the configured parser is unknown
    """
    parser = create_parser(config.parser, config.tags, config.breaking_change_tags)
    return Analyzer(
        GitRepository(path),
        parser,
        config.rules,
        tag_prefix=config.tag_prefix,
        logger=logger,
    )


def compute_current_version(tags: Iterable[str], tag_prefix: str = "v") -> Version:
    """Return the current version implied by a list of tags."""
    return get_repo_version(tags, tag_prefix)


def compute_next_version(
    branch: str,
    tags: Iterable[str],
    ancestry: Iterable[Commit],
    config: VersionctlConfig,
    logger: Any = None,
) -> Version:
    """Return the next version from pre-fetched repository data.

    Args:
        branch: Current branch name
        tags: All tag names in the repository
        ancestry: Commits reachable from HEAD, newest first
        config: Loaded configuration
        logger: Optional structlog logger

    Raises:
        NoRuleMatchedError: If the branch matches no rule
        InvalidPatternError: If a rule pattern is not a valid regex
        NoVersionChangeError: If there is nothing to release
    """
    parser = create_parser(config.parser, config.tags, config.breaking_change_tags)
    reader = InMemoryRepository(branch, tags, ancestry)
    analyzer = Analyzer(reader, parser, config.rules, tag_prefix=config.tag_prefix, logger=logger)
    return analyzer.get_next_version()
