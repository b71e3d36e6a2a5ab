"""Exception hierarchy for versionctl.

All errors raised by versionctl derive from :class:`VersionctlError`, so
callers can catch a single type while still being able to tell the
individual failure modes apart.
"""

from __future__ import annotations


class VersionctlError(Exception):
    """Base class for all versionctl errors."""


# =============================================================================
# Version decisions
# =============================================================================


class InvalidVersionError(VersionctlError):
    """A string could not be parsed as a version, or a version part is invalid."""


class InvalidPatternError(VersionctlError):
    """A rule's branch pattern is not a valid regular expression."""


class NoRuleMatchedError(VersionctlError):
    """The current branch matches none of the configured rules."""


class NoVersionChangeError(VersionctlError):
    """No releasable change was found since the last release."""


# =============================================================================
# Repository access
# =============================================================================


class GitError(VersionctlError):
    """A git command failed or the repository is in an unusable state."""

    def __init__(self, message: str, stderr: str | None = None) -> None:
        super().__init__(message)
        self.stderr = stderr

    def __str__(self) -> str:
        message = super().__str__()
        if self.stderr:
            return f"{message}: {self.stderr.strip()}"
        return message


# =============================================================================
# Configuration
# =============================================================================


class ConfigError(VersionctlError):
    """Base class for configuration errors."""


class ConfigNotFoundError(ConfigError):
    """A configuration file could not be found."""


class ConfigValidationError(ConfigError):
    """A configuration file could not be parsed or failed validation."""


# =============================================================================
# Project manifests
# =============================================================================


class ProjectError(VersionctlError):
    """A project manifest could not be read or updated."""


class VersionNotFoundError(ProjectError):
    """A project manifest does not declare a version."""
