"""Branch rule matching and template rendering.

Rules are tried in declaration order and the first rule whose branch
pattern matches anywhere in the branch name wins. Named capture groups
of the pattern become template variables for the rule's prerelease
token and metadata templates::

    Rule(branch=r"feature/(?P<name>.+)", prerelease_token="{name}")

turns branch ``feature/login-page`` into the prerelease token
``login-page``.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from versionctl.exceptions import InvalidPatternError, NoRuleMatchedError

if TYPE_CHECKING:
    from collections.abc import Iterable, Mapping

    from versionctl.config.models import Rule

_PLACEHOLDER = re.compile(r"\{(\w+)\}")
_INVALID_IDENTIFIER_CHAR = re.compile(r"[^A-Za-z0-9]")


@dataclass(frozen=True)
class RuleMatch:
    """A rule that matched a branch, with its captured groups."""

    rule: Rule
    groups: dict[str, str] = field(default_factory=dict)

    @property
    def is_prerelease(self) -> bool:
        """Whether the matched rule designates a prerelease channel."""
        return bool(self.rule.prerelease_token)

    def prerelease_token(self) -> str:
        """Render the rule's prerelease token for this match."""
        return render(self.rule.prerelease_token, self.groups)

    def metadata(self) -> str:
        """Render the rule's metadata for this match."""
        return render(self.rule.metadata, self.groups)


def compile_pattern(pattern: str) -> re.Pattern[str]:
    """Compile a branch pattern.

    Raises:
        InvalidPatternError: If the pattern is not a valid regex
    """
    try:
        return re.compile(pattern)
    except re.error as e:
        raise InvalidPatternError(f"Invalid branch pattern {pattern!r}: {e}") from e


def match_rule(branch: str, rules: Iterable[Rule]) -> RuleMatch:
    """Find the first rule matching a branch name.

    Args:
        branch: Branch name, e.g. ``main`` or ``feature/login``
        rules: Rules in priority order

    Returns:
        The first match

    Raises:
        InvalidPatternError: If a rule's pattern does not compile
        NoRuleMatchedError: If no rule matches the branch
    """
    for rule in rules:
        match = compile_pattern(rule.branch).search(branch)
        if match is None:
            continue
        groups = {name: value or "" for name, value in match.groupdict().items()}
        return RuleMatch(rule=rule, groups=groups)

    raise NoRuleMatchedError(f"No rule found for branch {branch!r}")


def inject(template: str, groups: Mapping[str, str]) -> str:
    """Replace ``{name}`` placeholders with captured group values.

    Substitution is a single pass: placeholders appearing inside
    substituted values are not expanded. Unknown names are left as is.
    """

    def replace(match: re.Match[str]) -> str:
        return groups.get(match.group(1), match.group(0))

    return _PLACEHOLDER.sub(replace, template)


def sanitize(value: str) -> str:
    """Replace every character outside ``[A-Za-z0-9]`` with ``-``.

    Characters are replaced one for one; runs are not collapsed, so
    ``a//b`` becomes ``a--b`` rather than ``a-b``.
    """
    return _INVALID_IDENTIFIER_CHAR.sub("-", value)


def render(template: str, groups: Mapping[str, str]) -> str:
    """Inject captured groups into a template and sanitize the result."""
    return sanitize(inject(template, groups))
