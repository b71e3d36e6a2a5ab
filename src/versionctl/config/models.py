"""Configuration models for versionctl.

Configuration can live in a standalone JSON or TOML file, or in the
``[tool.versionctl]`` table of ``pyproject.toml``. Keys may be written
in snake_case or camelCase::

    [tool.versionctl]
    breaking_change_tags = ["BREAKING CHANGE:"]

    [tool.versionctl.tags]
    "feat:" = "minor"
    "fix:" = "patch"

    [[tool.versionctl.rules]]
    branch = "^main$"

    [[tool.versionctl.rules]]
    branch = "^dev$"
    prerelease_token = "rc"
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from versionctl.core.commits import DEFAULT_PARSER, PARSERS
from versionctl.core.rules import compile_pattern
from versionctl.core.version import BumpType
from versionctl.exceptions import InvalidPatternError

#: Bump types a commit header tag may map to.
HEADER_BUMP_TYPES = frozenset({BumpType.PATCH, BumpType.MINOR, BumpType.MAJOR})


class _Model(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="forbid",
        frozen=True,
    )


class Rule(_Model):
    """Maps branches to prerelease and build metadata policy.

    A rule with an empty ``prerelease_token`` produces releases.
    Templates may reference the branch pattern's named groups as
    ``{name}``.
    """

    branch: str
    prerelease_token: str = ""
    metadata: str = ""

    @field_validator("branch")
    @classmethod
    def _branch_is_regex(cls, value: str) -> str:
        try:
            compile_pattern(value)
        except InvalidPatternError as e:
            raise ValueError(str(e)) from e
        return value


def _default_tags() -> dict[str, BumpType]:
    tags: dict[str, BumpType] = {}
    for commit_type, bump in (
        ("feat", BumpType.MINOR),
        ("fix", BumpType.PATCH),
        ("perf", BumpType.PATCH),
    ):
        tags[f"{commit_type}:"] = bump
        tags[f"{commit_type}("] = bump
        tags[f"{commit_type}!:"] = BumpType.MAJOR
    return tags


def _default_rules() -> list[Rule]:
    return [
        Rule(branch="^main$"),
        Rule(branch="^dev$", prerelease_token="rc"),
        Rule(branch="(?P<branch>.*)", prerelease_token="{branch}"),
    ]


class VersionctlConfig(_Model):
    """Root configuration for versionctl.

    Attributes:
        breaking_change_tags: Body line prefixes that force a major bump
        parser: Name of the commit parser to use
        rules: Branch rules, tried in order
        tags: Commit header prefix to bump type mapping
        tag_prefix: Prefix identifying release tags, e.g. ``v`` in ``v1.2.3``
    """

    breaking_change_tags: list[str] = Field(
        default_factory=lambda: ["BREAKING CHANGE:", "BREAKING-CHANGE:"]
    )
    parser: str = DEFAULT_PARSER
    rules: list[Rule] = Field(default_factory=_default_rules)
    tags: dict[str, BumpType] = Field(default_factory=_default_tags)
    tag_prefix: str = "v"

    @field_validator("parser")
    @classmethod
    def _parser_is_known(cls, value: str) -> str:
        if value not in PARSERS:
            known = ", ".join(sorted(PARSERS))
            raise ValueError(f"unknown commit parser {value!r} (known: {known})")
        return value

    @field_validator("tags")
    @classmethod
    def _tags_map_to_bumps(cls, value: dict[str, BumpType]) -> dict[str, BumpType]:
        for prefix, bump in value.items():
            if bump not in HEADER_BUMP_TYPES:
                raise ValueError(f"tag {prefix!r} must map to patch, minor or major, not {bump}")
        return value
