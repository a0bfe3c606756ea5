"""Version compute engine.

Combines the collaborators (latest tag, commit range, manifest version)
with the pure classification and arithmetic to decide whether a release
is warranted and what its version is.

The engine performs no I/O of its own. Collaborators report absence
(no tag, no commits) as ``None`` or an empty sequence, never as an error.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Literal, Protocol

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from nextver.core.commits import Commit, classify, decode_commits
from nextver.core.version import BumpType, Version, resolve_bump

if TYPE_CHECKING:
    from collections.abc import Callable, Sequence
    from pathlib import Path

    from nextver.config.models import NextverConfig

NoReleaseReason = Literal["no-commits", "no-bump-detected"]


class HistorySource(Protocol):
    """Read access to the tag and commit history of one repository."""

    def get_last_tag(self) -> str | None: ...

    def get_commits(self, rev_range: str) -> list[str]: ...


class _ResultModel(BaseModel):
    model_config = ConfigDict(
        frozen=True,
        alias_generator=to_camel,
        populate_by_name=True,
    )

    def to_dict(self) -> dict[str, object]:
        """Serialize with the camelCase keys of the JSON contract."""
        return self.model_dump(mode="json", by_alias=True)


class ReleaseResult(_ResultModel):
    """A release is warranted."""

    has_release: Literal[True] = True
    base_version: str
    next_version: str
    bump: Literal["major", "minor", "patch"]
    commits_analyzed: int


class NoReleaseResult(_ResultModel):
    """No release is warranted, with the reason why."""

    has_release: Literal[False] = False
    reason: NoReleaseReason
    base_version: str
    commits_analyzed: int


ComputeResult = ReleaseResult | NoReleaseResult


def strip_tag_prefix(tag: str) -> str:
    """Turn a tag name such as ``v1.2.3`` into a version string."""
    return tag[1:] if tag.startswith("v") else tag


def compute_from_commits(
    base_version: str,
    commits: Sequence[Commit],
) -> ComputeResult:
    """Decide the release for an already-materialized commit range.

    Args:
        base_version: Current version string
        commits: Every commit in the range, in any order

    Returns:
        ReleaseResult when some commit bumps, otherwise NoReleaseResult
    """
    if not commits:
        return NoReleaseResult(
            reason="no-commits",
            base_version=base_version,
            commits_analyzed=0,
        )

    bump = resolve_bump(classify(commit) for commit in commits)

    if bump == BumpType.NONE:
        return NoReleaseResult(
            reason="no-bump-detected",
            base_version=base_version,
            commits_analyzed=len(commits),
        )

    return ReleaseResult(
        base_version=base_version,
        next_version=str(Version.parse(base_version).bump(bump)),
        bump=bump.value,
        commits_analyzed=len(commits),
    )


def compute_version(
    history: HistorySource,
    read_manifest_version: Callable[[], str],
) -> ComputeResult:
    """Compute the next version from the repository history.

    The base version is the latest reachable tag (leading ``v`` removed).
    Without a tag, the manifest version is used and the whole history up
    to ``HEAD`` is analyzed.

    Args:
        history: Tag and commit source for the repository
        read_manifest_version: Returns the manifest version, ``"0.0.0"``
            when unavailable

    Returns:
        The compute result
    """
    last_tag = history.get_last_tag()

    if last_tag:
        base_version = strip_tag_prefix(last_tag)
        rev_range = f"{last_tag}..HEAD"
    else:
        base_version = read_manifest_version()
        rev_range = "HEAD"

    commits = decode_commits(history.get_commits(rev_range))
    return compute_from_commits(base_version, commits)


def compute_version_for_path(
    path: Path,
    config: NextverConfig,
) -> ComputeResult:
    """Compute the next version for the git repository at ``path``."""
    from nextver.project.manifest import read_manifest_version
    from nextver.vcs.git import GitRepository

    repo = GitRepository(path)
    return compute_version(
        repo,
        lambda: read_manifest_version(path, default=config.version.fallback_version),
    )
