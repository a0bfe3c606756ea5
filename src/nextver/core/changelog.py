"""Changelog rendering and generation.

Commits are grouped by category into one ``## <version>`` section per
release. The upcoming release is headed with the version computed by the
engine (or ``Unreleased``); every historical tag not yet present in the
changelog gets its own section.
"""

from __future__ import annotations

import logging
import re
from typing import TYPE_CHECKING

from nextver.core.commits import CATEGORY_ORDER, analyze_commits, decode_commits
from nextver.exceptions import ChangelogError

if TYPE_CHECKING:
    from collections.abc import Iterable
    from pathlib import Path

    from nextver.config.models import NextverConfig
    from nextver.core.commits import ClassifiedCommit
    from nextver.vcs.git import GitRepository

logger = logging.getLogger(__name__)

UNRELEASED = "Unreleased"

CATEGORY_TITLES: dict[str, str] = {
    "breaking": "### 💥 Breaking Changes",
    "feat": "### ✨ Features",
    "fix": "### 🐛 Fixes",
    "refactor": "### ⚙️ Refactor",
    "chore": "### 🔧 Chore",
    "docs": "### 📚 Docs",
    "style": "### 🎨 Style",
    "test": "### 🧪 Tests",
    "build": "### 🛠 Build",
    "perf": "### ⚡ Performance",
    "ci": "### 🔁 CI",
    "raw": "### 🗃 Raw",
    "cleanup": "### 🧹 Cleanup",
    "remove": "### 🗑 Remove",
}


def group_commits_by_category(
    classified: Iterable[ClassifiedCommit],
) -> dict[str, list[ClassifiedCommit]]:
    """Group commits into every category, in display order.

    Categories without commits are present with an empty list.
    """
    grouped: dict[str, list[ClassifiedCommit]] = {category: [] for category in CATEGORY_ORDER}
    for commit in classified:
        grouped.get(commit.category, grouped["chore"]).append(commit)
    return grouped


def render_section(version: str, classified: Iterable[ClassifiedCommit]) -> str:
    """Render one changelog section.

    Args:
        version: Section heading, a version or ``Unreleased``
        classified: Commits belonging to this release

    Returns:
        Markdown for the section
    """
    lines = [f"## {version}\n"]
    has_content = False

    for category, commits in group_commits_by_category(classified).items():
        if not commits:
            continue
        has_content = True
        lines.append(f"{CATEGORY_TITLES[category]}\n")
        lines.extend(f"- {commit.description}" for commit in commits)
        lines.append("")

    if not has_content:
        lines.append("_No changes._\n")

    return "\n".join(lines)


def changelog_has_version(content: str, version: str) -> bool:
    """Check whether the changelog already has a section for ``version``."""
    return re.search(rf"^##\s+{re.escape(version)}(?![\w.])", content, re.MULTILINE) is not None


def build_sections(
    repo: GitRepository,
    existing: str,
    next_version: str | None,
) -> list[str]:
    """Render every section that ``existing`` does not contain yet.

    Args:
        repo: Repository to read tags and commits from
        existing: Current changelog content
        next_version: Upcoming version, ``None`` when no release is due

    Returns:
        Rendered sections, newest first
    """
    tags = repo.get_all_tags()
    sections: list[str] = []

    heading = next_version or UNRELEASED
    if not changelog_has_version(existing, heading):
        commits = decode_commits(repo.get_commits_between(tags[0] if tags else None, "HEAD"))
        if commits:
            sections.append(render_section(heading, analyze_commits(commits)))

    for index, tag in enumerate(tags):
        if changelog_has_version(existing, tag):
            continue
        previous = tags[index + 1] if index + 1 < len(tags) else None
        commits = decode_commits(repo.get_commits_between(previous, tag))
        if commits:
            sections.append(render_section(tag, analyze_commits(commits)))

    return sections


def generate_changelog(
    repo: GitRepository,
    config: NextverConfig,
    *,
    preview: bool,
    next_version: str | None,
) -> Path | None:
    """Write new changelog sections to disk.

    In preview mode the preview file is replaced with the new sections.
    Otherwise they are prepended to the existing changelog.

    Args:
        repo: Repository to generate the changelog for
        config: Configuration
        preview: Write the preview changelog instead of the real one
        next_version: Upcoming version computed by the engine, if any

    Returns:
        Path of the written file, or ``None`` when there was nothing new

    Raises:
        ChangelogError: If the changelog cannot be read or written
    """
    target = repo.path / config.changelog_path(preview=preview)

    try:
        existing = target.read_text(encoding="utf-8") if target.exists() else ""
    except OSError as e:
        raise ChangelogError(f"Cannot read {target}: {e}") from e

    sections = build_sections(repo, existing, next_version)
    if not sections:
        logger.info("No new versions to add to %s", target.name)
        return None

    content = "\n".join(sections)
    if not preview and existing:
        content = f"{content}\n{existing}"

    try:
        target.write_text(content, encoding="utf-8")
    except OSError as e:
        raise ChangelogError(f"Cannot write {target}: {e}") from e

    return target
