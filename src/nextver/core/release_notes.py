"""Release notes from merged pull requests.

Lists the pull requests merged since the last tag with their authors and
commit headlines, followed by a compare link. Preview mode never calls the
GitHub CLI and renders an empty list.
"""

from __future__ import annotations

import logging
import re
from typing import TYPE_CHECKING

from nextver.exceptions import ProjectError

if TYPE_CHECKING:
    from collections.abc import Sequence
    from pathlib import Path

    from nextver.config.models import NextverConfig
    from nextver.forge.github import GitHubCLI, PullRequest
    from nextver.vcs.git import GitRepository

logger = logging.getLogger(__name__)

NO_CHANGES = "_No changes since last release._"


def normalize_repo_url(url: str | None) -> str | None:
    """Turn a git remote URL into a browsable https URL.

    >>> normalize_repo_url("git@github.com:owner/repo.git")
    'https://github.com/owner/repo'
    """
    if not url:
        return None

    url = url.strip().removesuffix(".git")
    ssh = re.match(r"^git@(.*?):(.*)$", url)
    if ssh:
        return f"https://{ssh.group(1)}/{ssh.group(2)}"
    return url


def compare_link(repo_url: str | None, last_tag: str | None, version: str) -> str | None:
    if not repo_url:
        return None
    if not last_tag:
        return repo_url
    return f"{repo_url}/compare/{last_tag}...{version}"


def render_release_notes(
    prs: Sequence[PullRequest],
    *,
    repo_url: str | None,
    last_tag: str | None,
    version: str,
) -> str:
    """Render release notes as markdown.

    Args:
        prs: Merged pull requests, with commit headlines filled in
        repo_url: Browsable repository URL, if known
        last_tag: Previous release tag, ``None`` for a first release
        version: Version being released

    Returns:
        Markdown document
    """
    notes = "# What's Changed\n\n"

    if not prs:
        notes += f"{NO_CHANGES}\n\n"

    for pr in prs:
        notes += f"- {pr.title} by @{pr.author.login} in {pr.url}\n"
        for headline in pr.commit_headlines:
            notes += f"  - {headline}\n"
        notes += "\n"

    link = compare_link(repo_url, last_tag, version)
    if link:
        notes += f"**Full Changelog**: {link}\n"

    return notes


def collect_pull_requests(
    repo: GitRepository,
    github: GitHubCLI,
    *,
    base_branch: str,
    last_tag: str | None,
) -> list[PullRequest]:
    """Fetch pull requests merged since ``last_tag`` with their commit headlines."""
    merged_after = repo.get_tag_date(last_tag) if last_tag else None
    prs = github.list_merged_prs(base_branch, merged_after)
    return [
        pr.model_copy(update={"commit_headlines": github.get_pr_commit_headlines(pr.number)})
        for pr in prs
    ]


def generate_release_notes(
    repo: GitRepository,
    config: NextverConfig,
    *,
    preview: bool,
    github: GitHubCLI,
    version: str,
) -> Path:
    """Write release notes for ``version`` to disk.

    Args:
        repo: Repository being released
        config: Configuration
        preview: Write the preview file and skip all GitHub calls
        github: GitHub CLI wrapper
        version: Version being released

    Returns:
        Path of the written file

    Raises:
        GitHubCLIError: If not in preview mode and ``gh`` is unavailable
        ProjectError: If the notes cannot be written
    """
    if not preview:
        github.ensure_available()

    last_tag = repo.get_last_tag()
    if last_tag is None:
        logger.warning("No previous tags found, treating this as the first release")

    repo_url = normalize_repo_url(config.release_notes.repository_url or repo.get_remote_url())

    prs: list[PullRequest] = []
    if not preview:
        base_branch = config.release_notes.base_branch or repo.get_default_branch()
        prs = collect_pull_requests(repo, github, base_branch=base_branch, last_tag=last_tag)

    notes = render_release_notes(prs, repo_url=repo_url, last_tag=last_tag, version=version)

    target = repo.path / config.release_notes_path(preview=preview)
    try:
        target.write_text(notes, encoding="utf-8")
    except OSError as e:
        raise ProjectError(f"Cannot write {target}: {e}") from e

    return target
