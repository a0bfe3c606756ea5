"""Unit tests for release notes rendering and generation."""

from __future__ import annotations

from typing import TYPE_CHECKING
from unittest.mock import MagicMock

import pytest

from nextver.config.models import NextverConfig, ReleaseNotesConfig
from nextver.core.release_notes import (
    NO_CHANGES,
    compare_link,
    generate_release_notes,
    normalize_repo_url,
    render_release_notes,
)
from nextver.exceptions import GitHubCLIError
from nextver.forge.github import GitHubCLI, PullRequest
from nextver.vcs.git import GitRepository

if TYPE_CHECKING:
    from pathlib import Path


def _pr(number: int, title: str, login: str = "octocat", headlines=()) -> PullRequest:
    return PullRequest(
        number=number,
        title=title,
        url=f"https://github.com/acme/widget/pull/{number}",
        author={"login": login},
        commit_headlines=list(headlines),
    )


@pytest.fixture
def mock_repo(tmp_path: Path) -> MagicMock:
    repo = MagicMock(spec=GitRepository)
    repo.path = tmp_path
    repo.get_last_tag.return_value = "v1.0.0"
    repo.get_remote_url.return_value = "git@github.com:acme/widget.git"
    repo.get_default_branch.return_value = "main"
    repo.get_tag_date.return_value = "2026-01-02T03:04:05+00:00"
    return repo


@pytest.fixture
def mock_github() -> MagicMock:
    github = MagicMock(spec=GitHubCLI)
    github.list_merged_prs.return_value = [_pr(7, "feat: add widgets", "alice")]
    github.get_pr_commit_headlines.return_value = ["feat: widget model", "test: widget tests"]
    return github


class TestNormalizeRepoUrl:
    """Tests for normalize_repo_url()."""

    @pytest.mark.parametrize(
        ("url", "expected"),
        [
            ("git@github.com:acme/widget.git", "https://github.com/acme/widget"),
            ("https://github.com/acme/widget.git", "https://github.com/acme/widget"),
            ("https://github.com/acme/widget", "https://github.com/acme/widget"),
            ("", None),
            (None, None),
        ],
    )
    def test_normalize(self, url, expected):
        assert normalize_repo_url(url) == expected


class TestCompareLink:
    """Tests for compare_link()."""

    def test_with_tag(self):
        link = compare_link("https://github.com/acme/widget", "v1.0.0", "1.1.0")

        assert link == "https://github.com/acme/widget/compare/v1.0.0...1.1.0"

    def test_without_tag(self):
        assert compare_link("https://github.com/acme/widget", None, "1.1.0") == (
            "https://github.com/acme/widget"
        )

    def test_without_repo(self):
        assert compare_link(None, "v1.0.0", "1.1.0") is None


class TestRenderReleaseNotes:
    """Tests for render_release_notes()."""

    def test_render_prs(self):
        prs = [_pr(1, "feat: add widgets", "alice", ["feat: widget model"]), _pr(2, "fix: typo")]

        notes = render_release_notes(
            prs,
            repo_url="https://github.com/acme/widget",
            last_tag="v1.0.0",
            version="1.1.0",
        )

        assert notes == (
            "# What's Changed\n"
            "\n"
            "- feat: add widgets by @alice in https://github.com/acme/widget/pull/1\n"
            "  - feat: widget model\n"
            "\n"
            "- fix: typo by @octocat in https://github.com/acme/widget/pull/2\n"
            "\n"
            "**Full Changelog**: https://github.com/acme/widget/compare/v1.0.0...1.1.0\n"
        )

    def test_render_empty(self):
        notes = render_release_notes([], repo_url=None, last_tag=None, version="1.0.0")

        assert notes == f"# What's Changed\n\n{NO_CHANGES}\n\n"


class TestGenerateReleaseNotes:
    """Tests for generate_release_notes()."""

    def test_generate(self, mock_repo: MagicMock, mock_github: MagicMock, tmp_path: Path):
        written = generate_release_notes(
            mock_repo,
            NextverConfig(),
            preview=False,
            github=mock_github,
            version="1.1.0",
        )

        assert written == tmp_path / "RELEASE_NOTES.md"
        notes = written.read_text(encoding="utf-8")
        assert "- feat: add widgets by @alice in" in notes
        assert "  - test: widget tests\n" in notes
        assert "https://github.com/acme/widget/compare/v1.0.0...1.1.0" in notes
        mock_github.ensure_available.assert_called_once()
        mock_github.list_merged_prs.assert_called_once_with("main", "2026-01-02T03:04:05+00:00")
        mock_github.get_pr_commit_headlines.assert_called_once_with(7)

    def test_first_release_lists_all_prs(self, mock_repo: MagicMock, mock_github: MagicMock):
        mock_repo.get_last_tag.return_value = None

        written = generate_release_notes(
            mock_repo,
            NextverConfig(),
            preview=False,
            github=mock_github,
            version="0.1.0",
        )

        mock_github.list_merged_prs.assert_called_once_with("main", None)
        assert "**Full Changelog**: https://github.com/acme/widget\n" in written.read_text(
            encoding="utf-8"
        )

    def test_preview_skips_github(
        self, mock_repo: MagicMock, mock_github: MagicMock, tmp_path: Path
    ):
        written = generate_release_notes(
            mock_repo,
            NextverConfig(),
            preview=True,
            github=mock_github,
            version="1.1.0",
        )

        assert written == tmp_path / "RELEASE_NOTES.preview.md"
        assert NO_CHANGES in written.read_text(encoding="utf-8")
        mock_github.ensure_available.assert_not_called()
        mock_github.list_merged_prs.assert_not_called()

    def test_missing_gh(self, mock_repo: MagicMock, mock_github: MagicMock, tmp_path: Path):
        mock_github.ensure_available.side_effect = GitHubCLIError("GitHub CLI (gh) is required")

        with pytest.raises(GitHubCLIError):
            generate_release_notes(
                mock_repo,
                NextverConfig(),
                preview=False,
                github=mock_github,
                version="1.1.0",
            )

        assert not (tmp_path / "RELEASE_NOTES.md").exists()

    def test_configured_repository_and_branch(self, mock_repo: MagicMock, mock_github: MagicMock):
        config = NextverConfig(
            release_notes=ReleaseNotesConfig(
                repository_url="https://git.example.com/team/widget",
                base_branch="develop",
            )
        )

        written = generate_release_notes(
            mock_repo,
            config,
            preview=False,
            github=mock_github,
            version="1.1.0",
        )

        assert "https://git.example.com/team/widget/compare/" in written.read_text(encoding="utf-8")
        mock_github.list_merged_prs.assert_called_once_with("develop", "2026-01-02T03:04:05+00:00")
        mock_repo.get_default_branch.assert_not_called()
