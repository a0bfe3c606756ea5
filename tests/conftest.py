"""Shared fixtures for the nextver test suite."""

from __future__ import annotations

import shutil
import subprocess
from typing import TYPE_CHECKING

import pytest

from nextver.core.commits import Commit

if TYPE_CHECKING:
    from pathlib import Path


def encode(sha: str, subject: str, body: str = "") -> str:
    """Build a raw history record as the git collaborator returns it."""
    return f"{sha}\x1f{subject}\x1f{body}"


class FakeHistory:
    """In-memory history source recording the ranges it was asked for."""

    def __init__(self, last_tag: str | None = None, records: list[str] | None = None) -> None:
        self.last_tag = last_tag
        self.records = records or []
        self.requested_ranges: list[str] = []

    def get_last_tag(self) -> str | None:
        return self.last_tag

    def get_commits(self, rev_range: str) -> list[str]:
        self.requested_ranges.append(rev_range)
        return list(self.records)


@pytest.fixture
def feat_commit() -> Commit:
    return Commit(sha="feat123", subject="feat: add user authentication")


@pytest.fixture
def fix_commit() -> Commit:
    return Commit(sha="fix456", subject="fix(core): handle empty config")


@pytest.fixture
def breaking_commit() -> Commit:
    return Commit(
        sha="break789",
        subject="refactor: drop legacy loader",
        body="BREAKING CHANGE: the v1 loader is gone",
    )


@pytest.fixture
def sample_commits() -> list[Commit]:
    return [
        Commit("a1", "feat(api): add search endpoint"),
        Commit("b2", "fix: correct off-by-one in pager"),
        Commit("c3", "docs: describe configuration"),
        Commit("d4", "chore: bump dependencies"),
        Commit("e5", "feat!: new config format"),
        Commit("f6", "Merge branch 'main' into feature"),
    ]


def _git(repo: Path, *args: str) -> None:
    subprocess.run(["git", *args], cwd=repo, check=True, capture_output=True, text=True)


@pytest.fixture
def git_repo(tmp_path: Path) -> Path:
    """An initialized git repository with a pyproject.toml and one commit."""
    if shutil.which("git") is None:
        pytest.skip("git is not installed")

    _git(tmp_path, "init", "-q")
    _git(tmp_path, "config", "user.email", "dev@example.com")
    _git(tmp_path, "config", "user.name", "Dev")
    _git(tmp_path, "config", "commit.gpgsign", "false")
    _git(tmp_path, "config", "tag.gpgsign", "false")

    (tmp_path / "pyproject.toml").write_text('[project]\nname = "demo"\nversion = "1.4.2"\n')
    _git(tmp_path, "add", "pyproject.toml")
    _git(tmp_path, "commit", "-q", "-m", "chore: initial commit")
    return tmp_path


@pytest.fixture
def commit_in(git_repo: Path):
    """Create an empty commit with the given message in ``git_repo``."""

    def _commit(message: str) -> None:
        _git(git_repo, "commit", "-q", "--allow-empty", "-m", message)

    return _commit


@pytest.fixture
def tag_in(git_repo: Path):
    """Create a lightweight tag at HEAD of ``git_repo``."""

    def _tag(name: str) -> None:
        _git(git_repo, "tag", name)

    return _tag


@pytest.fixture
def make_history():
    """Factory for in-memory history sources."""
    return FakeHistory


@pytest.fixture
def record():
    """Encoder for raw ``sha\\x1fsubject\\x1fbody`` records."""
    return encode
