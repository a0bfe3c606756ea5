"""GitHub access through the ``gh`` command line tool.

Only merged pull requests are needed, for release notes. Listing failures
degrade to empty results so that release notes can still be written.
"""

from __future__ import annotations

import json
import logging
import subprocess
from pathlib import Path

from pydantic import BaseModel, Field, ValidationError

from nextver.exceptions import GitHubCLIError

logger = logging.getLogger(__name__)

GH_INSTALL_URL = "https://cli.github.com/"


class PullRequestAuthor(BaseModel):
    login: str


class PullRequest(BaseModel):
    """A merged pull request as reported by ``gh pr list``."""

    number: int
    title: str
    url: str
    author: PullRequestAuthor
    commit_headlines: list[str] = Field(default_factory=list)


class GitHubCLI:
    """Thin wrapper around ``gh`` run inside a repository."""

    def __init__(self, path: Path | str) -> None:
        self.path = Path(path)

    def _run(self, *args: str) -> str:
        result = subprocess.run(
            ["gh", *args],
            capture_output=True,
            text=True,
            encoding="utf-8",
            check=True,
            cwd=self.path,
        )
        return result.stdout.strip()

    def is_available(self) -> bool:
        try:
            self._run("--version")
        except (subprocess.CalledProcessError, OSError):
            return False
        return True

    def ensure_available(self) -> None:
        """Raise unless ``gh`` can be executed.

        Raises:
            GitHubCLIError: If the GitHub CLI is not installed
        """
        if not self.is_available():
            raise GitHubCLIError(
                f"GitHub CLI (gh) is required but not installed. Install: {GH_INSTALL_URL}"
            )

    def list_merged_prs(self, base: str, merged_after: str | None = None) -> list[PullRequest]:
        """List pull requests merged into ``base``.

        Args:
            base: Base branch the pull requests were merged into
            merged_after: Only include pull requests merged after this date

        Returns:
            Pull requests, or an empty list if ``gh`` fails
        """
        args = [
            "pr",
            "list",
            "--state",
            "merged",
            "--base",
            base,
            "--json",
            "number,title,author,url",
        ]
        if merged_after:
            args.extend(["--search", f"merged:>{merged_after}"])

        try:
            payload = json.loads(self._run(*args) or "[]")
            return [PullRequest.model_validate(item) for item in payload]
        except (subprocess.CalledProcessError, OSError) as e:
            logger.warning("Could not list merged pull requests: %s", _describe(e))
        except (json.JSONDecodeError, ValidationError) as e:
            logger.warning("Unexpected output from gh pr list: %s", e)
        return []

    def get_pr_commit_headlines(self, number: int) -> list[str]:
        """Return the commit headlines of one pull request, or an empty list on failure."""
        try:
            output = self._run(
                "pr",
                "view",
                str(number),
                "--json",
                "commits",
                "--jq",
                ".commits[].messageHeadline",
            )
        except (subprocess.CalledProcessError, OSError) as e:
            logger.warning("Could not fetch commits for PR #%d: %s", number, _describe(e))
            return []
        return [line for line in output.splitlines() if line.strip()]


def _describe(error: Exception) -> str:
    stderr = getattr(error, "stderr", None)
    return stderr.strip() if stderr else str(error)
