"""Code hosting platform integration."""

from __future__ import annotations

from nextver.forge.github import GitHubCLI, PullRequest

__all__ = ["GitHubCLI", "PullRequest"]
