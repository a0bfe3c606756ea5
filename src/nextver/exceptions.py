"""Exception hierarchy for nextver.

Absence conditions (no tag, no manifest, no commits) are never raised;
they resolve to defaults inside the collaborators. The exceptions below
cover failures that callers have to decide about.
"""

from __future__ import annotations


class NextverError(Exception):
    """Base class for all nextver errors."""


class ConfigError(NextverError):
    """Configuration could not be loaded."""


class ConfigNotFoundError(ConfigError):
    """No pyproject.toml was found."""


class ConfigValidationError(ConfigError):
    """Configuration values failed validation."""


class ProjectError(NextverError):
    """Project files exist but cannot be used."""


class VersionNotFoundError(ProjectError):
    """A manifest does not declare a version."""


class GitError(NextverError):
    """A git command that must succeed has failed."""

    def __init__(self, message: str, stderr: str | None = None) -> None:
        super().__init__(message)
        self.stderr = stderr


class ChangelogError(NextverError):
    """Changelog could not be written."""


class GitHubCLIError(NextverError):
    """The GitHub CLI is missing or returned an error."""

    def __init__(self, message: str, stderr: str | None = None) -> None:
        super().__init__(message)
        self.stderr = stderr
