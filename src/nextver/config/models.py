"""Configuration models.

Settings live under ``[tool.nextver]`` in pyproject.toml. Every field has
a default, so a project without any configuration works unchanged.
"""

from __future__ import annotations

from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field


class _ConfigModel(BaseModel):
    model_config = ConfigDict(extra="forbid")


class ChangelogConfig(_ConfigModel):
    """Where the changelog is written."""

    path: Path = Path("CHANGELOG.md")
    preview_path: Path = Path("CHANGELOG.preview.md")


class ReleaseNotesConfig(_ConfigModel):
    """Where release notes are written and which repository they link to."""

    path: Path = Path("RELEASE_NOTES.md")
    preview_path: Path = Path("RELEASE_NOTES.preview.md")
    repository_url: str | None = None
    base_branch: str | None = None


class VersionConfig(_ConfigModel):
    """Version and tag settings."""

    tag_prefix: str = ""
    fallback_version: str = "0.0.0"


class NextverConfig(_ConfigModel):
    """Root configuration for nextver."""

    changelog: ChangelogConfig = Field(default_factory=ChangelogConfig)
    release_notes: ReleaseNotesConfig = Field(default_factory=ReleaseNotesConfig)
    version: VersionConfig = Field(default_factory=VersionConfig)

    def changelog_path(self, *, preview: bool) -> Path:
        return self.changelog.preview_path if preview else self.changelog.path

    def release_notes_path(self, *, preview: bool) -> Path:
        return self.release_notes.preview_path if preview else self.release_notes.path
