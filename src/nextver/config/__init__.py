"""Configuration management for nextver."""

from __future__ import annotations

from nextver.config.loader import load_config
from nextver.config.models import (
    ChangelogConfig,
    NextverConfig,
    ReleaseNotesConfig,
    VersionConfig,
)

__all__ = [
    "ChangelogConfig",
    "NextverConfig",
    "ReleaseNotesConfig",
    "VersionConfig",
    "load_config",
]
