"""Version control system integration."""

from __future__ import annotations

from nextver.vcs.git import GitRepository

__all__ = ["GitRepository"]
