"""Core business logic for nextver.

This module contains the fundamental building blocks:
- Conventional commit classification
- Bump resolution and version arithmetic
- The version compute engine
- Changelog and release notes rendering
"""

from __future__ import annotations

from nextver.core.commits import ClassifiedCommit, Commit, analyze_commits, classify
from nextver.core.engine import (
    ComputeResult,
    NoReleaseResult,
    ReleaseResult,
    compute_from_commits,
    compute_version,
    compute_version_for_path,
)
from nextver.core.version import BumpType, Version, resolve_bump

__all__ = [
    # Commits
    "ClassifiedCommit",
    "Commit",
    "analyze_commits",
    "classify",
    # Version
    "BumpType",
    "Version",
    "resolve_bump",
    # Engine
    "ComputeResult",
    "NoReleaseResult",
    "ReleaseResult",
    "compute_from_commits",
    "compute_version",
    "compute_version_for_path",
]
