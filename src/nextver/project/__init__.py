"""Project manifest access."""

from __future__ import annotations

from nextver.project.manifest import (
    find_manifest_version,
    get_manifest_version,
    get_package_json_version,
    get_pyproject_version,
    read_manifest_version,
)

__all__ = [
    "find_manifest_version",
    "get_manifest_version",
    "get_package_json_version",
    "get_pyproject_version",
    "read_manifest_version",
]
