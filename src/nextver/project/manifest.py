"""Manifest version reading.

The manifest is the project file that declares the current version:
``pyproject.toml`` (PEP 621 or Poetry) or ``package.json``. It provides the
base version when the repository has no tags yet.
"""

from __future__ import annotations

import json
import logging
import re
from typing import TYPE_CHECKING

from nextver.exceptions import ProjectError, VersionNotFoundError

if TYPE_CHECKING:
    from pathlib import Path

logger = logging.getLogger(__name__)

DEFAULT_VERSION = "0.0.0"

_VERSION_LINE = re.compile(r'^version\s*=\s*["\']([^"\']+)["\']', re.MULTILINE)


def _section_body(content: str, header: str) -> str | None:
    match = re.search(
        rf"^\[{re.escape(header)}\][ \t]*$(.*?)(?=^\[|\Z)",
        content,
        re.MULTILINE | re.DOTALL,
    )
    return match.group(1) if match else None


def get_pyproject_version(pyproject_path: Path) -> str:
    """Get the version declared in pyproject.toml.

    A regex is used rather than a TOML parser so that a file with unrelated
    syntax problems still yields its version.

    Raises:
        FileNotFoundError: If the file does not exist
        VersionNotFoundError: If no version is declared
    """
    content = pyproject_path.read_text(encoding="utf-8")

    for header in ("project", "tool.poetry"):
        body = _section_body(content, header)
        match = _VERSION_LINE.search(body) if body is not None else None
        if match:
            return match.group(1)

    raise VersionNotFoundError(
        f"Could not find version in {pyproject_path}. "
        "Expected [project].version or [tool.poetry].version."
    )


def get_package_json_version(package_json_path: Path) -> str:
    """Get the ``version`` field of a package.json file.

    Raises:
        FileNotFoundError: If the file does not exist
        VersionNotFoundError: If the JSON is malformed or has no version
    """
    content = package_json_path.read_text(encoding="utf-8")

    try:
        data = json.loads(content)
    except json.JSONDecodeError as e:
        raise VersionNotFoundError(f"Invalid JSON in {package_json_path}: {e}") from e

    version = data.get("version") if isinstance(data, dict) else None
    if not isinstance(version, str) or not version:
        raise VersionNotFoundError(f"No version field in {package_json_path}")
    return version


def find_manifest_version(project_path: Path) -> str | None:
    """Return the first version declared by pyproject.toml or package.json.

    Missing files, missing version fields and malformed content are skipped.

    Raises:
        ProjectError: If a manifest exists but cannot be read
    """
    readers = (
        ("pyproject.toml", get_pyproject_version),
        ("package.json", get_package_json_version),
    )

    for filename, reader in readers:
        manifest = project_path / filename
        try:
            return reader(manifest)
        except FileNotFoundError:
            continue
        except VersionNotFoundError as e:
            logger.debug("%s", e)
            continue
        except (OSError, UnicodeDecodeError) as e:
            raise ProjectError(f"Cannot read {manifest}: {e}") from e

    return None


def get_manifest_version(project_path: Path) -> str:
    """Return the manifest version, failing when there is none.

    Raises:
        VersionNotFoundError: If no manifest declares a version
        ProjectError: If a manifest exists but cannot be read
    """
    version = find_manifest_version(project_path)
    if version is None:
        raise VersionNotFoundError(f"No pyproject.toml or package.json version in {project_path}")
    return version


def read_manifest_version(project_path: Path, default: str = DEFAULT_VERSION) -> str:
    """Read the project version, falling back to ``default``.

    Args:
        project_path: Project root directory
        default: Version used when no manifest declares one

    Returns:
        Manifest version string

    Raises:
        ProjectError: If a manifest exists but cannot be read
    """
    version = find_manifest_version(project_path)
    if version is None:
        logger.debug("No manifest version found in %s, using %s", project_path, default)
        return default
    return version
