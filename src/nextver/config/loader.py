"""Configuration loading from pyproject.toml."""

from __future__ import annotations

import logging
import tomllib
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from nextver.config.models import NextverConfig
from nextver.exceptions import ConfigError, ConfigNotFoundError, ConfigValidationError

logger = logging.getLogger(__name__)

TOOL_KEY = "nextver"


def find_pyproject_toml(start: Path | None = None) -> Path:
    """Find pyproject.toml in ``start`` or one of its parents.

    Args:
        start: Directory to search from (defaults to the working directory)

    Returns:
        Path to the nearest pyproject.toml

    Raises:
        ConfigNotFoundError: If no pyproject.toml exists up to the root
    """
    current = (start or Path.cwd()).resolve()

    for directory in (current, *current.parents):
        candidate = directory / "pyproject.toml"
        if candidate.is_file():
            return candidate

    raise ConfigNotFoundError(f"No pyproject.toml found in {current} or its parents")


def load_pyproject_toml(path: Path) -> dict[str, Any]:
    """Parse a pyproject.toml file.

    Raises:
        ConfigNotFoundError: If the file does not exist
        ConfigError: If the file is not valid TOML
    """
    if not path.is_file():
        raise ConfigNotFoundError(f"Config file not found: {path}")

    try:
        with path.open("rb") as f:
            return tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        raise ConfigError(f"Invalid TOML in {path}: {e}") from e


def extract_nextver_config(pyproject: dict[str, Any]) -> dict[str, Any]:
    """Return the ``[tool.nextver]`` table, or an empty dict."""
    return pyproject.get("tool", {}).get(TOOL_KEY, {})


def load_config(path: Path | None = None) -> NextverConfig:
    """Load configuration for the project at ``path``.

    With an explicit ``path`` only ``path/pyproject.toml`` is read; without
    one the working directory and its parents are searched. A project
    without a readable pyproject.toml gets the default configuration, so a
    manifest with syntax errors never stops version computation.

    Raises:
        ConfigValidationError: If ``[tool.nextver]`` has invalid values
    """
    if path is not None:
        pyproject_path = Path(path) / "pyproject.toml"
        if not pyproject_path.is_file():
            logger.debug("No pyproject.toml in %s, using default configuration", path)
            return NextverConfig()
    else:
        try:
            pyproject_path = find_pyproject_toml()
        except ConfigNotFoundError:
            logger.debug("No pyproject.toml found, using default configuration")
            return NextverConfig()

    try:
        raw = extract_nextver_config(load_pyproject_toml(pyproject_path))
    except ConfigError as e:
        logger.warning("%s; using default configuration", e)
        return NextverConfig()

    try:
        return NextverConfig.model_validate(raw)
    except ValidationError as e:
        raise ConfigValidationError(f"Invalid [tool.{TOOL_KEY}] in {pyproject_path}:\n{e}") from e
