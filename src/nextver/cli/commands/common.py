"""Helpers shared by the command implementations."""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

from rich.markup import escape

from nextver.config import load_config

if TYPE_CHECKING:
    from rich.console import Console

    from nextver.config.models import NextverConfig


def fail(err_console: Console, message: object, code: int = 1) -> SystemExit:
    """Print a one-line error and build the matching SystemExit."""
    err_console.print(f"[red]Error:[/] {escape(str(message))}")
    return SystemExit(code)


def load_project(path: str | None, err_console: Console) -> tuple[Path, NextverConfig]:
    """Resolve the project directory and load its configuration."""
    project_path = Path(path) if path else Path.cwd()

    try:
        config = load_config(project_path)
    except Exception as e:
        raise fail(err_console, f"loading config: {e}") from e

    return project_path, config
