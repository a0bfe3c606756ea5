"""Implementation of the 'preview' commands.

Preview files let a pull request show the changelog and release notes a
release would produce, without touching the real files or GitHub.
"""

from __future__ import annotations

import json
from typing import TYPE_CHECKING

from nextver.cli.commands.changelog import run_changelog
from nextver.cli.commands.common import fail, load_project
from nextver.cli.commands.release_notes import run_release_notes
from nextver.core.engine import ReleaseResult, compute_version_for_path

if TYPE_CHECKING:
    from rich.console import Console


def run_preview_create(path: str | None, console: Console, err_console: Console) -> None:
    """Compute the version and write both preview files."""
    project_path, config = load_project(path, err_console)

    console.print("🔧 Generating preview files...")

    try:
        result = compute_version_for_path(project_path, config)
    except Exception as e:
        raise fail(err_console, e) from e

    console.print("🔖 Computed version:")
    console.print_json(json.dumps(result.to_dict()))

    run_changelog(path, preview=True, console=console, err_console=err_console)
    next_version = result.next_version if isinstance(result, ReleaseResult) else None
    run_release_notes(
        path,
        preview=True,
        version=next_version,
        console=console,
        err_console=err_console,
    )

    console.print("[green]✅ Preview ready:[/]")
    console.print(f" - {config.changelog.preview_path}")
    console.print(f" - {config.release_notes.preview_path}")


def run_preview_remove(path: str | None, console: Console, err_console: Console) -> None:
    """Delete the preview files if they exist."""
    project_path, config = load_project(path, err_console)

    console.print("🧹 Removing preview files...")

    for relative in (config.changelog.preview_path, config.release_notes.preview_path):
        (project_path / relative).unlink(missing_ok=True)

    console.print("[green]✔[/] Preview cleared.")
