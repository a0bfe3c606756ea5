"""Implementation of the 'changelog' command."""

from __future__ import annotations

from typing import TYPE_CHECKING

from nextver.cli.commands.common import fail, load_project
from nextver.core.changelog import generate_changelog
from nextver.core.engine import ReleaseResult, compute_version_for_path
from nextver.exceptions import NextverError
from nextver.vcs import GitRepository

if TYPE_CHECKING:
    from rich.console import Console


def run_changelog(
    path: str | None,
    preview: bool,
    console: Console,
    err_console: Console,
) -> None:
    """Run the changelog command.

    Args:
        path: Optional path to the project directory
        preview: Write the preview changelog instead of the real one
        console: Console for standard output
        err_console: Console for error output
    """
    project_path, config = load_project(path, err_console)
    repo = GitRepository(project_path)

    try:
        result = compute_version_for_path(project_path, config)
        next_version = result.next_version if isinstance(result, ReleaseResult) else None

        if next_version is None:
            console.print("[blue]ℹ[/] No version bump detected, showing Unreleased section.")

        written = generate_changelog(
            repo,
            config,
            preview=preview,
            next_version=next_version,
        )
    except NextverError as e:
        raise fail(err_console, e) from e

    if written is None:
        console.print("[blue]ℹ[/] No new versions to add.")
        return

    label = "CHANGELOG preview generated" if preview else "CHANGELOG updated"
    console.print(f"[green]✔[/] {label}: [cyan]{written.name}[/]")
