"""Implementation of the 'tag' command.

Creates and pushes the release tag, either for the manifest version or for
the version computed from commits.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import typer

from nextver.cli.commands.common import fail, load_project
from nextver.core.engine import ReleaseResult, compute_version_for_path
from nextver.exceptions import NextverError
from nextver.project.manifest import get_manifest_version
from nextver.vcs import GitRepository

if TYPE_CHECKING:
    from rich.console import Console


def run_tag(
    path: str | None,
    compute: bool,
    dry_run: bool,
    console: Console,
    err_console: Console,
) -> None:
    """Run the tag command.

    Args:
        path: Optional path to the project directory
        compute: Tag the computed next version instead of the manifest version
        dry_run: Report the tag without creating it
        console: Console for standard output
        err_console: Console for error output
    """
    project_path, config = load_project(path, err_console)
    repo = GitRepository(project_path)

    try:
        if compute:
            console.print("🔢 Computing version from commits...")
            result = compute_version_for_path(project_path, config)
            if not isinstance(result, ReleaseResult):
                console.print("[blue]ℹ[/] No version bump detected. Skipping tag creation.")
                return
            version = result.next_version
        else:
            console.print("📦 Using version from the project manifest...")
            version = get_manifest_version(project_path)
    except NextverError as e:
        raise fail(err_console, f"Failed to determine version: {e}") from e

    tag = f"{config.version.tag_prefix}{version}"
    console.print(f"🔖 Release version: [green]{tag}[/]")

    if repo.tag_exists(tag):
        raise fail(err_console, f"Tag {tag} already exists.")

    if dry_run:
        console.print("🧪 Dry-run mode enabled.")
        console.print(f"Would create and push tag: [cyan]{tag}[/]")
        typer.echo(f"VERSION={tag}")
        return

    try:
        repo.create_tag(tag)
        repo.push_tag(tag)
    except NextverError as e:
        raise fail(err_console, e) from e

    console.print(f"[green]✔[/] Tag {tag} created and pushed")
