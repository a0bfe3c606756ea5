"""Implementation of the 'release-notes' command."""

from __future__ import annotations

from typing import TYPE_CHECKING

from nextver.cli.commands.common import fail, load_project
from nextver.core.release_notes import generate_release_notes
from nextver.exceptions import GitHubCLIError, NextverError
from nextver.forge import GitHubCLI
from nextver.project.manifest import read_manifest_version
from nextver.vcs import GitRepository

if TYPE_CHECKING:
    from rich.console import Console

EXIT_GH_MISSING = 2


def run_release_notes(
    path: str | None,
    preview: bool,
    version: str | None,
    console: Console,
    err_console: Console,
) -> None:
    """Run the release-notes command.

    Args:
        path: Optional path to the project directory
        preview: Write the preview file without calling GitHub
        version: Version being released (defaults to the manifest version)
        console: Console for standard output
        err_console: Console for error output
    """
    project_path, config = load_project(path, err_console)
    repo = GitRepository(project_path)

    if preview:
        console.print("[blue]ℹ[/] Preview mode: GitHub CLI not required.")

    try:
        release_version = version or read_manifest_version(
            project_path, default=config.version.fallback_version
        )
        written = generate_release_notes(
            repo,
            config,
            preview=preview,
            github=GitHubCLI(project_path),
            version=release_version,
        )
    except GitHubCLIError as e:
        raise fail(err_console, e, EXIT_GH_MISSING) from e
    except NextverError as e:
        raise fail(err_console, e) from e

    console.print(f"[green]✔[/] Generated [cyan]{written.name}[/]")
