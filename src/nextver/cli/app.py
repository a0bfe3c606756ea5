"""The nextver command line application."""

from __future__ import annotations

import logging
from typing import Optional

import typer
from rich.console import Console
from rich.logging import RichHandler

from nextver import __version__
from nextver.cli.commands.changelog import run_changelog
from nextver.cli.commands.compute import run_compute
from nextver.cli.commands.preview import run_preview_create, run_preview_remove
from nextver.cli.commands.release_notes import run_release_notes
from nextver.cli.commands.tag import run_tag

app = typer.Typer(
    name="nextver",
    help="Compute the next semantic version from conventional commits.",
    no_args_is_help=True,
    add_completion=False,
)
preview_app = typer.Typer(
    help="Create or remove preview changelog and release notes.",
    no_args_is_help=True,
)
app.add_typer(preview_app, name="preview")

console = Console()
err_console = Console(stderr=True)

PATH_HELP = "Project directory (defaults to the current directory)"
PREVIEW_HELP = "Write preview files instead of the real ones"


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=err_console, show_path=False)],
        force=True,
    )


def _version_callback(value: bool) -> None:
    if value:
        typer.echo(f"nextver {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-V", help="Enable debug logging"),
    version: Optional[bool] = typer.Option(
        None,
        "--version",
        callback=_version_callback,
        is_eager=True,
        help="Show version and exit",
    ),
) -> None:
    """nextver - semantic versions, changelogs and release notes from commits."""
    _configure_logging(verbose)


@app.command("compute")
def compute_command(
    json_output: bool = typer.Option(False, "--json", help="Print the full result as JSON"),
    ci: bool = typer.Option(False, "--ci", help="Accepted for CI scripts, no effect"),
    preview: bool = typer.Option(False, "--preview", help="Accepted as an alias, no effect"),
    path: Optional[str] = typer.Option(None, "--path", "-p", help=PATH_HELP),
) -> None:
    """Print the next version.

    Exit codes: 0 release, 10 no bump detected, 2 no commits, 1 error.
    """
    run_compute(path, json_output, err_console)


@app.command("changelog")
def changelog_command(
    preview: bool = typer.Option(False, "--preview", envvar="PREVIEW_MODE", help=PREVIEW_HELP),
    path: Optional[str] = typer.Option(None, "--path", "-p", help=PATH_HELP),
) -> None:
    """Add sections for new versions to the changelog."""
    run_changelog(path, preview, console, err_console)


@app.command("release-notes")
def release_notes_command(
    preview: bool = typer.Option(False, "--preview", envvar="PREVIEW_MODE", help=PREVIEW_HELP),
    version: Optional[str] = typer.Option(
        None, "--release-version", help="Version being released (defaults to the manifest)"
    ),
    path: Optional[str] = typer.Option(None, "--path", "-p", help=PATH_HELP),
) -> None:
    """Write release notes from pull requests merged since the last tag."""
    run_release_notes(path, preview, version, console, err_console)


@app.command("tag")
def tag_command(
    compute: bool = typer.Option(False, "--compute", help="Tag the computed next version"),
    dry_run: bool = typer.Option(False, "--dry-run", help="Show the tag without creating it"),
    path: Optional[str] = typer.Option(None, "--path", "-p", help=PATH_HELP),
) -> None:
    """Create and push the release tag."""
    run_tag(path, compute, dry_run, console, err_console)


@preview_app.command("create")
def preview_create_command(
    path: Optional[str] = typer.Option(None, "--path", "-p", help=PATH_HELP),
) -> None:
    """Generate the preview changelog and release notes."""
    run_preview_create(path, console, err_console)


@preview_app.command("remove")
def preview_remove_command(
    path: Optional[str] = typer.Option(None, "--path", "-p", help=PATH_HELP),
) -> None:
    """Delete the preview files."""
    run_preview_remove(path, console, err_console)


if __name__ == "__main__":
    app()
