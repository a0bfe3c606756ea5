"""Implementation of the 'compute' command.

Prints the next version and reports the outcome through the exit code.
The output and exit codes are relied upon by CI scripts.
"""

from __future__ import annotations

import json
from typing import TYPE_CHECKING

import typer

from nextver.cli.commands.common import fail, load_project
from nextver.core.engine import ReleaseResult, compute_version_for_path

if TYPE_CHECKING:
    from rich.console import Console

    from nextver.core.engine import ComputeResult

EXIT_RELEASE = 0
EXIT_ERROR = 1
EXIT_NO_COMMITS = 2
EXIT_NO_BUMP = 10


def exit_code_for(result: ComputeResult) -> int:
    if isinstance(result, ReleaseResult):
        return EXIT_RELEASE
    if result.reason == "no-bump-detected":
        return EXIT_NO_BUMP
    if result.reason == "no-commits":
        return EXIT_NO_COMMITS
    return EXIT_ERROR


def run_compute(path: str | None, json_output: bool, err_console: Console) -> None:
    """Run the compute command.

    Args:
        path: Optional path to the project directory
        json_output: Print the full result as JSON instead of the bare version
        err_console: Console for error output
    """
    project_path, config = load_project(path, err_console)

    try:
        result = compute_version_for_path(project_path, config)
    except Exception as e:
        raise fail(err_console, e, EXIT_ERROR) from e

    if json_output:
        typer.echo(json.dumps(result.to_dict(), indent=2))
    elif isinstance(result, ReleaseResult):
        typer.echo(result.next_version)
    else:
        typer.echo(
            f"No release generated ({result.reason}). Base version: {result.base_version}",
            err=True,
        )

    code = exit_code_for(result)
    if code != EXIT_RELEASE:
        raise SystemExit(code)
