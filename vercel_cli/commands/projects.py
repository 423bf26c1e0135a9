"""Project resolution for paths inside a linked repository."""

from __future__ import annotations

# mypy: ignore-errors
# ruff: noqa: B008,F403,F405,I001
from vercel_cli.commands.common import *


@app.command()
def projects(
    ctx: typer.Context,
    path: Annotated[
        Path | None,
        typer.Argument(help="Path inside the repository (default: current directory)."),
    ] = None,
) -> None:
    """Show the linked project(s) whose root directory contains a path."""
    state = _state(ctx)
    target = (state.cwd / path).resolve() if path is not None else state.cwd
    try:
        repo_link = get_repo_link(target, LinkSettings.from_environment())
    except VercelCliError as exc:
        raise _fail(exc) from exc
    if repo_link is None or repo_link.repo_config is None:
        raise _cli_error(
            "VC-NOT-LINKED",
            "This directory is not inside a linked repository.",
            "Run `vc link repo` first.",
        )
    try:
        relative = target.relative_to(repo_link.root_path).as_posix()
    except ValueError as exc:
        raise typer.BadParameter(f"{target} is outside {repo_link.root_path}.") from exc
    matches = find_projects_from_path(repo_link.repo_config.projects, relative)
    if not matches:
        console.print(f"No linked project contains '{relative}'.")
        raise typer.Exit(code=1)
    table = Table(title="Matching Projects")
    table.add_column("Project ID")
    table.add_column("Name")
    table.add_column("Directory")
    for project in matches:
        table.add_row(project.id, project.name, project.directory)
    console.print(table)
