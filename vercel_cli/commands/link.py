"""Repository link commands."""

from __future__ import annotations

# mypy: ignore-errors
# ruff: noqa: B008,F403,F405,I001
from vercel_cli.commands.common import *


@link_app.command("repo")
def link_repo(
    ctx: typer.Context,
    yes: Annotated[
        bool,
        typer.Option("--yes", "-y", help="Skip confirmation prompts and use the current scope."),
    ] = False,
    overwrite: Annotated[
        bool,
        typer.Option("--overwrite", help="Re-link even when the repository is already linked."),
    ] = False,
) -> None:
    """Link the Git repository of the current directory to one or more projects."""
    state = _state(ctx)
    settings = LinkSettings.from_environment()
    existing = get_repo_link(state.cwd, settings)
    if existing is not None and existing.repo_config is not None and not overwrite:
        console.print(
            f"Repository at {existing.root_path} is already linked. "
            "Use --overwrite to link it again."
        )
        return
    with _create_client(state) as client:
        try:
            repo_link = ensure_repo_link(
                client,
                state.cwd,
                EnsureRepoLinkOptions(yes=yes, overwrite=overwrite),
                prompter=RichPrompter(console),
                console=console,
                settings=settings,
            )
        except VercelCliError as exc:
            raise _fail(exc) from exc
    if repo_link is None:
        raise typer.Exit(code=1)
    state.config.save_current_team(client.current_team)


@link_app.command("status")
def link_status(ctx: typer.Context) -> None:
    """Show the repository root and the projects linked to it."""
    state = _state(ctx)
    try:
        repo_link = get_repo_link(state.cwd, LinkSettings.from_environment())
    except VercelCliError as exc:
        raise _fail(exc) from exc
    if repo_link is None:
        console.print("Not inside a Git repository.")
        raise typer.Exit(code=1)
    if repo_link.repo_config is None:
        console.print(f"Repository at {repo_link.root_path} is not linked.")
        return
    config = repo_link.repo_config
    table = Table(title=f"Linked Projects ({config.remote_name})")
    table.add_column("Project ID")
    table.add_column("Name")
    table.add_column("Directory")
    for project in config.projects:
        table.add_row(project.id, project.name, project.directory)
    console.print(f"Repository root: {repo_link.root_path}")
    console.print(f"Owner: {config.org_id}")
    console.print(table)
