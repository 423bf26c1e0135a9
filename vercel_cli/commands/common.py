"""Shared CLI objects and helpers for command modules."""

from __future__ import annotations

# ruff: noqa: F401
from dataclasses import dataclass
from pathlib import Path
from typing import Annotated

import typer
from rich.console import Console
from rich.table import Table

from vercel_cli import __version__
from vercel_cli.client import ApiClient
from vercel_cli.config import CliConfig
from vercel_cli.config_validation import require_positive_int
from vercel_cli.errors import ApiError, VercelCliError
from vercel_cli.events import (
    DEPLOY_MODE,
    LOGS_MODE,
    ConsumeOptions,
    EventPrinter,
    EventQuery,
    EventStreamConsumer,
)
from vercel_cli.link import (
    EnsureRepoLinkOptions,
    LinkSettings,
    ensure_repo_link,
    find_projects_from_path,
    find_repo_root,
    get_repo_link,
)
from vercel_cli.logging_utils import configure_logging
from vercel_cli.prompts import RichPrompter

app = typer.Typer(add_completion=False, no_args_is_help=True)
link_app = typer.Typer(no_args_is_help=True, help="Link a Git repository to projects.")
console = Console()
err_console = Console(stderr=True)

app.add_typer(link_app, name="link")


@dataclass(frozen=True)
class CliState:
    """Per-invocation settings resolved by the root callback."""

    config: CliConfig
    cwd: Path
    debug: bool


def _version_callback(value: bool) -> None:
    """Print package version and exit when requested."""
    if value:
        console.print(__version__)
        raise typer.Exit()


def _state(ctx: typer.Context) -> CliState:
    """Return the state stored by the root callback."""
    state = ctx.find_root().obj
    if not isinstance(state, CliState):
        raise typer.BadParameter("CLI state is not initialized.")
    return state


def _cli_error(code: str, message: str, hint: str | None = None) -> typer.BadParameter:
    """Create a standardized CLI error with error code and optional remediation hint."""
    if hint is None:
        return typer.BadParameter(f"[{code}] {message}")
    return typer.BadParameter(f"[{code}] {message} Hint: {hint}")


def _create_client(state: CliState) -> ApiClient:
    """Create an authenticated API client, requiring a token."""
    if not state.config.token:
        raise _cli_error(
            "VC-AUTH-REQUIRED",
            "No access token found.",
            "Pass --token or set VERCEL_TOKEN.",
        )
    return ApiClient(
        token=state.config.token,
        api_url=state.config.api_url,
        current_team=state.config.current_team,
    )


def _fail(error: VercelCliError) -> typer.Exit:
    """Print a known failure and return the exit to raise."""
    err_console.print(f"[red]Error:[/red] {error}", highlight=False)
    return typer.Exit(code=1)


def _ensure_positive(value: int | None, field_name: str) -> int | None:
    """Validate optional positive integer CLI values."""
    if value is None:
        return None
    try:
        return require_positive_int(value, field_name)
    except ValueError as exc:
        raise typer.BadParameter(str(exc)) from exc


__all__ = [name for name in globals() if not name.startswith("__")]
