"""Root callback shared by every command."""

from __future__ import annotations

# mypy: ignore-errors
# ruff: noqa: B008,F403,F405,I001
from vercel_cli.commands.common import *


@app.callback()
def main(
    ctx: typer.Context,
    version: Annotated[
        bool,
        typer.Option(
            "--version",
            help="Show vc version and exit.",
            is_eager=True,
            callback=_version_callback,
        ),
    ] = False,
    debug: Annotated[
        bool,
        typer.Option("--debug", "-d", help="Print debug logging to stderr."),
    ] = False,
    token: Annotated[
        str | None,
        typer.Option("--token", "-t", help="Access token (default: VERCEL_TOKEN or auth.json)."),
    ] = None,
    scope: Annotated[
        str | None,
        typer.Option("--scope", "-S", help="Team ID to run the command under."),
    ] = None,
    api_url: Annotated[
        str | None,
        typer.Option("--api-url", help="Override the API base URL."),
    ] = None,
    cwd: Annotated[
        Path | None,
        typer.Option("--cwd", help="Directory to run the command in."),
    ] = None,
    log_file: Annotated[
        Path | None,
        typer.Option("--log-file", help="Log file path (default: <global dir>/vc.log)."),
    ] = None,
    log_json: Annotated[
        bool,
        typer.Option("--log-json", help="Write the log file as JSON lines."),
    ] = False,
) -> None:
    """Link repositories to projects and follow deployment events."""
    try:
        config = CliConfig.load(token=token, api_url=api_url, scope=scope)
    except ValueError as exc:
        raise typer.BadParameter(str(exc)) from exc
    configure_logging(
        log_file=log_file or config.global_dir / "vc.log",
        verbose=debug,
        echo=debug,
        json_format=log_json,
    )
    ctx.obj = CliState(
        config=config,
        cwd=(cwd or Path.cwd()).expanduser().resolve(),
        debug=debug,
    )
