"""Deployment event commands."""

from __future__ import annotations

# mypy: ignore-errors
# ruff: noqa: B008,F403,F405,I001
from vercel_cli.commands.common import *


def _consume(state: CliState, deployment: str, options: ConsumeOptions) -> None:
    """Run the events consumer and map known failures to exit codes."""
    with _create_client(state) as client:
        consumer = EventStreamConsumer(client, console=console)
        try:
            consumer.consume(deployment, options)
        except VercelCliError as exc:
            raise _fail(exc) from exc


@app.command()
def logs(
    ctx: typer.Context,
    deployment: Annotated[str, typer.Argument(help="Deployment ID or URL.")],
    follow: Annotated[
        bool,
        typer.Option("--follow", "-f", help="Keep the connection open for new events."),
    ] = False,
    limit: Annotated[
        int | None,
        typer.Option("--limit", "-n", help="Maximum number of events to print."),
    ] = None,
    since: Annotated[
        int | None,
        typer.Option(help="Only events created after this epoch timestamp (ms)."),
    ] = None,
    until: Annotated[
        int | None,
        typer.Option(help="Only events created before this epoch timestamp (ms)."),
    ] = None,
    query: Annotated[
        str | None,
        typer.Option("--query", "-q", help="Full text filter."),
    ] = None,
    types: Annotated[
        list[str] | None,
        typer.Option("--type", help="Event type filter; may be repeated."),
    ] = None,
    instance_id: Annotated[
        str | None,
        typer.Option("--instance-id", help="Only events of one instance."),
    ] = None,
    quiet: Annotated[
        bool,
        typer.Option("--quiet", help="Do not erase partial output when reconnecting."),
    ] = False,
) -> None:
    """Print the events of a deployment."""
    state = _state(ctx)
    options = ConsumeOptions(
        on_event=EventPrinter(console),
        mode=LOGS_MODE,
        limit=_ensure_positive(limit, "limit"),
        quiet=quiet,
        query=EventQuery(
            query=query,
            types=tuple(types or ()),
            since=since,
            until=until,
            instance_id=instance_id,
            follow=follow,
        ),
    )
    _consume(state, deployment, options)


@app.command()
def wait(
    ctx: typer.Context,
    deployment: Annotated[str, typer.Argument(help="Deployment ID or URL.")],
) -> None:
    """Follow build output until the deployment is ready."""
    state = _state(ctx)
    options = ConsumeOptions(
        on_event=EventPrinter(console),
        mode=DEPLOY_MODE,
        query=EventQuery(follow=True),
    )
    _consume(state, deployment, options)
