"""Sport events CLI entry point."""

import asyncio
import logging
from collections.abc import Awaitable, Callable
from datetime import datetime
from pathlib import Path
from typing import TypeVar
from uuid import UUID

import click
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from sportevents.db import DEFAULT_DB_PATH, Database, SportEventRepository
from sportevents.domain import EventStatus, SportEvent, SportType

console = Console()

T = TypeVar("T")

STATUS_STYLES = {
    EventStatus.INACTIVE: "dim",
    EventStatus.ACTIVE: "green",
    EventStatus.FINISHED: "blue",
}


def run_with_db(db_path: Path | None, operation: Callable[[Database], Awaitable[T]]) -> T:
    """Open a database for one command, run ``operation`` on it and close it.

    Leaving the aiosqlite connection open keeps its worker thread alive,
    which makes the command hang on exit.
    """

    async def wrapped() -> T:
        async with Database(db_path or DEFAULT_DB_PATH) as db:
            return await operation(db)

    return asyncio.run(wrapped())


def setup_logging(verbose: bool = False) -> None:
    """Configure logging with rich handler."""
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(rich_tracebacks=True, console=console)],
    )


def _print_event(event: SportEvent) -> None:
    from sportevents.lifecycle import allowed_transitions

    style = STATUS_STYLES[event.status]
    console.print(f"[bold]{event.id}[/bold]")
    console.print(f"  Sport:   {event.sport_type.value}")
    console.print(f"  Status:  [{style}]{event.status.value}[/{style}]")
    console.print(f"  Start:   {event.start_time.isoformat()}")
    next_states = ", ".join(s.value for s in allowed_transitions(event.status)) or "-"
    console.print(f"  Next:    {next_states}")


@click.group()
@click.option("-v", "--verbose", is_flag=True, help="Enable verbose logging")
@click.option("--db-path", type=click.Path(), help="Database path")
@click.pass_context
def cli(ctx: click.Context, verbose: bool, db_path: str | None) -> None:
    """Sport events - lifecycle tracking with live status updates."""
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose
    ctx.obj["db_path"] = Path(db_path) if db_path else None
    setup_logging(verbose)


@cli.command()
@click.option("--host", default="127.0.0.1", help="Host to bind to")
@click.option("--port", default=8080, help="Port to bind to")
@click.option("--reload", is_flag=True, help="Enable auto-reload for development")
@click.pass_context
def serve(ctx: click.Context, host: str, port: int, reload: bool) -> None:
    """Start the sport events API server."""
    import uvicorn

    from sportevents.api.app import create_app

    console.print(f"[bold green]Starting sport events API server on {host}:{port}[/bold green]")

    if reload:
        # Reload needs an import string, so the default database is used
        uvicorn.run("sportevents.api.app:app", host=host, port=port, reload=True)
    else:
        uvicorn.run(create_app(db_path=ctx.obj["db_path"]), host=host, port=port)


@cli.command()
@click.pass_context
def init(ctx: click.Context) -> None:
    """Initialize the sport events database."""
    async def do_init(db: Database) -> None:
        console.print(f"[green]Database initialized at {db.db_path}[/green]")

    run_with_db(ctx.obj["db_path"], do_init)


@cli.group()
def event() -> None:
    """Manage sport events."""
    pass


@event.command("create")
@click.argument("sport", type=click.Choice([s.value for s in SportType], case_sensitive=False))
@click.argument("start_time", type=click.DateTime(["%Y-%m-%dT%H:%M:%S", "%Y-%m-%d %H:%M"]))
@click.option(
    "--status",
    "-s",
    type=click.Choice([s.value for s in EventStatus], case_sensitive=False),
    default=EventStatus.INACTIVE.value,
    help="Initial status",
)
@click.pass_context
def event_create(ctx: click.Context, sport: str, start_time: datetime, status: str) -> None:
    """Create a sport event starting at START_TIME (UTC)."""
    async def do_create(db: Database) -> SportEvent:
        repo = SportEventRepository(db)
        created = SportEvent(
            sport_type=SportType(sport.upper()),
            status=EventStatus(status.upper()),
            start_time=start_time,
        )
        return await repo.create(created)

    created = run_with_db(ctx.obj["db_path"], do_create)
    console.print(f"[green]Created event {created.id}[/green]")


@event.command("list")
@click.option(
    "--status",
    "-s",
    type=click.Choice([s.value for s in EventStatus], case_sensitive=False),
    help="Filter by status",
)
@click.option(
    "--sport",
    type=click.Choice([s.value for s in SportType], case_sensitive=False),
    help="Filter by sport",
)
@click.pass_context
def event_list(ctx: click.Context, status: str | None, sport: str | None) -> None:
    """List sport events."""
    async def do_list(db: Database) -> list[SportEvent]:
        repo = SportEventRepository(db)
        return await repo.list(
            status=EventStatus(status.upper()) if status else None,
            sport_type=SportType(sport.upper()) if sport else None,
        )

    events = run_with_db(ctx.obj["db_path"], do_list)
    if not events:
        console.print("[yellow]No events found[/yellow]")
        return

    table = Table(title="Sport Events")
    table.add_column("ID", style="cyan", no_wrap=True)
    table.add_column("Sport", no_wrap=True)
    table.add_column("Status", no_wrap=True)
    table.add_column("Start")

    for item in events:
        style = STATUS_STYLES[item.status]
        table.add_row(
            str(item.id),
            item.sport_type.value,
            f"[{style}]{item.status.value}[/{style}]",
            item.start_time.strftime("%Y-%m-%d %H:%M"),
        )

    console.print(table)


@event.command("show")
@click.argument("event_id", type=click.UUID)
@click.pass_context
def event_show(ctx: click.Context, event_id: UUID) -> None:
    """Show a single sport event."""
    async def do_show(db: Database) -> SportEvent | None:
        return await SportEventRepository(db).get(event_id)

    found = run_with_db(ctx.obj["db_path"], do_show)
    if found is None:
        console.print(f"[red]Event {event_id} not found[/red]")
        raise SystemExit(1)

    _print_event(found)


def main() -> None:
    """Main entry point."""
    cli()


if __name__ == "__main__":
    main()
