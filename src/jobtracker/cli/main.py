import asyncio
from pathlib import Path
from typing import NoReturn, Optional

import typer
from rich.console import Console
from rich.table import Table

from jobtracker import __version__
from jobtracker.config.loader import load_config, render_default_config, user_config_path
from jobtracker.config.schema import JobTrackerConfig
from jobtracker.errors import JobTrackerError

app = typer.Typer(
    name="jobtracker",
    help="Track job applications from the terminal.",
    invoke_without_command=True,
    rich_markup_mode="rich",
)
console = Console()


def _fail(exc: JobTrackerError) -> NoReturn:
    console.print(f"[red]Error:[/red] {exc.message}")
    raise typer.Exit(code=1)


def _load(config_path: Optional[Path]) -> JobTrackerConfig:
    try:
        return load_config(config_path)
    except JobTrackerError as exc:
        _fail(exc)


def _launch(config: JobTrackerConfig, database: Optional[Path]) -> None:
    from jobtracker.logging_setup import configure_logging
    from jobtracker.ui.app import run_app

    try:
        configure_logging(config)
        asyncio.run(run_app(config, database))
    except JobTrackerError as exc:
        _fail(exc)


@app.callback()
def main_callback(ctx: typer.Context) -> None:
    """Launch TUI by default when no command is specified."""
    if ctx.invoked_subcommand is None:
        _launch(_load(None), None)


@app.command("run")
def run(
    tick_rate: Optional[float] = typer.Option(
        None, "--tick-rate", "-t", help="Ticks per second", min=0.1
    ),
    frame_rate: Optional[float] = typer.Option(
        None, "--frame-rate", "-f", help="Frames per second", min=0.1
    ),
    config_path: Optional[Path] = typer.Option(
        None, "--config", "-c", help="Config file to merge last"
    ),
    database: Optional[Path] = typer.Option(None, "--db", help="SQLite database file"),
) -> None:
    """Start the terminal UI."""
    config = _load(config_path)
    if tick_rate is not None:
        config.terminal.tick_rate = tick_rate
    if frame_rate is not None:
        config.terminal.frame_rate = frame_rate
    _launch(config, database)


@app.command("list")
def list_applications(
    status: Optional[str] = typer.Option(None, "--status", "-s", help="Only this status"),
    config_path: Optional[Path] = typer.Option(None, "--config", "-c"),
    database: Optional[Path] = typer.Option(None, "--db", help="SQLite database file"),
) -> None:
    """Print stored applications as a table."""
    from jobtracker.models.job import ApplicationStatus
    from jobtracker.store import queries
    from jobtracker.store.database import Database

    config = _load(config_path)
    try:
        wanted = ApplicationStatus.parse(status) if status else None
    except ValueError as exc:
        console.print(f"[red]Error:[/red] {exc}")
        raise typer.Exit(code=1)

    try:
        with Database(database or config.general.resolved_database_path) as db:
            db.create()
            result = queries.fetch_applications(db, wanted)
    except JobTrackerError as exc:
        _fail(exc)

    table = Table(title="Job Applications")
    table.add_column("ID", justify="right")
    table.add_column("Company")
    table.add_column("Position")
    table.add_column("Location")
    table.add_column("Applied")
    table.add_column("Status")
    for job in result.applications:
        table.add_row(
            str(job.id),
            job.company_name,
            job.position,
            f"{job.location} ({job.location_type.value})",
            job.application_date,
            f"[{job.status.colour}]{job.status.value}[/{job.status.colour}]",
        )
    console.print(table)
    for failure in result.failures:
        console.print(f"[yellow]Skipped:[/yellow] {failure.message}")


@app.command("seed")
def seed(
    count: int = typer.Option(5, "--count", "-n", min=1, help="Records to insert"),
    config_path: Optional[Path] = typer.Option(None, "--config", "-c"),
    database: Optional[Path] = typer.Option(None, "--db", help="SQLite database file"),
) -> None:
    """Insert sample applications."""
    from jobtracker.models.job import JobApplication
    from jobtracker.store import queries
    from jobtracker.store.database import Database

    config = _load(config_path)
    try:
        with Database(database or config.general.resolved_database_path) as db:
            db.create()
            ids = [queries.add_application(db, JobApplication.sample(n)) for n in range(1, count + 1)]
    except JobTrackerError as exc:
        _fail(exc)
    console.print(f"[green]Inserted {len(ids)} sample applications[/green]")


@app.command("config")
def show_config(
    init: bool = typer.Option(False, "--init", help="Write a starter config file"),
    force: bool = typer.Option(False, "--force", help="Overwrite with --init"),
    config_path: Optional[Path] = typer.Option(None, "--config", "-c"),
) -> None:
    """Show resolved paths and key bindings."""
    from jobtracker.ui.core.keys import format_key_sequence

    if init:
        target = config_path or user_config_path()
        if target.exists() and not force:
            console.print(f"[yellow]{target} exists; use --force to overwrite[/yellow]")
            raise typer.Exit(code=1)
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(render_default_config(), encoding="utf-8")
        console.print(f"[green]Wrote {target}[/green]")
        return

    config = _load(config_path)
    try:
        bindings = config.key_bindings()
    except JobTrackerError as exc:
        _fail(exc)

    console.print(f"[bold]Config dir:[/bold] {config.general.config_dir}")
    console.print(f"[bold]Data dir:[/bold]   {config.general.data_dir}")
    console.print(f"[bold]Database:[/bold]   {config.general.resolved_database_path}")
    console.print(f"[bold]Log file:[/bold]   {config.log_file}")
    console.print(
        f"[bold]Terminal:[/bold]   tick {config.terminal.tick_rate}/s, "
        f"frame {config.terminal.frame_rate}/s, mouse {'on' if config.terminal.mouse else 'off'}"
    )

    table = Table(title="Key Bindings")
    table.add_column("Keys", style="cyan")
    table.add_column("Action")
    for keys, action in sorted(bindings.items(), key=lambda item: format_key_sequence(item[0])):
        table.add_row(format_key_sequence(keys), action.notation)
    console.print(table)


@app.command("version")
def version() -> None:
    """Print the jobtracker version."""
    console.print(f"jobtracker {__version__}")


def main() -> None:
    """Entry point for the CLI."""
    app()


if __name__ == "__main__":
    main()
