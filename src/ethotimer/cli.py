"""Command-line interface for the activity timers."""

from __future__ import annotations

import logging
from datetime import datetime
from pathlib import Path
from typing import List, Optional

import typer

from .config import TimerSettings
from .export import export_filename
from .paths import get_export_dir

app = typer.Typer(help="Mutually-exclusive activity timers for ethogram data.")


@app.callback(no_args_is_help=True)
def main(verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable verbose logs.")) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s %(message)s",
    )


@app.command()
def run(
    activities: int = typer.Option(
        3, "--activities", "-n", min=1, max=9, help="Number of activity slots."
    ),
    labels: Optional[List[str]] = typer.Option(
        None, "--label", "-l", help="Name for the next activity slot (repeatable)."
    ),
    refresh_ms: float = typer.Option(
        100.0, "--refresh", min=10.0, help="Display refresh period in milliseconds."
    ),
    export_dir: Optional[Path] = typer.Option(
        None,
        "--export-dir",
        path_type=Path,
        file_okay=False,
        help="Directory for downloaded .csv files.",
    ),
) -> None:
    """Run the timers interactively in this terminal."""
    from .coordinator import TimerSet
    from .terminal import TerminalSession

    settings = TimerSettings.from_options(
        activities=activities,
        labels=labels,
        refresh_ms=refresh_ms,
        export_dir=export_dir,
    )
    session = TerminalSession(
        TimerSet(settings), export_dir=lambda: _resolve_export_dir(settings)
    )
    session.run()


@app.command()
def web(
    host: str = typer.Option("127.0.0.1", "--host", help="Interface to bind the API."),
    port: int = typer.Option(
        8765, "--port", min=1, max=65535, help="TCP port for the API."
    ),
    activities: int = typer.Option(
        3, "--activities", "-n", min=1, max=9, help="Number of activity slots."
    ),
    labels: Optional[List[str]] = typer.Option(
        None, "--label", "-l", help="Name for the next activity slot (repeatable)."
    ),
    open_browser: bool = typer.Option(
        True,
        "--open-browser/--no-open-browser",
        help="Automatically open the API docs in your default browser.",
    ),
) -> None:
    """Serve the timers over a local HTTP API."""
    from .server_runner import run_server

    settings = TimerSettings.from_options(activities=activities, labels=labels)
    run_server(host=host, port=port, settings=settings, open_browser=open_browser)


@app.command("export-name")
def export_name() -> None:
    """Print the filename a download started now would use."""
    typer.echo(export_filename(datetime.now()))


def _resolve_export_dir(settings: TimerSettings) -> Path:
    if settings.export_dir is None:
        return get_export_dir()
    settings.export_dir.mkdir(parents=True, exist_ok=True)
    return settings.export_dir
