"""Main entry point for pmon."""

import sys
from pathlib import Path
from typing import Optional

import typer

from pmon_cli import __version__
from pmon_cli.commands import config, timer
from pmon_cli.services.config_service import get_config_service
from pmon_cli.ui.console import get_console

app = typer.Typer(
    name="pmon",
    help=(
        "Pomodoro interval timer: work, short break, long break, repeat.\n\n"
        "Press 'p' (or send SIGUSR1) to pause/resume; Ctrl-C or 'q' prints "
        "the time worked and spent on break, then exits."
    ),
)

app.add_typer(config.app, name="config", help="Manage persisted timer defaults")


@app.callback(invoke_without_command=True)
def main(
    ctx: typer.Context,
    cycles: Optional[int] = typer.Option(
        None, "--cycles", "-c", min=1, help="Work sessions before a long break"
    ),
    work: Optional[int] = typer.Option(
        None, "--work", "-w", min=1, help="Minutes per work session"
    ),
    short_break: Optional[int] = typer.Option(
        None, "--short-break", "-s", min=1, help="Minutes per short break"
    ),
    long_break: Optional[int] = typer.Option(
        None, "--long-break", "-l", min=1, help="Minutes per long break"
    ),
    output: Optional[Path] = typer.Option(
        None,
        "--output",
        "-o",
        dir_okay=False,
        help="Write progress to this file instead of the terminal",
    ),
    keys: Optional[bool] = typer.Option(
        None,
        "--keys/--no-keys",
        help="Enable 'p' to pause and 'q' to quit (default: on for a terminal)",
    ),
) -> None:
    """Start the timer; runs until interrupted."""
    if ctx.invoked_subcommand is not None:
        return

    app_config = get_config_service().config
    timer.run_timer(
        app_config.timer,
        cycles=cycles,
        work=work,
        short_break=short_break,
        long_break=long_break,
        output=output,
        keys=sys.stdin.isatty() if keys is None else keys,
        color=app_config.output.color,
    )


@app.command()
def version() -> None:
    """Show version information."""
    get_console().print(f"[bold]pmon[/bold] version [cyan]{__version__}[/cyan]")


def run() -> None:
    """Console-script entry point."""
    app()


if __name__ == "__main__":
    run()
