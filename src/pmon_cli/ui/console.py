"""Console utilities for pmon."""

from functools import lru_cache

from rich.console import Console
from rich.markup import escape


@lru_cache(maxsize=4)
def get_console(color: bool = True) -> Console:
    """Get a Rich Console instance for consistent output formatting."""
    return Console(highlight=False, no_color=not color)


def format_error(message: str) -> None:
    """Format and display an error message."""
    get_console().print(f"[bold red]Error:[/bold red] {escape(message)}")


def format_success(message: str) -> None:
    """Format and display a success message."""
    get_console().print(f"[bold green]Success:[/bold green] {escape(message)}")
