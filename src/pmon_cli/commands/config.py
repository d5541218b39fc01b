"""Configuration management commands."""

from typing import Optional

import typer
from pydantic import ValidationError
from rich.table import Table

from pmon_cli.services.config_service import get_config_service
from pmon_cli.ui.console import format_success, get_console
from pmon_cli.utils.exit_codes import ERROR_INVALID_ARGS

from .decorators import AppError, command_wrapper

app = typer.Typer(help="Manage persisted timer defaults")


def _parse_value(value: str) -> str | int | bool:
    """Convert a command-line string to the closest config type."""
    if value.lower() in ("true", "false"):
        return value.lower() == "true"
    if value.lstrip("-").isdigit():
        return int(value)
    return value


@app.command("show")
@command_wrapper
def show_config() -> None:
    """Show the current configuration."""
    config = get_config_service().config
    table = Table(show_header=True)
    table.add_column("Key", style="cyan")
    table.add_column("Value")
    for section, values in config.model_dump().items():
        for name, value in values.items():
            table.add_row(f"{section}.{name}", str(value))
    get_console().print(table)


@app.command("get")
@command_wrapper
def get_config(
    key: str = typer.Argument(..., help="Configuration key (e.g., timer.work_minutes)"),
) -> None:
    """Get a configuration value."""
    try:
        value = get_config_service().get(key)
    except KeyError as e:
        raise AppError(
            f"Configuration key '{key}' not found", ERROR_INVALID_ARGS
        ) from e
    get_console().print(value)


@app.command("set")
@command_wrapper
def set_config(
    key: str = typer.Argument(..., help="Configuration key (e.g., timer.work_minutes)"),
    value: str = typer.Argument(..., help="Configuration value"),
) -> None:
    """Set a configuration value."""
    parsed = _parse_value(value)
    try:
        get_config_service().set(key, parsed)
    except KeyError as e:
        raise AppError(
            f"Configuration key '{key}' not found", ERROR_INVALID_ARGS
        ) from e
    except ValidationError as e:
        errors = "; ".join(err["msg"] for err in e.errors())
        raise AppError(
            f"Invalid value for '{key}': {errors}", ERROR_INVALID_ARGS
        ) from e
    format_success(f"Configuration '{key}' set to '{parsed}'")


@app.command("reset")
@command_wrapper
def reset_config(
    key: Optional[str] = typer.Argument(None, help="Configuration key to reset"),
    yes: bool = typer.Option(False, "--yes", "-y", help="Skip confirmation"),
) -> None:
    """Reset configuration to defaults."""
    if not yes:
        msg = "entire configuration" if not key else f"'{key}'"
        if not typer.confirm(f"Are you sure you want to reset {msg}?"):
            get_console().print("[yellow]Cancelled[/yellow]")
            raise typer.Exit(0)

    try:
        get_config_service().reset(key)
    except KeyError as e:
        raise AppError(
            f"Configuration key '{key}' not found", ERROR_INVALID_ARGS
        ) from e

    if key:
        format_success(f"Configuration '{key}' reset to default")
    else:
        format_success("Configuration reset to defaults")
