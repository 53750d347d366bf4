"""Utility functions for CLI commands."""

import logging
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape

from wpmaint.config import Config, ConfigError
from wpmaint.core.maintenance import MaintenanceController

console = Console(soft_wrap=True)
err_console = Console(stderr=True, soft_wrap=True)


def setup_logging(verbose: bool = False) -> None:
    """Send log records to stderr through rich."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=err_console, show_path=False)],
        force=True,
    )


def print_success(message: str) -> None:
    console.print(f"[green]Success:[/green] {escape(message)}")


def print_warning(message: str) -> None:
    err_console.print(f"[yellow]Warning:[/yellow] {escape(message)}")


def print_error(message: str) -> None:
    err_console.print(f"[red]Error:[/red] {escape(message)}")


def get_controller(
    ctx: typer.Context, path: Optional[Path] = None
) -> MaintenanceController:
    """Build a controller for the selected installation.

    Args:
        ctx: Typer context, may carry the root --config option
        path: Installation directory override

    Returns:
        MaintenanceController instance

    Raises:
        typer.Exit: If configuration is invalid
    """
    config_file = (ctx.obj or {}).get("config_file")
    config = Config(path, config_file=config_file)

    try:
        settings = config.load()
    except (ConfigError, FileNotFoundError) as e:
        print_error(str(e))
        raise typer.Exit(1)

    if not settings.installation_dir.is_dir():
        print_error(f"Installation directory '{settings.installation_dir}' does not exist")
        raise typer.Exit(1)

    return MaintenanceController(settings)
