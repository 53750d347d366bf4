"""Maintenance mode commands for wpmaint CLI."""

from pathlib import Path
from typing import Optional

import typer

from wpmaint.cli.utils import (
    console,
    get_controller,
    print_error,
    print_success,
    print_warning,
)
from wpmaint.core.exceptions import MaintenanceError

app = typer.Typer(help="Controls maintenance mode", invoke_without_command=True)

PATH_OPTION_HELP = "Installation directory (default: WPMAINT_PATH or current directory)"


@app.callback()
def callback(ctx: typer.Context):
    """Show help when no subcommand is provided."""
    if ctx.invoked_subcommand is None:
        console.print(ctx.get_help())
        raise typer.Exit(0)


@app.command()
def enable(
    ctx: typer.Context,
    duration: Optional[str] = typer.Option(
        None,
        "--duration",
        "-d",
        help="When maintenance mode ends: 'default', 'forever' (needs --force), "
        "seconds, or a date/time such as '2030-01-01 01:30:00' or '+2 hours'",
    ),
    force: bool = typer.Option(
        False,
        "--force",
        "-f",
        help="Overwrite the current duration or allow 'forever'",
    ),
    path: Optional[Path] = typer.Option(None, "--path", "-p", help=PATH_OPTION_HELP),
):
    """Enable maintenance mode."""
    controller = get_controller(ctx, path)

    try:
        result = controller.enable(duration, force=force)
    except MaintenanceError as e:
        print_error(str(e))
        raise typer.Exit(1)

    for warning in result.warnings:
        print_warning(warning)

    print_success(
        "Maintenance mode duration updated"
        if result.was_enabled
        else "Maintenance mode enabled"
    )


@app.command()
def disable(
    ctx: typer.Context,
    path: Optional[Path] = typer.Option(None, "--path", "-p", help=PATH_OPTION_HELP),
):
    """Disable maintenance mode."""
    controller = get_controller(ctx, path)

    try:
        result = controller.disable()
    except MaintenanceError as e:
        print_error(str(e))
        raise typer.Exit(1)

    for warning in result.warnings:
        print_warning(warning)

    if result.disabled:
        print_success("Maintenance mode disabled")


@app.command()
def status(
    ctx: typer.Context,
    path: Optional[Path] = typer.Option(None, "--path", "-p", help=PATH_OPTION_HELP),
):
    """Print 1 if maintenance mode is enabled, 0 otherwise."""
    controller = get_controller(ctx, path)

    try:
        active = controller.status()
    except MaintenanceError as e:
        print_error(str(e))
        raise typer.Exit(1)

    typer.echo(active)
