"""Main CLI entry point for wpmaint."""

from pathlib import Path
from typing import Optional

import typer

from wpmaint.cli.commands import maintenance
from wpmaint.cli.utils import setup_logging

app = typer.Typer(
    name="wpmaint",
    help="wpmaint - maintenance mode control for WordPress installations",
    add_completion=False,
    invoke_without_command=True,
)


@app.callback()
def main(
    ctx: typer.Context,
    verbose: bool = typer.Option(
        False, "--verbose", "-v", help="Show debug logging on stderr"
    ),
    config_file: Optional[Path] = typer.Option(
        None, "--config", "-c", help="Settings file (default: <path>/wpmaint.toml)"
    ),
):
    """
    wpmaint - maintenance mode control for WordPress installations
    """
    setup_logging(verbose)
    ctx.obj = {"config_file": config_file}

    if ctx.invoked_subcommand is None:
        # No subcommand was invoked, show help
        print(ctx.get_help())
        raise typer.Exit(0)


app.add_typer(maintenance.app, name="maintenance", help="Maintenance mode commands")


@app.command()
def version():
    """Show wpmaint version."""
    from wpmaint import __version__

    typer.echo(f"wpmaint version {__version__}")


if __name__ == "__main__":
    app()
