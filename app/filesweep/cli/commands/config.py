"""Defaults file commands.

Provides commands to locate, display and create the settings file
holding default sweep options.
"""

from pathlib import Path
from typing import Annotated

import typer
from rich.table import Table

from filesweep.core.paths import get_settings_path
from filesweep.core.settings import Settings, SettingsError, load_settings, save_settings
from filesweep.utils.formatting import console, print_error, print_info, print_success

app = typer.Typer(
    help="Manage default sweep options.",
    no_args_is_help=True,
)


def _settings_path(ctx: typer.Context) -> Path:
    """Return the --config path given to the main command, or the default."""
    obj = ctx.obj or {}
    return obj.get("config_path") or get_settings_path()


@app.command()
def path(ctx: typer.Context) -> None:
    """Print the location of the settings file."""
    typer.echo(str(_settings_path(ctx)))


@app.command()
def show(ctx: typer.Context) -> None:
    """Show the effective default sweep options."""
    settings_path = _settings_path(ctx)
    try:
        settings = load_settings(settings_path)
    except SettingsError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e

    table = Table(
        title="Sweep Defaults",
        show_header=True,
        header_style="bold_header",
        border_style="border",
    )
    table.add_column("Option", no_wrap=True)
    table.add_column("Value")

    defaults = settings.sweep
    table.add_row("root", defaults.root)
    table.add_row("ext", defaults.ext or "[muted](any)[/muted]")
    table.add_row("size", str(defaults.size))
    table.add_row("log", defaults.log or "[muted](stdout)[/muted]")
    console.print(table)

    if not settings_path.exists():
        print_info(f"No settings file at {settings_path}; showing built-in defaults.")


@app.command()
def init(
    ctx: typer.Context,
    force: Annotated[
        bool,
        typer.Option("--force", "-f", help="Overwrite an existing settings file."),
    ] = False,
) -> None:
    """Write a settings file with the built-in defaults."""
    settings_path = _settings_path(ctx)
    if settings_path.exists() and not force:
        print_error(f"Settings file already exists: {settings_path}")
        print_info("Use --force to overwrite it.")
        raise typer.Exit(code=1)

    try:
        saved = save_settings(Settings(), settings_path)
    except SettingsError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e

    print_success(f"Settings written to {saved}")
