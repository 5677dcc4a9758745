"""Settings commands.

Provides commands to show the effective list settings and to write a
settings file with the default values.
"""

from pathlib import Path
from typing import Annotated

import typer
from rich.table import Table

from filelist.cli.types import require_settings
from filelist.core.paths import ensure_config_dir, get_settings_path
from filelist.core.settings import ListSettings, SettingsError, save_settings
from filelist.utils.formatting import console, print_error, print_info, print_success

app = typer.Typer(
    help="Show and initialize list settings.",
    invoke_without_command=True,
    no_args_is_help=True,
)


@app.command()
def show(
    config_path: Annotated[
        Path | None,
        typer.Option("--config", help="Settings file (default: ~/.config/filelist/config.toml)."),
    ] = None,
) -> None:
    """Show the effective list settings."""
    path = config_path or get_settings_path()
    settings = require_settings(path)

    table = Table(
        title="List Settings",
        show_header=True,
        header_style="bold_header",
        border_style="border",
    )
    table.add_column("Setting", style="bold")
    table.add_column("Value", justify="right")
    table.add_column("Description", style="muted")

    for name, field in ListSettings.model_fields.items():
        table.add_row(name, str(getattr(settings, name)), field.description or "")

    console.print(table)
    if not path.exists():
        print_info(f"No settings file at {path}; showing defaults.")


@app.command()
def init(
    force: Annotated[
        bool,
        typer.Option("--force", help="Overwrite an existing settings file."),
    ] = False,
    config_path: Annotated[
        Path | None,
        typer.Option("--config", help="Settings file (default: ~/.config/filelist/config.toml)."),
    ] = None,
) -> None:
    """Write a settings file with the default values."""
    path = config_path or get_settings_path()
    if path.exists() and not force:
        print_info(f"Settings file already exists: {path} (use --force to overwrite)")
        raise typer.Exit(code=0)

    try:
        if config_path is None:
            ensure_config_dir()
        saved = save_settings(ListSettings(), path)
    except (RuntimeError, SettingsError) as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e

    print_success(f"Settings written to {saved}")
