"""Config commands: show and change the persisted settings."""

from typing import Annotated

import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from vault_tasks.cli.app import app
from vault_tasks.config import ConfigManager
from vault_tasks.errors import ConfigError

console = Console()

config_app = typer.Typer(help="Show or change settings")
app.add_typer(config_app, name="config")

# Values accepted on the command line for clearing optional settings
NULL_VALUES = {"none", "null", ""}


@config_app.command()
def show() -> None:
    """Show the current settings."""
    config_manager = ConfigManager()
    try:
        config = config_manager.load_config()
    except ConfigError as e:
        console.print(f"[red]Error: {escape(str(e))}[/red]")
        raise typer.Exit(1)

    table = Table(title=f"Settings ({config_manager.config_file})")
    table.add_column("Setting", style="cyan")
    table.add_column("Value")

    for key, value in config.model_dump(mode="json").items():
        table.add_row(key, "" if value is None else str(value))

    console.print(table)


@config_app.command("set")
def set_value(
    key: Annotated[str, typer.Argument(help="Setting name, e.g. mark_complete")],
    value: Annotated[str, typer.Argument(help="New value")],
) -> None:
    """Change one setting and save it."""
    config_manager = ConfigManager()
    new_value = None if value.lower() in NULL_VALUES else value
    try:
        config = config_manager.set_value(key, new_value)
    except ConfigError as e:
        console.print(f"[red]Error: {escape(str(e))}[/red]")
        raise typer.Exit(1)

    console.print(f"[green]✓ {key} = {config.model_dump(mode='json')[key]}[/green]")
