from typing import Optional

import typer

from vault_tasks.config import ConfigManager
from vault_tasks.errors import ConfigError
from vault_tasks.utils import setup_logging


def version_callback(value: bool) -> None:
    """Show version and exit."""
    if value:  # pragma: no cover
        import vault_tasks

        typer.echo(f"vault-tasks version: {vault_tasks.__version__}")
        raise typer.Exit()


app = typer.Typer(name="vault-tasks")


@app.callback()
def app_callback(
    ctx: typer.Context,
    version: Optional[bool] = typer.Option(
        None,
        "--version",
        "-v",
        help="Show version and exit.",
        callback=version_callback,
        is_eager=True,
    ),
) -> None:
    """vault-tasks - send checklist items from your notes to your task manager."""

    # Set up logging for every command unless --version was specified
    if not version and ctx.invoked_subcommand is not None:
        config_manager = ConfigManager()
        try:
            config = config_manager.load_config()
        except ConfigError:
            # Let the command report the bad config file
            return
        setup_logging(
            env=config.env,
            home_dir=config_manager.config_dir,
            log_file=config.log_file,
            log_level=config.log_level,
            console=False,
        )
