"""Extract command: send the tasks in a note to the task manager."""

from pathlib import Path
from typing import Annotated, Optional

import typer
from loguru import logger
from rich.console import Console
from rich.markup import escape

from vault_tasks.cli.app import app
from vault_tasks.config import ConfigManager, TaskRecognitionMode
from vault_tasks.errors import VaultTasksError
from vault_tasks.host import FileHost
from vault_tasks.service import TaskExportService

console = Console()


def parse_line_range(value: str) -> tuple[int, int]:
    """Parse 'A-B' (or a single line 'A') into a 1-based inclusive range."""
    first, sep, last = value.partition("-")
    try:
        start = int(first)
        end = int(last) if sep else start
    except ValueError:
        raise typer.BadParameter(f"Expected a line range like 3-10, got {value!r}")
    if start < 1 or end < start:
        raise typer.BadParameter(f"Invalid line range: {value}")
    return start, end


@app.command()
def extract(
    file: Annotated[
        Path,
        typer.Argument(help="Markdown note to extract tasks from", exists=True, dir_okay=False),
    ],
    vault: Annotated[
        Optional[Path],
        typer.Option(help="Vault directory. Defaults to the note's directory", file_okay=False),
    ] = None,
    lines: Annotated[
        Optional[str],
        typer.Option(help="Only extract from this line range (the selection), e.g. 3-10"),
    ] = None,
    mark_complete: Annotated[
        Optional[bool],
        typer.Option(
            "--mark-complete/--no-mark-complete",
            help="Check off extracted tasks in the note. Defaults to the mark_complete setting",
        ),
    ] = None,
    mode: Annotated[
        Optional[TaskRecognitionMode],
        typer.Option(help="Task recognition mode. Defaults to the recognition_mode setting"),
    ] = None,
    dry_run: bool = typer.Option(
        False, "--dry-run", help="Print the command URLs instead of opening them"
    ),
) -> None:
    """Extract all tasks in a note, or those in a line range, into the task manager."""
    try:
        config = ConfigManager().load_config()
        if mode is not None:
            config = config.model_copy(update={"recognition_mode": mode})

        host = FileHost(
            file,
            vault_dir=vault,
            vault_name=config.vault_name,
            selection=parse_line_range(lines) if lines else None,
            dry_run=dry_run,
        )
        result = TaskExportService(host, config).export(
            selection_only=lines is not None,
            complete=mark_complete,
        )
    except VaultTasksError as e:
        logger.error(f"Extract failed: {e}")
        console.print(f"[red]Error: {escape(str(e))}[/red]")
        raise typer.Exit(1)

    if not result.task_count:
        return

    console.print(f"[green]Sent {len(result.urls)} task(s)[/green]")
    if result.marked_complete:
        console.print(f"Marked tasks complete in {escape(str(file))}")
    if result.failures:
        for failure in result.failures:
            console.print(f"[red]✗ {escape(str(failure))}[/red]")
        raise typer.Exit(1)
