"""
Host application interface.

The export service only talks to the editor through TaskHost, so it can run
inside a note-taking app plugin, against files on disk, or against a fake in
tests.
"""

from pathlib import Path
from typing import Optional, Protocol, runtime_checkable

import typer
from loguru import logger
from rich.console import Console
from rich.markup import escape

from vault_tasks.file_utils import read_text, write_file_atomic

console = Console(stderr=True)


@runtime_checkable
class TaskHost(Protocol):
    """Capabilities the host application provides."""

    def get_document_text(self) -> str: ...

    def get_selected_text(self) -> str: ...

    def replace_document_text(self, text: str) -> None: ...

    def replace_selected_text(self, text: str) -> None: ...

    def get_current_file_path(self) -> str: ...

    def get_collection_name(self) -> str: ...

    def notify_user(self, message: str) -> None: ...

    def open_external_command(self, url: str) -> None: ...


class FileHost:
    """A TaskHost backed by a markdown file inside a vault directory.

    The selection is an optional 1-based, inclusive line range.
    """

    def __init__(
        self,
        file_path: Path,
        vault_dir: Optional[Path] = None,
        vault_name: Optional[str] = None,
        selection: Optional[tuple[int, int]] = None,
        dry_run: bool = False,
    ) -> None:
        self.file_path = Path(file_path).resolve()
        self.vault_dir = Path(vault_dir).resolve() if vault_dir else self.file_path.parent
        self.vault_name = vault_name or self.vault_dir.name
        self.selection = selection
        self.dry_run = dry_run
        self.opened: list[str] = []

    def get_document_text(self) -> str:
        return read_text(self.file_path)

    def get_selected_text(self) -> str:
        lines = self.get_document_text().splitlines(keepends=True)
        start, end = self._selection_bounds(len(lines))
        return "".join(lines[start:end])

    def replace_document_text(self, text: str) -> None:
        write_file_atomic(self.file_path, text)
        logger.info(f"Updated {self.file_path}")

    def replace_selected_text(self, text: str) -> None:
        lines = self.get_document_text().splitlines(keepends=True)
        start, end = self._selection_bounds(len(lines))
        self.replace_document_text("".join(lines[:start]) + text + "".join(lines[end:]))

    def get_current_file_path(self) -> str:
        try:
            return self.file_path.relative_to(self.vault_dir).as_posix()
        except ValueError:
            return self.file_path.name

    def get_collection_name(self) -> str:
        return self.vault_name

    def notify_user(self, message: str) -> None:
        console.print(f"[yellow]{escape(message)}[/yellow]")

    def open_external_command(self, url: str) -> None:
        self.opened.append(url)
        if self.dry_run:
            typer.echo(url)
            return
        typer.launch(url)

    def _selection_bounds(self, line_count: int) -> tuple[int, int]:
        """Convert the 1-based inclusive selection into slice bounds."""
        if self.selection is None:
            return 0, line_count
        first, last = self.selection
        if first < 1 or last < first:
            raise ValueError(f"Invalid line range: {first}-{last}")
        return first - 1, min(last, line_count)
