"""Common test fixtures."""

from pathlib import Path
from typing import Optional

import pytest

from vault_tasks.config import VaultTasksConfig
from vault_tasks.links import make_link_builder


class RecordingHost:
    """In-memory TaskHost that records every call the service makes."""

    def __init__(
        self,
        text: str,
        selected_text: Optional[str] = None,
        file_path: str = "Daily/2025-03-01.md",
        collection_name: str = "Work",
    ):
        self.text = text
        self.selected_text = selected_text if selected_text is not None else ""
        self.file_path = file_path
        self.collection_name = collection_name
        self.notifications: list[str] = []
        self.opened: list[str] = []
        self.replaced_document: Optional[str] = None
        self.replaced_selection: Optional[str] = None

    def get_document_text(self) -> str:
        return self.text

    def get_selected_text(self) -> str:
        return self.selected_text

    def replace_document_text(self, text: str) -> None:
        self.replaced_document = text

    def replace_selected_text(self, text: str) -> None:
        self.replaced_selection = text

    def get_current_file_path(self) -> str:
        return self.file_path

    def get_collection_name(self) -> str:
        return self.collection_name

    def notify_user(self, message: str) -> None:
        self.notifications.append(message)

    def open_external_command(self, url: str) -> None:
        self.opened.append(url)


@pytest.fixture
def config_dir(tmp_path, monkeypatch) -> Path:
    """Point the config manager at an empty temporary directory."""
    path = tmp_path / "config"
    monkeypatch.setenv("VAULT_TASKS_CONFIG_DIR", str(path))
    monkeypatch.setenv("VAULT_TASKS_ENV", "test")
    return path


@pytest.fixture
def app_config(config_dir) -> VaultTasksConfig:
    return VaultTasksConfig(env="test")


@pytest.fixture
def link_builder():
    return make_link_builder("obsidian", "Work")


@pytest.fixture
def base_note() -> str:
    return "obsidian://open?vault=Work&file=Daily%2F2025-03-01.md\n"


@pytest.fixture
def markdown_with_tasks() -> str:
    """A daily note with tasks, notes, checked items and other bullets."""
    return """# Today

Some intro text.

- [ ] Call the plumber // tomorrow
\t- ask about the kitchen tap
\t- number is in [contacts](https://example.com/contacts)
- [x] Already done
- plain bullet
* [ ] Review [[Budget 2025|budget]] #finance #review
- [ ] Book flights [trip:: Lisbon] // 2025-04-10

  - [ ] Indented task
"""
