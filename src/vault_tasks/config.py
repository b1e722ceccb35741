"""Configuration management for vault-tasks."""

import json
import os
from enum import Enum
from pathlib import Path
from typing import Any, Literal, Optional

from loguru import logger
from pydantic import Field, TypeAdapter, ValidationError
from pydantic_settings import BaseSettings, SettingsConfigDict

from vault_tasks.errors import ConfigError

DATA_DIR_NAME = ".vault-tasks"
CONFIG_FILE_NAME = "config.json"

Environment = Literal["test", "dev", "user"]


class TaskRecognitionMode(str, Enum):
    """How checklist items are located in a document."""

    BLOCK = "block"  # task line plus nested bullet notes
    LINE = "line"  # every task line on its own, no notes


class BaseNotePosition(str, Enum):
    """Where the back-link to the source note goes in each task note."""

    APPEND = "append"
    PREPEND = "prepend"


class VaultTasksConfig(BaseSettings):
    """Settings for task extraction and export.

    Values come from the JSON config file and can be overridden with
    VAULT_TASKS_* environment variables.
    """

    env: Environment = Field(default="dev", description="Environment name")

    mark_complete: bool = Field(
        default=False,
        description="Mark extracted tasks as complete in the source note",
    )
    recognition_mode: TaskRecognitionMode = Field(
        default=TaskRecognitionMode.BLOCK,
        description="'block' absorbs nested bullets as notes, 'line' treats each task line alone",
    )

    command_scheme: str = Field(default="omnifocus", description="URL scheme of the task manager")
    command_action: str = Field(default="add", description="Action path of the add command")
    navigation_scheme: str = Field(
        default="obsidian", description="URL scheme used for links back to the vault"
    )
    vault_name: Optional[str] = Field(
        default=None,
        description="Vault name used in back-links. Defaults to the vault directory name",
    )

    base_note_position: BaseNotePosition = Field(
        default=BaseNotePosition.APPEND,
        description="Place the back-link after ('append') or before ('prepend') the task note",
    )
    linearize_note_links: bool = Field(
        default=True,
        description="Rewrite markdown links left in task notes as 'text <url>'",
    )

    log_level: str = "INFO"
    log_file: Optional[str] = Field(
        default="vault-tasks.log",
        description="Log file name inside the config directory. None disables file logging",
    )

    model_config = SettingsConfigDict(
        env_prefix="VAULT_TASKS_",
        extra="ignore",
    )

    @property
    def is_test_env(self) -> bool:
        return self.env == "test"


def get_config_dir() -> Path:
    """Return the directory holding config and log files.

    VAULT_TASKS_CONFIG_DIR overrides the default ~/.vault-tasks.
    """
    if config_dir := os.getenv("VAULT_TASKS_CONFIG_DIR"):
        return Path(config_dir)
    return Path.home() / DATA_DIR_NAME


class ConfigManager:
    """Loads and saves the persisted settings file."""

    def __init__(self, config_dir: Optional[Path] = None) -> None:
        self.config_dir = config_dir or get_config_dir()
        self.config_file = self.config_dir / CONFIG_FILE_NAME

    @property
    def config(self) -> VaultTasksConfig:
        return self.load_config()

    def load_config(self) -> VaultTasksConfig:
        """Load settings from file, letting environment variables win.

        Raises:
            ConfigError: If the file exists but is not valid JSON or holds invalid values
        """
        file_data = self._read_file_data()

        # pydantic-settings gives init kwargs priority over env vars, so drop
        # file values that the environment overrides
        overridden = {
            name
            for name in VaultTasksConfig.model_fields
            if f"VAULT_TASKS_{name.upper()}" in os.environ
        }
        init_data = {k: v for k, v in file_data.items() if k not in overridden}

        try:
            return VaultTasksConfig(**init_data)
        except ValidationError as e:
            raise ConfigError(f"Invalid settings in {self.config_file}: {e}") from e

    def save_config(self, config: VaultTasksConfig) -> None:
        """Write settings to the config file."""
        self.config_dir.mkdir(parents=True, exist_ok=True)
        data = config.model_dump(mode="json", exclude={"env"})
        self.config_file.write_text(json.dumps(data, indent=2), encoding="utf-8")
        logger.debug(f"Saved config to {self.config_file}")

    def set_value(self, key: str, value: Any) -> VaultTasksConfig:
        """Update one setting and persist it.

        Raises:
            ConfigError: If the key is unknown or the value is invalid
        """
        if key not in VaultTasksConfig.model_fields or key == "env":
            raise ConfigError(f"Unknown setting: {key}")

        # Only file values are written back; env overrides stay temporary
        adapter = TypeAdapter(VaultTasksConfig.model_fields[key].annotation)
        try:
            parsed = adapter.validate_python(value)
        except ValidationError as e:
            raise ConfigError(f"Invalid value for {key}: {value!r}") from e

        file_data = self._read_file_data()
        file_data.pop("env", None)
        file_data[key] = adapter.dump_python(parsed, mode="json")

        self.config_dir.mkdir(parents=True, exist_ok=True)
        self.config_file.write_text(json.dumps(file_data, indent=2), encoding="utf-8")
        logger.debug(f"Set {key} in {self.config_file}")
        return self.load_config()

    def _read_file_data(self) -> dict[str, Any]:
        """Read the raw settings stored in the config file.

        Raises:
            ConfigError: If the file is not valid JSON or does not hold an object
        """
        if not self.config_file.exists():
            return {}
        try:
            file_data = json.loads(self.config_file.read_text(encoding="utf-8"))
        except json.JSONDecodeError as e:
            raise ConfigError(f"Invalid config file {self.config_file}: {e}") from e
        if not isinstance(file_data, dict):
            raise ConfigError(f"Config file {self.config_file} must hold a JSON object")
        return file_data
