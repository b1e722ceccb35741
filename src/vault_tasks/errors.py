"""
Custom exceptions for task extraction and export.
"""


class VaultTasksError(Exception):
    """Base exception for all vault-tasks errors."""

    pass


class ConfigError(VaultTasksError):
    """Raised when the configuration file cannot be read or is invalid."""

    pass


class HostError(VaultTasksError):
    """Raised when the host application cannot supply or accept document data."""

    pass


class TaskEncodingError(VaultTasksError):
    """Raised when a task's fields cannot be encoded into a command URL."""

    def __init__(self, message: str, task_name: str | None = None):
        self.task_name = task_name
        location = ""
        if task_name is not None:
            location = f" (task: {task_name!r})"
        super().__init__(f"{message}{location}")
