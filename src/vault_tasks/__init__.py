"""vault-tasks - send checklist items from markdown notes to a task manager."""

__version__ = "0.3.0"
