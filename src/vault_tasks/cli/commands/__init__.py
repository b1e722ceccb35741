"""CLI commands for vault-tasks."""

from . import config, extract

__all__ = ["config", "extract"]
