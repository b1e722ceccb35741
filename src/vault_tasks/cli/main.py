"""Main CLI entry point for vault-tasks."""  # pragma: no cover

from vault_tasks.cli.app import app  # pragma: no cover

# Register commands
from vault_tasks.cli.commands import config, extract  # noqa: F401  # pragma: no cover

if __name__ == "__main__":  # pragma: no cover
    # start the app
    app()
