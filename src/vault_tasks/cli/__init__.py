"""CLI tools for vault-tasks."""
