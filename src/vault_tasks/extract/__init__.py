"""
Checklist item extraction for markdown notes.
"""

from vault_tasks.extract.task_extractor import (
    SENTINEL,
    RawTask,
    TaskExtractor,
    extract_tasks,
    mark_complete,
)

__all__ = [
    "SENTINEL",
    "RawTask",
    "TaskExtractor",
    "extract_tasks",
    "mark_complete",
]
