"""
Field pipeline: rules that pull structured fields out of task text.
"""

from vault_tasks.pipeline.fields import TaskFields
from vault_tasks.pipeline.processor import (
    FieldPipeline,
    apply_rules,
    build_command_url,
    combine_notes,
    encode_task_fields,
    new_task_fields,
)
from vault_tasks.pipeline.rules import RULES, Rule

__all__ = [
    # Fields
    "TaskFields",
    # Rules
    "RULES",
    "Rule",
    # Processing
    "FieldPipeline",
    "apply_rules",
    "build_command_url",
    "combine_notes",
    "encode_task_fields",
    "new_task_fields",
]
