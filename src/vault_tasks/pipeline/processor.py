"""
Field pipeline: turns a raw task into a command URL for the task manager.
"""

import re
from functools import reduce
from typing import Optional, Sequence

from loguru import logger

from vault_tasks.config import BaseNotePosition, VaultTasksConfig
from vault_tasks.errors import TaskEncodingError
from vault_tasks.extract.task_extractor import RawTask
from vault_tasks.links import LinkBuilder, encode_uri_component
from vault_tasks.pipeline.fields import TaskFields
from vault_tasks.pipeline.rules import MARKDOWN_LINK_PATTERN, RULES, Rule

_WHITESPACE_RUN = re.compile(r"[ \t]{2,}")


def new_task_fields(raw: str) -> TaskFields:
    """Create the initial fields for a serialized raw task."""
    task = RawTask.parse(raw)
    note = f"{task.note.rstrip()}\n\n" if task.note else ""
    return TaskFields(name=task.name, note=note)


def apply_rules(
    fields: TaskFields, link_builder: LinkBuilder, rules: Sequence[Rule] = RULES
) -> TaskFields:
    """Fold the rules over the fields, in order."""
    return reduce(lambda acc, rule: rule.apply(acc, link_builder), rules, fields)


def combine_notes(note: str, base_note: str, position: BaseNotePosition) -> str:
    """Attach the base note (back-link to the source) to the task note."""
    note = note.strip()
    if not note:
        return base_note
    if position == BaseNotePosition.PREPEND:
        return f"{base_note}\n{note}"
    return f"{note}\n\n{base_note}"


def encode_task_fields(fields: TaskFields) -> str:
    """Encode fields as a query string, keeping every field even when empty.

    Raises:
        TaskEncodingError: If a value cannot be percent-encoded
    """
    try:
        return "&".join(f"{key}={encode_uri_component(value)}" for key, value in fields.items())
    except UnicodeEncodeError as e:
        raise TaskEncodingError(f"Cannot encode task fields: {e.reason}", fields.name) from e


class FieldPipeline:
    """Converts raw tasks into command URLs.

    The wiki link builder is injected so the pipeline does not need to know
    anything about the host application.
    """

    def __init__(
        self,
        link_builder: LinkBuilder,
        command_scheme: str = "omnifocus",
        command_action: str = "add",
        base_note_position: BaseNotePosition = BaseNotePosition.APPEND,
        linearize_note_links: bool = True,
        rules: Sequence[Rule] = RULES,
    ) -> None:
        self.link_builder = link_builder
        self.command_scheme = command_scheme
        self.command_action = command_action
        self.base_note_position = base_note_position
        self.linearize_note_links = linearize_note_links
        self.rules = tuple(rules)

    @classmethod
    def from_config(cls, config: VaultTasksConfig, link_builder: LinkBuilder) -> "FieldPipeline":
        return cls(
            link_builder=link_builder,
            command_scheme=config.command_scheme,
            command_action=config.command_action,
            base_note_position=config.base_note_position,
            linearize_note_links=config.linearize_note_links,
        )

    @property
    def command_prefix(self) -> str:
        return f"{self.command_scheme}:///{self.command_action}?"

    def build_fields(self, raw: str, base_note: str) -> TaskFields:
        """Run every rule over a raw task and finish its name and note."""
        fields = apply_rules(new_task_fields(raw), self.link_builder, self.rules)

        fields.name = _WHITESPACE_RUN.sub(" ", fields.name).strip()
        note = fields.note
        if self.linearize_note_links:
            note = MARKDOWN_LINK_PATTERN.sub(r"\1 <\2>", note)
        fields.note = combine_notes(note, base_note, self.base_note_position)
        return fields

    def to_url(self, fields: TaskFields) -> str:
        """Serialize fields into a command URL."""
        return self.command_prefix + encode_task_fields(fields)

    def process(self, raw: str, base_note: str) -> str:
        """Convert one serialized raw task into a command URL.

        Raises:
            TaskEncodingError: If the task cannot be percent-encoded, whether in a
                wiki link while the rules run or in the final query string
        """
        try:
            url = self.to_url(self.build_fields(raw, base_note))
        except UnicodeEncodeError as e:
            task_name = RawTask.parse(raw).name
            raise TaskEncodingError(f"Cannot encode task: {e.reason}", task_name) from e
        logger.debug(f"Built command URL: {url}")
        return url


def build_command_url(
    raw: str,
    base_note: str,
    link_builder: LinkBuilder,
    config: Optional[VaultTasksConfig] = None,
) -> str:
    """Convert one serialized raw task into a command URL.

    Settings default to a fresh VaultTasksConfig (file values are not read).
    """
    pipeline = FieldPipeline.from_config(config or VaultTasksConfig(), link_builder)
    return pipeline.process(raw, base_note)
