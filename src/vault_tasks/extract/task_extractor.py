"""
Task extractor for checklist items.

Finds unchecked checklist items in markdown text and turns each one into a
RawTask, optionally absorbing nested bullets below it as the task note.
"""

import re
from dataclasses import dataclass, field
from typing import Iterator

from loguru import logger

from vault_tasks.config import TaskRecognitionMode

# Joins a task name and its note so both travel through a single string.
SENTINEL = chr(31)


@dataclass(frozen=True)
class RawTask:
    """A checklist item as found in the document, before field extraction."""

    name: str
    note: str = ""
    line_number: int = field(default=0, compare=False)

    def serialize(self) -> str:
        """Join name and note with the sentinel separator."""
        if self.note:
            return f"{self.name}{SENTINEL}{self.note}"
        return self.name

    @classmethod
    def parse(cls, raw: str) -> "RawTask":
        """Split a serialized task back into name and note."""
        name, _, note = raw.partition(SENTINEL)
        return cls(name=name, note=note)


class TaskExtractor:
    """Extracts unchecked checklist items from markdown content."""

    # A task line: indentation, bullet, "[ ]" and some text. In block mode it
    # is followed by any number of lines indented deeper than the task that
    # hold a plain bullet (not a checkbox); those lines become the note.
    TASK_LINE = (
        r"^(?P<indent>[ \t]*)(?P<marker>[-*][ \t]+)\[ \](?P<gap>[ \t]+)(?P<text>\S.*)"
    )
    NOTE_LINES = r"(?P<notes>(?:\n(?P=indent)[ \t]+[-*][ \t]+(?!\[.\])\S.*)*)"

    BLOCK_PATTERN = re.compile(TASK_LINE + NOTE_LINES, re.MULTILINE)
    LINE_PATTERN = re.compile(TASK_LINE, re.MULTILINE)

    BLOCK_COMPLETE_TEMPLATE = r"\g<indent>\g<marker>[x]\g<gap>\g<text>\g<notes>"
    LINE_COMPLETE_TEMPLATE = r"\g<indent>\g<marker>[x]\g<gap>\g<text>"

    @classmethod
    def pattern_for(cls, mode: TaskRecognitionMode) -> re.Pattern[str]:
        if mode == TaskRecognitionMode.LINE:
            return cls.LINE_PATTERN
        return cls.BLOCK_PATTERN

    @classmethod
    def extract_tasks(
        cls, content: str, mode: TaskRecognitionMode = TaskRecognitionMode.BLOCK
    ) -> Iterator[RawTask]:
        """
        Lazily extract unchecked tasks from markdown content.

        Args:
            content: Markdown content (a whole note or a selection)
            mode: Recognition mode, block (with notes) or line

        Yields:
            RawTask objects in document order
        """
        line_number, last_pos = 1, 0
        for match in cls.pattern_for(mode).finditer(content):
            name = match.group("text").strip()
            note = ""
            if mode == TaskRecognitionMode.BLOCK and match.group("notes"):
                note = cls._dedent_notes(match.group("notes"), match.group("indent"))

            line_number += content.count("\n", last_pos, match.start())
            last_pos = match.start()
            logger.debug(f"Found task on line {line_number}: {name!r}")
            yield RawTask(name=name, note=note, line_number=line_number)

    @classmethod
    def mark_complete(
        cls, content: str, mode: TaskRecognitionMode = TaskRecognitionMode.BLOCK
    ) -> str:
        """
        Check off every task the extractor would find.

        Indentation, bullet style, spacing and note blocks are preserved.
        Checked items never match, so running this twice changes nothing.
        """
        template = (
            cls.LINE_COMPLETE_TEMPLATE
            if mode == TaskRecognitionMode.LINE
            else cls.BLOCK_COMPLETE_TEMPLATE
        )
        return cls.pattern_for(mode).sub(template, content)

    @staticmethod
    def _dedent_notes(notes: str, indent: str) -> str:
        """Strip the task indentation plus one whitespace char from each note line."""
        prefix = re.compile("^" + re.escape(indent) + r"[ \t]", re.MULTILINE)
        return prefix.sub("", notes).strip()


def extract_tasks(
    content: str, mode: TaskRecognitionMode = TaskRecognitionMode.BLOCK
) -> Iterator[RawTask]:
    """Extract unchecked tasks from markdown content."""
    return TaskExtractor.extract_tasks(content, mode)


def mark_complete(content: str, mode: TaskRecognitionMode = TaskRecognitionMode.BLOCK) -> str:
    """Mark every unchecked task in content as complete."""
    return TaskExtractor.mark_complete(content, mode)
