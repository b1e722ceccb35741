"""Structured task fields built up by the extraction rules."""

from dataclasses import dataclass, field
from typing import Optional

DECLARED_FIELDS = ("name", "note", "due")
CONTEXT_FIELD = "context"


@dataclass
class TaskFields:
    """Fields of one task on its way to a command URL.

    `metadata` keeps inline fields in first-seen order; `tags` become the
    comma-joined context field.
    """

    name: str
    note: str = ""
    due: str = ""
    metadata: dict[str, str] = field(default_factory=dict)
    tags: list[str] = field(default_factory=list)

    @property
    def context(self) -> Optional[str]:
        if not self.tags:
            return None
        return ",".join(self.tags)

    def set_field(self, key: str, value: str) -> None:
        """Set a declared or dynamic field. A later value for the same key wins."""
        if key in DECLARED_FIELDS:
            setattr(self, key, value)
        elif key == CONTEXT_FIELD:
            self.tags = [value]
        else:
            self.metadata[key] = value

    def items(self) -> list[tuple[str, str]]:
        """Fields in serialization order: declared, dynamic, then context."""
        result = [(key, getattr(self, key)) for key in DECLARED_FIELDS]
        result.extend(self.metadata.items())
        if self.context is not None:
            result.append((CONTEXT_FIELD, self.context))
        return result

    def to_dict(self) -> dict[str, str]:
        """Convert to an ordered dictionary."""
        return dict(self.items())
