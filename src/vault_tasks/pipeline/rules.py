"""
Field extraction rules.

Each rule finds one kind of annotation in the task name, records what it
found in the task fields and removes the annotation from the name. The
order of RULES matters: links go first so their URLs are not mistaken for
dates or tags, and full dates go before relative ones so a numeric date is
never read as a date word.
"""

import re
from dataclasses import dataclass
from typing import Callable

from loguru import logger

from vault_tasks.links import LinkBuilder
from vault_tasks.pipeline.fields import TaskFields

# Handler gets the match, the fields to update and the wiki link builder,
# and returns the text that replaces the match in the task name.
RuleHandler = Callable[[re.Match[str], TaskFields, LinkBuilder], str]

MARKDOWN_LINK_PATTERN = re.compile(r"\[([^\]]+)\]\(([^)]+)\)")
WIKILINK_PATTERN = re.compile(r"\[\[([^\]|]+)(?:\|([^\]]+))?\]\]")
# "//" must start the name or follow whitespace so "https://..." is not a date
DATE_PATTERN = re.compile(r"(?<!\S)//[ \t]*(\d{4}[-/]\d{2}[-/]\d{2})[ \t]?")
RELATIVE_DATE_PATTERN = re.compile(
    r"(?<!\S)//[ \t]*((?:(?:next|last)[ \t])?\w+)", re.IGNORECASE
)
INLINE_FIELD_PATTERN = re.compile(r"[ \t]?\[(\w+)::[ \t]*([^\]]+)\]")
TAG_PATTERN = re.compile(r"[ \t]?(?<!\S)#([A-Za-z]\w*)")

# Inline fields that would clobber the text being rewritten; they are
# stripped from the name without being recorded
RESERVED_INLINE_FIELDS = frozenset({"name", "note"})


@dataclass(frozen=True)
class Rule:
    """A pattern and the handler applied to each of its matches."""

    name: str
    pattern: re.Pattern[str]
    handler: RuleHandler

    def apply(self, fields: TaskFields, link_builder: LinkBuilder) -> TaskFields:
        """Apply the handler to every match in the current task name."""

        def replace(match: re.Match[str]) -> str:
            return self.handler(match, fields, link_builder)

        fields.name, count = self.pattern.subn(replace, fields.name)
        if count:
            logger.debug(f"Rule '{self.name}' matched {count} time(s)")
        return fields


def handle_markdown_link(
    match: re.Match[str], fields: TaskFields, link_builder: LinkBuilder
) -> str:
    text, url = match.group(1), match.group(2)
    fields.note += f"{text}: {url}\n"
    return text


def handle_wikilink(
    match: re.Match[str], fields: TaskFields, link_builder: LinkBuilder
) -> str:
    target = match.group(1)
    alias = match.group(2) or target
    fields.note += f"{alias}: {link_builder(target)}\n"
    return alias


def handle_date(
    match: re.Match[str], fields: TaskFields, link_builder: LinkBuilder
) -> str:
    fields.due = match.group(1)
    return ""


def handle_relative_date(
    match: re.Match[str], fields: TaskFields, link_builder: LinkBuilder
) -> str:
    # The task manager parses phrases like "today", "next week", "Tue" or "August"
    fields.due = match.group(1)
    return ""


def handle_inline_field(
    match: re.Match[str], fields: TaskFields, link_builder: LinkBuilder
) -> str:
    key, value = match.group(1), match.group(2).strip()
    if not value:
        return match.group(0)
    if key in RESERVED_INLINE_FIELDS:
        logger.debug(f"Ignoring reserved inline field '{key}'")
        return ""
    fields.set_field(key, value)
    return ""


def handle_tag(
    match: re.Match[str], fields: TaskFields, link_builder: LinkBuilder
) -> str:
    fields.tags.append(match.group(1))
    return ""


RULES: tuple[Rule, ...] = (
    Rule("markdown_link", MARKDOWN_LINK_PATTERN, handle_markdown_link),
    Rule("wikilink", WIKILINK_PATTERN, handle_wikilink),
    Rule("date", DATE_PATTERN, handle_date),
    Rule("relative_date", RELATIVE_DATE_PATTERN, handle_relative_date),
    Rule("inline_field", INLINE_FIELD_PATTERN, handle_inline_field),
    Rule("tag", TAG_PATTERN, handle_tag),
)
