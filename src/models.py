"""Data models for the terminal task tracker.

A task is stored as one pipe-delimited line:

    <id>|<title>|<PRIORITY>|<YYYY-MM-DD or empty>|<true|false>

Titles never contain the delimiter on disk; any "|" is written as a space.
"""
from __future__ import annotations
import re
from dataclasses import dataclass
from datetime import date
from enum import IntEnum
from typing import Optional

DELIMITER = "|"
FIELD_COUNT = 5
RE_ID = re.compile(r"[0-9]+")
RE_DATE = re.compile(r"\d{4}-\d{2}-\d{2}", re.ASCII)


class FormatError(ValueError):
    """A stored line could not be turned into a Task."""


class Priority(IntEnum):
    LOW = 1
    MEDIUM = 2
    HIGH = 3


def parse_due_date(raw: str) -> date:
    """Parse a strict YYYY-MM-DD string into a date."""
    if not RE_DATE.fullmatch(raw):
        raise ValueError(f"not a YYYY-MM-DD date: {raw!r}")
    return date.fromisoformat(raw)


@dataclass(eq=False)
class Task:
    """A single tracked task.

    Fields:
        id: Positive integer assigned by the store; never changes.
        title: Trimmed title text.
        priority: LOW, MEDIUM or HIGH.
        due_date: Calendar date, or None for no due date.
        completed: True once the task has been marked done.
    """
    id: int
    title: str
    priority: Priority = Priority.MEDIUM
    due_date: Optional[date] = None
    completed: bool = False

    def __post_init__(self) -> None:
        self.title = self.title.strip()

    def set_title(self, title: str) -> None:
        self.title = title.strip()

    # -------------------- identity --------------------
    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Task):
            return NotImplemented
        return self.id == other.id

    def __hash__(self) -> int:
        return hash(self.id)

    # -------------------- serialization --------------------
    @classmethod
    def from_line(cls, line: str) -> Task:
        """Parse one stored line; raises FormatError if it is malformed."""
        parts = line.split(DELIMITER)
        if len(parts) != FIELD_COUNT:
            raise FormatError(f"expected {FIELD_COUNT} fields, got {len(parts)}: {line!r}")
        raw_id, title, raw_priority, raw_due, raw_completed = parts
        if not RE_ID.fullmatch(raw_id):
            raise FormatError(f"bad id {raw_id!r}: {line!r}")
        try:
            priority = Priority[raw_priority]
        except KeyError:
            raise FormatError(f"unknown priority {raw_priority!r}: {line!r}") from None
        due_date: Optional[date] = None
        if raw_due:
            try:
                due_date = parse_due_date(raw_due)
            except ValueError as exc:
                raise FormatError(f"bad due date {raw_due!r}: {line!r}") from exc
        flag = raw_completed.lower()
        if flag not in ("true", "false"):
            raise FormatError(f"bad completed flag {raw_completed!r}: {line!r}")
        return cls(
            id=int(raw_id),
            title=title,
            priority=priority,
            due_date=due_date,
            completed=flag == "true",
        )

    def to_line(self) -> str:
        return DELIMITER.join((
            str(self.id),
            self.title.replace(DELIMITER, " "),
            self.priority.name,
            self.due_date.isoformat() if self.due_date else "",
            "true" if self.completed else "false",
        ))

    # -------------------- display --------------------
    def display(self) -> str:
        marker = "[✓]" if self.completed else "[ ]"
        due = self.due_date.isoformat() if self.due_date else "no due date"
        return f"{marker}  ID:{self.id}  {self.title}  (Priority:{self.priority.name}, Due:{due})"

    def __str__(self) -> str:
        return self.display()

    def __repr__(self) -> str:  # pragma: no cover - convenience only
        return f"Task(id={self.id}, title={self.title!r}, priority={self.priority.name})"
