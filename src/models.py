"""Data models for the terminal task tracker.

Exposes the Task dataclass and the error base shared by the other
modules. On disk the creation time is stored under "createdAt" (camelCase)
so data files written by earlier versions of the tracker stay readable.
"""
from __future__ import annotations
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, Mapping


class TaskTrackerError(Exception):
    """Base class for tracker errors."""


class TaskParseError(TaskTrackerError):
    """A stored task entry could not be turned back into a Task."""


def _parse_timestamp(value: str) -> datetime:
    raw = value.strip()
    if raw.endswith('Z'):  # JS style UTC suffix
        raw = raw[:-1] + '+00:00'
    return datetime.fromisoformat(raw)


@dataclass
class Task:
    """A single to-do item.

    Fields:
        title: Short title. Non-empty when created interactively; stored
            data is trusted as-is.
        description: Optional free text.
        completed: Flipped only through toggle_complete().
        created_at: Set once at construction.
    """
    title: str
    description: str = ''
    completed: bool = False
    created_at: datetime = field(default_factory=datetime.now)

    def toggle_complete(self) -> Task:
        self.completed = not self.completed
        return self

    @classmethod
    def from_dict(cls, obj: Mapping[str, Any]) -> Task:
        """Rebuild a Task from parsed JSON.

        Missing optional fields get their defaults; fields that are present
        but of the wrong type raise TaskParseError.
        """
        if not isinstance(obj, Mapping):
            raise TaskParseError(f'expected an object, got {type(obj).__name__}')
        title = obj.get('title')
        if not isinstance(title, str):
            raise TaskParseError('"title" must be a string')
        description = obj.get('description', '')
        if description is None:
            description = ''
        if not isinstance(description, str):
            raise TaskParseError(f'task "{title}": "description" must be a string')
        completed = obj.get('completed', False)
        if not isinstance(completed, bool):
            raise TaskParseError(f'task "{title}": "completed" must be true or false')
        task = cls(title=title, description=description, completed=completed)
        raw_created = obj.get('createdAt')
        if raw_created:
            if not isinstance(raw_created, str):
                raise TaskParseError(f'task "{title}": "createdAt" must be a string')
            try:
                task.created_at = _parse_timestamp(raw_created)
            except ValueError as exc:
                raise TaskParseError(f'task "{title}": bad "createdAt" {raw_created!r}') from exc
        return task

    def to_dict(self) -> Dict[str, Any]:
        return {
            'title': self.title,
            'description': self.description,
            'completed': self.completed,
            'createdAt': self.created_at.isoformat(),
        }

    def created_label(self) -> str:
        """Medium date, short time: 'Oct 19, 2026, 3:04 PM'."""
        dt = self.created_at
        if dt.tzinfo is not None:
            dt = dt.astimezone()
        hour = dt.hour % 12 or 12
        return f"{dt:%b} {dt.day}, {dt.year}, {hour}:{dt:%M} {'AM' if dt.hour < 12 else 'PM'}"

    def __repr__(self) -> str:  # pragma: no cover - convenience only
        return f"Task(title={self.title}, completed={self.completed})"
