"""Task store: holds the ordered task list, mutation, and rendering.

Positions are the only identifiers. Operations take 0-based indices; the
rendered list shows them 1-based.
"""
from typing import Any, Dict, Iterable, List, Optional

import click

from models import Task, TaskTrackerError
from theme import color, HEADER_COLOR, INDEX_COLOR, C_PENDING, C_DONE, DIM, WARNING_COLOR

DONE_MARK = '✓'
PENDING_MARK = '○'


class InvalidIndexError(TaskTrackerError, IndexError):
    """Raised when an index falls outside the current task list."""

    def __init__(self, index: int, length: int):
        super().__init__(f'No task at position {index + 1} (have {length}).')
        self.index = index
        self.length = length


class TaskStore:
    def __init__(self, tasks: Optional[Iterable[Task]] = None):
        self.tasks: List[Task] = list(tasks) if tasks else []

    # -------------------- queries --------------------
    def list_tasks(self) -> List[Task]:
        return list(self.tasks)

    def __len__(self) -> int:
        return len(self.tasks)

    def _check_index(self, index: int) -> None:
        if index < 0 or index >= len(self.tasks):
            raise InvalidIndexError(index, len(self.tasks))

    # -------------------- task operations --------------------
    def add_task(self, title: str, description: str = '') -> Task:
        task = Task(title=title, description=description)
        self.tasks.append(task)
        return task

    def toggle_task(self, index: int) -> Task:
        self._check_index(index)
        return self.tasks[index].toggle_complete()

    def delete_task(self, index: int) -> Task:
        self._check_index(index)
        return self.tasks.pop(index)

    # -------------------- serialization --------------------
    def get_tasks(self) -> List[Dict[str, Any]]:
        return [task.to_dict() for task in self.tasks]

    # -------------------- display --------------------
    def render_lines(self) -> List[str]:
        lines = [color('\n=== Your Tasks ===', HEADER_COLOR)]
        if not self.tasks:
            lines.append(color('No tasks found.', WARNING_COLOR))
            return lines
        for number, task in enumerate(self.tasks, start=1):
            if task.completed:
                mark = color(DONE_MARK, C_DONE)
                title = color(task.title, DIM)
            else:
                mark = color(PENDING_MARK, C_PENDING)
                title = task.title
            created = color(f'(created: {task.created_label()})', DIM)
            lines.append(f"{color(f'{number}.', INDEX_COLOR)} {mark} {title} {created}")
            if task.description:
                lines.append('   ' + color(task.description, DIM))
        lines.append('')
        return lines

    def display(self) -> None:
        for line in self.render_lines():
            click.echo(line)

    def __str__(self) -> str:
        done = sum(1 for t in self.tasks if t.completed)
        return f'{len(self.tasks)} tasks, {done} completed'
