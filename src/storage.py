"""Persistence helpers (load/save/quarantine) for the task tracker.

The whole collection lives in one pretty-printed JSON array and is
rewritten in full on every save. Writes go to a temporary file in the
same directory which is then renamed over the target.
"""
import json
import logging
import os
import tempfile
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional

from models import Task, TaskParseError, TaskTrackerError

TASKS_FILE = Path(__file__).parent.parent / 'data' / 'tasks.json'

TaskEntry = Dict[str, Any]

logger = logging.getLogger(__name__)


class CorruptDataError(TaskTrackerError):
    """The data file exists but does not hold a readable task list."""


class StorageWriteError(TaskTrackerError):
    """The task list could not be written to disk."""


class Storage:
    def __init__(self, path: Optional[Path] = None):
        self.path: Path = Path(path) if path is not None else TASKS_FILE

    def load_tasks(self) -> List[Task]:
        """Load tasks from disk.

        Missing file -> empty list. Anything unreadable raises
        CorruptDataError; OSErrors other than a missing file propagate.
        """
        if not self.path.exists():
            logger.info("Task file %s not found. Starting with an empty list.", self.path)
            return []
        with open(self.path, 'r', encoding='utf-8') as f:
            try:
                data = json.load(f)
            except (json.JSONDecodeError, UnicodeDecodeError) as exc:
                raise CorruptDataError(f'{self.path} is not valid UTF-8 JSON: {exc}') from exc
        if not isinstance(data, list):
            raise CorruptDataError(f'{self.path}: expected a list of tasks, got {type(data).__name__}')
        tasks: List[Task] = []
        for pos, raw in enumerate(data, start=1):
            try:
                tasks.append(Task.from_dict(raw))
            except TaskParseError as exc:
                raise CorruptDataError(f'{self.path}: entry {pos}: {exc}') from exc
        logger.info("Loaded %d tasks from %s", len(tasks), self.path)
        return tasks

    def save_tasks(self, tasks: Iterable[TaskEntry]) -> None:
        """Persist serialized tasks, replacing the file in one rename."""
        entries = list(tasks)
        directory = self.path.parent
        try:
            directory.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            raise StorageWriteError(f'cannot create {directory}: {exc}') from exc
        tmp_name: Optional[str] = None
        try:
            with tempfile.NamedTemporaryFile('w', encoding='utf-8', dir=directory,
                                             prefix=f'.{self.path.name}.', suffix='.tmp',
                                             delete=False) as f:
                tmp_name = f.name
                json.dump(entries, f, indent=4, ensure_ascii=False)
            os.replace(tmp_name, self.path)
        except OSError as exc:
            if tmp_name and os.path.exists(tmp_name):
                os.unlink(tmp_name)
            raise StorageWriteError(f'cannot write {self.path}: {exc}') from exc
        logger.info("Saved %d tasks to %s", len(entries), self.path)

    def quarantine(self) -> Path:
        """Move an unreadable data file aside and return its new location."""
        target = self.path.with_name(self.path.name + '.corrupt')
        n = 1
        while target.exists():
            target = self.path.with_name(f'{self.path.name}.corrupt.{n}')
            n += 1
        os.replace(self.path, target)
        logger.warning("Moved unreadable task file %s to %s", self.path, target)
        return target
