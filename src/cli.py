"""Menu-driven command loop for the task tracker.

Every mutation is written to disk right away, so leaving the loop (by
'exit', EOF or Ctrl-C) never needs a final save.
"""
import logging
from typing import Optional

import click

from storage import Storage, StorageWriteError
from store import TaskStore
from theme import color, HEADER_COLOR, SUCCESS_COLOR, WARNING_COLOR, ERROR_COLOR

logger = logging.getLogger(__name__)

MENU = (
    ('view', 'View Tasks'),
    ('add', 'Add Task'),
    ('complete', 'Complete Task'),
    ('delete', 'Delete Task'),
    ('exit', 'Exit'),
)

MENU_ALIASES = {}
for _number, (_action, _label) in enumerate(MENU, start=1):
    MENU_ALIASES[_action] = _action
    MENU_ALIASES[_action[0]] = _action
    MENU_ALIASES[str(_number)] = _action


def _menu_choice(value: str) -> str:
    action = MENU_ALIASES.get(value.strip().lower())
    if action is None:
        raise click.BadParameter(f'{value.strip()!r} is not a menu option.')
    return action


def _required_text(value: str) -> str:
    text = value.strip()
    if not text:
        raise click.BadParameter('Title is required')
    return text


class CLI:
    def __init__(self, store: TaskStore, storage: Storage):
        self.store: TaskStore = store
        self.storage: Storage = storage

    def run(self) -> None:
        """Main loop: show the menu, dispatch one action, repeat until exit."""
        exit_message: Optional[str] = None
        try:
            while True:
                self._menu()
                action = click.prompt('What would you like to do?', value_proc=_menu_choice)
                if action == 'exit':
                    exit_message = 'Goodbye!'
                    break
                self._handle_action(action)
        except click.Abort:
            exit_message = 'Interrupted. Goodbye.'
        finally:
            if exit_message:
                click.echo(color(exit_message, HEADER_COLOR))

    # -------------------- command dispatch --------------------
    def _handle_action(self, action: str) -> None:
        handlers = {
            'view': self.store.display,
            'add': self._add,
            'complete': self._complete,
            'delete': self._delete,
        }
        handlers[action]()

    def _menu(self) -> None:
        click.echo()
        for number, (_, label) in enumerate(MENU, start=1):
            click.echo(f"  {color(f'{number}.', HEADER_COLOR)} {label}")

    def _persist(self) -> None:
        try:
            self.storage.save_tasks(self.store.get_tasks())
        except StorageWriteError as exc:
            click.echo(color(f'Error saving tasks: {exc}', ERROR_COLOR))
            click.echo(color('Your changes are kept for this session but are not on disk.', WARNING_COLOR))

    def _prompt_index(self, message: str) -> int:
        """Ask for a 1-based position and return the 0-based index."""
        number = click.prompt(message, type=click.IntRange(1, len(self.store)))
        return number - 1

    # -------------------- user-interactive flows --------------------
    def _add(self) -> None:
        title = click.prompt('Enter task title', value_proc=_required_text)
        description = click.prompt('Enter task description (optional)', default='',
                                   show_default=False).strip()
        self.store.add_task(title, description)
        self._persist()
        click.echo(color(f'Task "{title}" added successfully!', SUCCESS_COLOR))

    def _complete(self) -> None:
        if not len(self.store):
            click.echo(color('No tasks to complete!', WARNING_COLOR))
            return
        self.store.display()
        index = self._prompt_index('Enter task number to toggle completion')
        task = self.store.toggle_task(index)
        self._persist()
        status = 'completed' if task.completed else 'incomplete'
        click.echo(color(f'Task marked as {status}!', SUCCESS_COLOR))

    def _delete(self) -> None:
        if not len(self.store):
            click.echo(color('No tasks to delete!', WARNING_COLOR))
            return
        self.store.display()
        index = self._prompt_index('Enter task number to delete')
        title = self.store.list_tasks()[index].title
        if not click.confirm(f'Are you sure you want to delete task "{title}"?', default=False):
            click.echo(color('Deletion cancelled.', WARNING_COLOR))
            return
        self.store.delete_task(index)
        self._persist()
        logger.info("Deleted task %r at position %d", title, index + 1)
        click.echo(color(f'Task "{title}" deleted successfully!', SUCCESS_COLOR))
