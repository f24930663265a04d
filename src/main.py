"""Main entry point for the terminal task tracker."""
import logging

import click

from cli import CLI
from storage import CorruptDataError, Storage
from store import TaskStore
from theme import color, HEADER_COLOR, ERROR_COLOR, WARNING_COLOR

logger = logging.getLogger(__name__)

BANNER = """
============================
 Task Tracker
============================
"""


def _load(storage: Storage) -> TaskStore:
    try:
        tasks = storage.load_tasks()
    except CorruptDataError as exc:
        logger.error("Unreadable task file: %s", exc)
        click.echo(color(f'Error loading tasks: {exc}', ERROR_COLOR))
        moved_to = storage.quarantine()
        click.echo(color(f'The unreadable file was moved to {moved_to}; starting with an empty list.',
                         WARNING_COLOR))
        tasks = []
    return TaskStore(tasks)


@click.command()
def main():
    """View, add, complete and delete tasks from an interactive menu."""
    logging.basicConfig(level=logging.WARNING,
                        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s')
    click.echo(color(BANNER, HEADER_COLOR))
    try:
        storage = Storage()
        store = _load(storage)
    except Exception:
        logger.exception("Startup failed")
        raise SystemExit(1)
    CLI(store, storage).run()

if __name__ == "__main__":
    main()
