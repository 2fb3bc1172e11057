"""Registry logic: holds the ordered task list, name lookup, mutation, and rendering.

Lookup is by exact (case-sensitive) name and always resolves to the first
match; duplicate names are allowed but later duplicates are unreachable by
name (decision: keep first-match semantics rather than enforce uniqueness).
"""
import logging
from pathlib import Path
from typing import Iterable, Iterator, List, Optional, Union

import click

from errors import TaskNotFoundError, TaskTrackerError
from models import Task
from storage import Storage
from theme import color, NAME_COLOR, PRIORITY_COLOR, TIME_COLOR, EMPTY_COLOR, BOLD

logger = logging.getLogger(__name__)


class TaskRegistry:
    def __init__(self, tasks: Optional[Iterable[Task]] = None):
        self.tasks: List[Task] = list(tasks) if tasks else []

    def __len__(self) -> int:
        return len(self.tasks)

    def __iter__(self) -> Iterator[Task]:
        return iter(self.tasks)

    # -------------------- queries --------------------
    def index_of(self, name: str) -> Optional[int]:
        for idx, task in enumerate(self.tasks):
            if task.name == name:
                return idx
        return None

    def find(self, name: str) -> Optional[Task]:
        idx = self.index_of(name)
        return None if idx is None else self.tasks[idx]

    def get(self, name: str) -> Task:
        task = self.find(name)
        if task is None:
            raise TaskNotFoundError(name)
        return task

    def list_tasks(self) -> List[Task]:
        return list(self.tasks)

    # -------------------- task operations --------------------
    def add(self, task: Task) -> None:
        self.tasks.append(task)
        logger.debug('Added task "%s" (%d total)', task.name, len(self.tasks))

    def remove(self, name: str) -> str:
        idx = self.index_of(name)
        if idx is None:
            logger.warning('Remove failed: no task named "%s"', name)
            raise TaskNotFoundError(name)
        del self.tasks[idx]
        logger.info('Removed task "%s"', name)
        return f'Task "{name}" removed successfully'

    def edit(self, name: str, replacement: Task) -> str:
        """Overwrite name, description and priority of the first match in place.

        The slot keeps its position and original creation time. A new name
        that collides with another task is accepted.
        """
        idx = self.index_of(name)
        if idx is None:
            logger.warning('Edit failed: no task named "%s"', name)
            raise TaskNotFoundError(name)
        task = self.tasks[idx]
        task.name = replacement.name
        task.description = replacement.description
        task.priority = replacement.priority
        logger.info('Edited task "%s" (now "%s")', name, task.name)
        return f'Task "{name}" updated successfully'

    # -------------------- persistence --------------------
    def save_to_file(self, path: Union[str, Path]) -> str:
        try:
            Storage.save_tasks(path, self.tasks)
        except TaskTrackerError as e:
            logger.warning("Save to %s failed: %s", path, e)
            raise
        logger.info("Stored %d tasks to %s", len(self.tasks), path)
        return "Data stored successfully"

    def load_from_file(self, path: Union[str, Path]) -> str:
        """Replace the whole collection with the document at path (all-or-nothing)."""
        try:
            loaded = Storage.load_tasks(path)
        except TaskTrackerError as e:
            logger.warning("Load from %s failed: %s", path, e)
            raise
        self.tasks = loaded
        logger.info("Read %d tasks from %s", len(loaded), path)
        return "Data read successfully"

    # -------------------- display --------------------
    @staticmethod
    def render_task(task: Task) -> str:
        header = ' | '.join((
            color(task.name, NAME_COLOR, BOLD),
            color(task.priority.value, PRIORITY_COLOR.get(task.priority, '')),
            color(task.created_label, TIME_COLOR),
        ))
        return f'{header}\n"{task.description}"\n'

    def render(self) -> str:
        if not self.tasks:
            return color('(no tasks)', EMPTY_COLOR)
        return '\n'.join(self.render_task(t) for t in self.tasks)

    def display(self) -> None:
        click.echo(self.render())

    def __str__(self) -> str:
        return f'TaskRegistry: {len(self.tasks)} tasks'
