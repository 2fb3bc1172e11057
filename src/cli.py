"""Command-line menu loop for the task registry.

Numbered commands 1-7 map onto registry operations. ``help`` reprints the
menu and ``quit``/``exit`` (or end of input) leave the loop.
"""
import logging
from typing import Callable, Dict, Optional

import click

from errors import InputError, TaskTrackerError
from models import Priority, Task, build_task
from registry import TaskRegistry
from theme import color, MENU_COLOR

logger = logging.getLogger(__name__)

Prompt = Callable[[str], str]

MENU_OPTIONS = (
    "Add task",
    "Find task",
    "Edit task",
    "Remove task",
    "Print tasks",
    "Store tasks to file",
    "Read tasks from file",
)
QUIT_WORDS = {'quit', 'exit', 'q'}


def parse_priority(text: str) -> Optional[Priority]:
    try:
        return Priority.from_label(text)
    except ValueError:
        return None


class CLI:
    def __init__(self, registry: TaskRegistry, prompt: Prompt = input):
        self.registry: TaskRegistry = registry
        self.prompt: Prompt = prompt
        self.commands: Dict[str, Callable[[], None]] = {
            '1': self._add,
            '2': self._find,
            '3': self._edit,
            '4': self._remove,
            '5': self._print_all,
            '6': self._store,
            '7': self._read,
        }

    def run(self) -> None:
        """Main REPL loop; ends on quit/exit, end of input or Ctrl-C."""
        self.print_menu()
        try:
            while True:
                try:
                    line = self.prompt("\nEnter command index: ").strip()
                except UnicodeDecodeError as e:
                    logger.warning("Undecodable console line: %r", e)
                    click.echo(f"Error getting user input {e!r}")
                    continue
                if line.lower() in QUIT_WORDS:
                    break
                self.handle_command(line)
        except (KeyboardInterrupt, EOFError):
            click.echo()
            logger.info("Input closed, leaving menu loop")
        click.echo("Goodbye.")

    def print_menu(self) -> None:
        for index, option in enumerate(MENU_OPTIONS, start=1):
            click.echo(f"{color(str(index) + '.', MENU_COLOR)} {option}")
        click.echo("Type 'help' to show this menu again, 'quit' to leave.")

    # -------------------- command dispatch --------------------
    def handle_command(self, line: str) -> None:
        if line.lower() == 'help':
            self.print_menu()
            return
        handler = self.commands.get(line)
        if handler is None:
            click.echo("I don't understand this command")
            return
        try:
            handler()
        except TaskTrackerError as e:
            click.echo(str(e))

    # -------------------- field gathering --------------------
    def _ask(self, query: str) -> str:
        try:
            return self.prompt(query).strip()
        except (EOFError, OSError, UnicodeDecodeError) as e:
            logger.warning("Console read failed: %r", e)
            raise InputError(f"Error getting user input {e!r}") from e

    def _ask_task(self) -> Task:
        name = self._ask("Enter new task name: ")
        description = self._ask("Enter new task description: ")
        priority = parse_priority(self._ask("Enter new task priority: "))
        if priority is None:
            logger.warning("Unrecognized priority, defaulting to %s", Priority.LOW.value)
            click.echo("Not valid input, setting to low")
            priority = Priority.LOW
        return build_task(name, description, priority)

    # -------------------- commands --------------------
    def _add(self) -> None:
        self.registry.add(self._ask_task())

    def _find(self) -> None:
        name = self._ask("Enter task name to find: ")
        click.echo(self.registry.render_task(self.registry.get(name)))

    def _edit(self) -> None:
        name = self._ask("Enter task name to edit: ")
        click.echo(self.registry.edit(name, self._ask_task()))

    def _remove(self) -> None:
        name = self._ask("Enter task name to remove: ")
        click.echo(self.registry.remove(name))

    def _print_all(self) -> None:
        self.registry.display()

    def _store(self) -> None:
        filename = self._ask("Enter file name to save: ")
        click.echo(self.registry.save_to_file(filename))

    def _read(self) -> None:
        filename = self._ask("Enter file name to open: ")
        click.echo(self.registry.load_from_file(filename))
