"""Main entry point for the console task tracker."""
import logging
from pathlib import Path
from typing import Optional

import click

import theme
from cli import CLI
from logging_setup import setup_logging
from registry import TaskRegistry

LOG_LEVELS = ('DEBUG', 'INFO', 'WARNING', 'ERROR')


@click.command()
@click.option('--log-level', type=click.Choice(LOG_LEVELS, case_sensitive=False),
              default='WARNING', show_default=True, envvar='TASKTRACKER_LOG_LEVEL',
              help='Minimum level for log lines on stderr.')
@click.option('--log-file', type=click.Path(dir_okay=False, path_type=Path),
              default=None, envvar='TASKTRACKER_LOG_FILE',
              help='Also write full debug logs to this file.')
@click.option('--no-color', is_flag=True, help='Disable ANSI colors.')
def main(log_level: str, log_file: Optional[Path], no_color: bool) -> None:
    """Interactive task tracker: add, find, edit, remove, list, save and load tasks."""
    setup_logging(console_level=getattr(logging, log_level.upper()), log_file=log_file)
    if no_color:
        theme.disable()
    CLI(TaskRegistry()).run()


if __name__ == "__main__":
    main()
