"""Exception taxonomy for the task tracker.

Every failure a menu command can hit derives from TaskTrackerError so the
console loop can print it and carry on.
"""
from pathlib import Path
from typing import Union


class TaskTrackerError(Exception):
    pass


class TaskNotFoundError(TaskTrackerError):
    def __init__(self, name: str):
        self.name = name
        super().__init__(f'Task with name "{name}" doesn\'t exist')


class FileAlreadyExistsError(TaskTrackerError):
    def __init__(self, path: Union[str, Path]):
        self.path = Path(path)
        super().__init__(f'File "{path}" already exists')


class FileMissingError(TaskTrackerError):
    def __init__(self, path: Union[str, Path]):
        self.path = Path(path)
        super().__init__(f'File "{path}" doesn\'t exist')


class SerializationError(TaskTrackerError):
    pass


class InputError(TaskTrackerError):
    pass
