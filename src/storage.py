"""Persistence helpers (read/write) for the task registry.

Decisions:
- The document is a JSON array of task objects, pretty-printed.
- Writes never overwrite: the target is opened in exclusive-create mode.
- The whole document is encoded before the file is created and decoded
  before anything is returned, so a failure never leaves half a file on
  disk or half a list in memory.
"""
import json
import logging
from pathlib import Path
from typing import Any, Dict, Iterable, List, Union

from errors import FileAlreadyExistsError, FileMissingError, SerializationError
from models import Task

logger = logging.getLogger(__name__)

PathLike = Union[str, Path]
TaskEntry = Dict[str, Any]


class Storage:
    @staticmethod
    def encode(tasks: Iterable[Task]) -> bytes:
        """UTF-8 document bytes; unencodable text (e.g. lone surrogates) is a SerializationError."""
        try:
            text = json.dumps([t.to_dict() for t in tasks], indent=4, ensure_ascii=False)
            return text.encode("utf-8")
        except (TypeError, ValueError) as e:
            raise SerializationError(f"Error saving data {e}") from e

    @staticmethod
    def decode(text: str) -> List[Task]:
        """Parse a document into tasks; any malformed entry rejects the whole document."""
        try:
            data = json.loads(text)
        except (json.JSONDecodeError, RecursionError) as e:
            raise SerializationError(f"Error reading file {e}") from e
        if not isinstance(data, list):
            raise SerializationError("Error reading file: expected a JSON array of tasks")
        tasks: List[Task] = []
        for pos, raw in enumerate(data):
            if not isinstance(raw, dict):
                raise SerializationError(f"Error reading file: entry {pos} is not an object")
            try:
                tasks.append(Task.from_dict(raw))
            except KeyError as e:
                raise SerializationError(f"Error reading file: entry {pos} is missing field {e}") from e
            except (TypeError, ValueError) as e:
                raise SerializationError(f"Error reading file: entry {pos}: {e}") from e
        return tasks

    @staticmethod
    def save_tasks(path: PathLike, tasks: Iterable[Task]) -> None:
        """Write tasks to a new file; refuses an existing path."""
        target = Path(path)
        if target.exists():
            raise FileAlreadyExistsError(path)
        payload = Storage.encode(tasks)
        try:
            with open(target, "xb") as f:
                f.write(payload)
        except FileExistsError as e:
            raise FileAlreadyExistsError(path) from e
        except OSError as e:
            target.unlink(missing_ok=True)
            raise SerializationError(f"Error saving data {e}") from e
        except BaseException:
            target.unlink(missing_ok=True)
            raise
        logger.debug("Wrote %d bytes to %s", len(payload), target)

    @staticmethod
    def load_tasks(path: PathLike) -> List[Task]:
        """Read and validate the whole document at path."""
        source = Path(path)
        if not source.exists():
            raise FileMissingError(path)
        try:
            text = source.read_text(encoding='utf-8')
        except (OSError, UnicodeDecodeError) as e:
            raise SerializationError(f"Error reading file {e}") from e
        return Storage.decode(text)
