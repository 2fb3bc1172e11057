"""Data models for the task tracker.

Priority is a label only; no ordering between levels is defined. The
persisted key for the creation timestamp is "add_time" while the attribute
is ``created_at``.
"""
from __future__ import annotations
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
import re
from typing import Any, Dict, Mapping

TIME_FORMAT = "%d-%m-%Y %H:%M:%S"
# datetime keeps microseconds only; longer fractions (e.g. nanoseconds) are cut
_LONG_FRACTION = re.compile(r"(\.\d{6})\d+")


class Priority(str, Enum):
    LOW = "Low"
    MEDIUM = "Medium"
    HIGH = "High"

    @classmethod
    def from_label(cls, text: str) -> Priority:
        """Case-insensitive lookup; raises ValueError for unknown labels."""
        wanted = text.strip().lower()
        for member in cls:
            if member.value.lower() == wanted:
                return member
        raise ValueError(f"Unknown priority: {text!r}")

    def __str__(self) -> str:
        return self.value


def _now() -> datetime:
    return datetime.now().astimezone()


@dataclass
class Task:
    """A single tracked task.

    Fields:
        name: Lookup key. Not unique; name-based operations reach the first match.
        description: Free text.
        priority: One of Low / Medium / High.
        created_at: Aware local timestamp captured at construction.
    """
    name: str
    description: str
    priority: Priority = Priority.LOW
    created_at: datetime = field(default_factory=_now)

    @property
    def created_label(self) -> str:
        return self.created_at.strftime(TIME_FORMAT)

    # -------------------- serialization --------------------
    def to_dict(self) -> Dict[str, Any]:
        return {
            'name': self.name,
            'description': self.description,
            'priority': self.priority.value,
            'add_time': self.created_at.isoformat(),
        }

    @classmethod
    def from_dict(cls, raw: Mapping[str, Any]) -> Task:
        """Build a Task from one persisted entry.

        Raises KeyError for missing fields and ValueError/TypeError for
        malformed values; storage turns those into SerializationError.
        """
        name = raw['name']
        description = raw['description']
        if not isinstance(name, str) or not isinstance(description, str):
            raise TypeError("name and description must be strings")
        priority = Priority(raw['priority'])
        add_time = raw['add_time']
        if not isinstance(add_time, str):
            raise TypeError("add_time must be a string")
        created_at = datetime.fromisoformat(_LONG_FRACTION.sub(r"\1", add_time, count=1))
        if created_at.tzinfo is None:
            created_at = created_at.astimezone()
        return cls(name=name, description=description, priority=priority, created_at=created_at)

    def __repr__(self) -> str:  # pragma: no cover - convenience only
        return f"Task(name={self.name}, priority={self.priority.value}, created_at={self.created_label})"


def build_task(name: str, description: str, priority: Priority) -> Task:
    """Construct a fresh Task from already-validated fields."""
    return Task(name=name, description=description, priority=priority)
