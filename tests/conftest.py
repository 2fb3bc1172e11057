from __future__ import annotations

from datetime import datetime, timedelta, timezone
from typing import Callable, Iterable

import pytest

from models import Priority, Task
from registry import TaskRegistry

PLUS_TWO = timezone(timedelta(hours=2))


@pytest.fixture
def fixed_time() -> datetime:
    return datetime(2024, 3, 5, 14, 7, 9, 123456, tzinfo=PLUS_TWO)


@pytest.fixture
def sample_tasks(fixed_time: datetime) -> list[Task]:
    return [
        Task("Write report", "Q3 summary", Priority.MEDIUM, fixed_time),
        Task("Call bank", "ask about fees", Priority.HIGH, fixed_time + timedelta(minutes=5)),
        Task("Water plants", "", Priority.LOW, fixed_time + timedelta(days=1)),
    ]


@pytest.fixture
def registry(sample_tasks: list[Task]) -> TaskRegistry:
    return TaskRegistry(sample_tasks)


@pytest.fixture
def scripted() -> Callable[[Iterable[str | BaseException]], Callable[[str], str]]:
    """Build a prompt callable that answers from a script, then raises EOFError.

    Exception instances in the script are raised instead of returned.
    """

    def factory(answers: Iterable[str | BaseException]) -> Callable[[str], str]:
        it = iter(answers)

        def prompt(_query: str) -> str:
            try:
                answer = next(it)
            except StopIteration:
                raise EOFError from None
            if isinstance(answer, BaseException):
                raise answer
            return answer

        return prompt

    return factory


@pytest.fixture(autouse=True)
def _plain_output(monkeypatch: pytest.MonkeyPatch) -> None:
    import theme

    monkeypatch.setattr(theme, "_ENABLE", False)
