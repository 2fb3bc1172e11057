from __future__ import annotations

from pathlib import Path
from typing import Callable, Iterable

import pytest

from cli import CLI, parse_priority
from models import Priority
from registry import TaskRegistry

Scripted = Callable[[Iterable[str]], Callable[[str], str]]


def run_cli(reg: TaskRegistry, scripted: Scripted, answers: Iterable[str]) -> None:
    CLI(reg, prompt=scripted(answers)).run()


@pytest.mark.unit
def test_parse_priority() -> None:
    assert parse_priority("medium") is Priority.MEDIUM
    assert parse_priority("whatever") is None


@pytest.mark.integration
def test_add_then_print(scripted: Scripted, capsys: pytest.CaptureFixture[str]) -> None:
    reg = TaskRegistry()
    run_cli(reg, scripted, ["1", "Write report", "Q3 summary", "medium", "5", "quit"])
    assert [(t.name, t.description, t.priority) for t in reg] == [("Write report", "Q3 summary", Priority.MEDIUM)]
    out = capsys.readouterr().out
    assert "1. Add task" in out
    assert "Write report | Medium |" in out
    assert "Goodbye." in out


@pytest.mark.integration
def test_unknown_priority_defaults_to_low(scripted: Scripted, capsys: pytest.CaptureFixture[str]) -> None:
    reg = TaskRegistry()
    run_cli(reg, scripted, ["1", "a", "b", "urgent", "exit"])
    assert reg.tasks[0].priority is Priority.LOW
    assert "Not valid input, setting to low" in capsys.readouterr().out


@pytest.mark.integration
def test_find_edit_remove(registry: TaskRegistry, scripted: Scripted, capsys: pytest.CaptureFixture[str]) -> None:
    created = registry.tasks[1].created_at
    run_cli(registry, scripted, [
        "2", "Call bank",
        "3", "Call bank", "Call bank now", "before noon", "high",
        "4", "Water plants",
        "2", "Water plants",
    ])
    out = capsys.readouterr().out
    assert '"ask about fees"' in out
    assert 'Task "Call bank" updated successfully' in out
    assert 'Task "Water plants" removed successfully' in out
    assert 'Task with name "Water plants" doesn\'t exist' in out
    assert [t.name for t in registry] == ["Write report", "Call bank now"]
    assert registry.tasks[1].created_at == created


@pytest.mark.integration
def test_unknown_command_leaves_state(registry: TaskRegistry, scripted: Scripted, capsys: pytest.CaptureFixture[str]) -> None:
    before = registry.list_tasks()
    run_cli(registry, scripted, ["9", "", "help", "q"])
    out = capsys.readouterr().out
    assert out.count("I don't understand this command") == 2
    assert out.count("7. Read tasks from file") == 2
    assert registry.list_tasks() == before


@pytest.mark.integration
def test_save_and_load_through_menu(registry: TaskRegistry, scripted: Scripted, tmp_path: Path,
                                    capsys: pytest.CaptureFixture[str]) -> None:
    target = str(tmp_path / "saved.json")
    run_cli(registry, scripted, ["6", target, "6", target, "quit"])
    out = capsys.readouterr().out
    assert "Data stored successfully" in out
    assert "already exists" in out

    fresh = TaskRegistry()
    run_cli(fresh, scripted, ["7", str(tmp_path / "missing.json"), "7", target, "quit"])
    out = capsys.readouterr().out
    assert "doesn't exist" in out
    assert "Data read successfully" in out
    assert fresh.list_tasks() == registry.list_tasks()


@pytest.mark.integration
def test_input_closed_mid_command_aborts_it(scripted: Scripted, capsys: pytest.CaptureFixture[str]) -> None:
    reg = TaskRegistry()
    run_cli(reg, scripted, ["1", "half a task"])
    out = capsys.readouterr().out
    assert "Error getting user input" in out
    assert "Goodbye." in out
    assert len(reg) == 0


def _undecodable() -> UnicodeDecodeError:
    return UnicodeDecodeError("utf-8", b"\xff", 0, 1, "invalid start byte")


@pytest.mark.integration
def test_undecodable_field_aborts_only_that_command(scripted: Scripted, capsys: pytest.CaptureFixture[str]) -> None:
    reg = TaskRegistry()
    run_cli(reg, scripted, ["1", _undecodable(), "1", "ok", "fine", "low", "quit"])
    out = capsys.readouterr().out
    assert "Error getting user input" in out
    assert "Goodbye." in out
    assert [t.name for t in reg] == ["ok"]


@pytest.mark.integration
def test_undecodable_command_line_keeps_looping(registry: TaskRegistry, scripted: Scripted,
                                                capsys: pytest.CaptureFixture[str]) -> None:
    run_cli(registry, scripted, [_undecodable(), "4", "Call bank", "quit"])
    out = capsys.readouterr().out
    assert "Error getting user input" in out
    assert 'Task "Call bank" removed successfully' in out
    assert [t.name for t in registry] == ["Write report", "Water plants"]


@pytest.mark.integration
def test_save_failure_in_menu_is_not_fatal(scripted: Scripted, tmp_path: Path,
                                           capsys: pytest.CaptureFixture[str]) -> None:
    target = tmp_path / "out.json"
    reg = TaskRegistry()
    run_cli(reg, scripted, ["1", "bad\udcff", "d", "low", "6", str(target), "quit"])
    out = capsys.readouterr().out
    assert "Error saving data" in out
    assert "Goodbye." in out
    assert not target.exists()
