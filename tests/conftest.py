"""Shared fixtures for todo tests."""

from __future__ import annotations

from pathlib import Path

import pytest

from todo.models import TaskList


@pytest.fixture
def temp_project(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Run the test from an empty directory with no TODO_FILE override."""
    monkeypatch.chdir(tmp_path)
    monkeypatch.delenv("TODO_FILE", raising=False)
    return tmp_path


@pytest.fixture
def abc_list() -> TaskList:
    """A list holding tasks A, B and C in that order."""
    task_list = TaskList()
    task_list.add("A")
    task_list.add("B")
    task_list.add("C")
    return task_list
