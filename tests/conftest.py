from datetime import date
from pathlib import Path

import pytest

import theme
from models import Priority
from store import TaskStore


@pytest.fixture(autouse=True)
def plain_output(monkeypatch):
    """Keep rendered task lines free of ANSI codes whatever the terminal."""
    monkeypatch.setattr(theme, "_ENABLE", False)


@pytest.fixture()
def tasks_path(tmp_path: Path) -> Path:
    return tmp_path / "tasks.txt"


@pytest.fixture()
def store(tasks_path: Path) -> TaskStore:
    return TaskStore(tasks_path)


@pytest.fixture()
def mixed_store(store: TaskStore) -> TaskStore:
    """Three tasks: dated HIGH, undated LOW, later-dated MEDIUM."""
    store.add_task("Early", Priority.HIGH, date(2024, 1, 1))
    store.add_task("Whenever", Priority.LOW, None)
    store.add_task("Later", Priority.MEDIUM, date(2024, 6, 1))
    return store
