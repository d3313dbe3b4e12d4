# tests/conftest.py

from __future__ import annotations

from datetime import datetime
from pathlib import Path
from types import SimpleNamespace

import pytest

from task_tracker.cli.bootstrap import create_initial_state
from task_tracker.core.state import AppState
from task_tracker.tasks.task_store import TaskStore

from .fakes import FixedClock


@pytest.fixture()
def settings(tmp_path: Path) -> SimpleNamespace:
    """
    Minimal settings object compatible with AppState and the CLI.

    We intentionally use a SimpleNamespace rather than importing real config,
    to keep unit tests isolated and deterministic.
    """
    return SimpleNamespace(
        app_name="Task Manager",
        log_level="WARNING",
        confirm_delete=True,
        data_dir=tmp_path / "data",
        tasks_path=tmp_path / "tasks.json",
    )


@pytest.fixture()
def clock() -> FixedClock:
    return FixedClock(datetime(2024, 2, 10, 9, 30))


@pytest.fixture()
def store(clock: FixedClock) -> TaskStore:
    return TaskStore(clock=clock)


@pytest.fixture()
def state(settings: SimpleNamespace, clock: FixedClock) -> AppState:
    """AppState wired through bootstrap, with a missing task file (empty store)."""
    return create_initial_state(settings=settings, clock=clock)
