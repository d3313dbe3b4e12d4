# tests/test_bootstrap.py

from __future__ import annotations

import logging
from datetime import date
from types import SimpleNamespace

from task_tracker.cli.bootstrap import create_initial_state, save_tasks
from task_tracker.connectors.console_connector import run_console_loop
from task_tracker.core.errors import PersistenceError
from task_tracker.tasks.task_codec import PersistenceCodec

from .fakes import FakeConsole


def test_state_starts_empty_without_a_task_file(settings: SimpleNamespace) -> None:
    state = create_initial_state(settings=settings)

    assert state.store.all_tasks() == []
    assert state.load_error is None
    assert state.tasks_path == settings.tasks_path


def test_save_then_reload_restores_store_and_next_id(settings: SimpleNamespace, clock) -> None:
    first = create_initial_state(settings=settings, clock=clock)
    first.store.create("a", "", date(2024, 1, 1))
    b = first.store.create("b", "", date(2024, 1, 2))
    first.store.delete(b.id)

    assert save_tasks(first) is True

    second = create_initial_state(settings=settings, clock=clock)
    assert second.store.all_tasks() == first.store.all_tasks()
    # highest surviving id is 1, so allocation restarts from 2 in the new run
    assert second.store.create("c", "", date(2024, 1, 3)).id == 2


def test_corrupt_file_gives_empty_store_and_backup_on_save(settings: SimpleNamespace, caplog) -> None:
    settings.tasks_path.write_text("[{broken", "utf-8")

    with caplog.at_level(logging.WARNING, logger="task_tracker"):
        state = create_initial_state(settings=settings)

    assert state.store.all_tasks() == []
    assert isinstance(state.load_error, PersistenceError)
    assert state.load_error.kind == "deserialization"
    assert "Could not load tasks" in caplog.text

    state.store.create("fresh", "", date(2024, 1, 1))
    assert save_tasks(state) is True

    backup = settings.tasks_path.with_name("tasks.json.bak")
    assert backup.read_text("utf-8") == "[{broken"
    assert [t.title for t in PersistenceCodec().load(settings.tasks_path)] == ["fresh"]


def test_save_failure_is_reported_not_raised(settings: SimpleNamespace, tmp_path, caplog) -> None:
    blocker = tmp_path / "blocker"
    blocker.write_text("", "utf-8")
    settings.tasks_path = blocker / "tasks.json"
    state = create_initial_state(settings=settings)

    with caplog.at_level(logging.ERROR, logger="task_tracker"):
        assert save_tasks(state) is False

    assert "Could not save tasks" in caplog.text


def test_console_loop_runs_commands_until_exit(state) -> None:
    # /add with an inline title still prompts for description, due date and priority
    console = FakeConsole.scripted(
        ["/add Water plants", "", "", "", "", "hello", "/list", "6", "/list"]
    )

    run_console_loop(state, io=console)

    assert state.running is False
    assert "✓ Task 1 added successfully!" in console.emitted
    assert any(line.startswith("⚠️ Invalid choice!") for line in console.emitted)
    assert any("Title: Water plants" in line for line in console.emitted)
    # the trailing /list after exit is never read
    assert console.answers == ["/list"]


def test_console_loop_reports_load_error_and_stops_on_eof(settings: SimpleNamespace) -> None:
    settings.tasks_path.write_text("not json", "utf-8")
    state = create_initial_state(settings=settings)
    console = FakeConsole.scripted([])

    run_console_loop(state, io=console)

    assert any("Starting with an empty task list." in line for line in console.emitted)


def test_deeply_nested_file_does_not_abort_startup(settings: SimpleNamespace) -> None:
    settings.tasks_path.write_text("[" * 200_000 + "]" * 200_000, "utf-8")

    state = create_initial_state(settings=settings)

    assert state.store.all_tasks() == []
    assert state.load_error is not None
    assert state.load_error.kind == "deserialization"
