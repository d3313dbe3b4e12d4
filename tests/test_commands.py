# tests/test_commands.py

from __future__ import annotations

from datetime import date

from task_tracker.cli.commands import CommandRegistry, registry
from task_tracker.cli.render import RULE
from task_tracker.core.state import AppState
from task_tracker.tasks.task_models import Priority

from .fakes import FakeConsole


def test_command_registry_routes_2_and_3_params(state: AppState) -> None:
    reg = CommandRegistry()
    called = {"h2": 0, "h3": 0}

    def h2(state, args):
        called["h2"] += 1
        return "h2"

    def h3(state, args, io):
        called["h3"] += 1
        if io is not None:
            io.emit("note")
        return "h3"

    reg.register("a", h2, "a")
    reg.register("b", h3, "b", aliases=["7"])
    console = FakeConsole()

    assert reg.handle(state, "/a x") == "h2"
    assert reg.handle(state, "/b y", io=console) == "h3"
    assert reg.handle(state, "7", io=console) == "h3"
    assert called == {"h2": 1, "h3": 2}
    assert console.emitted == ["note", "note"]


def test_command_registry_unknown_and_non_command(state: AppState) -> None:
    reg = CommandRegistry()
    assert reg.handle(state, "hello") is None
    assert "Unknown command" in (reg.handle(state, "/nope") or "")


def test_add_prompts_and_reprompts_on_bad_input(state: AppState) -> None:
    console = FakeConsole.scripted(["   ", "Write report", "quarterly numbers", "32/01/2024", "15/03/2024", "urgent", "high"])

    reply = registry.handle(state, "/add", io=console)

    assert reply == "✓ Task 1 added successfully!"
    task = state.store.find_by_id(1)
    assert task.title == "Write report"
    assert task.description == "quarterly numbers"
    assert task.due_date == date(2024, 3, 15)
    assert task.priority is Priority.HIGH
    assert "⚠️ Title cannot be empty!" in console.emitted
    assert any("Invalid date" in line for line in console.emitted)
    assert any("Invalid priority" in line for line in console.emitted)


def test_add_inline_title_without_console(state: AppState) -> None:
    assert registry.handle(state, "/add Buy milk") == "✓ Task 1 added successfully!"
    assert state.store.find_by_id(1).title == "Buy milk"
    assert registry.handle(state, "/add") == "Usage: /add <title>"


def test_list_renders_sorted_tasks_with_rule(state: AppState) -> None:
    assert registry.handle(state, "/list") == "No tasks found."

    state.store.create("later", "", date(2024, 5, 1))
    state.store.create("sooner", "", date(2024, 1, 9), Priority.HIGH)

    out = registry.handle(state, "1") or ""

    assert out.index("Title: sooner") < out.index("Title: later")
    assert "Due: 09/01/2024" in out
    assert out.count(RULE) == 2
    assert len(RULE) == 40
    assert " ↳ 10/02/2024 09:30 - Task created" in out


def test_edit_blank_answers_keep_values(state: AppState) -> None:
    task = state.store.create("Draft", "v1", date(2024, 3, 1))
    console = FakeConsole.scripted(["", "", "", "", "n"])

    assert registry.handle(state, f"/edit {task.id}", io=console) == "No changes."
    assert len(task.history) == 1


def test_edit_applies_answers(state: AppState) -> None:
    task = state.store.create("Draft", "v1", date(2024, 3, 1))
    console = FakeConsole.scripted(["Final", "", "02/03/2024", "medium", "y"])

    assert registry.handle(state, f"/edit {task.id}", io=console) == "✓ Task updated successfully!"
    assert task.title == "Final"
    assert task.description == "v1"
    assert task.due_date == date(2024, 3, 2)
    assert task.priority is Priority.MEDIUM
    assert task.is_complete is True
    assert len(task.history) == 5


def test_missing_and_malformed_ids_are_reported(state: AppState) -> None:
    assert registry.handle(state, "/edit 5", io=FakeConsole()) == "⚠️ Task 5 not found."
    assert registry.handle(state, "/delete abc") == "⚠️ Invalid ID format!"
    assert registry.handle(state, "/complete") == "⚠️ Task id required."


def test_delete_asks_for_confirmation(state: AppState) -> None:
    task = state.store.create("Old", "", date(2024, 3, 1))

    assert registry.handle(state, f"/delete {task.id}", io=FakeConsole.scripted(["n"])) == "Deletion cancelled."
    assert len(state.store.all_tasks()) == 1

    console = FakeConsole.scripted(["y"])
    assert registry.handle(state, f"/delete {task.id}", io=console) == "✓ Task deleted successfully!"
    assert console.prompts == ["Are you sure you want to delete 'Old'? (y/n): "]
    assert state.store.all_tasks() == []


def test_search_modes(state: AppState) -> None:
    state.store.create("Project Alpha", "", date(2024, 3, 1), Priority.HIGH)
    state.store.create("Groceries", "milk", date(2024, 1, 1))
    state.store.create("Sync", "update project plan", date(2024, 2, 1))

    text = registry.handle(state, "/search proj") or ""
    assert text.splitlines()[0] == "Found 2 matches:"
    assert " [1] Project Alpha - Due: 01/03/2024 (High)" in text

    assert (registry.handle(state, "/search priority HIGH") or "").startswith("Found 1 matches:")
    assert (registry.handle(state, "/search status pending") or "").startswith("Found 3 matches:")
    assert "Invalid status 'bogus'" in (registry.handle(state, "/search status bogus") or "")

    prompted = registry.handle(state, "5", io=FakeConsole.scripted(["MILK"])) or ""
    assert prompted.startswith("Found 1 matches:")


def test_search_mode_without_term_asks_for_it(state: AppState) -> None:
    state.store.create("Status report", "", date(2024, 3, 1))
    done = state.store.create("Filed", "", date(2024, 3, 2))
    state.store.mark_complete(done.id)

    console = FakeConsole.scripted(["complete"])
    reply = registry.handle(state, "/search status", io=console) or ""

    assert console.prompts == ["Status (pending/complete): "]
    assert reply.splitlines() == ["Found 1 matches:", " [2] Filed - Due: 02/03/2024 (Low)"]
    assert registry.handle(state, "/search priority") == "Usage: /search [text|status|priority] <term>"


def test_complete_reports_already_complete(state: AppState) -> None:
    task = state.store.create("Ship", "", date(2024, 3, 1))

    assert registry.handle(state, f"/complete {task.id}") == f"✓ Task {task.id} marked as complete."
    assert registry.handle(state, f"/complete {task.id}") == f"Task {task.id} is already complete."


def test_exit_stops_the_loop(state: AppState) -> None:
    assert state.running is True
    registry.handle(state, "6")
    assert state.running is False
