# src/task_tracker/cli/commands.py

from __future__ import annotations

import inspect
import logging
from collections.abc import Callable
from datetime import date
from typing import TypeVar, cast

from ..core.errors import TaskTrackerError, ValidationError
from ..core.ports import ConsoleIO
from ..core.state import AppState
from ..tasks.task_models import (
    Priority,
    SearchKind,
    TaskChanges,
    format_date,
    parse_due_date,
    parse_priority,
    parse_search_kind,
)
from .render import format_search_results, format_task, format_task_list

T = TypeVar("T")

CommandHandler2 = Callable[[AppState, list[str]], str]
CommandHandler3 = Callable[[AppState, list[str], ConsoleIO | None], str]
CommandHandler = CommandHandler2 | CommandHandler3

logger = logging.getLogger(__name__)


class CommandRegistry:
    """Slash-command registry used by the console (/list, /add, ...)."""

    def __init__(self) -> None:
        self._handlers: dict[str, CommandHandler] = {}
        self._help: dict[str, str] = {}

    def register(
        self,
        name: str,
        handler: CommandHandler,
        help_text: str,
        aliases: list[str] | None = None,
    ) -> None:
        aliases = aliases or []
        key = name.lower()
        self._handlers[key] = handler
        self._help[key] = help_text
        for alias in aliases:
            self._handlers[alias.lower()] = handler

    def handle(self, state: AppState, line: str, io: ConsoleIO | None = None) -> str | None:
        """
        Handle a string like "/command args" (or a bare menu number like "2").
        Returns a reply string or None if not a command.

        ValidationError / NotFoundError raised by handlers become the reply text.
        """
        if line.startswith("/"):
            parts = line[1:].split()
        elif line.strip().isdigit():
            parts = [line.strip()]
        else:
            return None

        if not parts:
            return "Empty command. Use /help to list available commands."

        name = parts[0].lower()
        args = parts[1:]

        handler = self._handlers.get(name)
        if not handler:
            return f"Unknown command: /{name}. Use /help to list available commands."

        try:
            nparams = len(inspect.signature(handler).parameters)
        except Exception:
            nparams = 3

        try:
            if nparams >= 3:
                h3 = cast(CommandHandler3, handler)
                return h3(state, args, io)
            h2 = cast(CommandHandler2, handler)
            return h2(state, args)
        except TaskTrackerError as exc:
            logger.debug("Command /%s rejected: %s", name, exc)
            return f"⚠️ {exc}"

    def build_help(self) -> str:
        lines = ["Available commands:"]
        for name, help_text in self._help.items():
            lines.append(f"  /{name} - {help_text}")
        return "\n".join(lines)


registry = CommandRegistry()


# ---- input helpers ----


def _parse_id(raw: str | None) -> int:
    text = (raw or "").strip().rstrip(".")
    if not text.isdigit():
        raise ValidationError("Invalid ID format!")
    return int(text)


def _id_from(args: list[str], io: ConsoleIO | None) -> int:
    if args:
        return _parse_id(args[0])
    if io is None:
        raise ValidationError("Task id required.")
    return _parse_id(io.ask("Enter Task ID: "))


def _ask_until(io: ConsoleIO, prompt: str, parse: Callable[[str], T]) -> T:
    """Re-prompt until `parse` accepts the answer."""
    while True:
        answer = io.ask(prompt)
        try:
            return parse(answer)
        except ValidationError as exc:
            io.emit(f"⚠️ {exc}")


def _title(answer: str) -> str:
    cleaned = answer.strip()
    if not cleaned:
        raise ValidationError("Title cannot be empty!")
    return cleaned


def _due_date_or_today(answer: str) -> date:
    return parse_due_date(answer) if answer.strip() else date.today()


def _due_date_or_keep(answer: str) -> date | None:
    return parse_due_date(answer) if answer.strip() else None


def _priority_or(default: Priority | None) -> Callable[[str], Priority | None]:
    def parse(answer: str) -> Priority | None:
        if not answer.strip():
            return default
        return parse_priority(answer).unwrap()

    return parse


def _confirmed(answer: str) -> bool:
    return answer.strip().lower() in ("y", "yes")


# ---- handlers ----


def cmd_help(state: AppState, args: list[str]) -> str:
    return registry.build_help()


def cmd_list(state: AppState, args: list[str]) -> str:
    return format_task_list(state.store.list_sorted())


def cmd_show(state: AppState, args: list[str], io: ConsoleIO | None = None) -> str:
    task = state.store.find_by_id(_id_from(args, io))
    return format_task(task)


def cmd_add(state: AppState, args: list[str], io: ConsoleIO | None = None) -> str:
    """
    /add              -> prompt for every field
    /add <title...>   -> inline title, prompt for the rest
    """
    inline_title = " ".join(args).strip()
    if io is None:
        if not inline_title:
            return "Usage: /add <title>"
        task = state.store.create(inline_title, "", date.today())
        return f"✓ Task {task.id} added successfully!"

    title = inline_title or _ask_until(io, "Title: ", _title)
    description = io.ask("Description: ")
    due = _ask_until(io, "Due Date (dd/MM/yyyy, blank = today): ", _due_date_or_today)
    priority = _ask_until(io, "Priority (Low/Medium/High, blank = Low): ", _priority_or(Priority.LOW))

    task = state.store.create(title, description, due, priority or Priority.LOW)
    return f"✓ Task {task.id} added successfully!"


def cmd_edit(state: AppState, args: list[str], io: ConsoleIO | None = None) -> str:
    if io is None:
        return "Usage: /edit <id> (interactive console only)"

    task = state.store.find_by_id(_id_from(args, io))
    io.emit("Leave field blank to keep current value\n")

    new_title = io.ask(f"Current Title: {task.title}\nNew Title: ").strip() or None
    new_desc = io.ask(f"Current Description: {task.description}\nNew Description: ").strip() or None
    new_due = _ask_until(
        io,
        f"Current Due Date: {format_date(task.due_date)}\nNew Due Date (dd/MM/yyyy): ",
        _due_date_or_keep,
    )
    new_priority = _ask_until(
        io,
        f"Current Priority: {task.priority.value}\nNew Priority (Low/Medium/High): ",
        _priority_or(None),
    )
    toggle = _confirmed(io.ask(f"Current Status: {task.status_label}\nToggle status? (y/n): "))

    changes = TaskChanges(
        title=new_title,
        description=new_desc,
        due_date=new_due,
        priority=new_priority,
        toggle_complete=toggle,
    )
    if changes.is_empty():
        return "No changes."
    state.store.update(task.id, changes)
    return "✓ Task updated successfully!"


def cmd_delete(state: AppState, args: list[str], io: ConsoleIO | None = None) -> str:
    task = state.store.find_by_id(_id_from(args, io))

    confirm = bool(getattr(state.settings, "confirm_delete", True))
    if confirm and io is not None:
        answer = io.ask(f"Are you sure you want to delete '{task.title}'? (y/n): ")
        if not _confirmed(answer):
            return "Deletion cancelled."

    state.store.delete(task.id)
    return "✓ Task deleted successfully!"


def cmd_complete(state: AppState, args: list[str], io: ConsoleIO | None = None) -> str:
    task_id = _id_from(args, io)
    if state.store.mark_complete(task_id):
        return f"✓ Task {task_id} marked as complete."
    return f"Task {task_id} is already complete."


_SEARCH_PROMPTS = {
    SearchKind.TEXT: "Search term: ",
    SearchKind.STATUS: "Status (pending/complete): ",
    SearchKind.PRIORITY: "Priority (Low/Medium/High): ",
}


def cmd_search(state: AppState, args: list[str], io: ConsoleIO | None = None) -> str:
    """
    /search <term...>                  -> text search
    /search text|status|priority <term>
    /search [text|status|priority]     -> prompt for the term
    """
    kind = SearchKind.TEXT
    if args:
        parsed = parse_search_kind(args[0])
        if parsed.ok and parsed.value is not None:
            kind = parsed.value
            args = args[1:]

    term = " ".join(args)
    if not term:
        if io is None:
            return "Usage: /search [text|status|priority] <term>"
        term = io.ask(_SEARCH_PROMPTS[kind])

    return format_search_results(state.store.search(kind, term))


def cmd_exit(state: AppState, args: list[str]) -> str:
    state.running = False
    return "Saving tasks..."


registry.register("list", cmd_list, help_text="List tasks by due date, then priority.", aliases=["ls", "1"])
registry.register("add", cmd_add, help_text="Add a task: /add [title].", aliases=["2"])
registry.register("edit", cmd_edit, help_text="Edit a task: /edit <id>.", aliases=["3"])
registry.register("delete", cmd_delete, help_text="Delete a task: /delete <id>.", aliases=["rm", "4"])
registry.register(
    "search",
    cmd_search,
    help_text="Search: /search [text|status|priority] <term>.",
    aliases=["find", "5"],
)
registry.register("complete", cmd_complete, help_text="Mark a task complete: /complete <id>.", aliases=["done"])
registry.register("show", cmd_show, help_text="Show one task with its history: /show <id>.")
registry.register("help", cmd_help, help_text="Show available commands.", aliases=["h", "?"])
registry.register("exit", cmd_exit, help_text="Save and exit.", aliases=["quit", "6"])
