# src/task_tracker/cli/render.py

"""
Plain-text rendering of tasks for the console.

Display contract:
- dates as dd/MM/yyyy
- history lines stored as "<timestamp> - <description>" and shown verbatim
- a 40-character rule after every task in a listing
"""

from __future__ import annotations

from collections.abc import Iterable

from ..tasks.task_models import HISTORY_TS_FORMAT, Task, format_date

RULE = "─" * 40


def format_task(task: Task) -> str:
    lines = [
        f"ID: {task.id}",
        f"Title: {task.title}",
        f"Description: {task.description}",
        f"Due: {format_date(task.due_date)}",
        f"Priority: {task.priority.value}",
        f"Status: {'✅ Complete' if task.is_complete else '⏳ Pending'}",
        f"Created: {task.created_at.strftime(HISTORY_TS_FORMAT)}",
    ]
    if task.history:
        lines.append("")
        lines.append("History:")
        lines.extend(f" ↳ {entry}" for entry in task.history)
    return "\n".join(lines)


def format_task_list(tasks: Iterable[Task]) -> str:
    blocks = [f"{format_task(t)}\n{RULE}" for t in tasks]
    if not blocks:
        return "No tasks found."
    return "\n".join(blocks)


def format_search_results(tasks: list[Task]) -> str:
    lines = [f"Found {len(tasks)} matches:"]
    for t in tasks:
        lines.append(f" [{t.id}] {t.title} - Due: {format_date(t.due_date)} ({t.priority.value})")
    return "\n".join(lines)
