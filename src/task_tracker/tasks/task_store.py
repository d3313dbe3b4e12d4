# src/task_tracker/tasks/task_store.py

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable
from datetime import date, datetime

from ..core.errors import DuplicateTaskIdError, NotFoundError, ValidationError
from .task_models import (
    Priority,
    SearchKind,
    StatusFilter,
    Task,
    TaskChanges,
    format_date,
    history_entry,
    parse_priority,
    parse_search_kind,
    parse_status,
)

logger = logging.getLogger(__name__)

Clock = Callable[[], datetime]


class TaskStore:
    """
    In-memory task store.

    - ids are allocated from a counter and never reused, even after delete
    - the counter starts at max(loaded ids) + 1 (or 1 for an empty store)
    - every mutation appends a timestamped line to the task's history
    - collection order is insertion order; presentation order comes from list_sorted()
    """

    def __init__(self, tasks: Iterable[Task] | None = None, *, clock: Clock | None = None) -> None:
        self._clock: Clock = clock or datetime.now
        self._tasks: list[Task] = []
        seen: set[int] = set()
        for task in tasks or ():
            if task.id in seen:
                raise DuplicateTaskIdError(task.id)
            seen.add(task.id)
            self._tasks.append(task)
        self._next_id = max(seen) + 1 if seen else 1
        logger.debug("TaskStore ready total=%s next_id=%s", len(self._tasks), self._next_id)

    def __len__(self) -> int:
        return len(self._tasks)

    @property
    def next_id(self) -> int:
        return self._next_id

    # ---- low-level helpers ----

    def _allocate_id(self) -> int:
        nid = self._next_id
        self._next_id += 1
        return nid

    def _append(self, task: Task, text: str) -> None:
        task.history.append(history_entry(self._clock(), text))

    @staticmethod
    def _clean_title(title: str | None) -> str:
        cleaned = (title or "").strip()
        if not cleaned:
            raise ValidationError("Title cannot be empty!")
        return cleaned

    # ---- queries ----

    def all_tasks(self) -> list[Task]:
        return list(self._tasks)

    def find_by_id(self, task_id: int) -> Task:
        for task in self._tasks:
            if task.id == task_id:
                return task
        raise NotFoundError(task_id)

    def list_sorted(self) -> list[Task]:
        """Due date ascending, then priority High -> Low."""
        return sorted(self._tasks, key=lambda t: (t.due_date, -t.priority.rank))

    def search(self, kind: SearchKind | str, term: str) -> list[Task]:
        """
        Filter tasks without re-sorting them.

        text     -> case-insensitive substring of title or description
        status   -> "pending" / "complete"
        priority -> "low" / "medium" / "high"
        """
        if not isinstance(kind, SearchKind):
            kind = parse_search_kind(kind).unwrap()

        if kind is SearchKind.TEXT:
            needle = (term or "").casefold()
            return [
                t
                for t in self._tasks
                if needle in t.title.casefold() or needle in t.description.casefold()
            ]

        if kind is SearchKind.STATUS:
            want_complete = parse_status(term).unwrap() is StatusFilter.COMPLETE
            return [t for t in self._tasks if t.is_complete == want_complete]

        priority = parse_priority(term).unwrap()
        return [t for t in self._tasks if t.priority is priority]

    # ---- mutations ----

    def create(
        self,
        title: str,
        description: str,
        due_date: date,
        priority: Priority = Priority.LOW,
    ) -> Task:
        clean_title = self._clean_title(title)
        now = self._clock()
        task = Task(
            id=self._allocate_id(),
            title=clean_title,
            description=(description or "").strip(),
            due_date=due_date,
            created_at=now,
            priority=priority,
        )
        task.history.append(history_entry(now, "Task created"))
        self._tasks.append(task)
        logger.debug("Task created id=%s due=%s priority=%s", task.id, due_date, priority.value)
        return task

    def update(self, task_id: int, changes: TaskChanges) -> Task:
        task = self.find_by_id(task_id)
        # Validate before touching anything so a rejected edit leaves no trace.
        new_title = self._clean_title(changes.title) if changes.title is not None else None

        if new_title is not None and new_title != task.title:
            self._append(task, f"Title changed from '{task.title}' to '{new_title}'")
            task.title = new_title

        if changes.description is not None:
            new_desc = changes.description.strip()
            if new_desc != task.description:
                self._append(
                    task, f"Description changed from '{task.description}' to '{new_desc}'"
                )
                task.description = new_desc

        if changes.due_date is not None and changes.due_date != task.due_date:
            self._append(
                task,
                f"Due date changed from '{format_date(task.due_date)}' "
                f"to '{format_date(changes.due_date)}'",
            )
            task.due_date = changes.due_date

        if changes.priority is not None and changes.priority is not task.priority:
            self._append(
                task,
                f"Priority changed from '{task.priority.value}' to '{changes.priority.value}'",
            )
            task.priority = changes.priority

        if changes.toggle_complete:
            task.is_complete = not task.is_complete
            self._append(task, f"Status changed to {task.status_label}")

        logger.debug("Task updated id=%s history=%s", task.id, len(task.history))
        return task

    def delete(self, task_id: int) -> Task:
        task = self.find_by_id(task_id)
        self._tasks.remove(task)
        logger.debug("Task deleted id=%s", task_id)
        return task

    def mark_complete(self, task_id: int) -> bool:
        """Return False if the task was already complete (nothing is recorded)."""
        task = self.find_by_id(task_id)
        if task.is_complete:
            return False
        task.is_complete = True
        self._append(task, "Task marked as complete")
        logger.debug("Task marked complete id=%s", task_id)
        return True
