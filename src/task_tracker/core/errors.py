# src/task_tracker/core/errors.py

"""Error taxonomy shared by the store, the codec and the shell."""

from __future__ import annotations

from pathlib import Path
from typing import Literal

PersistenceErrorKind = Literal["deserialization", "io"]


class TaskTrackerError(Exception):
    """Base exception for task tracker errors."""

    pass


class ValidationError(TaskTrackerError):
    """Raised when user input is rejected (empty title, bad date, unknown priority...)."""

    pass


class NotFoundError(TaskTrackerError):
    """Raised when no task has the requested id."""

    def __init__(self, task_id: int) -> None:
        super().__init__(f"Task {task_id} not found.")
        self.task_id = task_id


class PersistenceError(TaskTrackerError):
    """
    Raised when the task file cannot be read or written.

    kind:
    - "deserialization": the file exists but its content is not a valid task list
    - "io": the operating system refused the read/write
    """

    def __init__(self, kind: PersistenceErrorKind, path: str | Path, reason: str) -> None:
        super().__init__(f"{reason} ({path})")
        self.kind = kind
        self.path = Path(path)
        self.reason = reason


class DuplicateTaskIdError(TaskTrackerError):
    """Raised when a store is seeded with two tasks sharing one id."""

    def __init__(self, task_id: int) -> None:
        super().__init__(f"Duplicate task id {task_id}.")
        self.task_id = task_id
