# src/task_tracker/core/ports.py

from __future__ import annotations

"""
Ports (interfaces) used by the shell.

The shell depends on Protocols instead of concrete implementations,
so tests can hand it fakes and the storage format stays swappable.
"""

from collections.abc import Iterable
from datetime import date
from pathlib import Path
from typing import Any, Protocol


class TaskRepo(Protocol):
    def all_tasks(self) -> list[Any]: ...
    def find_by_id(self, task_id: int) -> Any: ...
    def list_sorted(self) -> list[Any]: ...
    def search(self, kind: Any, term: str) -> list[Any]: ...

    def create(self, title: str, description: str, due_date: date, priority: Any = ...) -> Any: ...
    def update(self, task_id: int, changes: Any) -> Any: ...
    def delete(self, task_id: int) -> Any: ...
    def mark_complete(self, task_id: int) -> bool: ...


class TaskCodec(Protocol):
    def load(self, path: str | Path) -> list[Any]: ...
    def save(self, path: str | Path, tasks: Iterable[Any]) -> None: ...


class ConsoleIO(Protocol):
    """How interactive command handlers talk to the user."""

    def ask(self, prompt: str) -> str: ...
    def emit(self, text: str) -> None: ...
