# src/task_tracker/tasks/task_codec.py

from __future__ import annotations

import contextlib
import json
import logging
import os
from collections.abc import Callable, Iterable, Mapping
from datetime import date, datetime
from pathlib import Path
from typing import Any

from ..core.errors import PersistenceError
from .task_models import Priority, Task, parse_priority

logger = logging.getLogger(__name__)

# Legacy files stored Priority as the enum ordinal.
_LEGACY_PRIORITY = {0: Priority.LOW, 1: Priority.MEDIUM, 2: Priority.HIGH}


class _MalformedRecord(ValueError):
    pass


def _parse_datetime(raw: Any, field: str) -> datetime:
    if not isinstance(raw, str) or not raw.strip():
        raise _MalformedRecord(f"{field} must be an ISO date/time string")
    try:
        return datetime.fromisoformat(raw.strip())
    except ValueError:
        raise _MalformedRecord(f"{field} is not a valid date: {raw!r}") from None


def _decode_priority(raw: Any) -> Priority:
    if raw is None:
        return Priority.LOW
    if isinstance(raw, int) and not isinstance(raw, bool):
        if raw in _LEGACY_PRIORITY:
            return _LEGACY_PRIORITY[raw]
        raise _MalformedRecord(f"Priority out of range: {raw}")
    if isinstance(raw, str):
        parsed = parse_priority(raw)
        if parsed.ok and parsed.value is not None:
            return parsed.value
    raise _MalformedRecord(f"Priority is not Low/Medium/High: {raw!r}")


def _decode_task(raw: Any, now: datetime) -> Task:
    if not isinstance(raw, Mapping):
        raise _MalformedRecord("task record must be an object")

    tid = raw.get("Id")
    if not isinstance(tid, int) or isinstance(tid, bool) or tid < 1:
        raise _MalformedRecord(f"Id must be a positive integer, got {tid!r}")

    title = raw.get("Title")
    if not isinstance(title, str) or not title.strip():
        raise _MalformedRecord(f"task {tid}: Title is missing or empty")

    description = raw.get("Description")
    if description is None:
        description = ""
    if not isinstance(description, str):
        raise _MalformedRecord(f"task {tid}: Description must be a string")

    is_complete = raw.get("IsComplete", False)
    if not isinstance(is_complete, bool):
        raise _MalformedRecord(f"task {tid}: IsComplete must be a boolean")

    history = raw.get("History")
    if history is None:
        history = []
    if not isinstance(history, list) or not all(isinstance(h, str) for h in history):
        raise _MalformedRecord(f"task {tid}: History must be a list of strings")

    return Task(
        id=tid,
        title=title,
        description=description,
        due_date=_parse_datetime(raw.get("DueDate"), "DueDate").date(),
        # Records written without CreatedAt get the load time, as the first version did.
        created_at=(
            now if raw.get("CreatedAt") is None else _parse_datetime(raw["CreatedAt"], "CreatedAt")
        ),
        priority=_decode_priority(raw.get("Priority")),
        is_complete=is_complete,
        history=list(history),
    )


def _encode_task(task: Task) -> dict[str, Any]:
    due: date = task.due_date
    return {
        "Id": task.id,
        "Title": task.title,
        "Description": task.description,
        "DueDate": datetime(due.year, due.month, due.day).isoformat(),
        "Priority": task.priority.value,
        "IsComplete": task.is_complete,
        "CreatedAt": task.created_at.isoformat(),
        "History": list(task.history),
    }


def decode_tasks(data: Any, *, now: datetime | None = None) -> list[Task]:
    """Build the full task list from parsed JSON (all-or-nothing)."""
    if data is None:
        return []
    if not isinstance(data, list):
        raise _MalformedRecord("top-level value must be a list of tasks")
    now = now or datetime.now()
    tasks: list[Task] = []
    seen: set[int] = set()
    for raw in data:
        task = _decode_task(raw, now)
        if task.id in seen:
            raise _MalformedRecord(f"duplicate task id {task.id}")
        seen.add(task.id)
        tasks.append(task)
    return tasks


def encode_tasks(tasks: Iterable[Task]) -> list[dict[str, Any]]:
    return [_encode_task(t) for t in tasks]


class PersistenceCodec:
    """
    JSON file codec for the task list.

    - missing file -> empty list
    - bad JSON / bad record -> PersistenceError("deserialization")
    - OS errors -> PersistenceError("io")
    - records without CreatedAt get the clock time of the load
    - save writes a sibling .tmp file and replaces the target with it
    """

    def __init__(self, *, indent: int = 2, clock: Callable[[], datetime] | None = None) -> None:
        self._indent = indent
        self._clock = clock or datetime.now

    def load(self, path: str | Path) -> list[Task]:
        path = Path(path)
        if not path.exists():
            logger.info("Task file %s does not exist; starting empty.", path)
            return []

        try:
            raw = path.read_text("utf-8")
        except (OSError, UnicodeDecodeError) as exc:
            raise PersistenceError("io", path, f"Load Error: {exc}") from exc

        # Deeply nested arrays exhaust the decoder's recursion limit (RecursionError).
        try:
            tasks = decode_tasks(json.loads(raw), now=self._clock())
        except (json.JSONDecodeError, RecursionError, _MalformedRecord) as exc:
            raise PersistenceError("deserialization", path, f"Load Error: {exc}") from exc

        logger.info("Loaded %d tasks from %s", len(tasks), path)
        return tasks

    def save(self, path: str | Path, tasks: Iterable[Task]) -> None:
        path = Path(path)
        payload = json.dumps(encode_tasks(tasks), ensure_ascii=False, indent=self._indent)
        tmp = path.with_name(path.name + ".tmp")
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            tmp.write_text(payload + "\n", "utf-8")
            os.replace(tmp, path)
        except OSError as exc:
            with contextlib.suppress(OSError):
                tmp.unlink(missing_ok=True)
            raise PersistenceError("io", path, f"Save Error: {exc}") from exc
        logger.info("Saved tasks to %s", path)
