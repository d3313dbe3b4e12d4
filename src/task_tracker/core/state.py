# src/task_tracker/core/state.py

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from ..core.errors import PersistenceError
from ..core.ports import TaskCodec, TaskRepo


@dataclass(slots=True)
class AppState:
    """
    Everything the shell needs for one run.

    Built once by cli.bootstrap.create_initial_state and passed explicitly;
    there is no process-wide task list.
    """

    settings: object
    store: TaskRepo
    codec: TaskCodec
    tasks_path: Path

    # Set when the startup load failed; the shutdown save keeps a backup of the bad file.
    load_error: PersistenceError | None = None
    running: bool = True
