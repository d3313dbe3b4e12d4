# src/task_tracker/cli/bootstrap.py

"""
CLI bootstrap helpers.

This module is the "composition root":
- loads settings once,
- loads the task file through the codec and builds the TaskStore,
- saves the store back at shutdown.

Persistence failures are logged and reported, never fatal.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path

from ..config import get_settings
from ..core.errors import PersistenceError
from ..core.ports import TaskCodec
from ..core.state import AppState
from ..tasks.task_codec import PersistenceCodec
from ..tasks.task_store import Clock, TaskStore

logger = logging.getLogger(__name__)


def create_initial_state(
    *,
    settings=None,
    codec: TaskCodec | None = None,
    clock: Clock | None = None,
) -> AppState:
    """
    Create AppState from the provided settings.

    Keeping settings injectable makes the app easier to test and avoids hidden global config reads.
    If settings is None, falls back to get_settings().
    """
    if settings is None:
        settings = get_settings()
    if codec is None:
        codec = PersistenceCodec(clock=clock)

    tasks_path = Path(settings.tasks_path)
    load_error: PersistenceError | None = None
    try:
        tasks = codec.load(tasks_path)
    except PersistenceError as exc:
        logger.warning("Could not load tasks (%s): %s. Starting with an empty list.", exc.kind, exc)
        load_error = exc
        tasks = []

    return AppState(
        settings=settings,
        store=TaskStore(tasks, clock=clock),
        codec=codec,
        tasks_path=tasks_path,
        load_error=load_error,
    )


def _backup_unreadable_file(path: Path) -> Path | None:
    if not path.exists():
        return None
    backup = path.with_name(path.name + ".bak")
    os.replace(path, backup)
    logger.warning("Kept unreadable task file as %s", backup)
    return backup


def save_tasks(state: AppState) -> bool:
    """Write the store back to disk. Returns False (after logging) on failure."""
    try:
        if state.load_error is not None:
            _backup_unreadable_file(state.tasks_path)
            state.load_error = None
        state.codec.save(state.tasks_path, state.store.all_tasks())
    except PersistenceError as exc:
        logger.error("Could not save tasks (%s): %s", exc.kind, exc)
        return False
    except OSError:
        logger.exception("Could not back up unreadable task file %s", state.tasks_path)
        return False
    logger.info("Saved %d tasks to %s", len(state.store.all_tasks()), state.tasks_path)
    return True
