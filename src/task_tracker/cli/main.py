# src/task_tracker/cli/main.py

"""
CLI entrypoint.

Initializes logging, builds AppState (loading the task file),
runs the console REPL, and saves the task file on the way out.
"""

from __future__ import annotations

import logging

from ..cli.bootstrap import create_initial_state, save_tasks
from ..config import get_settings
from ..connectors.console_connector import run_console_loop
from ..logging_setup import setup_logging

logger = logging.getLogger(__name__)


def main() -> None:
    settings = get_settings()

    level_name = str(getattr(settings, "log_level", "WARNING")).upper()
    console_level = getattr(logging, level_name, logging.WARNING)
    setup_logging(log_dir=settings.data_dir, console_level=console_level)

    logger.info("Starting %s...", settings.app_name)

    state = create_initial_state(settings=settings)
    try:
        run_console_loop(state)
    finally:
        if not save_tasks(state):
            print(f"⚠️ Save Error: tasks could not be written to {state.tasks_path}")
        logger.info("Bye.")


if __name__ == "__main__":
    main()
