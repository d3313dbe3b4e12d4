# src/task_tracker/connectors/console_connector.py

from __future__ import annotations

import logging

from ..cli.commands import registry as command_registry
from ..core.ports import ConsoleIO
from ..core.state import AppState

logger = logging.getLogger(__name__)


class StdConsole:
    """ConsoleIO over stdin/stdout."""

    def ask(self, prompt: str) -> str:
        return input(prompt)

    def emit(self, text: str) -> None:
        print(text, flush=True)


def _banner(app_name: str) -> str:
    return (
        f"🚀 {app_name}\n"
        "1. 📋 List Tasks      (/list)\n"
        "2. 📝 Add Task        (/add)\n"
        "3. ✏️ Edit Task       (/edit <id>)\n"
        "4. 🗑️ Delete Task     (/delete <id>)\n"
        "5. 🔍 Search Tasks    (/search)\n"
        "6. 💾 Save and Exit   (/exit)\n"
        "Use /help for all commands."
    )


def run_console_loop(state: AppState, io: ConsoleIO | None = None) -> None:
    io = io or StdConsole()
    app_name = str(getattr(state.settings, "app_name", "Task Manager"))
    logger.info("Console connector started (tasks=%s).", len(state.store.all_tasks()))

    io.emit(_banner(app_name))
    if state.load_error is not None:
        io.emit(f"\n⚠️ {state.load_error}\nStarting with an empty task list.")

    while state.running:
        try:
            user_input = io.ask("\nEnter your choice: ").strip()
        except EOFError:
            logger.info("Console EOF received, exiting.")
            break
        except KeyboardInterrupt:
            logger.info("Console KeyboardInterrupt, exiting.")
            print()
            break

        if not user_input:
            continue

        try:
            reply = command_registry.handle(state, user_input, io=io)
        except (EOFError, KeyboardInterrupt):
            logger.info("Input closed inside a command, exiting.")
            print()
            break
        except Exception:
            logger.exception("Command handler crashed.")
            reply = "Internal error while handling a command."

        if reply is None:
            reply = "⚠️ Invalid choice! Use /help to list available commands."
        io.emit(reply)

    logger.info("Console connector finished.")
