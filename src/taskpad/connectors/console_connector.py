# src/taskpad/connectors/console_connector.py

from __future__ import annotations

import asyncio
import logging
from datetime import datetime

from ..cli.commands import CommandEmitter, add_task, render_list, save_edit
from ..cli.commands import registry as command_registry
from ..core.ports import NotificationContent
from ..core.state import AppState

logger = logging.getLogger(__name__)


def _ts_local() -> str:
    return datetime.now().astimezone().strftime("%Y-%m-%d %H:%M:%S")


def _print_ts(text: str) -> None:
    print(f"[{_ts_local()}] {text}", flush=True)


def print_reminder(content: NotificationContent) -> None:
    """Deliver callback for LocalReminderService."""
    _print_ts(f"[REMINDER] {content.get('title', '')}: {content.get('body', '')}")


def _prompt(state: AppState) -> str:
    if state.store.editing_id is not None:
        return "(editing) >>> "
    return f"[{state.input_priority.value[0].upper()}] >>> "


def handle_line(state: AppState, line: str, emit: CommandEmitter | None = None) -> str:
    """
    Route one input line: slash commands go to the registry; plain text
    replaces the task being edited, or adds a new task otherwise.
    """
    reply = command_registry.handle(state, line, emit=emit)
    if reply is not None:
        return reply
    if state.store.editing_id is not None:
        return save_edit(state, line)
    return add_task(state, line)


async def run_console_loop(state: AppState) -> None:
    """
    Async REPL.

    Input is read in a worker thread so reminder timers and detached task
    effects keep running on the loop while the prompt waits.
    """
    logger.info("Console connector started.")
    _print_ts("[CONSOLE] Type a task to add it. Use /help for commands. Use /exit to quit.\n")
    print(render_list(state), flush=True)

    def emit(text: str) -> None:
        _print_ts(text)

    while True:
        try:
            user_input = (await asyncio.to_thread(input, _prompt(state))).strip()
        except EOFError:
            logger.info("Console EOF received, exiting.")
            break
        except KeyboardInterrupt:
            logger.info("Console KeyboardInterrupt, exiting.")
            print()
            break

        if not user_input:
            continue

        if user_input.lower() in ("/exit", "/quit"):
            logger.info("Console exit command received.")
            break

        try:
            reply = handle_line(state, user_input, emit=emit)
        except Exception:
            logger.exception("Command failed: %s", user_input)
            reply = "Command failed (see logs)."

        print(reply, flush=True)
