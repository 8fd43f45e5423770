# src/taskpad/cli/main.py

"""
CLI entrypoint.

Initializes logging, builds AppState, restores the saved task list, asks for
reminder permission (advisory only) and runs the console REPL.
"""

from __future__ import annotations

import asyncio
import logging

from ..cli.bootstrap import create_initial_state
from ..config import get_settings
from ..connectors.console_connector import print_reminder, run_console_loop
from ..core.state import AppState
from ..logging_setup import setup_logging

logger = logging.getLogger(__name__)


async def _shutdown(state: AppState) -> None:
    """Best-effort shutdown: flush pending saves, then stop reminder timers."""
    try:
        await state.store.drain()
    except Exception:
        logger.exception("Failed to flush pending task effects.")

    service = state.reminder_service
    if service is not None and hasattr(service, "shutdown"):
        try:
            service.shutdown()
        except Exception:
            logger.debug("Reminder service shutdown failed.", exc_info=True)


async def run(state: AppState) -> None:
    await state.store.load()

    state.notifications_permitted = await state.notifications.request_permission()
    if not state.notifications_permitted:
        print("Permission required: enable notifications for task reminders.", flush=True)

    try:
        await run_console_loop(state)
    finally:
        await _shutdown(state)


def main() -> None:
    settings = get_settings()

    level_name = str(getattr(settings, "log_level", "INFO")).upper()
    console_level = getattr(logging, level_name, logging.INFO)
    setup_logging(log_dir=settings.log_dir, console_level=console_level)

    logger.info("Starting %s...", settings.app_name)

    state = create_initial_state(settings=settings, deliver=print_reminder)
    try:
        asyncio.run(run(state))
    except KeyboardInterrupt:
        logger.info("Interrupted.")
    logger.info("Bye.")


if __name__ == "__main__":
    main()
