# src/taskpad/cli/bootstrap.py

"""
CLI bootstrap helpers.

This module is the "composition root":
- loads settings once,
- ensures the local (gitignored) data directory exists,
- wires concrete port implementations into the task store and AppState.
"""

from __future__ import annotations

import logging

from ..adapters.file_storage import JsonFileStorage
from ..adapters.local_reminders import Deliver, LocalReminderService
from ..config import get_settings
from ..core.state import AppState
from ..tasks.notification_scheduler import NotificationScheduler
from ..tasks.persistence import PersistenceGate
from ..tasks.task_store import TaskStore

logger = logging.getLogger(__name__)


def _log_reminder(content) -> None:
    logger.info("Reminder: %s - %s", content.get("title"), content.get("body"))


def create_initial_state(*, settings=None, deliver: Deliver | None = None) -> AppState:
    """
    Create AppState from the provided settings.

    If settings is None, falls back to get_settings(). `deliver` receives fired
    reminders; by default they are only logged.
    """
    if settings is None:
        settings = get_settings()

    settings.data_dir.mkdir(parents=True, exist_ok=True)

    reminder_service = LocalReminderService(
        deliver or _log_reminder,
        enabled=bool(getattr(settings, "reminders_enabled", True)),
    )
    notifications = NotificationScheduler(
        reminder_service,
        delay_seconds=settings.reminder_delay_seconds,
    )
    persistence = PersistenceGate(JsonFileStorage(settings.data_dir))

    state = AppState(
        settings=settings,
        store=TaskStore(notifications, persistence),
        notifications=notifications,
        reminder_service=reminder_service,
    )
    logger.debug("State wired data_dir=%s delay=%.1fs", settings.data_dir, notifications.delay_seconds)
    return state
