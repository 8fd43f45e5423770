# src/taskpad/core/state.py

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from ..tasks.notification_scheduler import NotificationScheduler
from ..tasks.task_models import Priority
from ..tasks.task_store import TaskStore


@dataclass
class AppState:
    """
    Everything a connector needs, wired once in cli.bootstrap.

    `settings` is typed loosely so tests can pass a SimpleNamespace.
    """

    settings: Any
    store: TaskStore
    notifications: NotificationScheduler

    # Concrete reminder backend (LocalReminderService in the CLI); kept for shutdown.
    reminder_service: Any = None

    # Priority used by the next add (cycled with /priority).
    input_priority: Priority = Priority.MEDIUM
    notifications_permitted: bool = True
