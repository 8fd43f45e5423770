# src/taskpad/tasks/notification_scheduler.py

from __future__ import annotations

"""
Reminder scheduling on top of the NotificationService port.

Nothing here raises to the caller:
- a failed schedule yields None (a task without a reminder is a valid state),
- a failed cancel is treated as "already cancelled",
- a denied/failed permission request yields False.
"""

import logging

from ..core.ports import Handle, NotificationContent, NotificationService, NotificationTrigger

logger = logging.getLogger(__name__)

DEFAULT_REMINDER_DELAY_SECONDS = 10.0
REMINDER_TITLE = "Task Reminder"


def build_reminder(task_id: str, text: str) -> NotificationContent:
    return {
        "title": REMINDER_TITLE,
        "body": f"Time to complete: {text}",
        "data": {"taskId": task_id},
    }


class NotificationScheduler:
    def __init__(
            self,
            service: NotificationService,
            *,
            delay_seconds: float = DEFAULT_REMINDER_DELAY_SECONDS,
    ) -> None:
        self._service = service
        self._delay_seconds = max(0.0, float(delay_seconds))

    @property
    def delay_seconds(self) -> float:
        return self._delay_seconds

    async def schedule(self, task_id: str, text: str) -> Handle | None:
        trigger: NotificationTrigger = {"delaySeconds": self._delay_seconds}
        try:
            handle = await self._service.schedule(build_reminder(task_id, text), trigger)
        except Exception:
            logger.exception("Failed to schedule reminder task_id=%s", task_id)
            return None

        if not handle:
            logger.warning("Notification service returned an empty handle task_id=%s", task_id)
            return None

        logger.debug("Reminder scheduled task_id=%s handle=%s delay=%.1fs", task_id, handle, self._delay_seconds)
        return str(handle)

    async def cancel(self, handle: Handle | None) -> None:
        if not handle:
            return
        try:
            await self._service.cancel(handle)
            logger.debug("Reminder cancelled handle=%s", handle)
        except Exception:
            # Unknown, already fired or transport error: nothing left to cancel.
            logger.debug("Reminder cancel ignored handle=%s", handle, exc_info=True)

    async def active_handles(self) -> set[Handle] | None:
        """Handles still pending in the backend, or None when it cannot tell."""
        try:
            return set(await self._service.scheduled_handles())
        except Exception:
            logger.exception("Failed to list scheduled reminders")
            return None

    async def request_permission(self) -> bool:
        try:
            status = await self._service.request_permission()
        except Exception:
            logger.exception("Notification permission request failed")
            return False

        if status != "granted":
            logger.warning("Notification permission %s; reminders will not fire.", status)
            return False
        return True
