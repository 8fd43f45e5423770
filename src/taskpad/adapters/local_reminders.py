# src/taskpad/adapters/local_reminders.py

from __future__ import annotations

"""
In-process NotificationService.

Reminders are timers on the running asyncio loop; when one fires, the
injected `deliver` callback receives the notification content (the console
connector prints it). Handles do not survive a restart: handles loaded
from a previous run are not listed by scheduled_handles(), so the store clears
them on load.
"""

import asyncio
import logging
import uuid
from collections.abc import Callable

from ..core.ports import Handle, NotificationContent, NotificationTrigger, PermissionStatus

logger = logging.getLogger(__name__)

Deliver = Callable[[NotificationContent], None]


class LocalReminderService:
    def __init__(self, deliver: Deliver, *, enabled: bool = True) -> None:
        self._deliver = deliver
        self._enabled = enabled
        self._timers: dict[Handle, asyncio.TimerHandle] = {}

    @property
    def active(self) -> int:
        return len(self._timers)

    async def request_permission(self) -> PermissionStatus:
        return "granted" if self._enabled else "denied"

    async def schedule(self, content: NotificationContent, trigger: NotificationTrigger) -> Handle:
        if not self._enabled:
            raise PermissionError("reminders are disabled")

        delay = max(0.0, float(trigger.get("delaySeconds", 0.0)))
        handle = uuid.uuid4().hex
        loop = asyncio.get_running_loop()
        self._timers[handle] = loop.call_later(delay, self._fire, handle, content)
        logger.debug("Reminder timer set handle=%s delay=%.1fs", handle, delay)
        return handle

    async def cancel(self, handle: Handle) -> None:
        timer = self._timers.pop(handle, None)
        if timer is None:
            raise LookupError(f"unknown reminder handle: {handle}")
        timer.cancel()

    async def scheduled_handles(self) -> set[Handle]:
        return set(self._timers)

    def shutdown(self) -> None:
        """Cancel every outstanding timer."""
        for timer in self._timers.values():
            timer.cancel()
        self._timers.clear()

    def _fire(self, handle: Handle, content: NotificationContent) -> None:
        self._timers.pop(handle, None)
        try:
            self._deliver(content)
        except Exception:
            logger.exception("Reminder delivery failed handle=%s", handle)
