# tests/fakes.py

from __future__ import annotations

import asyncio
from dataclasses import dataclass, field

from taskpad.core.ports import Handle, NotificationContent, NotificationTrigger, PermissionStatus


@dataclass(slots=True)
class ScheduledCall:
    content: NotificationContent
    trigger: NotificationTrigger


class FakeNotificationService:
    """
    Deterministic NotificationService for unit tests.

    - Captures schedule/cancel calls for assertions
    - Hands out handles "n-1", "n-2", ... and tracks which are still active
    - `hold` (an asyncio.Event) lets a test keep schedule() unresolved
      until it decides to release it
    """

    def __init__(self, *, permission: PermissionStatus = "granted") -> None:
        self.permission = permission
        self.scheduled: list[ScheduledCall] = []
        self.cancelled: list[Handle] = []
        self.fail_schedule = False
        self.fail_cancel = False
        self.fail_permission = False
        self.fail_list = False
        self.active: set[Handle] = set()
        self.hold: asyncio.Event | None = None
        self._counter = 0

    async def schedule(self, content: NotificationContent, trigger: NotificationTrigger) -> Handle:
        self.scheduled.append(ScheduledCall(content=content, trigger=trigger))
        if self.hold is not None:
            await self.hold.wait()
        if self.fail_schedule:
            raise PermissionError("notifications denied")
        self._counter += 1
        handle = f"n-{self._counter}"
        self.active.add(handle)
        return handle

    async def cancel(self, handle: Handle) -> None:
        self.cancelled.append(handle)
        if self.fail_cancel:
            raise LookupError(handle)
        self.active.discard(handle)

    async def scheduled_handles(self) -> set[Handle]:
        if self.fail_list:
            raise RuntimeError("scheduler unavailable")
        return set(self.active)

    async def request_permission(self) -> PermissionStatus:
        if self.fail_permission:
            raise RuntimeError("permission dialog unavailable")
        return self.permission


@dataclass(slots=True)
class FakeStorage:
    """In-memory StorageService that records every write."""

    data: dict[str, bytes] = field(default_factory=dict)
    writes: list[tuple[str, bytes]] = field(default_factory=list)
    fail_read: bool = False
    fail_write: bool = False

    async def read(self, key: str) -> bytes | None:
        if self.fail_read:
            raise OSError("disk unavailable")
        return self.data.get(key)

    async def write(self, key: str, data: bytes) -> None:
        if self.fail_write:
            raise OSError("disk full")
        self.writes.append((key, data))
        self.data[key] = data
