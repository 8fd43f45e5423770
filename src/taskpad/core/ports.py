# src/taskpad/core/ports.py

from __future__ import annotations

"""
Ports (interfaces) used by the core.

The task store depends on Protocols instead of concrete implementations.
This keeps the reminder backend and the storage backend swappable and makes
testing easier (tests inject in-memory fakes that record calls).
"""

from typing import Any, Awaitable, Literal, Protocol, TypedDict

Handle = str
# Opaque identifier returned by the notification service for a scheduled reminder.

PermissionStatus = Literal["granted", "denied"]


class NotificationContent(TypedDict):
    title: str
    body: str
    data: dict[str, Any]


class NotificationTrigger(TypedDict):
    delaySeconds: float


class NotificationService(Protocol):
    """
    Reminder backend.

    Every call may fail (denied permission, transport error, unknown handle).
    Callers in the core never let those failures escape.
    """

    def schedule(
            self,
            content: NotificationContent,
            trigger: NotificationTrigger,
    ) -> Awaitable[Handle]: ...

    def cancel(self, handle: Handle) -> Awaitable[None]: ...

    def scheduled_handles(self) -> Awaitable[set[Handle]]: ...

    def request_permission(self) -> Awaitable[PermissionStatus]: ...


class StorageService(Protocol):
    """Key/value storage. `read` returns None when the key is absent."""

    def read(self, key: str) -> Awaitable[bytes | None]: ...

    def write(self, key: str, data: bytes) -> Awaitable[None]: ...
