# src/taskpad/tasks/task_store.py

from __future__ import annotations

import asyncio
import logging
import uuid
from collections.abc import Callable, Coroutine
from dataclasses import dataclass, replace
from typing import Any

from .notification_scheduler import NotificationScheduler
from .persistence import PersistenceGate
from .task_models import Priority, Task

logger = logging.getLogger(__name__)

IdFactory = Callable[[], str]


def _default_id() -> str:
    return uuid.uuid4().hex


@dataclass(slots=True, frozen=True)
class Effect:
    """A detached side effect spawned by a mutation ("schedule", "cancel" or "save")."""

    kind: str
    task_id: str | None


class TaskStore:
    """
    Authoritative in-memory task list.

    Mutations (add/toggle/edit/delete) apply synchronously and return at once.
    Reminder scheduling/cancellation and persistence run as detached asyncio
    tasks; callers never wait for them. Use drain() to wait for every
    outstanding effect (shutdown, tests).

    Must be used from inside a running event loop.

    Stale effects:
    - a reminder handle resolving after its task was deleted or completed is
      cancelled, never applied (also when the task was reopened meanwhile),
    - handles loaded from storage that the reminder backend no longer holds
      are cleared on load,
    - cancelling a handle that already fired or is unknown is tolerated by
      NotificationScheduler.
    """

    def __init__(
            self,
            notifications: NotificationScheduler,
            persistence: PersistenceGate,
            *,
            id_factory: IdFactory | None = None,
    ) -> None:
        self._notifications = notifications
        self._persistence = persistence
        self._id_factory = id_factory or _default_id

        # dict keeps insertion order: that order is the canonical one.
        self._tasks: dict[str, Task] = {}
        self._editing_id: str | None = None

        # Task ids with a schedule request in flight, and those whose in-flight
        # request was voided by completion.
        self._scheduling: set[str] = set()
        self._void_schedules: set[str] = set()

        self._pending: set[asyncio.Task[Any]] = set()
        self.effect_log: list[Effect] = []

    # ---- read API ----

    @property
    def tasks(self) -> list[Task]:
        """Copies of all tasks in insertion order."""
        return [replace(t) for t in self._tasks.values()]

    def get(self, task_id: str) -> Task | None:
        task = self._tasks.get(task_id)
        return replace(task) if task is not None else None

    def __len__(self) -> int:
        return len(self._tasks)

    def __contains__(self, task_id: object) -> bool:
        return task_id in self._tasks

    def summary(self) -> str:
        n = len(self._tasks)
        return f"{n} {'task' if n == 1 else 'tasks'}"

    @property
    def editing_id(self) -> str | None:
        return self._editing_id

    # ---- lifecycle ----

    async def load(self) -> list[Task]:
        """Replace the in-memory list with the persisted one (never raises)."""
        loaded = await self._persistence.load()
        self._tasks = {t.id: t for t in loaded}
        self._editing_id = None

        if await self._drop_stale_handles():
            self._save()
        return self.tasks

    async def _drop_stale_handles(self) -> int:
        """Clear handles the reminder backend no longer holds (fired, or lost on restart)."""
        holders = [t for t in self._tasks.values() if t.notification_id]
        if not holders:
            return 0
        active = await self._notifications.active_handles()
        if active is None:
            return 0

        dropped = 0
        for task in holders:
            if task.notification_id not in active:
                logger.info("Clearing inactive reminder handle task_id=%s", task.id)
                task.notification_id = None
                dropped += 1
        return dropped

    # ---- mutations ----

    def add(self, text: str, priority: Priority = Priority.MEDIUM) -> Task | None:
        clean = (text or "").strip()
        if not clean:
            return None

        task = Task(id=self._new_id(), text=clean, priority=Priority(priority))
        self._tasks[task.id] = task
        logger.info("Task added id=%s priority=%s", task.id, task.priority.value)

        self._scheduling.add(task.id)
        self._spawn("schedule", task.id, self._schedule_reminder(task.id, clean))
        self._save()
        return replace(task)

    def toggle(self, task_id: str) -> Task | None:
        task = self._tasks.get(task_id)
        if task is None:
            return None

        task.completed = not task.completed
        # Un-completing never brings the reminder back.
        if task.completed and task_id in self._scheduling:
            self._void_schedules.add(task_id)
        if task.completed and task.notification_id:
            handle = task.notification_id
            task.notification_id = None
            self._spawn("cancel", task_id, self._notifications.cancel(handle))

        logger.info("Task %s -> %s", task_id, "completed" if task.completed else "open")
        self._save()
        return replace(task)

    def start_edit(self, task_id: str) -> str | None:
        """Make `task_id` the active edit target; returns its current text."""
        task = self._tasks.get(task_id)
        if task is None:
            return None
        self._editing_id = task_id
        return task.text

    def cancel_edit(self) -> None:
        self._editing_id = None

    def edit(self, task_id: str, new_text: str) -> Task | None:
        if self._editing_id is None or self._editing_id != task_id:
            return None
        task = self._tasks.get(task_id)
        if task is None:
            return None
        clean = (new_text or "").strip()
        if not clean:
            return None

        task.text = clean
        self._editing_id = None
        logger.info("Task edited id=%s", task_id)
        self._save()
        return replace(task)

    def delete(self, task_id: str) -> bool:
        task = self._tasks.get(task_id)
        if task is None:
            return False

        if task.notification_id:
            self._spawn("cancel", task_id, self._notifications.cancel(task.notification_id))
        del self._tasks[task_id]
        if self._editing_id == task_id:
            self._editing_id = None

        logger.info("Task deleted id=%s", task_id)
        self._save()
        return True

    # ---- effects ----

    @property
    def pending_effects(self) -> int:
        return len(self._pending)

    async def drain(self) -> None:
        """Wait until no detached effect is outstanding (effects may spawn effects)."""
        while self._pending:
            await asyncio.gather(*list(self._pending), return_exceptions=True)

    def _new_id(self) -> str:
        while True:
            task_id = self._id_factory()
            if task_id not in self._tasks:
                return task_id
            logger.warning("Task id collision id=%s; regenerating", task_id)

    def _spawn(self, kind: str, task_id: str | None, coro: Coroutine[Any, Any, Any]) -> None:
        loop = asyncio.get_running_loop()
        effect = loop.create_task(coro)
        self._pending.add(effect)
        effect.add_done_callback(self._effect_done)
        self.effect_log.append(Effect(kind=kind, task_id=task_id))

    def _effect_done(self, effect: asyncio.Task[Any]) -> None:
        self._pending.discard(effect)
        if effect.cancelled():
            return
        exc = effect.exception()
        if exc is not None:
            logger.error("Detached task effect failed", exc_info=exc)

    def _save(self) -> None:
        # Snapshot now: the save must reflect the state right after this mutation.
        self._spawn("save", None, self._persistence.save(self.tasks))

    async def _schedule_reminder(self, task_id: str, text: str) -> None:
        try:
            handle = await self._notifications.schedule(task_id, text)
        finally:
            self._scheduling.discard(task_id)
            voided = task_id in self._void_schedules
            self._void_schedules.discard(task_id)

        if handle is None:
            return

        task = self._tasks.get(task_id)
        if task is None or task.completed or voided:
            logger.info("Reminder resolved for a deleted/completed task id=%s; cancelling", task_id)
            self._spawn("cancel", task_id, self._notifications.cancel(handle))
            return

        task.notification_id = handle
        self._save()
