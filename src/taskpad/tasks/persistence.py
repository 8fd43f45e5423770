# src/taskpad/tasks/persistence.py

from __future__ import annotations

import asyncio
import json
import logging
from collections.abc import Iterable
from typing import Any

from ..core.ports import StorageService
from .task_models import Priority, Task

logger = logging.getLogger(__name__)

TASKS_KEY = "tasks"


class TaskRecordError(ValueError):
    """Persisted payload does not match the task record schema."""


def encode_tasks(tasks: Iterable[Task]) -> bytes:
    records = [
        {
            "id": t.id,
            "text": t.text,
            "completed": t.completed,
            "priority": t.priority.value,
            "notificationId": t.notification_id,
        }
        for t in tasks
    ]
    return json.dumps(records, ensure_ascii=False).encode("utf-8")


def _record_to_task(rec: Any) -> Task:
    if not isinstance(rec, dict):
        raise TaskRecordError(f"record is not an object: {rec!r}")

    task_id = rec.get("id")
    text = rec.get("text")
    completed = rec.get("completed")
    notification_id = rec.get("notificationId")

    if not isinstance(task_id, str) or not task_id:
        raise TaskRecordError(f"bad id: {task_id!r}")
    if not isinstance(text, str) or not text.strip():
        raise TaskRecordError(f"bad text for id={task_id}")
    if not isinstance(completed, bool):
        raise TaskRecordError(f"bad completed flag for id={task_id}")
    if notification_id is not None and not isinstance(notification_id, str):
        raise TaskRecordError(f"bad notificationId for id={task_id}")
    try:
        priority = Priority(rec.get("priority"))
    except ValueError as e:
        raise TaskRecordError(f"bad priority for id={task_id}") from e

    if completed and notification_id:
        # A completed task never carries a reminder.
        logger.debug("Dropping stale reminder handle of completed task id=%s", task_id)
        notification_id = None

    return Task(
        id=task_id,
        text=text.strip(),
        completed=completed,
        priority=priority,
        notification_id=notification_id,
    )


def decode_tasks(raw: bytes | str) -> list[Task]:
    """
    Parse the persisted JSON array.

    Raises ValueError (json.JSONDecodeError or TaskRecordError) on anything
    that is not a clean list of unique, valid records.
    """
    data = json.loads(raw)
    if not isinstance(data, list):
        raise TaskRecordError("payload is not a list")

    tasks = [_record_to_task(rec) for rec in data]
    seen: set[str] = set()
    for t in tasks:
        if t.id in seen:
            raise TaskRecordError(f"duplicate id={t.id}")
        seen.add(t.id)
    return tasks


class PersistenceGate:
    """
    Whole-list persistence under a single storage key.

    - load(): never raises; absent or unreadable data degrades to [].
    - save(): never raises; failures are logged and the in-memory list stays
      the source of truth until the next successful write.

    Saves are serialized with an asyncio.Lock (FIFO), so when several detached
    saves are in flight the last one issued is the last one written.
    """

    def __init__(self, storage: StorageService, *, key: str = TASKS_KEY) -> None:
        self._storage = storage
        self._key = key
        self._write_lock = asyncio.Lock()

    @property
    def key(self) -> str:
        return self._key

    async def load(self) -> list[Task]:
        try:
            raw = await self._storage.read(self._key)
        except Exception:
            logger.exception("Failed to read tasks key=%s", self._key)
            return []

        if raw is None:
            logger.info("No saved tasks key=%s", self._key)
            return []

        try:
            tasks = decode_tasks(raw)
        except ValueError:
            logger.exception("Saved tasks are corrupt; starting empty key=%s", self._key)
            return []

        logger.info("Loaded %d task(s) key=%s", len(tasks), self._key)
        return tasks

    async def save(self, tasks: Iterable[Task]) -> bool:
        try:
            payload = encode_tasks(tasks)
        except Exception:
            logger.exception("Failed to encode tasks; skipping save.")
            return False

        async with self._write_lock:
            try:
                await self._storage.write(self._key, payload)
            except Exception:
                logger.exception("Failed to save tasks key=%s", self._key)
                return False

        logger.debug("Saved tasks key=%s bytes=%d", self._key, len(payload))
        return True
