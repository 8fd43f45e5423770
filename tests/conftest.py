# tests/conftest.py

from __future__ import annotations

from pathlib import Path
from types import SimpleNamespace

import pytest

from taskpad.core.state import AppState
from taskpad.tasks.notification_scheduler import NotificationScheduler
from taskpad.tasks.persistence import PersistenceGate
from taskpad.tasks.task_store import TaskStore

from .fakes import FakeNotificationService, FakeStorage


@pytest.fixture()
def settings(tmp_path: Path) -> SimpleNamespace:
    """
    Minimal settings object compatible with AppState and the bootstrap.

    We intentionally use a SimpleNamespace rather than reading the real
    environment, to keep unit tests isolated and deterministic.
    """
    return SimpleNamespace(
        app_name="taskpad-test",
        log_level="DEBUG",
        data_dir=tmp_path / "data",
        log_dir=tmp_path / "logs",
        reminder_delay_seconds=5.0,
        reminders_enabled=True,
    )


@pytest.fixture()
def notifier() -> FakeNotificationService:
    return FakeNotificationService()


@pytest.fixture()
def storage() -> FakeStorage:
    return FakeStorage()


@pytest.fixture()
def scheduler(notifier: FakeNotificationService) -> NotificationScheduler:
    return NotificationScheduler(notifier, delay_seconds=5.0)


@pytest.fixture()
def gate(storage: FakeStorage) -> PersistenceGate:
    return PersistenceGate(storage)


@pytest.fixture()
def store(scheduler: NotificationScheduler, gate: PersistenceGate) -> TaskStore:
    return TaskStore(scheduler, gate)


@pytest.fixture()
def state(settings: SimpleNamespace, store: TaskStore, scheduler: NotificationScheduler) -> AppState:
    """AppState wired with in-memory fakes for both ports."""
    return AppState(settings=settings, store=store, notifications=scheduler)
