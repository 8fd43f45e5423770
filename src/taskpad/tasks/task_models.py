# src/taskpad/tasks/task_models.py

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum


class Priority(StrEnum):
    """
    Task priority.

    Determines display rank only, never reminder timing.
    The string values are the persisted form.
    """

    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"

    @property
    def rank(self) -> int:
        return _RANKS[self]

    @property
    def label(self) -> str:
        return self.value.capitalize()

    def cycle(self) -> Priority:
        """high -> medium -> low -> high (input priority toggle)."""
        return _NEXT[self]

    @classmethod
    def parse(cls, raw: str | None) -> Priority | None:
        """Accept full names and one-letter shortcuts ("h", "m", "l")."""
        if not raw:
            return None
        key = raw.strip().lower()
        for p in cls:
            if key in (p.value, p.value[0]):
                return p
        return None


_RANKS = {Priority.HIGH: 1, Priority.MEDIUM: 2, Priority.LOW: 3}
_NEXT = {Priority.HIGH: Priority.MEDIUM, Priority.MEDIUM: Priority.LOW, Priority.LOW: Priority.HIGH}


@dataclass(slots=True)
class Task:
    id: str
    text: str
    completed: bool = False
    priority: Priority = Priority.MEDIUM

    # Present only while an active reminder exists (never on a completed task).
    notification_id: str | None = None
