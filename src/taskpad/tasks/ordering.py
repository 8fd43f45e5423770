# src/taskpad/tasks/ordering.py

from __future__ import annotations

from collections.abc import Iterable

from .task_models import Task


def order_tasks(tasks: Iterable[Task]) -> list[Task]:
    """
    Display order: high, then medium, then low.

    Returns a new list. `sorted` is stable, so tasks of equal priority keep
    their insertion order. The input sequence is left untouched.
    """
    return sorted(tasks, key=lambda t: t.priority.rank)
