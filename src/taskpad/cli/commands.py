# src/taskpad/cli/commands.py

from __future__ import annotations

import inspect
import logging
from collections.abc import Callable
from typing import cast

from ..core.state import AppState
from ..tasks.ordering import order_tasks
from ..tasks.task_models import Priority, Task

CommandEmitter = Callable[[str], None]
CommandHandler2 = Callable[[AppState, list[str]], str]
CommandHandler3 = Callable[[AppState, list[str], CommandEmitter | None], str]
CommandHandler = CommandHandler2 | CommandHandler3

logger = logging.getLogger(__name__)


class CommandRegistry:
    """Simple slash-command registry used by connectors (/help, /add, ...)."""

    def __init__(self) -> None:
        self._handlers: dict[str, CommandHandler] = {}
        self._help: dict[str, str] = {}

    def register(
        self,
        name: str,
        handler: CommandHandler,
        help_text: str,
        aliases: list[str] | None = None,
    ) -> None:
        aliases = aliases or []
        key = name.lower()
        self._handlers[key] = handler
        self._help[key] = help_text
        for alias in aliases:
            self._handlers[alias.lower()] = handler

    def handle(
        self,
        state: AppState,
        line: str,
        emit: CommandEmitter | None = None,
    ) -> str | None:
        """
        Handle a string like "/command args".
        Returns a reply string or None if not a command.
        """
        if not line.startswith("/"):
            return None

        parts = line[1:].split()
        if not parts:
            return "Empty command. Use /help to list available commands."

        name = parts[0].lower()
        args = parts[1:]

        handler = self._handlers.get(name)
        if not handler:
            return f"Unknown command: /{name}. Use /help to list available commands."

        try:
            nparams = len(inspect.signature(handler).parameters)
        except (TypeError, ValueError):
            nparams = 3

        if nparams >= 3:
            h3 = cast(CommandHandler3, handler)
            return h3(state, args, emit)

        h2 = cast(CommandHandler2, handler)
        return h2(state, args)

    def build_help(self) -> str:
        lines = ["Available commands:"]
        for name, help_text in self._help.items():
            lines.append(f"  /{name} - {help_text}")
        return "\n".join(lines)


registry = CommandRegistry()


def format_task(position: int, task: Task) -> str:
    box = "[x]" if task.completed else "[ ]"
    bell = " (reminder)" if task.notification_id else ""
    return f"{position}. {box} {task.text} [{task.priority.label}]{bell}"


def render_list(state: AppState) -> str:
    tasks = order_tasks(state.store.tasks)
    if not tasks:
        return "No tasks yet. Add a task to get started."
    lines = [f"My Tasks ({state.store.summary()}):"]
    lines.extend(format_task(i, t) for i, t in enumerate(tasks, start=1))
    return "\n".join(lines)


def _resolve(state: AppState, args: list[str]) -> Task | None:
    """Map a 1-based position in the displayed (priority-ordered) list to a task."""
    if not args:
        return None
    try:
        pos = int(args[0])
    except ValueError:
        return None
    tasks = order_tasks(state.store.tasks)
    if pos < 1 or pos > len(tasks):
        return None
    return tasks[pos - 1]


def add_task(state: AppState, text: str, priority: Priority | None = None) -> str:
    task = state.store.add(text, priority or state.input_priority)
    if task is None:
        return "Task text is empty; nothing added."
    state.input_priority = Priority.MEDIUM
    return f"Added: {task.text} [{task.priority.label}] ({state.store.summary()})"


def cmd_help(state: AppState, args: list[str]) -> str:
    return registry.build_help()


def cmd_add(state: AppState, args: list[str]) -> str:
    """
    /add <text>            -> add with the current input priority
    /add high|h <text>     -> add with an explicit priority
    """
    priority = Priority.parse(args[0]) if len(args) > 1 else None
    words = args[1:] if priority is not None else args
    return add_task(state, " ".join(words), priority)


def cmd_list(state: AppState, args: list[str]) -> str:
    return render_list(state)


def cmd_done(state: AppState, args: list[str]) -> str:
    task = _resolve(state, args)
    if task is None:
        return "Usage: /done <n> (see /list)."
    updated = state.store.toggle(task.id)
    if updated is None:
        return "Task not found."
    return f"{'Completed' if updated.completed else 'Reopened'}: {updated.text}"


def cmd_edit(state: AppState, args: list[str]) -> str:
    task = _resolve(state, args)
    if task is None:
        return "Usage: /edit <n> (see /list)."
    current = state.store.start_edit(task.id)
    return f"Editing: {current}\nType the new text (or /save <new text>), or /cancel."


def save_edit(state: AppState, text: str) -> str:
    editing_id = state.store.editing_id
    if editing_id is None:
        return "Nothing is being edited. Use /edit <n> first."
    updated = state.store.edit(editing_id, text)
    if updated is None:
        return "Task text is empty; edit not saved."
    return f"Saved: {updated.text}"


def cmd_save(state: AppState, args: list[str]) -> str:
    return save_edit(state, " ".join(args))


def cmd_cancel(state: AppState, args: list[str]) -> str:
    if state.store.editing_id is None:
        return "Nothing is being edited."
    state.store.cancel_edit()
    return "Edit cancelled."


def cmd_del(state: AppState, args: list[str]) -> str:
    task = _resolve(state, args)
    if task is None:
        return "Usage: /del <n> (see /list)."
    state.store.delete(task.id)
    return f"Deleted: {task.text} ({state.store.summary()})"


def cmd_priority(state: AppState, args: list[str]) -> str:
    """
    /priority          -> cycle high -> medium -> low
    /priority <name>   -> set explicitly
    """
    if args:
        chosen = Priority.parse(args[0])
        if chosen is None:
            return "Usage: /priority [high|medium|low]."
        state.input_priority = chosen
    else:
        state.input_priority = state.input_priority.cycle()
    return f"Priority for the next task: {state.input_priority.label}"


def cmd_status(state: AppState, args: list[str], emit: CommandEmitter | None = None) -> str:
    store = state.store
    open_count = sum(1 for t in store.tasks if not t.completed)
    reminders = "ON" if state.notifications_permitted else "OFF (permission denied)"
    return (
        "Status:\n"
        f"  Tasks: {store.summary()} ({open_count} open)\n"
        f"  Next priority: {state.input_priority.label}\n"
        f"  Reminders: {reminders}, delay {state.notifications.delay_seconds:g}s\n"
        f"  Pending background effects: {store.pending_effects}"
    )


registry.register("help", cmd_help, help_text="Show available commands.", aliases=["h", "?"])
registry.register("add", cmd_add, help_text="Add a task: /add [high|medium|low] <text>.", aliases=["a"])
registry.register("list", cmd_list, help_text="Show tasks ordered by priority.", aliases=["ls", "l"])
registry.register("done", cmd_done, help_text="Toggle completion: /done <n>.", aliases=["toggle", "d"])
registry.register("edit", cmd_edit, help_text="Start editing a task: /edit <n>.", aliases=["e"])
registry.register("save", cmd_save, help_text="Save the task being edited: /save <new text>.")
registry.register("cancel", cmd_cancel, help_text="Cancel the current edit.")
registry.register("del", cmd_del, help_text="Delete a task: /del <n>.", aliases=["rm", "delete"])
registry.register("priority", cmd_priority, help_text="Cycle or set the next task's priority.", aliases=["p"])
registry.register("status", cmd_status, help_text="Show counts, reminder settings and pending effects.")
