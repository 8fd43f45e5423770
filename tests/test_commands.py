# tests/test_commands.py

from __future__ import annotations

import pytest

from taskpad.cli.bootstrap import create_initial_state
from taskpad.cli.commands import CommandRegistry, registry
from taskpad.tasks.task_models import Priority


def test_command_registry_routes_2_and_3_params(state) -> None:
    reg = CommandRegistry()
    called = {"h2": 0, "h3": 0}

    def h2(state, args):
        called["h2"] += 1
        return "h2"

    def h3(state, args, emit):
        called["h3"] += 1
        if emit is not None:
            emit("note")
        return "h3"

    reg.register("a", h2, "a")
    reg.register("b", h3, "b", aliases=["bee"])

    notes: list[str] = []
    assert reg.handle(state, "/a x") == "h2"
    assert reg.handle(state, "/BEE y", emit=notes.append) == "h3"
    assert called == {"h2": 1, "h3": 1}
    assert notes == ["note"]


def test_command_registry_unknown_and_non_command(state) -> None:
    reg = CommandRegistry()
    assert reg.handle(state, "hello") is None
    assert "Unknown command" in (reg.handle(state, "/nope") or "")
    assert "Empty command" in (reg.handle(state, "/") or "")


@pytest.mark.asyncio
async def test_add_list_and_toggle_by_display_position(state) -> None:
    registry.handle(state, "/add low Walk dog")
    registry.handle(state, "/add h Buy milk")
    await state.store.drain()

    listing = registry.handle(state, "/list") or ""
    lines = listing.splitlines()
    assert lines[0] == "My Tasks (2 tasks):"
    assert lines[1].startswith("1. [ ] Buy milk [High]")
    assert lines[2].startswith("2. [ ] Walk dog [Low]")

    assert registry.handle(state, "/done 1") == "Completed: Buy milk"
    assert "1. [x] Buy milk [High]" in (registry.handle(state, "/list") or "")
    assert "Usage" in (registry.handle(state, "/done 9") or "")
    await state.store.drain()


@pytest.mark.asyncio
async def test_priority_cycles_and_resets_after_add(state) -> None:
    assert registry.handle(state, "/priority") == "Priority for the next task: Low"
    assert registry.handle(state, "/priority") == "Priority for the next task: High"

    reply = registry.handle(state, "/add Urgent thing") or ""
    assert "[High]" in reply
    assert state.input_priority is Priority.MEDIUM
    await state.store.drain()


@pytest.mark.asyncio
async def test_edit_session_commands(state) -> None:
    registry.handle(state, "/add Draft")
    await state.store.drain()

    assert "Nothing is being edited" in (registry.handle(state, "/save x") or "")
    assert (registry.handle(state, "/edit 1") or "").startswith("Editing: Draft")
    assert "not saved" in (registry.handle(state, "/save") or "")
    assert registry.handle(state, "/save Final text") == "Saved: Final text"
    assert state.store.tasks[0].text == "Final text"

    registry.handle(state, "/edit 1")
    assert registry.handle(state, "/cancel") == "Edit cancelled."
    assert state.store.editing_id is None
    await state.store.drain()


@pytest.mark.asyncio
async def test_delete_and_empty_list(state) -> None:
    registry.handle(state, "/add Only one")
    await state.store.drain()

    assert registry.handle(state, "/del 1") == "Deleted: Only one (0 tasks)"
    assert registry.handle(state, "/list") == "No tasks yet. Add a task to get started."
    await state.store.drain()


@pytest.mark.asyncio
async def test_status_reports_reminder_settings(state) -> None:
    registry.handle(state, "/add One")
    await state.store.drain()

    status = registry.handle(state, "/status") or ""
    assert "1 task (1 open)" in status
    assert "delay 5s" in status


@pytest.mark.asyncio
async def test_bootstrap_wires_file_storage(settings) -> None:
    state = create_initial_state(settings=settings)
    state.store.add("Persisted", Priority.LOW)
    await state.store.drain()
    state.reminder_service.shutdown()

    assert (settings.data_dir / "tasks.json").exists()

    again = create_initial_state(settings=settings)
    loaded = await again.store.load()
    assert [t.text for t in loaded] == ["Persisted"]
    # the first run's timer died with it, so no reminder backs the old handle
    assert loaded[0].notification_id is None
    await again.store.drain()
    assert b'"notificationId": null' in (settings.data_dir / "tasks.json").read_bytes()
