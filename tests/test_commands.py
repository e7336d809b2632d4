# tests/test_commands.py

from __future__ import annotations

import contextlib
import json
from collections.abc import Iterator

from flow_planner.cli.commands import CommandRegistry, registry, run_cli_loop
from flow_planner.core.state import AppState


def _answers(*values: str):
    it = iter(values)
    return lambda _prompt: next(it)


def _opener(state: AppState):
    opened = {"n": 0}

    @contextlib.contextmanager
    def open_state() -> Iterator[AppState]:
        opened["n"] += 1
        yield state

    return open_state, opened


def test_registry_routes_and_opens_state_per_command(state: AppState) -> None:
    reg = CommandRegistry()
    reg.register("ping", lambda st, ask: f"pong {ask('x: ')}", "ping", aliases=["p"])
    open_state, opened = _opener(state)

    assert reg.handle("ping", _answers("1"), open_state) == "pong 1"
    assert reg.handle("P", _answers("2"), open_state) == "pong 2"
    assert opened["n"] == 2


def test_registry_unknown_and_empty(state: AppState) -> None:
    reg = CommandRegistry()
    open_state, opened = _opener(state)
    assert reg.handle("", _answers(), open_state) is None
    assert "Unknown command" in (reg.handle("nope", _answers(), open_state) or "")
    assert opened["n"] == 0


def test_create_and_list_tasks_via_cli_commands(state: AppState) -> None:
    open_state, _ = _opener(state)
    out = registry.handle("create-task", _answers("Write", "docs", "ann"), open_state)
    assert out is not None and out.startswith("Task created: ")
    task_id = out.split(": ", 1)[1]

    listing = json.loads(registry.handle("list-tasks", _answers(), open_state) or "{}")
    assert [t["id"] for t in listing["tasks"]] == [task_id]

    out = registry.handle(
        "update-task", _answers(task_id, "Write", "docs", "ann", "y", ""), open_state
    )
    assert out == f"Task updated: {task_id}"
    got = json.loads(registry.handle("get-task", _answers(task_id), open_state) or "{}")
    assert got["started"] is True
    assert got["completed"] is False


def test_cli_loop_prints_errors_and_continues(state: AppState, capsys) -> None:
    open_state, _ = _opener(state)
    ask = _answers(
        "create-goal", "Marathon", "not-a-date", "",
        "get-task", "missing",
        "bogus",
        "create-planner", "Life", "ann",
        "exit",
    )
    run_cli_loop(open_state, ask)

    out = capsys.readouterr().out
    assert "Error: invalid date" in out
    assert "Error: task not found" in out
    assert "Unknown command: bogus" in out
    assert "Planner created: " in out
    assert len(state.planners.list_planners().planners) == 1


def test_help_lists_commands(state: AppState, capsys) -> None:
    open_state, _ = _opener(state)
    run_cli_loop(open_state, _answers("help", "exit"))
    out = capsys.readouterr().out
    for name in ("create-task", "list-goals", "get-plans-by-goal", "delete-planner"):
        assert name in out
