# src/flow_planner/cli/commands.py

"""
Interactive CLI commands (`flow cli`).

Each command prompts for its fields, then runs against a freshly opened
database that is closed again when the command finishes.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from contextlib import AbstractContextManager
from typing import Any

from pydantic import BaseModel, ValidationError

from ..control.dto import (
    CreateGoalRequest,
    CreatePlannerRequest,
    CreatePlanRequest,
    CreateTaskRequest,
    CreateVersionRequest,
    UpdateGoalRequest,
    UpdatePlannerRequest,
    UpdatePlanRequest,
    UpdateTaskRequest,
)
from ..core.errors import FlowError
from ..core.state import AppState

Prompt = Callable[[str], str]
CommandHandler = Callable[[AppState, Prompt], str]
StateFactory = Callable[[], AbstractContextManager[AppState]]

logger = logging.getLogger(__name__)


class CommandRegistry:
    """Command-name registry used by the interactive CLI (create-task, list-goals, ...)."""

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

    def names(self) -> list[str]:
        return list(self._help)

    def handle(self, line: str, ask: Prompt, open_state: StateFactory) -> str | None:
        """
        Run the command named by `line`.
        Returns the text to print, or None for an empty line.
        """
        name = line.strip().lower()
        if not name:
            return None

        handler = self._handlers.get(name)
        if handler is None:
            return f"Unknown command: {name}. Type 'help' to list available commands."

        with open_state() as state:
            return handler(state, ask)

    def build_help(self) -> str:
        lines = ["Available commands:"]
        for name, help_text in self._help.items():
            lines.append(f"  {name:<24} {help_text}")
        lines.append(f"  {'help':<24} Show this help.")
        lines.append(f"  {'exit':<24} Quit.")
        return "\n".join(lines)


registry = CommandRegistry()


def _show(model: BaseModel) -> str:
    return model.model_dump_json(indent=2)


def _yes(raw: str) -> bool | None:
    s = raw.strip().lower()
    if not s:
        return None
    return s in ("y", "yes", "1", "true", "on")


def _optional(raw: str) -> str | None:
    s = raw.strip()
    return s or None


# ---- tasks ----


def cmd_create_task(state: AppState, ask: Prompt) -> str:
    req = CreateTaskRequest(
        title=ask("Title: "),
        description=ask("Description: "),
        owner=ask("Owner: "),
    )
    return f"Task created: {state.tasks.create_task(req).id}"


def cmd_update_task(state: AppState, ask: Prompt) -> str:
    req = UpdateTaskRequest(
        id=ask("Task id: "),
        title=ask("Title: "),
        description=ask("Description: "),
        owner=ask("Owner: "),
        started=_yes(ask("Started? [y/n, empty keeps]: ")),
        completed=_yes(ask("Completed? [y/n, empty keeps]: ")),
    )
    state.tasks.update_task(req)
    return f"Task updated: {req.id}"


# ---- goals ----


def cmd_create_goal(state: AppState, ask: Prompt) -> str:
    req = CreateGoalRequest(
        objective=ask("Objective: "),
        deadline=ask("Deadline (YYYY-MM-DD): "),
        planner_id=ask("Planner id (optional): "),
    )
    return f"Goal created: {state.goals.create_goal(req).id}"


def cmd_update_goal(state: AppState, ask: Prompt) -> str:
    req = UpdateGoalRequest(
        id=ask("Goal id: "),
        objective=ask("Objective: "),
        deadline=ask("Deadline (YYYY-MM-DD): "),
        planner_id=ask("Planner id (optional): "),
        status=_optional(ask("Status (empty keeps): ")),
    )
    state.goals.update_goal(req)
    return f"Goal updated: {req.id}"


# ---- plans ----


def cmd_create_plan(state: AppState, ask: Prompt) -> str:
    req = CreatePlanRequest(
        name=ask("Name: "),
        description=ask("Description: "),
        plan_date=ask("Date (YYYY-MM-DD): "),
        plan_time=ask("Time (HH:MM): "),
        goal_id=ask("Goal id (optional): "),
    )
    return f"Plan created: {state.plans.create_plan(req).id}"


def cmd_update_plan(state: AppState, ask: Prompt) -> str:
    req = UpdatePlanRequest(
        id=ask("Plan id: "),
        name=ask("Name: "),
        description=ask("Description: "),
        plan_date=ask("Date (YYYY-MM-DD): "),
        plan_time=ask("Time (HH:MM): "),
        goal_id=ask("Goal id (optional): "),
        status=_optional(ask("Status (empty keeps): ")),
    )
    state.plans.update_plan(req)
    return f"Plan updated: {req.id}"


# ---- planners ----


def cmd_create_planner(state: AppState, ask: Prompt) -> str:
    req = CreatePlannerRequest(title=ask("Title: "), owner=ask("Owner: "))
    return f"Planner created: {state.planners.create_planner(req).id}"


def cmd_update_planner(state: AppState, ask: Prompt) -> str:
    req = UpdatePlannerRequest(id=ask("Planner id: "), title=ask("Title: "), owner=ask("Owner: "))
    state.planners.update_planner(req)
    return f"Planner updated: {req.id}"


# ---- versions ----


def cmd_create_version(state: AppState, ask: Prompt) -> str:
    req = CreateVersionRequest(
        goal_id=ask("Goal id: "),
        bump=ask("Bump (major/minor/patch) [patch]: ").strip() or "patch",
        created_by=ask("Created by: "),
    )
    return f"Version created: {state.versions.create_version(req).id}"


# ---- generic get / list / delete ----


def _lookup(label: str, call: Callable[[AppState, str], Any]) -> CommandHandler:
    def handler(state: AppState, ask: Prompt) -> str:
        return _show(call(state, ask(f"{label}: ")))

    return handler


def _listing(call: Callable[[AppState], Any]) -> CommandHandler:
    def handler(state: AppState, ask: Prompt) -> str:
        return _show(call(state))

    return handler


def _deletion(kind: str, call: Callable[[AppState, str], None]) -> CommandHandler:
    def handler(state: AppState, ask: Prompt) -> str:
        record_id = ask(f"{kind.capitalize()} id: ")
        call(state, record_id)
        return f"{kind.capitalize()} deleted: {record_id}"

    return handler


registry.register("create-task", cmd_create_task, "Create a task.")
registry.register("get-task", _lookup("Task id", lambda s, v: s.tasks.get_task(v)), "Show a task by id.")
registry.register(
    "get-task-by-title",
    _lookup("Title", lambda s, v: s.tasks.get_task_by_title(v)),
    "Show the first task with a title.",
)
registry.register(
    "get-tasks-by-owner",
    _lookup("Owner", lambda s, v: s.tasks.list_tasks_by_owner(v)),
    "List tasks of an owner.",
)
registry.register("update-task", cmd_update_task, "Update a task.")
registry.register("delete-task", _deletion("task", lambda s, v: s.tasks.delete_task(v)), "Delete a task.")
registry.register("list-tasks", _listing(lambda s: s.tasks.list_tasks()), "List all tasks.")

registry.register("create-goal", cmd_create_goal, "Create a goal.")
registry.register("get-goal", _lookup("Goal id", lambda s, v: s.goals.get_goal(v)), "Show a goal by id.")
registry.register(
    "get-goal-by-objective",
    _lookup("Objective", lambda s, v: s.goals.get_goal_by_objective(v)),
    "Show the first goal with an objective.",
)
registry.register(
    "get-goals-by-planner",
    _lookup("Planner id", lambda s, v: s.goals.list_goals_by_planner(v)),
    "List goals of a planner.",
)
registry.register("update-goal", cmd_update_goal, "Update a goal.")
registry.register("delete-goal", _deletion("goal", lambda s, v: s.goals.delete_goal(v)), "Delete a goal.")
registry.register("list-goals", _listing(lambda s: s.goals.list_goals()), "List all goals.")

registry.register("create-plan", cmd_create_plan, "Create a plan.")
registry.register("get-plan", _lookup("Plan id", lambda s, v: s.plans.get_plan(v)), "Show a plan by id.")
registry.register(
    "get-plan-by-name",
    _lookup("Name", lambda s, v: s.plans.get_plan_by_name(v)),
    "Show the first plan with a name.",
)
registry.register(
    "get-plans-by-goal",
    _lookup("Goal id", lambda s, v: s.plans.list_plans_by_goal(v)),
    "List plans of a goal.",
)
registry.register("update-plan", cmd_update_plan, "Update a plan.")
registry.register("delete-plan", _deletion("plan", lambda s, v: s.plans.delete_plan(v)), "Delete a plan.")
registry.register("list-plans", _listing(lambda s: s.plans.list_plans()), "List all plans.")

registry.register("create-planner", cmd_create_planner, "Create a planner.")
registry.register(
    "get-planner", _lookup("Planner id", lambda s, v: s.planners.get_planner(v)), "Show a planner by id."
)
registry.register(
    "get-planner-by-title",
    _lookup("Title", lambda s, v: s.planners.get_planner_by_title(v)),
    "Show the first planner with a title.",
)
registry.register(
    "get-planners-by-owner",
    _lookup("Owner", lambda s, v: s.planners.list_planners_by_owner(v)),
    "List planners of an owner.",
)
registry.register("update-planner", cmd_update_planner, "Update a planner.")
registry.register(
    "delete-planner",
    _deletion("planner", lambda s, v: s.planners.delete_planner(v)),
    "Delete a planner.",
)
registry.register("list-planners", _listing(lambda s: s.planners.list_planners()), "List all planners.")

registry.register("create-version", cmd_create_version, "Snapshot a goal as a new version.")
registry.register(
    "get-version", _lookup("Version id", lambda s, v: s.versions.get_version(v)), "Show a version by id."
)
registry.register(
    "get-versions-by-goal",
    _lookup("Goal id", lambda s, v: s.versions.list_versions_by_goal(v)),
    "List versions of a goal.",
)
registry.register(
    "delete-version",
    _deletion("version", lambda s, v: s.versions.delete_version(v)),
    "Delete a version.",
)


def run_cli_loop(open_state: StateFactory, ask: Prompt = input) -> None:
    logger.info("Interactive CLI started.")
    print("Type a command (help for the list, exit to quit).")

    while True:
        try:
            line = ask("flow> ").strip()
        except EOFError:
            logger.info("CLI EOF received, exiting.")
            break
        except KeyboardInterrupt:
            logger.info("CLI KeyboardInterrupt, exiting.")
            print()
            break

        if not line:
            continue
        if line.lower() in ("exit", "quit"):
            break
        if line.lower() in ("help", "?"):
            print(registry.build_help())
            continue

        try:
            reply = registry.handle(line, ask, open_state)
        except (FlowError, ValidationError) as e:
            logger.info("CLI command %s failed: %s", line, e)
            reply = f"Error: {e}"
        except Exception as e:
            logger.exception("CLI command %s crashed.", line)
            reply = f"Error: {e}"

        if reply is not None:
            print(reply)

    logger.info("Interactive CLI finished.")

