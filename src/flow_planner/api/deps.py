# src/flow_planner/api/deps.py

from __future__ import annotations

from fastapi import Request

from ..control.goals import GoalControl
from ..control.planners import PlannerControl
from ..control.plans import PlanControl
from ..control.tasks import TaskControl
from ..control.versions import VersionControl
from ..core.errors import FlowError
from ..core.state import AppState


def get_state(request: Request) -> AppState:
    state = getattr(request.app.state, "flow", None)
    if state is None:
        raise FlowError("application state is not initialized")
    return state


def get_task_control(request: Request) -> TaskControl:
    return get_state(request).tasks


def get_goal_control(request: Request) -> GoalControl:
    return get_state(request).goals


def get_plan_control(request: Request) -> PlanControl:
    return get_state(request).plans


def get_planner_control(request: Request) -> PlannerControl:
    return get_state(request).planners


def get_version_control(request: Request) -> VersionControl:
    return get_state(request).versions
