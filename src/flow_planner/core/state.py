# src/flow_planner/core/state.py

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from ..control.goals import GoalControl
from ..control.planners import PlannerControl
from ..control.plans import PlanControl
from ..control.tasks import TaskControl
from ..control.versions import VersionControl


@dataclass(slots=True)
class AppState:
    """
    Everything a transport (HTTP app, interactive CLI) needs for one database.

    `db` is the handle the controls were built on; whoever created the state
    owns it and closes it.
    """

    settings: Any
    db: Any

    tasks: TaskControl
    goals: GoalControl
    plans: PlanControl
    planners: PlannerControl
    versions: VersionControl
