# src/flow_planner/services/cross.py

"""
Cross-entity reads.

Used by VersionControl to capture a point-in-time image of a goal.
Reads are not transactional: a write landing between the three reads
may or may not be reflected in the snapshot.
"""

from __future__ import annotations

import logging

from ..core.models import Snapshot
from ..core.ports import GoalRepo, PlanRepo, TaskRepo

logger = logging.getLogger(__name__)


class CrossService:
    def __init__(self, goals: GoalRepo, plans: PlanRepo, tasks: TaskRepo) -> None:
        self._goals = goals
        self._plans = plans
        self._tasks = tasks

    def create_version_image(self, goal_id: str) -> Snapshot:
        """
        Snapshot = the goal + its plans (by goal_id) + all tasks.

        Raises RecordNotFoundError if the goal does not exist.
        """
        goal = self._goals.get(goal_id)
        plans = self._plans.list_by_goal(goal_id)
        tasks = self._tasks.list()
        logger.debug(
            "Version image built goal_id=%s plans=%d tasks=%d", goal_id, len(plans), len(tasks)
        )
        return Snapshot(goal=goal, plans=plans, tasks=tasks)
