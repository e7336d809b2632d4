# src/flow_planner/services/goals.py

from __future__ import annotations

from ..core.models import Goal
from ..core.ports import GoalRepo


class GoalService:
    def __init__(self, repo: GoalRepo) -> None:
        self._repo = repo

    def create_goal(self, goal: Goal) -> None:
        self._repo.create(goal)

    def update_goal(self, goal: Goal) -> None:
        self._repo.update(goal)

    def delete_goal(self, goal_id: str) -> None:
        self._repo.delete(goal_id)

    def get_goal(self, goal_id: str) -> Goal:
        return self._repo.get(goal_id)

    def list_goals(self) -> list[Goal]:
        return self._repo.list()

    def get_goal_by_objective(self, objective: str) -> Goal:
        return self._repo.get_by_objective(objective)

    def list_goals_by_planner(self, planner_id: str) -> list[Goal]:
        return self._repo.list_by_planner(planner_id)
