# src/flow_planner/services/plans.py

from __future__ import annotations

from ..core.models import Plan
from ..core.ports import PlanRepo


class PlanService:
    def __init__(self, repo: PlanRepo) -> None:
        self._repo = repo

    def create_plan(self, plan: Plan) -> None:
        self._repo.create(plan)

    def update_plan(self, plan: Plan) -> None:
        self._repo.update(plan)

    def delete_plan(self, plan_id: str) -> None:
        self._repo.delete(plan_id)

    def get_plan(self, plan_id: str) -> Plan:
        return self._repo.get(plan_id)

    def list_plans(self) -> list[Plan]:
        return self._repo.list()

    def get_plan_by_name(self, name: str) -> Plan:
        return self._repo.get_by_name(name)

    def list_plans_by_goal(self, goal_id: str) -> list[Plan]:
        return self._repo.list_by_goal(goal_id)
