# src/flow_planner/services/planners.py

from __future__ import annotations

from ..core.models import Planner
from ..core.ports import PlannerRepo


class PlannerService:
    def __init__(self, repo: PlannerRepo) -> None:
        self._repo = repo

    def create_planner(self, planner: Planner) -> None:
        self._repo.create(planner)

    def update_planner(self, planner: Planner) -> None:
        self._repo.update(planner)

    def delete_planner(self, planner_id: str) -> None:
        self._repo.delete(planner_id)

    def get_planner(self, planner_id: str) -> Planner:
        return self._repo.get(planner_id)

    def list_planners(self) -> list[Planner]:
        return self._repo.list()

    def get_planner_by_title(self, title: str) -> Planner:
        return self._repo.get_by_title(title)

    def list_planners_by_owner(self, owner: str) -> list[Planner]:
        return self._repo.list_by_owner(owner)
