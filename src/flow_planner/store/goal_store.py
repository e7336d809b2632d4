# src/flow_planner/store/goal_store.py

from __future__ import annotations

import sqlite3
from typing import Any

from ..core.models import Goal, Status, _str_to_date, _str_to_dt, format_date
from .base import TableStore


class GoalStore(TableStore[Goal]):
    """SQLite goal store (lookups: objective, planner_id)."""

    kind = "goal"
    table = "goals"
    columns = (
        ("objective", "TEXT NOT NULL DEFAULT ''"),
        ("status", f"TEXT NOT NULL DEFAULT '{Status.NOT_STARTED.value}'"),
        ("deadline", "TEXT"),
        ("planner_id", "TEXT NOT NULL DEFAULT ''"),
        ("created_at", "TEXT NOT NULL DEFAULT ''"),
        ("updated_at", "TEXT NOT NULL DEFAULT ''"),
    )
    indexed = ("objective", "planner_id")

    def _to_row(self, record: Goal) -> dict[str, Any]:
        return {
            "objective": record.objective,
            "status": record.status,
            "deadline": format_date(record.deadline),
            "planner_id": record.planner_id,
            "created_at": record.created_at.isoformat(),
            "updated_at": record.updated_at.isoformat(),
        }

    def _from_row(self, row: sqlite3.Row) -> Goal:
        return Goal(
            id=str(row["id"]),
            objective=str(row["objective"] or ""),
            status=str(row["status"]),
            deadline=_str_to_date(row["deadline"]),
            planner_id=str(row["planner_id"] or ""),
            created_at=_str_to_dt(row["created_at"]),
            updated_at=_str_to_dt(row["updated_at"]),
        )

    # ---- public API ----

    def create(self, goal: Goal) -> None:
        self._insert(goal)

    def update(self, goal: Goal) -> None:
        self._replace(goal)

    def delete(self, goal_id: str) -> None:
        self._delete(goal_id)

    def get(self, goal_id: str) -> Goal:
        return self._one("id", goal_id)

    def list(self) -> list[Goal]:
        return self._many()

    def get_by_objective(self, objective: str) -> Goal:
        return self._one("objective", objective)

    def list_by_planner(self, planner_id: str) -> list[Goal]:
        return self._many("planner_id", planner_id)
