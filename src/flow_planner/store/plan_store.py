# src/flow_planner/store/plan_store.py

from __future__ import annotations

import sqlite3
from typing import Any

from ..core.models import (
    Plan,
    Status,
    Task,
    _str_to_date,
    _str_to_dt,
    _str_to_time,
    format_date,
    format_time,
)
from .base import TableStore, from_json, to_json


class PlanStore(TableStore[Plan]):
    """
    SQLite plan store (lookups: name, goal_id).

    Embedded tasks are kept as a JSON array in the plan row; they are not
    visible through TaskStore.
    """

    kind = "plan"
    table = "plans"
    columns = (
        ("name", "TEXT NOT NULL DEFAULT ''"),
        ("description", "TEXT NOT NULL DEFAULT ''"),
        ("plan_date", "TEXT"),
        ("plan_time", "TEXT"),
        ("status", f"TEXT NOT NULL DEFAULT '{Status.NOT_STARTED.value}'"),
        ("goal_id", "TEXT NOT NULL DEFAULT ''"),
        ("tasks", "TEXT NOT NULL DEFAULT '[]'"),
        ("created_at", "TEXT NOT NULL DEFAULT ''"),
        ("updated_at", "TEXT NOT NULL DEFAULT ''"),
    )
    indexed = ("name", "goal_id")

    def _to_row(self, record: Plan) -> dict[str, Any]:
        return {
            "name": record.name,
            "description": record.description,
            "plan_date": format_date(record.plan_date),
            "plan_time": format_time(record.plan_time),
            "status": record.status,
            "goal_id": record.goal_id,
            "tasks": to_json([t.to_dict() for t in record.tasks]),
            "created_at": record.created_at.isoformat(),
            "updated_at": record.updated_at.isoformat(),
        }

    def _from_row(self, row: sqlite3.Row) -> Plan:
        raw_tasks = from_json(row["tasks"], [])
        return Plan(
            id=str(row["id"]),
            name=str(row["name"] or ""),
            description=str(row["description"] or ""),
            plan_date=_str_to_date(row["plan_date"]),
            plan_time=_str_to_time(row["plan_time"]),
            status=str(row["status"]),
            goal_id=str(row["goal_id"] or ""),
            tasks=[Task.from_dict(t) for t in raw_tasks if isinstance(t, dict)],
            created_at=_str_to_dt(row["created_at"]),
            updated_at=_str_to_dt(row["updated_at"]),
        )

    # ---- public API ----

    def create(self, plan: Plan) -> None:
        self._insert(plan)

    def update(self, plan: Plan) -> None:
        self._replace(plan)

    def delete(self, plan_id: str) -> None:
        self._delete(plan_id)

    def get(self, plan_id: str) -> Plan:
        return self._one("id", plan_id)

    def list(self) -> list[Plan]:
        return self._many()

    def get_by_name(self, name: str) -> Plan:
        return self._one("name", name)

    def list_by_goal(self, goal_id: str) -> list[Plan]:
        return self._many("goal_id", goal_id)
