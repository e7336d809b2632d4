# src/flow_planner/store/planner_store.py

from __future__ import annotations

import sqlite3
from typing import Any

from ..core.models import Planner
from .base import TableStore


class PlannerStore(TableStore[Planner]):
    kind = "planner"
    table = "planners"
    columns = (
        ("title", "TEXT NOT NULL DEFAULT ''"),
        ("owner", "TEXT NOT NULL DEFAULT ''"),
    )
    indexed = ("title", "owner")

    def _to_row(self, record: Planner) -> dict[str, Any]:
        return {"title": record.title, "owner": record.owner}

    def _from_row(self, row: sqlite3.Row) -> Planner:
        return Planner(
            id=str(row["id"]),
            title=str(row["title"] or ""),
            owner=str(row["owner"] or ""),
        )

    # ---- public API ----

    def create(self, planner: Planner) -> None:
        self._insert(planner)

    def update(self, planner: Planner) -> None:
        self._replace(planner)

    def delete(self, planner_id: str) -> None:
        self._delete(planner_id)

    def get(self, planner_id: str) -> Planner:
        return self._one("id", planner_id)

    def list(self) -> list[Planner]:
        return self._many()

    def get_by_title(self, title: str) -> Planner:
        return self._one("title", title)

    def list_by_owner(self, owner: str) -> list[Planner]:
        return self._many("owner", owner)
