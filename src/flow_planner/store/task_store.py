# src/flow_planner/store/task_store.py

from __future__ import annotations

import sqlite3
from typing import Any

from ..core.models import Task, _str_to_dt
from .base import TableStore


class TaskStore(TableStore[Task]):
    """SQLite task store (lookups: title, owner)."""

    kind = "task"
    table = "tasks"
    columns = (
        ("title", "TEXT NOT NULL DEFAULT ''"),
        ("description", "TEXT NOT NULL DEFAULT ''"),
        ("owner", "TEXT NOT NULL DEFAULT ''"),
        ("started", "INTEGER NOT NULL DEFAULT 0"),
        ("completed", "INTEGER NOT NULL DEFAULT 0"),
        ("created_at", "TEXT NOT NULL DEFAULT ''"),
        ("updated_at", "TEXT NOT NULL DEFAULT ''"),
    )
    indexed = ("title", "owner")

    def _to_row(self, record: Task) -> dict[str, Any]:
        return {
            "title": record.title,
            "description": record.description,
            "owner": record.owner,
            "started": int(bool(record.started)),
            "completed": int(bool(record.completed)),
            "created_at": record.created_at.isoformat(),
            "updated_at": record.updated_at.isoformat(),
        }

    def _from_row(self, row: sqlite3.Row) -> Task:
        return Task(
            id=str(row["id"]),
            title=str(row["title"] or ""),
            description=str(row["description"] or ""),
            owner=str(row["owner"] or ""),
            started=bool(row["started"]),
            completed=bool(row["completed"]),
            created_at=_str_to_dt(row["created_at"]),
            updated_at=_str_to_dt(row["updated_at"]),
        )

    # ---- public API ----

    def create(self, task: Task) -> None:
        self._insert(task)

    def update(self, task: Task) -> None:
        self._replace(task)

    def delete(self, task_id: str) -> None:
        self._delete(task_id)

    def get(self, task_id: str) -> Task:
        return self._one("id", task_id)

    def list(self) -> list[Task]:
        return self._many()

    def get_by_title(self, title: str) -> Task:
        return self._one("title", title)

    def list_by_owner(self, owner: str) -> list[Task]:
        return self._many("owner", owner)
