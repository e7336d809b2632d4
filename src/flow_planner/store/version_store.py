# src/flow_planner/store/version_store.py

from __future__ import annotations

import sqlite3
from typing import Any

from ..core.errors import RecordNotFoundError
from ..core.models import Snapshot, Version, VersionInfo, _str_to_dt
from .base import TableStore, from_json, to_json


class VersionStore(TableStore[Version]):
    """
    SQLite version store.

    The snapshot image is stored as JSON. Version numbers are not checked
    for monotonicity here; VersionControl computes the next number.
    """

    kind = "version"
    table = "versions"
    columns = (
        ("goal_id", "TEXT NOT NULL DEFAULT ''"),
        ("plan_id", "TEXT NOT NULL DEFAULT ''"),
        ("task_id", "TEXT NOT NULL DEFAULT ''"),
        ("major", "INTEGER NOT NULL DEFAULT 0"),
        ("minor", "INTEGER NOT NULL DEFAULT 0"),
        ("patch", "INTEGER NOT NULL DEFAULT 0"),
        ("created_at", "TEXT NOT NULL DEFAULT ''"),
        ("created_by", "TEXT NOT NULL DEFAULT ''"),
        ("previous_version", "TEXT"),
        ("image", "TEXT NOT NULL DEFAULT '{}'"),
    )
    indexed = ("goal_id",)

    def _to_row(self, record: Version) -> dict[str, Any]:
        return {
            "goal_id": record.goal_id,
            "plan_id": record.plan_id,
            "task_id": record.task_id,
            "major": int(record.no.major),
            "minor": int(record.no.minor),
            "patch": int(record.no.patch),
            "created_at": record.created_at.isoformat(),
            "created_by": record.created_by,
            "previous_version": record.previous_version,
            "image": to_json(record.image.to_dict()),
        }

    def _from_row(self, row: sqlite3.Row) -> Version:
        return Version(
            id=str(row["id"]),
            goal_id=str(row["goal_id"] or ""),
            plan_id=str(row["plan_id"] or ""),
            task_id=str(row["task_id"] or ""),
            no=VersionInfo(int(row["major"]), int(row["minor"]), int(row["patch"])),
            created_at=_str_to_dt(row["created_at"]),
            created_by=str(row["created_by"] or ""),
            previous_version=row["previous_version"] or None,
            image=Snapshot.from_dict(from_json(row["image"], {})),
        )

    # ---- public API ----

    def create(self, version: Version) -> None:
        self._insert(version)

    def update(self, version: Version) -> None:
        self._replace(version)

    def delete(self, version_id: str) -> None:
        self._delete(version_id)

    def get(self, version_id: str) -> Version:
        return self._one("id", version_id)

    def list(self) -> list[Version]:
        return self._many()

    def list_by_goal(self, goal_id: str) -> list[Version]:
        return self._many("goal_id", goal_id)

    def get_previous(self, version_id: str) -> Version:
        current = self.get(version_id)
        if not current.previous_version:
            raise RecordNotFoundError(self.kind, "previous_version", version_id)
        return self.get(current.previous_version)

    def get_current(self, goal_id: str) -> Version:
        """Highest version number recorded for the goal."""
        with self._db.session() as conn:
            row = conn.execute(
                f"""
                SELECT *
                FROM {self.table}
                WHERE goal_id = ?
                ORDER BY major DESC, minor DESC, patch DESC, rowid DESC
                    LIMIT 1
                """,
                (goal_id,),
            ).fetchone()
        if row is None:
            raise RecordNotFoundError(self.kind, "goal_id", goal_id)
        return self._from_row(row)
