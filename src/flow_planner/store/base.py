# src/flow_planner/store/base.py

from __future__ import annotations

import json
import logging
import sqlite3
from collections.abc import Sequence
from typing import Any, Generic, TypeVar

from ..core.errors import DuplicateKeyError, RecordNotFoundError
from .db import Database

logger = logging.getLogger(__name__)

R = TypeVar("R")


def to_json(value: Any) -> str:
    return json.dumps(value, ensure_ascii=False)


def from_json(raw: str | None, default: Any) -> Any:
    if not raw:
        return default
    try:
        return json.loads(raw)
    except ValueError:
        logger.warning("Stored JSON is not decodable; using default.")
        return default


class TableStore(Generic[R]):
    """
    One entity kind = one table keyed by `id TEXT PRIMARY KEY`.

    Subclasses declare the table layout and the row <-> record mapping.
    The schema is created if missing and missing columns are added with
    ALTER TABLE (same migration approach for every table).
    """

    kind: str = "record"
    table: str = ""
    # (column name, SQL declaration) excluding the id column
    columns: Sequence[tuple[str, str]] = ()
    # columns that get a single-field secondary index
    indexed: Sequence[str] = ()

    def __init__(self, db: Database) -> None:
        self._db = db
        self._ensure_schema()

    # ---- mapping (subclass hooks) ----

    def _to_row(self, record: R) -> dict[str, Any]:
        raise NotImplementedError

    def _from_row(self, row: sqlite3.Row) -> R:
        raise NotImplementedError

    def _record_id(self, record: R) -> str:
        return str(getattr(record, "id"))

    # ---- schema ----

    def _ensure_schema(self) -> None:
        with self._db.session() as conn:
            cols_sql = ",\n".join(f"    {name} {decl}" for name, decl in self.columns)
            conn.execute(
                f"CREATE TABLE IF NOT EXISTS {self.table} (\n"
                f"    id TEXT PRIMARY KEY NOT NULL,\n{cols_sql}\n)"
            )

            existing = {row["name"] for row in conn.execute(f"PRAGMA table_info({self.table})")}
            for name, decl in self.columns:
                if name in existing:
                    continue
                conn.execute(f"ALTER TABLE {self.table} ADD COLUMN {name} {decl}")
                logger.info("%s migration: added column %s", self.table, name)

            for name in self.indexed:
                conn.execute(
                    f"CREATE INDEX IF NOT EXISTS idx_{self.table}_{name} ON {self.table}({name})"
                )

    # ---- generic operations ----

    def _insert(self, record: R) -> None:
        row = self._to_row(record)
        names = ["id", *row.keys()]
        placeholders = ", ".join("?" for _ in names)
        params = [self._record_id(record), *row.values()]
        with self._db.session() as conn:
            try:
                conn.execute(
                    f"INSERT INTO {self.table}({', '.join(names)}) VALUES ({placeholders})",
                    params,
                )
            except sqlite3.IntegrityError as e:
                raise DuplicateKeyError(self.kind, self._record_id(record)) from e
        logger.debug("%s created id=%s", self.kind, self._record_id(record))

    def _replace(self, record: R) -> None:
        row = self._to_row(record)
        assignments = ", ".join(f"{name} = ?" for name in row)
        record_id = self._record_id(record)
        with self._db.session() as conn:
            cur = conn.execute(
                f"UPDATE {self.table} SET {assignments} WHERE id = ?",
                [*row.values(), record_id],
            )
            if cur.rowcount == 0:
                raise RecordNotFoundError(self.kind, "id", record_id)
        logger.debug("%s updated id=%s", self.kind, record_id)

    def _delete(self, record_id: str) -> None:
        with self._db.session() as conn:
            cur = conn.execute(f"DELETE FROM {self.table} WHERE id = ?", (record_id,))
            if cur.rowcount == 0:
                raise RecordNotFoundError(self.kind, "id", record_id)
        logger.debug("%s deleted id=%s", self.kind, record_id)

    def _one(self, column: str, value: str) -> R:
        with self._db.session() as conn:
            row = conn.execute(
                f"SELECT * FROM {self.table} WHERE {column} = ? ORDER BY rowid ASC LIMIT 1",
                (value,),
            ).fetchone()
        if row is None:
            raise RecordNotFoundError(self.kind, column, value)
        return self._from_row(row)

    def _many(self, column: str | None = None, value: str | None = None) -> list[R]:
        with self._db.session() as conn:
            if column is None:
                rows = conn.execute(f"SELECT * FROM {self.table} ORDER BY rowid ASC").fetchall()
            else:
                rows = conn.execute(
                    f"SELECT * FROM {self.table} WHERE {column} = ? ORDER BY rowid ASC",
                    (value,),
                ).fetchall()
        return [self._from_row(r) for r in rows]

    def count(self) -> int:
        with self._db.session() as conn:
            (n,) = conn.execute(f"SELECT COUNT(*) FROM {self.table}").fetchone()
        return int(n)
