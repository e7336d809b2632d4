# src/flow_planner/store/db.py

"""
Shared embedded database handle.

One SQLite file holds one table per entity kind. The handle is created once
(by the server lifespan or by a CLI command) and passed to every store.

Thread-safety:
- each session opens its own short-lived SQLite connection,
- SQLite's own locking is the only write guard (last write wins).
"""

from __future__ import annotations

import contextlib
import logging
import sqlite3
from collections.abc import Iterator
from pathlib import Path
from types import TracebackType

from ..core.errors import StoreError

logger = logging.getLogger(__name__)


class Database:
    def __init__(self, path: str | Path) -> None:
        self._path = Path(path)
        self._path.parent.mkdir(parents=True, exist_ok=True)
        self._closed = False
        logger.info("Database opened path=%s", self._path)

    @property
    def path(self) -> Path:
        return self._path

    @property
    def closed(self) -> bool:
        return self._closed

    def close(self) -> None:
        if self._closed:
            return
        self._closed = True
        logger.info("Database closed path=%s", self._path)

    def __enter__(self) -> Database:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()

    # ---- connections ----

    def connect(self) -> sqlite3.Connection:
        if self._closed:
            raise StoreError(f"database is closed: {self._path}")
        try:
            conn = sqlite3.connect(str(self._path), timeout=30.0)
        except sqlite3.Error as e:
            raise StoreError(f"cannot open database {self._path}: {e}") from e
        conn.row_factory = sqlite3.Row
        with contextlib.suppress(sqlite3.Error):
            conn.execute("PRAGMA journal_mode=WAL")
        return conn

    @contextlib.contextmanager
    def session(self) -> Iterator[sqlite3.Connection]:
        """
        Connection scoped to one store call.

        Commits on success, rolls back on any error. Engine errors are
        re-raised as StoreError; application errors pass through unchanged.
        """
        conn = self.connect()
        try:
            yield conn
            conn.commit()
        except sqlite3.Error as e:
            conn.rollback()
            raise StoreError(str(e)) from e
        except Exception:
            conn.rollback()
            raise
        finally:
            conn.close()
