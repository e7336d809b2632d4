# src/flow_planner/chat/store.py

from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from pathlib import Path

from ..core.errors import RecordNotFoundError, StoreError
from ..store.db import Database

logger = logging.getLogger(__name__)

DEFAULT_TOPIC = "general"


@dataclass(frozen=True, slots=True)
class ChatEntry:
    id: int
    timestamp: float
    provider: str
    model: str
    topic: str
    user_input: str
    ai_response: str


@dataclass(frozen=True, slots=True)
class ChatTopic:
    name: str
    description: str
    created_at: float


class ChatStore:
    """
    SQLite-backed chat history.

    Thread-safety:
    - Each operation opens its own SQLite connection (no shared cursors).

    Entries are append-only; topics group entries by name. Saving an entry
    under an unknown topic registers the topic.
    """

    def __init__(self, db_path: str | Path) -> None:
        self._db = Database(db_path)
        self._init_db()

    def close(self) -> None:
        self._db.close()

    def _init_db(self) -> None:
        with self._db.session() as conn:
            conn.execute(
                """
                CREATE TABLE IF NOT EXISTS chat_topics (
                    name TEXT PRIMARY KEY NOT NULL,
                    description TEXT NOT NULL DEFAULT '',
                    created_at REAL NOT NULL
                )
                """
            )
            conn.execute(
                """
                CREATE TABLE IF NOT EXISTS chat_entries (
                    id INTEGER PRIMARY KEY AUTOINCREMENT,
                    timestamp REAL NOT NULL,
                    provider TEXT NOT NULL,
                    model TEXT NOT NULL,
                    topic TEXT NOT NULL,
                    user_input TEXT NOT NULL,
                    ai_response TEXT NOT NULL
                )
                """
            )
            conn.execute(
                "CREATE INDEX IF NOT EXISTS idx_chat_entries_topic ON chat_entries(topic, timestamp)"
            )

    # ---- topics ----

    def save_topic(self, name: str, description: str = "", now_ts: float | None = None) -> ChatTopic:
        """Create the topic if missing; an existing topic is returned unchanged."""
        name = (name or "").strip() or DEFAULT_TOPIC
        ts = time.time() if now_ts is None else float(now_ts)
        with self._db.session() as conn:
            conn.execute(
                "INSERT OR IGNORE INTO chat_topics(name, description, created_at) VALUES (?, ?, ?)",
                (name, description or "", ts),
            )
            row = conn.execute(
                "SELECT name, description, created_at FROM chat_topics WHERE name = ?", (name,)
            ).fetchone()
        return ChatTopic(name=row["name"], description=row["description"], created_at=row["created_at"])

    def list_topics(self) -> list[ChatTopic]:
        with self._db.session() as conn:
            rows = conn.execute(
                "SELECT name, description, created_at FROM chat_topics ORDER BY created_at ASC, name ASC"
            ).fetchall()
        return [
            ChatTopic(name=r["name"], description=r["description"], created_at=r["created_at"])
            for r in rows
        ]

    # ---- entries ----

    def save_entry(
        self,
        *,
        provider: str,
        model: str,
        user_input: str,
        ai_response: str,
        topic: str = DEFAULT_TOPIC,
        now_ts: float | None = None,
    ) -> int:
        topic = (topic or "").strip() or DEFAULT_TOPIC
        ts = time.time() if now_ts is None else float(now_ts)
        self.save_topic(topic, now_ts=ts)
        with self._db.session() as conn:
            cur = conn.execute(
                """
                INSERT INTO chat_entries(timestamp, provider, model, topic, user_input, ai_response)
                VALUES (?, ?, ?, ?, ?, ?)
                """,
                (ts, provider, model, topic, user_input, ai_response),
            )
            entry_id = cur.lastrowid
        if entry_id is None:
            raise StoreError("chat entry insert returned no row id")
        logger.debug("Chat entry saved id=%s topic=%s provider=%s", entry_id, topic, provider)
        return int(entry_id)

    def retrieve_entries(self, topic: str | None = None, limit: int | None = None) -> list[ChatEntry]:
        """Oldest first. With `limit`, the most recent `limit` entries (still oldest first)."""
        sql = "SELECT * FROM chat_entries"
        params: list[object] = []
        if topic is not None:
            sql += " WHERE topic = ?"
            params.append(topic)
        sql += " ORDER BY timestamp DESC, id DESC"
        if limit is not None:
            sql += " LIMIT ?"
            params.append(int(limit))

        with self._db.session() as conn:
            rows = conn.execute(sql, params).fetchall()

        out = [
            ChatEntry(
                id=int(r["id"]),
                timestamp=float(r["timestamp"]),
                provider=str(r["provider"]),
                model=str(r["model"]),
                topic=str(r["topic"]),
                user_input=str(r["user_input"]),
                ai_response=str(r["ai_response"]),
            )
            for r in rows
        ]
        out.reverse()
        return out

    def clear_entries(self, topic: str | None = None) -> int:
        with self._db.session() as conn:
            if topic is None:
                cur = conn.execute("DELETE FROM chat_entries")
            else:
                cur = conn.execute("DELETE FROM chat_entries WHERE topic = ?", (topic,))
            n = cur.rowcount
        logger.info("Chat history cleared topic=%s removed=%d", topic or "*", n)
        return int(n)

    def count_entries(self, topic: str | None = None) -> int:
        with self._db.session() as conn:
            if topic is None:
                (n,) = conn.execute("SELECT COUNT(*) FROM chat_entries").fetchone()
            else:
                (n,) = conn.execute(
                    "SELECT COUNT(*) FROM chat_entries WHERE topic = ?", (topic,)
                ).fetchone()
        return int(n)

    def delete_topic(self, name: str) -> int:
        """
        Remove a topic together with its entries.
        Returns the number of entries removed.
        """
        with self._db.session() as conn:
            cur = conn.execute("DELETE FROM chat_topics WHERE name = ?", (name,))
            if cur.rowcount == 0:
                raise RecordNotFoundError("chat topic", "name", name)
            n = conn.execute("DELETE FROM chat_entries WHERE topic = ?", (name,)).rowcount
        logger.info("Chat topic deleted name=%s removed=%d", name, n)
        return int(n)
