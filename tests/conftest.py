# tests/conftest.py

from __future__ import annotations

from pathlib import Path
from types import SimpleNamespace

import pytest

from flow_planner.chat.store import ChatStore
from flow_planner.cli.bootstrap import build_state
from flow_planner.core.state import AppState
from flow_planner.store.db import Database


@pytest.fixture()
def settings(tmp_path: Path) -> SimpleNamespace:
    """
    Minimal settings object compatible with the bootstrap helpers.

    We intentionally use a SimpleNamespace rather than importing real config,
    to keep unit tests isolated from the developer's .env.
    """
    return SimpleNamespace(
        app_name="flow-test",
        log_level="DEBUG",
        # Paths (tmp per test run)
        data_dir=tmp_path,
        db_path=tmp_path / "flow.sqlite3",
        config_path=tmp_path / "config.json",
        chat_db_path=tmp_path / "chat.sqlite3",
        # Chat
        chat_provider="offline",
        openai_api_key=None,
        openai_model="gpt-4o-mini",
        gemini_api_key=None,
        gemini_model="gemini-2.0-flash",
        perplexity_api_key=None,
        perplexity_base_url="https://api.perplexity.ai",
        perplexity_model="sonar",
        chat_connect_timeout=1.0,
        chat_read_timeout=1.0,
    )


@pytest.fixture()
def db(settings: SimpleNamespace):
    database = Database(settings.db_path)
    yield database
    database.close()


@pytest.fixture()
def state(settings: SimpleNamespace, db: Database) -> AppState:
    """
    AppState wired on a real SQLite file.

    We keep real stores here because their correctness is part of what we test.
    """
    return build_state(settings, db)


@pytest.fixture()
def chat_store(settings: SimpleNamespace):
    store = ChatStore(settings.chat_db_path)
    yield store
    store.close()
