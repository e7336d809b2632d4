# src/flow_planner/cli/bootstrap.py

"""
CLI bootstrap helpers.

This module is the "composition root":
- loads settings once,
- ensures local (gitignored) directories exist,
- selects the storage backend from the JSON config file,
- wires stores -> services -> controls into AppState,
- picks the chat client for `flow chat`.
"""

from __future__ import annotations

import contextlib
import logging
from collections.abc import Iterator

from ..chat.gemini_client import GeminiChatClient
from ..chat.offline import OfflineChatClient
from ..chat.openai_client import OpenAIChatClient
from ..config import get_settings, load_store_config
from ..control.goals import GoalControl
from ..control.planners import PlannerControl
from ..control.plans import PlanControl
from ..control.tasks import TaskControl
from ..control.versions import VersionControl
from ..core.errors import ConfigError
from ..core.ports import ChatClient
from ..core.state import AppState
from ..services.cross import CrossService
from ..services.goals import GoalService
from ..services.planners import PlannerService
from ..services.plans import PlanService
from ..services.tasks import TaskService
from ..services.versions import VersionService
from ..store.db import Database
from ..store.goal_store import GoalStore
from ..store.plan_store import PlanStore
from ..store.planner_store import PlannerStore
from ..store.task_store import TaskStore
from ..store.version_store import VersionStore

logger = logging.getLogger(__name__)


def _ensure_local_dirs(settings) -> None:
    settings.data_dir.mkdir(parents=True, exist_ok=True)
    settings.db_path.parent.mkdir(parents=True, exist_ok=True)
    settings.chat_db_path.parent.mkdir(parents=True, exist_ok=True)


def open_database(settings) -> Database:
    """Open the database selected by the store config file."""
    # Rejects any backend other than sqlite (or its "bolt" alias).
    load_store_config(settings.config_path)
    return Database(settings.db_path)


def build_state(settings, db: Database) -> AppState:
    """Wire every store/service/control on top of one database handle."""
    task_store = TaskStore(db)
    goal_store = GoalStore(db)
    plan_store = PlanStore(db)
    planner_store = PlannerStore(db)
    version_store = VersionStore(db)

    cross = CrossService(goal_store, plan_store, task_store)

    return AppState(
        settings=settings,
        db=db,
        tasks=TaskControl(TaskService(task_store)),
        goals=GoalControl(GoalService(goal_store)),
        plans=PlanControl(PlanService(plan_store)),
        planners=PlannerControl(PlannerService(planner_store)),
        versions=VersionControl(VersionService(version_store), cross),
    )


def create_initial_state(*, settings=None) -> AppState:
    """
    Create AppState from the provided settings.

    Keeping settings injectable makes the app easier to test and avoids hidden global config reads.
    If settings is None, falls back to get_settings(). The caller owns state.db.
    """
    if settings is None:
        settings = get_settings()

    _ensure_local_dirs(settings)
    db = open_database(settings)
    try:
        return build_state(settings, db)
    except Exception:
        db.close()
        raise


@contextlib.contextmanager
def command_state(settings=None) -> Iterator[AppState]:
    """Per-command state for the interactive CLI: open, run, close."""
    state = create_initial_state(settings=settings)
    try:
        yield state
    finally:
        state.db.close()


# ---- chat ----

CHAT_PROVIDERS = ("openai", "gemini", "perplexity", "offline")


def create_chat_client(settings, provider: str) -> ChatClient:
    """Build the chat client for `provider`. Missing API key -> ChatError."""
    p = (provider or "").strip().lower()
    if p == "openai":
        return OpenAIChatClient(
            api_key=settings.openai_api_key,
            provider="openai",
            connect_timeout=settings.chat_connect_timeout,
            read_timeout=settings.chat_read_timeout,
        )
    if p == "perplexity":
        return OpenAIChatClient(
            api_key=settings.perplexity_api_key,
            provider="perplexity",
            base_url=settings.perplexity_base_url,
            connect_timeout=settings.chat_connect_timeout,
            read_timeout=settings.chat_read_timeout,
        )
    if p == "gemini":
        return GeminiChatClient(api_key=settings.gemini_api_key, read_timeout=settings.chat_read_timeout)
    if p == "offline":
        return OfflineChatClient()
    raise ConfigError(f"unknown chat provider {provider!r}; expected one of {', '.join(CHAT_PROVIDERS)}")


def default_model(settings, provider: str) -> str:
    return {
        "openai": settings.openai_model,
        "gemini": settings.gemini_model,
        "perplexity": settings.perplexity_model,
    }.get(provider, "echo")
