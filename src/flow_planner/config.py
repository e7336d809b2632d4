# src/flow_planner/config.py

"""Centralized settings loaded from environment variables (+ optional .env).

Design goals:
- One Settings object for the whole app (normal "settings layer").
- No secrets required at import time; chat keys are checked by the chat clients.
- The storage backend is selected by a small JSON file, separate from env settings.
"""

from __future__ import annotations

import json
import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from dotenv import load_dotenv

from .core.errors import ConfigError

logger = logging.getLogger(__name__)

ENV_PREFIX = "FLOW"

DEFAULT_DATABASE_TYPE = "sqlite"
# "bolt" is the name older config files use for the embedded store.
_DATABASE_TYPES = {"sqlite": "sqlite", "bolt": "sqlite"}


def _k(suffix: str) -> str:
    """Build env var name with the project prefix."""
    return f"{ENV_PREFIX}_{suffix}"


load_dotenv(override=False)


def _env(name: str, default: str = "") -> str:
    v = os.getenv(name)
    return default if v is None else v


def _first_env(*names: str, default: str | None = None) -> str | None:
    for n in names:
        v = os.getenv(n)
        if v is not None and v.strip() != "":
            return v
    return default


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return int(raw)
    except ValueError:
        logger.warning("Ignoring non-integer %s=%r", name, raw)
        return default


def _env_float(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return float(raw)
    except ValueError:
        logger.warning("Ignoring non-numeric %s=%r", name, raw)
        return default


def _env_path(name: str, default: Path) -> Path:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    return Path(raw).expanduser()


@dataclass(frozen=True, slots=True)
class Settings:
    # ---- App / logging ----
    app_name: str
    log_level: str

    # ---- Local data paths (ignored by git) ----
    data_dir: Path
    db_path: Path
    config_path: Path
    chat_db_path: Path

    # ---- REST server ----
    server_host: str
    server_port: int

    # ---- Chat providers ----
    chat_provider: str
    openai_api_key: str | None
    openai_model: str
    gemini_api_key: str | None
    gemini_model: str
    perplexity_api_key: str | None
    perplexity_base_url: str
    perplexity_model: str

    # ---- Chat timeouts (seconds) ----
    chat_connect_timeout: float
    chat_read_timeout: float

    @staticmethod
    def from_env() -> Settings:
        app_name = _env(_k("APP_NAME"), "flow")
        log_level = _env(_k("LOG_LEVEL"), "INFO")

        data_dir = _env_path(_k("DATA_DIR"), Path(".local/flow"))
        db_path = _env_path(_k("DB_PATH"), data_dir / "flow.sqlite3")
        config_path = _env_path(_k("CONFIG_PATH"), data_dir / "config.json")
        chat_db_path = _env_path(_k("CHAT_DB_PATH"), data_dir / "chat.sqlite3")

        server_host = _env(_k("SERVER_HOST"), "127.0.0.1")
        server_port = _env_int(_k("SERVER_PORT"), 8080)

        chat_provider = _env(_k("CHAT_PROVIDER"), "openai").strip().lower()

        openai_api_key = _first_env(_k("OPENAI_API_KEY"), "OPENAI_API_KEY", default=None)
        openai_model = _env(_k("OPENAI_MODEL"), "gpt-4o-mini")

        gemini_api_key = _first_env(
            _k("GEMINI_API_KEY"), "GOOGLE_AI_STUDIO", "GEMINI_API_KEY", default=None
        )
        gemini_model = _env(_k("GEMINI_MODEL"), "gemini-2.0-flash")

        perplexity_api_key = _first_env(
            _k("PERPLEXITY_API_KEY"), "PAI_KEY", "PERPLEXITY_API_KEY", default=None
        )
        perplexity_base_url = _env(_k("PERPLEXITY_BASE_URL"), "https://api.perplexity.ai")
        perplexity_model = _env(_k("PERPLEXITY_MODEL"), "sonar")

        chat_connect_timeout = _env_float(_k("CHAT_CONNECT_TIMEOUT_SECONDS"), 5.0)
        chat_read_timeout = _env_float(_k("CHAT_READ_TIMEOUT_SECONDS"), 60.0)

        return Settings(
            app_name=app_name,
            log_level=log_level,
            data_dir=data_dir,
            db_path=db_path,
            config_path=config_path,
            chat_db_path=chat_db_path,
            server_host=server_host,
            server_port=server_port,
            chat_provider=chat_provider,
            openai_api_key=openai_api_key,
            openai_model=openai_model,
            gemini_api_key=gemini_api_key,
            gemini_model=gemini_model,
            perplexity_api_key=perplexity_api_key,
            perplexity_base_url=perplexity_base_url,
            perplexity_model=perplexity_model,
            chat_connect_timeout=chat_connect_timeout,
            chat_read_timeout=chat_read_timeout,
        )


_SETTINGS: Settings | None = None


def get_settings() -> Settings:
    global _SETTINGS
    if _SETTINGS is None:
        _SETTINGS = Settings.from_env()
    return _SETTINGS


# ---- storage backend config file ----


@dataclass(frozen=True, slots=True)
class StoreConfig:
    database_type: str = DEFAULT_DATABASE_TYPE


def load_store_config(path: str | Path) -> StoreConfig:
    """
    Read {"database_type": "..."} from a JSON file.

    Missing file -> default backend. Unreadable JSON or an unknown backend
    name -> ConfigError.
    """
    p = Path(path)
    if not p.exists():
        logger.debug("No store config at %s, using %s", p, DEFAULT_DATABASE_TYPE)
        return StoreConfig()

    try:
        data: Any = json.loads(p.read_text("utf-8"))
    except (OSError, ValueError) as e:
        raise ConfigError(f"cannot read config file {p}: {e}") from e

    if not isinstance(data, dict):
        raise ConfigError(f"config file {p} must contain a JSON object")

    raw = str(data.get("database_type") or DEFAULT_DATABASE_TYPE).strip().lower()
    backend = _DATABASE_TYPES.get(raw)
    if backend is None:
        raise ConfigError(f"invalid database type specified in config: {raw!r}")

    logger.info("Store config loaded from %s: database_type=%s", p, backend)
    return StoreConfig(database_type=backend)
