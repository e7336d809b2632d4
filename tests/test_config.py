# tests/test_config.py

from __future__ import annotations

from pathlib import Path

import pytest

from flow_planner.chat.offline import OfflineChatClient
from flow_planner.cli import main as cli_main
from flow_planner.cli.bootstrap import create_chat_client, create_initial_state, open_database
from flow_planner.config import Settings, load_store_config
from flow_planner.core.errors import ChatError, ConfigError


def test_store_config_defaults_when_missing(tmp_path: Path) -> None:
    assert load_store_config(tmp_path / "nope.json").database_type == "sqlite"


@pytest.mark.parametrize("name", ["sqlite", "bolt", "SQLite"])
def test_store_config_accepts_known_backends(tmp_path: Path, name: str) -> None:
    p = tmp_path / "config.json"
    p.write_text(f'{{"database_type": "{name}"}}', "utf-8")
    assert load_store_config(p).database_type == "sqlite"


def test_store_config_rejects_unknown_backend(tmp_path: Path) -> None:
    p = tmp_path / "config.json"
    p.write_text('{"database_type": "postgres"}', "utf-8")
    with pytest.raises(ConfigError, match="invalid database type"):
        load_store_config(p)


def test_store_config_rejects_broken_json(tmp_path: Path) -> None:
    p = tmp_path / "config.json"
    p.write_text("{", "utf-8")
    with pytest.raises(ConfigError):
        load_store_config(p)


def test_open_database_follows_config(settings) -> None:
    settings.config_path.write_text('{"database_type": "redis"}', "utf-8")
    with pytest.raises(ConfigError):
        open_database(settings)


def test_create_initial_state_opens_database(settings) -> None:
    state = create_initial_state(settings=settings)
    try:
        assert state.db.path == settings.db_path
        assert state.tasks.list_tasks().tasks == []
    finally:
        state.db.close()
    assert state.db.closed


def test_settings_from_env(monkeypatch, tmp_path: Path) -> None:
    monkeypatch.setenv("FLOW_DATA_DIR", str(tmp_path))
    monkeypatch.setenv("FLOW_SERVER_PORT", "9999")
    monkeypatch.setenv("PAI_KEY", "pk")
    monkeypatch.delenv("FLOW_PERPLEXITY_API_KEY", raising=False)
    monkeypatch.delenv("FLOW_DB_PATH", raising=False)

    s = Settings.from_env()
    assert s.data_dir == tmp_path
    assert s.db_path == tmp_path / "flow.sqlite3"
    assert s.server_port == 9999
    assert s.perplexity_api_key == "pk"


def test_chat_client_requires_api_key(settings) -> None:
    with pytest.raises(ChatError, match="missing API key"):
        create_chat_client(settings, "openai")
    with pytest.raises(ChatError):
        create_chat_client(settings, "gemini")
    assert isinstance(create_chat_client(settings, "offline"), OfflineChatClient)
    with pytest.raises(ConfigError):
        create_chat_client(settings, "bard")


@pytest.mark.parametrize("argv", [["--help"], ["no-such-command"]])
def test_argument_errors_leave_no_files(monkeypatch, tmp_path: Path, argv: list[str]) -> None:
    data_dir = tmp_path / "data"
    monkeypatch.setenv("FLOW_DATA_DIR", str(data_dir))
    monkeypatch.delenv("FLOW_DB_PATH", raising=False)
    monkeypatch.setattr(cli_main, "get_settings", Settings.from_env)

    with pytest.raises(SystemExit):
        cli_main.main(argv)
    assert not data_dir.exists()
