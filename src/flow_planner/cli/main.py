# src/flow_planner/cli/main.py

"""
CLI entrypoint (`flow`).

Subcommands:
- server: run the REST API with uvicorn,
- cli:    interactive command REPL over the local database,
- chat:   console chat with an LLM provider (history in a local SQLite file).
"""

from __future__ import annotations

import argparse
import logging
import sys

from ..chat.console import ChatSession, run_chat_loop
from ..chat.store import ChatStore
from ..config import get_settings
from ..core.errors import ChatError, ConfigError
from ..logging_setup import setup_logging
from .bootstrap import CHAT_PROVIDERS, command_state, create_chat_client, default_model
from .commands import run_cli_loop

logger = logging.getLogger(__name__)


def _build_parser(settings) -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="flow",
        description="Planner / goal / plan / task manager with a REST API and LLM chat tools.",
    )
    sub = parser.add_subparsers(dest="command", required=True)

    server = sub.add_parser("server", help="Run the REST API server")
    server.add_argument("--host", default=settings.server_host, help="Bind host")
    server.add_argument("--port", type=int, default=settings.server_port, help="Bind port")

    sub.add_parser("cli", help="Interactive command REPL")

    chat = sub.add_parser("chat", help="Console chat with an LLM provider")
    chat.add_argument(
        "--provider",
        choices=CHAT_PROVIDERS,
        default=settings.chat_provider if settings.chat_provider in CHAT_PROVIDERS else "openai",
    )
    chat.add_argument("--model", default=None, help="Model name (default per provider)")
    chat.add_argument("--topic", default="general", help="History topic")

    return parser


def _run_server(settings, host: str, port: int) -> int:
    import uvicorn

    from ..api.app import create_app

    logger.info("Starting %s API on %s:%d", settings.app_name, host, port)
    uvicorn.run(create_app(settings=settings), host=host, port=port, log_config=None)
    return 0


def _run_cli(settings) -> int:
    run_cli_loop(lambda: command_state(settings))
    return 0


def _run_chat(settings, provider: str, model: str | None, topic: str) -> int:
    try:
        client = create_chat_client(settings, provider)
    except ChatError as e:
        print(str(e), file=sys.stderr)
        return 2

    store = ChatStore(settings.chat_db_path)
    try:
        store.save_topic(topic)
        session = ChatSession(
            client=client,
            store=store,
            model=model or default_model(settings, provider),
            topic=topic,
        )
        run_chat_loop(session)
    finally:
        store.close()
    return 0


def main(argv: list[str] | None = None) -> int:
    settings = get_settings()
    args = _build_parser(settings).parse_args(argv)

    level_name = str(getattr(settings, "log_level", "INFO")).upper()
    console_level = getattr(logging, level_name, logging.INFO)
    setup_logging(log_dir=settings.data_dir, console_level=console_level)

    logger.debug("Command: %s", args.command)

    try:
        if args.command == "server":
            return _run_server(settings, args.host, args.port)
        if args.command == "cli":
            return _run_cli(settings)
        if args.command == "chat":
            return _run_chat(settings, args.provider, args.model, args.topic)
    except ConfigError as e:
        logger.error("Configuration error: %s", e)
        print(f"Configuration error: {e}", file=sys.stderr)
        return 2

    return 1


if __name__ == "__main__":
    sys.exit(main())
