# src/flow_planner/chat/console.py

"""
Console chat loop.

Key invariants:
- an exchange is persisted only after the stream completed successfully
  (no partial replies in history),
- the in-memory conversation is per session and per topic; switching
  topics reloads it from the store.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import datetime

from ..core.errors import ChatError, RecordNotFoundError
from ..core.ports import ChatClient, ChatMessage
from .openai_client import friendly_chat_error_message
from .store import ChatStore

logger = logging.getLogger(__name__)

# How many stored exchanges seed the context when a topic is (re)opened.
CONTEXT_EXCHANGES = 10

Emit = Callable[[str], None]


def _ts_local(ts: float | None = None) -> str:
    dt = datetime.now() if ts is None else datetime.fromtimestamp(ts)
    return dt.astimezone().strftime("%Y-%m-%d %H:%M:%S")


@dataclass(slots=True)
class ChatSession:
    client: ChatClient
    store: ChatStore
    model: str
    topic: str
    conversation: list[ChatMessage] = field(default_factory=list)
    # Yes/no prompt for destructive commands.
    confirm: Callable[[str], str] = input

    def load_context(self) -> None:
        self.conversation = []
        for e in self.store.retrieve_entries(self.topic, limit=CONTEXT_EXCHANGES):
            self.conversation.append({"role": "user", "content": e.user_input})
            self.conversation.append({"role": "assistant", "content": e.ai_response})


def ask(session: ChatSession, text: str, on_chunk: Emit | None = None) -> str:
    """
    Send one user message, stream the reply, persist the exchange.

    Raises ChatError on provider failure; nothing is stored in that case.
    """
    messages = [*session.conversation, {"role": "user", "content": text}]
    parts: list[str] = []
    for piece in session.client.stream_chat(messages, session.model):
        if not piece:
            continue
        parts.append(piece)
        if on_chunk is not None:
            on_chunk(piece)

    reply = "".join(parts)
    session.store.save_entry(
        provider=session.client.provider,
        model=session.model,
        topic=session.topic,
        user_input=text,
        ai_response=reply,
    )
    session.conversation.append({"role": "user", "content": text})
    session.conversation.append({"role": "assistant", "content": reply})
    return reply


# ---- $commands ----

HELP_TEXT = (
    "Commands:\n"
    "  $history [all]  - show stored exchanges for the current topic (or every topic)\n"
    "  $clear [all]    - delete stored exchanges for the current topic (or every topic)\n"
    "  $models         - list models of the current provider\n"
    "  $model <name>   - switch model\n"
    "  $topic [name]   - show topics / switch topic\n"
    "  $topic delete <name> - delete a topic and its exchanges\n"
    "  $help           - this help\n"
    "  exit | $exit    - quit"
)


def _wants_all(args: list[str]) -> bool:
    return bool(args) and args[0].lower() == "all"


def _cmd_history(session: ChatSession, args: list[str]) -> str:
    every_topic = _wants_all(args)
    entries = session.store.retrieve_entries(None if every_topic else session.topic)
    if not entries:
        return "No chat history."
    sep = "-" * 49
    blocks = []
    for e in entries:
        topic_line = f"Topic: {e.topic}\n" if every_topic else ""
        blocks.append(
            f"You: {e.user_input}\n"
            f"AI: {e.ai_response}\n"
            f"{topic_line}"
            f"Time: {_ts_local(e.timestamp)}\n"
            f"Model: {e.provider}/{e.model}\n"
            f"{sep}"
        )
    return "\n".join(blocks)


def _cmd_clear(session: ChatSession, args: list[str]) -> str:
    if not _wants_all(args):
        n = session.store.clear_entries(session.topic)
        session.conversation = []
        return f"Cleared {n} entries from topic {session.topic!r}."

    answer = session.confirm("Delete chat history of ALL topics? [y/N]: ").strip().lower()
    if answer not in ("y", "yes"):
        return "Clear cancelled."
    n = session.store.clear_entries(None)
    session.conversation = []
    return f"Cleared {n} entries from all topics."


def _cmd_models(session: ChatSession, args: list[str]) -> str:
    lines = [f"Models ({session.client.provider}):"]
    for m in session.client.list_models():
        mark = "*" if m == session.model else " "
        lines.append(f" {mark} {m}")
    return "\n".join(lines)


def _cmd_model(session: ChatSession, args: list[str]) -> str:
    if not args:
        return f"Current model: {session.model}. Usage: $model <name>"
    session.model = args[0]
    logger.info("Chat model switched to %s", session.model)
    return f"Model set to {session.model}."


def _cmd_topic_delete(session: ChatSession, args: list[str]) -> str:
    name = " ".join(args).strip()
    if not name:
        return "Usage: $topic delete <name>"
    try:
        n = session.store.delete_topic(name)
    except RecordNotFoundError:
        return f"Unknown topic {name!r}."
    if name == session.topic:
        session.conversation = []
    return f"Deleted topic {name!r} ({n} entries removed)."


def _cmd_topic(session: ChatSession, args: list[str]) -> str:
    if args and args[0].lower() == "delete":
        return _cmd_topic_delete(session, args[1:])
    if not args:
        topics = session.store.list_topics()
        lines = [f"Current topic: {session.topic}"]
        for t in topics:
            n = session.store.count_entries(t.name)
            lines.append(f"  {t.name} ({n} entries)")
        return "\n".join(lines)
    name = " ".join(args).strip()
    session.store.save_topic(name)
    session.topic = name
    session.load_context()
    return f"Topic set to {name!r} ({len(session.conversation) // 2} exchanges loaded)."


def _cmd_help(session: ChatSession, args: list[str]) -> str:
    return HELP_TEXT


_COMMANDS: dict[str, Callable[[ChatSession, list[str]], str]] = {
    "history": _cmd_history,
    "clear": _cmd_clear,
    "models": _cmd_models,
    "model": _cmd_model,
    "topic": _cmd_topic,
    "help": _cmd_help,
}


def handle_command(session: ChatSession, line: str) -> str | None:
    """
    Handle a "$command args" line.
    Returns a reply string or None if the line is not a command.
    """
    if not line.startswith("$"):
        return None
    parts = line[1:].split()
    if not parts:
        return "Empty command. Use $help to list available commands."
    handler = _COMMANDS.get(parts[0].lower())
    if handler is None:
        return f"Invalid command: ${parts[0]}. Use $help to list available commands."
    return handler(session, parts[1:])


def is_exit(line: str) -> bool:
    return line.strip().lower() in ("exit", "$exit", "quit", "$quit")


def run_chat_loop(session: ChatSession) -> None:
    logger.info(
        "Chat console started (provider=%s model=%s topic=%s).",
        session.client.provider,
        session.model,
        session.topic,
    )
    print(f"[{_ts_local()}] Chatting with {session.client.provider}. Type $help for commands, exit to quit.\n")

    session.load_context()

    while True:
        try:
            user_input = input(f"[{session.model}] You: ").strip()
        except EOFError:
            logger.info("Chat EOF received, exiting.")
            break
        except KeyboardInterrupt:
            logger.info("Chat KeyboardInterrupt, exiting.")
            print()
            break

        if not user_input:
            continue

        if is_exit(user_input):
            print("Goodbye!")
            break

        try:
            reply = handle_command(session, user_input)
        except Exception:
            logger.exception("Chat command crashed.")
            reply = "Internal error while handling a command."
        if reply is not None:
            print(reply)
            continue

        printed = False

        def emit(piece: str) -> None:
            nonlocal printed
            if not printed:
                print(f"[{_ts_local()}] AI: ", end="", flush=True)
                printed = True
            print(piece, end="", flush=True)

        try:
            ask(session, user_input, on_chunk=emit)
        except ChatError as e:
            msg = friendly_chat_error_message(e)
            logger.info("Chat provider error: %s", msg)
            print(f"\n[{_ts_local()}] [{session.client.provider}] {msg}")
            continue
        except Exception:
            logger.exception("Chat handler crashed.")
            print(f"\n[{_ts_local()}] Internal error while generating a reply.")
            continue

        print("\n")

    logger.info("Chat console finished.")
