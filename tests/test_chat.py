# tests/test_chat.py

from __future__ import annotations

import pytest

from fakes import FakeChatClient
from flow_planner.chat.console import ChatSession, ask, handle_command, is_exit
from flow_planner.chat.offline import OfflineChatClient
from flow_planner.chat.store import DEFAULT_TOPIC, ChatStore
from flow_planner.core.errors import ChatError, RecordNotFoundError


def test_chat_store_entries_and_topics(chat_store: ChatStore) -> None:
    chat_store.save_entry(provider="openai", model="m", user_input="hi", ai_response="hello", now_ts=1.0)
    chat_store.save_entry(
        provider="openai", model="m", user_input="q", ai_response="a", topic="work", now_ts=2.0
    )
    chat_store.save_entry(provider="gemini", model="g", user_input="hi2", ai_response="yo", now_ts=3.0)

    assert [e.user_input for e in chat_store.retrieve_entries()] == ["hi", "q", "hi2"]
    assert [e.user_input for e in chat_store.retrieve_entries(DEFAULT_TOPIC)] == ["hi", "hi2"]
    assert [e.user_input for e in chat_store.retrieve_entries(limit=2)] == ["q", "hi2"]
    assert [t.name for t in chat_store.list_topics()] == [DEFAULT_TOPIC, "work"]
    assert chat_store.count_entries("work") == 1

    assert chat_store.clear_entries(DEFAULT_TOPIC) == 2
    assert chat_store.count_entries() == 1


def test_save_topic_is_idempotent(chat_store: ChatStore) -> None:
    first = chat_store.save_topic("ideas", "random stuff", now_ts=5.0)
    again = chat_store.save_topic("ideas", "other", now_ts=9.0)
    assert again == first
    assert len(chat_store.list_topics()) == 1


def test_ask_streams_and_persists(chat_store: ChatStore) -> None:
    client = FakeChatClient(chunks=["Hel", "lo"])
    session = ChatSession(client=client, store=chat_store, model="fake-small", topic="t")
    seen: list[str] = []

    assert ask(session, "hi", on_chunk=seen.append) == "Hello"
    assert seen == ["Hel", "lo"]

    ask(session, "again")
    messages, model = client.calls[-1]
    assert model == "fake-small"
    assert messages == [
        {"role": "user", "content": "hi"},
        {"role": "assistant", "content": "Hello"},
        {"role": "user", "content": "again"},
    ]
    assert chat_store.count_entries("t") == 2


def test_failed_stream_is_not_persisted(chat_store: ChatStore) -> None:
    session = ChatSession(
        client=FakeChatClient(chunks=["a", "b"], fail=True), store=chat_store, model="m", topic="t"
    )
    with pytest.raises(ChatError):
        ask(session, "hi")
    assert chat_store.count_entries() == 0
    assert session.conversation == []


def test_dollar_commands(chat_store: ChatStore) -> None:
    session = ChatSession(client=FakeChatClient(), store=chat_store, model="fake-small", topic="t")

    assert handle_command(session, "hello") is None
    assert handle_command(session, "$history") == "No chat history."

    ask(session, "hi")
    history = handle_command(session, "$history") or ""
    assert "You: hi" in history and "AI: ok" in history

    assert "* fake-small" in (handle_command(session, "$models") or "")
    assert handle_command(session, "$model fake-large") == "Model set to fake-large."
    assert session.model == "fake-large"

    assert "Topic set to 'other'" in (handle_command(session, "$topic other") or "")
    assert session.conversation == []
    handle_command(session, "$topic t")
    assert len(session.conversation) == 2

    assert "Cleared 1 entries" in (handle_command(session, "$clear") or "")
    assert "Invalid command" in (handle_command(session, "$nope") or "")
    assert is_exit("exit") and is_exit("$exit") and not is_exit("exits")


def test_history_all_spans_topics(chat_store: ChatStore) -> None:
    chat_store.save_entry(provider="p", model="m", topic="a", user_input="q1", ai_response="r1", now_ts=1.0)
    chat_store.save_entry(provider="p", model="m", topic="b", user_input="q2", ai_response="r2", now_ts=2.0)
    session = ChatSession(client=FakeChatClient(), store=chat_store, model="m", topic="a")

    own = handle_command(session, "$history") or ""
    assert "q1" in own and "q2" not in own

    every = handle_command(session, "$history all") or ""
    assert every.index("q1") < every.index("q2")
    assert "Topic: a" in every and "Topic: b" in every


def test_clear_all_asks_for_confirmation(chat_store: ChatStore) -> None:
    chat_store.save_entry(provider="p", model="m", topic="a", user_input="q1", ai_response="r1")
    chat_store.save_entry(provider="p", model="m", topic="b", user_input="q2", ai_response="r2")
    answers = iter(["n", "y"])
    prompts: list[str] = []

    def confirm(prompt: str) -> str:
        prompts.append(prompt)
        return next(answers)

    session = ChatSession(
        client=FakeChatClient(), store=chat_store, model="m", topic="a", confirm=confirm
    )

    assert handle_command(session, "$clear all") == "Clear cancelled."
    assert chat_store.count_entries() == 2

    assert handle_command(session, "$clear all") == "Cleared 2 entries from all topics."
    assert chat_store.count_entries() == 0
    assert len(prompts) == 2


def test_delete_topic(chat_store: ChatStore) -> None:
    chat_store.save_entry(provider="p", model="m", topic="a", user_input="q1", ai_response="r1")
    chat_store.save_entry(provider="p", model="m", topic="b", user_input="q2", ai_response="r2")

    assert chat_store.delete_topic("a") == 1
    assert [t.name for t in chat_store.list_topics()] == ["b"]
    assert chat_store.count_entries() == 1
    with pytest.raises(RecordNotFoundError):
        chat_store.delete_topic("a")


def test_topic_delete_command(chat_store: ChatStore) -> None:
    session = ChatSession(client=FakeChatClient(), store=chat_store, model="m", topic="t")
    ask(session, "hi")

    assert handle_command(session, "$topic delete t") == "Deleted topic 't' (1 entries removed)."
    assert session.conversation == []
    assert chat_store.count_entries("t") == 0
    assert handle_command(session, "$topic delete t") == "Unknown topic 't'."
    assert handle_command(session, "$topic delete") == "Usage: $topic delete <name>"


def test_offline_client_echoes_last_user_message() -> None:
    text = "".join(OfflineChatClient().stream_chat([{"role": "user", "content": "ping"}], "echo"))
    assert text.endswith("You said: ping")
