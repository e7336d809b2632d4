# src/flow_planner/chat/offline.py

from __future__ import annotations

from collections.abc import Iterable

from ..core.ports import ChatMessage


class OfflineChatClient:
    """
    Offline deterministic chat client used for demos when no provider is configured.

    Echoes the last user message; never touches the network.
    """

    provider = "offline"

    def list_models(self) -> list[str]:
        return ["echo"]

    def stream_chat(self, messages: list[ChatMessage], model: str) -> Iterable[str]:
        user_text = ""
        for m in reversed(messages):
            if m.get("role") == "user":
                user_text = m.get("content", "")
                break

        yield "Offline demo mode: no chat provider is configured.\n"
        yield "Set OPENAI_API_KEY, GOOGLE_AI_STUDIO or PAI_KEY to enable real responses.\n\n"
        yield f"You said: {user_text}"
