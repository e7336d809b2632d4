# src/flow_planner/chat/gemini_client.py

from __future__ import annotations

import logging
import time
from collections.abc import Iterable

from google import genai
from google.genai import errors as genai_errors
from google.genai import types

from ..core.errors import ChatError
from ..core.ports import ChatMessage

logger = logging.getLogger(__name__)

GEMINI_MODELS = ["gemini-2.0-flash", "gemini-2.0-flash-lite", "gemini-1.5-pro", "gemini-1.5-flash"]


def _to_contents(messages: list[ChatMessage]) -> tuple[str | None, list[types.Content]]:
    """
    OpenAI-style messages -> (system instruction, Gemini contents).

    Gemini calls the assistant role "model"; system messages become the
    system instruction.
    """
    system_parts: list[str] = []
    contents: list[types.Content] = []
    for m in messages:
        role = m.get("role", "user")
        text = m.get("content", "")
        if role == "system":
            system_parts.append(text)
            continue
        contents.append(
            types.Content(
                role="model" if role == "assistant" else "user",
                parts=[types.Part(text=text)],
            )
        )
    system = "\n\n".join(p for p in system_parts if p) or None
    return system, contents


class GeminiChatClient:
    """Streaming chat over google-genai (Google AI Studio key)."""

    def __init__(
        self,
        *,
        api_key: str | None,
        models: list[str] | None = None,
        read_timeout: float = 60.0,
    ) -> None:
        if not api_key or not str(api_key).strip():
            raise ChatError("gemini is not configured (missing API key). Set GOOGLE_AI_STUDIO in .env.")
        self.provider = "gemini"
        self._models = list(models or GEMINI_MODELS)
        self._client = genai.Client(
            api_key=str(api_key),
            http_options=types.HttpOptions(timeout=int(read_timeout * 1000)),
        )

    def list_models(self) -> list[str]:
        return list(self._models)

    def stream_chat(self, messages: list[ChatMessage], model: str) -> Iterable[str]:
        system, contents = _to_contents(messages)
        config = types.GenerateContentConfig(system_instruction=system) if system else None

        logger.info("gemini: request model=%s messages=%d", model, len(contents))
        t0 = time.monotonic()
        used_any = False
        try:
            for chunk in self._client.models.generate_content_stream(
                model=model,
                contents=contents,
                config=config,
            ):
                text = chunk.text
                if text:
                    if not used_any:
                        logger.info("gemini: first token model=%s (%.2fs)", model, time.monotonic() - t0)
                    used_any = True
                    yield text
        except genai_errors.ClientError as e:
            raise ChatError(f"gemini rejected the request ({e.code}): {e.message}") from e
        except genai_errors.APIError as e:
            raise ChatError(f"gemini request failed ({e.code}): {e.message}") from e

        if not used_any:
            raise ChatError(f"gemini returned no content (model={model}).")
