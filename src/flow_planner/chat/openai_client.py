# src/flow_planner/chat/openai_client.py

"""
OpenAI-compatible streaming chat client.

Used for OpenAI itself and for Perplexity, which serves the same
chat-completions API under its own base URL.
"""

from __future__ import annotations

import logging
import time
from collections.abc import Iterable
from typing import Any

import httpx
import openai
from openai import OpenAI

from ..core.errors import ChatError
from ..core.ports import ChatMessage

logger = logging.getLogger(__name__)

OPENAI_MODELS = ["gpt-4o-mini", "gpt-4o", "gpt-4-turbo", "gpt-3.5-turbo"]
PERPLEXITY_MODELS = ["sonar", "sonar-pro", "sonar-reasoning", "sonar-reasoning-pro"]

_KEY_ENV = {
    "openai": "OPENAI_API_KEY",
    "perplexity": "PAI_KEY",
}


def friendly_chat_error_message(err: Exception) -> str:
    msg = str(err).strip() or "Chat provider error."
    if isinstance(err, ChatError):
        return msg
    return f"Chat provider error: {msg}"


def _close_stream(stream: Any) -> None:
    close = getattr(stream, "close", None)
    if callable(close):
        close()


class OpenAIChatClient:
    """
    Streaming chat completions over the openai SDK.

    No retries (max_retries=0): a failed request surfaces as ChatError and
    the console decides what to show.
    """

    def __init__(
        self,
        *,
        api_key: str | None,
        provider: str = "openai",
        base_url: str | None = None,
        models: list[str] | None = None,
        connect_timeout: float = 5.0,
        read_timeout: float = 60.0,
    ) -> None:
        if not api_key or not str(api_key).strip():
            env_name = _KEY_ENV.get(provider, "API key")
            raise ChatError(f"{provider} is not configured (missing API key). Set {env_name} in .env.")

        self.provider = provider
        self._models = list(models or (PERPLEXITY_MODELS if provider == "perplexity" else OPENAI_MODELS))
        timeout = httpx.Timeout(connect=connect_timeout, read=read_timeout, write=10.0, pool=connect_timeout)

        kwargs: dict[str, Any] = {"api_key": str(api_key), "timeout": timeout, "max_retries": 0}
        if base_url:
            kwargs["base_url"] = str(base_url)
        self._client = OpenAI(**kwargs)

    def list_models(self) -> list[str]:
        return list(self._models)

    def stream_chat(self, messages: list[ChatMessage], model: str) -> Iterable[str]:
        logger.info("%s: request model=%s messages=%d", self.provider, model, len(messages))
        t0 = time.monotonic()
        stream = None
        used_any = False
        try:
            stream = self._client.chat.completions.create(
                model=model,
                messages=messages,  # type: ignore[arg-type]
                stream=True,
            )
            for chunk in stream:
                if not chunk.choices:
                    continue
                delta = chunk.choices[0].delta
                content = getattr(delta, "content", None) if delta is not None else None
                if content:
                    if not used_any:
                        logger.info(
                            "%s: first token model=%s (%.2fs)",
                            self.provider,
                            model,
                            time.monotonic() - t0,
                        )
                    used_any = True
                    yield content

        except openai.AuthenticationError as e:
            raise ChatError(f"{self.provider} authentication failed. Check your API key.") from e
        except openai.PermissionDeniedError as e:
            raise ChatError(f"{self.provider} denied access to model {model!r}.") from e
        except openai.NotFoundError as e:
            raise ChatError(f"{self.provider} model not available: {model!r}. Use $models.") from e
        except openai.RateLimitError as e:
            raise ChatError(f"{self.provider} is rate-limited. Try again later.") from e
        except openai.APIConnectionError as e:
            raise ChatError(f"{self.provider} network/timeout error. Try again later.") from e
        except openai.APIError as e:
            raise ChatError(f"{self.provider} request failed: {e}") from e
        finally:
            if stream is not None:
                _close_stream(stream)

        if not used_any:
            raise ChatError(f"{self.provider} returned no content (model={model}).")
        logger.debug("%s: completed model=%s", self.provider, model)
