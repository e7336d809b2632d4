# src/flow_planner/core/errors.py

"""
Error taxonomy shared by every layer.

Transport maps InvalidInputError to HTTP 400 and everything else to HTTP 500.
"""

from __future__ import annotations


class FlowError(Exception):
    """Base class for all application errors."""


class InvalidInputError(FlowError, ValueError):
    """Malformed client input (bad JSON body, unparsable date/time)."""


class StoreError(FlowError):
    """Storage engine failure (I/O error, closed handle, ...)."""


class RecordNotFoundError(StoreError, KeyError):
    def __init__(self, kind: str, key: str, value: str) -> None:
        self.kind = kind
        self.key = key
        self.value = value
        super().__init__(f"{kind} not found ({key}={value!r})")

    def __str__(self) -> str:
        # KeyError.__str__ would repr() the message.
        return str(self.args[0]) if self.args else "not found"


class DuplicateKeyError(StoreError):
    def __init__(self, kind: str, record_id: str) -> None:
        self.kind = kind
        self.record_id = record_id
        super().__init__(f"{kind} already exists (id={record_id!r})")


class IdGenerationError(FlowError):
    """The randomness source could not produce a new identifier."""


class ConfigError(FlowError):
    """Invalid configuration file or backend selection."""


class ChatError(FlowError, RuntimeError):
    """LLM provider failure in the chat tools."""
