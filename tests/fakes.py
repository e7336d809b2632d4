# tests/fakes.py

from __future__ import annotations

import copy
import threading
from collections.abc import Iterable
from typing import Any

from flow_planner.core.errors import ChatError, DuplicateKeyError, RecordNotFoundError
from flow_planner.core.models import Goal, Plan, Planner, Task, Version
from flow_planner.core.ports import ChatMessage


class _MemoryRepo:
    """
    In-memory store with the same contract as the SQLite stores.

    Records are deep-copied in and out so callers cannot mutate stored state.
    """

    kind = "record"

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._items: dict[str, Any] = {}

    def create(self, record: Any) -> None:
        with self._lock:
            if record.id in self._items:
                raise DuplicateKeyError(self.kind, record.id)
            self._items[record.id] = copy.deepcopy(record)

    def update(self, record: Any) -> None:
        with self._lock:
            if record.id not in self._items:
                raise RecordNotFoundError(self.kind, "id", record.id)
            self._items[record.id] = copy.deepcopy(record)

    def delete(self, record_id: str) -> None:
        with self._lock:
            if self._items.pop(record_id, None) is None:
                raise RecordNotFoundError(self.kind, "id", record_id)

    def get(self, record_id: str) -> Any:
        with self._lock:
            if record_id not in self._items:
                raise RecordNotFoundError(self.kind, "id", record_id)
            return copy.deepcopy(self._items[record_id])

    def list(self) -> list[Any]:
        with self._lock:
            return [copy.deepcopy(r) for r in self._items.values()]

    def _one(self, attr: str, value: str) -> Any:
        for r in self.list():
            if getattr(r, attr) == value:
                return r
        raise RecordNotFoundError(self.kind, attr, value)

    def _many(self, attr: str, value: str) -> list[Any]:
        return [r for r in self.list() if getattr(r, attr) == value]


class FakeTaskRepo(_MemoryRepo):
    kind = "task"

    def get_by_title(self, title: str) -> Task:
        return self._one("title", title)

    def list_by_owner(self, owner: str) -> list[Task]:
        return self._many("owner", owner)


class FakeGoalRepo(_MemoryRepo):
    kind = "goal"

    def get_by_objective(self, objective: str) -> Goal:
        return self._one("objective", objective)

    def list_by_planner(self, planner_id: str) -> list[Goal]:
        return self._many("planner_id", planner_id)


class FakePlanRepo(_MemoryRepo):
    kind = "plan"

    def get_by_name(self, name: str) -> Plan:
        return self._one("name", name)

    def list_by_goal(self, goal_id: str) -> list[Plan]:
        return self._many("goal_id", goal_id)


class FakePlannerRepo(_MemoryRepo):
    kind = "planner"

    def get_by_title(self, title: str) -> Planner:
        return self._one("title", title)

    def list_by_owner(self, owner: str) -> list[Planner]:
        return self._many("owner", owner)


class FakeVersionRepo(_MemoryRepo):
    kind = "version"

    def list_by_goal(self, goal_id: str) -> list[Version]:
        return self._many("goal_id", goal_id)

    def get_previous(self, version_id: str) -> Version:
        current = self.get(version_id)
        if not current.previous_version:
            raise RecordNotFoundError(self.kind, "previous_version", version_id)
        return self.get(current.previous_version)

    def get_current(self, goal_id: str) -> Version:
        versions = self.list_by_goal(goal_id)
        if not versions:
            raise RecordNotFoundError(self.kind, "goal_id", goal_id)
        return max(versions, key=lambda v: v.no.as_tuple())


class FakeChatClient:
    """
    Deterministic chat client for unit tests.

    - Captures calls for assertions
    - Yields predefined chunks, or raises ChatError mid-stream when `fail` is set
    """

    provider = "fake"

    def __init__(self, chunks: list[str] | None = None, fail: bool = False) -> None:
        self.chunks = list(chunks or ["o", "k"])
        self.fail = fail
        self.calls: list[tuple[list[ChatMessage], str]] = []

    def list_models(self) -> list[str]:
        return ["fake-small", "fake-large"]

    def stream_chat(self, messages: list[ChatMessage], model: str) -> Iterable[str]:
        self.calls.append((list(messages), model))
        for i, chunk in enumerate(self.chunks):
            if self.fail and i == len(self.chunks) - 1:
                raise ChatError("fake provider failed")
            yield chunk
