# src/flow_planner/core/ports.py

from __future__ import annotations

"""
Ports (interfaces) used by services and controls.

Services depend on Protocols instead of the concrete SQLite stores.
This keeps the storage backend swappable and lets tests inject in-memory fakes.
"""

from collections.abc import Iterable
from typing import Protocol

from .models import Goal, Plan, Planner, Task, Version

ChatMessage = dict[str, str]
# OpenAI-style chat messages: {"role": "...", "content": "..."}.


class TaskRepo(Protocol):
    def create(self, task: Task) -> None: ...
    def update(self, task: Task) -> None: ...
    def delete(self, task_id: str) -> None: ...
    def get(self, task_id: str) -> Task: ...
    def list(self) -> list[Task]: ...
    def get_by_title(self, title: str) -> Task: ...
    def list_by_owner(self, owner: str) -> list[Task]: ...


class GoalRepo(Protocol):
    def create(self, goal: Goal) -> None: ...
    def update(self, goal: Goal) -> None: ...
    def delete(self, goal_id: str) -> None: ...
    def get(self, goal_id: str) -> Goal: ...
    def list(self) -> list[Goal]: ...
    def get_by_objective(self, objective: str) -> Goal: ...
    def list_by_planner(self, planner_id: str) -> list[Goal]: ...


class PlanRepo(Protocol):
    def create(self, plan: Plan) -> None: ...
    def update(self, plan: Plan) -> None: ...
    def delete(self, plan_id: str) -> None: ...
    def get(self, plan_id: str) -> Plan: ...
    def list(self) -> list[Plan]: ...
    def get_by_name(self, name: str) -> Plan: ...
    def list_by_goal(self, goal_id: str) -> list[Plan]: ...


class PlannerRepo(Protocol):
    def create(self, planner: Planner) -> None: ...
    def update(self, planner: Planner) -> None: ...
    def delete(self, planner_id: str) -> None: ...
    def get(self, planner_id: str) -> Planner: ...
    def list(self) -> list[Planner]: ...
    def get_by_title(self, title: str) -> Planner: ...
    def list_by_owner(self, owner: str) -> list[Planner]: ...


class VersionRepo(Protocol):
    def create(self, version: Version) -> None: ...
    def update(self, version: Version) -> None: ...
    def delete(self, version_id: str) -> None: ...
    def get(self, version_id: str) -> Version: ...
    def list(self) -> list[Version]: ...
    def list_by_goal(self, goal_id: str) -> list[Version]: ...
    def get_previous(self, version_id: str) -> Version: ...
    def get_current(self, goal_id: str) -> Version: ...


class ChatClient(Protocol):
    """Streaming chat completion client (one per provider)."""

    provider: str

    def stream_chat(self, messages: list[ChatMessage], model: str) -> Iterable[str]: ...
    def list_models(self) -> list[str]: ...
