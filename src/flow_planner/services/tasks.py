# src/flow_planner/services/tasks.py

from __future__ import annotations

from ..core.models import Task
from ..core.ports import TaskRepo


class TaskService:
    """Pass-through to the task store. No business rules live here."""

    def __init__(self, repo: TaskRepo) -> None:
        self._repo = repo

    def create_task(self, task: Task) -> None:
        self._repo.create(task)

    def update_task(self, task: Task) -> None:
        self._repo.update(task)

    def delete_task(self, task_id: str) -> None:
        self._repo.delete(task_id)

    def get_task(self, task_id: str) -> Task:
        return self._repo.get(task_id)

    def list_tasks(self) -> list[Task]:
        return self._repo.list()

    def get_task_by_title(self, title: str) -> Task:
        return self._repo.get_by_title(title)

    def list_tasks_by_owner(self, owner: str) -> list[Task]:
        return self._repo.list_by_owner(owner)
