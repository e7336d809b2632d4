# src/flow_planner/control/tasks.py

from __future__ import annotations

import logging

from ..core.models import Task, utc_now
from ..services.tasks import TaskService
from .dto import CreateTaskRequest, IdResponse, TaskResponse, TasksResponse, UpdateTaskRequest
from .ids import new_id

logger = logging.getLogger(__name__)


class TaskControl:
    def __init__(self, service: TaskService) -> None:
        self._service = service

    def create_task(self, req: CreateTaskRequest) -> IdResponse:
        task = Task.new(new_id(), req.title, req.description, req.owner)
        self._service.create_task(task)
        logger.info("Task created id=%s", task.id)
        return IdResponse(id=task.id)

    def update_task(self, req: UpdateTaskRequest) -> None:
        """
        Overwrite title/description/owner and the progress flags.

        id and created_at are kept from the stored record; a flag left
        unset in the request keeps its stored value.
        """
        existing = self._service.get_task(req.id)
        task = Task.new(existing.id, req.title, req.description, req.owner)
        task.created_at = existing.created_at
        task.started = existing.started if req.started is None else req.started
        task.completed = existing.completed if req.completed is None else req.completed
        task.updated_at = utc_now()
        self._service.update_task(task)
        logger.info("Task updated id=%s", task.id)

    def delete_task(self, task_id: str) -> None:
        self._service.delete_task(task_id)
        logger.info("Task deleted id=%s", task_id)

    def get_task(self, task_id: str) -> TaskResponse:
        return TaskResponse.from_record(self._service.get_task(task_id))

    def list_tasks(self) -> TasksResponse:
        return TasksResponse(tasks=[TaskResponse.from_record(t) for t in self._service.list_tasks()])

    def get_task_by_title(self, title: str) -> TaskResponse:
        return TaskResponse.from_record(self._service.get_task_by_title(title))

    def list_tasks_by_owner(self, owner: str) -> TasksResponse:
        tasks = self._service.list_tasks_by_owner(owner)
        return TasksResponse(tasks=[TaskResponse.from_record(t) for t in tasks])
