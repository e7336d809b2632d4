# src/flow_planner/api/tasks.py

"""Task endpoints."""

from __future__ import annotations

from fastapi import APIRouter, Depends, Response
from fastapi.concurrency import run_in_threadpool

from ..control.dto import (
    CreateTaskRequest,
    IdResponse,
    TaskResponse,
    TasksResponse,
    UpdateTaskRequest,
)
from ..control.tasks import TaskControl
from .deps import get_task_control

router = APIRouter()


@router.post("", response_model=IdResponse)
async def create_task(
    payload: CreateTaskRequest, control: TaskControl = Depends(get_task_control)
) -> IdResponse:
    return await run_in_threadpool(control.create_task, payload)


@router.get("", response_model=TasksResponse)
async def list_tasks(control: TaskControl = Depends(get_task_control)) -> TasksResponse:
    return await run_in_threadpool(control.list_tasks)


@router.get("/by-title/{title:path}", response_model=TaskResponse)
async def get_task_by_title(
    title: str, control: TaskControl = Depends(get_task_control)
) -> TaskResponse:
    return await run_in_threadpool(control.get_task_by_title, title)


@router.get("/by-owner/{owner:path}", response_model=TasksResponse)
async def list_tasks_by_owner(
    owner: str, control: TaskControl = Depends(get_task_control)
) -> TasksResponse:
    return await run_in_threadpool(control.list_tasks_by_owner, owner)


@router.get("/{task_id}", response_model=TaskResponse)
async def get_task(task_id: str, control: TaskControl = Depends(get_task_control)) -> TaskResponse:
    return await run_in_threadpool(control.get_task, task_id)


@router.put("/{task_id}")
async def update_task(
    task_id: str, payload: UpdateTaskRequest, control: TaskControl = Depends(get_task_control)
) -> Response:
    # The path id wins over any id in the body.
    await run_in_threadpool(control.update_task, payload.model_copy(update={"id": task_id}))
    return Response(status_code=200)


@router.delete("/{task_id}")
async def delete_task(task_id: str, control: TaskControl = Depends(get_task_control)) -> Response:
    await run_in_threadpool(control.delete_task, task_id)
    return Response(status_code=200)
