# src/flow_planner/api/goals.py

"""Goal endpoints."""

from __future__ import annotations

from fastapi import APIRouter, Depends, Response
from fastapi.concurrency import run_in_threadpool

from ..control.dto import (
    CreateGoalRequest,
    GoalResponse,
    GoalsResponse,
    IdResponse,
    UpdateGoalRequest,
)
from ..control.goals import GoalControl
from .deps import get_goal_control

router = APIRouter()


@router.post("", response_model=IdResponse)
async def create_goal(
    payload: CreateGoalRequest, control: GoalControl = Depends(get_goal_control)
) -> IdResponse:
    return await run_in_threadpool(control.create_goal, payload)


@router.get("", response_model=GoalsResponse)
async def list_goals(control: GoalControl = Depends(get_goal_control)) -> GoalsResponse:
    return await run_in_threadpool(control.list_goals)


@router.get("/by-objective/{objective:path}", response_model=GoalResponse)
async def get_goal_by_objective(
    objective: str, control: GoalControl = Depends(get_goal_control)
) -> GoalResponse:
    return await run_in_threadpool(control.get_goal_by_objective, objective)


@router.get("/by-planner/{planner_id}", response_model=GoalsResponse)
async def list_goals_by_planner(
    planner_id: str, control: GoalControl = Depends(get_goal_control)
) -> GoalsResponse:
    return await run_in_threadpool(control.list_goals_by_planner, planner_id)


@router.get("/{goal_id}", response_model=GoalResponse)
async def get_goal(goal_id: str, control: GoalControl = Depends(get_goal_control)) -> GoalResponse:
    return await run_in_threadpool(control.get_goal, goal_id)


@router.put("/{goal_id}")
async def update_goal(
    goal_id: str, payload: UpdateGoalRequest, control: GoalControl = Depends(get_goal_control)
) -> Response:
    await run_in_threadpool(control.update_goal, payload.model_copy(update={"id": goal_id}))
    return Response(status_code=200)


@router.delete("/{goal_id}")
async def delete_goal(goal_id: str, control: GoalControl = Depends(get_goal_control)) -> Response:
    await run_in_threadpool(control.delete_goal, goal_id)
    return Response(status_code=200)
