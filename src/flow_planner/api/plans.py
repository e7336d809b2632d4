# src/flow_planner/api/plans.py

"""Plan endpoints."""

from __future__ import annotations

from fastapi import APIRouter, Depends, Response
from fastapi.concurrency import run_in_threadpool

from ..control.dto import (
    CreatePlanRequest,
    IdResponse,
    PlanResponse,
    PlansResponse,
    UpdatePlanRequest,
)
from ..control.plans import PlanControl
from .deps import get_plan_control

router = APIRouter()


@router.post("", response_model=IdResponse)
async def create_plan(
    payload: CreatePlanRequest, control: PlanControl = Depends(get_plan_control)
) -> IdResponse:
    return await run_in_threadpool(control.create_plan, payload)


@router.get("", response_model=PlansResponse)
async def list_plans(control: PlanControl = Depends(get_plan_control)) -> PlansResponse:
    return await run_in_threadpool(control.list_plans)


@router.get("/by-name/{name:path}", response_model=PlanResponse)
async def get_plan_by_name(
    name: str, control: PlanControl = Depends(get_plan_control)
) -> PlanResponse:
    return await run_in_threadpool(control.get_plan_by_name, name)


@router.get("/by-goal/{goal_id}", response_model=PlansResponse)
async def list_plans_by_goal(
    goal_id: str, control: PlanControl = Depends(get_plan_control)
) -> PlansResponse:
    return await run_in_threadpool(control.list_plans_by_goal, goal_id)


@router.get("/{plan_id}", response_model=PlanResponse)
async def get_plan(plan_id: str, control: PlanControl = Depends(get_plan_control)) -> PlanResponse:
    return await run_in_threadpool(control.get_plan, plan_id)


@router.put("/{plan_id}")
async def update_plan(
    plan_id: str, payload: UpdatePlanRequest, control: PlanControl = Depends(get_plan_control)
) -> Response:
    await run_in_threadpool(control.update_plan, payload.model_copy(update={"id": plan_id}))
    return Response(status_code=200)


@router.delete("/{plan_id}")
async def delete_plan(plan_id: str, control: PlanControl = Depends(get_plan_control)) -> Response:
    await run_in_threadpool(control.delete_plan, plan_id)
    return Response(status_code=200)
