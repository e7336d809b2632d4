# src/flow_planner/api/planners.py

"""Planner endpoints."""

from __future__ import annotations

from fastapi import APIRouter, Depends, Response
from fastapi.concurrency import run_in_threadpool

from ..control.dto import (
    CreatePlannerRequest,
    IdResponse,
    PlannerResponse,
    PlannersResponse,
    UpdatePlannerRequest,
)
from ..control.planners import PlannerControl
from .deps import get_planner_control

router = APIRouter()


@router.post("", response_model=IdResponse)
async def create_planner(
    payload: CreatePlannerRequest, control: PlannerControl = Depends(get_planner_control)
) -> IdResponse:
    return await run_in_threadpool(control.create_planner, payload)


@router.get("", response_model=PlannersResponse)
async def list_planners(
    control: PlannerControl = Depends(get_planner_control),
) -> PlannersResponse:
    return await run_in_threadpool(control.list_planners)


@router.get("/by-title/{title:path}", response_model=PlannerResponse)
async def get_planner_by_title(
    title: str, control: PlannerControl = Depends(get_planner_control)
) -> PlannerResponse:
    return await run_in_threadpool(control.get_planner_by_title, title)


@router.get("/by-owner/{owner:path}", response_model=PlannersResponse)
async def list_planners_by_owner(
    owner: str, control: PlannerControl = Depends(get_planner_control)
) -> PlannersResponse:
    return await run_in_threadpool(control.list_planners_by_owner, owner)


@router.get("/{planner_id}", response_model=PlannerResponse)
async def get_planner(
    planner_id: str, control: PlannerControl = Depends(get_planner_control)
) -> PlannerResponse:
    return await run_in_threadpool(control.get_planner, planner_id)


@router.put("/{planner_id}")
async def update_planner(
    planner_id: str,
    payload: UpdatePlannerRequest,
    control: PlannerControl = Depends(get_planner_control),
) -> Response:
    await run_in_threadpool(
        control.update_planner, payload.model_copy(update={"id": planner_id})
    )
    return Response(status_code=200)


@router.delete("/{planner_id}")
async def delete_planner(
    planner_id: str, control: PlannerControl = Depends(get_planner_control)
) -> Response:
    await run_in_threadpool(control.delete_planner, planner_id)
    return Response(status_code=200)
