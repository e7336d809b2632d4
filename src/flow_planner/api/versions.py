# src/flow_planner/api/versions.py

"""Version snapshot endpoints."""

from __future__ import annotations

from fastapi import APIRouter, Depends, Response
from fastapi.concurrency import run_in_threadpool

from ..control.dto import CreateVersionRequest, IdResponse, VersionResponse, VersionsResponse
from ..control.versions import VersionControl
from .deps import get_version_control

router = APIRouter()


@router.post("", response_model=IdResponse)
async def create_version(
    payload: CreateVersionRequest, control: VersionControl = Depends(get_version_control)
) -> IdResponse:
    return await run_in_threadpool(control.create_version, payload)


@router.get("", response_model=VersionsResponse)
async def list_versions(
    control: VersionControl = Depends(get_version_control),
) -> VersionsResponse:
    return await run_in_threadpool(control.list_versions)


@router.get("/by-goal/{goal_id}", response_model=VersionsResponse)
async def list_versions_by_goal(
    goal_id: str, control: VersionControl = Depends(get_version_control)
) -> VersionsResponse:
    return await run_in_threadpool(control.list_versions_by_goal, goal_id)


@router.get("/by-goal/{goal_id}/current", response_model=VersionResponse)
async def get_current_version(
    goal_id: str, control: VersionControl = Depends(get_version_control)
) -> VersionResponse:
    return await run_in_threadpool(control.get_current_version, goal_id)


@router.get("/{version_id}", response_model=VersionResponse)
async def get_version(
    version_id: str, control: VersionControl = Depends(get_version_control)
) -> VersionResponse:
    return await run_in_threadpool(control.get_version, version_id)


@router.get("/{version_id}/previous", response_model=VersionResponse)
async def get_previous_version(
    version_id: str, control: VersionControl = Depends(get_version_control)
) -> VersionResponse:
    return await run_in_threadpool(control.get_previous_version, version_id)


@router.delete("/{version_id}")
async def delete_version(
    version_id: str, control: VersionControl = Depends(get_version_control)
) -> Response:
    await run_in_threadpool(control.delete_version, version_id)
    return Response(status_code=200)
