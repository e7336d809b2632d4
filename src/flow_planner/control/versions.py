# src/flow_planner/control/versions.py

"""
Version snapshots of a goal.

Each new version:
- takes the goal's current (highest) version number, or 0.0.0 if none,
- bumps it per request (major resets minor+patch, minor resets patch),
- links the previous version id,
- stores an image of the goal, its plans and all tasks.
"""

from __future__ import annotations

import logging

from ..core.errors import RecordNotFoundError
from ..core.models import Version, VersionInfo, utc_now
from ..services.cross import CrossService
from ..services.versions import VersionService
from .dto import CreateVersionRequest, IdResponse, VersionResponse, VersionsResponse
from .ids import new_id

logger = logging.getLogger(__name__)


class VersionControl:
    def __init__(self, service: VersionService, cross: CrossService) -> None:
        self._service = service
        self._cross = cross

    def _current_or_none(self, goal_id: str) -> Version | None:
        try:
            return self._service.get_current_version(goal_id)
        except RecordNotFoundError:
            return None

    def create_version(self, req: CreateVersionRequest) -> IdResponse:
        # Goal must exist; the image read raises RecordNotFoundError otherwise.
        image = self._cross.create_version_image(req.goal_id)

        current = self._current_or_none(req.goal_id)
        base = current.no if current is not None else VersionInfo()
        no = base.bump(req.bump)

        version = Version(
            id=new_id(),
            goal_id=req.goal_id,
            no=no,
            created_by=req.created_by,
            plan_id=req.plan_id,
            task_id=req.task_id,
            previous_version=current.id if current is not None else None,
            created_at=utc_now(),
            image=image,
        )
        self._service.create_version(version)
        logger.info(
            "Version created id=%s goal_id=%s no=%s previous=%s",
            version.id,
            version.goal_id,
            version.no,
            version.previous_version or "-",
        )
        return IdResponse(id=version.id)

    def delete_version(self, version_id: str) -> None:
        self._service.delete_version(version_id)
        logger.info("Version deleted id=%s", version_id)

    def get_version(self, version_id: str) -> VersionResponse:
        return VersionResponse.from_record(self._service.get_version(version_id))

    def list_versions(self) -> VersionsResponse:
        versions = self._service.list_versions()
        return VersionsResponse(versions=[VersionResponse.from_record(v) for v in versions])

    def list_versions_by_goal(self, goal_id: str) -> VersionsResponse:
        versions = self._service.list_versions_by_goal(goal_id)
        return VersionsResponse(versions=[VersionResponse.from_record(v) for v in versions])

    def get_previous_version(self, version_id: str) -> VersionResponse:
        return VersionResponse.from_record(self._service.get_previous_version(version_id))

    def get_current_version(self, goal_id: str) -> VersionResponse:
        return VersionResponse.from_record(self._service.get_current_version(goal_id))
