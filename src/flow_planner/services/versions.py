# src/flow_planner/services/versions.py

from __future__ import annotations

from ..core.models import Version
from ..core.ports import VersionRepo


class VersionService:
    def __init__(self, repo: VersionRepo) -> None:
        self._repo = repo

    def create_version(self, version: Version) -> None:
        self._repo.create(version)

    def delete_version(self, version_id: str) -> None:
        self._repo.delete(version_id)

    def get_version(self, version_id: str) -> Version:
        return self._repo.get(version_id)

    def list_versions(self) -> list[Version]:
        return self._repo.list()

    def list_versions_by_goal(self, goal_id: str) -> list[Version]:
        return self._repo.list_by_goal(goal_id)

    def get_previous_version(self, version_id: str) -> Version:
        return self._repo.get_previous(version_id)

    def get_current_version(self, goal_id: str) -> Version:
        return self._repo.get_current(goal_id)
