# src/flow_planner/control/planners.py

from __future__ import annotations

import logging

from ..core.models import Planner
from ..services.planners import PlannerService
from .dto import (
    CreatePlannerRequest,
    IdResponse,
    PlannerResponse,
    PlannersResponse,
    UpdatePlannerRequest,
)
from .ids import new_id

logger = logging.getLogger(__name__)


class PlannerControl:
    def __init__(self, service: PlannerService) -> None:
        self._service = service

    def create_planner(self, req: CreatePlannerRequest) -> IdResponse:
        planner = Planner.new(new_id(), req.title, req.owner)
        self._service.create_planner(planner)
        logger.info("Planner created id=%s", planner.id)
        return IdResponse(id=planner.id)

    def update_planner(self, req: UpdatePlannerRequest) -> None:
        existing = self._service.get_planner(req.id)
        self._service.update_planner(Planner.new(existing.id, req.title, req.owner))
        logger.info("Planner updated id=%s", existing.id)

    def delete_planner(self, planner_id: str) -> None:
        # Goals referencing the planner are left in place.
        self._service.delete_planner(planner_id)
        logger.info("Planner deleted id=%s", planner_id)

    def get_planner(self, planner_id: str) -> PlannerResponse:
        return PlannerResponse.from_record(self._service.get_planner(planner_id))

    def list_planners(self) -> PlannersResponse:
        planners = self._service.list_planners()
        return PlannersResponse(planners=[PlannerResponse.from_record(p) for p in planners])

    def get_planner_by_title(self, title: str) -> PlannerResponse:
        return PlannerResponse.from_record(self._service.get_planner_by_title(title))

    def list_planners_by_owner(self, owner: str) -> PlannersResponse:
        planners = self._service.list_planners_by_owner(owner)
        return PlannersResponse(planners=[PlannerResponse.from_record(p) for p in planners])
