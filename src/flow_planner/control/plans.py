# src/flow_planner/control/plans.py

from __future__ import annotations

import logging

from ..core.models import Plan, parse_date, parse_time, utc_now
from ..services.plans import PlanService
from .dto import CreatePlanRequest, IdResponse, PlanResponse, PlansResponse, UpdatePlanRequest
from .ids import new_id

logger = logging.getLogger(__name__)


class PlanControl:
    def __init__(self, service: PlanService) -> None:
        self._service = service

    def create_plan(self, req: CreatePlanRequest) -> IdResponse:
        plan_date = parse_date(req.plan_date)
        plan_time = parse_time(req.plan_time)
        plan = Plan.new(new_id(), req.name, req.description, plan_date, plan_time, req.goal_id)
        self._service.create_plan(plan)
        logger.info("Plan created id=%s goal_id=%s", plan.id, plan.goal_id or "-")
        return IdResponse(id=plan.id)

    def update_plan(self, req: UpdatePlanRequest) -> None:
        """Embedded tasks are not part of the request and are carried over."""
        plan_date = parse_date(req.plan_date)
        plan_time = parse_time(req.plan_time)
        existing = self._service.get_plan(req.id)
        plan = Plan.new(existing.id, req.name, req.description, plan_date, plan_time, req.goal_id)
        plan.created_at = existing.created_at
        plan.status = req.status if req.status is not None else existing.status
        plan.tasks = list(existing.tasks)
        plan.updated_at = utc_now()
        self._service.update_plan(plan)
        logger.info("Plan updated id=%s status=%s", plan.id, plan.status)

    def delete_plan(self, plan_id: str) -> None:
        self._service.delete_plan(plan_id)
        logger.info("Plan deleted id=%s", plan_id)

    def get_plan(self, plan_id: str) -> PlanResponse:
        return PlanResponse.from_record(self._service.get_plan(plan_id))

    def list_plans(self) -> PlansResponse:
        return PlansResponse(plans=[PlanResponse.from_record(p) for p in self._service.list_plans()])

    def get_plan_by_name(self, name: str) -> PlanResponse:
        return PlanResponse.from_record(self._service.get_plan_by_name(name))

    def list_plans_by_goal(self, goal_id: str) -> PlansResponse:
        plans = self._service.list_plans_by_goal(goal_id)
        return PlansResponse(plans=[PlanResponse.from_record(p) for p in plans])
