# src/flow_planner/control/goals.py

from __future__ import annotations

import logging

from ..core.models import Goal, parse_date, utc_now
from ..services.goals import GoalService
from .dto import CreateGoalRequest, GoalResponse, GoalsResponse, IdResponse, UpdateGoalRequest
from .ids import new_id

logger = logging.getLogger(__name__)


class GoalControl:
    def __init__(self, service: GoalService) -> None:
        self._service = service

    def create_goal(self, req: CreateGoalRequest) -> IdResponse:
        deadline = parse_date(req.deadline)
        goal = Goal.new(new_id(), req.objective, deadline, req.planner_id)
        self._service.create_goal(goal)
        logger.info("Goal created id=%s planner_id=%s", goal.id, goal.planner_id or "-")
        return IdResponse(id=goal.id)

    def update_goal(self, req: UpdateGoalRequest) -> None:
        deadline = parse_date(req.deadline)
        existing = self._service.get_goal(req.id)
        goal = Goal.new(existing.id, req.objective, deadline, req.planner_id)
        goal.created_at = existing.created_at
        goal.status = req.status if req.status is not None else existing.status
        goal.updated_at = utc_now()
        self._service.update_goal(goal)
        logger.info("Goal updated id=%s status=%s", goal.id, goal.status)

    def delete_goal(self, goal_id: str) -> None:
        self._service.delete_goal(goal_id)
        logger.info("Goal deleted id=%s", goal_id)

    def get_goal(self, goal_id: str) -> GoalResponse:
        return GoalResponse.from_record(self._service.get_goal(goal_id))

    def list_goals(self) -> GoalsResponse:
        return GoalsResponse(goals=[GoalResponse.from_record(g) for g in self._service.list_goals()])

    def get_goal_by_objective(self, objective: str) -> GoalResponse:
        return GoalResponse.from_record(self._service.get_goal_by_objective(objective))

    def list_goals_by_planner(self, planner_id: str) -> GoalsResponse:
        goals = self._service.list_goals_by_planner(planner_id)
        return GoalsResponse(goals=[GoalResponse.from_record(g) for g in goals])
