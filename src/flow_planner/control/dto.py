# src/flow_planner/control/dto.py

"""
Wire-format request/response models.

Dates and times travel as strings (YYYY-MM-DD, HH:MM) and are parsed by the
controls, so a bad value is reported as InvalidInputError rather than a
generic validation error. Timestamps are serialized as ISO-8601.
"""

from __future__ import annotations

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from ..core.models import Goal, Plan, Planner, Task, Version, format_date, format_time


class _Request(BaseModel):
    model_config = ConfigDict(extra="ignore")


class IdResponse(BaseModel):
    id: str


# ---- tasks ----


class CreateTaskRequest(_Request):
    title: str
    description: str = ""
    owner: str = ""


class UpdateTaskRequest(_Request):
    id: str = ""
    title: str
    description: str = ""
    owner: str = ""
    # None keeps the stored flag
    started: bool | None = None
    completed: bool | None = None


class TaskResponse(BaseModel):
    id: str
    title: str
    description: str
    owner: str
    started: bool
    completed: bool
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_record(cls, task: Task) -> TaskResponse:
        return cls(
            id=task.id,
            title=task.title,
            description=task.description,
            owner=task.owner,
            started=task.started,
            completed=task.completed,
            created_at=task.created_at,
            updated_at=task.updated_at,
        )


class TasksResponse(BaseModel):
    tasks: list[TaskResponse] = Field(default_factory=list)


# ---- goals ----


class CreateGoalRequest(_Request):
    objective: str
    deadline: str
    planner_id: str = ""


class UpdateGoalRequest(_Request):
    id: str = ""
    objective: str
    deadline: str
    planner_id: str = ""
    status: str | None = None


class GoalResponse(BaseModel):
    id: str
    objective: str
    status: str
    deadline: str | None
    planner_id: str
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_record(cls, goal: Goal) -> GoalResponse:
        return cls(
            id=goal.id,
            objective=goal.objective,
            status=goal.status,
            deadline=format_date(goal.deadline),
            planner_id=goal.planner_id,
            created_at=goal.created_at,
            updated_at=goal.updated_at,
        )


class GoalsResponse(BaseModel):
    goals: list[GoalResponse] = Field(default_factory=list)


# ---- plans ----


class CreatePlanRequest(_Request):
    name: str
    description: str = ""
    plan_date: str
    plan_time: str
    goal_id: str = ""


class UpdatePlanRequest(_Request):
    id: str = ""
    name: str
    description: str = ""
    plan_date: str
    plan_time: str
    goal_id: str = ""
    status: str | None = None


class PlanResponse(BaseModel):
    id: str
    name: str
    description: str
    plan_date: str | None
    plan_time: str | None
    status: str
    goal_id: str
    created_at: datetime
    updated_at: datetime
    tasks: list[TaskResponse] = Field(default_factory=list)

    @classmethod
    def from_record(cls, plan: Plan) -> PlanResponse:
        return cls(
            id=plan.id,
            name=plan.name,
            description=plan.description,
            plan_date=format_date(plan.plan_date),
            plan_time=format_time(plan.plan_time),
            status=plan.status,
            goal_id=plan.goal_id,
            created_at=plan.created_at,
            updated_at=plan.updated_at,
            tasks=[TaskResponse.from_record(t) for t in plan.tasks],
        )


class PlansResponse(BaseModel):
    plans: list[PlanResponse] = Field(default_factory=list)


# ---- planners ----


class CreatePlannerRequest(_Request):
    title: str
    owner: str = ""


class UpdatePlannerRequest(_Request):
    id: str = ""
    title: str
    owner: str = ""


class PlannerResponse(BaseModel):
    id: str
    title: str
    owner: str

    @classmethod
    def from_record(cls, planner: Planner) -> PlannerResponse:
        return cls(id=planner.id, title=planner.title, owner=planner.owner)


class PlannersResponse(BaseModel):
    planners: list[PlannerResponse] = Field(default_factory=list)


# ---- versions ----


class CreateVersionRequest(_Request):
    goal_id: str
    plan_id: str = ""
    task_id: str = ""
    created_by: str = ""
    # major | minor | patch
    bump: str = "patch"


class VersionResponse(BaseModel):
    id: str
    goal_id: str
    plan_id: str
    task_id: str
    version: str
    major: int
    minor: int
    patch: int
    created_at: datetime
    created_by: str
    previous_version: str | None
    image: dict[str, Any]

    @classmethod
    def from_record(cls, version: Version) -> VersionResponse:
        return cls(
            id=version.id,
            goal_id=version.goal_id,
            plan_id=version.plan_id,
            task_id=version.task_id,
            version=str(version.no),
            major=version.no.major,
            minor=version.no.minor,
            patch=version.no.patch,
            created_at=version.created_at,
            created_by=version.created_by,
            previous_version=version.previous_version,
            image=version.image.to_dict(),
        )


class VersionsResponse(BaseModel):
    versions: list[VersionResponse] = Field(default_factory=list)
