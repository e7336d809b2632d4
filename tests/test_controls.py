# tests/test_controls.py

from __future__ import annotations

import uuid
from datetime import date

import pytest

from fakes import FakeGoalRepo, FakePlanRepo, FakePlannerRepo, FakeTaskRepo, FakeVersionRepo
from flow_planner.control import ids
from flow_planner.control.dto import (
    CreateGoalRequest,
    CreatePlannerRequest,
    CreatePlanRequest,
    CreateTaskRequest,
    CreateVersionRequest,
    UpdateGoalRequest,
    UpdatePlanRequest,
    UpdateTaskRequest,
)
from flow_planner.control.goals import GoalControl
from flow_planner.control.planners import PlannerControl
from flow_planner.control.plans import PlanControl
from flow_planner.control.tasks import TaskControl
from flow_planner.control.versions import VersionControl
from flow_planner.core.errors import IdGenerationError, InvalidInputError, RecordNotFoundError
from flow_planner.core.models import Task
from flow_planner.services.cross import CrossService
from flow_planner.services.goals import GoalService
from flow_planner.services.planners import PlannerService
from flow_planner.services.plans import PlanService
from flow_planner.services.tasks import TaskService
from flow_planner.services.versions import VersionService


@pytest.fixture()
def repos() -> dict:
    return {
        "tasks": FakeTaskRepo(),
        "goals": FakeGoalRepo(),
        "plans": FakePlanRepo(),
        "planners": FakePlannerRepo(),
        "versions": FakeVersionRepo(),
    }


def test_create_task_returns_uuid_and_stores_record(repos) -> None:
    control = TaskControl(TaskService(repos["tasks"]))
    resp = control.create_task(CreateTaskRequest(title="Write", description="docs", owner="ann"))

    assert uuid.UUID(resp.id).version == 4
    got = control.get_task(resp.id)
    assert got.title == "Write"
    assert got.owner == "ann"
    assert got.started is False


def test_update_task_keeps_id_created_at_and_unset_flags(repos) -> None:
    control = TaskControl(TaskService(repos["tasks"]))
    task_id = control.create_task(CreateTaskRequest(title="Write", owner="ann")).id
    created_at = control.get_task(task_id).created_at

    control.update_task(UpdateTaskRequest(id=task_id, title="Rewrite", owner="bob", started=True))
    got = control.get_task(task_id)
    assert got.title == "Rewrite"
    assert got.started is True
    assert got.completed is False
    assert got.created_at == created_at
    assert got.updated_at >= created_at

    control.update_task(UpdateTaskRequest(id=task_id, title="Rewrite", completed=True))
    got = control.get_task(task_id)
    assert got.started is True
    assert got.completed is True


def test_update_missing_task_raises_and_creates_nothing(repos) -> None:
    control = TaskControl(TaskService(repos["tasks"]))
    with pytest.raises(RecordNotFoundError):
        control.update_task(UpdateTaskRequest(id="missing", title="x"))
    assert control.list_tasks().tasks == []


def test_create_goal_parses_deadline(repos) -> None:
    control = GoalControl(GoalService(repos["goals"]))
    goal_id = control.create_goal(
        CreateGoalRequest(objective="Marathon", deadline="2030-05-01", planner_id="pl1")
    ).id

    got = control.get_goal(goal_id)
    assert got.deadline == "2030-05-01"
    assert got.status == "Not Started"
    assert [g.id for g in control.list_goals_by_planner("pl1").goals] == [goal_id]


def test_create_goal_with_bad_deadline_stores_nothing(repos) -> None:
    control = GoalControl(GoalService(repos["goals"]))
    with pytest.raises(InvalidInputError):
        control.create_goal(CreateGoalRequest(objective="x", deadline="invalid-date"))
    assert control.list_goals().goals == []


def test_update_goal_status_from_request_or_kept(repos) -> None:
    control = GoalControl(GoalService(repos["goals"]))
    goal_id = control.create_goal(CreateGoalRequest(objective="x", deadline="2030-01-01")).id

    control.update_goal(
        UpdateGoalRequest(id=goal_id, objective="y", deadline="2030-02-01", status="whatever")
    )
    assert control.get_goal(goal_id).status == "whatever"

    control.update_goal(UpdateGoalRequest(id=goal_id, objective="z", deadline="2030-02-01"))
    got = control.get_goal(goal_id)
    assert got.status == "whatever"
    assert got.objective == "z"


def test_update_plan_keeps_embedded_tasks(repos) -> None:
    control = PlanControl(PlanService(repos["plans"]))
    plan_id = control.create_plan(
        CreatePlanRequest(name="Week", plan_date="2030-01-01", plan_time="08:00", goal_id="g1")
    ).id

    # Attach a task directly in the store; the update request cannot carry tasks.
    stored = repos["plans"].get(plan_id)
    stored.tasks.append(Task.new("t1", "Stretch", "", "ann"))
    repos["plans"].update(stored)

    control.update_plan(
        UpdatePlanRequest(
            id=plan_id, name="Week 2", plan_date="2030-01-08", plan_time="09:15", status="In Progress"
        )
    )
    got = control.get_plan(plan_id)
    assert got.name == "Week 2"
    assert got.plan_time == "09:15"
    assert got.status == "In Progress"
    assert [t.title for t in got.tasks] == ["Stretch"]


def test_create_plan_with_bad_time_raises(repos) -> None:
    control = PlanControl(PlanService(repos["plans"]))
    with pytest.raises(InvalidInputError):
        control.create_plan(CreatePlanRequest(name="x", plan_date="2030-01-01", plan_time="8am"))


def test_planner_lookups(repos) -> None:
    control = PlannerControl(PlannerService(repos["planners"]))
    a = control.create_planner(CreatePlannerRequest(title="Home", owner="ann")).id
    control.create_planner(CreatePlannerRequest(title="Work", owner="bob"))

    assert control.get_planner_by_title("Home").id == a
    assert [p.title for p in control.list_planners_by_owner("ann").planners] == ["Home"]
    assert len(control.list_planners().planners) == 2


def test_version_numbers_and_snapshot(repos) -> None:
    goals = GoalControl(GoalService(repos["goals"]))
    plans = PlanControl(PlanService(repos["plans"]))
    versions = VersionControl(
        VersionService(repos["versions"]),
        CrossService(repos["goals"], repos["plans"], repos["tasks"]),
    )

    goal_id = goals.create_goal(CreateGoalRequest(objective="Ship", deadline="2030-01-01")).id
    plans.create_plan(
        CreatePlanRequest(name="P", plan_date="2030-01-01", plan_time="10:00", goal_id=goal_id)
    )

    v1 = versions.create_version(CreateVersionRequest(goal_id=goal_id, created_by="ann")).id
    v2 = versions.create_version(CreateVersionRequest(goal_id=goal_id, bump="minor")).id
    v3 = versions.create_version(CreateVersionRequest(goal_id=goal_id, bump="major")).id

    assert versions.get_version(v1).version == "0.0.1"
    assert versions.get_version(v2).version == "0.1.0"
    got = versions.get_version(v3)
    assert got.version == "1.0.0"
    assert got.previous_version == v2
    assert versions.get_previous_version(v3).id == v2
    assert versions.get_current_version(goal_id).id == v3
    assert got.image["goal"]["objective"] == "Ship"
    assert [p["name"] for p in got.image["plans"]] == ["P"]


def test_version_for_missing_goal_raises(repos) -> None:
    versions = VersionControl(
        VersionService(repos["versions"]),
        CrossService(repos["goals"], repos["plans"], repos["tasks"]),
    )
    with pytest.raises(RecordNotFoundError):
        versions.create_version(CreateVersionRequest(goal_id="missing"))
    assert repos["versions"].list() == []


def test_id_generation_failure_is_surfaced(monkeypatch) -> None:
    def broken() -> uuid.UUID:
        raise OSError("no entropy")

    monkeypatch.setattr(ids.uuid, "uuid4", broken)
    with pytest.raises(IdGenerationError):
        ids.new_id()


def test_snapshot_dates_are_preserved(repos) -> None:
    goals = GoalControl(GoalService(repos["goals"]))
    goal_id = goals.create_goal(CreateGoalRequest(objective="Ship", deadline="2031-12-31")).id
    snap = CrossService(repos["goals"], repos["plans"], repos["tasks"]).create_version_image(goal_id)
    assert snap.goal is not None
    assert snap.goal.deadline == date(2031, 12, 31)
