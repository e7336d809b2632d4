# tests/test_stores.py

from __future__ import annotations

import sqlite3
from datetime import date, time

import pytest

from flow_planner.core.errors import DuplicateKeyError, RecordNotFoundError, StoreError
from flow_planner.core.models import (
    Goal,
    Plan,
    Planner,
    Snapshot,
    Task,
    Version,
    VersionInfo,
)
from flow_planner.store.db import Database
from flow_planner.store.goal_store import GoalStore
from flow_planner.store.plan_store import PlanStore
from flow_planner.store.planner_store import PlannerStore
from flow_planner.store.task_store import TaskStore
from flow_planner.store.version_store import VersionStore


def test_task_create_get_update_delete(db: Database) -> None:
    store = TaskStore(db)
    task = Task.new("t1", "Write docs", "all of them", "ann")
    store.create(task)

    assert store.get("t1") == task

    task.title = "Write more docs"
    task.started = True
    store.update(task)
    got = store.get("t1")
    assert got.title == "Write more docs"
    assert got.started is True
    assert got.completed is False

    store.delete("t1")
    with pytest.raises(RecordNotFoundError):
        store.get("t1")


def test_delete_twice_raises_not_found(db: Database) -> None:
    store = TaskStore(db)
    store.create(Task.new("t1", "a", "", "ann"))
    store.delete("t1")
    with pytest.raises(RecordNotFoundError):
        store.delete("t1")


def test_create_duplicate_id_raises(db: Database) -> None:
    store = PlannerStore(db)
    store.create(Planner.new("p1", "Home", "ann"))
    with pytest.raises(DuplicateKeyError):
        store.create(Planner.new("p1", "Work", "bob"))
    assert store.get("p1").title == "Home"


def test_update_missing_id_raises_and_creates_nothing(db: Database) -> None:
    store = GoalStore(db)
    with pytest.raises(RecordNotFoundError):
        store.update(Goal.new("nope", "Ghost", date(2030, 1, 1)))
    assert store.list() == []


def test_list_after_creates_and_deletes(db: Database) -> None:
    store = TaskStore(db)
    for i in range(5):
        store.create(Task.new(f"t{i}", f"task {i}", "", "ann"))
    store.delete("t1")
    store.delete("t3")

    ids = [t.id for t in store.list()]
    assert ids == ["t0", "t2", "t4"]
    assert store.count() == 3


def test_lookups_single_and_multi(db: Database) -> None:
    store = TaskStore(db)
    store.create(Task.new("t1", "shared", "", "ann"))
    store.create(Task.new("t2", "shared", "", "bob"))
    store.create(Task.new("t3", "other", "", "ann"))

    assert store.get_by_title("shared").id == "t1"
    assert [t.id for t in store.list_by_owner("ann")] == ["t1", "t3"]
    assert store.list_by_owner("nobody") == []
    with pytest.raises(RecordNotFoundError):
        store.get_by_title("missing")


def test_planner_goal_relationship(db: Database) -> None:
    planners = PlannerStore(db)
    goals = GoalStore(db)

    planners.create(Planner.new("pl1", "Life", "ann"))
    goals.create(Goal.new("g1", "Run a marathon", date(2030, 5, 1), planner_id="pl1"))
    goals.create(Goal.new("g2", "Unrelated", date(2030, 6, 1)))

    found = goals.list_by_planner("pl1")
    assert [g.id for g in found] == ["g1"]
    assert found[0].deadline == date(2030, 5, 1)
    assert goals.get_by_objective("Unrelated").id == "g2"
    assert planners.list_by_owner("ann")[0].title == "Life"


def test_plan_round_trip_keeps_date_time_and_tasks(db: Database) -> None:
    store = PlanStore(db)
    plan = Plan.new("p1", "Morning", "routine", date(2030, 1, 2), time(6, 45), goal_id="g1")
    plan.tasks.append(Task.new("t1", "Stretch", "", "ann"))
    store.create(plan)

    got = store.get("p1")
    assert got == plan
    assert got.plan_time == time(6, 45)
    assert [t.title for t in got.tasks] == ["Stretch"]
    assert store.get_by_name("Morning").id == "p1"
    assert [p.id for p in store.list_by_goal("g1")] == ["p1"]


def test_version_current_and_previous(db: Database) -> None:
    store = VersionStore(db)
    snap = Snapshot(goal=Goal.new("g1", "Ship", date(2030, 1, 1)))
    store.create(Version(id="v1", goal_id="g1", no=VersionInfo(0, 0, 1), image=snap))
    store.create(
        Version(id="v2", goal_id="g1", no=VersionInfo(0, 1, 0), previous_version="v1", image=snap)
    )
    store.create(Version(id="x1", goal_id="g2", no=VersionInfo(9, 0, 0)))

    assert store.get_current("g1").id == "v2"
    assert store.get_previous("v2").id == "v1"
    assert [v.id for v in store.list_by_goal("g1")] == ["v1", "v2"]
    assert store.get("v1").image.goal is not None
    assert store.get("v1").image.goal.objective == "Ship"

    with pytest.raises(RecordNotFoundError):
        store.get_previous("v1")
    with pytest.raises(RecordNotFoundError):
        store.get_current("nope")


def test_closed_database_raises_store_error(tmp_path) -> None:
    db = Database(tmp_path / "x.sqlite3")
    store = TaskStore(db)
    db.close()
    with pytest.raises(StoreError):
        store.list()


def test_missing_columns_are_added(tmp_path) -> None:
    path = tmp_path / "old.sqlite3"
    conn = sqlite3.connect(path)
    conn.execute("CREATE TABLE planners (id TEXT PRIMARY KEY NOT NULL, title TEXT)")
    conn.execute("INSERT INTO planners(id, title) VALUES ('p1', 'Old')")
    conn.commit()
    conn.close()

    store = PlannerStore(Database(path))
    got = store.get("p1")
    assert got.title == "Old"
    assert got.owner == ""
