# src/flow_planner/core/models.py

"""
Entity model: Planner -> Goal -> Plan -> Task, plus Version snapshots.

Ownership is by reference only (Goal.planner_id, Plan.goal_id).
Plan.tasks is the one embedded collection; it is stored with the plan row.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from datetime import UTC, date, datetime, time
from enum import StrEnum
from typing import Any

from .errors import InvalidInputError

DATE_FORMAT = "%Y-%m-%d"
TIME_FORMAT = "%H:%M"

_DATE_RE = re.compile(r"\d{4}-\d{2}-\d{2}")
_TIME_RE = re.compile(r"\d{2}:\d{2}")


class Status(StrEnum):
    """
    Well-known Goal/Plan statuses.

    Status fields are plain strings: clients may store any value,
    these are only the defaults the app itself writes.
    """

    NOT_STARTED = "Not Started"
    IN_PROGRESS = "In Progress"
    COMPLETED = "Completed"
    FAIL = "Fail"


def utc_now() -> datetime:
    return datetime.now(UTC)


def parse_date(raw: str) -> date:
    """Parse a YYYY-MM-DD string."""
    s = (raw or "").strip()
    if not _DATE_RE.fullmatch(s):
        raise InvalidInputError(f"invalid date {raw!r}: expected YYYY-MM-DD")
    try:
        return datetime.strptime(s, DATE_FORMAT).date()
    except ValueError as e:
        raise InvalidInputError(f"invalid date {raw!r}: {e}") from e


def parse_time(raw: str) -> time:
    """Parse a HH:MM string."""
    s = (raw or "").strip()
    if not _TIME_RE.fullmatch(s):
        raise InvalidInputError(f"invalid time {raw!r}: expected HH:MM")
    try:
        return datetime.strptime(s, TIME_FORMAT).time()
    except ValueError as e:
        raise InvalidInputError(f"invalid time {raw!r}: {e}") from e


def format_date(d: date | None) -> str | None:
    return d.strftime(DATE_FORMAT) if d is not None else None


def format_time(t: time | None) -> str | None:
    return t.strftime(TIME_FORMAT) if t is not None else None


def _dt_to_str(dt: datetime | None) -> str | None:
    return dt.isoformat() if dt is not None else None


def _str_to_dt(raw: Any) -> datetime:
    if isinstance(raw, datetime):
        return raw
    if not raw:
        return datetime.fromtimestamp(0, tz=UTC)
    dt = datetime.fromisoformat(str(raw))
    return dt if dt.tzinfo is not None else dt.replace(tzinfo=UTC)


def _str_to_date(raw: Any) -> date | None:
    if raw is None or raw == "":
        return None
    if isinstance(raw, date):
        return raw
    return datetime.strptime(str(raw), DATE_FORMAT).date()


def _str_to_time(raw: Any) -> time | None:
    if raw is None or raw == "":
        return None
    if isinstance(raw, time):
        return raw
    return datetime.strptime(str(raw), TIME_FORMAT).time()


@dataclass(slots=True)
class Task:
    id: str
    title: str
    description: str
    owner: str
    started: bool = False
    completed: bool = False
    created_at: datetime = field(default_factory=utc_now)
    updated_at: datetime = field(default_factory=utc_now)

    @classmethod
    def new(cls, id: str, title: str, description: str, owner: str) -> Task:
        now = utc_now()
        return cls(
            id=id,
            title=title,
            description=description,
            owner=owner,
            started=False,
            completed=False,
            created_at=now,
            updated_at=now,
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "title": self.title,
            "description": self.description,
            "owner": self.owner,
            "started": self.started,
            "completed": self.completed,
            "created_at": _dt_to_str(self.created_at),
            "updated_at": _dt_to_str(self.updated_at),
        }

    @classmethod
    def from_dict(cls, d: dict[str, Any]) -> Task:
        return cls(
            id=str(d.get("id", "")),
            title=str(d.get("title", "")),
            description=str(d.get("description", "")),
            owner=str(d.get("owner", "")),
            started=bool(d.get("started", False)),
            completed=bool(d.get("completed", False)),
            created_at=_str_to_dt(d.get("created_at")),
            updated_at=_str_to_dt(d.get("updated_at")),
        )


@dataclass(slots=True)
class Plan:
    id: str
    name: str
    description: str
    plan_date: date | None
    plan_time: time | None
    goal_id: str = ""
    status: str = Status.NOT_STARTED.value
    created_at: datetime = field(default_factory=utc_now)
    updated_at: datetime = field(default_factory=utc_now)
    tasks: list[Task] = field(default_factory=list)

    @classmethod
    def new(
        cls,
        id: str,
        name: str,
        description: str,
        plan_date: date | None,
        plan_time: time | None,
        goal_id: str = "",
    ) -> Plan:
        now = utc_now()
        return cls(
            id=id,
            name=name,
            description=description,
            plan_date=plan_date,
            plan_time=plan_time,
            goal_id=goal_id,
            status=Status.NOT_STARTED.value,
            created_at=now,
            updated_at=now,
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "description": self.description,
            "plan_date": format_date(self.plan_date),
            "plan_time": format_time(self.plan_time),
            "goal_id": self.goal_id,
            "status": self.status,
            "created_at": _dt_to_str(self.created_at),
            "updated_at": _dt_to_str(self.updated_at),
            "tasks": [t.to_dict() for t in self.tasks],
        }

    @classmethod
    def from_dict(cls, d: dict[str, Any]) -> Plan:
        return cls(
            id=str(d.get("id", "")),
            name=str(d.get("name", "")),
            description=str(d.get("description", "")),
            plan_date=_str_to_date(d.get("plan_date")),
            plan_time=_str_to_time(d.get("plan_time")),
            goal_id=str(d.get("goal_id") or ""),
            status=str(d.get("status", Status.NOT_STARTED.value)),
            created_at=_str_to_dt(d.get("created_at")),
            updated_at=_str_to_dt(d.get("updated_at")),
            tasks=[Task.from_dict(t) for t in d.get("tasks") or [] if isinstance(t, dict)],
        )


@dataclass(slots=True)
class Goal:
    id: str
    objective: str
    deadline: date | None
    planner_id: str = ""
    status: str = Status.NOT_STARTED.value
    created_at: datetime = field(default_factory=utc_now)
    updated_at: datetime = field(default_factory=utc_now)

    @classmethod
    def new(cls, id: str, objective: str, deadline: date | None, planner_id: str = "") -> Goal:
        now = utc_now()
        return cls(
            id=id,
            objective=objective,
            deadline=deadline,
            planner_id=planner_id,
            status=Status.NOT_STARTED.value,
            created_at=now,
            updated_at=now,
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "objective": self.objective,
            "deadline": format_date(self.deadline),
            "planner_id": self.planner_id,
            "status": self.status,
            "created_at": _dt_to_str(self.created_at),
            "updated_at": _dt_to_str(self.updated_at),
        }

    @classmethod
    def from_dict(cls, d: dict[str, Any]) -> Goal:
        return cls(
            id=str(d.get("id", "")),
            objective=str(d.get("objective", "")),
            deadline=_str_to_date(d.get("deadline")),
            planner_id=str(d.get("planner_id") or ""),
            status=str(d.get("status", Status.NOT_STARTED.value)),
            created_at=_str_to_dt(d.get("created_at")),
            updated_at=_str_to_dt(d.get("updated_at")),
        )


@dataclass(slots=True)
class Planner:
    id: str
    title: str
    owner: str

    @classmethod
    def new(cls, id: str, title: str, owner: str) -> Planner:
        return cls(id=id, title=title, owner=owner)

    def to_dict(self) -> dict[str, Any]:
        return {"id": self.id, "title": self.title, "owner": self.owner}


@dataclass(frozen=True, slots=True)
class VersionInfo:
    major: int = 0
    minor: int = 0
    patch: int = 0

    def bump(self, kind: str) -> VersionInfo:
        """
        major -> X+1.0.0
        minor -> X.Y+1.0
        patch -> X.Y.Z+1
        """
        k = (kind or "").strip().lower()
        if k == "major":
            return VersionInfo(self.major + 1, 0, 0)
        if k == "minor":
            return VersionInfo(self.major, self.minor + 1, 0)
        if k == "patch":
            return VersionInfo(self.major, self.minor, self.patch + 1)
        raise InvalidInputError(f"invalid version bump {kind!r}: expected major, minor or patch")

    def as_tuple(self) -> tuple[int, int, int]:
        return (self.major, self.minor, self.patch)

    def __str__(self) -> str:
        return f"{self.major}.{self.minor}.{self.patch}"


@dataclass(slots=True)
class Snapshot:
    """Point-in-time image of a goal with its plans and tasks."""

    goal: Goal | None = None
    plans: list[Plan] = field(default_factory=list)
    tasks: list[Task] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {
            "goal": self.goal.to_dict() if self.goal is not None else None,
            "plans": [p.to_dict() for p in self.plans],
            "tasks": [t.to_dict() for t in self.tasks],
        }

    @classmethod
    def from_dict(cls, d: dict[str, Any] | None) -> Snapshot:
        if not d:
            return cls()
        goal_raw = d.get("goal")
        return cls(
            goal=Goal.from_dict(goal_raw) if isinstance(goal_raw, dict) else None,
            plans=[Plan.from_dict(p) for p in d.get("plans") or [] if isinstance(p, dict)],
            tasks=[Task.from_dict(t) for t in d.get("tasks") or [] if isinstance(t, dict)],
        )


@dataclass(slots=True)
class Version:
    id: str
    goal_id: str
    no: VersionInfo
    created_by: str = ""
    plan_id: str = ""
    task_id: str = ""
    previous_version: str | None = None
    created_at: datetime = field(default_factory=utc_now)
    image: Snapshot = field(default_factory=Snapshot)
