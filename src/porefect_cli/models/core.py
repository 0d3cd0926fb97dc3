"""Task, routine and session data models."""

import re
from datetime import date
from enum import Enum

from pydantic import (
    AliasChoices,
    BaseModel,
    ConfigDict,
    Field,
    field_validator,
    model_validator,
)

ALL_DAYS: tuple[int, ...] = (0, 1, 2, 3, 4, 5, 6)

_TIME_RE = re.compile(r"^([01]\d|2[0-3]):[0-5]\d$")


class TaskType(str, Enum):
    """Kind of scheduled task.

    The wire value of a basic task is ``"task"``.
    """

    BASIC = "task"
    ROUTINE = "routine"


class Schedule(str, Enum):
    """Recurrence classification of a task."""

    DAILY = "daily"
    WEEKLY = "weekly"


def _normalize_days(value: list[int] | None) -> list[int]:
    if value is None:
        return []
    days = sorted(set(value))
    for day in days:
        if not 0 <= day <= 6:
            raise ValueError(f"day of week must be between 0 and 6, got {day}")
    return days


def _check_time(value: str | None) -> str | None:
    if value in (None, ""):
        return None
    if not _TIME_RE.match(value):
        raise ValueError(f"time must be HH:MM, got {value!r}")
    return value


class Task(BaseModel):
    """A recurring task as returned by the server.

    Attributes:
        id: Server-assigned identifier
        title: Task title
        type: Basic or routine-linked
        routine_id: Linked routine, only for routine-linked tasks
        user_id: Owner of the task
        schedule: Daily or weekly recurrence
        days_of_week: Weekday indexes (Sunday=0) the task occurs on
        time: Advisory clock time (HH:MM)
        completed: Completion flag for the date the task was fetched for
    """

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    id: str = Field(validation_alias=AliasChoices("_id", "id"))
    title: str
    type: TaskType = TaskType.BASIC
    routine_id: str | None = Field(
        default=None, validation_alias=AliasChoices("routineId", "routine_id")
    )
    user_id: str | None = Field(
        default=None, validation_alias=AliasChoices("userId", "user_id")
    )
    schedule: Schedule = Schedule.DAILY
    days_of_week: list[int] = Field(
        default_factory=list,
        validation_alias=AliasChoices("daysOfWeek", "days_of_week"),
    )
    time: str | None = None
    completed: bool = False

    @field_validator("days_of_week", mode="before")
    @classmethod
    def validate_days(cls, v):
        return _normalize_days(v)

    @field_validator("time", mode="before")
    @classmethod
    def validate_time(cls, v):
        return _check_time(v)

    @field_validator("routine_id", mode="before")
    @classmethod
    def blank_routine_is_none(cls, v):
        return v or None


class TaskCreate(BaseModel):
    """Payload for creating a task.

    Serialised with the server's camelCase keys via ``to_wire``.
    """

    title: str
    type: TaskType = TaskType.BASIC
    routine_id: str | None = None
    user_id: str
    schedule: Schedule = Schedule.DAILY
    days_of_week: list[int] = Field(default_factory=lambda: list(ALL_DAYS))
    time: str | None = None

    @field_validator("days_of_week", mode="before")
    @classmethod
    def validate_days(cls, v):
        return _normalize_days(v)

    @field_validator("time", mode="before")
    @classmethod
    def validate_time(cls, v):
        return _check_time(v)

    @model_validator(mode="after")
    def basic_task_needs_title(self):
        if self.type is TaskType.BASIC and not self.title:
            raise ValueError("a basic task needs a title")
        return self

    def to_wire(self) -> dict:
        return {
            "title": self.title,
            "type": self.type.value,
            "routineId": self.routine_id if self.type is TaskType.ROUTINE else None,
            "userId": self.user_id,
            "schedule": self.schedule.value,
            "time": self.time or "",
            "daysOfWeek": self.days_of_week,
        }


class Routine(BaseModel):
    """A routine managed by the server, used to link tasks."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    id: str = Field(validation_alias=AliasChoices("_id", "id"))
    name: str


class CompletionRecord(BaseModel):
    """Whether a task was done on a given date."""

    model_config = ConfigDict(frozen=True)

    task_id: str
    date: date
    completed: bool = False


class UserSession(BaseModel):
    """Explicit user context passed to every store and flow operation."""

    model_config = ConfigDict(frozen=True)

    user_id: str = Field(min_length=1)
    token: str | None = None
