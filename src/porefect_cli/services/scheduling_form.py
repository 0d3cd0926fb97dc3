"""Scheduling form - draft state and validation for new tasks."""

from __future__ import annotations

import re
from dataclasses import dataclass, field

from porefect_cli.api.errors import APIError
from porefect_cli.api.routines import RoutinesAPI
from porefect_cli.api.tasks import TasksAPI
from porefect_cli.models import (
    ALL_DAYS,
    Routine,
    Schedule,
    Task,
    TaskCreate,
    TaskType,
    UserSession,
)
from porefect_cli.services.task_store import TaskStore
from porefect_cli.utils.logger import get_logger
from porefect_cli.utils.recurrence import days_for_schedule

_TIME_RE = re.compile(r"^([01]\d|2[0-3]):[0-5]\d$")


class ValidationError(Exception):
    """The draft is not ready to submit."""

    def __init__(self, problems: list[str]):
        super().__init__("; ".join(problems))
        self.problems = problems


@dataclass
class TaskDraft:
    """Field values collected by the form."""

    title: str = ""
    type: TaskType = TaskType.BASIC
    routine_id: str = ""
    schedule: Schedule = Schedule.DAILY
    time: str = ""
    days_of_week: list[int] = field(default_factory=lambda: list(ALL_DAYS))


class SchedulingForm:
    """Collects a new task and submits it once every rule holds.

    Rules:
        * basic tasks need a title; routine tasks take the routine's name
        * a routine must be selected for routine-linked tasks
        * weekly tasks need at least one weekday
        * the optional time must be HH:MM
    """

    def __init__(self, tasks_api: TasksAPI, routines_api: RoutinesAPI | None = None):
        self.tasks_api = tasks_api
        self.routines_api = routines_api
        self.draft = TaskDraft()
        self.routines: list[Routine] = []
        self.is_open = False

    def open(self) -> None:
        """Show the form with a fresh draft."""
        self.draft = TaskDraft()
        self.is_open = True

    def close(self) -> None:
        self.is_open = False

    def set_title(self, title: str) -> None:
        self.draft.title = title

    def set_type(self, task_type: TaskType) -> None:
        self.draft.type = task_type

    def set_schedule(self, schedule: Schedule) -> None:
        self.draft.schedule = schedule

    def set_time(self, time: str | None) -> None:
        self.draft.time = time or ""

    def set_days(self, days: list[int]) -> None:
        self.draft.days_of_week = sorted(set(days))

    def toggle_day(self, day: int) -> None:
        """Select or deselect one weekday."""
        if not 0 <= day <= 6:
            raise ValueError(f"day of week must be between 0 and 6, got {day}")
        if day in self.draft.days_of_week:
            self.draft.days_of_week = [d for d in self.draft.days_of_week if d != day]
        else:
            self.draft.days_of_week = sorted([*self.draft.days_of_week, day])

    async def load_routines(self, session: UserSession) -> list[Routine]:
        """Fetch the routines offered for linking."""
        if self.routines_api is None:
            raise RuntimeError("SchedulingForm was created without a routines API")
        self.routines = await self.routines_api.list_routines(session.user_id)
        return self.routines

    def select_routine(self, routine_id: str) -> None:
        """Link a routine and take its name as the title.

        The title is overwritten on every selection; an unknown routine
        clears it.
        """
        self.draft.routine_id = routine_id
        routine = self.selected_routine
        self.draft.title = routine.name if routine else ""

    @property
    def selected_routine(self) -> Routine | None:
        """The loaded routine matching the draft's routine id, if any."""
        return next(
            (r for r in self.routines if r.id == self.draft.routine_id), None
        )

    def validate(self) -> list[str]:
        """Return the problems blocking submission (empty when ready)."""
        draft = self.draft
        problems = []
        if draft.type is TaskType.BASIC and not draft.title.strip():
            problems.append("Title is required")
        if draft.type is TaskType.ROUTINE and not draft.routine_id:
            problems.append("Select a routine for a routine task")
        if draft.schedule is Schedule.WEEKLY and not draft.days_of_week:
            problems.append("Select at least one day for a weekly task")
        if draft.time and not _TIME_RE.match(draft.time):
            problems.append("Time must be HH:MM")
        return problems

    @property
    def can_submit(self) -> bool:
        """Whether the submit control is enabled."""
        return not self.validate()

    def build_payload(self, session: UserSession) -> TaskCreate:
        draft = self.draft
        return TaskCreate(
            title=draft.title.strip(),
            type=draft.type,
            routine_id=draft.routine_id if draft.type is TaskType.ROUTINE else None,
            user_id=session.user_id,
            schedule=draft.schedule,
            days_of_week=days_for_schedule(draft.schedule, draft.days_of_week),
            time=draft.time or None,
        )

    async def submit(self, session: UserSession, store: TaskStore) -> Task:
        """Create the task, then resynchronise the store from the server.

        Raises:
            ValidationError: If the draft breaks a rule; nothing is sent
            APIError: If the server rejects or cannot be reached
        """
        problems = self.validate()
        if problems:
            raise ValidationError(problems)

        logger = get_logger()
        payload = self.build_payload(session)
        try:
            created = await self.tasks_api.create_task(payload)
        except APIError as e:
            logger.error("failed to create task %r: %s", payload.title, e)
            raise

        logger.info("created task %s (%s)", created.id, created.title)
        await store.reload(session)
        self.close()
        return created
