"""Scheduler view - which week and which layout the user is looking at."""

from __future__ import annotations

from datetime import date
from typing import Literal, Optional

from rich.console import Console

from porefect_cli.models import Task, UserSession
from porefect_cli.services.task_store import TaskStore
from porefect_cli.ui import formatters
from porefect_cli.utils.recurrence import (
    shift_week,
    tasks_for_day,
    week_dates,
    week_start,
    weekday_index,
)

ViewMode = Literal["list", "calendar"]


class SchedulerView:
    """Transient UI state over a task store.

    Holds only the selected layout, the displayed week and whether the
    "today" shortcut is active. Everything else is read from the store.
    """

    def __init__(
        self,
        store: TaskStore,
        *,
        view_mode: ViewMode = "list",
        today: Optional[date] = None,
        show_today: bool = False,
    ):
        self.store = store
        self.view_mode: ViewMode = view_mode
        self.today = today or date.today()
        self.week_start = week_start(self.today)
        self.show_today = show_today

    @property
    def reference_date(self) -> date:
        """Date the window is requested for."""
        return self.today if self.show_today else self.week_start

    def set_view_mode(self, mode: ViewMode) -> None:
        if mode not in ("list", "calendar"):
            raise ValueError(f"Unknown view mode: {mode}")
        self.view_mode = mode

    def go_to(self, day: date) -> None:
        """Display the week containing ``day``."""
        self.week_start = week_start(day)
        self.show_today = False

    async def show(self, session: UserSession | None) -> list[Task]:
        """Load the window for the current reference date."""
        return await self.store.load_tasks_for_window(session, self.reference_date)

    async def previous_week(self, session: UserSession | None) -> list[Task]:
        return await self.shift_weeks(session, -1)

    async def next_week(self, session: UserSession | None) -> list[Task]:
        return await self.shift_weeks(session, 1)

    async def shift_weeks(
        self, session: UserSession | None, weeks: int
    ) -> list[Task]:
        """Move the displayed week and reload it."""
        self.week_start = shift_week(self.week_start, weeks)
        self.show_today = False
        return await self.show(session)

    def completions(self) -> dict[str, bool]:
        return {task.id: self.store.completion_for(task.id) for task in self.store.tasks}

    def calendar_cells(self) -> list[tuple[date, list[Task]]]:
        """Each date of the displayed week with the tasks occurring on it."""
        return [
            (day, tasks_for_day(self.store.tasks, weekday_index(day)))
            for day in week_dates(self.week_start)
        ]

    def render(self, out: Optional[Console] = None) -> None:
        """Draw the current layout."""
        if self.store.error is not None:
            formatters.render_load_error(self.store.error.message, out)
            return
        if not self.store.tasks:
            formatters.render_empty(out)
            return
        if self.view_mode == "calendar":
            formatters.render_week_grid(
                self.calendar_cells(), self.completions(), self.today, out
            )
        else:
            formatters.render_task_list(self.store.tasks, self.completions(), out)
