"""Task store - the task list for the currently selected date window.

The store is the only owner of the in-memory task list. Every load replaces
the list wholesale; there is no merging and no caching across windows.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date

from porefect_cli.api.errors import APIError
from porefect_cli.api.tasks import TasksAPI
from porefect_cli.models import CompletionRecord, Task, UserSession
from porefect_cli.utils.logger import get_logger


@dataclass(frozen=True)
class StoreError:
    """A failed load, shown to the user until the next successful one."""

    message: str
    detail: str = ""
    retryable: bool = True


class TaskStore:
    """Holds the tasks fetched for one reference date.

    Loads are numbered. A response that arrives after a newer load was issued
    is discarded, so rapid navigation always ends on the last requested
    window.
    """

    def __init__(self, tasks_api: TasksAPI):
        """Initialize the store.

        Args:
            tasks_api: Tasks API used to fetch the window
        """
        self.tasks_api = tasks_api
        self.tasks: list[Task] = []
        self.completions: dict[tuple[str, date], CompletionRecord] = {}
        self.reference_date: date | None = None
        self.requested_date: date | None = None
        self.user_id: str | None = None
        self.error: StoreError | None = None
        self.is_loading = False
        self._sequence = 0

    @property
    def sequence(self) -> int:
        """Number of the most recently issued load."""
        return self._sequence

    def _apply(
        self, tasks: list[Task], reference_date: date, user_id: str | None
    ) -> None:
        self.tasks = tasks
        self.reference_date = reference_date
        self.user_id = user_id
        self.completions = {
            (task.id, reference_date): CompletionRecord(
                task_id=task.id, date=reference_date, completed=task.completed
            )
            for task in tasks
        }

    async def load_tasks_for_window(
        self, session: UserSession | None, reference_date: date
    ) -> list[Task]:
        """Fetch the tasks for a date and make them the current list.

        Args:
            session: Signed-in user, or None for anonymous access
            reference_date: Date whose window is loaded

        Returns:
            The current task list after the load. Anonymous access yields an
            empty list without contacting the server. A failed load leaves an
            error in ``self.error`` instead of raising.
        """
        logger = get_logger()
        self._sequence += 1
        sequence = self._sequence

        self.requested_date = reference_date
        self.error = None

        if session is None:
            self._apply([], reference_date, None)
            self.is_loading = False
            return self.tasks

        self.is_loading = True
        logger.debug(
            "loading tasks #%d for %s on %s", sequence, session.user_id, reference_date
        )
        try:
            tasks = await self.tasks_api.tasks_for_date(session.user_id, reference_date)
        except APIError as e:
            if sequence != self._sequence:
                logger.debug("dropping failed stale load #%d", sequence)
                return self.tasks
            logger.error("failed to load tasks for %s: %s", reference_date, e)
            self.error = StoreError(
                "Failed to load tasks. Please try again later.", detail=str(e)
            )
            self.is_loading = False
            return self.tasks

        if sequence != self._sequence:
            logger.debug(
                "dropping stale load #%d (latest is #%d)", sequence, self._sequence
            )
            return self.tasks

        self._apply(tasks, reference_date, session.user_id)
        self.is_loading = False
        return self.tasks

    async def reload(self, session: UserSession | None) -> list[Task]:
        """Reload the last requested window (today when nothing was requested yet)."""
        return await self.load_tasks_for_window(
            session, self.requested_date or date.today()
        )

    def completion_for(self, task_id: str, on: date | None = None) -> bool:
        """Whether a task is recorded as completed on a date.

        Defaults to the loaded reference date.
        """
        on = on or self.reference_date
        record = self.completions.get((task_id, on))
        return record.completed if record else False

    def find(self, task_id: str) -> Task | None:
        """Find a loaded task by full id or unique suffix."""
        matches = [t for t in self.tasks if t.id == task_id]
        if not matches:
            matches = [t for t in self.tasks if t.id.endswith(task_id)]
        if len(matches) == 1:
            return matches[0]
        return None
