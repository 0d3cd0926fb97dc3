"""Completion service - toggles a task's completion for the loaded date."""

from __future__ import annotations

from porefect_cli.api.errors import APIError
from porefect_cli.api.tasks import TasksAPI
from porefect_cli.models import Task, UserSession
from porefect_cli.services.task_store import TaskStore
from porefect_cli.utils.logger import get_logger


class CompletionService:
    """Flips completion state through the API and reloads the window.

    Local state is never flipped ahead of the server; the store is reloaded
    after a successful call, the same way task creation resynchronises.
    """

    def __init__(self, tasks_api: TasksAPI, store: TaskStore):
        self.tasks_api = tasks_api
        self.store = store

    async def toggle(self, session: UserSession, task: Task) -> bool:
        """Complete an open task or reopen a completed one.

        Args:
            session: Signed-in user
            task: Task as currently loaded in the store

        Returns:
            The task's completion state after the reload

        Raises:
            APIError: If the complete/uncomplete call fails; the store is left
                as it was
        """
        logger = get_logger()
        currently_done = self.store.completion_for(task.id)
        action = "uncomplete" if currently_done else "complete"

        try:
            if currently_done:
                await self.tasks_api.uncomplete_task(task.id, session.user_id)
            else:
                await self.tasks_api.complete_task(task.id, session.user_id)
        except APIError as e:
            logger.error("failed to %s task %s: %s", action, task.id, e)
            raise

        logger.info("%s task %s", action, task.id)
        await self.store.reload(session)
        return self.store.completion_for(task.id)
