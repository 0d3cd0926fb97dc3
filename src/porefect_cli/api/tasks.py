"""Tasks API endpoints."""

from datetime import date
from typing import Union

from porefect_cli.api.client import APIClient
from porefect_cli.models import Task, TaskCreate


def _as_date_segment(value: Union[date, str]) -> str:
    """Format a date as the YYYY-MM-DD path segment the server expects."""
    if isinstance(value, date):
        return value.isoformat()
    return date.fromisoformat(value).isoformat()


class TasksAPI:
    """Tasks API client."""

    def __init__(self, client: APIClient):
        self.client = client

    async def list_tasks(self, user_id: str) -> list[Task]:
        """List every task owned by a user, regardless of date."""
        response = await self.client.get(f"/tasks/{user_id}")
        return [Task.model_validate(item) for item in response.json()]

    async def tasks_for_date(
        self, user_id: str, on: Union[date, str]
    ) -> list[Task]:
        """List the tasks applicable to a date, with that date's completion flags."""
        response = await self.client.get(f"/tasks/{user_id}/{_as_date_segment(on)}")
        return [Task.model_validate(item) for item in response.json()]

    async def create_task(self, task: TaskCreate) -> Task:
        """Create a new task."""
        response = await self.client.post("/tasks", json=task.to_wire())
        return Task.model_validate(response.json())

    async def complete_task(self, task_id: str, user_id: str) -> dict:
        """Mark a task as completed for the current date."""
        response = await self.client.post(
            f"/tasks/{task_id}/complete", json={"userId": user_id}
        )
        return response.json() if response.content else {}

    async def uncomplete_task(self, task_id: str, user_id: str) -> dict:
        """Mark a task as not completed for the current date."""
        response = await self.client.post(
            f"/tasks/{task_id}/uncomplete", json={"userId": user_id}
        )
        return response.json() if response.content else {}
