"""Routines API endpoints."""

from porefect_cli.api.client import APIClient
from porefect_cli.models import Routine


class RoutinesAPI:
    """Routines API client.

    Routines are managed elsewhere; the CLI only reads them to link tasks.
    """

    def __init__(self, client: APIClient):
        self.client = client

    async def list_routines(self, user_id: str) -> list[Routine]:
        """List a user's routines."""
        response = await self.client.get(f"/routines/{user_id}")
        return [Routine.model_validate(item) for item in response.json()]
