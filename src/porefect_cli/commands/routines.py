"""Routine lookup commands."""

from typing import Optional

import typer

from porefect_cli.api.client import get_client
from porefect_cli.api.routines import RoutinesAPI
from porefect_cli.config import get_config_manager
from porefect_cli.services.auth_service import AuthService
from porefect_cli.ui.formatters import console, format_output

from .decorators import command_wrapper

app = typer.Typer(help="Routines available for linking tasks")


@app.command("list")
@command_wrapper
async def list_routines(
    output: Optional[str] = typer.Option(
        None, "--output", "-o", help="Output format (table, json, yaml)"
    ),
    profile: str = typer.Option("default", "--profile", help="Profile name"),
) -> None:
    """List your routines."""
    session = AuthService(get_config_manager(profile)).current_session()
    async with get_client(profile, token_provider=lambda: session.token) as client:
        routines = await RoutinesAPI(client).list_routines(session.user_id)

    if not routines:
        console.print("[yellow]No routines found[/yellow]")
        return
    format_output(
        [r.model_dump(mode="json") for r in routines],
        "table" if output in (None, "pretty") else output,
    )
