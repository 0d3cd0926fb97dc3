"""Authentication commands.

Sign-in happens with the identity provider; these commands store or clear
the resulting user id and bearer token for a profile.
"""

from typing import Optional

import typer

from porefect_cli.config import get_config_manager
from porefect_cli.services.auth_service import AuthService
from porefect_cli.ui.formatters import console, format_success

from .decorators import command_wrapper

app = typer.Typer(help="Authentication commands")


@app.command("login")
@command_wrapper(auth_required=False)
def login(
    user_id: str = typer.Option(
        ..., "--user-id", prompt="User ID", help="Your user ID from the identity provider"
    ),
    token: Optional[str] = typer.Option(
        None, "--token", help="Bearer token from the identity provider"
    ),
    profile: str = typer.Option("default", "--profile", help="Profile name"),
) -> None:
    """Save your identity for later commands."""
    session = AuthService(get_config_manager(profile)).login(user_id, token)
    format_success(f"Logged in as {session.user_id}")
    if not session.token:
        console.print("[dim]No token saved; requests will be sent unauthenticated.[/dim]")


@app.command("logout")
@command_wrapper(auth_required=False)
def logout(
    profile: str = typer.Option("default", "--profile", help="Profile name"),
) -> None:
    """Forget the saved identity."""
    AuthService(get_config_manager(profile)).logout()
    format_success("Logged out")


@app.command("whoami")
@command_wrapper(auth_required=False)
def whoami(
    profile: str = typer.Option("default", "--profile", help="Profile name"),
) -> None:
    """Show the signed-in user."""
    session = AuthService(get_config_manager(profile)).current_session()
    if session is None:
        console.print("[yellow]Not logged in[/yellow]")
        raise typer.Exit(1)
    console.print(f"[bold]{session.user_id}[/bold]")
    console.print("Token: " + ("[green]saved[/green]" if session.token else "[dim]none[/dim]"))
