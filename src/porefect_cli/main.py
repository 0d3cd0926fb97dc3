"""Main entry point for Porefect CLI."""

import typer

from porefect_cli import __version__
from porefect_cli.commands import auth, config, routines, tasks
from porefect_cli.config import get_config_manager
from porefect_cli.ui.formatters import console
from porefect_cli.utils.typer_helpers import SuggestingGroup

app = typer.Typer(
    name="porefect",
    cls=SuggestingGroup,
    help="Schedule and track your skincare tasks from the terminal",
    no_args_is_help=True,
)

app.add_typer(auth.app, name="auth", help="Authentication commands")
app.add_typer(tasks.app, name="tasks", help="Task scheduling commands")
app.add_typer(routines.app, name="routines", help="Routine lookup commands")
app.add_typer(config.app, name="config", help="Configuration management")


@app.command()
def version(
    profile: str = typer.Option("default", "--profile", help="Profile name"),
) -> None:
    """Show version information."""
    console.print(f"[bold]Porefect CLI[/bold] version [cyan]{__version__}[/cyan]")
    endpoint = get_config_manager(profile).get("api.endpoint")
    console.print(f"[dim]API endpoint: {endpoint}[/dim]")


if __name__ == "__main__":
    app()
