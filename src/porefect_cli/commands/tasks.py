"""Task scheduling commands."""

from dataclasses import dataclass
from datetime import date
from enum import Enum
from typing import Optional

import typer

from porefect_cli.api.client import APIClient, get_client
from porefect_cli.api.routines import RoutinesAPI
from porefect_cli.api.tasks import TasksAPI
from porefect_cli.config import get_config_manager
from porefect_cli.models import Schedule, TaskType, UserSession
from porefect_cli.services.auth_service import AuthService
from porefect_cli.services.completion_service import CompletionService
from porefect_cli.services.scheduling_form import SchedulingForm
from porefect_cli.services.task_store import TaskStore
from porefect_cli.ui.formatters import (
    format_info,
    format_output,
    format_success,
    format_warning,
    render_empty,
    render_task_list,
)
from porefect_cli.ui.scheduler_view import SchedulerView
from porefect_cli.utils import exit_codes
from porefect_cli.utils.recurrence import parse_days

from .decorators import AppError, command_wrapper

app = typer.Typer(help="Schedule and track skincare tasks")


class KindChoice(str, Enum):
    BASIC = "basic"
    ROUTINE = "routine"


class ViewChoice(str, Enum):
    LIST = "list"
    CALENDAR = "calendar"


@dataclass
class _Wiring:
    session: Optional[UserSession]
    client: APIClient
    tasks_api: TasksAPI
    store: TaskStore


def _wire(profile: str) -> _Wiring:
    """Build the session, API client and store for one command run."""
    session = AuthService(get_config_manager(profile)).current_session()
    client = get_client(
        profile, token_provider=lambda: session.token if session else None
    )
    tasks_api = TasksAPI(client)
    return _Wiring(session, client, tasks_api, TaskStore(tasks_api))


def _parse_date(value: Optional[str]) -> Optional[date]:
    if value is None:
        return None
    try:
        return date.fromisoformat(value)
    except ValueError as e:
        raise AppError(
            f"Invalid date '{value}', expected YYYY-MM-DD", exit_codes.ERROR_INVALID_ARGS
        ) from e


def _output_format(profile: str, output: Optional[str]) -> str:
    if output is None:
        output = get_config_manager(profile).get("output.format") or "pretty"
    return output


def _dump(view: SchedulerView) -> list[dict]:
    completions = view.completions()
    rows = []
    for task in view.store.tasks:
        row = task.model_dump(mode="json")
        row["completed"] = completions.get(task.id, False)
        rows.append(row)
    return rows


def _show(view: SchedulerView, output: str) -> None:
    if output == "pretty":
        view.render()
        if view.store.error is not None:
            raise typer.Exit(exit_codes.ERROR_GENERAL)
        return
    if view.store.error is not None:
        raise AppError(view.store.error.message, exit_codes.ERROR_NETWORK)
    format_output(_dump(view), output)


async def _list_all(wiring: _Wiring, output: str) -> None:
    async with wiring.client:
        tasks = await wiring.tasks_api.list_tasks(wiring.session.user_id)

    if output != "pretty":
        format_output([task.model_dump(mode="json") for task in tasks], output)
    elif tasks:
        render_task_list(tasks, {})
    else:
        render_empty()


@app.command("list")
@command_wrapper
async def list_tasks(
    on: Optional[str] = typer.Option(
        None, "--date", "-d", help="Show the week containing this date (YYYY-MM-DD)"
    ),
    today: bool = typer.Option(False, "--today", help="Show today's tasks"),
    all_tasks: bool = typer.Option(
        False, "--all", "-a", help="Every task you own, regardless of date"
    ),
    view_mode: Optional[ViewChoice] = typer.Option(
        None, "--view", "-v", help="Layout: list or calendar"
    ),
    output: Optional[str] = typer.Option(
        None, "--output", "-o", help="Output format (pretty, table, json, yaml)"
    ),
    profile: str = typer.Option("default", "--profile", help="Profile name"),
) -> None:
    """List scheduled tasks."""
    wiring = _wire(profile)
    if all_tasks:
        await _list_all(wiring, _output_format(profile, output))
        return

    mode = view_mode.value if view_mode else get_config_manager(profile).get(
        "ui.default_view"
    )
    if today and on is not None:
        raise AppError(
            "--today and --date cannot be used together", exit_codes.ERROR_INVALID_ARGS
        )

    view = SchedulerView(wiring.store, view_mode=mode, show_today=today)
    reference = _parse_date(on)
    if reference is not None:
        view.go_to(reference)

    async with wiring.client:
        await view.show(wiring.session)
    _show(view, _output_format(profile, output))


@app.command("week")
@command_wrapper
async def week(
    on: Optional[str] = typer.Option(
        None, "--date", "-d", help="Any date in the week to show (YYYY-MM-DD)"
    ),
    offset: int = typer.Option(
        0, "--offset", help="Weeks to move from that date (negative for earlier)"
    ),
    profile: str = typer.Option("default", "--profile", help="Profile name"),
) -> None:
    """Show the week as a calendar grid."""
    wiring = _wire(profile)
    view = SchedulerView(wiring.store, view_mode="calendar")
    reference = _parse_date(on)
    if reference is not None:
        view.go_to(reference)

    async with wiring.client:
        if offset:
            await view.shift_weeks(wiring.session, offset)
        else:
            await view.show(wiring.session)
    _show(view, "pretty")


@app.command("add")
@command_wrapper
async def add_task(
    kind: KindChoice = typer.Option(
        KindChoice.BASIC, "--type", "-t", help="basic task or routine-linked task"
    ),
    title: Optional[str] = typer.Option(None, "--title", help="Task name (basic tasks)"),
    routine: Optional[str] = typer.Option(
        None, "--routine", "-r", help="Routine ID to link (routine tasks)"
    ),
    schedule: Schedule = typer.Option(
        Schedule.DAILY, "--schedule", "-s", help="daily or weekly"
    ),
    days: Optional[str] = typer.Option(
        None, "--days", help="Weekdays for weekly tasks, e.g. 'tue,thu' or '2,4'"
    ),
    at: Optional[str] = typer.Option(None, "--time", help="Optional time (HH:MM)"),
    profile: str = typer.Option("default", "--profile", help="Profile name"),
) -> None:
    """Schedule a new task."""
    wiring = _wire(profile)
    form = SchedulingForm(wiring.tasks_api, RoutinesAPI(wiring.client))
    form.open()

    async with wiring.client:
        if kind is KindChoice.ROUTINE:
            form.set_type(TaskType.ROUTINE)
            if routine:
                await form.load_routines(wiring.session)
                form.select_routine(routine)
                if form.selected_routine is None:
                    raise AppError(
                        f"Routine '{routine}' not found", exit_codes.ERROR_NOT_FOUND
                    )
            if title:
                format_warning("--title is ignored for routine tasks")
        else:
            form.set_title(title or "")

        form.set_schedule(schedule)
        if schedule is Schedule.WEEKLY:
            try:
                form.set_days(parse_days(days) if days is not None else [])
            except ValueError as e:
                raise AppError(str(e), exit_codes.ERROR_INVALID_ARGS) from e
        form.set_time(at)

        created = await form.submit(wiring.session, wiring.store)

    format_success(f"Scheduled '{created.title}' ({created.id})")


@app.command("toggle")
@command_wrapper
async def toggle_task(
    task_id: str = typer.Argument(..., help="Task ID or unique suffix"),
    profile: str = typer.Option("default", "--profile", help="Profile name"),
) -> None:
    """Mark one of today's tasks done, or not done if it already is.

    The server records completion against its current date, so only today's
    window can be toggled.
    """
    wiring = _wire(profile)
    completion = CompletionService(wiring.tasks_api, wiring.store)

    async with wiring.client:
        await wiring.store.load_tasks_for_window(wiring.session, date.today())
        if wiring.store.error is not None:
            raise AppError(wiring.store.error.message, exit_codes.ERROR_NETWORK)

        task = wiring.store.find(task_id)
        if task is None:
            raise AppError(f"Task '{task_id}' not found", exit_codes.ERROR_NOT_FOUND)

        done = await completion.toggle(wiring.session, task)

    if done:
        format_success(f"Completed '{task.title}'")
    else:
        format_info(f"Reopened '{task.title}'")
