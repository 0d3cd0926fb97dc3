"""Tests for the scheduler view."""

from datetime import date

import pytest
from rich.console import Console

from porefect_cli.api.errors import ConnectivityError
from porefect_cli.services.task_store import TaskStore
from porefect_cli.ui.scheduler_view import SchedulerView
from tests.factories import make_task

TODAY = date(2026, 10, 21)  # Wednesday
SUNDAY = date(2026, 10, 18)


def _console() -> Console:
    return Console(record=True, width=200, color_system=None)


@pytest.fixture
def view(mock_tasks_api):
    return SchedulerView(TaskStore(mock_tasks_api), today=TODAY)


def test_starts_on_current_week(view):
    assert view.week_start == SUNDAY
    assert view.reference_date == SUNDAY
    assert view.view_mode == "list"


def test_show_today_uses_today(mock_tasks_api):
    view = SchedulerView(TaskStore(mock_tasks_api), today=TODAY, show_today=True)
    assert view.reference_date == TODAY


def test_go_to_leaves_today_mode(mock_tasks_api):
    view = SchedulerView(TaskStore(mock_tasks_api), today=TODAY, show_today=True)
    view.go_to(date(2026, 11, 4))
    assert view.reference_date == date(2026, 11, 1)


def test_set_view_mode(view):
    view.set_view_mode("calendar")
    assert view.view_mode == "calendar"
    with pytest.raises(ValueError):
        view.set_view_mode("agenda")


@pytest.mark.asyncio
async def test_back_then_forward_reloads_same_window(view, session, mock_tasks_api):
    await view.show(session)
    await view.previous_week(session)
    assert view.week_start == date(2026, 10, 11)

    await view.next_week(session)
    assert view.week_start == SUNDAY

    calls = [c.args for c in mock_tasks_api.tasks_for_date.call_args_list]
    assert calls == [
        ("user-1", SUNDAY),
        ("user-1", date(2026, 10, 11)),
        ("user-1", SUNDAY),
    ]


@pytest.mark.asyncio
async def test_weekly_task_lands_in_its_days(view, session, mock_tasks_api):
    mask = make_task("mask", "Apply face mask", schedule="weekly", days=[2, 4])
    mock_tasks_api.tasks_for_date.return_value = [mask]
    await view.show(session)

    cells = view.calendar_cells()
    placed = {day: [t.id for t in tasks] for day, tasks in cells}

    assert placed == {
        date(2026, 10, 18): [],
        date(2026, 10, 19): [],
        date(2026, 10, 20): ["mask"],
        date(2026, 10, 21): [],
        date(2026, 10, 22): ["mask"],
        date(2026, 10, 23): [],
        date(2026, 10, 24): [],
    }


@pytest.mark.asyncio
async def test_render_calendar(view, session, mock_tasks_api):
    mock_tasks_api.tasks_for_date.return_value = [
        make_task("mask", "Apply face mask", schedule="weekly", days=[2, 4])
    ]
    await view.show(session)
    view.set_view_mode("calendar")

    out = _console()
    view.render(out)
    text = out.export_text()

    assert "October 18 - October 24, 2026" in text
    assert "Tue 20" in text
    assert text.count("Apply face mask") == 2
    assert text.count("No tasks") == 5


@pytest.mark.asyncio
async def test_render_list(view, session, mock_tasks_api):
    mock_tasks_api.tasks_for_date.return_value = [
        make_task("t-1", "Double cleanse", completed=True, time="21:00")
    ]
    await view.show(session)

    out = _console()
    view.render(out)
    text = out.export_text()

    assert "Double cleanse" in text
    assert "Every day" in text
    assert "21:00" in text
    assert "●" in text


@pytest.mark.asyncio
async def test_render_empty(view):
    await view.show(None)

    out = _console()
    view.render(out)

    assert "No tasks scheduled" in out.export_text()


@pytest.mark.asyncio
async def test_render_error(view, session, mock_tasks_api):
    mock_tasks_api.tasks_for_date.side_effect = ConnectivityError("offline")
    await view.show(session)

    out = _console()
    view.render(out)
    text = out.export_text()

    assert "Oops! Something went wrong" in text
    assert "Failed to load tasks" in text
