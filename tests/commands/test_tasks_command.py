"""Tests for task commands."""

import json
from datetime import date
from unittest.mock import AsyncMock, MagicMock, patch

import pytest
from typer.testing import CliRunner

from porefect_cli.api.errors import APIError, ConnectivityError
from porefect_cli.commands.tasks import _Wiring, app
from porefect_cli.models import Routine, Schedule, TaskType
from porefect_cli.services.task_store import TaskStore
from tests.factories import make_task

runner = CliRunner()


@pytest.fixture
def wiring(session, mock_tasks_api):
    client = MagicMock()
    client.__aenter__.return_value = client
    wiring = _Wiring(session, client, mock_tasks_api, TaskStore(mock_tasks_api))
    with patch("porefect_cli.commands.tasks._wire", return_value=wiring):
        yield wiring


class TestList:
    def test_json_output(self, wiring, mock_tasks_api):
        mock_tasks_api.tasks_for_date.return_value = [
            make_task("t-1", "Double cleanse", completed=True)
        ]

        result = runner.invoke(app, ["list", "--date", "2026-10-21", "-o", "json"])

        assert result.exit_code == 0
        rows = json.loads(result.stdout)
        assert rows[0]["id"] == "t-1"
        assert rows[0]["completed"] is True
        mock_tasks_api.tasks_for_date.assert_called_once_with(
            "user-1", date(2026, 10, 18)
        )

    def test_today_uses_today(self, wiring, mock_tasks_api):
        result = runner.invoke(app, ["list", "--today", "-o", "json"])

        assert result.exit_code == 0
        mock_tasks_api.tasks_for_date.assert_called_once_with("user-1", date.today())

    def test_all_lists_every_task(self, wiring, mock_tasks_api):
        mock_tasks_api.list_tasks.return_value = [make_task("t-1"), make_task("t-2")]

        result = runner.invoke(app, ["list", "--all", "-o", "json"])

        assert result.exit_code == 0
        assert [row["id"] for row in json.loads(result.stdout)] == ["t-1", "t-2"]
        mock_tasks_api.list_tasks.assert_called_once_with("user-1")
        mock_tasks_api.tasks_for_date.assert_not_called()

    def test_empty_window(self, wiring):
        result = runner.invoke(app, ["list"])

        assert result.exit_code == 0
        assert "No tasks scheduled" in result.stdout

    def test_today_and_date_conflict(self, wiring, mock_tasks_api):
        result = runner.invoke(app, ["list", "--today", "--date", "2026-10-21"])

        assert result.exit_code == 2
        assert "cannot be used together" in result.stdout
        mock_tasks_api.tasks_for_date.assert_not_called()

    def test_invalid_date(self, wiring, mock_tasks_api):
        result = runner.invoke(app, ["list", "--date", "21/10/2026"])

        assert result.exit_code == 2
        assert "Invalid date" in result.stdout
        mock_tasks_api.tasks_for_date.assert_not_called()

    def test_load_failure_pretty(self, wiring, mock_tasks_api):
        mock_tasks_api.tasks_for_date.side_effect = ConnectivityError("offline")

        result = runner.invoke(app, ["list"])

        assert result.exit_code == 1
        assert "Oops! Something went wrong" in result.stdout

    def test_load_failure_json(self, wiring, mock_tasks_api):
        mock_tasks_api.tasks_for_date.side_effect = ConnectivityError("offline")

        result = runner.invoke(app, ["list", "-o", "json"])

        assert result.exit_code == 4
        assert "Failed to load tasks" in result.stdout


class TestWeek:
    def test_offset_moves_window(self, wiring, mock_tasks_api):
        result = runner.invoke(app, ["week", "--date", "2026-10-21", "--offset=-1"])

        assert result.exit_code == 0
        mock_tasks_api.tasks_for_date.assert_called_once_with(
            "user-1", date(2026, 10, 11)
        )


class TestAdd:
    def test_weekly_basic_task(self, wiring, mock_tasks_api):
        mock_tasks_api.create_task.return_value = make_task(
            "new-1", "Apply face mask", schedule="weekly", days=[2, 4]
        )

        result = runner.invoke(
            app,
            ["add", "--title", "Apply face mask", "-s", "weekly", "--days", "tue,thu"],
        )

        assert result.exit_code == 0
        assert "Scheduled 'Apply face mask' (new-1)" in result.stdout
        payload = mock_tasks_api.create_task.call_args.args[0]
        assert payload.schedule is Schedule.WEEKLY
        assert payload.days_of_week == [2, 4]
        assert payload.user_id == "user-1"
        mock_tasks_api.tasks_for_date.assert_called_once()

    def test_missing_title(self, wiring, mock_tasks_api):
        result = runner.invoke(app, ["add"])

        assert result.exit_code == 2
        assert "Title is required" in result.stdout
        mock_tasks_api.create_task.assert_not_called()

    def test_weekly_without_days(self, wiring, mock_tasks_api):
        result = runner.invoke(app, ["add", "--title", "Exfoliate", "-s", "weekly"])

        assert result.exit_code == 2
        assert "Select at least one day" in result.stdout
        mock_tasks_api.create_task.assert_not_called()

    def test_bad_day(self, wiring, mock_tasks_api):
        result = runner.invoke(
            app, ["add", "--title", "Exfoliate", "-s", "weekly", "--days", "funday"]
        )

        assert result.exit_code == 2
        assert "Unknown day of week" in result.stdout

    def test_bad_time(self, wiring, mock_tasks_api):
        result = runner.invoke(app, ["add", "--title", "Serum", "--time", "7pm"])

        assert result.exit_code == 2
        assert "Time must be HH:MM" in result.stdout

    def test_routine_task_takes_routine_name(self, wiring, mock_tasks_api):
        routines_api = MagicMock()
        routines_api.list_routines = AsyncMock(
            return_value=[Routine(id="r-1", name="Morning glow")]
        )
        mock_tasks_api.create_task.return_value = make_task(
            "new-2", "Morning glow", task_type="routine", routine_id="r-1"
        )

        with patch("porefect_cli.commands.tasks.RoutinesAPI", return_value=routines_api):
            result = runner.invoke(app, ["add", "-t", "routine", "-r", "r-1"])

        assert result.exit_code == 0
        payload = mock_tasks_api.create_task.call_args.args[0]
        assert payload.type is TaskType.ROUTINE
        assert payload.routine_id == "r-1"
        assert payload.title == "Morning glow"

    def test_unknown_routine(self, wiring, mock_tasks_api):
        routines_api = MagicMock()
        routines_api.list_routines = AsyncMock(return_value=[])

        with patch("porefect_cli.commands.tasks.RoutinesAPI", return_value=routines_api):
            result = runner.invoke(app, ["add", "-t", "routine", "-r", "r-404"])

        assert result.exit_code == 5
        assert "Routine 'r-404' not found" in result.stdout
        mock_tasks_api.create_task.assert_not_called()

    def test_server_rejects(self, wiring, mock_tasks_api):
        mock_tasks_api.create_task.side_effect = APIError(
            "Title too long", status_code=400
        )

        result = runner.invoke(app, ["add", "--title", "Toner"])

        assert result.exit_code == 1
        assert "Title too long" in result.stdout
        mock_tasks_api.tasks_for_date.assert_not_called()


class TestToggle:
    def test_completes_open_task(self, wiring, mock_tasks_api):
        mock_tasks_api.tasks_for_date.side_effect = [
            [make_task("t-1", "Double cleanse")],
            [make_task("t-1", "Double cleanse", completed=True)],
        ]

        result = runner.invoke(app, ["toggle", "t-1"])

        assert result.exit_code == 0
        assert "Completed 'Double cleanse'" in result.stdout
        mock_tasks_api.complete_task.assert_called_once_with("t-1", "user-1")

    def test_reads_and_reports_todays_window(self, wiring, mock_tasks_api):
        done_on: set[date] = set()

        async def complete(task_id, user_id):
            done_on.add(date.today())
            return {}

        async def tasks_for(user_id, on):
            return [make_task("t-1", "Double cleanse", completed=on in done_on)]

        mock_tasks_api.complete_task.side_effect = complete
        mock_tasks_api.tasks_for_date.side_effect = tasks_for

        result = runner.invoke(app, ["toggle", "t-1"])

        assert result.exit_code == 0
        assert "Completed 'Double cleanse'" in result.stdout
        days = {c.args[1] for c in mock_tasks_api.tasks_for_date.call_args_list}
        assert days == {date.today()}

    def test_other_dates_are_not_accepted(self, wiring, mock_tasks_api):
        result = runner.invoke(app, ["toggle", "t-1", "--date", "2020-01-01"])

        assert result.exit_code == 2
        mock_tasks_api.complete_task.assert_not_called()
        mock_tasks_api.uncomplete_task.assert_not_called()

    def test_reopens_completed_task(self, wiring, mock_tasks_api):
        mock_tasks_api.tasks_for_date.side_effect = [
            [make_task("t-1", "Double cleanse", completed=True)],
            [make_task("t-1", "Double cleanse")],
        ]

        result = runner.invoke(app, ["toggle", "t-1"])

        assert result.exit_code == 0
        assert "Reopened 'Double cleanse'" in result.stdout
        mock_tasks_api.uncomplete_task.assert_called_once_with("t-1", "user-1")

    def test_unknown_task(self, wiring, mock_tasks_api):
        result = runner.invoke(app, ["toggle", "nope"])

        assert result.exit_code == 5
        assert "Task 'nope' not found" in result.stdout
        mock_tasks_api.complete_task.assert_not_called()

    def test_load_failure(self, wiring, mock_tasks_api):
        mock_tasks_api.tasks_for_date.side_effect = ConnectivityError("offline")

        result = runner.invoke(app, ["toggle", "t-1"])

        assert result.exit_code == 4
        mock_tasks_api.complete_task.assert_not_called()

    def test_toggle_failure_surfaces(self, wiring, mock_tasks_api):
        mock_tasks_api.tasks_for_date.return_value = [make_task("t-1")]
        mock_tasks_api.complete_task.side_effect = ConnectivityError(
            "Network error: Please check your connection or try again later"
        )

        result = runner.invoke(app, ["toggle", "t-1"])

        assert result.exit_code == 4
        assert "Network error" in result.stdout
        assert mock_tasks_api.tasks_for_date.call_count == 1
