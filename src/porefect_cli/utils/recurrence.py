"""Recurrence utility functions for the Porefect CLI.

Weekdays are indexed Sunday=0 through Saturday=6, matching the server's
``daysOfWeek`` field. Weeks start on Sunday.
"""

from collections.abc import Iterable
from datetime import date, timedelta

from porefect_cli.models import ALL_DAYS, Schedule, Task

DAY_LABELS: tuple[str, ...] = ("Sun", "Mon", "Tue", "Wed", "Thu", "Fri", "Sat")

_DAY_NAMES: dict[str, int] = {
    **{label.lower(): i for i, label in enumerate(DAY_LABELS)},
    "sunday": 0,
    "monday": 1,
    "tuesday": 2,
    "wednesday": 3,
    "thursday": 4,
    "friday": 5,
    "saturday": 6,
}


def occurs_on(task: Task, weekday: int) -> bool:
    """Return True if the task occurs on the given weekday index.

    Daily tasks are not special-cased: the stored day set is trusted, so a
    task with no days occurs on no day.
    """
    return weekday in task.days_of_week


def tasks_for_day(tasks: Iterable[Task], weekday: int) -> list[Task]:
    """Filter tasks down to those occurring on a weekday, keeping their order."""
    return [task for task in tasks if occurs_on(task, weekday)]


def weekday_index(day: date) -> int:
    """Sunday=0 weekday index of a date."""
    return (day.weekday() + 1) % 7


def week_start(day: date) -> date:
    """Return the Sunday that starts the week containing ``day``."""
    return day - timedelta(days=weekday_index(day))


def shift_week(day: date, weeks: int) -> date:
    """Move a date by whole weeks (negative moves backwards)."""
    return day + timedelta(days=7 * weeks)


def week_dates(start: date) -> list[date]:
    """The seven consecutive dates beginning at ``start``."""
    return [start + timedelta(days=offset) for offset in range(7)]


def day_label(weekday: int) -> str:
    """Short label for a weekday index (e.g., 2 -> "Tue")."""
    return DAY_LABELS[weekday]


def parse_days(text: str) -> list[int]:
    """Parse a list of weekdays such as ``"2,4"``, ``"tue,thu"`` or ``"Tue Thu"``.

    Args:
        text: Comma- or space-separated day numbers or names

    Returns:
        Sorted unique weekday indexes

    Raises:
        ValueError: If an entry is neither 0-6 nor a day name
    """
    days: set[int] = set()
    for raw in text.replace(",", " ").split():
        token = raw.strip().lower()
        if token.isdigit():
            value = int(token)
            if not 0 <= value <= 6:
                raise ValueError(f"Day number out of range 0-6: {raw}")
            days.add(value)
        elif token in _DAY_NAMES:
            days.add(_DAY_NAMES[token])
        else:
            raise ValueError(f"Unknown day of week: {raw}")
    return sorted(days)


def describe_days(task: Task) -> str:
    """Human-readable recurrence, e.g. "Every day" or "T, T" for Tue/Thu."""
    if task.schedule is Schedule.DAILY:
        return "Every day"
    return ", ".join(day_label(day)[0] for day in task.days_of_week)


def days_for_schedule(schedule: Schedule, days: Iterable[int]) -> list[int]:
    """Day set to store for a schedule: all seven for daily, the selection otherwise."""
    if schedule is Schedule.DAILY:
        return list(ALL_DAYS)
    return sorted(set(days))
