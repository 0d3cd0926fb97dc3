"""Output formatters for different formats."""

import json
from datetime import date
from typing import Any, Optional

import yaml
from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from porefect_cli.models import Task, TaskType
from porefect_cli.utils.recurrence import day_label, describe_days, weekday_index

console = Console()

STATUS_ICONS = {
    "open": "○",
    "completed": "●",
}


def set_color(enabled: bool) -> None:
    """Turn colour on or off for everything printed through ``console``."""
    console.no_color = not enabled


def format_output(data: Any, output_format: str = "table") -> None:
    """Format and display output based on format."""
    if output_format == "json":
        print(json.dumps(data, indent=2, default=str))
    elif output_format == "yaml":
        print(yaml.dump(data, default_flow_style=False, sort_keys=False))
    else:
        format_table(data)


def format_table(data: Any) -> None:
    """Format data as a table."""
    if not data:
        console.print("[yellow]No data to display[/yellow]")
        return

    if isinstance(data, list):
        if isinstance(data[0], dict):
            format_dict_table(data)
        else:
            for item in data:
                console.print(item)
    elif isinstance(data, dict):
        format_single_item(data)
    else:
        console.print(data)


def _cell(value: Any) -> str:
    if isinstance(value, bool):
        return "✓" if value else "✗"
    if isinstance(value, list):
        return ", ".join(str(v) for v in value)
    if value is None:
        return "-"
    return str(value)


def format_dict_table(items: list[dict]) -> None:
    """Format a list of dictionaries as a table."""
    if not items:
        console.print("[yellow]No items found[/yellow]")
        return

    columns = list(items[0].keys())
    table = Table(show_header=True, header_style="bold magenta")
    for col in columns:
        table.add_column(col.replace("_", " ").title())
    for item in items:
        table.add_row(*(_cell(item.get(col, "")) for col in columns))

    console.print(table)


def format_single_item(item: dict) -> None:
    """Format a single item as key-value pairs."""
    table = Table(show_header=False, box=None)
    table.add_column("Key", style="cyan")
    table.add_column("Value", style="white")

    for key, value in item.items():
        table.add_row(key.replace("_", " ").title(), _cell(value))

    console.print(table)


def format_error(message: str) -> None:
    """Format and display an error message."""
    console.print(f"[bold red]Error:[/bold red] {message}")


def format_success(message: str) -> None:
    """Format and display a success message."""
    console.print(f"[bold green]Success:[/bold green] {message}")


def format_warning(message: str) -> None:
    """Format and display a warning message."""
    console.print(f"[bold yellow]Warning:[/bold yellow] {message}")


def format_info(message: str) -> None:
    """Format and display an info message."""
    console.print(f"[bold blue]Info:[/bold blue] {message}")


# ============================================================================
# Scheduler views
# ============================================================================


def _task_line(task: Task, completed: bool) -> Text:
    icon = STATUS_ICONS["completed" if completed else "open"]
    line = Text()
    line.append(f"{icon} ", style="green" if completed else "dim")
    line.append(task.title, style="strike dim" if completed else "")
    return line


def build_task_list(tasks: list[Task], completions: dict[str, bool]) -> Table:
    """Flat list: one row per task with its recurrence summary."""
    table = Table(show_header=True, header_style="bold magenta")
    table.add_column("ID", style="cyan", no_wrap=True)
    table.add_column("Task")
    table.add_column("Schedule")
    table.add_column("Repeats")
    table.add_column("Time")
    table.add_column("Kind")

    for task in tasks:
        table.add_row(
            task.id,
            _task_line(task, completions.get(task.id, False)),
            task.schedule.value.title(),
            describe_days(task),
            task.time or "-",
            "Routine" if task.type is TaskType.ROUTINE else "Task",
        )
    return table


def build_week_grid(
    cells: list[tuple[date, list[Task]]],
    completions: dict[str, bool],
    today: Optional[date] = None,
) -> Table:
    """Week grid: one column per day, the day's tasks stacked in the cell."""
    start, end = cells[0][0], cells[-1][0]
    table = Table(
        title=f"{start:%B} {start.day} - {end:%B} {end.day}, {end.year}",
        show_header=True,
        show_lines=True,
        expand=True,
    )

    row = []
    for day, day_tasks in cells:
        is_today = day == today
        table.add_column(
            f"{day_label(weekday_index(day))} {day.day}",
            header_style="bold magenta" if is_today else "bold",
            justify="left",
        )
        if not day_tasks:
            row.append(Text("No tasks", style="dim"))
            continue
        cell = Text()
        for i, task in enumerate(day_tasks):
            if i:
                cell.append("\n")
            cell.append_text(_task_line(task, completions.get(task.id, False)))
            if task.time:
                cell.append(f"\n  {task.time}", style="dim")
        row.append(cell)
    table.add_row(*row)
    return table


def render_task_list(
    tasks: list[Task],
    completions: dict[str, bool],
    out: Optional[Console] = None,
) -> None:
    (out or console).print(build_task_list(tasks, completions))


def render_week_grid(
    cells: list[tuple[date, list[Task]]],
    completions: dict[str, bool],
    today: Optional[date] = None,
    out: Optional[Console] = None,
) -> None:
    (out or console).print(build_week_grid(cells, completions, today))


def render_empty(out: Optional[Console] = None) -> None:
    """Shown when the window has no tasks."""
    (out or console).print(
        Panel(
            "[bold]No tasks scheduled[/bold]\n"
            "[dim]Create your first beauty task with[/dim] "
            "[cyan]porefect tasks add[/cyan]",
            border_style="magenta",
            padding=(0, 1),
        )
    )


def render_load_error(message: str, out: Optional[Console] = None) -> None:
    """Shown when the window failed to load; the user can run the command again."""
    (out or console).print(
        Panel(
            f"[bold red]Oops! Something went wrong[/bold red]\n{message}",
            border_style="red",
            padding=(0, 1),
        )
    )
