"""Message templates for terminal output.

All user-facing strings printed by the CLI and the interactive menu are built
here so wording and layout can change in one place.
"""

from datetime import datetime
from pathlib import Path

from todo_cli.core.config import constants
from todo_cli.core.errors import ErrorResponse
from todo_cli.domain.task import Task
from todo_cli.interface import theme
from todo_cli.models.service_models import TaskStatistics


def _rule(width: int = constants.RULE_WIDTH) -> str:
    return "─" * width


def status_icon(task: Task, *, now: datetime | None = None) -> str:
    if task.completed:
        return "✅"
    if task.is_overdue(now):
        return "\U0001f534"
    return "⭕"


def task_row(task: Task, *, now: datetime | None = None) -> str:
    """Two-line listing entry: status, id, title, priority, due date, then dates."""
    title = f"✓ {task.title}" if task.completed else task.title
    title_style = theme.MUTED_COLOR if task.completed else ""
    id_label = f"[{task.id}]"
    padded_title = title.ljust(constants.TITLE_COLUMN_WIDTH)
    priority_label = theme.color(f" {task.priority.value.upper()}", theme.PRIORITY_COLOR[task.priority])
    line = f"{status_icon(task, now=now)} {id_label:<6} {theme.color(padded_title, title_style)}{priority_label}"

    if task.due_date is not None:
        due = task.due_date.strftime(constants.DATE_FORMAT)
        if task.is_overdue(now):
            line += theme.color(f" (DUE: {due})", theme.OVERDUE_COLOR)
        else:
            line += theme.color(f" (Due: {due})", theme.DUE_COLOR)

    details = f"       Created: {task.created_at.strftime(constants.DISPLAY_DATE_FORMAT)}"
    if task.completed:
        details += f" | Completed: {task.updated_at.strftime(constants.DISPLAY_DATE_FORMAT)}"

    return f"{line}\n{theme.color(details, theme.MUTED_COLOR)}\n"


def task_list(tasks: list[Task], *, now: datetime | None = None) -> str:
    rows = "\n".join(task_row(task, now=now) for task in tasks)
    return f"\n\U0001f4cb Todo List ({len(tasks)} tasks)\n{_rule()}\n{rows}"


def no_tasks_found() -> str:
    return "\U0001f4cb No tasks found matching your criteria."


def task_details(task: Task, *, indent: str = "   ") -> str:
    lines = [
        f"{indent}ID: {task.id}",
        f"{indent}Title: {task.title}",
        f"{indent}Status: {'Completed' if task.completed else 'Pending'}",
        f"{indent}Priority: {task.priority.value}",
    ]
    if task.due_date is not None:
        lines.append(f"{indent}Due: {task.due_date.strftime(constants.DATETIME_FORMAT)}")
    lines.append(f"{indent}Created: {task.created_at.strftime(constants.TIMESTAMP_FORMAT)}")
    lines.append(f"{indent}Updated: {task.updated_at.strftime(constants.TIMESTAMP_FORMAT)}")
    return "\n".join(lines)


def task_added(task: Task) -> str:
    lines = [
        "✅ Task added successfully!",
        f"   ID: {task.id}",
        f"   Title: {task.title}",
        f"   Priority: {task.priority.value}",
    ]
    if task.due_date is not None:
        lines.append(f"   Due: {task.due_date.strftime(constants.DATETIME_FORMAT)}")
    return "\n".join(lines)


def task_completed(task: Task) -> str:
    return (
        "✅ Task completed successfully!\n"
        f"   ID: {task.id}\n"
        f"   Title: {task.title}\n"
        f"   Completed at: {task.updated_at.strftime(constants.TIMESTAMP_FORMAT)}"
    )


def task_deleted(task: Task) -> str:
    return f"\U0001f5d1️  Task deleted successfully!\n   ID: {task.id}\n   Title: {task.title}"


def delete_confirmation(task: Task) -> str:
    return (
        "⚠️  Are you sure you want to delete this task?\n"
        f"   ID: {task.id}\n"
        f"   Title: {task.title}\n"
        f"   Status: {'Completed' if task.completed else 'Pending'}\n"
        "\nType 'yes' to confirm deletion: "
    )


def deletion_cancelled() -> str:
    return "❌ Deletion cancelled."


def backup_created(*, backup_path: Path) -> str:
    return f"\U0001f4be Backup created successfully!\n   Location: {backup_path}"


def export_finished(*, path: Path, count: int) -> str:
    return f"\U0001f4c4 Tasks exported to {path} ({count} tasks)"


def progress_bar(rate: float, *, length: int = constants.PROGRESS_BAR_LENGTH) -> str:
    """Completion bar colored green, yellow or red by rate."""
    filled = int(rate / 100 * length)
    bar = f"[{'█' * filled}{'░' * (length - filled)}]"
    if rate >= constants.PROGRESS_GOOD_PERCENT:
        return theme.color(bar, theme.GREEN)
    if rate >= constants.PROGRESS_FAIR_PERCENT:
        return theme.color(bar, theme.YELLOW)
    return theme.color(bar, theme.RED)


def statistics(stats: TaskStatistics, *, storage_path: Path, show_bar: bool = False) -> str:
    lines = [
        "\n\U0001f4ca Task Statistics",
        _rule(30),
        f"Total tasks:      {stats.total}",
        f"Completed:        {stats.completed}",
        f"Pending:          {stats.pending}",
        f"Overdue:          {stats.overdue}",
        "",
        "By Priority:",
        theme.color(f"  High:           {stats.high}", theme.RED),
        theme.color(f"  Medium:         {stats.medium}", theme.YELLOW),
        theme.color(f"  Low:            {stats.low}", theme.GREEN),
    ]

    if stats.completion_rate is not None:
        lines.append(f"\nCompletion rate:  {stats.completion_rate:.1f}%")
        if show_bar:
            lines.append(f"                  {progress_bar(stats.completion_rate)}")

    lines.append(f"\nStorage location: {storage_path}\n")
    return "\n".join(lines)


def load_warning(error: Exception) -> str:
    return f"Warning: Failed to load tasks: {error}"


def error_message(response: ErrorResponse) -> str:
    return f"Error: {response.message}\n{response.suggestion}"


def banner(title: str) -> str:
    width = constants.RULE_WIDTH
    return theme.color(
        f"╔{'═' * width}╗\n║{title:^{width}}║\n╚{'═' * width}╝",
        theme.HEADER_COLOR,
    )


def main_menu() -> str:
    options = [
        "1. View All Tasks",
        "2. Add New Task",
        "3. Complete Task",
        "4. Delete Task",
        "5. View Statistics",
        "6. Export Tasks",
        "7. Backup Tasks",
        "8. Exit (or press 'q')",
    ]
    body = "\n".join(f"  {option}" for option in options)
    return (
        f"{_rule(62)}\n"
        f"{theme.color('  MAIN MENU', theme.GREEN, theme.BOLD)}\n"
        f"{_rule(62)}\n"
        f"{body}\n\n"
        "  Type 'c' to clear screen\n"
        f"{_rule(62)}"
    )
