"""CSV and plain-text exporters.

Pure formatters over an already-listed sequence of tasks; nothing here feeds
back into the task manager.
"""

import csv
import logging
from collections.abc import Sequence
from datetime import datetime
from enum import StrEnum
from pathlib import Path

from todo_cli.core.config import constants
from todo_cli.core.errors import StorageIOError
from todo_cli.domain.task import Task


logger = logging.getLogger(__name__)

CSV_HEADER = ["ID", "Title", "Completed", "Priority", "Due Date", "Created At", "Updated At"]


class ExportFormat(StrEnum):
    """Supported export formats."""

    CSV = "csv"
    TXT = "txt"

    @property
    def default_file(self) -> str:
        if self is ExportFormat.CSV:
            return constants.DEFAULT_CSV_FILE
        return constants.DEFAULT_TXT_FILE


def _timestamp(value: datetime | None) -> str:
    return value.strftime(constants.TIMESTAMP_FORMAT) if value is not None else ""


def csv_rows(tasks: Sequence[Task]) -> list[list[str]]:
    """Header plus one row per task."""
    rows = [CSV_HEADER]
    for task in tasks:
        rows.append(
            [
                str(task.id),
                task.title,
                "true" if task.completed else "false",
                task.priority.value,
                _timestamp(task.due_date),
                _timestamp(task.created_at),
                _timestamp(task.updated_at),
            ]
        )
    return rows


def render_text(tasks: Sequence[Task]) -> str:
    """Plain-text report with one block per task."""
    lines = ["Todo List Export", "================", "", f"Total tasks: {len(tasks)}", ""]
    for task in tasks:
        lines.append(f"[{task.id}] {task.title}")
        lines.append(f"    Status: {'COMPLETED' if task.completed else 'PENDING'}")
        lines.append(f"    Priority: {task.priority.value.upper()}")
        if task.due_date is not None:
            lines.append(f"    Due: {task.due_date.strftime(constants.DATETIME_FORMAT)}")
        lines.append(f"    Created: {task.created_at.strftime(constants.DATETIME_FORMAT)}")
        if task.completed:
            lines.append(f"    Completed: {task.updated_at.strftime(constants.DATETIME_FORMAT)}")
        lines.append("")
    return "\n".join(lines) + "\n"


def export_csv(tasks: Sequence[Task], path: str | Path) -> int:
    """Write tasks as CSV and return how many were written.

    Raises:
        StorageIOError: If the file cannot be written
    """
    target = Path(path)
    try:
        with target.open("w", newline="", encoding="utf-8") as handle:
            csv.writer(handle).writerows(csv_rows(tasks))
    except OSError as e:
        raise StorageIOError(target, "write export file") from e
    logger.info("Exported %d tasks to %s (csv)", len(tasks), target)
    return len(tasks)


def export_txt(tasks: Sequence[Task], path: str | Path) -> int:
    """Write tasks as a plain-text report and return how many were written.

    Raises:
        StorageIOError: If the file cannot be written
    """
    target = Path(path)
    try:
        target.write_text(render_text(tasks), encoding="utf-8")
    except OSError as e:
        raise StorageIOError(target, "write export file") from e
    logger.info("Exported %d tasks to %s (txt)", len(tasks), target)
    return len(tasks)


def export_tasks(tasks: Sequence[Task], *, export_format: ExportFormat, path: str | Path | None = None) -> Path:
    """Dispatch to the writer for export_format; returns the file written."""
    target = Path(path) if path else Path(export_format.default_file)
    if export_format is ExportFormat.CSV:
        export_csv(tasks, target)
    else:
        export_txt(tasks, target)
    return target
