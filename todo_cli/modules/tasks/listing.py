"""Filtering and sorting for task listings.

Every function here is a pure read: it returns a new list and never mutates the
tasks it is given.
"""

from collections.abc import Iterable

from todo_cli.domain.task import Task
from todo_cli.models.service_models import SortKey, StatusFilter, TaskFilter


def matches(task: Task, task_filter: TaskFilter) -> bool:
    """Check a single task against every active filter."""
    if task_filter.status == StatusFilter.COMPLETED and not task.completed:
        return False
    if task_filter.status == StatusFilter.PENDING and task.completed:
        return False

    if task_filter.priority is not None and task.priority != task_filter.priority:
        return False

    if task_filter.search and task_filter.search.lower() not in task.title.lower():
        return False

    return True


def _due_key(task: Task) -> tuple:
    # Dated tasks first by due date; undated ones after them, by id.
    if task.due_date is None:
        return (1, task.id)
    return (0, task.due_date)


def sort_tasks(tasks: Iterable[Task], sort_by: SortKey | str | None = SortKey.ID) -> list[Task]:
    """Return the tasks ordered by the requested key.

    Python's sort is stable, so equal priorities, due dates and creation times
    keep their storage order.
    """
    key = SortKey.parse(sort_by)
    items = list(tasks)

    if key == SortKey.PRIORITY:
        return sorted(items, key=lambda t: -t.priority.rank)
    if key == SortKey.DUE:
        return sorted(items, key=_due_key)
    if key == SortKey.CREATED:
        return sorted(items, key=lambda t: t.created_at)
    return sorted(items, key=lambda t: t.id)


def filter_tasks(tasks: Iterable[Task], task_filter: TaskFilter | None = None) -> list[Task]:
    """Apply status, priority and search filters, then sort."""
    task_filter = task_filter or TaskFilter()
    selected = [task for task in tasks if matches(task, task_filter)]
    return sort_tasks(selected, task_filter.sort_by)
