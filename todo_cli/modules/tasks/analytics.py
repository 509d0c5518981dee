"""Statistics over the task collection.

Counts always cover the entire collection; listing filters never apply here.
Overdue counts only pending tasks, so overdue <= pending holds by construction.
"""

import logging
from collections.abc import Iterable
from datetime import datetime

from todo_cli.domain.task import Priority, Task, current_time
from todo_cli.models.service_models import TaskStatistics


logger = logging.getLogger(__name__)


def calculate_statistics(tasks: Iterable[Task], *, now: datetime | None = None) -> TaskStatistics:
    """Aggregate completion, overdue and per-priority counts.

    Args:
        tasks: Every task in the collection
        now: Reference time for the overdue check (default: current time)

    Returns:
        TaskStatistics with counts and completion rate
    """
    reference = now or current_time()
    stats = TaskStatistics()
    per_priority = {priority: 0 for priority in Priority}

    for task in tasks:
        stats.total += 1
        if task.completed:
            stats.completed += 1
        else:
            stats.pending += 1
            if task.is_overdue(reference):
                stats.overdue += 1
        per_priority[task.priority] += 1

    stats.high = per_priority[Priority.HIGH]
    stats.medium = per_priority[Priority.MEDIUM]
    stats.low = per_priority[Priority.LOW]

    logger.debug("Calculated statistics: %s", stats.model_dump())
    return stats
