"""Pure state transition functions for task lifecycle management."""

import logging
from enum import StrEnum

from todo_cli.core.errors import TaskAlreadyCompletedError
from todo_cli.domain.task import Task


logger = logging.getLogger(__name__)


class TaskState(StrEnum):
    """Task lifecycle state, derived from the completed flag."""

    PENDING = "pending"
    COMPLETED = "completed"


# One-directional: there is no reopen.
TRANSITIONS: dict[TaskState, set[TaskState]] = {
    TaskState.PENDING: {TaskState.COMPLETED},
    TaskState.COMPLETED: set(),
}


def state_of(task: Task) -> TaskState:
    """Current lifecycle state of a task."""
    return TaskState.COMPLETED if task.completed else TaskState.PENDING


def can_transition(*, current: TaskState, target: TaskState) -> bool:
    """Check whether the lifecycle allows moving from current to target."""
    return target in TRANSITIONS[current]


def transition_to_completed(task: Task) -> Task:
    """Return a completed copy of a pending task; the input is left untouched.

    Raises:
        TaskAlreadyCompletedError: If the task is already completed
    """
    if not can_transition(current=state_of(task), target=TaskState.COMPLETED):
        raise TaskAlreadyCompletedError(task.id)

    updated = task.model_copy(deep=True)
    updated.complete()
    logger.debug("Transitioned task %s to COMPLETED", task.id)
    return updated
