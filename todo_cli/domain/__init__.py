"""Domain models and validators."""

from todo_cli.domain.task import (
    Priority,
    Task,
    current_time,
    is_valid_priority,
    validate_priority,
    validate_title,
)


__all__ = [
    "Priority",
    "Task",
    "current_time",
    "is_valid_priority",
    "validate_priority",
    "validate_title",
]
