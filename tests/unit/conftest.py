"""Pytest configuration and fixtures for unit tests."""

import pytest

from todo_cli.domain.task import Priority, Task
from todo_cli.modules.tasks import TaskManager


@pytest.fixture
def make_task():
    """Factory for detached tasks with sensible defaults."""

    def factory(task_id: int = 1, title: str = "Task", **fields) -> Task:
        task = Task.create(task_id, title)
        return task.model_copy(update=fields) if fields else task

    return factory


@pytest.fixture
def populated_manager(manager: TaskManager) -> TaskManager:
    """Manager holding three tasks: 1 low, 2 high, 3 medium."""
    manager.add_task("Write report", Priority.LOW)
    manager.add_task("Fix login bug", Priority.HIGH)
    manager.add_task("Buy milk", Priority.MEDIUM)
    return manager
