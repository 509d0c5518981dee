"""Tasks module: task manager, listing, lifecycle and statistics."""

from todo_cli.modules.tasks.manager import TaskManager


__all__ = ["TaskManager"]
