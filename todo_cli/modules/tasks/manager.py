"""Task manager: the only mutation boundary for the task collection."""

import logging
from datetime import datetime
from pathlib import Path

from todo_cli.core.errors import CorruptStorageError, InvalidTaskIdError, TaskNotFoundError
from todo_cli.core.logging import log_with_context, span
from todo_cli.core.storage import FileStorage
from todo_cli.domain.task import Priority, Task, validate_priority, validate_title
from todo_cli.models.service_models import TaskFilter, TaskStatistics
from todo_cli.modules.tasks import analytics, listing, state_machine


logger = logging.getLogger(__name__)


class TaskManager:
    """Owns the in-memory task collection and keeps it in sync with disk.

    Mutations build a new collection, persist it, and only then replace the
    in-memory state. A failed save leaves memory exactly as it was before the call.
    Tasks handed out are copies, so callers cannot change the collection directly.
    """

    def __init__(self, storage: FileStorage | None = None, *, storage_path: str | Path | None = None) -> None:
        self._storage = storage or FileStorage(storage_path)
        self._tasks: list[Task] = []
        self._next_id = 1
        self._load_error: CorruptStorageError | None = None

    @property
    def storage(self) -> FileStorage:
        return self._storage

    @property
    def storage_path(self) -> Path:
        return self._storage.file_path

    @property
    def next_id(self) -> int:
        return self._next_id

    @property
    def tasks(self) -> list[Task]:
        """Snapshot of the collection in storage order."""
        return [task.model_copy(deep=True) for task in self._tasks]

    def get_storage_path(self) -> Path:
        """Return the path of the tasks file."""
        return self._storage.file_path

    def load(self) -> None:
        """Replace the in-memory collection with what is on disk.

        Raises:
            CorruptStorageError: If the file cannot be parsed. The manager is left
                empty and refuses to save until a later load succeeds.
            StorageIOError: If the file or its directory cannot be accessed
        """
        with span("task_manager.load"):
            try:
                result = self._storage.load()
            except CorruptStorageError as e:
                self._tasks = []
                self._next_id = 1
                self._load_error = e
                raise

            self._tasks = list(result.tasks)
            self._next_id = result.next_id
            self._load_error = None
            logger.info("Loaded %d tasks (next_id=%d)", len(self._tasks), self._next_id)

    def _commit(self, tasks: list[Task], next_id: int) -> None:
        if self._load_error is not None:
            raise CorruptStorageError(
                self._load_error.path,
                "refusing to overwrite a tasks file that failed to load",
            ) from self._load_error
        self._storage.save(tasks, next_id)
        self._tasks = tasks
        self._next_id = next_id

    def add_task(
        self,
        title: str,
        priority: str | Priority | None = None,
        due_date: datetime | None = None,
    ) -> Task:
        """Create a task, persist the collection and return the new task.

        Args:
            title: Task title; surrounding whitespace is trimmed
            priority: low, medium or high (default: medium)
            due_date: Optional due date

        Returns:
            The created task with its assigned ID

        Raises:
            TaskValidationError: If the title is empty or the priority invalid
            StorageIOError: If the collection cannot be saved
        """
        with span("task_manager.add_task"):
            clean_title = validate_title(title)
            resolved_priority = validate_priority(priority) if priority else Priority.MEDIUM

            task = Task.create(self._next_id, clean_title)
            if resolved_priority != task.priority:
                task.set_priority(resolved_priority)
            if due_date is not None:
                task.set_due_date(due_date)

            self._commit([*self._tasks, task], self._next_id + 1)

            log_with_context(
                logger,
                "info",
                "Task added",
                task_id=task.id,
                priority=task.priority.value,
                has_due_date=task.due_date is not None,
            )
            return task.model_copy(deep=True)

    def _find(self, task_id: int) -> Task:
        if task_id <= 0:
            raise InvalidTaskIdError(task_id)

        for task in self._tasks:
            if task.id == task_id:
                return task

        raise TaskNotFoundError(task_id)

    def get_task(self, task_id: int) -> Task:
        """Get a copy of a task by ID; changing it does not change the collection.

        Raises:
            InvalidTaskIdError: If task_id is not positive
            TaskNotFoundError: If no task has this ID
        """
        return self._find(task_id).model_copy(deep=True)

    def complete_task(self, task_id: int) -> Task:
        """Mark a task as completed and persist.

        Raises:
            InvalidTaskIdError: If task_id is not positive
            TaskNotFoundError: If no task has this ID
            TaskAlreadyCompletedError: If the task is already done
            StorageIOError: If the collection cannot be saved
        """
        with span("task_manager.complete_task", task_id=task_id):
            current = self._find(task_id)
            updated = state_machine.transition_to_completed(current)

            self._commit(
                [updated if task.id == task_id else task for task in self._tasks],
                self._next_id,
            )

            log_with_context(logger, "info", "Task completed", task_id=task_id)
            return updated.model_copy(deep=True)

    def delete_task(self, task_id: int) -> Task:
        """Remove a task and persist; IDs are never renumbered or reused.

        Returns:
            Snapshot of the deleted task

        Raises:
            InvalidTaskIdError: If task_id is not positive
            TaskNotFoundError: If no task has this ID
            StorageIOError: If the collection cannot be saved
        """
        with span("task_manager.delete_task", task_id=task_id):
            deleted = self._find(task_id)

            self._commit([task for task in self._tasks if task is not deleted], self._next_id)

            log_with_context(logger, "info", "Task deleted", task_id=task_id)
            return deleted.model_copy(deep=True)

    def list_tasks(self, task_filter: TaskFilter | None = None) -> list[Task]:
        """Return the filtered, sorted tasks without touching storage."""
        tasks = [task.model_copy(deep=True) for task in listing.filter_tasks(self._tasks, task_filter)]
        logger.debug("Listed %d of %d tasks", len(tasks), len(self._tasks))
        return tasks

    def get_stats(self, *, now: datetime | None = None) -> TaskStatistics:
        """Statistics over the whole collection."""
        return analytics.calculate_statistics(self._tasks, now=now)

    def backup_tasks(self) -> Path:
        """Copy the tasks file to its .backup sibling.

        Raises:
            NoStorageFileError: If nothing has been saved yet
            StorageIOError: If the copy fails
        """
        return self._storage.backup()
