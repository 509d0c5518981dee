"""JSON file storage for the task collection."""

import logging
import os
import shutil
import tempfile
from pathlib import Path
from typing import NamedTuple

from pydantic import BaseModel, Field, ValidationError, field_validator, model_validator

from todo_cli.core.config import constants, default_storage_path
from todo_cli.core.errors import CorruptStorageError, NoStorageFileError, StorageIOError
from todo_cli.core.logging import log_with_context, span
from todo_cli.domain.task import Task


logger = logging.getLogger(__name__)


class TaskDocument(BaseModel):
    """Shape of the persisted tasks file."""

    tasks: list[Task] = Field(default_factory=list, description="Tasks in storage order")
    next_id: int = Field(default=0, ge=0, description="Next ID to allocate (0 means unknown)")
    last_update: str = Field(default="", description="Advisory marker: user who last wrote the file")

    @field_validator("tasks", mode="before")
    @classmethod
    def validate_tasks_present(cls, v: object) -> object:
        """A null task list is an empty one."""
        return [] if v is None else v

    @model_validator(mode="after")
    def validate_unique_ids(self) -> "TaskDocument":
        """Task IDs must be unique within the collection."""
        seen: set[int] = set()
        for task in self.tasks:
            if task.id in seen:
                msg = f"duplicate task ID: {task.id}"
                raise ValueError(msg)
            seen.add(task.id)
        return self


class LoadResult(NamedTuple):
    """Tasks read from disk together with the ID watermark."""

    tasks: list[Task]
    next_id: int


def next_id_after(tasks: list[Task]) -> int:
    """Smallest ID greater than every ID in use."""
    return max((task.id for task in tasks), default=0) + 1


def current_user() -> str:
    """OS user name for the advisory last_update marker."""
    return os.environ.get("USER") or os.environ.get("USERNAME") or ""


class FileStorage:
    """Reads and writes the whole task collection as one JSON document.

    Every save is a full rewrite. The document is written to a temporary file in
    the same directory and renamed over the target, so a failed write leaves the
    previous file intact.
    """

    def __init__(self, file_path: str | Path | None = None) -> None:
        self._file_path = Path(file_path) if file_path else default_storage_path()

    @property
    def file_path(self) -> Path:
        return self._file_path

    @property
    def backup_path(self) -> Path:
        return self._file_path.with_name(self._file_path.name + constants.BACKUP_SUFFIX)

    def exists(self) -> bool:
        """Check if the storage file exists."""
        return self._file_path.exists()

    def _ensure_dir(self) -> None:
        directory = self._file_path.parent
        try:
            directory.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise StorageIOError(directory, "create directory") from e

    def load(self) -> LoadResult:
        """Load tasks from the JSON file.

        A missing or empty file is a first run and yields no tasks with next_id 1.

        Raises:
            StorageIOError: If the directory cannot be created or the file read
            CorruptStorageError: If the file content is not a valid tasks document
        """
        with span("file_storage.load", path=str(self._file_path)):
            self._ensure_dir()

            if not self._file_path.exists():
                logger.debug("No tasks file at %s, starting empty", self._file_path)
                return LoadResult(tasks=[], next_id=1)

            try:
                raw = self._file_path.read_text(encoding="utf-8")
            except UnicodeDecodeError as e:
                raise CorruptStorageError(self._file_path, "file is not valid UTF-8") from e
            except OSError as e:
                raise StorageIOError(self._file_path, "read file") from e

            if not raw.strip():
                return LoadResult(tasks=[], next_id=1)

            try:
                document = TaskDocument.model_validate_json(raw)
            except ValidationError as e:
                raise CorruptStorageError(self._file_path, _summarize(e)) from e

            next_id = document.next_id
            floor = next_id_after(document.tasks)
            if next_id < floor:
                if next_id:
                    log_with_context(
                        logger,
                        "warning",
                        "Repairing stale next_id watermark",
                        path=str(self._file_path),
                        stored_next_id=next_id,
                        repaired_next_id=floor,
                    )
                next_id = floor

            logger.debug("Loaded %d tasks from %s (next_id=%d)", len(document.tasks), self._file_path, next_id)
            return LoadResult(tasks=document.tasks, next_id=next_id)

    def save(self, tasks: list[Task], next_id: int) -> None:
        """Overwrite the tasks file with the full collection.

        Raises:
            StorageIOError: If the directory cannot be created or the file written
        """
        with span("file_storage.save", path=str(self._file_path), task_count=len(tasks)):
            self._ensure_dir()

            document = TaskDocument(tasks=tasks, next_id=next_id, last_update=current_user())
            payload = document.model_dump_json(indent=constants.JSON_INDENT, exclude_none=True)

            tmp_name: str | None = None
            try:
                with tempfile.NamedTemporaryFile(
                    "w",
                    encoding="utf-8",
                    dir=self._file_path.parent,
                    prefix=f".{self._file_path.name}.",
                    suffix=".tmp",
                    delete=False,
                ) as handle:
                    tmp_name = handle.name
                    handle.write(payload)
                os.replace(tmp_name, self._file_path)
            except OSError as e:
                if tmp_name is not None:
                    Path(tmp_name).unlink(missing_ok=True)
                raise StorageIOError(self._file_path, "write file") from e

            logger.debug("Saved %d tasks to %s", len(tasks), self._file_path)

    def backup(self) -> Path:
        """Copy the tasks file byte-for-byte to its .backup sibling.

        Returns:
            Path of the backup file

        Raises:
            NoStorageFileError: If no tasks file exists yet
            StorageIOError: If the copy fails
        """
        with span("file_storage.backup", path=str(self._file_path)):
            if not self.exists():
                raise NoStorageFileError(self._file_path)

            try:
                shutil.copyfile(self._file_path, self.backup_path)
            except OSError as e:
                raise StorageIOError(self.backup_path, "create backup") from e

            logger.info("Created backup at: %s", self.backup_path)
            return self.backup_path


def _summarize(error: ValidationError) -> str:
    first = error.errors()[0]
    location = ".".join(str(part) for part in first["loc"])
    return f"{first['msg']} at {location}" if location else first["msg"]
