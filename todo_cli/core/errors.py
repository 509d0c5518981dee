"""Exception taxonomy and user-facing error classification."""

from enum import Enum
from pathlib import Path

from pydantic import BaseModel


class TodoError(Exception):
    """Base class for every error raised by todo-cli."""


class TaskValidationError(TodoError, ValueError):
    """Invalid input rejected before any mutation or I/O (empty title, bad priority).

    Subclasses ValueError so pydantic validators can raise it directly.
    """


class InvalidTaskIdError(TodoError):
    """Task IDs must be positive integers."""

    def __init__(self, task_id: int) -> None:
        self.task_id = task_id
        super().__init__(f"invalid task ID: {task_id}")


class TaskNotFoundError(TodoError):
    """No task with the requested ID exists."""

    def __init__(self, task_id: int) -> None:
        self.task_id = task_id
        super().__init__(f"task not found: {task_id}")


class TaskAlreadyCompletedError(TodoError):
    """Completing a task twice is a usage error."""

    def __init__(self, task_id: int) -> None:
        self.task_id = task_id
        super().__init__(f"task {task_id} is already completed")


class CorruptStorageError(TodoError):
    """The storage document exists but could not be parsed."""

    def __init__(self, path: Path, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"cannot parse tasks file {path}: {reason}")


class StorageIOError(TodoError):
    """Directory creation, read, write or copy failure on the storage file."""

    def __init__(self, path: Path, action: str) -> None:
        self.path = path
        self.action = action
        super().__init__(f"failed to {action}: {path}")


class NoStorageFileError(StorageIOError):
    """Backup requested before any tasks file was written."""

    def __init__(self, path: Path) -> None:
        super().__init__(path, "back up tasks file, no tasks file exists yet")


class DateParseError(TodoError):
    """Due date typed at the command line is not in a supported format."""

    def __init__(self, value: str) -> None:
        self.value = value
        super().__init__(f"invalid due date format: {value!r}")


class ErrorSeverity(Enum):
    """Severity levels for errors."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"


class ErrorCode:
    """Error codes for specific error conditions."""

    # Input errors
    ERR_VALIDATION = "ERR_VALIDATION"
    ERR_INVALID_DATE = "ERR_INVALID_DATE"

    # Lookup errors
    ERR_INVALID_TASK_ID = "ERR_INVALID_TASK_ID"
    ERR_TASK_NOT_FOUND = "ERR_TASK_NOT_FOUND"

    # Business rules
    ERR_ALREADY_COMPLETED = "ERR_ALREADY_COMPLETED"

    # Storage errors
    ERR_CORRUPT_STORAGE = "ERR_CORRUPT_STORAGE"
    ERR_NO_STORAGE_FILE = "ERR_NO_STORAGE_FILE"
    ERR_STORAGE_IO = "ERR_STORAGE_IO"

    # Generic errors
    ERR_UNKNOWN = "ERR_UNKNOWN"


class ErrorResponse(BaseModel):
    """Structured error response with user-friendly messaging."""

    code: str
    message: str
    suggestion: str
    severity: ErrorSeverity


def classify_error_with_response(exception: Exception) -> ErrorResponse:  # noqa: PLR0911
    """Classify an error and return a structured response with recovery suggestions.

    Args:
        exception: The exception raised while running a command

    Returns:
        ErrorResponse with code, message, suggestion, and severity
    """
    if isinstance(exception, TaskValidationError):
        return ErrorResponse(
            code=ErrorCode.ERR_VALIDATION,
            message=str(exception),
            suggestion="Titles must not be empty; priority must be one of: low, medium, high.",
            severity=ErrorSeverity.LOW,
        )

    if isinstance(exception, DateParseError):
        return ErrorResponse(
            code=ErrorCode.ERR_INVALID_DATE,
            message=str(exception),
            suggestion="Use YYYY-MM-DD or YYYY-MM-DD HH:MM.",
            severity=ErrorSeverity.LOW,
        )

    if isinstance(exception, InvalidTaskIdError):
        return ErrorResponse(
            code=ErrorCode.ERR_INVALID_TASK_ID,
            message=str(exception),
            suggestion="Task IDs are positive numbers. Run `todo list` to see them.",
            severity=ErrorSeverity.LOW,
        )

    if isinstance(exception, TaskNotFoundError):
        return ErrorResponse(
            code=ErrorCode.ERR_TASK_NOT_FOUND,
            message=str(exception),
            suggestion="Run `todo list` to see current task IDs.",
            severity=ErrorSeverity.LOW,
        )

    if isinstance(exception, TaskAlreadyCompletedError):
        return ErrorResponse(
            code=ErrorCode.ERR_ALREADY_COMPLETED,
            message=str(exception),
            suggestion="Run `todo list --pending` to see tasks that are still open.",
            severity=ErrorSeverity.LOW,
        )

    if isinstance(exception, CorruptStorageError):
        return ErrorResponse(
            code=ErrorCode.ERR_CORRUPT_STORAGE,
            message=str(exception),
            suggestion="Fix the file by hand or restore it from the .backup copy.",
            severity=ErrorSeverity.HIGH,
        )

    if isinstance(exception, NoStorageFileError):
        return ErrorResponse(
            code=ErrorCode.ERR_NO_STORAGE_FILE,
            message=str(exception),
            suggestion="Add a task first with `todo add`.",
            severity=ErrorSeverity.LOW,
        )

    if isinstance(exception, StorageIOError):
        cause = exception.__cause__
        detail = f" ({cause})" if cause else ""
        return ErrorResponse(
            code=ErrorCode.ERR_STORAGE_IO,
            message=f"{exception}{detail}",
            suggestion="Check that the storage directory exists and is writable, or pass --storage.",
            severity=ErrorSeverity.HIGH,
        )

    return ErrorResponse(
        code=ErrorCode.ERR_UNKNOWN,
        message="An unexpected error occurred.",
        suggestion="Run again with --verbose for details.",
        severity=ErrorSeverity.CRITICAL,
    )
