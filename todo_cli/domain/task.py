"""Task domain model, priority enum and shared validators."""

from datetime import datetime
from enum import StrEnum

from pydantic import BaseModel, ConfigDict, Field, field_validator

from todo_cli.core.errors import TaskValidationError


class Priority(StrEnum):
    """Task priority level, serialised as a lowercase token."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"

    @property
    def rank(self) -> int:
        """Sort weight: higher is more urgent."""
        return _PRIORITY_RANK[self]


_PRIORITY_RANK = {Priority.LOW: 1, Priority.MEDIUM: 2, Priority.HIGH: 3}

VALID_PRIORITIES = ", ".join(p.value for p in Priority)


def current_time() -> datetime:
    """Timezone-aware local now."""
    return datetime.now().astimezone()


def ensure_aware(value: datetime) -> datetime:
    """Interpret naive datetimes in the local timezone."""
    if value.tzinfo is None:
        return value.astimezone()
    return value


def is_valid_priority(value: str | Priority) -> bool:
    """Check if priority is one of: low, medium, high."""
    try:
        validate_priority(value)
    except TaskValidationError:
        return False
    return True


def validate_priority(value: str | Priority) -> Priority:
    """Return the Priority for a token, raising TaskValidationError otherwise."""
    if isinstance(value, Priority):
        return value
    token = str(value).strip().lower()
    try:
        return Priority(token)
    except ValueError:
        msg = f"invalid priority: {value!r} (valid options: {VALID_PRIORITIES})"
        raise TaskValidationError(msg) from None


def validate_title(value: str) -> str:
    """Trim a title and reject it when nothing is left."""
    title = value.strip()
    if not title:
        raise TaskValidationError("task title cannot be empty")
    return title


class Task(BaseModel):
    """A single todo item."""

    model_config = ConfigDict(validate_assignment=True)

    id: int = Field(..., gt=0, frozen=True, description="Unique task ID, never reused")
    title: str = Field(..., description="Task title (trimmed, non-empty)")
    completed: bool = Field(default=False, description="Whether the task is done")
    due_date: datetime | None = Field(default=None, description="Optional due date")
    priority: Priority = Field(default=Priority.MEDIUM, description="low, medium or high")
    created_at: datetime = Field(default_factory=current_time, description="Creation timestamp")
    updated_at: datetime = Field(default_factory=current_time, description="Last mutation timestamp")

    @field_validator("title")
    @classmethod
    def validate_title_usable(cls, v: str) -> str:
        """Titles are stored trimmed and must not be empty."""
        return validate_title(v)

    @field_validator("due_date", "created_at", "updated_at")
    @classmethod
    def validate_timezone(cls, v: datetime | None) -> datetime | None:
        """Store every timestamp timezone-aware."""
        return ensure_aware(v) if v is not None else None

    @classmethod
    def create(cls, task_id: int, title: str) -> "Task":
        """Build a new pending, medium-priority task stamped with the current time."""
        now = current_time()
        return cls(id=task_id, title=validate_title(title), created_at=now, updated_at=now)

    def complete(self) -> None:
        """Mark the task as completed."""
        self.completed = True
        self._touch()

    def set_priority(self, priority: str | Priority) -> None:
        """Change the priority after validating it."""
        self.priority = validate_priority(priority)
        self._touch()

    def set_due_date(self, due_date: datetime) -> None:
        """Set the due date."""
        self.due_date = due_date
        self._touch()

    def is_overdue(self, now: datetime | None = None) -> bool:
        """True when a pending task's due date lies strictly in the past."""
        if self.due_date is None or self.completed:
            return False
        reference = ensure_aware(now) if now is not None else current_time()
        return self.due_date < reference

    def _touch(self) -> None:
        # Clock adjustments must never put updated_at before created_at.
        self.updated_at = max(current_time(), self.created_at)
