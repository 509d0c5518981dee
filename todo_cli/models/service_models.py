"""Pydantic models for service layer inputs and return types."""

from enum import StrEnum

from pydantic import BaseModel, Field, computed_field, field_validator

from todo_cli.domain.task import Priority, validate_priority


class StatusFilter(StrEnum):
    """Which completion states a listing includes."""

    ALL = "all"
    COMPLETED = "completed"
    PENDING = "pending"


class SortKey(StrEnum):
    """Listing sort order."""

    ID = "id"
    PRIORITY = "priority"
    DUE = "due"
    CREATED = "created"

    @classmethod
    def parse(cls, raw: "str | SortKey | None") -> "SortKey":
        """Unrecognised or empty values fall back to ID order."""
        if not raw:
            return cls.ID
        try:
            return cls(str(raw).strip().lower())
        except ValueError:
            return cls.ID


class TaskFilter(BaseModel):
    """Options for listing tasks."""

    status: StatusFilter = Field(default=StatusFilter.ALL, description="Completion state restriction")
    priority: Priority | None = Field(default=None, description="Exact priority match")
    search: str | None = Field(default=None, description="Case-insensitive title substring")
    sort_by: SortKey = Field(default=SortKey.ID, description="Sort order")

    @field_validator("priority", mode="before")
    @classmethod
    def validate_priority_token(cls, v: object) -> Priority | None:
        """Accept priority tokens in any case; empty means no restriction."""
        if v is None or v == "":
            return None
        return validate_priority(v)  # type: ignore[arg-type]

    @field_validator("sort_by", mode="before")
    @classmethod
    def validate_sort_key(cls, v: object) -> SortKey:
        """Unknown sort keys fall back to ID order."""
        return SortKey.parse(v)  # type: ignore[arg-type]

    @classmethod
    def from_flags(
        cls,
        *,
        show_completed: bool = False,
        show_pending: bool = False,
        priority: str | Priority | None = None,
        search: str | None = None,
        sort_by: str | SortKey | None = None,
    ) -> "TaskFilter":
        """Build a filter from the two independent completion flags.

        Exactly one flag set restricts the listing to that state; both set or
        both unset show every task.
        """
        if show_completed and not show_pending:
            status = StatusFilter.COMPLETED
        elif show_pending and not show_completed:
            status = StatusFilter.PENDING
        else:
            status = StatusFilter.ALL
        return cls(status=status, priority=priority, search=search, sort_by=sort_by)


class TaskStatistics(BaseModel):
    """Aggregate counts over the whole task collection."""

    total: int = 0
    completed: int = 0
    pending: int = 0
    overdue: int = 0
    high: int = 0
    medium: int = 0
    low: int = 0

    @computed_field  # type: ignore[prop-decorator]
    @property
    def completion_rate(self) -> float | None:
        """Completed share as a percentage, None for an empty collection."""
        if self.total == 0:
            return None
        return self.completed / self.total * 100
