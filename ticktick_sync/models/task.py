"""Task model."""

import enum
from datetime import datetime
from typing import Any

from pydantic import Field, field_serializer, field_validator

from .base import WireModel, format_timestamp, parse_timestamp


class TaskPriority(enum.IntEnum):
    """Task priority values used by the server (low -> high)."""

    NONE = 0
    LOW = 1
    MEDIUM = 3
    HIGH = 5


# Sentinel for queries only, never stored on a task
PRIORITY_IGNORE = -1


class TaskStatus(enum.IntEnum):
    """Task status discriminator."""

    NORMAL = 0
    COMPLETED = 2


class TaskRecord(WireModel):
    """
    Task as the server sends and accepts it.

    Жизненный цикл:
        uncreated (id == "") -> created (id от сервера) -> mutated -> deleted (id == "")

    project_name не приходит с сервера: его заполняет клиент по ProjectIndex
    и он никогда не отправляется обратно.
    """

    id: str = ""
    project_id: str = ""
    project_name: str = Field("", exclude=True)

    title: str = ""
    content: str = ""
    desc: str = ""

    # Даты всегда в UTC и не зависят от time_zone
    is_all_day: bool = False
    start_date: datetime | None = None
    due_date: datetime | None = None
    time_zone: str | None = None

    reminders: list[Any] = Field(default_factory=list)
    repeat_flag: str | None = None
    tags: list[str] = Field(default_factory=list)
    priority: int = TaskPriority.NONE
    sort_order: int = 0
    kind: str | None = None
    status: int = TaskStatus.NORMAL

    parent_id: str | None = None
    items: list[dict[str, Any]] = Field(default_factory=list)

    @field_validator("start_date", "due_date", mode="before")
    @classmethod
    def _parse_dates(cls, value: Any) -> datetime | None:
        return parse_timestamp(value)

    @field_validator("priority")
    @classmethod
    def _check_priority(cls, value: int) -> int:
        if value not in {p.value for p in TaskPriority}:
            raise ValueError(f"priority must be one of 0, 1, 3, 5, got {value}")
        return value

    @field_serializer("start_date", "due_date")
    def _format_dates(self, value: datetime | None) -> str | None:
        # None отбрасывается exclude_none, пустые даты на сервер не уходят
        return format_timestamp(value) if value is not None else None

    @property
    def is_created(self) -> bool:
        """Whether the server has assigned an id to this task."""
        return self.id != ""

    @property
    def is_completed(self) -> bool:
        return self.status == TaskStatus.COMPLETED

    def to_wire(self) -> dict[str, Any]:
        """Serialize to the JSON body the server expects."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)

    def __repr__(self) -> str:
        return f"<TaskRecord(id='{self.id}', title='{self.title}', project_id='{self.project_id}')>"
