"""Sync payload schema and sync result."""

from dataclasses import dataclass
from datetime import datetime
from typing import Any

from pydantic import Field

from .base import WireModel
from .project import ProjectGroup, ProjectProfile


class TagProfile(WireModel):
    """Tag entry from the sync payload. Only the name is kept in the cache."""

    name: str


class SyncTaskBean(WireModel):
    """
    Task section of the sync payload.

    Задачи остаются сырыми dict: каждую валидируем отдельно, чтобы
    знать, какая именно запись битая.
    """

    update: list[Any] = Field(default_factory=list)


class SyncPayload(WireModel):
    """
    Response of GET /batch/check/0.

    Пример:
    {
        "inboxId": "inbox123",
        "projectGroups": [{"id": "pg1", "name": "Personal"}],
        "projectProfiles": [{"id": "p1", "name": "Work"}],
        "syncTaskBean": {"update": [{"id": "t1", "projectId": "p1", ...}]},
        "tags": [{"name": "urgent"}]
    }
    """

    inbox_id: str
    project_groups: list[ProjectGroup] = Field(default_factory=list)
    project_profiles: list[ProjectProfile] = Field(default_factory=list)
    sync_task_bean: SyncTaskBean = Field(default_factory=SyncTaskBean)
    tags: list[TagProfile] = Field(default_factory=list)


@dataclass
class SyncResult:
    """Result of a sync operation."""

    synced_at: datetime
    projects_count: int = 0
    tasks_count: int = 0
    tags_count: int = 0
    tasks_skipped: int = 0
