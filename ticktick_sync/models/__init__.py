"""Data models for the TickTick sync client."""

from .base import TIMESTAMP_FORMAT, WireModel, format_timestamp, parse_timestamp, utc_now
from .project import INBOX_ALIAS, ProjectGroup, ProjectIndex, ProjectProfile
from .session import CacheSnapshot, Session, SyncCache
from .sync import SyncPayload, SyncResult, SyncTaskBean, TagProfile
from .task import PRIORITY_IGNORE, TaskPriority, TaskRecord, TaskStatus

__all__ = [
    "WireModel",
    "TIMESTAMP_FORMAT",
    "format_timestamp",
    "parse_timestamp",
    "utc_now",
    "INBOX_ALIAS",
    "ProjectGroup",
    "ProjectProfile",
    "ProjectIndex",
    "TaskRecord",
    "TaskPriority",
    "TaskStatus",
    "PRIORITY_IGNORE",
    "SyncPayload",
    "SyncTaskBean",
    "TagProfile",
    "SyncResult",
    "CacheSnapshot",
    "SyncCache",
    "Session",
]
