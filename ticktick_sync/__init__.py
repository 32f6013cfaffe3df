"""Async client for the TickTick / Dida365 batch-sync API."""

from .client import TickTickClient
from .core.errors import (
    AuthenticationError,
    ChildNotCreatedError,
    ConsistencyError,
    EmptyTaskIdError,
    NotAuthenticatedError,
    ParentNotCreatedError,
    PreconditionError,
    ProjectNotFoundError,
    ProtocolError,
    SyncPayloadError,
    TaskAlreadyCreatedError,
    TaskNotCreatedError,
    TickTickError,
    TransportError,
    UnknownServerError,
)
from .models import PRIORITY_IGNORE, ProjectIndex, SyncResult, TaskPriority, TaskRecord, TaskStatus

__version__ = "1.0.0"

__all__ = [
    "TickTickClient",
    "TaskRecord",
    "TaskPriority",
    "TaskStatus",
    "PRIORITY_IGNORE",
    "ProjectIndex",
    "SyncResult",
    "TickTickError",
    "TransportError",
    "ProtocolError",
    "SyncPayloadError",
    "AuthenticationError",
    "PreconditionError",
    "TaskAlreadyCreatedError",
    "TaskNotCreatedError",
    "EmptyTaskIdError",
    "ParentNotCreatedError",
    "ChildNotCreatedError",
    "ProjectNotFoundError",
    "NotAuthenticatedError",
    "ConsistencyError",
    "UnknownServerError",
]
