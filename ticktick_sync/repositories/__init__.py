"""Repository layer for server data access."""

from .base import BaseRepository
from .sync import SyncRepository
from .task import TaskRepository

__all__ = [
    "BaseRepository",
    "SyncRepository",
    "TaskRepository",
]
