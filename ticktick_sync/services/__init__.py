"""Service layer with the client workflows."""

from .auth import AuthService
from .query import TaskQueryService
from .relation import RelationService
from .sync import SyncService

__all__ = [
    "AuthService",
    "SyncService",
    "TaskQueryService",
    "RelationService",
]
