"""Session state: auth token and the synchronized cache."""

import asyncio
from dataclasses import dataclass, field
from datetime import datetime

from .project import ProjectGroup, ProjectIndex
from .task import TaskRecord


@dataclass(frozen=True)
class CacheSnapshot:
    """A complete, self-consistent view of the server state."""

    inbox_id: str = ""
    project_groups: tuple[ProjectGroup, ...] = ()
    projects: ProjectIndex = field(default_factory=ProjectIndex)
    tasks: tuple[TaskRecord, ...] = ()
    tags: tuple[str, ...] = ()
    synced_at: datetime | None = None


class SyncCache:
    """
    Client-held copy of projects, tasks and tags.

    Писатель только один - SyncService. Снимок заменяется целиком под
    asyncio.Lock, который держится только на время замены в памяти,
    а не на время сетевого запроса.

    Читатели получают копии задач, поэтому не могут испортить кэш.
    """

    def __init__(self):
        self._snapshot = CacheSnapshot()
        self._lock = asyncio.Lock()

    async def replace(self, snapshot: CacheSnapshot) -> None:
        """Swap in a new snapshot."""
        async with self._lock:
            self._snapshot = snapshot

    @property
    def snapshot(self) -> CacheSnapshot:
        return self._snapshot

    @property
    def inbox_id(self) -> str:
        return self._snapshot.inbox_id

    @property
    def projects(self) -> ProjectIndex:
        return self._snapshot.projects

    @property
    def project_groups(self) -> list[ProjectGroup]:
        return list(self._snapshot.project_groups)

    @property
    def tasks(self) -> list[TaskRecord]:
        return [task.model_copy(deep=True) for task in self._snapshot.tasks]

    @property
    def tags(self) -> list[str]:
        return list(self._snapshot.tags)

    @property
    def synced_at(self) -> datetime | None:
        return self._snapshot.synced_at

    @property
    def is_synced(self) -> bool:
        return self._snapshot.synced_at is not None


@dataclass
class Session:
    """Auth token plus the cache it was used to fill."""

    token: str | None = None
    cache: SyncCache = field(default_factory=SyncCache)

    @property
    def is_authenticated(self) -> bool:
        return bool(self.token)
