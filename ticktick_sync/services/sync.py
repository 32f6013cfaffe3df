"""Sync service: full-state fetch and cache replacement."""

from typing import Any

from pydantic import ValidationError

from ..core.config import Settings
from ..core.config import settings as default_settings
from ..core.errors import SyncPayloadError
from ..core.logging import get_logger
from ..integrations.ticktick import Transport
from ..models import CacheSnapshot, ProjectIndex, Session, SyncResult, TaskRecord, utc_now
from ..repositories import SyncRepository

logger = get_logger(__name__)


class SyncService:
    """
    Service that keeps the session cache in step with the server.

    Каждый sync - полная замена кэша (не merge), O(всего состояния).
    Порядок сборки снимка важен:
    1. inbox_id
    2. project groups
    3. ProjectIndex (alias "inbox" первым)
    4. задачи + project_name по НОВОМУ индексу
    5. теги

    Если что-то пошло не так, старый снимок остаётся нетронутым.
    """

    def __init__(self, transport: Transport, session: Session, settings: Settings | None = None):
        """Initialize sync service.

        Args:
            transport: HTTP transport
            session: Session whose cache this service owns
            settings: Client settings (global settings if not provided)
        """
        self.session = session
        self.settings = settings or default_settings
        self.sync_repo = SyncRepository(transport, session)

    async def sync(self) -> SyncResult:
        """
        Fetch the full server state and replace the cache.

        Returns:
            SyncResult with counts of what the new snapshot holds

        Raises:
            TransportError: Network failure or non-2xx status (cache unchanged)
            SyncPayloadError: Malformed payload or task record (cache unchanged)
        """
        logger.debug("Sync started")
        payload = await self.sync_repo.fetch()

        projects = ProjectIndex.build(payload.inbox_id, payload.project_profiles)
        tasks, skipped = self._build_tasks(payload.sync_task_bean.update, projects)
        tags = tuple(tag.name for tag in payload.tags)

        snapshot = CacheSnapshot(
            inbox_id=payload.inbox_id,
            project_groups=tuple(payload.project_groups),
            projects=projects,
            tasks=tuple(tasks),
            tags=tags,
            synced_at=utc_now(),
        )
        await self.session.cache.replace(snapshot)

        result = SyncResult(
            synced_at=snapshot.synced_at,
            projects_count=len(projects) - 1,  # без alias "inbox"
            tasks_count=len(tasks),
            tags_count=len(tags),
            tasks_skipped=skipped,
        )
        logger.info(
            "Sync completed",
            extra={
                "projects": result.projects_count,
                "tasks": result.tasks_count,
                "tags": result.tags_count,
                "tasks_skipped": result.tasks_skipped,
            },
        )
        return result

    def _build_tasks(
        self, raw_tasks: list[Any], projects: ProjectIndex
    ) -> tuple[list[TaskRecord], int]:
        """Validate raw task records and back-fill project names.

        Returns:
            (tasks, number of skipped records)
        """
        tasks: list[TaskRecord] = []
        skipped = 0

        for index, raw in enumerate(raw_tasks):
            try:
                task = TaskRecord.model_validate(raw)
            except ValidationError as e:
                task_id = raw.get("id") if isinstance(raw, dict) else None
                if not self.settings.SKIP_MALFORMED_TASKS:
                    raise SyncPayloadError(
                        f"task record #{index} is malformed",
                        details={
                            "index": index,
                            "task_id": task_id,
                            "errors": e.errors(include_url=False),
                        },
                    ) from e

                logger.warning(
                    "Malformed task record skipped",
                    extra={"index": index, "task_id": task_id},
                )
                skipped += 1
                continue

            task.project_name = projects.resolve_name(task.project_id)
            tasks.append(task)

        return tasks, skipped
