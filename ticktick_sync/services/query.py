"""Query service: in-memory filtering of the cached task set."""

from datetime import datetime

from ..models import PRIORITY_IGNORE, Session, TaskRecord, parse_timestamp
from .sync import SyncService


class TaskQueryService:
    """
    Поиск задач по кэшу.

    search() всегда сначала делает полный sync, поэтому результат отражает
    последнее состояние сервера (ценой одного запроса на каждый поиск).
    Результат - копии задач в порядке кэша, без дополнительной сортировки.
    """

    def __init__(self, sync_service: SyncService, session: Session):
        self.sync_service = sync_service
        self.session = session

    async def search(
        self,
        title: str = "",
        project_name: str = "",
        tag: str = "",
        task_id: str = "",
        not_before: datetime | None = None,
        not_after: datetime | None = None,
        priority: int = PRIORITY_IGNORE,
    ) -> list[TaskRecord]:
        """
        Sync, then return the tasks matching every given filter.

        Каждый фильтр не действует, если передано его "пустое" значение.

        Args:
            title: Substring of the title ("" matches all)
            project_name: Exact project; unknown non-empty name matches nothing
            tag: Tag the task must carry
            task_id: Exact task id
            not_before: Lower bound for start_date (only with not_after)
            not_after: Upper bound for start_date (only with not_before)
            priority: Exact priority, PRIORITY_IGNORE (-1) disables

        Returns:
            Matching tasks in cache order

        Raises:
            TransportError, SyncPayloadError: From the sync
        """
        await self.sync_service.sync()
        return self.filter(
            title=title,
            project_name=project_name,
            tag=tag,
            task_id=task_id,
            not_before=not_before,
            not_after=not_after,
            priority=priority,
        )

    async def get_by_id(self, task_id: str) -> TaskRecord | None:
        """Sync, then return the task with this id (or None)."""
        found = await self.search(task_id=task_id)
        return found[0] if found else None

    def filter(
        self,
        title: str = "",
        project_name: str = "",
        tag: str = "",
        task_id: str = "",
        not_before: datetime | None = None,
        not_after: datetime | None = None,
        priority: int = PRIORITY_IGNORE,
    ) -> list[TaskRecord]:
        """Same filters as search(), applied to the current cache without syncing."""
        cache = self.session.cache

        project_id = None
        if project_name:
            project_id = cache.projects.get_id(project_name)
            if project_id is None:
                return []

        # Диапазон дат применяется только если заданы ОБЕ границы
        date_range = None
        if not_before is not None and not_after is not None:
            date_range = (parse_timestamp(not_before), parse_timestamp(not_after))

        result = []
        for task in cache.tasks:
            if title not in task.title:
                continue
            if project_id is not None and task.project_id != project_id:
                continue
            if tag and tag not in task.tags:
                continue
            if task_id and task.id != task_id:
                continue
            if date_range is not None:
                lower, upper = date_range
                # Задача без даты начала в диапазон не попадает
                if task.start_date is None or task.start_date < lower or task.start_date > upper:
                    continue
            if priority != PRIORITY_IGNORE and task.priority != priority:
                continue
            result.append(task)

        return result
