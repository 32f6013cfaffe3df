"""
Клиент TickTick / Dida365.

Точка входа библиотеки: собирает transport, сессию, репозитории и сервисы
в один объект.

Использование:
    async with await TickTickClient.connect("user@example.com", "secret") as client:
        task = client.new_task("Buy milk", project_name="Shopping")
        task = await client.create_task(task)
        found = await client.search_tasks(tag="urgent")
"""

from datetime import datetime

import httpx

from .core.config import Settings
from .core.config import settings as default_settings
from .core.logging import get_logger
from .integrations.ticktick import Transport
from .models import (
    PRIORITY_IGNORE,
    ProjectGroup,
    ProjectIndex,
    Session,
    SyncResult,
    TaskRecord,
)
from .repositories import TaskRepository
from .services import AuthService, RelationService, SyncService, TaskQueryService

logger = get_logger(__name__)


class TickTickClient:
    """
    Facade over the sync cache and task workflows.

    Один клиент = одна логическая последовательность вызовов.
    Параллельные вызовы на одном клиенте не поддерживаются (кэш защищён
    только на время замены снимка).
    """

    def __init__(
        self,
        username: str | None = None,
        password: str | None = None,
        server: str | None = None,
        base_url: str | None = None,
        settings: Settings | None = None,
        http_client: httpx.AsyncClient | None = None,
    ):
        """
        Args:
            username: Account name (defaults to TICKTICK_USERNAME)
            password: Account password (defaults to TICKTICK_PASSWORD)
            server: "ticktick" or "dida365" (defaults to TICKTICK_SERVER)
            base_url: Explicit API root, overrides server
            settings: Client settings (global settings if not provided)
            http_client: Pre-built httpx client

        Raises:
            UnknownServerError: If the server name is not known
        """
        self.settings = settings or default_settings
        self.username = username or self.settings.TICKTICK_USERNAME
        self.password = password or self.settings.TICKTICK_PASSWORD

        resolved_url = base_url or self.settings.resolve_base_url(server)

        self.session = Session()
        self.transport = Transport(
            resolved_url, timeout=self.settings.HTTP_TIMEOUT, http_client=http_client
        )

        self.auth_service = AuthService(self.transport, self.session)
        self.sync_service = SyncService(self.transport, self.session, self.settings)
        self.task_repo = TaskRepository(self.transport, self.session)
        self.query_service = TaskQueryService(self.sync_service, self.session)
        self.relation_service = RelationService(
            self.task_repo, self.sync_service, self.query_service, self.session
        )

    @classmethod
    async def connect(cls, username: str, password: str, **kwargs) -> "TickTickClient":
        """Build a client, sign in and run the first sync."""
        client = cls(username, password, **kwargs)
        try:
            await client.init()
        except Exception:
            await client.aclose()
            raise
        return client

    async def init(self) -> None:
        """Sign in, then fill the cache with a full sync."""
        await self.sign_in()
        await self.sync()

    async def sign_in(self) -> str:
        """Sign in with the configured credentials."""
        return await self.auth_service.sign_in(self.username or "", self.password or "")

    async def aclose(self) -> None:
        await self.transport.aclose()

    async def __aenter__(self) -> "TickTickClient":
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()

    # =========================================================================
    # Cache (только чтение)
    # =========================================================================

    @property
    def inbox_id(self) -> str:
        return self.session.cache.inbox_id

    @property
    def projects(self) -> ProjectIndex:
        return self.session.cache.projects

    @property
    def project_groups(self) -> list[ProjectGroup]:
        return self.session.cache.project_groups

    @property
    def tasks(self) -> list[TaskRecord]:
        return self.session.cache.tasks

    @property
    def tags(self) -> list[str]:
        return self.session.cache.tags

    # =========================================================================
    # Operations
    # =========================================================================

    async def sync(self) -> SyncResult:
        return await self.sync_service.sync()

    def new_task(
        self,
        title: str,
        content: str = "",
        start_date: datetime | None = None,
        project_name: str = "",
    ) -> TaskRecord:
        """
        Build an uncreated task.

        Args:
            title: Task title
            content: Free-text content
            start_date: Start timestamp (None = no start date)
            project_name: Owning project ("" = let the server pick the inbox)

        Raises:
            ProjectNotFoundError: If project_name is not in the cache
        """
        project_id = self.projects.resolve(project_name) if project_name else ""
        return TaskRecord(
            title=title,
            content=content,
            start_date=start_date,
            project_id=project_id,
            project_name=project_name,
        )

    async def create_task(self, task: TaskRecord) -> TaskRecord:
        return await self.task_repo.create(task)

    async def update_task(self, task: TaskRecord) -> TaskRecord:
        return await self.task_repo.update(task)

    async def delete_task(self, task: TaskRecord) -> TaskRecord:
        return await self.task_repo.delete(task)

    async def complete_task(self, task: TaskRecord) -> TaskRecord:
        return await self.task_repo.complete(task)

    async def search_tasks(
        self,
        title: str = "",
        project_name: str = "",
        tag: str = "",
        task_id: str = "",
        not_before: datetime | None = None,
        not_after: datetime | None = None,
        priority: int = PRIORITY_IGNORE,
    ) -> list[TaskRecord]:
        return await self.query_service.search(
            title=title,
            project_name=project_name,
            tag=tag,
            task_id=task_id,
            not_before=not_before,
            not_after=not_after,
            priority=priority,
        )

    async def move_task(self, task: TaskRecord, to_project_name: str) -> TaskRecord:
        return await self.relation_service.move_task(task, to_project_name)

    async def make_subtask(
        self, parent: TaskRecord, child: TaskRecord
    ) -> tuple[TaskRecord, TaskRecord]:
        return await self.relation_service.make_subtask(parent, child)
