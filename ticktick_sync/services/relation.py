"""Relation service: compound move and subtask workflows."""

from ..core.errors import (
    ChildNotCreatedError,
    ConsistencyError,
    EmptyTaskIdError,
    ParentNotCreatedError,
)
from ..core.logging import get_logger
from ..models import Session, TaskRecord
from ..repositories import TaskRepository
from .query import TaskQueryService
from .sync import SyncService

logger = get_logger(__name__)


class RelationService:
    """
    Сервис для операций, которые требуют нескольких запросов.

    - move_task: перенос задачи в другой проект (batch/taskProject)
    - make_subtask: при необходимости перенос + привязка к родителю
      (batch/taskParent) + sync, так как сервер не возвращает итоговое
      состояние задач
    """

    def __init__(
        self,
        task_repo: TaskRepository,
        sync_service: SyncService,
        query_service: TaskQueryService,
        session: Session,
    ):
        self.task_repo = task_repo
        self.sync_service = sync_service
        self.query_service = query_service
        self.session = session

    async def move_task(self, task: TaskRecord, to_project_name: str) -> TaskRecord:
        """
        Move a task to another project.

        Args:
            task: Created task
            to_project_name: Target project name

        Returns:
            The same task if it is already there, otherwise a copy with the
            new project_id. project_name of the copy is NOT refreshed.

        Raises:
            EmptyTaskIdError: If the task has no id
            ProjectNotFoundError: If the target project is unknown
        """
        if to_project_name == task.project_name:
            return task
        if not task.is_created:
            raise EmptyTaskIdError()

        to_project_id = self.session.cache.projects.resolve(to_project_name)
        await self.task_repo.move(task.id, task.project_id, to_project_id)

        logger.info(
            "Task moved",
            extra={
                "task_id": task.id,
                "from_project_id": task.project_id,
                "to_project_id": to_project_id,
            },
        )
        # project_name остаётся старым до следующего sync
        return task.model_copy(update={"project_id": to_project_id}, deep=True)

    async def make_subtask(
        self, parent: TaskRecord, child: TaskRecord
    ) -> tuple[TaskRecord, TaskRecord]:
        """
        Make child a subtask of parent.

        Шаги:
        1. Оба должны быть созданы
        2. Если id проектов разные - перенести child в проект parent
        3. Привязать child к parent
        4. sync и найти обе задачи по id

        Returns:
            (parent, child) as the server reports them after the link

        Raises:
            ParentNotCreatedError, ChildNotCreatedError: Missing ids
            ConsistencyError: Link accepted but a task is missing after sync
        """
        if not parent.is_created:
            raise ParentNotCreatedError()
        if not child.is_created:
            raise ChildNotCreatedError()

        parent_project_id = self.task_repo.real_project_id(parent.project_id)
        child_project_id = self.task_repo.real_project_id(child.project_id)
        if parent_project_id != child_project_id:
            # сравниваем id: project_name после move_task может быть старым
            await self.task_repo.move(child.id, child_project_id, parent_project_id)
            child = child.model_copy(update={"project_id": parent_project_id}, deep=True)

        await self.task_repo.set_parent(child.id, parent.id, child.project_id)
        await self.sync_service.sync()

        new_parent = self._find(parent.id)
        new_child = self._find(child.id)

        logger.info("Subtask linked", extra={"parent_id": parent.id, "task_id": child.id})
        return new_parent, new_child

    def _find(self, task_id: str) -> TaskRecord:
        found = self.query_service.filter(task_id=task_id)
        if not found:
            raise ConsistencyError(task_id, "make_subtask")
        return found[0]
