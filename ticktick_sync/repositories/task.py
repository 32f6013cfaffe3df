"""Task repository: single-exchange task operations."""

from ..core.errors import EmptyTaskIdError, TaskAlreadyCreatedError, TaskNotCreatedError
from ..core.logging import get_logger
from ..integrations.ticktick import Transport
from ..models import INBOX_ALIAS, Session, TaskRecord, TaskStatus
from .base import BaseRepository

logger = get_logger(__name__)

# Endpoints (относительно base_url)
TASK_CREATE_PATH = "/task"
TASK_DELETE_PATH = "/batch/task"
TASK_UPDATE_PATH = "/task/{task_id}"
TASK_PARENT_PATH = "/batch/taskParent"
TASK_MOVE_PATH = "/batch/taskProject"


class TaskRepository(BaseRepository[TaskRecord]):
    """
    Репозиторий для работы с задачами на сервере.

    Каждый метод - ровно один HTTP обмен, без повторов.
    Кэш не меняется: чтобы увидеть изменения, нужен sync.
    Аргумент-задача никогда не изменяется, возвращается новая копия.

    Включает:
    - create / update / delete / complete
    - batch-запросы переноса в проект и привязки к родителю
    """

    def __init__(self, transport: Transport, session: Session):
        super().__init__(TaskRecord, transport, session)

    def real_project_id(self, project_id: str) -> str:
        """Translate the "inbox" alias to the inbox id; other ids pass through."""
        if project_id == INBOX_ALIAS:
            return self.session.cache.inbox_id
        return project_id

    def _with_project_name(self, task: TaskRecord) -> TaskRecord:
        task.project_name = self.session.cache.projects.resolve_name(task.project_id)
        return task

    async def create(self, task: TaskRecord) -> TaskRecord:
        """
        Create a task on the server.

        Args:
            task: Uncreated task (id == "")

        Returns:
            Server record with its new id and the project name filled in

        Raises:
            TaskAlreadyCreatedError: If the task already has an id
        """
        if task.is_created:
            raise TaskAlreadyCreatedError(task.id)

        data = await self.post(TASK_CREATE_PATH, task.to_wire())
        created = self._with_project_name(self.parse(data))

        logger.info("Task created", extra={"task_id": created.id, "project_id": created.project_id})
        return created

    async def delete(self, task: TaskRecord) -> TaskRecord:
        """
        Delete a task on the server.

        Returns:
            Copy of the task with id, project_id and project_name cleared

        Raises:
            TaskNotCreatedError: If the task has no id
        """
        if not task.is_created:
            raise TaskNotCreatedError()

        project_id = self.real_project_id(task.project_id)

        body = {"delete": [{"projectId": project_id, "taskId": task.id}]}
        await self.post(TASK_DELETE_PATH, body)

        logger.info("Task deleted", extra={"task_id": task.id, "project_id": project_id})
        return task.model_copy(update={"id": "", "project_id": "", "project_name": ""}, deep=True)

    async def update(self, task: TaskRecord) -> TaskRecord:
        """
        Send the full record to the server.

        Returns:
            Updated server record with the project name filled in

        Raises:
            EmptyTaskIdError: If the task has no id
        """
        if not task.is_created:
            raise EmptyTaskIdError()

        data = await self.post(TASK_UPDATE_PATH.format(task_id=task.id), task.to_wire())
        return self._with_project_name(self.parse(data))

    async def complete(self, task: TaskRecord) -> TaskRecord:
        """Mark a task completed (update with status COMPLETED)."""
        completed = task.model_copy(update={"status": TaskStatus.COMPLETED}, deep=True)
        return await self.update(completed)

    async def move(self, task_id: str, from_project_id: str, to_project_id: str) -> None:
        """Move one task to another project (single-element batch)."""
        body = [
            {
                "fromProjectId": self.real_project_id(from_project_id),
                "taskId": task_id,
                "toProjectId": self.real_project_id(to_project_id),
            }
        ]
        await self.post(TASK_MOVE_PATH, body)

    async def set_parent(self, task_id: str, parent_id: str, project_id: str) -> None:
        """Link one task under a parent (single-element batch)."""
        project_id = self.real_project_id(project_id)
        body = [{"parentId": parent_id, "projectId": project_id, "taskId": task_id}]
        await self.post(TASK_PARENT_PATH, body)
