"""
Ошибки клиента.

Все ошибки наследуются от TickTickError, поэтому вызывающий код может
перехватить их одним except, а может различать по типу:

- TransportError     - сеть или HTTP статус не 2xx, пробрасывается как есть
- ProtocolError      - ответ пришёл, но JSON не тот, что мы ожидали
- PreconditionError  - неправильное использование API, до любого запроса
- ConsistencyError   - сервер принял составную операцию, но повторный
                       sync не находит затронутую задачу

Использование:
    try:
        await client.make_subtask(parent, child)
    except ConsistencyError:
        ...  # связь могла быть создана на сервере
    except TickTickError as e:
        print(e.code, e.message)
"""

from typing import Any


class TickTickError(Exception):
    """
    Базовый класс для всех ошибок клиента.

    Attributes:
        code: Стабильный машиночитаемый код (например "TASK_NOT_CREATED")
        message: Человекочитаемое описание
        details: Дополнительные данные для отладки
    """

    def __init__(self, code: str, message: str, details: dict[str, Any] | None = None):
        self.code = code
        self.message = message
        self.details = details or {}
        super().__init__(message)


# =============================================================================
# TRANSPORT
# =============================================================================


class TransportError(TickTickError):
    """Network failure or non-2xx HTTP response."""

    def __init__(self, message: str, url: str, status_code: int | None = None):
        super().__init__(
            code="TRANSPORT_ERROR",
            message=message,
            details={"url": url, "status_code": status_code},
        )
        self.url = url
        self.status_code = status_code


# =============================================================================
# PROTOCOL
# =============================================================================


class ProtocolError(TickTickError):
    """Well-formed HTTP response with a malformed or unexpected JSON payload."""

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        super().__init__(code="PROTOCOL_ERROR", message=message, details=details)


class SyncPayloadError(ProtocolError):
    """The full-state sync payload could not be parsed."""

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        super().__init__(message, details)
        self.code = "SYNC_PAYLOAD_INVALID"


class AuthenticationError(ProtocolError):
    """Sign-in response carried no session token."""

    def __init__(self, response_text: str):
        super().__init__(
            f"no token found in the response, full response json is {response_text}",
            details={"response": response_text},
        )
        self.code = "NO_TOKEN"


# =============================================================================
# PRECONDITIONS (проверяются до любого сетевого вызова)
# =============================================================================


class PreconditionError(TickTickError):
    """Caller misuse detected before any network call."""


class TaskAlreadyCreatedError(PreconditionError):
    def __init__(self, task_id: str):
        super().__init__(
            code="TASK_ALREADY_CREATED",
            message=f"the task has already been created with id={task_id}",
            details={"task_id": task_id},
        )


class TaskNotCreatedError(PreconditionError):
    def __init__(self):
        super().__init__(
            code="TASK_NOT_CREATED",
            message="the task has not been created, thus not deleted",
        )


class EmptyTaskIdError(PreconditionError):
    def __init__(self):
        super().__init__(code="EMPTY_TASK_ID", message="task id is empty")


class ParentNotCreatedError(PreconditionError):
    def __init__(self):
        super().__init__(code="PARENT_NOT_CREATED", message="the parent has not been created")


class ChildNotCreatedError(PreconditionError):
    def __init__(self):
        super().__init__(code="CHILD_NOT_CREATED", message="the child has not been created")


class ProjectNotFoundError(PreconditionError):
    """
    Проект с таким именем не известен кэшу.

    Использование:
        raise ProjectNotFoundError("Work")
        # Сообщение: "project 'Work' not found"
    """

    def __init__(self, project_name: str):
        super().__init__(
            code="PROJECT_NOT_FOUND",
            message=f"project '{project_name}' not found",
            details={"project_name": project_name},
        )
        self.project_name = project_name


class NotAuthenticatedError(PreconditionError):
    def __init__(self):
        super().__init__(
            code="NOT_AUTHENTICATED",
            message="no session token, sign in before calling the API",
        )


# =============================================================================
# CONSISTENCY
# =============================================================================


class ConsistencyError(TickTickError):
    """
    Сервер принял составную операцию, но после повторного sync
    задача не находится в кэше. Операция могла частично выполниться.
    """

    def __init__(self, task_id: str, operation: str):
        super().__init__(
            code="CONSISTENCY_ERROR",
            message=f"task id={task_id} not found after {operation}",
            details={"task_id": task_id, "operation": operation},
        )
        self.task_id = task_id


# =============================================================================
# CONFIGURATION
# =============================================================================


class UnknownServerError(TickTickError):
    def __init__(self, server: str):
        super().__init__(
            code="UNKNOWN_SERVER",
            message=f"unknown server '{server}'",
            details={"server": server},
        )
