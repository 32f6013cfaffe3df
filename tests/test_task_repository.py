"""
Тесты для TaskRepository — операции с одной задачей.

Проверяем:
- тело запроса и endpoint
- заполнение project_name по индексу
- предусловия (до любого запроса)
- проброс ошибок сервера
"""

from datetime import UTC, datetime

import pytest

from ticktick_sync import (
    EmptyTaskIdError,
    ProjectNotFoundError,
    ProtocolError,
    TaskAlreadyCreatedError,
    TaskNotCreatedError,
    TaskStatus,
    TransportError,
)

EXAMPLE_TIME = datetime(2023, 1, 1, 11, 30, 59, tzinfo=UTC)


@pytest.fixture
def new_task(client):
    return client.new_task("test", "testcontent", EXAMPLE_TIME, "pname1")


# ============================================================================
# NEW TASK
# ============================================================================


@pytest.mark.asyncio
async def test_new_task(client):
    """Test: new_task находит id проекта и не трогает сервер."""
    task = client.new_task("test", "testcontent", EXAMPLE_TIME, "pname1")

    assert task.id == ""
    assert task.title == "test"
    assert task.content == "testcontent"
    assert task.start_date == EXAMPLE_TIME
    assert task.project_id == "pid1"
    assert task.project_name == "pname1"


@pytest.mark.asyncio
async def test_new_task_without_project_or_date(client):
    task = client.new_task("test", "testcontent")

    assert task.project_id == ""
    assert task.start_date is None
    assert "startDate" not in task.to_wire()


@pytest.mark.asyncio
async def test_new_task_unknown_project(client):
    with pytest.raises(ProjectNotFoundError, match="not found"):
        client.new_task("test", "testcontent", None, "randomProject")


# ============================================================================
# CREATE
# ============================================================================


@pytest.mark.asyncio
async def test_create_task(client, server, new_task):
    """Test: POST /task - сервер присваивает id."""
    server.reply("POST", "/task", json={**new_task.to_wire(), "id": "testid"})

    created = await client.create_task(new_task)

    assert created.id == "testid"
    assert created.project_id == "pid1"
    assert created.project_name == "pname1"
    assert created.start_date == EXAMPLE_TIME

    (request,) = server.calls("POST", "/task")
    assert request.headers["cookie"] == "t=testtoken"
    assert server.body(request) == new_task.to_wire()
    assert new_task.id == ""


@pytest.mark.asyncio
async def test_create_task_does_not_touch_cache(client, server, new_task):
    server.reply("POST", "/task", json={**new_task.to_wire(), "id": "testid"})

    await client.create_task(new_task)

    assert [t.id for t in client.tasks] == ["1", "2", "3"]


@pytest.mark.asyncio
async def test_create_task_already_created(client, server, new_task):
    """Test: задача с id не создаётся повторно."""
    task = new_task.model_copy(update={"id": "testid"})

    with pytest.raises(TaskAlreadyCreatedError, match="already been created with id"):
        await client.create_task(task)

    assert server.requests == []


@pytest.mark.asyncio
async def test_create_task_server_error(client, new_task):
    """Test: 404 (маршрут не зарегистрирован) - TransportError."""
    with pytest.raises(TransportError):
        await client.create_task(new_task)


@pytest.mark.asyncio
async def test_create_task_bad_response(client, server, new_task):
    """Test: список вместо задачи - ProtocolError."""
    server.reply("POST", "/task", json=["unexpected"])

    with pytest.raises(ProtocolError):
        await client.create_task(new_task)


@pytest.mark.asyncio
async def test_create_task_response_with_numeric_date(client, server, new_task):
    """Test: dueDate числом в ответе - ProtocolError."""
    server.reply("POST", "/task", json={**new_task.to_wire(), "id": "testid", "dueDate": 12345})

    with pytest.raises(ProtocolError):
        await client.create_task(new_task)


# ============================================================================
# DELETE
# ============================================================================


@pytest.mark.asyncio
async def test_delete_task(client, server, new_task):
    """Test: POST /batch/task - удаление одной задачи."""
    server.reply("POST", "/batch/task")
    task = new_task.model_copy(update={"id": "1"})

    deleted = await client.delete_task(task)

    assert deleted.id == ""
    assert deleted.project_id == ""
    assert deleted.project_name == ""
    assert deleted.title == "test"

    (request,) = server.calls("POST", "/batch/task")
    assert server.body(request) == {"delete": [{"projectId": "pid1", "taskId": "1"}]}


@pytest.mark.asyncio
async def test_delete_created_task(client, server, new_task):
    """Test: delete(create(t)) - пустые id, project_id, project_name."""
    server.reply("POST", "/task", json={**new_task.to_wire(), "id": "testid"})
    server.reply("POST", "/batch/task")

    deleted = await client.delete_task(await client.create_task(new_task))

    assert (deleted.id, deleted.project_id, deleted.project_name) == ("", "", "")


@pytest.mark.asyncio
async def test_delete_task_inbox_alias(client, server):
    """Test: projectId "inbox" заменяется на настоящий inbox id."""
    server.reply("POST", "/batch/task")
    task = client.new_task("test").model_copy(update={"id": "1", "project_id": "inbox"})

    await client.delete_task(task)

    (request,) = server.calls("POST", "/batch/task")
    assert server.body(request) == {"delete": [{"projectId": "testinboxid", "taskId": "1"}]}


@pytest.mark.asyncio
async def test_delete_task_not_created(client, server, new_task):
    with pytest.raises(TaskNotCreatedError, match="has not been created, thus not deleted"):
        await client.delete_task(new_task)

    assert server.requests == []


@pytest.mark.asyncio
async def test_delete_task_server_error(client, server, new_task):
    server.reply("POST", "/batch/task", status=404)
    task = new_task.model_copy(update={"id": "1"})

    with pytest.raises(TransportError):
        await client.delete_task(task)


# ============================================================================
# UPDATE / COMPLETE
# ============================================================================


@pytest.mark.asyncio
async def test_update_task(client, server, new_task):
    """Test: POST /task/{id} - полный объект задачи."""
    task = new_task.model_copy(update={"id": "1", "priority": 5})
    server.reply("POST", "/task/1", json=task.to_wire())

    updated = await client.update_task(task)

    assert updated == task
    (request,) = server.calls("POST", "/task/1")
    assert server.body(request) == task.to_wire()


@pytest.mark.asyncio
async def test_update_task_empty_id(client, server, new_task):
    with pytest.raises(EmptyTaskIdError, match="task id is empty"):
        await client.update_task(new_task)

    assert server.requests == []


@pytest.mark.asyncio
async def test_update_task_server_error(client, server, new_task):
    server.reply("POST", "/task/1", status=500)

    with pytest.raises(TransportError) as exc_info:
        await client.update_task(new_task.model_copy(update={"id": "1"}))

    assert exc_info.value.status_code == 500


@pytest.mark.asyncio
async def test_complete_task(client, server, new_task):
    """Test: complete = update со статусом COMPLETED."""
    task = new_task.model_copy(update={"id": "1"})
    server.reply("POST", "/task/1", json={**task.to_wire(), "status": 2})

    completed = await client.complete_task(task)

    assert completed.is_completed
    assert task.status == TaskStatus.NORMAL
    (request,) = server.calls("POST", "/task/1")
    assert server.body(request)["status"] == TaskStatus.COMPLETED
