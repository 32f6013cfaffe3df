"""
Pytest fixtures для тестов.

Предоставляет:
- server: фейковый сервер TickTick поверх httpx.MockTransport
- settings: настройки, не читающие окружение
- client: TickTickClient, уже залогиненный и синхронизированный
"""

import json
from typing import Any

import httpx
import pytest
import pytest_asyncio

from ticktick_sync import TickTickClient
from ticktick_sync.core.config import Settings

# Test server root
BASE_URL = "http://test/api/v2"
API_PREFIX = "/api/v2"


def build_sync_response() -> dict[str, Any]:
    """Sample payload of GET /batch/check/0."""
    return {
        "inboxId": "testinboxid",
        "projectGroups": [
            {"id": "pgid1", "name": "pgname1"},
            {"id": "pgid2", "name": "pgname2"},
        ],
        "projectProfiles": [
            {"id": "pid1", "name": "pname1"},
            {"id": "pid2", "name": "pname2"},
        ],
        "syncTaskBean": {
            "update": [
                {
                    "id": "1",
                    "title": "1",
                    "projectId": "pid1",
                    "tags": ["a", "b"],
                    "startDate": "2022-12-12T15:04:05.000+0000",
                    "priority": 5,
                },
                {
                    "id": "2",
                    "title": "2",
                    "projectId": "pid1",
                    "tags": ["b", "c"],
                    "startDate": "2022-12-13T15:04:05.000+0000",
                    "priority": 0,
                },
                {
                    "id": "3",
                    "title": "3",
                    "projectId": "pid2",
                    "tags": ["b", "c"],
                    "startDate": "2022-12-14T15:04:05.000+0000",
                    "priority": 1,
                },
            ]
        },
        "tags": [{"name": "a"}, {"name": "b"}, {"name": "c"}],
    }


class FakeServer:
    """
    Фейковый сервер: (method, path) -> ответ.

    - reply(): ответ по умолчанию для маршрута
    - reply_once(): ответ на один следующий запрос (очередь, FIFO)
    - все запросы записываются в self.requests

    Незарегистрированный маршрут отвечает 404.
    """

    def __init__(self):
        self._defaults: dict[tuple[str, str], tuple[int, Any]] = {}
        self._queued: dict[tuple[str, str], list[tuple[int, Any]]] = {}
        self.requests: list[httpx.Request] = []

    @staticmethod
    def _response(status: int, body: Any) -> httpx.Response:
        if body is None:
            return httpx.Response(status)
        return httpx.Response(status, json=body)

    def reply(self, method: str, path: str, status: int = 200, json: Any = None) -> None:
        self._defaults[(method, path)] = (status, json)

    def reply_once(self, method: str, path: str, status: int = 200, json: Any = None) -> None:
        self._queued.setdefault((method, path), []).append((status, json))

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        key = (request.method, request.url.path.removeprefix(API_PREFIX))

        queued = self._queued.get(key)
        if queued:
            return self._response(*queued.pop(0))
        if key in self._defaults:
            return self._response(*self._defaults[key])
        return httpx.Response(404)

    def calls(self, method: str, path: str) -> list[httpx.Request]:
        """Requests received on one route."""
        return [
            r
            for r in self.requests
            if r.method == method and r.url.path.removeprefix(API_PREFIX) == path
        ]

    @staticmethod
    def body(request: httpx.Request) -> Any:
        return json.loads(request.content)


@pytest.fixture
def settings() -> Settings:
    """Настройки без чтения .env и переменных окружения."""
    return Settings(_env_file=None, TICKTICK_BASE_URL=BASE_URL)


@pytest.fixture
def server() -> FakeServer:
    """Сервер с рабочими signin и sync."""
    fake = FakeServer()
    fake.reply("POST", "/user/signin", json={"token": "testtoken"})
    fake.reply("GET", "/batch/check/0", json=build_sync_response())
    return fake


@pytest_asyncio.fixture
async def http_client(server):
    async with httpx.AsyncClient(transport=httpx.MockTransport(server.handler)) as client:
        yield client


@pytest_asyncio.fixture
async def anonymous_client(settings, http_client) -> TickTickClient:
    """Клиент без входа и без sync."""
    return TickTickClient(
        "testuser", "testpass", base_url=BASE_URL, settings=settings, http_client=http_client
    )


@pytest_asyncio.fixture
async def client(anonymous_client, server) -> TickTickClient:
    """Клиент после init(): токен есть, кэш заполнен. Журнал запросов очищен."""
    await anonymous_client.init()
    server.requests.clear()
    return anonymous_client
