"""
Тесты для TickTickClient и AuthService.

Проверяем:
- вход (токен, ответ без токена, ошибка сервера)
- init / connect
- выбор сервера
"""

import httpx
import pytest

from ticktick_sync import AuthenticationError, TickTickClient, TransportError, UnknownServerError
from ticktick_sync.core.config import SERVERS, Settings

from .conftest import BASE_URL

SIGNIN_PATH = "/user/signin"
SYNC_PATH = "/batch/check/0"


# =============================================================================
# SIGN IN
# =============================================================================


@pytest.mark.asyncio
async def test_sign_in(anonymous_client, server):
    """Test: токен из ответа сохраняется в сессии."""
    token = await anonymous_client.sign_in()

    assert token == "testtoken"
    assert anonymous_client.session.token == "testtoken"

    (request,) = server.calls("POST", SIGNIN_PATH)
    assert server.body(request) == {"username": "testuser", "password": "testpass"}
    assert "cookie" not in request.headers


@pytest.mark.asyncio
async def test_sign_in_without_token(anonymous_client, server):
    """Test: ответ без token - AuthenticationError с полным ответом."""
    server.reply("POST", SIGNIN_PATH, json={"faketoken": "testtoken"})

    with pytest.raises(AuthenticationError, match="no token found in the response") as exc_info:
        await anonymous_client.sign_in()

    assert "faketoken" in exc_info.value.message
    assert anonymous_client.session.token is None


@pytest.mark.asyncio
async def test_sign_in_server_error(anonymous_client, server):
    server.reply("POST", SIGNIN_PATH, status=404)

    with pytest.raises(TransportError):
        await anonymous_client.sign_in()


# =============================================================================
# INIT / CONNECT
# =============================================================================


@pytest.mark.asyncio
async def test_init(anonymous_client, server):
    """Test: init = вход + sync."""
    await anonymous_client.init()

    assert [r.url.path for r in server.requests] == [
        "/api/v2" + SIGNIN_PATH,
        "/api/v2" + SYNC_PATH,
    ]
    assert anonymous_client.session.cache.is_synced
    assert len(anonymous_client.tasks) == 3


@pytest.mark.asyncio
async def test_init_sign_in_fails(anonymous_client, server):
    server.reply("POST", SIGNIN_PATH, status=404)

    with pytest.raises(TransportError):
        await anonymous_client.init()

    assert server.calls("GET", SYNC_PATH) == []


@pytest.mark.asyncio
async def test_init_sync_fails(anonymous_client, server):
    server.reply("GET", SYNC_PATH, status=404)

    with pytest.raises(TransportError):
        await anonymous_client.init()

    assert not anonymous_client.session.cache.is_synced


@pytest.mark.asyncio
async def test_connect(settings, http_client):
    client = await TickTickClient.connect(
        "testuser", "testpass", base_url=BASE_URL, settings=settings, http_client=http_client
    )

    assert client.inbox_id == "testinboxid"
    assert client.tags == ["a", "b", "c"]


@pytest.mark.asyncio
async def test_connect_fails(settings, server, http_client):
    server.reply("POST", SIGNIN_PATH, status=404)

    with pytest.raises(TransportError):
        await TickTickClient.connect(
            "testuser", "testpass", base_url=BASE_URL, settings=settings, http_client=http_client
        )


@pytest.mark.asyncio
async def test_client_context_manager_keeps_external_http_client(settings, http_client):
    """Test: внешний httpx клиент не закрывается вместе с TickTickClient."""
    async with TickTickClient(
        "u", "p", base_url=BASE_URL, settings=settings, http_client=http_client
    ):
        pass

    assert not http_client.is_closed


# =============================================================================
# SERVER SELECTION
# =============================================================================


def test_known_servers():
    settings = Settings(_env_file=None)

    assert settings.resolve_base_url("ticktick") == SERVERS["ticktick"]
    assert settings.resolve_base_url("dida365") == SERVERS["dida365"]


def test_base_url_override():
    settings = Settings(_env_file=None, TICKTICK_BASE_URL="http://localhost:9000/api/v2/")

    assert settings.resolve_base_url("ticktick") == "http://localhost:9000/api/v2"


def test_unknown_server():
    """Test: неизвестный сервер - ошибка при создании клиента."""
    with pytest.raises(UnknownServerError, match="unknown server 'random'"):
        TickTickClient("u", "p", server="random", settings=Settings(_env_file=None))


@pytest.mark.asyncio
async def test_credentials_from_settings(server, http_client):
    settings = Settings(
        _env_file=None,
        TICKTICK_BASE_URL=BASE_URL,
        TICKTICK_USERNAME="envuser",
        TICKTICK_PASSWORD="envpass",
    )
    client = TickTickClient(settings=settings, http_client=http_client)

    await client.sign_in()

    (request,) = server.calls("POST", SIGNIN_PATH)
    assert server.body(request) == {"username": "envuser", "password": "envpass"}


@pytest.mark.asyncio
async def test_network_failure_is_transport_error(settings):
    """Test: обрыв соединения - TransportError без статуса."""

    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    async with httpx.AsyncClient(transport=httpx.MockTransport(handler)) as http_client:
        client = TickTickClient(
            "u", "p", base_url=BASE_URL, settings=settings, http_client=http_client
        )

        with pytest.raises(TransportError) as exc_info:
            await client.sign_in()

    assert exc_info.value.status_code is None
