"""HTTP transport for the TickTick batch API."""

import time
from typing import Any

import httpx

from ...core.errors import ProtocolError, TransportError
from ...core.logging import get_logger, request_scope

logger = get_logger(__name__)

# Имя cookie, в котором сервер ждёт токен сессии
SESSION_COOKIE = "t"


class Transport:
    """
    One request/response exchange with the server.

    Логирует каждый обмен:
    - метод и путь
    - статус код ответа
    - время выполнения (мс)
    - request_id для трейсинга

    Пример лога (JSON):
    {
        "level": "INFO",
        "logger": "ticktick_sync.integrations.ticktick.transport",
        "message": "Request completed",
        "request_id": "3f2a9c01d4e7",
        "extra": {"method": "GET", "path": "/batch/check/0", "status": 200, "duration_ms": 45}
    }

    Никаких повторов: любая ошибка сети или статус не 2xx сразу
    превращается в TransportError.
    """

    def __init__(
        self,
        base_url: str,
        timeout: float = 30.0,
        http_client: httpx.AsyncClient | None = None,
    ):
        """
        Args:
            base_url: API root, e.g. https://api.dida365.com/api/v2
            timeout: Timeout of one exchange in seconds
            http_client: Pre-built client (tests pass one with a MockTransport)
        """
        self.base_url = base_url.rstrip("/")
        self._owns_client = http_client is None
        self._client = http_client or httpx.AsyncClient(timeout=timeout)

    async def request(
        self,
        method: str,
        path: str,
        *,
        json: Any = None,
        token: str | None = None,
    ) -> Any:
        """
        Perform one HTTP exchange and decode the JSON response.

        Args:
            method: HTTP method
            path: Endpoint path relative to base_url ("/task")
            json: Request body
            token: Session token, sent as cookie "t"

        Returns:
            Decoded JSON, or None for an empty body

        Raises:
            TransportError: Network failure or non-2xx status
            ProtocolError: Body is not valid JSON
        """
        with request_scope():
            return await self._exchange(method, path, json, token)

    async def _exchange(self, method: str, path: str, json: Any, token: str | None) -> Any:
        url = f"{self.base_url}{path}"
        headers = {"Cookie": f"{SESSION_COOKIE}={token}"} if token else None
        start_time = time.perf_counter()

        try:
            response = await self._client.request(method, url, json=json, headers=headers)
        except httpx.HTTPError as e:
            duration_ms = int((time.perf_counter() - start_time) * 1000)
            logger.error(
                "Request failed",
                extra={
                    "method": method,
                    "path": path,
                    "duration_ms": duration_ms,
                    "error": str(e),
                },
            )
            raise TransportError(f"{method} {path} failed: {e}", url) from e

        duration_ms = int((time.perf_counter() - start_time) * 1000)
        log_extra = {
            "method": method,
            "path": path,
            "status": response.status_code,
            "duration_ms": duration_ms,
        }

        if not response.is_success:
            logger.warning("Request completed", extra=log_extra)
            raise TransportError(
                f"{method} {path} returned HTTP {response.status_code}",
                url,
                status_code=response.status_code,
            )

        logger.info("Request completed", extra=log_extra)

        if not response.content:
            return None

        try:
            return response.json()
        except ValueError as e:
            raise ProtocolError(
                f"{method} {path} returned invalid JSON",
                details={"url": url, "body": response.text[:500]},
            ) from e

    async def aclose(self) -> None:
        """Close the underlying client if this transport created it."""
        if self._owns_client:
            await self._client.aclose()

    async def __aenter__(self) -> "Transport":
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()
