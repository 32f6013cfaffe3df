"""Base repository with authenticated calls and response parsing."""

from typing import Any, Generic, TypeVar

from pydantic import ValidationError

from ..core.errors import NotAuthenticatedError, ProtocolError
from ..integrations.ticktick import Transport
from ..models import Session, WireModel

# TypeVar для Generic класса - позволяет работать с любой wire-моделью
ModelType = TypeVar("ModelType", bound=WireModel)


class BaseRepository(Generic[ModelType]):
    """
    Базовый репозиторий поверх HTTP API.

    Generic[ModelType] означает, что репозиторий разбирает ответы сервера
    в конкретную модель (TaskRecord, SyncPayload, ...).

    Пример использования:
        repo = BaseRepository[TaskRecord](TaskRecord, transport, session)
        task = repo.parse({"id": "t1", "title": "Buy milk"})
    """

    def __init__(self, model: type[ModelType], transport: Transport, session: Session):
        """
        Args:
            model: Wire model class for responses
            transport: HTTP transport
            session: Session holding the token and the cache
        """
        self.model = model
        self.transport = transport
        self.session = session

    @property
    def token(self) -> str:
        """
        Session token for authenticated calls.

        Raises:
            NotAuthenticatedError: If nobody has signed in yet
        """
        if not self.session.token:
            raise NotAuthenticatedError()
        return self.session.token

    async def get(self, path: str) -> Any:
        """Authenticated GET, returns decoded JSON."""
        return await self.transport.request("GET", path, token=self.token)

    async def post(self, path: str, body: Any) -> Any:
        """Authenticated POST with a JSON body, returns decoded JSON."""
        return await self.transport.request("POST", path, json=body, token=self.token)

    def parse(self, data: Any) -> ModelType:
        """
        Validate a decoded response into the repository model.

        Raises:
            ProtocolError: If the payload does not match the model
        """
        try:
            return self.model.model_validate(data)
        except ValidationError as e:
            raise ProtocolError(
                f"unexpected {self.model.__name__} payload",
                details={"errors": e.errors(include_url=False)},
            ) from e
