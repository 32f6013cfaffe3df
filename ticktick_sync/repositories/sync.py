"""Sync repository: full-state fetch."""

from ..core.errors import ProtocolError, SyncPayloadError
from ..integrations.ticktick import Transport
from ..models import Session, SyncPayload
from .base import BaseRepository

SYNC_PATH = "/batch/check/0"


class SyncRepository(BaseRepository[SyncPayload]):
    """Repository for the full-state sync endpoint."""

    def __init__(self, transport: Transport, session: Session):
        super().__init__(SyncPayload, transport, session)

    async def fetch(self) -> SyncPayload:
        """
        Fetch the complete server state.

        Raises:
            TransportError: Network failure or non-2xx status
            SyncPayloadError: Response does not look like a sync payload
        """
        data = await self.get(SYNC_PATH)
        try:
            return self.parse(data)
        except ProtocolError as e:
            raise SyncPayloadError(str(e), details=e.details) from e
