"""Auth service: exchange credentials for a session token."""

import json

from ..core.errors import AuthenticationError
from ..core.logging import get_logger
from ..integrations.ticktick import Transport
from ..models import Session

logger = get_logger(__name__)

SIGNIN_PATH = "/user/signin"


class AuthService:
    """Signs in and stores the token on the session."""

    def __init__(self, transport: Transport, session: Session):
        self.transport = transport
        self.session = session

    async def sign_in(self, username: str, password: str) -> str:
        """
        Exchange credentials for a session token.

        Returns:
            The token (also stored on the session)

        Raises:
            TransportError: Network failure or non-2xx status
            AuthenticationError: Response carries no token
        """
        data = await self.transport.request(
            "POST", SIGNIN_PATH, json={"username": username, "password": password}
        )

        token = data.get("token") if isinstance(data, dict) else None
        if not token or not isinstance(token, str):
            raise AuthenticationError(json.dumps(data, ensure_ascii=False, default=str))

        self.session.token = token
        logger.info("Signed in", extra={"username": username})
        return token
