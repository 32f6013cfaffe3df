"""Client configuration."""

from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict

from .errors import UnknownServerError

# config/.env lives next to the package:
# ticktick_sync/core/ -> ticktick_sync/ -> project_root/ -> config/
BASE_DIR = Path(__file__).resolve().parent.parent.parent
ENV_FILE = BASE_DIR / "config" / ".env"

# Известные серверы. TickTick и Dida365 - один и тот же API на разных доменах.
SERVERS: dict[str, str] = {
    "ticktick": "https://api.ticktick.com/api/v2",
    "dida365": "https://api.dida365.com/api/v2",
}


class Settings(BaseSettings):
    """
    Client settings loaded from environment variables.

    Все настройки можно переопределить через переменные окружения.
    Пример: TICKTICK_SERVER=ticktick LOG_FORMAT=simple python my_script.py
    """

    # =========================================================================
    # Server
    # =========================================================================
    # TICKTICK_SERVER - имя сервера из SERVERS ("ticktick" или "dida365")
    TICKTICK_SERVER: str = "dida365"

    # TICKTICK_BASE_URL - явный адрес API, перекрывает TICKTICK_SERVER
    TICKTICK_BASE_URL: str | None = None

    # =========================================================================
    # Credentials
    # =========================================================================
    TICKTICK_USERNAME: str | None = None
    TICKTICK_PASSWORD: str | None = None

    # =========================================================================
    # Transport
    # =========================================================================
    # HTTP_TIMEOUT - таймаут одного HTTP обмена в секундах
    HTTP_TIMEOUT: float = 30.0

    # =========================================================================
    # Sync
    # =========================================================================
    # SKIP_MALFORMED_TASKS - False: одна битая задача в ответе sync
    # прерывает всю синхронизацию (кэш не меняется).
    # True: битая задача пропускается с предупреждением в логе.
    SKIP_MALFORMED_TASKS: bool = False

    # =========================================================================
    # Logging
    # =========================================================================
    # LOG_LEVEL - уровень логирования: DEBUG, INFO, WARNING, ERROR, CRITICAL
    LOG_LEVEL: str = "INFO"

    # LOG_FORMAT - "json" (структурированный) или "simple" (человекочитаемый)
    LOG_FORMAT: str = "json"

    model_config = SettingsConfigDict(
        env_file=str(ENV_FILE), env_file_encoding="utf-8", case_sensitive=True, extra="ignore"
    )

    def resolve_base_url(self, server: str | None = None) -> str:
        """
        Return the API base URL for a server name.

        Args:
            server: Server name from SERVERS (defaults to TICKTICK_SERVER)

        Returns:
            Base URL without trailing slash

        Raises:
            UnknownServerError: If the server name is not known and no
                TICKTICK_BASE_URL override is set
        """
        if self.TICKTICK_BASE_URL:
            return self.TICKTICK_BASE_URL.rstrip("/")

        name = server or self.TICKTICK_SERVER
        try:
            return SERVERS[name]
        except KeyError:
            raise UnknownServerError(name) from None


# Create global settings instance
settings = Settings()
