"""Base classes for wire models and the timestamp codec."""

from datetime import UTC, datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, model_validator
from pydantic.alias_generators import to_camel

# Формат времени на сервере: 2022-12-12T15:04:05.000+0000
# Всегда UTC и всегда явный суффикс "+0000".
TIMESTAMP_FORMAT = "%Y-%m-%dT%H:%M:%S.%f%z"


def utc_now() -> datetime:
    """Return current UTC datetime (aware)."""
    return datetime.now(UTC)


def format_timestamp(value: datetime | None) -> str:
    """
    Encode a datetime in the server wire format.

    Naive datetimes are taken as UTC, aware ones are converted to UTC.
    None encodes to "" (callers omit the field entirely).

    Пример:
        format_timestamp(datetime(2023, 1, 1, 11, 30, 59, tzinfo=UTC))
        # "2023-01-01T11:30:59.000+0000"
    """
    if value is None:
        return ""
    if value.tzinfo is not None:
        value = value.astimezone(UTC)
    return f"{value:%Y-%m-%dT%H:%M:%S}.{value.microsecond // 1000:03d}+0000"


def parse_timestamp(value: str | datetime | None) -> datetime | None:
    """
    Decode a wire timestamp into an aware UTC datetime.

    Empty strings and None decode to None.

    Raises:
        ValueError: If the value is not a datetime or a string in the wire format
    """
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        parsed = value
    elif isinstance(value, str):
        parsed = datetime.strptime(value, TIMESTAMP_FORMAT)
    else:
        raise ValueError(f"timestamp must be a string, got {type(value).__name__}")
    if parsed.tzinfo is None:
        return parsed.replace(tzinfo=UTC)
    return parsed.astimezone(UTC)


class WireModel(BaseModel):
    """
    Base class for all models exchanged with the server.

    - snake_case в Python, camelCase на проводе (projectId, startDate, ...)
    - неизвестные поля сервера игнорируются
    - null от сервера означает "поле отсутствует" (берётся default)
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
    )

    @model_validator(mode="before")
    @classmethod
    def _drop_nulls(cls, data: Any) -> Any:
        if isinstance(data, dict):
            return {key: value for key, value in data.items() if value is not None}
        return data
