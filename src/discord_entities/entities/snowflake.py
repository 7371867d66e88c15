from __future__ import annotations

from datetime import datetime, timedelta, timezone
from typing import Any, Union

from ..core.coercion import SNOWFLAKE_MAX
from ..core.errors import InvalidSnowflakeError
from ..core.time_utils import to_epoch_millis

DISCORD_EPOCH_MS = 1420070400000
TIMESTAMP_SHIFT = 22

SnowflakeLike = Union[int, str]


def parse_snowflake(value: Any) -> int:
    """Validate ``value`` as a snowflake and return it as an ``int``.

    Accepts non-negative integers below 2**64 and their decimal string form.
    """
    if isinstance(value, bool):
        raise InvalidSnowflakeError(value)
    if isinstance(value, int):
        parsed = value
    elif isinstance(value, str):
        token = value.strip()
        if not token.isdigit() or not token.isascii():
            raise InvalidSnowflakeError(value)
        parsed = int(token)
    else:
        raise InvalidSnowflakeError(value)
    if parsed < 0 or parsed > SNOWFLAKE_MAX:
        raise InvalidSnowflakeError(value)
    return parsed


def snowflake_time(snowflake: SnowflakeLike) -> datetime:
    millis = (parse_snowflake(snowflake) >> TIMESTAMP_SHIFT) + DISCORD_EPOCH_MS
    return datetime(1970, 1, 1, tzinfo=timezone.utc) + timedelta(milliseconds=millis)


def time_to_snowflake(moment: datetime) -> int:
    """Smallest snowflake that could have been created at ``moment``."""
    millis = to_epoch_millis(moment) - DISCORD_EPOCH_MS
    if millis < 0:
        raise InvalidSnowflakeError(moment)
    return parse_snowflake(millis << TIMESTAMP_SHIFT)


class SnowflakeMixin:
    id: int

    @property
    def id_str(self) -> str:
        return str(self.id)

    @property
    def created_at(self) -> datetime:
        return snowflake_time(self.id)


__all__ = [
    "DISCORD_EPOCH_MS",
    "SnowflakeLike",
    "SnowflakeMixin",
    "parse_snowflake",
    "snowflake_time",
    "time_to_snowflake",
]
