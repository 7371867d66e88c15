"""Mention markup helpers.

All helpers are pure functions of a snowflake (plus whatever extra fields the
markup needs), so any id-bearing value can be mentioned without constructing
an entity.
"""

from __future__ import annotations

import re
from datetime import datetime
from enum import Enum
from typing import Pattern, Union

from ..core.errors import InvalidArgumentError, InvalidSnowflakeError
from ..core.time_utils import to_epoch_millis
from .coded import StringCodedEnum
from .snowflake import SnowflakeLike, parse_snowflake

_EMOJI_NAME = re.compile(r"^[A-Za-z0-9_~]{1,32}$")
_COMMAND_NAME = re.compile(r"^[\w-]{1,32}( [\w-]{1,32}){0,2}$")


class TimeFormat(StringCodedEnum):
    TIME_SHORT = "t"
    TIME_LONG = "T"
    DATE_SHORT = "d"
    DATE_LONG = "D"
    DATE_TIME_SHORT = "f"
    DATE_TIME_LONG = "F"
    RELATIVE = "R"

    @property
    def style(self) -> str:
        return self.key


DEFAULT_TIME_FORMAT = TimeFormat.DATE_TIME_SHORT


class MentionType(Enum):
    USER = re.compile(r"<@!?([0-9]+)>")
    ROLE = re.compile(r"<@&([0-9]+)>")
    CHANNEL = re.compile(r"<#([0-9]+)>")
    EMOJI = re.compile(r"<a?:([A-Za-z0-9_~]+):([0-9]+)>")
    SLASH_COMMAND = re.compile(r"</([\w-]+(?: [\w-]+){0,2}):([0-9]+)>")
    HERE = re.compile(r"@here")
    EVERYONE = re.compile(r"@everyone")

    @property
    def pattern(self) -> Pattern[str]:
        return self.value


def user_mention(user_id: SnowflakeLike) -> str:
    return f"<@{parse_snowflake(user_id)}>"


def channel_mention(channel_id: SnowflakeLike) -> str:
    return f"<#{parse_snowflake(channel_id)}>"


def role_mention(role_id: SnowflakeLike) -> str:
    return f"<@&{parse_snowflake(role_id)}>"


def emoji_mention(name: str, emoji_id: SnowflakeLike, *, animated: bool = False) -> str:
    if not _EMOJI_NAME.match(name or ""):
        raise InvalidArgumentError(f"invalid emoji name: {name!r}")
    prefix = "a" if animated else ""
    return f"<{prefix}:{name}:{parse_snowflake(emoji_id)}>"


def slash_command_mention(name: str, command_id: SnowflakeLike) -> str:
    """``name`` may include up to two sub-command levels (``"car flow status"``)."""
    if not _COMMAND_NAME.match(name or ""):
        raise InvalidArgumentError(f"invalid command name: {name!r}")
    return f"</{name}:{parse_snowflake(command_id)}>"


def timestamp_mention(
    moment: Union[datetime, int], style: TimeFormat = DEFAULT_TIME_FORMAT
) -> str:
    if isinstance(moment, datetime):
        seconds = to_epoch_millis(moment) // 1000
    elif isinstance(moment, int) and not isinstance(moment, bool):
        seconds = moment
    else:
        raise InvalidArgumentError(f"invalid timestamp: {moment!r}")
    return f"<t:{seconds}:{style.style}>"


def find_mentions(content: str, mention_type: MentionType) -> list[int]:
    """Return the mentioned ids in order of appearance, without duplicates.

    ``HERE`` and ``EVERYONE`` carry no id and always yield an empty list.
    """
    if mention_type in (MentionType.HERE, MentionType.EVERYONE):
        return []
    seen: list[int] = []
    for match in mention_type.pattern.finditer(content or ""):
        try:
            snowflake = parse_snowflake(match.groups()[-1])
        except InvalidSnowflakeError:
            continue
        if snowflake not in seen:
            seen.append(snowflake)
    return seen


def mentions_everyone(content: str) -> bool:
    text = content or ""
    return bool(
        MentionType.EVERYONE.pattern.search(text)
        or MentionType.HERE.pattern.search(text)
    )


__all__ = [
    "DEFAULT_TIME_FORMAT",
    "MentionType",
    "TimeFormat",
    "channel_mention",
    "emoji_mention",
    "find_mentions",
    "mentions_everyone",
    "role_mention",
    "slash_command_mention",
    "timestamp_mention",
    "user_mention",
]
