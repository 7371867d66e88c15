from __future__ import annotations

from enum import unique

from .coded import UNKNOWN_KEY, CodedEnum

NO_SORT_BUCKET = -1


@unique
class ChannelType(CodedEnum):
    """Channel kinds with their sorting bucket and guild applicability.

    Channels in the same sorting bucket are ordered together in the client;
    ``-1`` means the type is never sorted in the channel list.
    """

    TEXT = (0, 0, True)
    PRIVATE = (1, NO_SORT_BUCKET, False)
    VOICE = (2, 1, True)
    GROUP = (3, NO_SORT_BUCKET, False)
    CATEGORY = (4, 2, True)
    NEWS = (5, 0, True)
    GUILD_NEWS_THREAD = (10, NO_SORT_BUCKET, True)
    GUILD_PUBLIC_THREAD = (11, NO_SORT_BUCKET, True)
    GUILD_PRIVATE_THREAD = (12, NO_SORT_BUCKET, True)
    STAGE = (13, 1, True)
    FORUM = (15, 0, True)
    MEDIA = (16, 0, True)
    UNKNOWN = (UNKNOWN_KEY, -2, False)

    def __init__(self, key: int, sort_bucket: int, is_guild: bool) -> None:
        self.sort_bucket = sort_bucket
        self.is_guild = is_guild

    @property
    def is_audio(self) -> bool:
        return self in (ChannelType.VOICE, ChannelType.STAGE)

    @property
    def is_thread(self) -> bool:
        return self in _THREAD_TYPES

    @property
    def is_message(self) -> bool:
        """Whether messages can be sent in channels of this type."""
        return self in _MESSAGE_TYPES


_THREAD_TYPES = frozenset(
    {
        ChannelType.GUILD_NEWS_THREAD,
        ChannelType.GUILD_PUBLIC_THREAD,
        ChannelType.GUILD_PRIVATE_THREAD,
    }
)
_MESSAGE_TYPES = _THREAD_TYPES | {
    ChannelType.TEXT,
    ChannelType.NEWS,
    ChannelType.VOICE,
    ChannelType.STAGE,
    ChannelType.PRIVATE,
    ChannelType.GROUP,
}


__all__ = ["ChannelType"]
