"""Channel entities built from small capability mixins.

Each capability (guild placement, messaging, permission overrides, audio, ...)
is a frozen keyword-only dataclass contributing its own fields, payload parser
and helpers. Concrete channels combine the capabilities they support, so
``isinstance(channel, AudioChannelMixin)`` answers "is this an audio channel"
without a deep class hierarchy.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import datetime
from enum import unique
from typing import Any, ClassVar, Iterable, Mapping, Optional, Union

from ..core.coercion import (
    coerce_bool,
    coerce_int,
    coerce_mapping,
    coerce_snowflake,
    coerce_snowflake_list,
    coerce_str,
    require_mapping,
    require_snowflake,
    require_str,
)
from ..core.errors import InvalidArgumentError, PayloadError, UnknownKeyError
from ..core.logging_utils import log_event
from ..core.time_utils import parse_iso_timestamp
from ..core.transport import EntityTransport, Routes
from . import cdn
from .base import Entity, resolve_code
from .channel_type import ChannelType
from .coded import UNKNOWN_KEY, CodedEnum
from .invite import DEFAULT_INVITE_AGE, MAX_INVITE_AGE, MAX_INVITE_USES, Invite
from .mentions import channel_mention
from .message import Message, check_message_content
from .permission import ALL_PERMISSIONS, Permission, parse_permissions
from .snowflake import SnowflakeLike, parse_snowflake
from .user import User

logger = logging.getLogger(__name__)

MAX_NAME_LENGTH = 100
MAX_TOPIC_LENGTH = 1024
MAX_SLOWMODE = 21600
DEFAULT_BITRATE = 64000


@unique
class AutoArchiveDuration(CodedEnum):
    """Minutes of inactivity before a thread is archived.

    Durations are chosen by the caller, so unrecognized keys are rejected.
    """

    TIME_1_HOUR = 60
    TIME_24_HOURS = 1440
    TIME_3_DAYS = 4320
    TIME_1_WEEK = 10080

    @property
    def minutes(self) -> int:
        return self.key


@unique
class OverrideTargetType(CodedEnum):
    ROLE = 0
    MEMBER = 1
    UNKNOWN = UNKNOWN_KEY


@dataclass(frozen=True)
class PermissionOverride:
    """Allow/deny pair for one role or member; other bits are inherited."""

    id: int
    target_type: OverrideTargetType
    allow_raw: int = 0
    deny_raw: int = 0

    @classmethod
    def from_payload(cls, payload: Any) -> "PermissionOverride":
        data = require_mapping(payload, kind="permission overwrite")
        return cls(
            id=require_snowflake(data, "id"),
            target_type=resolve_code(
                OverrideTargetType, data.get("type"), field="overwrite.type"
            ),
            allow_raw=parse_permissions(data.get("allow")),
            deny_raw=parse_permissions(data.get("deny")),
        )

    @property
    def inherit_raw(self) -> int:
        return ~(self.allow_raw | self.deny_raw) & ALL_PERMISSIONS

    @property
    def allowed(self) -> frozenset[Permission]:
        return Permission.from_bitfield(self.allow_raw)

    @property
    def denied(self) -> frozenset[Permission]:
        return Permission.from_bitfield(self.deny_raw)

    @property
    def inherited(self) -> frozenset[Permission]:
        return Permission.from_bitfield(self.inherit_raw)

    @property
    def is_role_override(self) -> bool:
        return self.target_type is OverrideTargetType.ROLE

    @property
    def is_member_override(self) -> bool:
        return self.target_type is OverrideTargetType.MEMBER


@dataclass(frozen=True)
class ForumTag:
    id: int
    name: str
    moderated: bool = False
    emoji_id: Optional[int] = None
    emoji_name: Optional[str] = None

    @classmethod
    def from_payload(cls, payload: Any) -> "ForumTag":
        data = require_mapping(payload, kind="forum tag")
        return cls(
            id=require_snowflake(data, "id"),
            name=require_str(data, "name"),
            moderated=coerce_bool(data.get("moderated")),
            emoji_id=coerce_snowflake(data.get("emoji_id")),
            emoji_name=coerce_str(data.get("emoji_name")),
        )


def _parse_archive_duration(raw: Any) -> Optional[AutoArchiveDuration]:
    if raw is None:
        return None
    try:
        return AutoArchiveDuration.from_key(coerce_int(raw))
    except UnknownKeyError:
        log_event(
            logger,
            logging.DEBUG,
            "discord.entities.unknown_code",
            enum=AutoArchiveDuration.__name__,
            field="auto_archive_duration",
            code=raw,
        )
        return None


@dataclass(frozen=True, eq=False, kw_only=True)
class Channel(Entity):
    """Common base: every channel has an id and may be bound to a transport."""

    channel_type: ClassVar[ChannelType] = ChannelType.UNKNOWN

    id: int
    transport: Optional[EntityTransport] = field(default=None, repr=False)

    @classmethod
    def from_payload(
        cls,
        payload: Any,
        *,
        guild_id: Optional[int] = None,
        transport: Optional[EntityTransport] = None,
    ) -> "Channel":
        data = require_mapping(payload, kind="channel")
        fields: dict[str, Any] = {
            "id": require_snowflake(data, "id"),
            "transport": transport,
        }
        # Every capability in the MRO contributes the fields it declares.
        for klass in reversed(cls.__mro__):
            parser = vars(klass).get("_parse_fields")
            if parser is not None:
                fields.update(parser.__func__(data, guild_id))
        return cls(**fields)

    @property
    def type(self) -> ChannelType:
        return self.channel_type

    @property
    def mention(self) -> str:
        return channel_mention(self.id)


@dataclass(frozen=True, eq=False, kw_only=True)
class GuildChannelMixin:
    guild_id: int
    name: str
    position: int = 0

    @staticmethod
    def _parse_fields(data: Mapping[str, Any], guild_id: Optional[int]) -> dict[str, Any]:
        resolved_guild = coerce_snowflake(data.get("guild_id")) or guild_id
        if resolved_guild is None:
            raise PayloadError("guild channel payload is missing 'guild_id'", key="guild_id")
        return {
            "guild_id": resolved_guild,
            "name": require_str(data, "name"),
            "position": coerce_int(data.get("position"), default=0) or 0,
        }

    @property
    def jump_url(self) -> str:
        return cdn.channel_jump_url(self.guild_id, self.id)  # type: ignore[attr-defined]

    async def delete(self, *, reason: Optional[str] = None) -> None:
        transport = self._require_transport()  # type: ignore[attr-defined]
        route = Routes.DELETE_CHANNEL.compile(channel_id=self.id)  # type: ignore[attr-defined]
        await transport.request(route, reason=reason)


@dataclass(frozen=True, eq=False, kw_only=True)
class CategorizableMixin:
    parent_id: Optional[int] = None

    @staticmethod
    def _parse_fields(data: Mapping[str, Any], guild_id: Optional[int]) -> dict[str, Any]:
        return {"parent_id": coerce_snowflake(data.get("parent_id"))}

    @property
    def category_id(self) -> Optional[int]:
        return self.parent_id

    def is_synced_with(self, category: "Category") -> bool:
        """Whether this channel inherits its overrides from ``category``."""
        if self.parent_id != category.id:
            return False
        own = getattr(self, "permission_overrides", ())
        return set(own) == set(category.permission_overrides)


@dataclass(frozen=True, eq=False, kw_only=True)
class MessageChannelMixin:
    last_message_id: Optional[int] = None

    @staticmethod
    def _parse_fields(data: Mapping[str, Any], guild_id: Optional[int]) -> dict[str, Any]:
        return {"last_message_id": coerce_snowflake(data.get("last_message_id"))}

    @property
    def has_latest_message(self) -> bool:
        return self.last_message_id is not None

    def message_jump_url(self, message_id: SnowflakeLike) -> str:
        return cdn.message_jump_url(
            getattr(self, "guild_id", None),
            self.id,  # type: ignore[attr-defined]
            parse_snowflake(message_id),
        )


@dataclass(frozen=True, eq=False, kw_only=True)
class PermissionContainerMixin:
    permission_overrides: tuple[PermissionOverride, ...] = ()

    @staticmethod
    def _parse_fields(data: Mapping[str, Any], guild_id: Optional[int]) -> dict[str, Any]:
        raw = data.get("permission_overwrites")
        overrides = tuple(
            PermissionOverride.from_payload(item)
            for item in (raw if isinstance(raw, list) else ())
        )
        return {"permission_overrides": overrides}

    def override_for(self, target: SnowflakeLike) -> Optional[PermissionOverride]:
        target_id = parse_snowflake(target)
        for override in self.permission_overrides:
            if override.id == target_id:
                return override
        return None

    @property
    def role_overrides(self) -> tuple[PermissionOverride, ...]:
        return tuple(o for o in self.permission_overrides if o.is_role_override)

    @property
    def member_overrides(self) -> tuple[PermissionOverride, ...]:
        return tuple(o for o in self.permission_overrides if o.is_member_override)


@dataclass(frozen=True, eq=False, kw_only=True)
class NsfwMixin:
    nsfw: bool = False

    @staticmethod
    def _parse_fields(data: Mapping[str, Any], guild_id: Optional[int]) -> dict[str, Any]:
        return {"nsfw": coerce_bool(data.get("nsfw"))}


@dataclass(frozen=True, eq=False, kw_only=True)
class SlowmodeMixin:
    slowmode: int = 0

    @staticmethod
    def _parse_fields(data: Mapping[str, Any], guild_id: Optional[int]) -> dict[str, Any]:
        return {"slowmode": coerce_int(data.get("rate_limit_per_user"), default=0) or 0}


@dataclass(frozen=True, eq=False, kw_only=True)
class AudioChannelMixin:
    bitrate: int = DEFAULT_BITRATE
    user_limit: int = 0
    rtc_region: Optional[str] = None

    @staticmethod
    def _parse_fields(data: Mapping[str, Any], guild_id: Optional[int]) -> dict[str, Any]:
        return {
            "bitrate": coerce_int(data.get("bitrate"), default=DEFAULT_BITRATE)
            or DEFAULT_BITRATE,
            "user_limit": coerce_int(data.get("user_limit"), default=0) or 0,
            "rtc_region": coerce_str(data.get("rtc_region")),
        }

    @property
    def has_automatic_region(self) -> bool:
        return self.rtc_region is None


@dataclass(frozen=True, eq=False, kw_only=True)
class ThreadContainerMixin:
    default_auto_archive_duration: Optional[AutoArchiveDuration] = None
    default_thread_slowmode: int = 0

    @staticmethod
    def _parse_fields(data: Mapping[str, Any], guild_id: Optional[int]) -> dict[str, Any]:
        return {
            "default_auto_archive_duration": _parse_archive_duration(
                data.get("default_auto_archive_duration")
            ),
            "default_thread_slowmode": coerce_int(
                data.get("default_thread_rate_limit_per_user"), default=0
            )
            or 0,
        }


@dataclass(frozen=True, eq=False, kw_only=True)
class TopicMixin:
    topic: Optional[str] = None

    @staticmethod
    def _parse_fields(data: Mapping[str, Any], guild_id: Optional[int]) -> dict[str, Any]:
        return {"topic": coerce_str(data.get("topic"))}


class InviteContainerMixin:
    """Channels that accept invites."""

    async def create_invite(
        self,
        *,
        max_age: int = DEFAULT_INVITE_AGE,
        max_uses: int = 0,
        temporary: bool = False,
        unique: bool = False,
        reason: Optional[str] = None,
    ) -> Invite:
        if not 0 <= max_age <= MAX_INVITE_AGE:
            raise InvalidArgumentError(
                f"max_age must be between 0 and {MAX_INVITE_AGE} seconds, got {max_age}"
            )
        if not 0 <= max_uses <= MAX_INVITE_USES:
            raise InvalidArgumentError(
                f"max_uses must be between 0 and {MAX_INVITE_USES}, got {max_uses}"
            )
        transport = self._require_transport()  # type: ignore[attr-defined]
        response = await transport.request(
            Routes.CREATE_INVITE.compile(channel_id=self.id),  # type: ignore[attr-defined]
            payload={
                "max_age": max_age,
                "max_uses": max_uses,
                "temporary": temporary,
                "unique": unique,
            },
            reason=reason,
        )
        return Invite.from_payload(response, transport=transport)


@dataclass(frozen=True)
class ForumPost:
    """Starter message and thread created together by a forum post."""

    message: Message
    thread: "ThreadChannel"


class PostContainerMixin:
    """Forum-like channels where every thread starts with a post."""

    async def create_post(
        self,
        name: str,
        content: str,
        *,
        tag_ids: Iterable[SnowflakeLike] = (),
        reason: Optional[str] = None,
    ) -> ForumPost:
        if not isinstance(name, str) or not name.strip():
            raise InvalidArgumentError("post name may not be blank")
        if len(name) > MAX_NAME_LENGTH:
            raise InvalidArgumentError(
                f"post name may not exceed {MAX_NAME_LENGTH} characters"
            )
        check_message_content(content)
        payload: dict[str, Any] = {"name": name, "message": {"content": content}}
        tags = [str(parse_snowflake(tag)) for tag in tag_ids]
        if tags:
            payload["applied_tags"] = tags
        transport = self._require_transport()  # type: ignore[attr-defined]
        response = await transport.request(
            Routes.CREATE_FORUM_POST.compile(channel_id=self.id),  # type: ignore[attr-defined]
            payload=payload,
            reason=reason,
        )
        data = require_mapping(response, kind="forum post")
        guild_id = self.guild_id  # type: ignore[attr-defined]
        thread = ThreadChannel.from_payload(data, guild_id=guild_id, transport=transport)
        if "message" not in data:
            raise PayloadError("forum post response is missing 'message'", key="message")
        message = Message.from_payload(
            data["message"], guild_id=guild_id, transport=transport
        )
        return ForumPost(message=message, thread=thread)


@dataclass(frozen=True, eq=False, kw_only=True)
class TextChannel(
    InviteContainerMixin,
    ThreadContainerMixin,
    SlowmodeMixin,
    NsfwMixin,
    TopicMixin,
    PermissionContainerMixin,
    MessageChannelMixin,
    CategorizableMixin,
    GuildChannelMixin,
    Channel,
):
    channel_type: ClassVar[ChannelType] = ChannelType.TEXT


@dataclass(frozen=True, eq=False, kw_only=True)
class NewsChannel(
    InviteContainerMixin,
    ThreadContainerMixin,
    NsfwMixin,
    TopicMixin,
    PermissionContainerMixin,
    MessageChannelMixin,
    CategorizableMixin,
    GuildChannelMixin,
    Channel,
):
    channel_type: ClassVar[ChannelType] = ChannelType.NEWS


@dataclass(frozen=True, eq=False, kw_only=True)
class VoiceChannel(
    InviteContainerMixin,
    AudioChannelMixin,
    SlowmodeMixin,
    NsfwMixin,
    PermissionContainerMixin,
    MessageChannelMixin,
    CategorizableMixin,
    GuildChannelMixin,
    Channel,
):
    channel_type: ClassVar[ChannelType] = ChannelType.VOICE


@dataclass(frozen=True, eq=False, kw_only=True)
class StageChannel(
    InviteContainerMixin,
    AudioChannelMixin,
    SlowmodeMixin,
    NsfwMixin,
    TopicMixin,
    PermissionContainerMixin,
    MessageChannelMixin,
    CategorizableMixin,
    GuildChannelMixin,
    Channel,
):
    channel_type: ClassVar[ChannelType] = ChannelType.STAGE


@dataclass(frozen=True, eq=False, kw_only=True)
class Category(PermissionContainerMixin, GuildChannelMixin, Channel):
    channel_type: ClassVar[ChannelType] = ChannelType.CATEGORY


@dataclass(frozen=True, eq=False, kw_only=True)
class ForumChannel(
    PostContainerMixin,
    InviteContainerMixin,
    ThreadContainerMixin,
    SlowmodeMixin,
    NsfwMixin,
    TopicMixin,
    PermissionContainerMixin,
    CategorizableMixin,
    GuildChannelMixin,
    Channel,
):
    channel_type: ClassVar[ChannelType] = ChannelType.FORUM

    available_tags: tuple[ForumTag, ...] = ()

    @staticmethod
    def _parse_fields(data: Mapping[str, Any], guild_id: Optional[int]) -> dict[str, Any]:
        return {"available_tags": _parse_forum_tags(data.get("available_tags"))}


@dataclass(frozen=True, eq=False, kw_only=True)
class MediaChannel(
    PostContainerMixin,
    InviteContainerMixin,
    ThreadContainerMixin,
    SlowmodeMixin,
    NsfwMixin,
    TopicMixin,
    PermissionContainerMixin,
    CategorizableMixin,
    GuildChannelMixin,
    Channel,
):
    channel_type: ClassVar[ChannelType] = ChannelType.MEDIA

    available_tags: tuple[ForumTag, ...] = ()

    @staticmethod
    def _parse_fields(data: Mapping[str, Any], guild_id: Optional[int]) -> dict[str, Any]:
        return {"available_tags": _parse_forum_tags(data.get("available_tags"))}


def _parse_forum_tags(value: Any) -> tuple[ForumTag, ...]:
    if not isinstance(value, list):
        return ()
    return tuple(ForumTag.from_payload(item) for item in value)


@dataclass(frozen=True, eq=False, kw_only=True)
class ThreadChannel(SlowmodeMixin, MessageChannelMixin, GuildChannelMixin, Channel):
    channel_type: ClassVar[ChannelType] = ChannelType.GUILD_PUBLIC_THREAD

    thread_type: ChannelType = ChannelType.GUILD_PUBLIC_THREAD
    parent_id: int
    owner_id: Optional[int] = None
    archived: bool = False
    locked: bool = False
    invitable: bool = True
    auto_archive_duration: Optional[AutoArchiveDuration] = None
    archived_at: Optional[datetime] = None
    message_count: int = 0
    member_count: int = 0
    applied_tag_ids: tuple[int, ...] = ()

    @staticmethod
    def _parse_fields(data: Mapping[str, Any], guild_id: Optional[int]) -> dict[str, Any]:
        metadata = coerce_mapping(data.get("thread_metadata"))
        return {
            "thread_type": resolve_code(ChannelType, data.get("type"), field="channel.type"),
            "parent_id": require_snowflake(data, "parent_id"),
            "owner_id": coerce_snowflake(data.get("owner_id")),
            "archived": coerce_bool(metadata.get("archived")),
            "locked": coerce_bool(metadata.get("locked")),
            "invitable": coerce_bool(metadata.get("invitable"), default=True),
            "auto_archive_duration": _parse_archive_duration(
                metadata.get("auto_archive_duration")
            ),
            "archived_at": parse_iso_timestamp(metadata.get("archive_timestamp")),
            "message_count": coerce_int(data.get("message_count"), default=0) or 0,
            "member_count": coerce_int(data.get("member_count"), default=0) or 0,
            "applied_tag_ids": coerce_snowflake_list(data.get("applied_tags")),
        }

    @property
    def type(self) -> ChannelType:
        return self.thread_type

    @property
    def is_public(self) -> bool:
        return self.thread_type is not ChannelType.GUILD_PRIVATE_THREAD

    def is_owner(self, user: SnowflakeLike) -> bool:
        return self.owner_id == parse_snowflake(user)


@dataclass(frozen=True, eq=False, kw_only=True)
class PrivateChannel(MessageChannelMixin, Channel):
    channel_type: ClassVar[ChannelType] = ChannelType.PRIVATE

    recipient: Optional[User] = None

    @staticmethod
    def _parse_fields(data: Mapping[str, Any], guild_id: Optional[int]) -> dict[str, Any]:
        recipients = data.get("recipients")
        first = recipients[0] if isinstance(recipients, list) and recipients else None
        return {"recipient": User.from_payload(first) if first else None}

    @property
    def jump_url(self) -> str:
        return cdn.channel_jump_url(None, self.id)


@dataclass(frozen=True, eq=False, kw_only=True)
class GroupChannel(MessageChannelMixin, Channel):
    channel_type: ClassVar[ChannelType] = ChannelType.GROUP

    name: Optional[str] = None
    owner_id: Optional[int] = None
    icon_hash: Optional[str] = None
    recipients: tuple[User, ...] = ()

    @staticmethod
    def _parse_fields(data: Mapping[str, Any], guild_id: Optional[int]) -> dict[str, Any]:
        raw = data.get("recipients")
        return {
            "name": coerce_str(data.get("name")),
            "owner_id": coerce_snowflake(data.get("owner_id")),
            "icon_hash": coerce_str(data.get("icon")),
            "recipients": tuple(
                User.from_payload(item) for item in (raw if isinstance(raw, list) else ())
            ),
        }

    @property
    def jump_url(self) -> str:
        return cdn.channel_jump_url(None, self.id)


@dataclass(frozen=True, eq=False, kw_only=True)
class UnknownChannel(Channel):
    """Channel of a type this library does not model yet."""

    raw_type: int = UNKNOWN_KEY
    guild_id: Optional[int] = None
    name: Optional[str] = None

    @staticmethod
    def _parse_fields(data: Mapping[str, Any], guild_id: Optional[int]) -> dict[str, Any]:
        return {
            "raw_type": coerce_int(data.get("type"), default=UNKNOWN_KEY),
            "guild_id": coerce_snowflake(data.get("guild_id")) or guild_id,
            "name": coerce_str(data.get("name")),
        }


GuildChannel = Union[
    TextChannel,
    NewsChannel,
    VoiceChannel,
    StageChannel,
    Category,
    ForumChannel,
    MediaChannel,
    ThreadChannel,
]

CHANNEL_CLASSES: dict[ChannelType, type[Channel]] = {
    ChannelType.TEXT: TextChannel,
    ChannelType.NEWS: NewsChannel,
    ChannelType.VOICE: VoiceChannel,
    ChannelType.STAGE: StageChannel,
    ChannelType.CATEGORY: Category,
    ChannelType.FORUM: ForumChannel,
    ChannelType.MEDIA: MediaChannel,
    ChannelType.GUILD_NEWS_THREAD: ThreadChannel,
    ChannelType.GUILD_PUBLIC_THREAD: ThreadChannel,
    ChannelType.GUILD_PRIVATE_THREAD: ThreadChannel,
    ChannelType.PRIVATE: PrivateChannel,
    ChannelType.GROUP: GroupChannel,
}


def channel_from_payload(
    payload: Any,
    *,
    guild_id: Optional[int] = None,
    transport: Optional[EntityTransport] = None,
) -> Channel:
    """Build the concrete channel for ``payload['type']``.

    Unrecognized types produce an :class:`UnknownChannel` instead of failing.
    """
    data = require_mapping(payload, kind="channel")
    channel_type = resolve_code(ChannelType, data.get("type"), field="channel.type")
    channel_cls = CHANNEL_CLASSES.get(channel_type, UnknownChannel)
    return channel_cls.from_payload(data, guild_id=guild_id, transport=transport)


__all__ = [
    "AudioChannelMixin",
    "AutoArchiveDuration",
    "CHANNEL_CLASSES",
    "CategorizableMixin",
    "Category",
    "Channel",
    "ChannelType",
    "ForumChannel",
    "ForumPost",
    "ForumTag",
    "GroupChannel",
    "GuildChannel",
    "GuildChannelMixin",
    "InviteContainerMixin",
    "MediaChannel",
    "MessageChannelMixin",
    "NewsChannel",
    "NsfwMixin",
    "OverrideTargetType",
    "PermissionContainerMixin",
    "PermissionOverride",
    "PostContainerMixin",
    "PrivateChannel",
    "SlowmodeMixin",
    "StageChannel",
    "TextChannel",
    "ThreadChannel",
    "ThreadContainerMixin",
    "TopicMixin",
    "UnknownChannel",
    "VoiceChannel",
    "channel_from_payload",
]
