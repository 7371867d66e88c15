from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import unique
from typing import Any, Optional

from ..core.coercion import (
    coerce_bool,
    coerce_int,
    coerce_snowflake,
    coerce_snowflake_list,
    coerce_str,
    require_mapping,
    require_snowflake,
)
from ..core.errors import InvalidArgumentError
from ..core.time_utils import parse_iso_timestamp
from ..core.transport import EntityTransport
from . import cdn
from .base import Entity, resolve_code
from .coded import UNKNOWN_KEY, CodedEnum, FlagEnum
from .user import User

MAX_CONTENT_LENGTH = 2000
MAX_EMBED_COUNT = 10
MAX_FILE_AMOUNT = 10
MAX_FILE_SIZE = 10 << 20


@unique
class MessageType(CodedEnum):
    """Message types with their ``system`` and ``deletable`` traits.

    System messages are generated by Discord rather than written by a user.
    """

    DEFAULT = (0, False, True)
    RECIPIENT_ADD = (1, True, False)
    RECIPIENT_REMOVE = (2, True, False)
    CALL = (3, True, False)
    CHANNEL_NAME_CHANGE = (4, True, False)
    CHANNEL_ICON_CHANGE = (5, True, False)
    CHANNEL_PINNED_ADD = (6, True, True)
    GUILD_MEMBER_JOIN = (7, True, True)
    GUILD_MEMBER_BOOST = (8, True, True)
    GUILD_BOOST_TIER_1 = (9, True, True)
    GUILD_BOOST_TIER_2 = (10, True, True)
    GUILD_BOOST_TIER_3 = (11, True, True)
    CHANNEL_FOLLOW_ADD = (12, True, True)
    GUILD_DISCOVERY_DISQUALIFIED = (14, True, True)
    GUILD_DISCOVERY_REQUALIFIED = (15, True, True)
    GUILD_DISCOVERY_GRACE_PERIOD_INITIAL_WARNING = (16, True, True)
    GUILD_DISCOVERY_GRACE_PERIOD_FINAL_WARNING = (17, True, True)
    THREAD_CREATED = (18, True, True)
    INLINE_REPLY = (19, False, True)
    SLASH_COMMAND = (20, False, True)
    THREAD_STARTER_MESSAGE = (21, False, False)
    GUILD_APPLICATION_INVITE_REMINDER = (22, True, True)
    CONTEXT_COMMAND = (23, False, True)
    AUTO_MODERATION_ACTION = (24, True, True)
    ROLE_SUBSCRIPTION_PURCHASE = (25, True, True)
    INTERACTION_PREMIUM_UPSELL = (26, True, True)
    STAGE_START = (27, True, True)
    STAGE_END = (28, True, True)
    STAGE_SPEAKER = (29, True, True)
    STAGE_ADDED_TO_SPEAKER = (30, True, True)
    STAGE_TOPIC = (31, True, True)
    GUILD_APPLICATION_PREMIUM_SUBSCRIPTION = (32, True, True)
    GUILD_INCIDENT_ALERT_MODE_ENABLED = (36, True, True)
    GUILD_INCIDENT_ALERT_MODE_DISABLED = (37, True, True)
    GUILD_INCIDENT_REPORT_RAID = (38, True, True)
    GUILD_INCIDENT_REPORT_FALSE_ALARM = (39, True, True)
    PURCHASE_NOTIFICATION = (44, True, True)
    POLL_RESULT = (46, True, True)
    UNKNOWN = (UNKNOWN_KEY, True, True)

    def __init__(self, key: int, system: bool, deletable: bool) -> None:
        self.system = system
        self.deletable = deletable


@unique
class MessageFlag(FlagEnum):
    CROSSPOSTED = 0
    IS_CROSSPOST = 1
    EMBEDS_SUPPRESSED = 2
    SOURCE_MESSAGE_DELETED = 3
    URGENT = 4
    HAS_THREAD = 5
    EPHEMERAL = 6
    LOADING = 7
    FAILED_TO_MENTION_SOME_ROLES_IN_THREAD = 8
    NOTIFICATIONS_SUPPRESSED = 12
    IS_VOICE_MESSAGE = 13
    HAS_SNAPSHOT = 14
    IS_COMPONENTS_V2 = 15
    UNKNOWN = UNKNOWN_KEY


@dataclass(frozen=True, eq=False)
class Message(Entity):
    id: int
    channel_id: int
    content: str = ""
    type: MessageType = MessageType.DEFAULT
    author: Optional[User] = None
    guild_id: Optional[int] = None
    webhook_id: Optional[int] = None
    flags_raw: int = 0
    tts: bool = False
    pinned: bool = False
    mentions_everyone: bool = False
    mentioned_user_ids: tuple[int, ...] = ()
    mentioned_role_ids: tuple[int, ...] = ()
    edited_at: Optional[datetime] = None
    transport: Optional[EntityTransport] = field(default=None, repr=False)

    @classmethod
    def from_payload(
        cls,
        payload: Any,
        *,
        guild_id: Optional[int] = None,
        transport: Optional[EntityTransport] = None,
    ) -> "Message":
        data = require_mapping(payload, kind="message")
        author = data.get("author")
        mentions = data.get("mentions")
        return cls(
            id=require_snowflake(data, "id"),
            channel_id=require_snowflake(data, "channel_id"),
            content=coerce_str(data.get("content"), "") or "",
            type=resolve_code(
                MessageType, data.get("type", MessageType.DEFAULT.key), field="message.type"
            ),
            author=User.from_payload(author, transport=transport) if author else None,
            guild_id=coerce_snowflake(data.get("guild_id")) or guild_id,
            webhook_id=coerce_snowflake(data.get("webhook_id")),
            flags_raw=coerce_int(data.get("flags"), default=0) or 0,
            tts=coerce_bool(data.get("tts")),
            pinned=coerce_bool(data.get("pinned")),
            mentions_everyone=coerce_bool(data.get("mention_everyone")),
            mentioned_user_ids=_mentioned_user_ids(mentions),
            mentioned_role_ids=coerce_snowflake_list(data.get("mention_roles")),
            edited_at=parse_iso_timestamp(data.get("edited_timestamp")),
            transport=transport,
        )

    @property
    def flags(self) -> frozenset[MessageFlag]:
        return MessageFlag.from_bitfield(self.flags_raw)

    @property
    def is_edited(self) -> bool:
        return self.edited_at is not None

    @property
    def is_webhook(self) -> bool:
        return self.webhook_id is not None

    @property
    def is_ephemeral(self) -> bool:
        return MessageFlag.EPHEMERAL in self.flags

    @property
    def is_from_guild(self) -> bool:
        return self.guild_id is not None

    @property
    def jump_url(self) -> str:
        return cdn.message_jump_url(self.guild_id, self.channel_id, self.id)


def _mentioned_user_ids(value: Any) -> tuple[int, ...]:
    if not isinstance(value, list):
        return ()
    ids = []
    for item in value:
        if isinstance(item, dict):
            snowflake = coerce_snowflake(item.get("id"))
        else:
            snowflake = coerce_snowflake(item)
        if snowflake is not None:
            ids.append(snowflake)
    return tuple(ids)


def check_message_content(content: str) -> str:
    if not isinstance(content, str) or not content.strip():
        raise InvalidArgumentError("message content may not be blank")
    if len(content) > MAX_CONTENT_LENGTH:
        raise InvalidArgumentError(
            f"message content may not exceed {MAX_CONTENT_LENGTH} characters"
        )
    return content


__all__ = [
    "MAX_CONTENT_LENGTH",
    "MAX_EMBED_COUNT",
    "MAX_FILE_AMOUNT",
    "MAX_FILE_SIZE",
    "Message",
    "MessageFlag",
    "MessageType",
]
