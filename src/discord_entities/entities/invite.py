from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timedelta
from enum import unique
from typing import Any, Optional

from ..core.coercion import (
    coerce_bool,
    coerce_int,
    coerce_str,
    coerce_str_list,
    require_mapping,
    require_snowflake,
    require_str,
)
from ..core.errors import DetachedEntityError
from ..core.time_utils import parse_iso_timestamp
from ..core.transport import EntityTransport, Routes
from . import cdn
from .base import resolve_code
from .channel_type import ChannelType
from .coded import UNKNOWN_KEY, CodedEnum
from .user import User

MAX_INVITE_AGE = 604800
MAX_INVITE_USES = 100
DEFAULT_INVITE_AGE = 86400


@unique
class InviteType(CodedEnum):
    GUILD = 0
    GROUP = 1
    FRIEND = 2
    UNKNOWN = UNKNOWN_KEY


@unique
class InviteTargetType(CodedEnum):
    """Extra action the client takes when the invite is accepted."""

    NONE = 0
    STREAM = 1
    EMBEDDED_APPLICATION = 2
    ROLE_SUBSCRIPTIONS_PURCHASE = 3
    UNKNOWN = UNKNOWN_KEY


@dataclass(frozen=True)
class InviteGuild:
    id: int
    name: str
    icon_hash: Optional[str] = None
    splash_hash: Optional[str] = None
    features: frozenset[str] = frozenset()

    @classmethod
    def from_payload(cls, payload: Any) -> "InviteGuild":
        data = require_mapping(payload, kind="invite guild")
        return cls(
            id=require_snowflake(data, "id"),
            name=require_str(data, "name"),
            icon_hash=coerce_str(data.get("icon")),
            splash_hash=coerce_str(data.get("splash")),
            features=frozenset(coerce_str_list(data.get("features"))),
        )

    @property
    def icon_url(self) -> Optional[str]:
        if self.icon_hash is None:
            return None
        return cdn.guild_icon_url(self.id, self.icon_hash)


@dataclass(frozen=True)
class InviteChannel:
    id: int
    type: ChannelType
    name: Optional[str] = None

    @classmethod
    def from_payload(cls, payload: Any) -> "InviteChannel":
        data = require_mapping(payload, kind="invite channel")
        return cls(
            id=require_snowflake(data, "id"),
            type=resolve_code(ChannelType, data.get("type"), field="invite.channel.type"),
            name=coerce_str(data.get("name")),
        )


@dataclass(frozen=True, eq=False)
class Invite:
    """Invite identified by its code.

    Metadata fields (``uses``, ``max_uses``, ``max_age``, ``temporary``,
    ``created_at``) are only present on expanded invites, e.g. ones returned
    by invite creation or the channel invite listing.
    """

    code: str
    type: InviteType = InviteType.GUILD
    guild: Optional[InviteGuild] = None
    channel: Optional[InviteChannel] = None
    inviter: Optional[User] = None
    target_type: InviteTargetType = InviteTargetType.NONE
    target_user: Optional[User] = None
    approximate_member_count: Optional[int] = None
    approximate_presence_count: Optional[int] = None
    uses: Optional[int] = None
    max_uses: Optional[int] = None
    max_age: Optional[int] = None
    temporary: bool = False
    created_at: Optional[datetime] = None
    expires_at: Optional[datetime] = None
    transport: Optional[EntityTransport] = field(default=None, repr=False)

    @classmethod
    def from_payload(
        cls, payload: Any, *, transport: Optional[EntityTransport] = None
    ) -> "Invite":
        data = require_mapping(payload, kind="invite")
        guild = data.get("guild")
        channel = data.get("channel")
        inviter = data.get("inviter")
        target_user = data.get("target_user")
        return cls(
            code=require_str(data, "code"),
            type=resolve_code(
                InviteType, data.get("type", InviteType.GUILD.key), field="invite.type"
            ),
            guild=InviteGuild.from_payload(guild) if guild else None,
            channel=InviteChannel.from_payload(channel) if channel else None,
            inviter=User.from_payload(inviter, transport=transport) if inviter else None,
            target_type=resolve_code(
                InviteTargetType,
                data.get("target_type", InviteTargetType.NONE.key),
                field="invite.target_type",
            ),
            target_user=(
                User.from_payload(target_user, transport=transport)
                if target_user
                else None
            ),
            approximate_member_count=coerce_int(data.get("approximate_member_count")),
            approximate_presence_count=coerce_int(
                data.get("approximate_presence_count")
            ),
            uses=coerce_int(data.get("uses")),
            max_uses=coerce_int(data.get("max_uses")),
            max_age=coerce_int(data.get("max_age")),
            temporary=coerce_bool(data.get("temporary")),
            created_at=parse_iso_timestamp(data.get("created_at")),
            expires_at=parse_iso_timestamp(data.get("expires_at")),
            transport=transport,
        )

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Invite):
            return NotImplemented
        return other.code == self.code

    def __hash__(self) -> int:
        return hash(("Invite", self.code))

    @property
    def url(self) -> str:
        return cdn.invite_url(self.code)

    @property
    def is_expanded(self) -> bool:
        return self.uses is not None

    @property
    def time_expires(self) -> Optional[datetime]:
        """Expiry time; ``None`` for invites that never expire or lack metadata."""
        if self.expires_at is not None:
            return self.expires_at
        if self.created_at is None or not self.max_age:
            return None
        return self.created_at + timedelta(seconds=self.max_age)

    def is_expired(self, now: datetime) -> bool:
        expires = self.time_expires
        return expires is not None and now >= expires

    async def delete(self, *, reason: Optional[str] = None) -> None:
        if self.transport is None:
            raise DetachedEntityError(f"Invite({self.code})")
        await self.transport.request(
            Routes.DELETE_INVITE.compile(code=self.code), reason=reason
        )


__all__ = [
    "DEFAULT_INVITE_AGE",
    "Invite",
    "InviteChannel",
    "InviteGuild",
    "InviteTargetType",
    "InviteType",
    "MAX_INVITE_AGE",
    "MAX_INVITE_USES",
]
