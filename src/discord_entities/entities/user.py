from __future__ import annotations

from dataclasses import dataclass, field
from enum import unique
from typing import Any, Optional

from ..core.coercion import (
    coerce_bool,
    coerce_int,
    coerce_str,
    require_mapping,
    require_snowflake,
    require_str,
)
from ..core.transport import EntityTransport
from . import cdn
from .base import Entity
from .coded import FlagEnum
from .mentions import user_mention
from .snowflake import SnowflakeLike, SnowflakeMixin, parse_snowflake

LEGACY_DISCRIMINATOR_NONE = "0000"


@unique
class UserFlag(FlagEnum):
    STAFF = (0, "Discord Employee")
    PARTNER = (1, "Partnered Server Owner")
    HYPESQUAD = (2, "HypeSquad Events")
    BUG_HUNTER_LEVEL_1 = (3, "Bug Hunter Level 1")
    HYPESQUAD_BRAVERY = (6, "HypeSquad Bravery")
    HYPESQUAD_BRILLIANCE = (7, "HypeSquad Brilliance")
    HYPESQUAD_BALANCE = (8, "HypeSquad Balance")
    EARLY_SUPPORTER = (9, "Early Supporter")
    TEAM_USER = (10, "Team User")
    BUG_HUNTER_LEVEL_2 = (14, "Bug Hunter Level 2")
    VERIFIED_BOT = (16, "Verified Bot")
    VERIFIED_DEVELOPER = (17, "Early Verified Bot Developer")
    CERTIFIED_MODERATOR = (18, "Discord Certified Moderator")
    BOT_HTTP_INTERACTIONS = (19, "HTTP Interactions Bot")
    ACTIVE_DEVELOPER = (22, "Active Developer")
    UNKNOWN = (-1, "Unknown")

    def __init__(self, offset: int, display_name: str) -> None:
        self.display_name = display_name


@dataclass(frozen=True)
class UserSnowflake(SnowflakeMixin):
    """User reference where only the id is known."""

    id: int

    @classmethod
    def of(cls, value: SnowflakeLike) -> "UserSnowflake":
        return cls(parse_snowflake(value))

    @property
    def mention(self) -> str:
        return user_mention(self.id)

    @property
    def default_avatar_url(self) -> str:
        return cdn.default_avatar_url(self.id)


@dataclass(frozen=True, eq=False)
class User(Entity):
    id: int
    name: str
    discriminator: str = LEGACY_DISCRIMINATOR_NONE
    global_name: Optional[str] = None
    avatar_hash: Optional[str] = None
    banner_hash: Optional[str] = None
    accent_color: Optional[int] = None
    bot: bool = False
    system: bool = False
    flags_raw: int = 0
    transport: Optional[EntityTransport] = field(default=None, repr=False)

    @classmethod
    def from_payload(
        cls, payload: Any, *, transport: Optional[EntityTransport] = None
    ) -> "User":
        data = require_mapping(payload, kind="user")
        return cls(
            id=require_snowflake(data, "id"),
            name=require_str(data, "username"),
            discriminator=coerce_str(data.get("discriminator"))
            or LEGACY_DISCRIMINATOR_NONE,
            global_name=coerce_str(data.get("global_name")),
            avatar_hash=coerce_str(data.get("avatar")),
            banner_hash=coerce_str(data.get("banner")),
            accent_color=coerce_int(data.get("accent_color")),
            bot=coerce_bool(data.get("bot")),
            system=coerce_bool(data.get("system")),
            flags_raw=coerce_int(data.get("public_flags"), default=0) or 0,
            transport=transport,
        )

    @property
    def mention(self) -> str:
        return user_mention(self.id)

    @property
    def effective_name(self) -> str:
        return self.global_name or self.name

    @property
    def as_tag(self) -> str:
        if self.discriminator.strip("0"):
            return f"{self.name}#{self.discriminator}"
        return self.name

    @property
    def flags(self) -> frozenset[UserFlag]:
        return UserFlag.from_bitfield(self.flags_raw)

    @property
    def avatar_url(self) -> Optional[str]:
        if self.avatar_hash is None:
            return None
        return cdn.avatar_url(self.id, self.avatar_hash)

    @property
    def default_avatar_url(self) -> str:
        return cdn.default_avatar_url(self.id, self.discriminator)

    @property
    def effective_avatar_url(self) -> str:
        return self.avatar_url or self.default_avatar_url

    @property
    def banner_url(self) -> Optional[str]:
        if self.banner_hash is None:
            return None
        return cdn.banner_url(self.id, self.banner_hash)

    def as_snowflake(self) -> UserSnowflake:
        return UserSnowflake(self.id)


__all__ = ["User", "UserFlag", "UserSnowflake"]
