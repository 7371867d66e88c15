from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Optional

from ..core.coercion import (
    coerce_bool,
    coerce_int,
    coerce_mapping,
    coerce_snowflake,
    coerce_str,
    require_mapping,
    require_snowflake,
    require_str,
)
from ..core.errors import EntityStateError
from ..core.transport import EntityTransport, Routes
from . import cdn
from .base import Entity
from .mentions import role_mention
from .permission import Permission, has_permissions, parse_permissions

DEFAULT_COLOR_RAW = 0


@dataclass(frozen=True)
class RoleTags:
    """Tags describe why a role exists (bot, booster, integration, ...).

    Discord encodes boolean tags as keys present with a ``null`` value.
    """

    bot_id: Optional[int] = None
    integration_id: Optional[int] = None
    subscription_listing_id: Optional[int] = None
    is_boost: bool = False
    is_available_for_purchase: bool = False
    is_linked_role: bool = False

    @classmethod
    def from_payload(cls, payload: Any) -> "RoleTags":
        data = coerce_mapping(payload)
        return cls(
            bot_id=coerce_snowflake(data.get("bot_id")),
            integration_id=coerce_snowflake(data.get("integration_id")),
            subscription_listing_id=coerce_snowflake(
                data.get("subscription_listing_id")
            ),
            is_boost="premium_subscriber" in data,
            is_available_for_purchase="available_for_purchase" in data,
            is_linked_role="guild_connections" in data,
        )

    @property
    def is_bot(self) -> bool:
        return self.bot_id is not None

    @property
    def is_integration(self) -> bool:
        return self.integration_id is not None


@dataclass(frozen=True, eq=False)
class Role(Entity):
    id: int
    guild_id: int
    name: str
    color_raw: int = DEFAULT_COLOR_RAW
    position: int = 0
    permissions_raw: int = 0
    hoisted: bool = False
    managed: bool = False
    mentionable: bool = False
    icon_hash: Optional[str] = None
    unicode_emoji: Optional[str] = None
    tags: RoleTags = field(default_factory=RoleTags)
    transport: Optional[EntityTransport] = field(default=None, repr=False)

    @classmethod
    def from_payload(
        cls,
        payload: Any,
        *,
        guild_id: int,
        transport: Optional[EntityTransport] = None,
    ) -> "Role":
        data = require_mapping(payload, kind="role")
        return cls(
            id=require_snowflake(data, "id"),
            guild_id=guild_id,
            name=require_str(data, "name"),
            color_raw=coerce_int(data.get("color"), default=DEFAULT_COLOR_RAW)
            or DEFAULT_COLOR_RAW,
            position=coerce_int(data.get("position"), default=0) or 0,
            permissions_raw=parse_permissions(data.get("permissions")),
            hoisted=coerce_bool(data.get("hoist")),
            managed=coerce_bool(data.get("managed")),
            mentionable=coerce_bool(data.get("mentionable")),
            icon_hash=coerce_str(data.get("icon")),
            unicode_emoji=coerce_str(data.get("unicode_emoji")),
            tags=RoleTags.from_payload(data.get("tags")),
            transport=transport,
        )

    @property
    def is_public_role(self) -> bool:
        """The ``@everyone`` role shares its id with the guild."""
        return self.id == self.guild_id

    @property
    def mention(self) -> str:
        if self.is_public_role:
            return "@everyone"
        return role_mention(self.id)

    @property
    def color(self) -> Optional[int]:
        """``None`` when the role uses the default color."""
        return None if self.color_raw == DEFAULT_COLOR_RAW else self.color_raw

    @property
    def permissions(self) -> frozenset[Permission]:
        return Permission.from_bitfield(self.permissions_raw)

    def has_permission(self, *permissions: Permission) -> bool:
        return has_permissions(self.permissions_raw, *permissions)

    @property
    def icon_url(self) -> Optional[str]:
        if self.icon_hash is None:
            return None
        return cdn.role_icon_url(self.id, self.icon_hash)

    async def delete(self, *, reason: Optional[str] = None) -> None:
        if self.is_public_role:
            raise EntityStateError("cannot delete the @everyone role")
        if self.managed:
            raise EntityStateError("cannot delete a managed role")
        transport = self._require_transport()
        route = Routes.DELETE_ROLE.compile(guild_id=self.guild_id, role_id=self.id)
        await transport.request(route, reason=reason)


__all__ = ["Role", "RoleTags"]
