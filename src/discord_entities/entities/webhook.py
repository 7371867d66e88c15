from __future__ import annotations

from dataclasses import dataclass, field
from enum import unique
from typing import Any, Optional

from ..core.coercion import (
    coerce_snowflake,
    coerce_str,
    require_mapping,
    require_snowflake,
)
from ..core.transport import EntityTransport, Routes
from . import cdn
from .base import Entity, resolve_code
from .coded import UNKNOWN_KEY, CodedEnum
from .user import User


@unique
class WebhookType(CodedEnum):
    INCOMING = 1
    FOLLOWER = 2
    APPLICATION = 3
    UNKNOWN = UNKNOWN_KEY


@dataclass(frozen=True)
class WebhookReference:
    """Guild or channel a follower webhook relays messages from."""

    id: int
    name: Optional[str] = None

    @classmethod
    def from_payload(cls, payload: Any) -> Optional["WebhookReference"]:
        if not isinstance(payload, dict):
            return None
        snowflake = coerce_snowflake(payload.get("id"))
        if snowflake is None:
            return None
        return cls(id=snowflake, name=coerce_str(payload.get("name")))


@dataclass(frozen=True, eq=False)
class Webhook(Entity):
    id: int
    type: WebhookType = WebhookType.UNKNOWN
    channel_id: Optional[int] = None
    guild_id: Optional[int] = None
    name: Optional[str] = None
    avatar_hash: Optional[str] = None
    token: Optional[str] = field(default=None, repr=False)
    application_id: Optional[int] = None
    owner: Optional[User] = None
    source_guild: Optional[WebhookReference] = None
    source_channel: Optional[WebhookReference] = None
    transport: Optional[EntityTransport] = field(default=None, repr=False)

    @classmethod
    def from_payload(
        cls, payload: Any, *, transport: Optional[EntityTransport] = None
    ) -> "Webhook":
        data = require_mapping(payload, kind="webhook")
        owner = data.get("user")
        return cls(
            id=require_snowflake(data, "id"),
            type=resolve_code(WebhookType, data.get("type"), field="webhook.type"),
            channel_id=coerce_snowflake(data.get("channel_id")),
            guild_id=coerce_snowflake(data.get("guild_id")),
            name=coerce_str(data.get("name")),
            avatar_hash=coerce_str(data.get("avatar")),
            token=coerce_str(data.get("token")),
            application_id=coerce_snowflake(data.get("application_id")),
            owner=User.from_payload(owner, transport=transport) if owner else None,
            source_guild=WebhookReference.from_payload(data.get("source_guild")),
            source_channel=WebhookReference.from_payload(data.get("source_channel")),
            transport=transport,
        )

    @property
    def is_partial(self) -> bool:
        """Follower webhooks and webhooks fetched without a token cannot execute."""
        return self.token is None

    @property
    def url(self) -> Optional[str]:
        if self.token is None:
            return None
        return cdn.webhook_url(self.id, self.token)

    @property
    def avatar_url(self) -> Optional[str]:
        if self.avatar_hash is None:
            return None
        return cdn.avatar_url(self.id, self.avatar_hash)

    @property
    def default_avatar_url(self) -> str:
        return cdn.default_avatar_url(self.id)

    async def delete(
        self, *, token: Optional[str] = None, reason: Optional[str] = None
    ) -> None:
        """Delete with bot authorization, or with ``token`` when one is given."""
        transport = self._require_transport()
        if token is not None:
            route = Routes.DELETE_WEBHOOK_WITH_TOKEN.compile(webhook_id=self.id, token=token)
        else:
            route = Routes.DELETE_WEBHOOK.compile(webhook_id=self.id)
        await transport.request(route, reason=reason)


__all__ = ["Webhook", "WebhookReference", "WebhookType"]
