from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import unique
from typing import Any, Optional

from ..core.coercion import coerce_bool, coerce_snowflake, require_mapping, require_snowflake
from ..core.time_utils import parse_iso_timestamp
from ..core.transport import EntityTransport, Routes
from .base import Entity, resolve_code
from .coded import UNKNOWN_KEY, CodedEnum


@unique
class EntitlementType(CodedEnum):
    PURCHASE = 1
    PREMIUM_SUBSCRIPTION = 2
    DEVELOPER_GIFT = 3
    TEST_MODE_PURCHASE = 4
    FREE_PURCHASE = 5
    USER_GIFT = 6
    PREMIUM_PURCHASE = 7
    APPLICATION_SUBSCRIPTION = 8
    UNKNOWN = UNKNOWN_KEY


@dataclass(frozen=True, eq=False)
class Entitlement(Entity):
    """Premium access a user or guild has to an application SKU."""

    id: int
    sku_id: int
    application_id: int
    type: EntitlementType = EntitlementType.UNKNOWN
    user_id: Optional[int] = None
    guild_id: Optional[int] = None
    deleted: bool = False
    consumed: bool = False
    starts_at: Optional[datetime] = None
    ends_at: Optional[datetime] = None
    transport: Optional[EntityTransport] = field(default=None, repr=False)

    @classmethod
    def from_payload(
        cls, payload: Any, *, transport: Optional[EntityTransport] = None
    ) -> "Entitlement":
        data = require_mapping(payload, kind="entitlement")
        return cls(
            id=require_snowflake(data, "id"),
            sku_id=require_snowflake(data, "sku_id"),
            application_id=require_snowflake(data, "application_id"),
            type=resolve_code(EntitlementType, data.get("type"), field="entitlement.type"),
            user_id=coerce_snowflake(data.get("user_id")),
            guild_id=coerce_snowflake(data.get("guild_id")),
            deleted=coerce_bool(data.get("deleted")),
            consumed=coerce_bool(data.get("consumed")),
            starts_at=parse_iso_timestamp(data.get("starts_at")),
            ends_at=parse_iso_timestamp(data.get("ends_at")),
            transport=transport,
        )

    @property
    def is_guild_entitlement(self) -> bool:
        return self.guild_id is not None

    def is_active(self, now: datetime) -> bool:
        """Test entitlements have no start or end and are always active."""
        if self.deleted:
            return False
        if self.starts_at is not None and now < self.starts_at:
            return False
        return self.ends_at is None or now < self.ends_at

    async def consume(self) -> None:
        """Mark a one-time purchase as used by the application."""
        transport = self._require_transport()
        route = Routes.CONSUME_ENTITLEMENT.compile(
            application_id=self.application_id, entitlement_id=self.id
        )
        await transport.request(route)


__all__ = ["Entitlement", "EntitlementType"]
