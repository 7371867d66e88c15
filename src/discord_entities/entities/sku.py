from __future__ import annotations

from dataclasses import dataclass, field
from enum import unique
from typing import Any, Optional

from ..core.coercion import coerce_int, coerce_str, require_mapping, require_snowflake, require_str
from ..core.transport import EntityTransport
from .base import Entity, resolve_code
from .coded import UNKNOWN_KEY, CodedEnum, FlagEnum


@unique
class SkuType(CodedEnum):
    DURABLE = 2
    CONSUMABLE = 3
    SUBSCRIPTION = 5
    SUBSCRIPTION_GROUP = 6
    UNKNOWN = UNKNOWN_KEY


@unique
class SkuFlag(FlagEnum):
    AVAILABLE = 2
    GUILD_SUBSCRIPTION = 7
    USER_SUBSCRIPTION = 8
    UNKNOWN = UNKNOWN_KEY


@dataclass(frozen=True, eq=False)
class Sku(Entity):
    id: int
    application_id: int
    name: str
    slug: str = ""
    type: SkuType = SkuType.UNKNOWN
    flags_raw: int = 0
    transport: Optional[EntityTransport] = field(default=None, repr=False)

    @classmethod
    def from_payload(
        cls, payload: Any, *, transport: Optional[EntityTransport] = None
    ) -> "Sku":
        data = require_mapping(payload, kind="sku")
        return cls(
            id=require_snowflake(data, "id"),
            application_id=require_snowflake(data, "application_id"),
            name=require_str(data, "name"),
            slug=coerce_str(data.get("slug"), "") or "",
            type=resolve_code(SkuType, data.get("type"), field="sku.type"),
            flags_raw=coerce_int(data.get("flags"), default=0) or 0,
            transport=transport,
        )

    @property
    def flags(self) -> frozenset[SkuFlag]:
        return SkuFlag.from_bitfield(self.flags_raw)

    @property
    def is_available(self) -> bool:
        return SkuFlag.AVAILABLE in self.flags

    @property
    def is_subscription(self) -> bool:
        return self.type in (SkuType.SUBSCRIPTION, SkuType.SUBSCRIPTION_GROUP)


__all__ = ["Sku", "SkuFlag", "SkuType"]
