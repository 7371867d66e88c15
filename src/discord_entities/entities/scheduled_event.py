from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import unique
from typing import Any, Optional

from ..core.coercion import (
    coerce_int,
    coerce_mapping,
    coerce_snowflake,
    coerce_str,
    require_mapping,
    require_snowflake,
    require_str,
)
from ..core.errors import PayloadError
from ..core.time_utils import parse_iso_timestamp
from ..core.transport import EntityTransport
from . import cdn
from .base import Entity, resolve_code
from .coded import UNKNOWN_KEY, CodedEnum
from .user import User

MAX_NAME_LENGTH = 100
MAX_DESCRIPTION_LENGTH = 1000
MAX_LOCATION_LENGTH = 100


@unique
class ScheduledEventStatus(CodedEnum):
    SCHEDULED = 1
    ACTIVE = 2
    COMPLETED = 3
    CANCELED = 4
    UNKNOWN = UNKNOWN_KEY


@unique
class ScheduledEventType(CodedEnum):
    """Where an event takes place."""

    STAGE_INSTANCE = 1
    VOICE = 2
    EXTERNAL = 3
    UNKNOWN = UNKNOWN_KEY


@dataclass(frozen=True, eq=False)
class ScheduledEvent(Entity):
    id: int
    guild_id: int
    name: str
    start_time: datetime
    status: ScheduledEventStatus = ScheduledEventStatus.UNKNOWN
    type: ScheduledEventType = ScheduledEventType.UNKNOWN
    description: Optional[str] = None
    end_time: Optional[datetime] = None
    channel_id: Optional[int] = None
    location: Optional[str] = None
    creator: Optional[User] = None
    interested_user_count: Optional[int] = None
    image_hash: Optional[str] = None
    transport: Optional[EntityTransport] = field(default=None, repr=False)

    @classmethod
    def from_payload(
        cls, payload: Any, *, transport: Optional[EntityTransport] = None
    ) -> "ScheduledEvent":
        data = require_mapping(payload, kind="scheduled event")
        start_time = parse_iso_timestamp(data.get("scheduled_start_time"))
        if start_time is None:
            raise PayloadError(
                "payload key 'scheduled_start_time' must be an ISO-8601 timestamp",
                key="scheduled_start_time",
            )
        creator = data.get("creator")
        metadata = coerce_mapping(data.get("entity_metadata"))
        return cls(
            id=require_snowflake(data, "id"),
            guild_id=require_snowflake(data, "guild_id"),
            name=require_str(data, "name"),
            start_time=start_time,
            status=resolve_code(
                ScheduledEventStatus, data.get("status"), field="event.status"
            ),
            type=resolve_code(
                ScheduledEventType, data.get("entity_type"), field="event.entity_type"
            ),
            description=coerce_str(data.get("description")),
            end_time=parse_iso_timestamp(data.get("scheduled_end_time")),
            channel_id=coerce_snowflake(data.get("channel_id")),
            location=coerce_str(metadata.get("location")),
            creator=User.from_payload(creator, transport=transport) if creator else None,
            interested_user_count=coerce_int(data.get("user_count")),
            image_hash=coerce_str(data.get("image")),
            transport=transport,
        )

    @property
    def is_external(self) -> bool:
        return self.type is ScheduledEventType.EXTERNAL

    @property
    def image_url(self) -> Optional[str]:
        if self.image_hash is None:
            return None
        return cdn.scheduled_event_image_url(self.id, self.image_hash)

    @property
    def jump_url(self) -> str:
        return f"{cdn.DISCORD_BASE_URL}/events/{self.guild_id}/{self.id}"


__all__ = ["ScheduledEvent", "ScheduledEventStatus", "ScheduledEventType"]
