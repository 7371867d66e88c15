from __future__ import annotations

from dataclasses import dataclass, field
from enum import unique
from typing import Any, Optional

from ..core.coercion import (
    coerce_bool,
    coerce_int,
    coerce_mapping,
    coerce_snowflake,
    coerce_snowflake_list,
    coerce_str,
    coerce_str_list,
    require_mapping,
    require_snowflake,
    require_str,
)
from ..core.errors import PayloadError
from ..core.transport import EntityTransport, Routes
from .base import Entity, resolve_code
from .coded import UNKNOWN_KEY, CodedEnum

MAX_RULE_NAME_LENGTH = 100
MAX_KEYWORD_AMOUNT = 1000
MAX_KEYWORD_LENGTH = 60
MAX_PATTERN_AMOUNT = 10
MAX_PATTERN_LENGTH = 260
MAX_ALLOWLIST_CUSTOM_AMOUNT = 100
MAX_ALLOWLIST_PRESET_AMOUNT = 1000
MAX_MENTION_LIMIT = 50
MAX_EXEMPT_ROLES = 20
MAX_EXEMPT_CHANNELS = 50
MAX_CUSTOM_MESSAGE_LENGTH = 150


@unique
class AutoModTriggerType(CodedEnum):
    """What makes a rule fire, with how many rules of that kind a guild may have."""

    KEYWORD = (1, 6)
    SPAM = (3, 1)
    KEYWORD_PRESET = (4, 1)
    MENTION_SPAM = (5, 1)
    MEMBER_PROFILE_KEYWORD = (6, 1)
    UNKNOWN = (UNKNOWN_KEY, 0)

    def __init__(self, key: int, max_per_guild: int) -> None:
        self.max_per_guild = max_per_guild


@unique
class AutoModEventType(CodedEnum):
    MESSAGE_SEND = 1
    MEMBER_UPDATE = 2
    UNKNOWN = UNKNOWN_KEY


@unique
class AutoModResponseType(CodedEnum):
    BLOCK_MESSAGE = 1
    SEND_ALERT_MESSAGE = 2
    TIMEOUT = 3
    BLOCK_MEMBER_INTERACTION = 4
    UNKNOWN = UNKNOWN_KEY


@unique
class KeywordPreset(CodedEnum):
    PROFANITY = 1
    SEXUAL_CONTENT = 2
    SLURS = 3
    UNKNOWN = UNKNOWN_KEY


@dataclass(frozen=True)
class AutoModResponse:
    """Action taken when a rule triggers.

    ``channel_id`` is set for alerts, ``timeout_seconds`` for timeouts and
    ``custom_message`` optionally for blocked messages.
    """

    type: AutoModResponseType
    channel_id: Optional[int] = None
    timeout_seconds: Optional[int] = None
    custom_message: Optional[str] = None

    @classmethod
    def from_payload(cls, payload: Any) -> "AutoModResponse":
        data = require_mapping(payload, kind="automod action")
        metadata = coerce_mapping(data.get("metadata"))
        return cls(
            type=resolve_code(AutoModResponseType, data.get("type"), field="action.type"),
            channel_id=coerce_snowflake(metadata.get("channel_id")),
            timeout_seconds=coerce_int(metadata.get("duration_seconds")),
            custom_message=coerce_str(metadata.get("custom_message")),
        )


@dataclass(frozen=True, eq=False)
class AutoModRule(Entity):
    id: int
    guild_id: int
    name: str
    creator_id: int = 0
    enabled: bool = True
    event_type: AutoModEventType = AutoModEventType.UNKNOWN
    trigger_type: AutoModTriggerType = AutoModTriggerType.UNKNOWN
    exempt_role_ids: tuple[int, ...] = ()
    exempt_channel_ids: tuple[int, ...] = ()
    actions: tuple[AutoModResponse, ...] = ()
    filtered_keywords: tuple[str, ...] = ()
    filtered_regex: tuple[str, ...] = ()
    filtered_presets: frozenset[KeywordPreset] = frozenset()
    allowlist: tuple[str, ...] = ()
    mention_limit: int = 0
    mention_raid_protection: bool = False
    transport: Optional[EntityTransport] = field(default=None, repr=False)

    @classmethod
    def from_payload(
        cls,
        payload: Any,
        *,
        guild_id: Optional[int] = None,
        transport: Optional[EntityTransport] = None,
    ) -> "AutoModRule":
        data = require_mapping(payload, kind="automod rule")
        metadata = coerce_mapping(data.get("trigger_metadata"))
        actions = data.get("actions")
        presets = metadata.get("presets")
        resolved_guild = coerce_snowflake(data.get("guild_id")) or guild_id
        if resolved_guild is None:
            raise PayloadError("automod rule payload is missing 'guild_id'", key="guild_id")
        return cls(
            id=require_snowflake(data, "id"),
            guild_id=resolved_guild,
            name=require_str(data, "name"),
            creator_id=coerce_snowflake(data.get("creator_id")) or 0,
            enabled=coerce_bool(data.get("enabled"), default=True),
            event_type=resolve_code(
                AutoModEventType, data.get("event_type"), field="automod.event_type"
            ),
            trigger_type=resolve_code(
                AutoModTriggerType, data.get("trigger_type"), field="automod.trigger_type"
            ),
            exempt_role_ids=coerce_snowflake_list(data.get("exempt_roles")),
            exempt_channel_ids=coerce_snowflake_list(data.get("exempt_channels")),
            actions=tuple(
                AutoModResponse.from_payload(item)
                for item in (actions if isinstance(actions, list) else ())
            ),
            filtered_keywords=coerce_str_list(metadata.get("keyword_filter")),
            filtered_regex=coerce_str_list(metadata.get("regex_patterns")),
            filtered_presets=frozenset(
                resolve_code(KeywordPreset, item, field="automod.presets")
                for item in (presets if isinstance(presets, list) else ())
            ),
            allowlist=coerce_str_list(metadata.get("allow_list")),
            mention_limit=coerce_int(metadata.get("mention_total_limit"), default=0) or 0,
            mention_raid_protection=coerce_bool(
                metadata.get("mention_raid_protection_enabled")
            ),
            transport=transport,
        )

    async def delete(self, *, reason: Optional[str] = None) -> None:
        transport = self._require_transport()
        route = Routes.DELETE_AUTOMOD_RULE.compile(guild_id=self.guild_id, rule_id=self.id)
        await transport.request(route, reason=reason)


__all__ = [
    "AutoModEventType",
    "AutoModResponse",
    "AutoModResponseType",
    "AutoModRule",
    "AutoModTriggerType",
    "KeywordPreset",
    "MAX_RULE_NAME_LENGTH",
]
