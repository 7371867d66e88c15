"""Lookup tables of the enumerations and payload parsers by name."""

from __future__ import annotations

from typing import Any, Callable, Optional

from ..core.coercion import require_mapping, require_snowflake
from .automod import (
    AutoModEventType,
    AutoModResponseType,
    AutoModRule,
    AutoModTriggerType,
    KeywordPreset,
)
from .channel import AutoArchiveDuration, OverrideTargetType, channel_from_payload
from .channel_type import ChannelType
from .coded import CodedEnum
from .entitlement import Entitlement, EntitlementType
from .guild import (
    Ban,
    BoostTier,
    ExplicitContentLevel,
    Guild,
    MFALevel,
    NotificationLevel,
    NSFWLevel,
    Timeout,
    VerificationLevel,
)
from .invite import Invite, InviteTargetType, InviteType
from .locale import DiscordLocale
from .mentions import TimeFormat
from .message import Message, MessageFlag, MessageType
from .permission import Permission
from .role import Role
from .role_connection import RoleConnectionMetadata, RoleConnectionMetadataType
from .scheduled_event import ScheduledEvent, ScheduledEventStatus, ScheduledEventType
from .sku import Sku, SkuFlag, SkuType
from .user import User, UserFlag
from .webhook import Webhook, WebhookType

CODED_ENUMS: dict[str, type[CodedEnum]] = {
    cls.__name__: cls
    for cls in (
        AutoArchiveDuration,
        AutoModEventType,
        AutoModResponseType,
        AutoModTriggerType,
        BoostTier,
        ChannelType,
        DiscordLocale,
        EntitlementType,
        ExplicitContentLevel,
        InviteTargetType,
        InviteType,
        KeywordPreset,
        MessageFlag,
        MessageType,
        MFALevel,
        NotificationLevel,
        NSFWLevel,
        OverrideTargetType,
        Permission,
        RoleConnectionMetadataType,
        ScheduledEventStatus,
        ScheduledEventType,
        SkuFlag,
        SkuType,
        TimeFormat,
        Timeout,
        UserFlag,
        VerificationLevel,
        WebhookType,
    )
}

def _role_from_payload(payload: Any) -> Role:
    """Role payloads carry no guild id, so a top-level ``guild_id`` is required."""
    data = require_mapping(payload, kind="role")
    return Role.from_payload(data, guild_id=require_snowflake(data, "guild_id"))


PAYLOAD_PARSERS: dict[str, Callable[[Any], Any]] = {
    "automod-rule": AutoModRule.from_payload,
    "ban": Ban.from_payload,
    "channel": channel_from_payload,
    "entitlement": Entitlement.from_payload,
    "guild": Guild.from_payload,
    "invite": Invite.from_payload,
    "message": Message.from_payload,
    "role": _role_from_payload,
    "role-connection-metadata": RoleConnectionMetadata.from_payload,
    "scheduled-event": ScheduledEvent.from_payload,
    "sku": Sku.from_payload,
    "user": User.from_payload,
    "webhook": Webhook.from_payload,
}


def find_enum(name: str) -> Optional[type[CodedEnum]]:
    """Case-insensitive lookup; dashes and underscores are ignored."""
    wanted = name.replace("-", "").replace("_", "").lower()
    for enum_name, enum_cls in CODED_ENUMS.items():
        if enum_name.lower() == wanted:
            return enum_cls
    return None


__all__ = ["CODED_ENUMS", "PAYLOAD_PARSERS", "find_enum"]
