"""Discord entity models, coded enumerations and formatting helpers."""

from .automod import (
    AutoModEventType,
    AutoModResponse,
    AutoModResponseType,
    AutoModRule,
    AutoModTriggerType,
    KeywordPreset,
)
from .base import Entity, resolve_code
from .channel import (
    AudioChannelMixin,
    AutoArchiveDuration,
    CategorizableMixin,
    Category,
    Channel,
    ForumChannel,
    ForumPost,
    ForumTag,
    GroupChannel,
    GuildChannel,
    GuildChannelMixin,
    InviteContainerMixin,
    MediaChannel,
    MessageChannelMixin,
    NewsChannel,
    NsfwMixin,
    OverrideTargetType,
    PermissionContainerMixin,
    PermissionOverride,
    PostContainerMixin,
    PrivateChannel,
    SlowmodeMixin,
    StageChannel,
    TextChannel,
    ThreadChannel,
    ThreadContainerMixin,
    TopicMixin,
    UnknownChannel,
    VoiceChannel,
    channel_from_payload,
)
from .channel_type import ChannelType
from .coded import UNKNOWN_KEY, UNKNOWN_STRING_KEY, CodedEnum, FlagEnum, StringCodedEnum
from .entitlement import Entitlement, EntitlementType
from .guild import (
    Ban,
    BoostTier,
    BulkBanResponse,
    ExplicitContentLevel,
    Guild,
    MFALevel,
    NotificationLevel,
    NSFWLevel,
    Timeout,
    VanityInvite,
    VerificationLevel,
)
from .invite import Invite, InviteChannel, InviteGuild, InviteTargetType, InviteType
from .locale import DiscordLocale
from .mentions import (
    MentionType,
    TimeFormat,
    channel_mention,
    emoji_mention,
    find_mentions,
    mentions_everyone,
    role_mention,
    slash_command_mention,
    timestamp_mention,
    user_mention,
)
from .message import Message, MessageFlag, MessageType
from .permission import Permission, has_permissions, permissions_from_raw, permissions_to_raw
from .registry import CODED_ENUMS, PAYLOAD_PARSERS, find_enum
from .role import Role, RoleTags
from .role_connection import RoleConnectionMetadata, RoleConnectionMetadataType
from .scheduled_event import ScheduledEvent, ScheduledEventStatus, ScheduledEventType
from .sku import Sku, SkuFlag, SkuType
from .snowflake import (
    DISCORD_EPOCH_MS,
    SnowflakeLike,
    parse_snowflake,
    snowflake_time,
    time_to_snowflake,
)
from .user import User, UserFlag, UserSnowflake
from .webhook import Webhook, WebhookReference, WebhookType

__all__ = [
    "AudioChannelMixin",
    "AutoArchiveDuration",
    "AutoModEventType",
    "AutoModResponse",
    "AutoModResponseType",
    "AutoModRule",
    "AutoModTriggerType",
    "Ban",
    "BoostTier",
    "BulkBanResponse",
    "CODED_ENUMS",
    "CategorizableMixin",
    "Category",
    "Channel",
    "ChannelType",
    "CodedEnum",
    "DISCORD_EPOCH_MS",
    "DiscordLocale",
    "Entitlement",
    "EntitlementType",
    "Entity",
    "ExplicitContentLevel",
    "FlagEnum",
    "ForumChannel",
    "ForumPost",
    "ForumTag",
    "GroupChannel",
    "Guild",
    "GuildChannel",
    "GuildChannelMixin",
    "Invite",
    "InviteChannel",
    "InviteContainerMixin",
    "InviteGuild",
    "InviteTargetType",
    "InviteType",
    "KeywordPreset",
    "MFALevel",
    "MediaChannel",
    "MentionType",
    "Message",
    "MessageChannelMixin",
    "MessageFlag",
    "MessageType",
    "NSFWLevel",
    "NewsChannel",
    "NotificationLevel",
    "NsfwMixin",
    "OverrideTargetType",
    "PAYLOAD_PARSERS",
    "Permission",
    "PermissionContainerMixin",
    "PermissionOverride",
    "PostContainerMixin",
    "PrivateChannel",
    "Role",
    "RoleConnectionMetadata",
    "RoleConnectionMetadataType",
    "RoleTags",
    "ScheduledEvent",
    "ScheduledEventStatus",
    "ScheduledEventType",
    "Sku",
    "SkuFlag",
    "SkuType",
    "SlowmodeMixin",
    "SnowflakeLike",
    "StageChannel",
    "StringCodedEnum",
    "TextChannel",
    "ThreadChannel",
    "ThreadContainerMixin",
    "TimeFormat",
    "Timeout",
    "TopicMixin",
    "UNKNOWN_KEY",
    "UNKNOWN_STRING_KEY",
    "UnknownChannel",
    "User",
    "UserFlag",
    "UserSnowflake",
    "VanityInvite",
    "VerificationLevel",
    "VoiceChannel",
    "Webhook",
    "WebhookReference",
    "WebhookType",
    "channel_from_payload",
    "channel_mention",
    "emoji_mention",
    "find_enum",
    "find_mentions",
    "has_permissions",
    "mentions_everyone",
    "parse_snowflake",
    "permissions_from_raw",
    "permissions_to_raw",
    "resolve_code",
    "role_mention",
    "slash_command_mention",
    "snowflake_time",
    "time_to_snowflake",
    "timestamp_mention",
    "user_mention",
]
