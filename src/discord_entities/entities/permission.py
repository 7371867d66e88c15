from __future__ import annotations

from enum import unique
from typing import Any, Iterable

from ..core.coercion import coerce_int
from .coded import FlagEnum


@unique
class Permission(FlagEnum):
    # General server / channel
    MANAGE_CHANNEL = (4, True, True, "Manage Channels")
    MANAGE_SERVER = (5, True, False, "Manage Server")
    VIEW_AUDIT_LOGS = (7, True, False, "View Audit Logs")
    VIEW_CHANNEL = (10, True, True, "View Channel(s)")
    VIEW_GUILD_INSIGHTS = (19, True, False, "View Server Insights")
    MANAGE_ROLES = (28, True, True, "Manage Roles")
    MANAGE_WEBHOOKS = (29, True, True, "Manage Webhooks")
    MANAGE_GUILD_EXPRESSIONS = (30, True, False, "Manage Expressions")
    MANAGE_EVENTS = (33, True, True, "Manage Events")
    VIEW_CREATOR_MONETIZATION_ANALYTICS = (41, True, False, "View Creator Analytics")
    CREATE_GUILD_EXPRESSIONS = (43, True, False, "Create Expressions")
    CREATE_SCHEDULED_EVENTS = (44, True, True, "Create Events")

    # Membership
    CREATE_INSTANT_INVITE = (0, True, True, "Create Instant Invite")
    KICK_MEMBERS = (1, True, False, "Kick Members")
    BAN_MEMBERS = (2, True, False, "Ban Members")
    NICKNAME_CHANGE = (26, True, False, "Change Nickname")
    NICKNAME_MANAGE = (27, True, False, "Manage Nicknames")
    MODERATE_MEMBERS = (40, True, False, "Timeout Members")

    # Text
    MESSAGE_ADD_REACTION = (6, True, True, "Add Reactions")
    MESSAGE_SEND = (11, True, True, "Send Messages")
    MESSAGE_TTS = (12, True, True, "Send TTS Messages")
    MESSAGE_MANAGE = (13, True, True, "Manage Messages")
    MESSAGE_EMBED_LINKS = (14, True, True, "Embed Links")
    MESSAGE_ATTACH_FILES = (15, True, True, "Attach Files")
    MESSAGE_HISTORY = (16, True, True, "Read History")
    MESSAGE_MENTION_EVERYONE = (17, True, True, "Mention Everyone")
    MESSAGE_EXT_EMOJI = (18, True, True, "Use External Emojis")
    USE_APPLICATION_COMMANDS = (31, True, True, "Use Application Commands")
    MESSAGE_EXT_STICKER = (37, True, True, "Use External Stickers")
    MESSAGE_SEND_VOICE = (46, True, True, "Send Voice Messages")
    MESSAGE_SEND_POLLS = (49, True, True, "Create Polls")
    USE_EXTERNAL_APPLICATIONS = (50, True, True, "Use External Apps")

    # Threads
    MANAGE_THREADS = (34, True, True, "Manage Threads")
    CREATE_PUBLIC_THREADS = (35, True, True, "Create Public Threads")
    CREATE_PRIVATE_THREADS = (36, True, True, "Create Private Threads")
    MESSAGE_SEND_IN_THREADS = (38, True, True, "Send Messages in Threads")

    # Voice
    PRIORITY_SPEAKER = (8, True, True, "Priority Speaker")
    VOICE_STREAM = (9, True, True, "Video")
    VOICE_CONNECT = (20, True, True, "Connect")
    VOICE_SPEAK = (21, True, True, "Speak")
    VOICE_MUTE_OTHERS = (22, True, True, "Mute Members")
    VOICE_DEAF_OTHERS = (23, True, True, "Deafen Members")
    VOICE_MOVE_OTHERS = (24, True, True, "Move Members")
    VOICE_USE_VAD = (25, True, True, "Use Voice Activity")
    VOICE_START_ACTIVITIES = (39, True, True, "Use Activities")
    VOICE_USE_SOUNDBOARD = (42, True, True, "Use Soundboard")
    VOICE_USE_EXTERNAL_SOUNDS = (45, True, True, "Use External Sounds")

    # Stage
    REQUEST_TO_SPEAK = (32, True, True, "Request to Speak")

    # Advanced
    ADMINISTRATOR = (3, True, False, "Administrator")

    UNKNOWN = (-1, False, False, "Unknown")

    def __init__(
        self, offset: int, is_guild: bool, is_channel: bool, display_name: str
    ) -> None:
        self.is_guild = is_guild
        self.is_channel = is_channel
        self.display_name = display_name

    @property
    def is_text(self) -> bool:
        return self.raw & ALL_TEXT_PERMISSIONS == self.raw and self.raw != 0

    @property
    def is_voice(self) -> bool:
        return self.raw & ALL_VOICE_PERMISSIONS == self.raw and self.raw != 0


def parse_permissions(value: Any) -> int:
    """Discord serializes permission bitsets as decimal strings."""
    raw = coerce_int(value, default=0)
    return raw if raw is not None and raw >= 0 else 0


def permissions_from_raw(raw: int) -> frozenset[Permission]:
    return Permission.from_bitfield(raw)


def permissions_to_raw(permissions: Iterable[Permission]) -> int:
    return Permission.to_bitfield(permissions)


def has_permissions(raw: int, *required: Permission) -> bool:
    """``ADMINISTRATOR`` implies every permission."""
    if raw & Permission.ADMINISTRATOR.raw:
        return True
    needed = permissions_to_raw(required)
    return raw & needed == needed


ALL_PERMISSIONS = permissions_to_raw(Permission)
ALL_CHANNEL_PERMISSIONS = permissions_to_raw(p for p in Permission if p.is_channel)
ALL_GUILD_PERMISSIONS = permissions_to_raw(p for p in Permission if p.is_guild)
ALL_TEXT_PERMISSIONS = permissions_to_raw(
    (
        Permission.MESSAGE_ADD_REACTION,
        Permission.MESSAGE_SEND,
        Permission.MESSAGE_TTS,
        Permission.MESSAGE_MANAGE,
        Permission.MESSAGE_EMBED_LINKS,
        Permission.MESSAGE_ATTACH_FILES,
        Permission.MESSAGE_EXT_EMOJI,
        Permission.MESSAGE_EXT_STICKER,
        Permission.MESSAGE_HISTORY,
        Permission.MESSAGE_MENTION_EVERYONE,
        Permission.USE_APPLICATION_COMMANDS,
        Permission.MANAGE_THREADS,
        Permission.CREATE_PUBLIC_THREADS,
        Permission.CREATE_PRIVATE_THREADS,
        Permission.MESSAGE_SEND_IN_THREADS,
        Permission.MESSAGE_SEND_VOICE,
        Permission.MESSAGE_SEND_POLLS,
    )
)
ALL_VOICE_PERMISSIONS = permissions_to_raw(
    (
        Permission.VOICE_STREAM,
        Permission.VOICE_CONNECT,
        Permission.VOICE_SPEAK,
        Permission.VOICE_MUTE_OTHERS,
        Permission.VOICE_DEAF_OTHERS,
        Permission.VOICE_MOVE_OTHERS,
        Permission.VOICE_USE_VAD,
        Permission.PRIORITY_SPEAKER,
        Permission.REQUEST_TO_SPEAK,
        Permission.VOICE_START_ACTIVITIES,
        Permission.VOICE_USE_SOUNDBOARD,
        Permission.VOICE_USE_EXTERNAL_SOUNDS,
    )
)


__all__ = [
    "ALL_CHANNEL_PERMISSIONS",
    "ALL_GUILD_PERMISSIONS",
    "ALL_PERMISSIONS",
    "ALL_TEXT_PERMISSIONS",
    "ALL_VOICE_PERMISSIONS",
    "Permission",
    "has_permissions",
    "parse_permissions",
    "permissions_from_raw",
    "permissions_to_raw",
]
