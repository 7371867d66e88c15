from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import unique
from typing import Any, Iterable, Optional, Union

from ..core.coercion import (
    coerce_bool,
    coerce_int,
    coerce_snowflake,
    coerce_str,
    coerce_str_list,
    require_mapping,
    require_snowflake,
    require_str,
)
from ..core.errors import (
    EntityStateError,
    InvalidArgumentError,
    InvalidSnowflakeError,
    PayloadError,
    UnknownKeyError,
)
from ..core.logging_utils import log_event
from ..core.transport import EntityTransport, Routes
from . import cdn
from .base import Entity, resolve_code
from .coded import UNKNOWN_KEY, CodedEnum
from .locale import DiscordLocale
from .message import MAX_FILE_SIZE
from .role import Role
from .snowflake import SnowflakeLike, parse_snowflake
from .user import User, UserSnowflake

logger = logging.getLogger(__name__)

MAX_BULK_BAN_USERS = 200
MAX_BAN_DELETION_SECONDS = 604800
UNBOUNDED_LIMIT = 2**31 - 1

VIP_REGIONS_FEATURE = "VIP_REGIONS"
MORE_EMOJI_FEATURE = "MORE_EMOJI"
VANITY_URL_FEATURE = "VANITY_URL"
COMMUNITY_FEATURE = "COMMUNITY"


@unique
class Timeout(CodedEnum):
    """AFK timeouts in seconds. Chosen by the caller; unknown keys are rejected."""

    SECONDS_60 = 60
    SECONDS_300 = 300
    SECONDS_900 = 900
    SECONDS_1800 = 1800
    SECONDS_3600 = 3600

    @property
    def seconds(self) -> int:
        return self.key


@unique
class VerificationLevel(CodedEnum):
    NONE = 0
    LOW = 1
    MEDIUM = 2
    HIGH = 3
    VERY_HIGH = 4
    UNKNOWN = UNKNOWN_KEY


@unique
class NotificationLevel(CodedEnum):
    ALL_MESSAGES = 0
    MENTIONS_ONLY = 1
    UNKNOWN = UNKNOWN_KEY


@unique
class MFALevel(CodedEnum):
    NONE = 0
    TWO_FACTOR_AUTH = 1
    UNKNOWN = UNKNOWN_KEY


@unique
class ExplicitContentLevel(CodedEnum):
    OFF = (0, "Don't scan any messages.")
    NO_ROLE = (1, "Scan messages from members without a role.")
    ALL = (2, "Scan messages sent by all members.")
    UNKNOWN = (UNKNOWN_KEY, "Unknown filter level!")

    def __init__(self, key: int, description: str) -> None:
        self.description = description


@unique
class NSFWLevel(CodedEnum):
    DEFAULT = 0
    EXPLICIT = 1
    SAFE = 2
    AGE_RESTRICTED = 3
    UNKNOWN = UNKNOWN_KEY


@unique
class BoostTier(CodedEnum):
    """Server boost tiers and the limits each one unlocks."""

    NONE = (0, 96000, 50)
    TIER_1 = (1, 128000, 100)
    TIER_2 = (2, 256000, 150)
    TIER_3 = (3, 384000, 250)
    UNKNOWN = (UNKNOWN_KEY, UNBOUNDED_LIMIT, UNBOUNDED_LIMIT)

    def __init__(self, key: int, max_bitrate: int, max_emojis: int) -> None:
        self.max_bitrate = max_bitrate
        self.max_emojis = max_emojis

    @property
    def max_file_size(self) -> int:
        if self is BoostTier.TIER_2:
            return 50 << 20
        if self is BoostTier.TIER_3:
            return 100 << 20
        return MAX_FILE_SIZE


@dataclass(frozen=True)
class Ban:
    user: User
    reason: Optional[str] = None

    @classmethod
    def from_payload(cls, payload: Any) -> "Ban":
        data = require_mapping(payload, kind="ban")
        return cls(user=User.from_payload(data.get("user")), reason=coerce_str(data.get("reason")))


@dataclass(frozen=True)
class BulkBanResponse:
    """Outcome of a bulk ban: users banned and users that could not be banned.

    Both sequences are copied into tuples, so changes to the iterables passed
    in never show up here.
    """

    banned_users: tuple[UserSnowflake, ...]
    failed_users: tuple[UserSnowflake, ...]

    def __post_init__(self) -> None:
        object.__setattr__(self, "banned_users", tuple(self.banned_users))
        object.__setattr__(self, "failed_users", tuple(self.failed_users))

    @classmethod
    def from_payload(cls, payload: Any) -> "BulkBanResponse":
        data = require_mapping(payload, kind="bulk ban response")
        return cls(
            banned_users=_user_snowflakes(data, "banned_users"),
            failed_users=_user_snowflakes(data, "failed_users"),
        )


def _user_snowflakes(data: Any, key: str) -> tuple[UserSnowflake, ...]:
    value = data.get(key)
    if not isinstance(value, list):
        return ()
    try:
        return tuple(UserSnowflake.of(item) for item in value)
    except InvalidSnowflakeError as exc:
        raise PayloadError(
            f"bulk ban response has an invalid user id in {key}", key=key
        ) from exc


@dataclass(frozen=True)
class VanityInvite:
    """Custom invite code of a guild with the ``VANITY_URL`` feature."""

    code: str
    uses: int

    @classmethod
    def from_payload(cls, payload: Any) -> "VanityInvite":
        data = require_mapping(payload, kind="vanity invite")
        return cls(
            code=require_str(data, "code"),
            uses=coerce_int(data.get("uses"), default=0) or 0,
        )

    @property
    def url(self) -> str:
        return cdn.invite_url(self.code)


def _lenient_timeout(raw: Any) -> Optional[Timeout]:
    if raw is None:
        return None
    try:
        return Timeout.from_key(raw)
    except UnknownKeyError:
        log_event(
            logger,
            logging.DEBUG,
            "discord.entities.unknown_code",
            enum=Timeout.__name__,
            field="afk_timeout",
            code=raw,
        )
        return None


@dataclass(frozen=True, eq=False)
class Guild(Entity):
    id: int
    name: str
    owner_id: Optional[int] = None
    icon_hash: Optional[str] = None
    splash_hash: Optional[str] = None
    banner_hash: Optional[str] = None
    description: Optional[str] = None
    vanity_code: Optional[str] = None
    features: frozenset[str] = frozenset()
    verification_level: VerificationLevel = VerificationLevel.NONE
    default_notification_level: NotificationLevel = NotificationLevel.ALL_MESSAGES
    explicit_content_level: ExplicitContentLevel = ExplicitContentLevel.OFF
    mfa_level: MFALevel = MFALevel.NONE
    nsfw_level: NSFWLevel = NSFWLevel.DEFAULT
    boost_tier: BoostTier = BoostTier.NONE
    boost_count: int = 0
    locale: DiscordLocale = DiscordLocale.ENGLISH_US
    afk_channel_id: Optional[int] = None
    afk_timeout: Optional[Timeout] = None
    system_channel_id: Optional[int] = None
    rules_channel_id: Optional[int] = None
    boost_progress_bar_enabled: bool = False
    max_members: Optional[int] = None
    approximate_member_count: Optional[int] = None
    roles: tuple[Role, ...] = ()
    transport: Optional[EntityTransport] = field(default=None, repr=False)

    @classmethod
    def from_payload(
        cls, payload: Any, *, transport: Optional[EntityTransport] = None
    ) -> "Guild":
        data = require_mapping(payload, kind="guild")
        guild_id = require_snowflake(data, "id")
        raw_roles = data.get("roles")
        return cls(
            id=guild_id,
            name=require_str(data, "name"),
            owner_id=coerce_snowflake(data.get("owner_id")),
            icon_hash=coerce_str(data.get("icon")),
            splash_hash=coerce_str(data.get("splash")),
            banner_hash=coerce_str(data.get("banner")),
            description=coerce_str(data.get("description")),
            vanity_code=coerce_str(data.get("vanity_url_code")),
            features=frozenset(coerce_str_list(data.get("features"))),
            verification_level=resolve_code(
                VerificationLevel,
                data.get("verification_level"),
                field="guild.verification_level",
            ),
            default_notification_level=resolve_code(
                NotificationLevel,
                data.get("default_message_notifications"),
                field="guild.default_message_notifications",
            ),
            explicit_content_level=resolve_code(
                ExplicitContentLevel,
                data.get("explicit_content_filter"),
                field="guild.explicit_content_filter",
            ),
            mfa_level=resolve_code(MFALevel, data.get("mfa_level"), field="guild.mfa_level"),
            nsfw_level=resolve_code(
                NSFWLevel, data.get("nsfw_level"), field="guild.nsfw_level"
            ),
            boost_tier=resolve_code(
                BoostTier, data.get("premium_tier"), field="guild.premium_tier"
            ),
            boost_count=coerce_int(data.get("premium_subscription_count"), default=0) or 0,
            locale=DiscordLocale.from_key(
                coerce_str(data.get("preferred_locale"), DiscordLocale.ENGLISH_US.key)
            ),
            afk_channel_id=coerce_snowflake(data.get("afk_channel_id")),
            afk_timeout=_lenient_timeout(data.get("afk_timeout")),
            system_channel_id=coerce_snowflake(data.get("system_channel_id")),
            rules_channel_id=coerce_snowflake(data.get("rules_channel_id")),
            boost_progress_bar_enabled=coerce_bool(
                data.get("premium_progress_bar_enabled")
            ),
            max_members=coerce_int(data.get("max_members")),
            approximate_member_count=coerce_int(data.get("approximate_member_count")),
            roles=tuple(
                Role.from_payload(item, guild_id=guild_id, transport=transport)
                for item in (raw_roles if isinstance(raw_roles, list) else ())
            ),
            transport=transport,
        )

    def has_feature(self, feature: str) -> bool:
        return feature in self.features

    @property
    def is_community(self) -> bool:
        return COMMUNITY_FEATURE in self.features

    @property
    def public_role(self) -> Optional[Role]:
        """The ``@everyone`` role, whose id equals the guild id."""
        return self.get_role(self.id)

    def get_role(self, role_id: SnowflakeLike) -> Optional[Role]:
        target = parse_snowflake(role_id)
        for role in self.roles:
            if role.id == target:
                return role
        return None

    def is_owner(self, user: SnowflakeLike) -> bool:
        return self.owner_id == parse_snowflake(user)

    @property
    def max_bitrate(self) -> int:
        floor = 384000 if VIP_REGIONS_FEATURE in self.features else 96000
        return max(floor, self.boost_tier.max_bitrate)

    @property
    def max_emojis(self) -> int:
        floor = 200 if MORE_EMOJI_FEATURE in self.features else 50
        return max(floor, self.boost_tier.max_emojis)

    @property
    def max_file_size(self) -> int:
        return self.boost_tier.max_file_size

    @property
    def icon_url(self) -> Optional[str]:
        if self.icon_hash is None:
            return None
        return cdn.guild_icon_url(self.id, self.icon_hash)

    @property
    def splash_url(self) -> Optional[str]:
        if self.splash_hash is None:
            return None
        return cdn.guild_splash_url(self.id, self.splash_hash)

    @property
    def banner_url(self) -> Optional[str]:
        if self.banner_hash is None:
            return None
        return cdn.banner_url(self.id, self.banner_hash)

    @property
    def vanity_url(self) -> Optional[str]:
        if self.vanity_code is None:
            return None
        return cdn.invite_url(self.vanity_code)

    async def retrieve_vanity_invite(self) -> VanityInvite:
        if VANITY_URL_FEATURE not in self.features:
            raise EntityStateError("guild does not have the VANITY_URL feature")
        transport = self._require_transport()
        response = await transport.request(Routes.GET_VANITY_URL.compile(guild_id=self.id))
        return VanityInvite.from_payload(response)

    async def ban(
        self,
        users: Iterable[Union[UserSnowflake, User, SnowflakeLike]],
        *,
        delete_message_seconds: int = 0,
        reason: Optional[str] = None,
    ) -> BulkBanResponse:
        """Ban up to 200 users at once.

        Users that could not be banned (already banned, higher role, ...) are
        reported in :attr:`BulkBanResponse.failed_users` rather than raised.
        """
        user_ids = _dedupe_ids(users)
        if not user_ids:
            raise InvalidArgumentError("users may not be empty")
        if len(user_ids) > MAX_BULK_BAN_USERS:
            raise InvalidArgumentError(
                f"cannot ban more than {MAX_BULK_BAN_USERS} users at once"
            )
        if not 0 <= delete_message_seconds <= MAX_BAN_DELETION_SECONDS:
            raise InvalidArgumentError(
                "delete_message_seconds must be between 0 and "
                f"{MAX_BAN_DELETION_SECONDS}, got {delete_message_seconds}"
            )
        transport = self._require_transport()
        response = await transport.request(
            Routes.BULK_BAN.compile(guild_id=self.id),
            payload={
                "user_ids": [str(user_id) for user_id in user_ids],
                "delete_message_seconds": delete_message_seconds,
            },
            reason=reason,
        )
        return BulkBanResponse.from_payload(response)


def _dedupe_ids(users: Iterable[Union[UserSnowflake, User, SnowflakeLike]]) -> list[int]:
    seen: dict[int, None] = {}
    for user in users:
        if isinstance(user, (UserSnowflake, User)):
            seen.setdefault(user.id, None)
        else:
            seen.setdefault(parse_snowflake(user), None)
    return list(seen)


__all__ = [
    "Ban",
    "BoostTier",
    "BulkBanResponse",
    "ExplicitContentLevel",
    "Guild",
    "MFALevel",
    "MAX_BAN_DELETION_SECONDS",
    "MAX_BULK_BAN_USERS",
    "NSFWLevel",
    "NotificationLevel",
    "Timeout",
    "VanityInvite",
    "VerificationLevel",
]
