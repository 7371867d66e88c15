from __future__ import annotations

import re
from typing import Optional

from ..core.config import DEFAULT_CDN_BASE_URL, DEFAULT_IMAGE_FORMAT, is_valid_image_size
from ..core.errors import InvalidArgumentError, InvalidSnowflakeError
from .snowflake import SnowflakeLike, parse_snowflake

DISCORD_BASE_URL = "https://discord.com"
INVITE_BASE_URL = "https://discord.gg"

AVATAR_PATH = "avatars/{id}/{hash}.{ext}"
DEFAULT_AVATAR_PATH = "embed/avatars/{index}.png"
BANNER_PATH = "banners/{id}/{hash}.{ext}"
GUILD_ICON_PATH = "icons/{id}/{hash}.{ext}"
GUILD_SPLASH_PATH = "splashes/{id}/{hash}.{ext}"
ROLE_ICON_PATH = "role-icons/{id}/{hash}.{ext}"
EMOJI_PATH = "emojis/{id}.{ext}"
SCHEDULED_EVENT_IMAGE_PATH = "guild-events/{id}/{hash}.{ext}"
MEMBER_AVATAR_PATH = "guilds/{guild_id}/users/{id}/avatars/{hash}.{ext}"

DEFAULT_AVATAR_COUNT = 6
LEGACY_DEFAULT_AVATAR_COUNT = 5

WEBHOOK_URL_PATTERN = re.compile(
    r"https?://(?:[^\s.]+\.)?discord(?:app)?\.com/api(?:/v[0-9]+)?/webhooks/"
    r"(?P<id>[0-9]+)/(?P<token>[^\s/]+)",
    re.IGNORECASE,
)


def is_animated_hash(image_hash: str) -> bool:
    return image_hash.startswith("a_")


def _image_url(
    path: str,
    *,
    image_hash: Optional[str] = None,
    image_format: str = DEFAULT_IMAGE_FORMAT,
    size: Optional[int] = None,
    base_url: str = DEFAULT_CDN_BASE_URL,
    **fields: object,
) -> str:
    ext = "gif" if image_hash and is_animated_hash(image_hash) else image_format
    url = f"{base_url.rstrip('/')}/" + path.format(hash=image_hash, ext=ext, **fields)
    if size is not None:
        if not is_valid_image_size(size):
            raise InvalidArgumentError(
                f"image size must be a power of two between 16 and 4096, got {size}"
            )
        url += f"?size={size}"
    return url


def avatar_url(
    user_id: SnowflakeLike,
    avatar_hash: str,
    *,
    image_format: str = DEFAULT_IMAGE_FORMAT,
    size: Optional[int] = None,
    base_url: str = DEFAULT_CDN_BASE_URL,
) -> str:
    return _image_url(
        AVATAR_PATH,
        id=parse_snowflake(user_id),
        image_hash=avatar_hash,
        image_format=image_format,
        size=size,
        base_url=base_url,
    )


def member_avatar_url(
    guild_id: SnowflakeLike,
    user_id: SnowflakeLike,
    avatar_hash: str,
    *,
    image_format: str = DEFAULT_IMAGE_FORMAT,
    size: Optional[int] = None,
    base_url: str = DEFAULT_CDN_BASE_URL,
) -> str:
    return _image_url(
        MEMBER_AVATAR_PATH,
        guild_id=parse_snowflake(guild_id),
        id=parse_snowflake(user_id),
        image_hash=avatar_hash,
        image_format=image_format,
        size=size,
        base_url=base_url,
    )


def default_avatar_index(user_id: SnowflakeLike, discriminator: Optional[str] = None) -> int:
    """Users migrated to unique usernames have discriminator ``"0"``/``"0000"``."""
    if discriminator and discriminator.strip("0"):
        try:
            return int(discriminator) % LEGACY_DEFAULT_AVATAR_COUNT
        except ValueError as exc:
            raise InvalidArgumentError(f"invalid discriminator: {discriminator!r}") from exc
    return (parse_snowflake(user_id) >> 22) % DEFAULT_AVATAR_COUNT


def default_avatar_url(
    user_id: SnowflakeLike,
    discriminator: Optional[str] = None,
    *,
    base_url: str = DEFAULT_CDN_BASE_URL,
) -> str:
    index = default_avatar_index(user_id, discriminator)
    return f"{base_url.rstrip('/')}/" + DEFAULT_AVATAR_PATH.format(index=index)


def banner_url(
    entity_id: SnowflakeLike,
    banner_hash: str,
    *,
    image_format: str = DEFAULT_IMAGE_FORMAT,
    size: Optional[int] = None,
    base_url: str = DEFAULT_CDN_BASE_URL,
) -> str:
    """User and guild banners share the same path shape."""
    return _image_url(
        BANNER_PATH,
        id=parse_snowflake(entity_id),
        image_hash=banner_hash,
        image_format=image_format,
        size=size,
        base_url=base_url,
    )


def guild_icon_url(
    guild_id: SnowflakeLike,
    icon_hash: str,
    *,
    image_format: str = DEFAULT_IMAGE_FORMAT,
    size: Optional[int] = None,
    base_url: str = DEFAULT_CDN_BASE_URL,
) -> str:
    return _image_url(
        GUILD_ICON_PATH,
        id=parse_snowflake(guild_id),
        image_hash=icon_hash,
        image_format=image_format,
        size=size,
        base_url=base_url,
    )


def guild_splash_url(
    guild_id: SnowflakeLike,
    splash_hash: str,
    *,
    image_format: str = DEFAULT_IMAGE_FORMAT,
    size: Optional[int] = None,
    base_url: str = DEFAULT_CDN_BASE_URL,
) -> str:
    return _image_url(
        GUILD_SPLASH_PATH,
        id=parse_snowflake(guild_id),
        image_hash=splash_hash,
        image_format=image_format,
        size=size,
        base_url=base_url,
    )


def role_icon_url(
    role_id: SnowflakeLike,
    icon_hash: str,
    *,
    image_format: str = DEFAULT_IMAGE_FORMAT,
    size: Optional[int] = None,
    base_url: str = DEFAULT_CDN_BASE_URL,
) -> str:
    return _image_url(
        ROLE_ICON_PATH,
        id=parse_snowflake(role_id),
        image_hash=icon_hash,
        image_format=image_format,
        size=size,
        base_url=base_url,
    )


def emoji_url(
    emoji_id: SnowflakeLike,
    *,
    animated: bool = False,
    image_format: str = DEFAULT_IMAGE_FORMAT,
    size: Optional[int] = None,
    base_url: str = DEFAULT_CDN_BASE_URL,
) -> str:
    return _image_url(
        EMOJI_PATH,
        id=parse_snowflake(emoji_id),
        image_hash="a_" if animated else None,
        image_format=image_format,
        size=size,
        base_url=base_url,
    )


def scheduled_event_image_url(
    event_id: SnowflakeLike,
    image_hash: str,
    *,
    image_format: str = DEFAULT_IMAGE_FORMAT,
    size: Optional[int] = None,
    base_url: str = DEFAULT_CDN_BASE_URL,
) -> str:
    return _image_url(
        SCHEDULED_EVENT_IMAGE_PATH,
        id=parse_snowflake(event_id),
        image_hash=image_hash,
        image_format=image_format,
        size=size,
        base_url=base_url,
    )


def message_jump_url(
    guild_id: Optional[SnowflakeLike],
    channel_id: SnowflakeLike,
    message_id: SnowflakeLike,
) -> str:
    return f"{channel_jump_url(guild_id, channel_id)}/{parse_snowflake(message_id)}"


def channel_jump_url(guild_id: Optional[SnowflakeLike], channel_id: SnowflakeLike) -> str:
    """Direct-message channels use ``@me`` in place of the guild id."""
    guild = "@me" if guild_id is None else str(parse_snowflake(guild_id))
    return f"{DISCORD_BASE_URL}/channels/{guild}/{parse_snowflake(channel_id)}"


def webhook_url(webhook_id: SnowflakeLike, token: str) -> str:
    if not token or any(ch.isspace() or ch == "/" for ch in token):
        raise InvalidArgumentError("webhook token must be a non-empty path segment")
    return f"{DISCORD_BASE_URL}/api/webhooks/{parse_snowflake(webhook_id)}/{token}"


def parse_webhook_url(url: str) -> Optional[tuple[int, str]]:
    match = WEBHOOK_URL_PATTERN.fullmatch((url or "").strip())
    if match is None:
        return None
    try:
        webhook_id = parse_snowflake(match.group("id"))
    except InvalidSnowflakeError:
        return None
    return webhook_id, match.group("token")


def invite_url(code: str) -> str:
    if not code or any(ch.isspace() or ch == "/" for ch in code):
        raise InvalidArgumentError(f"invalid invite code: {code!r}")
    return f"{INVITE_BASE_URL}/{code}"


__all__ = [
    "DISCORD_BASE_URL",
    "INVITE_BASE_URL",
    "WEBHOOK_URL_PATTERN",
    "avatar_url",
    "banner_url",
    "channel_jump_url",
    "default_avatar_index",
    "default_avatar_url",
    "emoji_url",
    "guild_icon_url",
    "guild_splash_url",
    "invite_url",
    "is_animated_hash",
    "member_avatar_url",
    "message_jump_url",
    "parse_webhook_url",
    "role_icon_url",
    "scheduled_event_image_url",
    "webhook_url",
]
