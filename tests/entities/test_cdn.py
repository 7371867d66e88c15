import pytest

from discord_entities.core.errors import InvalidArgumentError
from discord_entities.entities import cdn

USER_ID = 175928847299117063


def test_avatar_urls_pick_gif_for_animated_hashes() -> None:
    assert cdn.avatar_url(USER_ID, "abc") == (
        f"https://cdn.discordapp.com/avatars/{USER_ID}/abc.png"
    )
    assert cdn.avatar_url(USER_ID, "a_abc", image_format="webp", size=128) == (
        f"https://cdn.discordapp.com/avatars/{USER_ID}/a_abc.gif?size=128"
    )


def test_image_size_must_be_power_of_two() -> None:
    with pytest.raises(InvalidArgumentError):
        cdn.guild_icon_url(1, "hash", size=100)
    with pytest.raises(InvalidArgumentError):
        cdn.guild_icon_url(1, "hash", size=8)


def test_custom_base_url() -> None:
    url = cdn.banner_url(1, "h", base_url="https://media.example.test/")
    assert url == "https://media.example.test/banners/1/h.png"


def test_other_image_paths() -> None:
    assert cdn.member_avatar_url(1, 2, "h").endswith("/guilds/1/users/2/avatars/h.png")
    assert cdn.guild_splash_url(1, "h").endswith("/splashes/1/h.png")
    assert cdn.role_icon_url(3, "h", image_format="jpg").endswith("/role-icons/3/h.jpg")
    assert cdn.emoji_url(4).endswith("/emojis/4.png")
    assert cdn.emoji_url(4, animated=True).endswith("/emojis/4.gif")
    assert cdn.scheduled_event_image_url(5, "h").endswith("/guild-events/5/h.png")


def test_default_avatars() -> None:
    assert cdn.default_avatar_index(USER_ID) == 2
    assert cdn.default_avatar_index(USER_ID, "0") == 2
    assert cdn.default_avatar_index(USER_ID, "0001") == 1
    assert cdn.default_avatar_url(USER_ID, "1337") == (
        "https://cdn.discordapp.com/embed/avatars/2.png"
    )
    with pytest.raises(InvalidArgumentError):
        cdn.default_avatar_index(USER_ID, "12ab")


def test_jump_urls() -> None:
    assert cdn.message_jump_url(1, 2, 3) == "https://discord.com/channels/1/2/3"
    assert cdn.message_jump_url(None, 2, 3) == "https://discord.com/channels/@me/2/3"
    assert cdn.channel_jump_url("1", "2") == "https://discord.com/channels/1/2"


def test_webhook_urls() -> None:
    url = cdn.webhook_url(123, "tok-en_1")
    assert url == "https://discord.com/api/webhooks/123/tok-en_1"
    assert cdn.parse_webhook_url(url) == (123, "tok-en_1")
    assert cdn.parse_webhook_url(
        "https://canary.discordapp.com/api/v10/webhooks/456/abc"
    ) == (456, "abc")
    assert cdn.parse_webhook_url("https://example.com/api/webhooks/1/x") is None


def test_parse_webhook_url_only_returns_usable_ids() -> None:
    base = "https://discord.com/api/webhooks"
    assert cdn.parse_webhook_url(f"{base}/99999999999999999999999/tok") is None
    assert cdn.parse_webhook_url(f"{base}/{2**64}/tok") is None
    assert cdn.parse_webhook_url(f"{base}/١٢٣/tok") is None
    largest = cdn.parse_webhook_url(f"{base}/{2**64 - 1}/tok")
    assert largest == (2**64 - 1, "tok")
    assert cdn.webhook_url(*largest) == f"{base}/{2**64 - 1}/tok"
    with pytest.raises(InvalidArgumentError):
        cdn.webhook_url(123, "bad/token")


def test_invite_urls() -> None:
    assert cdn.invite_url("discord-developers") == "https://discord.gg/discord-developers"
    with pytest.raises(InvalidArgumentError):
        cdn.invite_url("")
