import pytest

from discord_entities.core.errors import (
    DetachedEntityError,
    InvalidArgumentError,
    PayloadError,
)
from discord_entities.core.transport import CompiledRoute
from discord_entities.entities import (
    ChannelType,
    ForumPost,
    Invite,
    Message,
    ThreadChannel,
    channel_from_payload,
)

GUILD_ID = 2
FORUM_ID = 900


def _channel(transport, code: int, channel_id: int = 1):
    return channel_from_payload(
        {"id": str(channel_id), "guild_id": str(GUILD_ID), "name": "c", "type": code},
        transport=transport,
    )


def _post_response():
    return {
        "id": "901",
        "guild_id": str(GUILD_ID),
        "parent_id": str(FORUM_ID),
        "owner_id": "5",
        "name": "How do I X?",
        "type": 11,
        "applied_tags": ["10"],
        "message": {
            "id": "901",
            "channel_id": "901",
            "content": "Details inside",
            "author": {"id": "5", "username": "asker"},
        },
    }


@pytest.mark.anyio
async def test_create_invite(transport) -> None:
    transport.response = {"code": "abc123", "max_age": 3600, "max_uses": 5, "uses": 0}
    channel = _channel(transport, 0)
    invite = await channel.create_invite(max_age=3600, max_uses=5, unique=True, reason="event")
    assert isinstance(invite, Invite)
    assert invite.code == "abc123"
    assert invite.transport is transport
    route, payload, reason = transport.last_call
    assert route == CompiledRoute("POST", "channels/1/invites")
    assert payload == {"max_age": 3600, "max_uses": 5, "temporary": False, "unique": True}
    assert reason == "event"


@pytest.mark.anyio
async def test_create_invite_defaults(transport) -> None:
    transport.response = {"code": "x"}
    await _channel(transport, 2).create_invite()
    _, payload, _ = transport.last_call
    assert payload["max_age"] == 86400
    assert payload["max_uses"] == 0


@pytest.mark.anyio
@pytest.mark.parametrize(
    "kwargs", [{"max_age": -1}, {"max_age": 604801}, {"max_uses": 101}]
)
async def test_create_invite_validates_limits(transport, kwargs) -> None:
    with pytest.raises(InvalidArgumentError):
        await _channel(transport, 0).create_invite(**kwargs)
    assert transport.calls == []


@pytest.mark.anyio
async def test_create_post_returns_message_and_thread(transport) -> None:
    transport.response = _post_response()
    forum = _channel(transport, 15, FORUM_ID)
    post = await forum.create_post("How do I X?", "Details inside", tag_ids=[10, "11"])
    assert isinstance(post, ForumPost)
    assert isinstance(post.thread, ThreadChannel)
    assert isinstance(post.message, Message)
    assert post.thread.type is ChannelType.GUILD_PUBLIC_THREAD
    assert post.thread.parent_id == FORUM_ID
    assert post.message.content == "Details inside"
    assert post.message.guild_id == GUILD_ID
    route, payload, reason = transport.last_call
    assert route == CompiledRoute("POST", f"channels/{FORUM_ID}/threads")
    assert payload == {
        "name": "How do I X?",
        "message": {"content": "Details inside"},
        "applied_tags": ["10", "11"],
    }
    assert reason is None


@pytest.mark.anyio
async def test_media_channels_accept_posts(transport) -> None:
    transport.response = _post_response()
    post = await _channel(transport, 16, FORUM_ID).create_post("title", "body")
    assert "applied_tags" not in transport.last_call[1]
    assert post.thread.id == 901


@pytest.mark.anyio
@pytest.mark.parametrize(
    "name, content",
    [("", "body"), ("x" * 101, "body"), ("title", ""), ("title", "x" * 2001)],
)
async def test_create_post_validation(transport, name, content) -> None:
    with pytest.raises(InvalidArgumentError):
        await _channel(transport, 15).create_post(name, content)
    assert transport.calls == []


@pytest.mark.anyio
async def test_create_post_requires_message_in_response(transport) -> None:
    response = _post_response()
    del response["message"]
    transport.response = response
    with pytest.raises(PayloadError):
        await _channel(transport, 15, FORUM_ID).create_post("title", "body")


@pytest.mark.anyio
async def test_delete_guild_channel(transport) -> None:
    await _channel(transport, 4, 33).delete(reason="tidy")
    assert transport.last_call == (CompiledRoute("DELETE", "channels/33"), None, "tidy")


@pytest.mark.anyio
async def test_detached_channel_operations_fail() -> None:
    channel = _channel(None, 0)
    with pytest.raises(DetachedEntityError):
        await channel.create_invite()
    with pytest.raises(DetachedEntityError):
        await channel.delete()
