from datetime import datetime, timezone

import pytest

from discord_entities.core.errors import InvalidArgumentError, InvalidSnowflakeError
from discord_entities.entities.mentions import (
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


def test_basic_mentions() -> None:
    assert user_mention(80351110224678912) == "<@80351110224678912>"
    assert channel_mention("41771983423143937") == "<#41771983423143937>"
    assert role_mention(165511591545143296) == "<@&165511591545143296>"


def test_mentions_reject_invalid_ids() -> None:
    with pytest.raises(InvalidSnowflakeError):
        user_mention("me")
    with pytest.raises(InvalidSnowflakeError):
        user_mention("١٢٣")
    with pytest.raises(InvalidSnowflakeError):
        role_mention(2**64)


SAMPLE_IDS = [0, 1, 9, 10, 41771983423143937, 175928847299117063, 2**63, 2**64 - 2, 2**64 - 1]


@pytest.mark.parametrize("formatter", [user_mention, channel_mention, role_mention])
def test_mention_formatting_is_pure_and_injective(formatter) -> None:
    rendered = [formatter(snowflake) for snowflake in SAMPLE_IDS]
    assert rendered == [formatter(snowflake) for snowflake in SAMPLE_IDS]
    assert rendered == [formatter(str(snowflake)) for snowflake in SAMPLE_IDS]
    assert len(set(rendered)) == len(SAMPLE_IDS)


def test_mention_kinds_never_collide() -> None:
    outputs = {
        formatter(snowflake)
        for formatter in (user_mention, channel_mention, role_mention)
        for snowflake in SAMPLE_IDS
    }
    assert len(outputs) == 3 * len(SAMPLE_IDS)


def test_find_mentions_ignores_non_ascii_and_oversized_ids() -> None:
    content = f"hi <@١٢٣> <@{2**64}> <#٧> <@7>"
    assert find_mentions(content, MentionType.USER) == [7]
    assert find_mentions(content, MentionType.CHANNEL) == []
    assert find_mentions(f"<:ok:{2**64}>", MentionType.EMOJI) == []


def test_emoji_mentions() -> None:
    assert emoji_mention("mmLol", 216154654256398347) == "<:mmLol:216154654256398347>"
    assert (
        emoji_mention("b1nzy", 392938283556143104, animated=True)
        == "<a:b1nzy:392938283556143104>"
    )
    with pytest.raises(InvalidArgumentError):
        emoji_mention("has space", 1)


def test_slash_command_mentions() -> None:
    assert slash_command_mention("airhorn", 1) == "</airhorn:1>"
    assert slash_command_mention("car flow status", 2) == "</car flow status:2>"
    with pytest.raises(InvalidArgumentError):
        slash_command_mention("a b c d", 3)


def test_timestamp_mentions() -> None:
    moment = datetime(2021, 6, 1, 12, 0, tzinfo=timezone.utc)
    assert timestamp_mention(moment) == "<t:1622548800:f>"
    assert timestamp_mention(1622548800, TimeFormat.RELATIVE) == "<t:1622548800:R>"
    with pytest.raises(InvalidArgumentError):
        timestamp_mention("soon")  # type: ignore[arg-type]


def test_find_mentions_in_order_without_duplicates() -> None:
    content = "hi <@!2> and <@1>, also <@2> in <#9> for <@&5>"
    assert find_mentions(content, MentionType.USER) == [2, 1]
    assert find_mentions(content, MentionType.CHANNEL) == [9]
    assert find_mentions(content, MentionType.ROLE) == [5]
    assert find_mentions(content, MentionType.EVERYONE) == []


def test_find_emoji_and_command_mentions() -> None:
    content = "<a:party:11> </ping:22> <:ok:33>"
    assert find_mentions(content, MentionType.EMOJI) == [11, 33]
    assert find_mentions(content, MentionType.SLASH_COMMAND) == [22]


def test_mentions_everyone() -> None:
    assert mentions_everyone("hello @here")
    assert mentions_everyone("@everyone wake up")
    assert not mentions_everyone("hello <@1>")
    assert not mentions_everyone("")
