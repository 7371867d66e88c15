import logging
from dataclasses import FrozenInstanceError

import pytest

from discord_entities.core.errors import UnknownKeyError
from discord_entities.entities import (
    AutoArchiveDuration,
    AutoModTriggerType,
    BoostTier,
    BulkBanResponse,
    ChannelType,
    DiscordLocale,
    ExplicitContentLevel,
    MessageFlag,
    MessageType,
    Permission,
    TimeFormat,
    Timeout,
    UserSnowflake,
    resolve_code,
)
from discord_entities.entities.coded import UNKNOWN_KEY, FlagEnum
from discord_entities.entities.registry import CODED_ENUMS

TOTAL_ENUMS = [cls for cls in CODED_ENUMS.values() if cls.is_total()]
STRICT_ENUMS = [cls for cls in CODED_ENUMS.values() if not cls.is_total()]


@pytest.mark.parametrize("enum_cls", CODED_ENUMS.values(), ids=lambda cls: cls.__name__)
def test_every_known_key_resolves_to_its_member(enum_cls) -> None:
    for member in enum_cls:
        assert enum_cls.from_key(member.key) is member


@pytest.mark.parametrize("enum_cls", CODED_ENUMS.values(), ids=lambda cls: cls.__name__)
def test_keys_are_unique(enum_cls) -> None:
    keys = [member.key for member in enum_cls]
    assert len(keys) == len(set(keys))


@pytest.mark.parametrize("enum_cls", TOTAL_ENUMS, ids=lambda cls: cls.__name__)
def test_total_enums_map_unrecognized_keys_to_unknown(enum_cls) -> None:
    unknown = enum_cls.UNKNOWN
    assert unknown.is_unknown
    assert enum_cls.from_key(unknown.key) is unknown
    bogus = "not-a-locale" if enum_cls is DiscordLocale else 987654
    assert enum_cls.from_key(bogus) is unknown
    assert enum_cls.from_key(None) is unknown


INT_TOTAL_ENUMS = [cls for cls in TOTAL_ENUMS if cls is not DiscordLocale]
INT_STRICT_ENUMS = [cls for cls in STRICT_ENUMS if cls is not TimeFormat]
UNRECOGNIZED_CANDIDATES = [*range(-50, 200), 2**31, 2**63, -(2**63)]


@pytest.mark.parametrize("enum_cls", INT_TOTAL_ENUMS, ids=lambda cls: cls.__name__)
def test_total_enums_are_total_over_integers(enum_cls) -> None:
    known = {member.key for member in enum_cls}
    for code in UNRECOGNIZED_CANDIDATES:
        member = enum_cls.from_key(code)
        if code in known:
            assert member.key == code
        else:
            assert member is enum_cls.UNKNOWN, code


@pytest.mark.parametrize("enum_cls", INT_TOTAL_ENUMS, ids=lambda cls: cls.__name__)
@pytest.mark.parametrize("code", ["4", 4.9, 4.0, True, b"4", [4]])
def test_total_enums_map_non_int_keys_to_unknown(enum_cls, code) -> None:
    assert enum_cls.from_key(code) is enum_cls.UNKNOWN


@pytest.mark.parametrize("enum_cls", STRICT_ENUMS, ids=lambda cls: cls.__name__)
def test_strict_enums_reject_unrecognized_keys(enum_cls) -> None:
    with pytest.raises(UnknownKeyError) as excinfo:
        enum_cls.from_key(987654)
    assert excinfo.value.enum_name == enum_cls.__name__
    assert "provided key was not recognized" in str(excinfo.value)


@pytest.mark.parametrize("enum_cls", INT_STRICT_ENUMS, ids=lambda cls: cls.__name__)
def test_strict_enums_raise_for_every_unrecognized_integer(enum_cls) -> None:
    known = {member.key for member in enum_cls}
    for code in UNRECOGNIZED_CANDIDATES:
        if code in known:
            assert enum_cls.from_key(code).key == code
        else:
            with pytest.raises(UnknownKeyError):
                enum_cls.from_key(code)


def test_strict_enums_are_the_caller_chosen_options() -> None:
    assert set(STRICT_ENUMS) == {AutoArchiveDuration, Timeout, TimeFormat}


def test_bool_keys_are_not_treated_as_ints() -> None:
    assert ChannelType.from_key(True) is ChannelType.UNKNOWN


def test_trigger_type_metadata() -> None:
    preset = AutoModTriggerType.from_key(4)
    assert preset is AutoModTriggerType.KEYWORD_PRESET
    assert preset.max_per_guild == 1
    assert AutoModTriggerType.from_key(1).max_per_guild == 6
    unknown = AutoModTriggerType.from_key(99)
    assert unknown is AutoModTriggerType.UNKNOWN
    assert unknown.max_per_guild == 0


def test_channel_type_metadata() -> None:
    assert ChannelType.from_key(2).is_audio
    assert ChannelType.TEXT.sort_bucket == ChannelType.NEWS.sort_bucket == 0
    assert ChannelType.PRIVATE.is_guild is False
    assert ChannelType.GUILD_PRIVATE_THREAD.is_thread
    assert ChannelType.UNKNOWN.sort_bucket == -2
    assert not ChannelType.CATEGORY.is_message


def test_boost_tier_limits() -> None:
    assert BoostTier.from_key(2).max_bitrate == 256000
    assert BoostTier.TIER_3.max_file_size == 100 << 20
    assert BoostTier.NONE.max_file_size == 10 << 20
    assert BoostTier.from_key(17) is BoostTier.UNKNOWN


def test_metadata_on_messages_and_filters() -> None:
    assert MessageType.from_key(19) is MessageType.INLINE_REPLY
    assert MessageType.INLINE_REPLY.system is False
    assert MessageType.RECIPIENT_ADD.deletable is False
    assert ExplicitContentLevel.from_key(1).description.startswith("Scan messages")


def test_strict_duration_helpers() -> None:
    assert AutoArchiveDuration.from_key(1440).minutes == 1440
    assert Timeout.from_key(300).seconds == 300
    assert TimeFormat.from_key("R") is TimeFormat.RELATIVE
    with pytest.raises(UnknownKeyError):
        TimeFormat.from_key("x")


def test_string_enum_keys() -> None:
    assert DiscordLocale.from_key("pt-BR") is DiscordLocale.PORTUGUESE_BRAZILIAN
    assert DiscordLocale.FRENCH.native_name == "Français"
    assert DiscordLocale.from_key(12) is DiscordLocale.UNKNOWN


class TestFlagEnums:
    def test_offsets_and_raw_values(self) -> None:
        assert Permission.ADMINISTRATOR.offset == 3
        assert Permission.ADMINISTRATOR.raw == 8
        assert Permission.UNKNOWN.raw == 0

    def test_bitfield_round_trip_ignores_unknown_bits(self) -> None:
        flags = {MessageFlag.EPHEMERAL, MessageFlag.CROSSPOSTED}
        raw = MessageFlag.to_bitfield(flags)
        assert raw == (1 << 6) | 1
        assert MessageFlag.from_bitfield(raw | (1 << 30)) == frozenset(flags)

    def test_empty_and_invalid_bitfields(self) -> None:
        assert MessageFlag.from_bitfield(0) == frozenset()
        assert MessageFlag.from_bitfield(-5) == frozenset()
        assert MessageFlag.from_bitfield("64") == frozenset()

    def test_flag_enums_have_unknown(self) -> None:
        for enum_cls in CODED_ENUMS.values():
            if issubclass(enum_cls, FlagEnum):
                assert enum_cls.UNKNOWN.offset == UNKNOWN_KEY


def test_resolve_code_logs_new_codes(caplog: pytest.LogCaptureFixture) -> None:
    logger_name = "discord_entities.entities.base"
    with caplog.at_level(logging.DEBUG, logger=logger_name):
        member = resolve_code(ChannelType, 99, field="channel.type")
        resolve_code(ChannelType, None, field="channel.type")
        resolve_code(ChannelType, 0, field="channel.type")
    assert member is ChannelType.UNKNOWN
    messages = [record.getMessage() for record in caplog.records]
    assert len(messages) == 1
    assert '"discord.entities.unknown_code"' in messages[0]
    assert '"code": 99' in messages[0]


@pytest.mark.parametrize("raw", [4.9, "4", 4.0, True])
def test_resolve_code_agrees_with_from_key_on_non_int_codes(raw) -> None:
    member = resolve_code(AutoModTriggerType, raw, field="automod.trigger_type")
    assert member is AutoModTriggerType.UNKNOWN
    assert member is AutoModTriggerType.from_key(raw)
    assert resolve_code(AutoModTriggerType, 4, field="automod.trigger_type") is (
        AutoModTriggerType.KEYWORD_PRESET
    )


def test_bulk_ban_response_is_immutable() -> None:
    banned = [UserSnowflake.of(1), UserSnowflake.of("2")]
    response = BulkBanResponse(banned_users=banned, failed_users=[])
    banned.append(UserSnowflake.of(3))
    assert response.banned_users == (UserSnowflake(1), UserSnowflake(2))
    assert response.failed_users == ()
    with pytest.raises(FrozenInstanceError):
        response.banned_users = ()  # type: ignore[misc]
