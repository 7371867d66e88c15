from discord_entities.entities.permission import (
    ALL_CHANNEL_PERMISSIONS,
    ALL_PERMISSIONS,
    Permission,
    has_permissions,
    parse_permissions,
    permissions_from_raw,
    permissions_to_raw,
)


def test_parse_permissions_from_decimal_strings() -> None:
    assert parse_permissions("2048") == Permission.MESSAGE_SEND.raw
    assert parse_permissions(None) == 0
    assert parse_permissions(-4) == 0


def test_raw_round_trip() -> None:
    permissions = {Permission.VIEW_CHANNEL, Permission.MESSAGE_SEND}
    raw = permissions_to_raw(permissions)
    assert raw == (1 << 10) | (1 << 11)
    assert permissions_from_raw(raw) == frozenset(permissions)


def test_administrator_implies_everything() -> None:
    assert has_permissions(Permission.ADMINISTRATOR.raw, Permission.BAN_MEMBERS)
    assert not has_permissions(Permission.MESSAGE_SEND.raw, Permission.BAN_MEMBERS)
    assert has_permissions(0)


def test_permission_groups() -> None:
    assert Permission.MESSAGE_SEND.is_text
    assert not Permission.MESSAGE_SEND.is_voice
    assert Permission.VOICE_CONNECT.is_voice
    assert not Permission.UNKNOWN.is_text
    assert ALL_CHANNEL_PERMISSIONS & Permission.ADMINISTRATOR.raw == 0
    assert ALL_PERMISSIONS & ALL_CHANNEL_PERMISSIONS == ALL_CHANNEL_PERMISSIONS
    assert Permission.MANAGE_SERVER.display_name == "Manage Server"
