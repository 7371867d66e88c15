from __future__ import annotations

import json
from pathlib import Path

from typer.testing import CliRunner

from discord_entities.cli import app

runner = CliRunner()


def test_version_flag() -> None:
    result = runner.invoke(app, ["--version"])
    assert result.exit_code == 0
    assert result.stdout.startswith("discord-entities ")


def test_resolve_known_code() -> None:
    result = runner.invoke(app, ["resolve", "AutoModTriggerType", "4"])
    assert result.exit_code == 0, result.output
    lines = result.stdout.splitlines()
    assert lines[0] == "KEYWORD_PRESET (4)"
    assert "  max_per_guild: 1" in lines


def test_resolve_unknown_code_falls_back() -> None:
    result = runner.invoke(app, ["resolve", "channel_type", "99"])
    assert result.exit_code == 0, result.output
    assert result.stdout.splitlines()[0] == "UNKNOWN (-1)"
    assert "  is_guild: no" in result.stdout


def test_resolve_flag_shows_raw_value() -> None:
    result = runner.invoke(app, ["resolve", "permission", "3"])
    assert result.exit_code == 0, result.output
    assert "ADMINISTRATOR (3)" in result.stdout
    assert "  raw: 8" in result.stdout


def test_resolve_string_keyed_enum() -> None:
    result = runner.invoke(app, ["resolve", "DiscordLocale", "ja"])
    assert result.exit_code == 0, result.output
    assert result.stdout.splitlines()[0] == "JAPANESE (ja)"


def test_resolve_strict_enum_rejects_unknown_code() -> None:
    result = runner.invoke(app, ["resolve", "Timeout", "42"])
    assert result.exit_code == 1
    assert "provided key was not recognized" in result.output


def test_resolve_unknown_enum_name() -> None:
    result = runner.invoke(app, ["resolve", "Nope", "1"])
    assert result.exit_code == 1
    assert "Unknown enumeration" in result.output


def test_enums_lists_strict_markers() -> None:
    result = runner.invoke(app, ["enums"])
    assert result.exit_code == 0
    lines = result.stdout.splitlines()
    assert "ChannelType" in lines
    assert "Timeout (strict)" in lines
    assert lines == sorted(lines)


def test_snowflake_command() -> None:
    result = runner.invoke(app, ["snowflake", "175928847299117063"])
    assert result.exit_code == 0
    assert result.stdout.strip() == "2016-04-30T11:18:25.796Z"
    bad = runner.invoke(app, ["snowflake", "abc"])
    assert bad.exit_code == 1


def test_mention_command() -> None:
    result = runner.invoke(app, ["mention", "role", "5"])
    assert result.stdout.strip() == "<@&5>"
    bad = runner.invoke(app, ["mention", "emoji", "5"])
    assert bad.exit_code == 1
    assert "Unknown mention kind" in bad.output


def test_avatar_command_uses_config(tmp_path: Path) -> None:
    (tmp_path / "discord-entities.yml").write_text(
        "cdn_base_url: https://media.example.test\nimage_format: webp\nimage_size: 64\n",
        encoding="utf-8",
    )
    result = runner.invoke(
        app, ["--config", str(tmp_path), "avatar", "1", "--hash", "abc"]
    )
    assert result.exit_code == 0, result.output
    assert result.stdout.strip() == "https://media.example.test/avatars/1/abc.webp?size=64"
    default = runner.invoke(app, ["avatar", "175928847299117063"])
    assert default.stdout.strip() == "https://cdn.discordapp.com/embed/avatars/2.png"


def test_invalid_config_exits(tmp_path: Path) -> None:
    (tmp_path / "discord-entities.yml").write_text("image_format: bmp\n", encoding="utf-8")
    result = runner.invoke(app, ["--config", str(tmp_path), "enums"])
    assert result.exit_code == 1
    assert "Invalid configuration" in result.output


def test_parse_channel_payload(tmp_path: Path) -> None:
    path = tmp_path / "channel.json"
    path.write_text(
        json.dumps({"id": "175928847299117063", "type": 99, "name": "mystery"}),
        encoding="utf-8",
    )
    result = runner.invoke(app, ["parse", "channel", str(path)])
    assert result.exit_code == 0, result.output
    lines = result.stdout.splitlines()
    assert lines[0] == "UnknownChannel"
    assert "raw_type=99" in lines[1]
    assert lines[2] == "created_at: 2016-04-30T11:18:25.796Z"


def test_parse_reports_invalid_payloads(tmp_path: Path) -> None:
    path = tmp_path / "guild.json"
    path.write_text(json.dumps({"id": "1"}), encoding="utf-8")
    result = runner.invoke(app, ["parse", "guild", str(path)])
    assert result.exit_code == 1
    assert "Invalid guild payload" in result.output
    broken = tmp_path / "broken.json"
    broken.write_text("{", encoding="utf-8")
    assert runner.invoke(app, ["parse", "guild", str(broken)]).exit_code == 1
    assert runner.invoke(app, ["parse", "planet", str(path)]).exit_code == 1
