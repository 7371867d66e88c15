from __future__ import annotations

from enum import Enum
from pathlib import Path
from typing import Any, Callable, Optional

import typer

from ....core.errors import EntityError
from ....core.time_utils import iso_utc_z
from ....entities import cdn
from ....entities.coded import CodedEnum, FlagEnum, StringCodedEnum
from ....entities.mentions import channel_mention, role_mention, user_mention
from ....entities.registry import CODED_ENUMS, PAYLOAD_PARSERS, find_enum
from ....entities.snowflake import parse_snowflake, snowflake_time
from .utils import read_json_file, require_config

MENTION_FORMATTERS: dict[str, Callable[[Any], str]] = {
    "user": user_mention,
    "channel": channel_mention,
    "role": role_mention,
}


def _member_metadata(member: Enum) -> dict[str, Any]:
    metadata = {
        name: value for name, value in vars(member).items() if not name.startswith("_")
    }
    if isinstance(member, FlagEnum):
        metadata["raw"] = member.raw
    return metadata


def _render_value(value: Any) -> str:
    if isinstance(value, bool):
        return "yes" if value else "no"
    return str(value)


def _parse_key(enum_cls: type[CodedEnum], raw: str) -> Any:
    if issubclass(enum_cls, StringCodedEnum):
        return raw
    try:
        return int(raw.strip())
    except ValueError:
        return None


def register_inspect_commands(
    app: typer.Typer,
    *,
    raise_exit: Callable,
) -> None:
    @app.command("resolve")
    def resolve(
        enum_name: str = typer.Argument(..., help="Enumeration name, e.g. ChannelType"),
        code: str = typer.Argument(..., help="Wire code to resolve"),
    ) -> None:
        """Resolve a wire code to its enumeration member."""
        enum_cls = find_enum(enum_name)
        if enum_cls is None:
            raise_exit(
                f"Unknown enumeration '{enum_name}'. Run 'discord-entities enums' to list them."
            )
        key = _parse_key(enum_cls, code)
        try:
            member = enum_cls.from_key(key)
        except EntityError as exc:
            raise_exit(str(exc), cause=exc)
        typer.echo(f"{member.name} ({member.key})")
        for name, value in _member_metadata(member).items():
            typer.echo(f"  {name}: {_render_value(value)}")

    @app.command("enums")
    def enums() -> None:
        """List enumerations that can be resolved."""
        for name in sorted(CODED_ENUMS):
            enum_cls = CODED_ENUMS[name]
            suffix = "" if enum_cls.is_total() else " (strict)"
            typer.echo(f"{name}{suffix}")

    @app.command("snowflake")
    def snowflake(
        value: str = typer.Argument(..., help="Snowflake id"),
    ) -> None:
        """Show when a snowflake id was created."""
        try:
            created = snowflake_time(value)
        except EntityError as exc:
            raise_exit(str(exc), cause=exc)
        typer.echo(iso_utc_z(created))

    @app.command("mention")
    def mention(
        kind: str = typer.Argument(..., help="user, channel or role"),
        value: str = typer.Argument(..., help="Snowflake id"),
    ) -> None:
        """Print mention markup for an id."""
        formatter = MENTION_FORMATTERS.get(kind.strip().lower())
        if formatter is None:
            raise_exit(
                f"Unknown mention kind '{kind}'. Use one of: {', '.join(MENTION_FORMATTERS)}"
            )
        try:
            typer.echo(formatter(value))
        except EntityError as exc:
            raise_exit(str(exc), cause=exc)

    @app.command("avatar")
    def avatar(
        ctx: typer.Context,
        user_id: str = typer.Argument(..., help="User snowflake id"),
        avatar_hash: Optional[str] = typer.Option(
            None, "--hash", help="Avatar hash; omit for the default avatar"
        ),
        discriminator: Optional[str] = typer.Option(
            None, "--discriminator", help="Legacy discriminator, if any"
        ),
    ) -> None:
        """Print a user's avatar URL using the configured CDN settings."""
        config = require_config(ctx)
        try:
            if avatar_hash:
                url = cdn.avatar_url(
                    user_id,
                    avatar_hash,
                    image_format=config.image_format,
                    size=config.image_size,
                    base_url=config.cdn_base_url,
                )
            else:
                url = cdn.default_avatar_url(
                    user_id, discriminator, base_url=config.cdn_base_url
                )
        except EntityError as exc:
            raise_exit(str(exc), cause=exc)
        typer.echo(url)

    @app.command("parse")
    def parse(
        kind: str = typer.Argument(..., help="Payload kind, e.g. channel or guild"),
        path: Path = typer.Argument(..., help="JSON file holding the payload"),
    ) -> None:
        """Parse a Discord JSON payload file and print the resulting model."""
        parser = PAYLOAD_PARSERS.get(kind.strip().lower())
        if parser is None:
            raise_exit(
                f"Unknown payload kind '{kind}'. Use one of: {', '.join(sorted(PAYLOAD_PARSERS))}"
            )
        payload = read_json_file(path)
        try:
            model = parser(payload)
        except EntityError as exc:
            raise_exit(f"Invalid {kind} payload: {exc}", cause=exc)
        typer.echo(type(model).__name__)
        typer.echo(repr(model))
        model_id = getattr(model, "id", None)
        if isinstance(model_id, int):
            typer.echo(f"created_at: {iso_utc_z(snowflake_time(parse_snowflake(model_id)))}")


__all__ = ["MENTION_FORMATTERS", "register_inspect_commands"]
