import logging
from pathlib import Path
from typing import Optional

import typer

from ...core.config import load_entities_config
from ...core.errors import EntitiesConfigError
from ...core.logging_utils import setup_logging
from .commands.inspect import register_inspect_commands
from .commands.utils import get_version
from .commands.utils import raise_exit as _raise_exit

logger = logging.getLogger("discord_entities.cli")

app = typer.Typer(add_completion=False, no_args_is_help=True)


def _version_callback(value: bool) -> None:
    if not value:
        return
    typer.echo(f"discord-entities {get_version()}")
    raise typer.Exit(code=0)


@app.callback()
def _root(
    ctx: typer.Context,
    version: bool = typer.Option(
        False,
        "--version",
        callback=_version_callback,
        is_eager=True,
        help="Show the version and exit.",
    ),
    config_path: Optional[Path] = typer.Option(
        None,
        "--config",
        help="Path to discord-entities.yml or the directory holding it.",
    ),
) -> None:
    try:
        config = load_entities_config(config_path)
    except EntitiesConfigError as exc:
        _raise_exit(f"Invalid configuration: {exc}", cause=exc)
    setup_logging(config.log_level)
    if config.log_unknown_codes:
        logging.getLogger("discord_entities.entities").setLevel(logging.DEBUG)
    logger.debug("Loaded configuration: %s", config)
    ctx.obj = config


def main() -> None:
    """Entrypoint for CLI execution."""
    app()


register_inspect_commands(app, raise_exit=_raise_exit)
