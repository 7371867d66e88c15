from __future__ import annotations

import importlib.metadata
import json
from pathlib import Path
from typing import Any, NoReturn, Optional

import typer

from ....core.config import EntitiesConfig


def get_version() -> str:
    try:
        return importlib.metadata.version("discord-entities")
    except importlib.metadata.PackageNotFoundError:
        return "unknown"


def raise_exit(message: str, *, cause: Optional[BaseException] = None) -> NoReturn:
    typer.echo(message, err=True)
    if cause is not None:
        raise typer.Exit(code=1) from cause
    raise typer.Exit(code=1)


def require_config(ctx: typer.Context) -> EntitiesConfig:
    """Config loaded by the root callback, or defaults when invoked directly."""
    obj = ctx.find_root().obj
    if isinstance(obj, EntitiesConfig):
        return obj
    return EntitiesConfig()


def read_json_file(path: Path) -> Any:
    try:
        return json.loads(path.read_text(encoding="utf-8"))
    except OSError as exc:
        raise_exit(f"Unable to read {path}: {exc}", cause=exc)
    except json.JSONDecodeError as exc:
        raise_exit(f"Invalid JSON in {path}: {exc}", cause=exc)


__all__ = ["get_version", "raise_exit", "read_json_file", "require_config"]
