from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Mapping, Optional

import yaml
from dotenv import dotenv_values

from .errors import EntitiesConfigError

logger = logging.getLogger("discord_entities.core.config")

CONFIG_FILENAME = "discord-entities.yml"
DEFAULT_CDN_BASE_URL = "https://cdn.discordapp.com"
DEFAULT_IMAGE_FORMAT = "png"
DEFAULT_LOG_LEVEL = "WARNING"
IMAGE_FORMAT_OPTIONS = frozenset({"png", "jpg", "jpeg", "webp"})
LOG_LEVEL_OPTIONS = frozenset({"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"})
MIN_IMAGE_SIZE = 16
MAX_IMAGE_SIZE = 4096

ENV_CDN_BASE_URL = "DISCORD_ENTITIES_CDN_URL"
ENV_IMAGE_FORMAT = "DISCORD_ENTITIES_IMAGE_FORMAT"
ENV_LOG_LEVEL = "DISCORD_ENTITIES_LOG_LEVEL"
ENV_OVERRIDE_KEYS = {
    ENV_CDN_BASE_URL: "cdn_base_url",
    ENV_IMAGE_FORMAT: "image_format",
    ENV_LOG_LEVEL: "log_level",
}


def is_valid_image_size(size: int) -> bool:
    return (
        MIN_IMAGE_SIZE <= size <= MAX_IMAGE_SIZE and (size & (size - 1)) == 0
    )


@dataclass(frozen=True)
class EntitiesConfig:
    cdn_base_url: str = DEFAULT_CDN_BASE_URL
    image_format: str = DEFAULT_IMAGE_FORMAT
    image_size: Optional[int] = None
    log_unknown_codes: bool = False
    log_level: str = DEFAULT_LOG_LEVEL

    @classmethod
    def from_raw(cls, raw: Any) -> "EntitiesConfig":
        cfg: Mapping[str, Any] = raw if isinstance(raw, Mapping) else {}

        cdn_base_url = str(cfg.get("cdn_base_url", DEFAULT_CDN_BASE_URL)).strip()
        if not cdn_base_url.startswith(("http://", "https://")):
            raise EntitiesConfigError("cdn_base_url must be an http(s) URL")
        cdn_base_url = cdn_base_url.rstrip("/")

        image_format = (
            str(cfg.get("image_format", DEFAULT_IMAGE_FORMAT)).strip().lower()
        )
        if image_format not in IMAGE_FORMAT_OPTIONS:
            raise EntitiesConfigError(
                f"image_format must be one of {sorted(IMAGE_FORMAT_OPTIONS)}"
            )

        image_size = cfg.get("image_size")
        if image_size is not None:
            if isinstance(image_size, bool) or not isinstance(image_size, int):
                raise EntitiesConfigError("image_size must be an integer")
            if not is_valid_image_size(image_size):
                raise EntitiesConfigError(
                    "image_size must be a power of two between 16 and 4096"
                )

        log_unknown_codes = cfg.get("log_unknown_codes", False)
        if not isinstance(log_unknown_codes, bool):
            raise EntitiesConfigError("log_unknown_codes must be a boolean")

        log_level = str(cfg.get("log_level", DEFAULT_LOG_LEVEL)).strip().upper()
        if log_level not in LOG_LEVEL_OPTIONS:
            raise EntitiesConfigError(
                f"log_level must be one of {sorted(LOG_LEVEL_OPTIONS)}"
            )

        return cls(
            cdn_base_url=cdn_base_url,
            image_format=image_format,
            image_size=image_size,
            log_unknown_codes=log_unknown_codes,
            log_level=log_level,
        )


def collect_env_overrides(
    env: Optional[Mapping[str, Optional[str]]] = None,
) -> dict[str, str]:
    source = os.environ if env is None else env
    overrides: dict[str, str] = {}
    for env_key, config_key in ENV_OVERRIDE_KEYS.items():
        value = source.get(env_key)
        if value is not None and value.strip():
            overrides[config_key] = value.strip()
    return overrides


def _read_yaml(path: Path) -> dict[str, Any]:
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    except yaml.YAMLError as exc:
        raise EntitiesConfigError(f"invalid YAML in {path}: {exc}") from exc
    except OSError as exc:
        raise EntitiesConfigError(f"unable to read {path}: {exc}") from exc
    if not isinstance(data, dict):
        raise EntitiesConfigError(f"{path} must contain a mapping at the top level")
    return data


def load_entities_config(
    path: Optional[Path] = None,
    *,
    env: Optional[Mapping[str, Optional[str]]] = None,
) -> EntitiesConfig:
    """Load config from YAML, then apply ``.env`` and environment overrides.

    ``path`` may point at a file or a directory holding ``discord-entities.yml``.
    A missing default file is not an error; an explicit missing file is.
    """
    raw: dict[str, Any] = {}
    config_dir: Optional[Path] = None
    if path is not None:
        config_path = path / CONFIG_FILENAME if path.is_dir() else path
        if not config_path.exists():
            if path.is_dir():
                logger.debug("No %s found in %s", CONFIG_FILENAME, path)
            else:
                raise EntitiesConfigError(f"config file not found: {config_path}")
        else:
            raw = _read_yaml(config_path)
        config_dir = config_path.parent

    merged_env: dict[str, Optional[str]] = {}
    if config_dir is not None:
        dotenv_path = config_dir / ".env"
        if dotenv_path.exists():
            merged_env.update(dotenv_values(dotenv_path))
    merged_env.update(os.environ if env is None else env)

    raw.update(collect_env_overrides(merged_env))
    return EntitiesConfig.from_raw(raw)


__all__ = [
    "CONFIG_FILENAME",
    "DEFAULT_CDN_BASE_URL",
    "DEFAULT_IMAGE_FORMAT",
    "ENV_CDN_BASE_URL",
    "ENV_IMAGE_FORMAT",
    "ENV_LOG_LEVEL",
    "EntitiesConfig",
    "collect_env_overrides",
    "is_valid_image_size",
    "load_entities_config",
]
