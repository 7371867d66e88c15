from __future__ import annotations

import json
import logging
from typing import Any, Union

MAX_LOG_VALUE_CHARS = 500
REDACTED = "***"
_SENSITIVE_KEYS = frozenset({"token", "bot_token", "authorization", "webhook_token"})
_LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s %(message)s"


def sanitize_log_value(value: Any) -> Any:
    """Return a JSON-friendly, length-bounded rendition of ``value``."""
    if value is None or isinstance(value, (bool, int, float)):
        return value
    if isinstance(value, (list, tuple, set, frozenset)):
        return [sanitize_log_value(item) for item in value]
    if isinstance(value, dict):
        return {str(k): sanitize_log_value(v) for k, v in value.items()}
    text = str(value)
    if len(text) > MAX_LOG_VALUE_CHARS:
        return text[:MAX_LOG_VALUE_CHARS] + "..."
    return text


def log_event(logger: logging.Logger, level: int, event: str, **fields: Any) -> None:
    """Emit ``event`` as a single JSON line with sanitized fields."""
    if not logger.isEnabledFor(level):
        return
    payload: dict[str, Any] = {"event": event}
    for key, value in fields.items():
        if key == "exc" and isinstance(value, BaseException):
            payload[key] = sanitize_log_value(repr(value))
        elif key.lower() in _SENSITIVE_KEYS and value is not None:
            payload[key] = REDACTED
        else:
            payload[key] = sanitize_log_value(value)
    logger.log(level, json.dumps(payload, default=str))


def setup_logging(level: Union[int, str] = logging.WARNING) -> None:
    if isinstance(level, str):
        resolved = logging.getLevelName(level.strip().upper())
        level = resolved if isinstance(resolved, int) else logging.WARNING
    logging.basicConfig(level=level, format=_LOG_FORMAT)
    logging.getLogger("discord_entities").setLevel(level)


__all__ = [
    "MAX_LOG_VALUE_CHARS",
    "REDACTED",
    "log_event",
    "sanitize_log_value",
    "setup_logging",
]
