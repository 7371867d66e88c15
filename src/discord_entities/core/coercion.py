from typing import Any, Mapping, Optional

from .errors import PayloadError

SNOWFLAKE_MAX = (1 << 64) - 1


def coerce_int(
    value: Any, default: Optional[int] = None, *, reject_bool: bool = True
) -> Optional[int]:
    if value is None:
        return default
    if isinstance(value, bool):
        return default if reject_bool else int(value)
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        try:
            return int(value)
        except (OverflowError, ValueError):
            return default
    if isinstance(value, str):
        try:
            return int(value)
        except ValueError:
            pass
        try:
            return int(float(value))
        except (ValueError, OverflowError):
            pass
    return default


def coerce_snowflake(value: Any) -> Optional[int]:
    """Lenient snowflake read for optional payload keys.

    Discord sends snowflakes as decimal strings; integers are accepted too.
    Anything that is not an unsigned 64-bit integer yields ``None``.
    """
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, int):
        parsed = value
    elif isinstance(value, str):
        token = value.strip()
        if not token.isdigit() or not token.isascii():
            return None
        parsed = int(token)
    else:
        return None
    if parsed < 0 or parsed > SNOWFLAKE_MAX:
        return None
    return parsed


def coerce_str(value: Any, default: Optional[str] = None) -> Optional[str]:
    if isinstance(value, str):
        return value
    return default


def coerce_bool(value: Any, default: bool = False) -> bool:
    if isinstance(value, bool):
        return value
    return default


def coerce_snowflake_list(value: Any) -> tuple[int, ...]:
    if not isinstance(value, (list, tuple)):
        return ()
    parsed: list[int] = []
    for item in value:
        snowflake = coerce_snowflake(item)
        if snowflake is not None:
            parsed.append(snowflake)
    return tuple(parsed)


def coerce_str_list(value: Any) -> tuple[str, ...]:
    if not isinstance(value, (list, tuple)):
        return ()
    return tuple(item for item in value if isinstance(item, str))


def coerce_mapping(value: Any) -> Mapping[str, Any]:
    return value if isinstance(value, Mapping) else {}


def require_mapping(payload: Any, *, kind: str) -> Mapping[str, Any]:
    if not isinstance(payload, Mapping):
        raise PayloadError(f"{kind} payload must be an object, got {type(payload).__name__}")
    return payload


def require_snowflake(payload: Mapping[str, Any], key: str) -> int:
    snowflake = coerce_snowflake(payload.get(key))
    if snowflake is None:
        raise PayloadError(f"payload key '{key}' must be a snowflake", key=key)
    return snowflake


def require_str(payload: Mapping[str, Any], key: str) -> str:
    value = payload.get(key)
    if not isinstance(value, str):
        raise PayloadError(f"payload key '{key}' must be a string", key=key)
    return value
