from datetime import datetime, timedelta, timezone
from typing import Any, Optional

_UNIX_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


def parse_iso_timestamp(value: Any) -> Optional[datetime]:
    """Parse Discord ISO-8601 timestamps (``...+00:00`` or ``...Z``) to aware UTC."""
    if not isinstance(value, str) or not value.strip():
        return None
    text = value.strip()
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"
    try:
        parsed = datetime.fromisoformat(text)
    except ValueError:
        return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed.astimezone(timezone.utc)


def to_epoch_millis(moment: datetime) -> int:
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=timezone.utc)
    return (moment - _UNIX_EPOCH) // timedelta(milliseconds=1)


def iso_utc_z(moment: datetime) -> str:
    return moment.astimezone(timezone.utc).strftime("%Y-%m-%dT%H:%M:%S.%f")[:-3] + "Z"


__all__ = ["parse_iso_timestamp", "to_epoch_millis", "iso_utc_z"]
