from __future__ import annotations

import logging
from typing import Any, Optional, TypeVar

from ..core.errors import DetachedEntityError
from ..core.logging_utils import log_event
from ..core.transport import EntityTransport
from .coded import UNKNOWN_KEY, CodedEnum
from .snowflake import SnowflakeMixin

logger = logging.getLogger(__name__)

_E = TypeVar("_E", bound=CodedEnum)


def resolve_code(enum_cls: type[_E], raw: Any, *, field: str) -> _E:
    """Resolve a payload code, noting codes this library does not know yet."""
    member = enum_cls.from_key(raw)
    if raw is not None and getattr(member, "is_unknown", False) and raw != UNKNOWN_KEY:
        log_event(
            logger,
            logging.DEBUG,
            "discord.entities.unknown_code",
            enum=enum_cls.__name__,
            field=field,
            code=raw,
        )
    return member


class Entity(SnowflakeMixin):
    """Identity-by-snowflake behaviour shared by API entities.

    Subclasses are frozen dataclasses declared with ``eq=False`` and a trailing
    ``transport`` field that never takes part in equality or repr.
    """

    id: int
    transport: Optional[EntityTransport]

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Entity):
            return NotImplemented
        return type(other) is type(self) and other.id == self.id

    def __hash__(self) -> int:
        return hash((type(self).__name__, self.id))

    @property
    def is_detached(self) -> bool:
        return self.transport is None

    def _require_transport(self) -> EntityTransport:
        if self.transport is None:
            raise DetachedEntityError(f"{type(self).__name__}({self.id})")
        return self.transport


__all__ = ["Entity", "resolve_code"]
