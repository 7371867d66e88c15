"""Enumerations keyed by Discord wire codes.

Every variant carries the code Discord uses on the wire as its value; extra
constructor arguments are static metadata read by subclass ``__init__``.

Enumerations declaring an ``UNKNOWN`` member are total: :meth:`CodedEnum.from_key`
maps any unrecognized code (including values Discord adds later) to
``UNKNOWN``. Enumerations without ``UNKNOWN`` describe caller-chosen options
and reject unrecognized keys with :class:`UnknownKeyError`.
"""

from __future__ import annotations

from enum import Enum
from typing import Any, Iterable, TypeVar

from ..core.errors import UnknownKeyError

UNKNOWN_KEY = -1
UNKNOWN_STRING_KEY = "unknown"

_E = TypeVar("_E", bound="CodedEnum")
_F = TypeVar("_F", bound="FlagEnum")


class CodedEnum(Enum):
    def __new__(cls, key: Any, *_metadata: Any) -> "CodedEnum":
        member = object.__new__(cls)
        member._value_ = key
        return member

    @property
    def key(self) -> Any:
        return self._value_

    @classmethod
    def _accepts_key(cls, key: Any) -> bool:
        return isinstance(key, int) and not isinstance(key, bool)

    @classmethod
    def _missing_(cls, value: Any) -> Any:
        return cls.__members__.get("UNKNOWN")

    @classmethod
    def is_total(cls) -> bool:
        return "UNKNOWN" in cls.__members__

    @classmethod
    def from_key(cls: type[_E], key: Any) -> _E:
        if cls._accepts_key(key):
            try:
                return cls(key)
            except ValueError:
                pass
        unknown = cls.__members__.get("UNKNOWN")
        if unknown is None:
            raise UnknownKeyError(cls.__name__, key)
        return unknown

    @property
    def is_unknown(self) -> bool:
        return self.name == "UNKNOWN"


class StringCodedEnum(CodedEnum):
    @classmethod
    def _accepts_key(cls, key: Any) -> bool:
        return isinstance(key, str)


class FlagEnum(CodedEnum):
    """Bit flags keyed by bit offset; ``UNKNOWN`` uses offset ``-1`` and raw ``0``."""

    @property
    def offset(self) -> int:
        return self._value_

    @property
    def raw(self) -> int:
        return 0 if self.offset < 0 else 1 << self.offset

    @classmethod
    def from_bitfield(cls: type[_F], raw: Any) -> frozenset[_F]:
        if not cls._accepts_key(raw) or raw <= 0:
            return frozenset()
        return frozenset(
            flag for flag in cls if flag.offset >= 0 and raw & flag.raw == flag.raw
        )

    @classmethod
    def to_bitfield(cls, flags: Iterable["FlagEnum"]) -> int:
        raw = 0
        for flag in flags:
            raw |= flag.raw
        return raw


__all__ = [
    "CodedEnum",
    "FlagEnum",
    "StringCodedEnum",
    "UNKNOWN_KEY",
    "UNKNOWN_STRING_KEY",
]
