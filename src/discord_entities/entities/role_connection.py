from __future__ import annotations

import re
from dataclasses import dataclass
from enum import unique
from typing import Any, Mapping, Optional

from ..core.coercion import coerce_mapping, require_mapping
from ..core.errors import InvalidArgumentError
from .base import resolve_code
from .coded import UNKNOWN_KEY, CodedEnum
from .locale import DiscordLocale

MAX_NAME_LENGTH = 100
MAX_DESCRIPTION_LENGTH = 200
MAX_KEY_LENGTH = 50
MAX_RECORDS = 5

_KEY_PATTERN = re.compile(r"^[a-z0-9_]+$")

Localizations = tuple[tuple[DiscordLocale, str], ...]


@unique
class RoleConnectionMetadataType(CodedEnum):
    """How a linked-role requirement compares the user's value to the guild's."""

    INTEGER_LESS_THAN_OR_EQUAL = 1
    INTEGER_GREATER_THAN_OR_EQUAL = 2
    INTEGER_EQUALS = 3
    INTEGER_NOT_EQUALS = 4
    DATETIME_LESS_THAN_OR_EQUAL = 5
    DATETIME_GREATER_THAN_OR_EQUAL = 6
    BOOLEAN_EQUAL = 7
    BOOLEAN_NOT_EQUAL = 8
    UNKNOWN = UNKNOWN_KEY


def _check_length(label: str, value: Any, maximum: int) -> None:
    if not isinstance(value, str) or not 1 <= len(value) <= maximum:
        raise InvalidArgumentError(f"{label} must be between 1 and {maximum} characters")


def _parse_localizations(value: Any) -> Localizations:
    pairs = []
    for tag, text in coerce_mapping(value).items():
        locale = DiscordLocale.from_key(tag)
        if not locale.is_unknown and isinstance(text, str):
            pairs.append((locale, text))
    return tuple(sorted(pairs, key=lambda pair: pair[0].key))


@dataclass(frozen=True)
class RoleConnectionMetadata:
    """One requirement an application exposes for linked roles."""

    type: RoleConnectionMetadataType
    name: str
    key: str
    description: str
    name_localizations: Localizations = ()
    description_localizations: Localizations = ()

    def __post_init__(self) -> None:
        if self.type.is_unknown:
            raise InvalidArgumentError("metadata type must not be UNKNOWN")
        _check_length("key", self.key, MAX_KEY_LENGTH)
        if not _KEY_PATTERN.match(self.key):
            raise InvalidArgumentError(
                f"key may only contain a-z, 0-9 or _, got {self.key!r}"
            )
        _check_length("name", self.name, MAX_NAME_LENGTH)
        _check_length("description", self.description, MAX_DESCRIPTION_LENGTH)
        for _, text in self.name_localizations:
            _check_length("localized name", text, MAX_NAME_LENGTH)
        for _, text in self.description_localizations:
            _check_length("localized description", text, MAX_DESCRIPTION_LENGTH)

    @classmethod
    def from_payload(cls, payload: Any) -> "RoleConnectionMetadata":
        data = require_mapping(payload, kind="role connection metadata")
        return cls(
            type=resolve_code(
                RoleConnectionMetadataType, data.get("type"), field="metadata.type"
            ),
            name=data.get("name"),
            key=data.get("key"),
            description=data.get("description"),
            name_localizations=_parse_localizations(data.get("name_localizations")),
            description_localizations=_parse_localizations(
                data.get("description_localizations")
            ),
        )

    def localized_name(self, locale: DiscordLocale) -> Optional[str]:
        return dict(self.name_localizations).get(locale)

    def localized_description(self, locale: DiscordLocale) -> Optional[str]:
        return dict(self.description_localizations).get(locale)

    def to_payload(self) -> Mapping[str, Any]:
        return {
            "type": self.type.key,
            "name": self.name,
            "key": self.key,
            "description": self.description,
            "name_localizations": {
                locale.key: text for locale, text in self.name_localizations
            },
            "description_localizations": {
                locale.key: text for locale, text in self.description_localizations
            },
        }


__all__ = [
    "MAX_RECORDS",
    "RoleConnectionMetadata",
    "RoleConnectionMetadataType",
]
