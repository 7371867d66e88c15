from __future__ import annotations

from typing import Optional


class EntityError(Exception):
    """Base Discord entity-layer error."""

    def __init__(self, message: str, *, user_message: Optional[str] = None) -> None:
        super().__init__(message)
        self.user_message = user_message


class InvalidArgumentError(EntityError, ValueError):
    """A caller-supplied value violates a precondition."""


class InvalidSnowflakeError(InvalidArgumentError):
    """Raised when a value cannot be interpreted as a Discord snowflake."""

    def __init__(self, value: object) -> None:
        super().__init__(
            f"invalid snowflake: {value!r}",
            user_message="IDs must be unsigned 64-bit integers.",
        )
        self.value = value


class UnknownKeyError(InvalidArgumentError):
    """Raised by strict enumerations for an unrecognized key."""

    def __init__(self, enum_name: str, key: object) -> None:
        super().__init__(f"{enum_name}: provided key was not recognized: {key!r}")
        self.enum_name = enum_name
        self.key = key


class EntityStateError(EntityError, RuntimeError):
    """State was accessed before it is available."""


class DetachedEntityError(EntityStateError):
    """The entity was built without a transport and cannot issue requests."""

    def __init__(self, entity: str) -> None:
        super().__init__(
            f"{entity} is not bound to a transport",
            user_message="This object was created offline and cannot talk to Discord.",
        )
        self.entity = entity


class PayloadError(EntityError, ValueError):
    """Inbound payload is missing required data or has the wrong shape."""

    def __init__(self, message: str, *, key: Optional[str] = None) -> None:
        super().__init__(message)
        self.key = key


class EntitiesConfigError(EntityError):
    """Raised when discord-entities configuration is invalid."""
