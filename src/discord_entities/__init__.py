"""Discord entity layer: coded enumerations, immutable models and helpers."""

from .core.errors import (
    DetachedEntityError,
    EntityError,
    EntityStateError,
    InvalidArgumentError,
    InvalidSnowflakeError,
    PayloadError,
    UnknownKeyError,
)
from .core.transport import CompiledRoute, EntityTransport, Route, Routes

__all__ = [
    "CompiledRoute",
    "DetachedEntityError",
    "EntityError",
    "EntityStateError",
    "EntityTransport",
    "InvalidArgumentError",
    "InvalidSnowflakeError",
    "PayloadError",
    "Route",
    "Routes",
    "UnknownKeyError",
]
