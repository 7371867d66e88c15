"""Core primitives shared by the entity modules."""

from .config import EntitiesConfig, load_entities_config
from .errors import (
    DetachedEntityError,
    EntitiesConfigError,
    EntityError,
    EntityStateError,
    InvalidArgumentError,
    InvalidSnowflakeError,
    PayloadError,
    UnknownKeyError,
)
from .logging_utils import log_event, sanitize_log_value, setup_logging
from .transport import CompiledRoute, EntityTransport, Route, Routes

__all__ = [
    "CompiledRoute",
    "DetachedEntityError",
    "EntitiesConfig",
    "EntitiesConfigError",
    "EntityError",
    "EntityStateError",
    "EntityTransport",
    "InvalidArgumentError",
    "InvalidSnowflakeError",
    "PayloadError",
    "Route",
    "Routes",
    "UnknownKeyError",
    "load_entities_config",
    "log_event",
    "sanitize_log_value",
    "setup_logging",
]
