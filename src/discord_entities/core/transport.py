"""Request-execution contract consumed by entity operations.

Entities never perform I/O themselves. Deferred operations compile a
:class:`Route` and hand it to an :class:`EntityTransport`, which owns
authentication, rate limiting, retries and completion semantics.
"""

from __future__ import annotations

import string
from dataclasses import dataclass
from typing import Any, Optional, Protocol, runtime_checkable

from .errors import InvalidArgumentError


@dataclass(frozen=True)
class CompiledRoute:
    method: str
    path: str


@dataclass(frozen=True)
class Route:
    method: str
    template: str

    @property
    def parameters(self) -> tuple[str, ...]:
        return tuple(
            name
            for _, name, _, _ in string.Formatter().parse(self.template)
            if name
        )

    def compile(self, **params: object) -> CompiledRoute:
        missing = [name for name in self.parameters if params.get(name) is None]
        if missing:
            raise InvalidArgumentError(
                f"missing route parameters for {self.template}: {', '.join(missing)}"
            )
        path = self.template.format(**{k: str(v) for k, v in params.items()})
        return CompiledRoute(self.method, path)


class Routes:
    DELETE_CHANNEL = Route("DELETE", "channels/{channel_id}")
    CREATE_INVITE = Route("POST", "channels/{channel_id}/invites")
    CREATE_FORUM_POST = Route("POST", "channels/{channel_id}/threads")
    DELETE_INVITE = Route("DELETE", "invites/{code}")
    DELETE_ROLE = Route("DELETE", "guilds/{guild_id}/roles/{role_id}")
    GET_VANITY_URL = Route("GET", "guilds/{guild_id}/vanity-url")
    BULK_BAN = Route("POST", "guilds/{guild_id}/bulk-ban")
    DELETE_AUTOMOD_RULE = Route(
        "DELETE", "guilds/{guild_id}/auto-moderation/rules/{rule_id}"
    )
    DELETE_WEBHOOK = Route("DELETE", "webhooks/{webhook_id}")
    DELETE_WEBHOOK_WITH_TOKEN = Route("DELETE", "webhooks/{webhook_id}/{token}")
    CONSUME_ENTITLEMENT = Route(
        "POST", "applications/{application_id}/entitlements/{entitlement_id}/consume"
    )


@runtime_checkable
class EntityTransport(Protocol):
    """Executes compiled routes on behalf of entities."""

    async def request(
        self,
        route: CompiledRoute,
        *,
        payload: Optional[dict[str, Any]] = None,
        reason: Optional[str] = None,
    ) -> Any:
        """Run the request and return the decoded JSON body (or ``None``)."""


__all__ = ["CompiledRoute", "EntityTransport", "Route", "Routes"]
