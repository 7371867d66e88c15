import pytest

from discord_entities.core.errors import InvalidArgumentError
from discord_entities.core.transport import CompiledRoute, EntityTransport, Route, Routes


def test_route_compiles_parameters() -> None:
    route = Routes.DELETE_ROLE.compile(guild_id=1, role_id=2)
    assert route == CompiledRoute("DELETE", "guilds/1/roles/2")
    assert Routes.DELETE_ROLE.parameters == ("guild_id", "role_id")


def test_route_rejects_missing_parameters() -> None:
    with pytest.raises(InvalidArgumentError, match="role_id"):
        Routes.DELETE_ROLE.compile(guild_id=1)


def test_route_without_parameters() -> None:
    assert Route("GET", "gateway").compile() == CompiledRoute("GET", "gateway")


def test_recording_transport_satisfies_protocol(transport) -> None:
    assert isinstance(transport, EntityTransport)
